# tests/test_care_plan.py
import random
from datetime import datetime, timedelta, timezone

from cardioguard.engine.care_plan import (
    HEALTH_TIPS,
    generate_health_tip,
    generate_recommendations,
)
from cardioguard.models.triage_models import Priority, RiskProfile, VitalSigns

TODAY = datetime(2026, 10, 18, tzinfo=timezone.utc)
LAST_WEEK = TODAY - timedelta(days=2)


def _profile(**overrides):
    fields = {"age": 60, "diagnosis": "Acute MI", "discharge_date": TODAY - timedelta(days=30)}
    fields.update(overrides)
    return RiskProfile(**fields)


def _actions(recommendations):
    return [r.action for r in recommendations]


def test_stable_patient_gets_no_recommendations(patient):
    assert generate_recommendations(patient, _profile(), last_check_in=LAST_WEEK, today=TODAY) == []


def test_every_rule_fires_in_order(high_risk_patient):
    profile = _profile(
        discharge_date=TODAY - timedelta(days=3),
        risk_factors=["Diabetes", "Previous MI"],
        vital_signs=VitalSigns(blood_pressure="145/92", heart_rate=88),
    )
    recommendations = generate_recommendations(high_risk_patient, profile, today=TODAY)

    assert _actions(recommendations) == [
        "Schedule urgent follow-up within 48 hours",
        "Initiate daily symptom check-in protocol",
        "Review medication adherence",
        "BP management consult",
        "Conduct post-discharge call",
    ]
    assert [r.priority for r in recommendations] == [
        Priority.HIGH, Priority.HIGH, Priority.MEDIUM, Priority.HIGH, Priority.HIGH,
    ]


def test_urgent_follow_up_names_the_risk_score(high_risk_patient):
    urgent = generate_recommendations(high_risk_patient, _profile(), last_check_in=LAST_WEEK, today=TODAY)[0]
    assert urgent.rationale.startswith("Patient has critical risk score (82).")
    assert urgent.category == "Follow-up Care"


def test_diastolic_alone_can_exceed_target(patient):
    profile = _profile(vital_signs=VitalSigns(blood_pressure="130/95", heart_rate=70))
    recommendations = generate_recommendations(patient, profile, last_check_in=LAST_WEEK, today=TODAY)
    assert _actions(recommendations) == ["BP management consult"]
    assert recommendations[0].rationale == "Recent BP reading 130/95 exceeds target range."


def test_unreadable_blood_pressure_adds_nothing(patient):
    profile = _profile(vital_signs=VitalSigns(blood_pressure="pending", heart_rate=70))
    assert generate_recommendations(patient, profile, last_check_in=LAST_WEEK, today=TODAY) == []


def test_hypertension_tip_wins_over_diabetes():
    tip = generate_health_tip(_profile(risk_factors=["Diabetes", "Hypertension"]))
    assert tip.startswith("🩺 Monitor your blood pressure regularly.")


def test_diabetes_tip():
    assert "blood sugar" in generate_health_tip(_profile(risk_factors=["Diabetes"]))


def test_general_tip_is_drawn_from_the_tip_list():
    tip = generate_health_tip(_profile(risk_factors=["Smoker"]), random.Random(3))
    assert tip in HEALTH_TIPS
    assert tip == generate_health_tip(_profile(), random.Random(3))
