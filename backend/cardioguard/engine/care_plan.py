# cardioguard/engine/care_plan.py
"""
Clinician-facing follow-up recommendations and patient-facing health tips.

Both are plain rules over the patient's risk level and clinical profile.
Recommendations come back in a fixed order; every rule that applies adds one.
"""
import random
from datetime import datetime, timezone
from typing import List, Optional

from cardioguard.engine.risk import days_since_discharge, parse_blood_pressure
from cardioguard.models.triage_models import (
    PatientContext,
    Priority,
    Recommendation,
    RiskLevel,
    RiskProfile,
)

COMORBIDITIES = ("Diabetes", "Hypertension")
SYSTOLIC_TARGET = 140
DIASTOLIC_TARGET = 90
FIRST_WEEK_DAYS = 7

HEALTH_TIPS = [
    "💧 Staying hydrated helps your heart pump more efficiently. Aim for 6-8 glasses of water daily.",
    "🧂 Limiting sodium to 2,000mg/day can significantly reduce fluid retention and strain on your heart.",
    "🚶 Short, gentle walks (even 5 minutes) improve circulation and aid recovery.",
    "💊 Take your medications at the same time each day to build a routine and improve adherence.",
    "😴 Getting 7-8 hours of quality sleep helps your heart heal and reduces stress.",
    "🍎 Eating heart-healthy foods like fruits, vegetables, and lean proteins supports recovery.",
    "📊 Weighing yourself daily helps catch fluid retention early - call your doctor if you gain 2+ lbs in a day.",
    "🧘 Deep breathing exercises can lower stress and improve oxygen flow to your heart.",
]

# Checked in order; the first risk factor the patient has picks the tip
RISK_FACTOR_TIPS = [
    ("Hypertension", "🩺 Monitor your blood pressure regularly. High BP is silent but manageable with medication and lifestyle changes."),
    ("Diabetes", "🍬 Managing blood sugar levels is crucial for heart health. Check levels as recommended by your doctor."),
]


def _score_label(score: float) -> str:
    return f"{score:g}"


def _bp_above_target(blood_pressure: str) -> bool:
    systolic, diastolic = parse_blood_pressure(blood_pressure)
    if systolic is not None and systolic > SYSTOLIC_TARGET:
        return True
    return diastolic is not None and diastolic > DIASTOLIC_TARGET


def generate_recommendations(
    patient: PatientContext,
    profile: RiskProfile,
    last_check_in: Optional[datetime] = None,
    today: Optional[datetime] = None,
) -> List[Recommendation]:
    today = today or datetime.now(timezone.utc)
    recommendations: List[Recommendation] = []

    if patient.risk_level in (RiskLevel.CRITICAL, RiskLevel.HIGH):
        recommendations.append(Recommendation(
            action="Schedule urgent follow-up within 48 hours",
            rationale=(
                f"Patient has {patient.risk_level.value} risk score ({_score_label(patient.risk_score)}). "
                "Early intervention critical for preventing readmission."
            ),
            priority=Priority.HIGH,
            category="Follow-up Care",
        ))

    if last_check_in is None:
        recommendations.append(Recommendation(
            action="Initiate daily symptom check-in protocol",
            rationale="No recent check-ins recorded. Regular monitoring helps detect early warning signs.",
            priority=Priority.HIGH,
            category="Patient Engagement",
        ))

    if any(factor in profile.risk_factors for factor in COMORBIDITIES):
        recommendations.append(Recommendation(
            action="Review medication adherence",
            rationale="Comorbidities present. Medication non-adherence is a top readmission driver.",
            priority=Priority.MEDIUM,
            category="Medication Management",
        ))

    vitals = profile.vital_signs
    if vitals and _bp_above_target(vitals.blood_pressure):
        recommendations.append(Recommendation(
            action="BP management consult",
            rationale=f"Recent BP reading {vitals.blood_pressure} exceeds target range.",
            priority=Priority.HIGH,
            category="Clinical Intervention",
        ))

    if days_since_discharge(profile.discharge_date, today) < FIRST_WEEK_DAYS:
        recommendations.append(Recommendation(
            action="Conduct post-discharge call",
            rationale=(
                "Patient in critical first week post-discharge. "
                "Personal outreach reduces anxiety and catches issues early."
            ),
            priority=Priority.HIGH,
            category="Care Coordination",
        ))

    return recommendations


def generate_health_tip(profile: RiskProfile, rng: Optional[random.Random] = None) -> str:
    """Tip for the patient's first matching risk factor, else a random general tip."""
    for factor, tip in RISK_FACTOR_TIPS:
        if factor in profile.risk_factors:
            return tip
    return (rng or random).choice(HEALTH_TIPS)
