# cardioguard/engine/risk.py
from datetime import datetime, timezone
from typing import Optional, Tuple

from cardioguard.models.triage_models import RiskLevel, RiskProfile

RISK_FACTOR_POINTS = 5
MAX_SCORE = 100


def _age_points(age: int) -> int:
    if age > 75:
        return 30
    if age > 65:
        return 20
    if age > 55:
        return 10
    return 0


def _diagnosis_points(diagnosis: str) -> int:
    # "MI" and "Infarction" share one weight
    score = 0
    if "MI" in diagnosis or "Infarction" in diagnosis:
        score += 25
    if "Failure" in diagnosis:
        score += 20
    if "Arrhythmia" in diagnosis:
        score += 15
    return score


def days_since_discharge(discharge_date: datetime, today: datetime) -> int:
    # naive datetimes are read as UTC
    if discharge_date.tzinfo is None:
        discharge_date = discharge_date.replace(tzinfo=timezone.utc)
    if today.tzinfo is None:
        today = today.replace(tzinfo=timezone.utc)
    return (today - discharge_date).days


def _discharge_points(discharge_date: datetime, today: datetime) -> int:
    days = days_since_discharge(discharge_date, today)
    if days < 7:
        return 15
    if days < 14:
        return 10
    return 0


def _reading(part: str) -> Optional[float]:
    try:
        return float(part)
    except ValueError:
        return None


def parse_blood_pressure(blood_pressure: str) -> Tuple[Optional[float], Optional[float]]:
    """
    Split a ``"systolic/diastolic"`` reading. Either side is None when it is
    missing or not a number, e.g. ``"145.5/90"`` gives ``(145.5, 90.0)``.
    """
    parts = blood_pressure.split("/")
    systolic = _reading(parts[0])
    diastolic = _reading(parts[1]) if len(parts) > 1 else None
    return systolic, diastolic


def calculate_risk_score(profile: RiskProfile, today: Optional[datetime] = None) -> int:
    """Readmission risk score from 0 to 100."""
    today = today or datetime.now(timezone.utc)

    score = _age_points(profile.age)
    score += _diagnosis_points(profile.diagnosis)
    score += _discharge_points(profile.discharge_date, today)
    score += len(profile.risk_factors) * RISK_FACTOR_POINTS

    vitals = profile.vital_signs
    if vitals:
        systolic, _ = parse_blood_pressure(vitals.blood_pressure)
        if systolic is not None and (systolic > 140 or systolic < 90):
            score += 10
        if vitals.heart_rate > 100 or vitals.heart_rate < 50:
            score += 10

    return min(MAX_SCORE, score)


def risk_level_for_score(score: float) -> RiskLevel:
    if score >= 75:
        return RiskLevel.CRITICAL
    if score >= 50:
        return RiskLevel.HIGH
    if score >= 25:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW
