# cardioguard/engine/__init__.py

from .care_plan import generate_health_tip, generate_recommendations
from .checkin_classifier import classify, evaluate_checkin
from .intent import assess_severity, detect_intent, severity_trigger
from .responder import TriageResponder
from .risk import calculate_risk_score, risk_level_for_score

__all__ = [
    "classify",
    "evaluate_checkin",
    "assess_severity",
    "detect_intent",
    "severity_trigger",
    "TriageResponder",
    "calculate_risk_score",
    "risk_level_for_score",
    "generate_recommendations",
    "generate_health_tip",
]
