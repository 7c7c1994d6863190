# cardioguard/engine/intent.py
from typing import List, Optional, Tuple

from cardioguard.engine import keywords as kw
from cardioguard.engine.keywords import KeywordTable, first_matching
from cardioguard.models.triage_models import Intent, PatientContext, RiskLevel, Severity

# Evaluated top to bottom; the first table with a hit decides the intent.
INTENT_RULES: List[Tuple[KeywordTable, Intent]] = [
    (kw.EMERGENCY_KEYWORDS, Intent.EMERGENCY),
    (kw.CRITICAL_SYMPTOMS, Intent.SYMPTOM_REPORT),
    (kw.GREETING_KEYWORDS, Intent.GREETING),
    (kw.GRATITUDE_KEYWORDS, Intent.GRATITUDE),
    (kw.MEDICATION_KEYWORDS, Intent.MEDICATION_QUESTION),
    (kw.APPOINTMENT_KEYWORDS, Intent.APPOINTMENT_REQUEST),
    (kw.EMOTIONAL_KEYWORDS, Intent.EMOTIONAL_SUPPORT),
    (kw.LIFESTYLE_KEYWORDS, Intent.LIFESTYLE_QUESTION),
    (kw.PROGRESS_KEYWORDS, Intent.PROGRESS_INQUIRY),
    (kw.SYMPTOM_WORDS, Intent.SYMPTOM_REPORT),
    (kw.HEALTH_WORDS, Intent.GENERAL_HEALTH),
]

SEVERITY_MODIFIER_RULES: List[Tuple[KeywordTable, Severity]] = [
    (kw.CRITICAL_MODIFIERS, Severity.CRITICAL),
    (kw.HIGH_MODIFIERS, Severity.HIGH),
    (kw.MEDIUM_MODIFIERS, Severity.MEDIUM),
]

_ELEVATED_RISK = (RiskLevel.HIGH, RiskLevel.CRITICAL)


def detect_intent(message: str) -> Intent:
    text = message.lower()
    intent = first_matching(text, INTENT_RULES)
    return intent if intent is not None else Intent.UNKNOWN


def assess_severity(message: str, intent: Intent, patient: PatientContext) -> Severity:
    text = message.lower()

    if intent == Intent.EMERGENCY or kw.CRITICAL_SYMPTOMS.matches(text):
        return Severity.CRITICAL

    modifier = first_matching(text, SEVERITY_MODIFIER_RULES)
    if modifier is not None:
        return modifier

    # High-risk patients reporting symptoms are bumped even without modifiers
    if patient.risk_level in _ELEVATED_RISK and intent == Intent.SYMPTOM_REPORT:
        return Severity.HIGH

    return Severity.LOW


# Same precedence as assess_severity, so the hit named is the one that decided it
_TRIGGER_TABLES: List[KeywordTable] = [kw.EMERGENCY_KEYWORDS, kw.CRITICAL_SYMPTOMS] + [
    table for table, _ in SEVERITY_MODIFIER_RULES
]


def severity_trigger(message: str) -> Optional[str]:
    """Keyword that raised the message's severity, if any."""
    text = message.lower()
    for table in _TRIGGER_TABLES:
        hit = table.first_hit(text)
        if hit is not None:
            return hit
    return None
