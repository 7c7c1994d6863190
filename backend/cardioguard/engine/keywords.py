# cardioguard/engine/keywords.py
"""
Keyword tables used by the check-in classifier and the chat responder.

All matching is plain substring matching against lower-cased text, so a few
entries carry deliberate whitespace (``"hi "``) to avoid matching inside
longer words.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class KeywordTable:
    name: str
    keywords: Tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(kw in text for kw in self.keywords)

    def first_hit(self, text: str) -> Optional[str]:
        for kw in self.keywords:
            if kw in text:
                return kw
        return None


def first_matching(text: str, rules: Iterable[Tuple[KeywordTable, T]]) -> Optional[T]:
    """Return the value paired with the first table that matches ``text``."""
    for table, value in rules:
        if table.matches(text):
            return value
    return None


def _table(name: str, keywords: Sequence[str]) -> KeywordTable:
    return KeywordTable(name=name, keywords=tuple(keywords))


# ------------------------------- Daily check-in -------------------------------
CHECKIN_CRITICAL_SYMPTOMS = _table("checkin_critical_symptoms", [
    "severe chest pain", "difficulty breathing", "severe shortness of breath",
    "fainting", "severe swelling", "chest pressure", "cannot catch breath",
])

CHECKIN_WARNING_SYMPTOMS = _table("checkin_warning_symptoms", [
    "shortness of breath", "mild chest pain", "swelling", "fatigue",
    "dizziness", "rapid heartbeat", "weight gain", "reduced appetite",
])

NEGATIVE_MOODS = _table("negative_moods", [
    "very bad", "terrible", "awful", "extremely anxious", "panicked",
])

BREATHING_TOPIC = _table("breathing_topic", ["breath"])
BREATHING_RED_ANSWERS = _table("breathing_red_answers", ["severe", "very difficult", "cannot"])
BREATHING_YELLOW_ANSWERS = _table("breathing_yellow_answers", ["difficult", "harder", "sometimes"])

PAIN_TOPIC = _table("pain_topic", ["pain", "chest"])
PAIN_RED_ANSWERS = _table("pain_red_answers", ["severe", "very bad", "intense"])
PAIN_YELLOW_ANSWERS = _table("pain_yellow_answers", ["moderate", "some", "mild"])

MEDICATION_TOPIC = _table("medication_topic", ["medication", "medicine"])
MEDICATION_YELLOW_ANSWERS = _table("medication_yellow_answers", ["no", "forgot", "missed"])

# ------------------------------- Chat -------------------------------
EMERGENCY_KEYWORDS = _table("emergency", [
    "call 911", "emergency", "ambulance", "help me", "dying", "heart attack",
    "stroke", "can't breathe", "severe chest pain", "crushing pain",
])

# Broader than CHECKIN_CRITICAL_SYMPTOMS: bare "chest pain" is critical here.
CRITICAL_SYMPTOMS = _table("critical_symptoms", [
    "chest pain", "severe pain", "crushing pain", "can't breathe", "cannot breathe",
    "difficulty breathing", "shortness of breath", "dizzy", "dizziness", "faint",
    "fainting", "passed out", "unconscious", "severe headache", "confusion",
    "slurred speech", "numbness", "weakness", "heart racing", "palpitations",
    "irregular heartbeat", "bleeding", "vomiting blood", "severe swelling",
    "blue lips", "blue fingers", "cold sweat",
])

GREETING_KEYWORDS = _table("greeting", [
    "hello", "hi ", "hey", "good morning", "good afternoon", "good evening",
    "greetings", "howdy",
])

GRATITUDE_KEYWORDS = _table("gratitude", [
    "thank you", "thanks", "appreciate", "grateful", "helpful", "great", "good",
    "excellent", "perfect", "wonderful",
])

MEDICATION_KEYWORDS = _table("medication", [
    "medication", "medicine", "pill", "prescription", "dose", "dosage",
    "side effect", "side-effect", "drug", "tablet", "metoprolol", "lisinopril",
    "atorvastatin", "aspirin", "warfarin", "blood thinner", "statin",
])

APPOINTMENT_KEYWORDS = _table("appointment", [
    "appointment", "schedule", "follow-up", "follow up", "visit", "see doctor",
    "see my doctor", "cardiologist", "clinic", "office visit", "check-up", "checkup",
])

EMOTIONAL_KEYWORDS = _table("emotional", [
    "anxious", "anxiety", "worried", "scared", "afraid", "depressed", "sad",
    "overwhelmed", "stressed", "stress", "can't sleep", "insomnia", "lonely",
    "hopeless", "frustrated", "angry", "upset",
])

LIFESTYLE_KEYWORDS = _table("lifestyle", [
    "exercise", "walk", "walking", "diet", "food", "eat", "eating", "nutrition",
    "weight", "sleep", "sleeping", "stress", "activity", "sodium", "salt", "water",
    "hydration", "alcohol", "smoking",
])

PROGRESS_KEYWORDS = _table("progress", [
    "progress", "recovery", "healing", "improving", "better", "worse",
    "how am i doing", "am i improving", "getting better", "doing okay", "doing well",
])

SYMPTOM_WORDS = _table("symptom_words", [
    "pain", "hurts", "ache", "swelling", "tired", "fatigue",
    "nausea", "symptom", "feeling", "uncomfortable",
])

HEALTH_WORDS = _table("health_words", ["health", "recovery", "heart", "condition", "vitals"])

# ------------------------------- Severity modifiers -------------------------------
CRITICAL_MODIFIERS = _table("critical_modifiers", [
    "severe", "extreme", "worst", "unbearable", "can't", "cannot",
])
HIGH_MODIFIERS = _table("high_modifiers", [
    "bad", "serious", "concerning", "worried", "increasing", "getting worse",
])
MEDIUM_MODIFIERS = _table("medium_modifiers", ["moderate", "some", "mild", "slight", "occasional"])


ALL_TABLES = [
    CHECKIN_CRITICAL_SYMPTOMS, CHECKIN_WARNING_SYMPTOMS, NEGATIVE_MOODS,
    BREATHING_TOPIC, BREATHING_RED_ANSWERS, BREATHING_YELLOW_ANSWERS,
    PAIN_TOPIC, PAIN_RED_ANSWERS, PAIN_YELLOW_ANSWERS,
    MEDICATION_TOPIC, MEDICATION_YELLOW_ANSWERS,
    EMERGENCY_KEYWORDS, CRITICAL_SYMPTOMS, GREETING_KEYWORDS, GRATITUDE_KEYWORDS,
    MEDICATION_KEYWORDS, APPOINTMENT_KEYWORDS, EMOTIONAL_KEYWORDS, LIFESTYLE_KEYWORDS,
    PROGRESS_KEYWORDS, SYMPTOM_WORDS, HEALTH_WORDS,
    CRITICAL_MODIFIERS, HIGH_MODIFIERS, MEDIUM_MODIFIERS,
]
