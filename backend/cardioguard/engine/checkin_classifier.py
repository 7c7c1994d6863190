# cardioguard/engine/checkin_classifier.py
import logging
from typing import List, Tuple

from cardioguard.engine import keywords as kw
from cardioguard.engine.keywords import KeywordTable
from cardioguard.models.triage_models import (
    CheckInOutcome,
    CheckInResult,
    CheckInSubmission,
    Classification,
)

logger = logging.getLogger(__name__)

# (topic keyed on question text, answers raising a red flag, answers raising a yellow flag)
_ANSWER_RULES: List[Tuple[KeywordTable, KeywordTable, KeywordTable]] = [
    (kw.BREATHING_TOPIC, kw.BREATHING_RED_ANSWERS, kw.BREATHING_YELLOW_ANSWERS),
    (kw.PAIN_TOPIC, kw.PAIN_RED_ANSWERS, kw.PAIN_YELLOW_ANSWERS),
    (kw.MEDICATION_TOPIC, KeywordTable("medication_red_answers", ()), kw.MEDICATION_YELLOW_ANSWERS),
]

LOW_ENERGY_THRESHOLD = 3
EXHAUSTED_ENERGY_THRESHOLD = 1
YELLOW_FLAG_THRESHOLD = 2

CHECKIN_MESSAGES = {
    Classification.RED: (
        "We've noticed some concerning symptoms. A care team member will reach out to you "
        "shortly. If you feel this is an emergency, please call 911."
    ),
    Classification.YELLOW: (
        "Thank you for checking in. We've noted a few changes in your symptoms. "
        "A nurse may follow up with you today."
    ),
    Classification.GREEN: (
        "Great job! You're on day {streak} of your recovery streak. Keep up the excellent work! 🎉"
    ),
}


def _scan_symptoms(symptoms: List[str]) -> Tuple[int, int]:
    red = yellow = 0
    for symptom in symptoms:
        lower = symptom.lower()
        if kw.CHECKIN_CRITICAL_SYMPTOMS.matches(lower):
            red += 1
        elif kw.CHECKIN_WARNING_SYMPTOMS.matches(lower):
            yellow += 1
    return red, yellow


def _scan_responses(submission: CheckInSubmission) -> Tuple[int, int]:
    red = yellow = 0
    for response in submission.responses:
        question = response.question.lower()
        answer = response.answer.lower()
        for topic, red_answers, yellow_answers in _ANSWER_RULES:
            if not topic.matches(question):
                continue
            if red_answers.matches(answer):
                red += 1
            elif yellow_answers.matches(answer):
                yellow += 1
    return red, yellow


def classify(submission: CheckInSubmission) -> CheckInOutcome:
    """
    Classify a daily check-in as green, yellow or red.

    Every check runs and adds to the flag counters; the decision is taken once
    at the end: any red flag is red, two or more yellow flags are yellow.
    """
    red_flags, yellow_flags = _scan_symptoms(submission.symptoms)

    red, yellow = _scan_responses(submission)
    red_flags += red
    yellow_flags += yellow

    if submission.energy_level <= LOW_ENERGY_THRESHOLD:
        yellow_flags += 1
    if submission.energy_level <= EXHAUSTED_ENERGY_THRESHOLD:
        red_flags += 1

    if kw.NEGATIVE_MOODS.matches(submission.mood.lower()):
        yellow_flags += 1

    if red_flags >= 1:
        classification = Classification.RED
    elif yellow_flags >= YELLOW_FLAG_THRESHOLD:
        classification = Classification.YELLOW
    else:
        classification = Classification.GREEN

    return CheckInOutcome(classification, red_flags, yellow_flags)


def build_checkin_result(outcome: CheckInOutcome, current_streak: int) -> CheckInResult:
    classification = outcome.classification
    if classification == Classification.GREEN:
        streak = current_streak + 1
        requires_follow_up = False
    else:
        streak = current_streak
        requires_follow_up = True

    return CheckInResult(
        classification=classification,
        message=CHECKIN_MESSAGES[classification].format(streak=streak),
        requires_follow_up=requires_follow_up,
        streak=streak,
        template_id=classification.value,
    )


def evaluate_checkin(submission: CheckInSubmission, current_streak: int = 0) -> CheckInResult:
    outcome = classify(submission)
    logger.info(
        f"🩺 Check-in for {submission.patient_id}: {outcome.classification.value} "
        f"(red={outcome.red_flags}, yellow={outcome.yellow_flags})"
    )
    return build_checkin_result(outcome, current_streak)
