# cardioguard/engine/responses.py
"""
Canned chat replies.

Each intent owns an ordered decision list of ``(predicate, template)`` rules.
The first rule whose predicate accepts the lower-cased message produces the
reply, so the last rule of every list is a catch-all.
"""
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from cardioguard.models.triage_models import (
    Intent,
    PatientContext,
    RiskLevel,
    Severity,
    SmartResponse,
)

Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class ResponseTemplate:
    content: str
    # None keeps the assessed severity
    severity: Optional[Severity] = None
    # None escalates unless the assessed severity is low
    escalate: Optional[bool] = True
    suggested_actions: Tuple[str, ...] = ()
    follow_up_question: Optional[str] = None
    alternatives: Tuple[str, ...] = ()

    def render(
        self,
        intent: Intent,
        severity: Severity,
        fields: Dict[str, str],
        rng: random.Random,
    ) -> SmartResponse:
        content = rng.choice(self.alternatives) if self.alternatives else self.content
        escalate = self.escalate if self.escalate is not None else severity != Severity.LOW
        return SmartResponse(
            content=content.format(**fields),
            intent=intent,
            severity=self.severity or severity,
            should_escalate=escalate,
            suggested_actions=list(self.suggested_actions) or None,
            follow_up_question=self.follow_up_question,
        )


ResponseRule = Tuple[Predicate, ResponseTemplate]


def contains_any(*words: str) -> Predicate:
    return lambda text: any(w in text for w in words)


def contains_all(*words: str) -> Predicate:
    return lambda text: all(w in text for w in words)


def always(text: str) -> bool:
    return True


# ------------------------------- Emergency -------------------------------
EMERGENCY_RESPONSE = ResponseTemplate(
    content=(
        "{first_name}, I'm very concerned about what you're experiencing. Please call 911 "
        "immediately or go to the nearest emergency room. If you're having chest pain, "
        "difficulty breathing, or other severe symptoms, this is a medical emergency that "
        "needs immediate attention. I'm also alerting your care team right now."
    ),
    severity=Severity.CRITICAL,
    escalate=True,
    suggested_actions=("Call 911", "Go to ER", "Contact emergency services"),
)

# ------------------------------- Decision lists -------------------------------
GREETING_RULES: List[ResponseRule] = [
    (always, ResponseTemplate(
        content="",
        alternatives=(
            "Hello {first_name}! How are you feeling today? I'm here to help with any questions or concerns.",
            "Hi {first_name}! Great to hear from you. What can I help you with today?",
            "Good day, {first_name}! I hope your recovery is going well. How can I assist you?",
        ),
        severity=Severity.LOW,
        escalate=False,
        follow_up_question="Is there anything specific I can help you with today?",
    )),
]

GRATITUDE_RULES: List[ResponseRule] = [
    (always, ResponseTemplate(
        content=(
            "You're very welcome, {first_name}! I'm here whenever you need support. Your "
            "commitment to your recovery is inspiring. Keep up the great work! 💙"
        ),
        severity=Severity.LOW,
        escalate=False,
    )),
]

SYMPTOM_RULES: List[ResponseRule] = [
    (contains_any("chest pain"), ResponseTemplate(
        content=(
            "{first_name}, chest pain needs to be taken seriously. Can you describe it more? "
            "Is it sharp, dull, or pressure-like? Does it come with shortness of breath or "
            "sweating? I'm alerting your care team now - they'll reach out within the hour. "
            "If the pain is severe or worsening, please call 911 immediately."
        ),
        severity=Severity.CRITICAL,
        suggested_actions=("Monitor pain level", "Rest", "Call care team if worsens"),
        follow_up_question="On a scale of 1-10, how severe is the pain?",
    )),
    (contains_all("short", "breath"), ResponseTemplate(
        content=(
            "I understand you're experiencing shortness of breath, {first_name}. This is "
            "important to address. Are you also experiencing swelling in your legs or sudden "
            "weight gain? I'm notifying your care team right away. Please rest and avoid "
            "physical activity. If breathing becomes severely difficult, call 911."
        ),
        severity=Severity.HIGH,
        suggested_actions=("Rest", "Monitor breathing", "Check for swelling"),
        follow_up_question="Have you noticed any swelling in your ankles or legs?",
    )),
    (contains_any("dizz", "lightheaded"), ResponseTemplate(
        content=(
            "{first_name}, dizziness can be concerning after {diagnosis}. Have you been taking "
            "your medications as prescribed? Sometimes blood pressure medications can cause "
            "this. I'm letting your care team know. Please sit or lie down, stay hydrated, and "
            "avoid sudden movements. They'll review your medications and vitals."
        ),
        severity=Severity.HIGH,
        suggested_actions=("Sit down", "Stay hydrated", "Avoid sudden movements"),
        follow_up_question="Did you take all your medications today as prescribed?",
    )),
    (contains_any("swell"), ResponseTemplate(
        content=(
            "Thanks for reporting the swelling, {first_name}. Swelling can indicate fluid "
            "retention, which is important to monitor with your condition. Have you weighed "
            "yourself today? Any sudden weight gain? I'm alerting your care team - they may "
            "want to adjust your medications. In the meantime, try to elevate your legs and "
            "reduce salt intake."
        ),
        severity=Severity.MEDIUM,
        suggested_actions=("Weigh yourself daily", "Elevate legs", "Reduce salt"),
        follow_up_question="Have you gained more than 2-3 pounds in the last few days?",
    )),
    (contains_any("tired", "fatigue"), ResponseTemplate(
        content=(
            "{first_name}, fatigue is common during recovery from {diagnosis}, but we want to "
            "make sure it's normal. How's your sleep? Are you getting 7-8 hours? Your care team "
            "will follow up to check your energy levels and possibly adjust your treatment "
            "plan. Make sure you're eating well and staying hydrated."
        ),
        severity=Severity.MEDIUM,
        escalate=None,
        suggested_actions=("Rest adequately", "Stay hydrated", "Eat nutritious meals"),
        follow_up_question=(
            "Are you able to do your normal daily activities, or is the fatigue limiting you?"
        ),
    )),
    (always, ResponseTemplate(
        content=(
            "Thank you for sharing that with me, {first_name}. I've recorded your symptoms and "
            "notified your care team. They'll review this and reach out within 2 hours. In the "
            "meantime, please rest and monitor how you're feeling. If anything changes or gets "
            "worse, message us immediately or call the care line."
        ),
        suggested_actions=("Rest", "Monitor symptoms", "Stay hydrated"),
        follow_up_question="Is there anything else you're experiencing that I should know about?",
    )),
]

MEDICATION_RULES: List[ResponseRule] = [
    (contains_any("side effect"), ResponseTemplate(
        content=(
            "{first_name}, it's important to address medication side effects. What symptoms "
            "are you experiencing? Some side effects are normal and temporary, while others "
            "need attention. I'm alerting your care team so they can review your medications. "
            "Never stop taking your heart medications without talking to your doctor first - "
            "it could be dangerous."
        ),
        severity=Severity.HIGH,
        suggested_actions=("Document side effects", "Continue medications", "Wait for care team"),
        follow_up_question="What specific side effects are you experiencing?",
    )),
    (contains_any("forgot", "missed"), ResponseTemplate(
        content=(
            "If you missed a dose, {first_name}, don't double up on the next one. Just take "
            "your next scheduled dose. For your heart medications, consistency is really "
            "important for your recovery. Consider setting phone alarms or using a pill "
            "organizer. I'll have your care team reach out about strategies to help you stay "
            "on track."
        ),
        severity=Severity.MEDIUM,
        suggested_actions=(
            "Take next dose on schedule", "Set medication reminders", "Use pill organizer",
        ),
    )),
    (contains_any("when", "time"), ResponseTemplate(
        content=(
            "Great question about medication timing, {first_name}. It's best to take your "
            "heart medications at the same time each day. Your care team will reach out with "
            "specific guidance for your prescriptions. Generally, morning medications help "
            "protect you throughout the day. Check your prescription labels or your discharge "
            "instructions for specific timing."
        ),
        severity=Severity.LOW,
        escalate=False,
        suggested_actions=("Check prescription labels", "Set daily reminders", "Create routine"),
    )),
    (always, ResponseTemplate(
        content=(
            "That's a great question about your medications, {first_name}. Your heart "
            "medications are crucial for your recovery from {diagnosis}. I'm connecting you "
            "with your care team - they have access to your complete medication list and can "
            "give you detailed guidance. They'll respond within 2 hours."
        ),
        severity=Severity.MEDIUM,
        suggested_actions=("Continue current medications", "Wait for care team response"),
    )),
]

APPOINTMENT_RULES: List[ResponseRule] = [
    (always, ResponseTemplate(
        content=(
            "I can help with that, {first_name}! Your next appointment is currently "
            "{next_appointment}. I'm notifying your care coordinator who will reach out within "
            "4 hours to schedule or reschedule your appointment. Is this for a routine "
            "follow-up or do you have specific concerns we should address?"
        ),
        severity=Severity.LOW,
        suggested_actions=("Wait for care coordinator", "Prepare questions for appointment"),
        follow_up_question=(
            "Is this a routine follow-up or do you have specific symptoms you need to discuss?"
        ),
    )),
]

EMOTIONAL_RULES: List[ResponseRule] = [
    (contains_any("anxious", "anxiety", "worried"), ResponseTemplate(
        content=(
            "{first_name}, it's completely normal to feel anxious after {diagnosis}. Your "
            "feelings are valid, and you're not alone in this. Recovery is not just physical - "
            "your mental health matters too. Try some deep breathing: breathe in for 4 counts, "
            "hold for 4, breathe out for 4. I'm connecting you with our care team who can "
            "provide counseling resources and possibly medication if needed."
        ),
        severity=Severity.MEDIUM,
        suggested_actions=("Practice deep breathing", "Talk to care team", "Consider counseling"),
        follow_up_question="Would you like information about our cardiac counseling services?",
    )),
    (contains_any("depressed", "sad", "hopeless"), ResponseTemplate(
        content=(
            "{first_name}, I'm really glad you reached out. Depression after a cardiac event is "
            "more common than you might think - you're not alone. Your mental health is just as "
            "important as your physical recovery. I'm alerting your care team right away. They "
            "can connect you with a counselor who specializes in cardiac recovery. If you're "
            "having thoughts of self-harm, please call 988 (Suicide Prevention Lifeline) "
            "immediately."
        ),
        severity=Severity.HIGH,
        suggested_actions=("Talk to care team", "Consider counseling", "Call 988 if needed"),
        follow_up_question="Would you like me to have someone call you today to talk about this?",
    )),
    (contains_any("sleep", "insomnia"), ResponseTemplate(
        content=(
            "Sleep problems are frustrating, {first_name}, and they can impact your recovery. "
            "Good sleep helps your heart heal. Try keeping a consistent bedtime, avoiding "
            "screens an hour before bed, and making your room cool and dark. I'm letting your "
            "care team know - they can check if any of your medications might be affecting "
            "sleep and suggest solutions."
        ),
        severity=Severity.MEDIUM,
        suggested_actions=(
            "Keep consistent sleep schedule", "Limit screen time before bed", "Review medications",
        ),
    )),
    (always, ResponseTemplate(
        content=(
            "Thank you for sharing how you're feeling, {first_name}. Recovering from "
            "{diagnosis} is challenging - both physically and emotionally. It's a sign of "
            "strength to talk about it. Your care team is here to support all aspects of your "
            "recovery. They'll reach out soon to see how they can help. Remember, you're doing "
            "great by staying engaged in your care! 💙"
        ),
        severity=Severity.MEDIUM,
        suggested_actions=("Stay connected", "Talk to care team", "Practice self-compassion"),
    )),
]

LIFESTYLE_RULES: List[ResponseRule] = [
    (contains_any("exercise", "walk"), ResponseTemplate(
        content=(
            "Great question about exercise, {first_name}! Physical activity is important for "
            "your recovery from {diagnosis}. Start slowly - even 5-10 minute walks are "
            "beneficial. Listen to your body and stop if you feel chest pain, severe shortness "
            "of breath, or dizziness. Your care team can provide personalized exercise "
            "guidelines. Many patients benefit from cardiac rehab programs."
        ),
        severity=Severity.LOW,
        escalate=False,
        suggested_actions=("Start with short walks", "Listen to your body", "Ask about cardiac rehab"),
        follow_up_question="Have you been referred to a cardiac rehabilitation program?",
    )),
    (contains_any("diet", "food", "eat"), ResponseTemplate(
        content=(
            "Nutrition is a key part of your recovery, {first_name}! Focus on a heart-healthy "
            "diet: lots of vegetables, fruits, whole grains, lean proteins, and healthy fats. "
            "Limit sodium (aim for under 2000mg/day), avoid processed foods, and watch portion "
            "sizes. I can have our nutritionist reach out with personalized meal planning if "
            "you'd like."
        ),
        severity=Severity.LOW,
        escalate=False,
        suggested_actions=("Eat heart-healthy foods", "Limit sodium", "Read nutrition labels"),
        follow_up_question=(
            "Would you like to speak with our nutritionist for personalized meal planning?"
        ),
    )),
    (contains_any("sodium", "salt"), ResponseTemplate(
        content=(
            "Good thinking about sodium, {first_name}! Excess salt can increase blood pressure "
            "and fluid retention, which is especially important to avoid with {diagnosis}. Aim "
            "for less than 2000mg daily. Avoid processed foods, canned soups, and restaurant "
            "meals - they're often very high in sodium. Read labels carefully!"
        ),
        severity=Severity.LOW,
        escalate=False,
        suggested_actions=("Read food labels", "Avoid processed foods", "Track daily sodium"),
    )),
    (always, ResponseTemplate(
        content=(
            "That's a great question about healthy lifestyle, {first_name}! Making positive "
            "changes really supports your recovery from {diagnosis}. Your care team can provide "
            "specific guidance tailored to your situation. I'm letting them know you have "
            "questions about lifestyle modifications."
        ),
        severity=Severity.LOW,
        escalate=False,
        suggested_actions=("Focus on heart-healthy habits", "Ask care team for guidance"),
    )),
]

PROGRESS_RULES: List[ResponseRule] = [
    (always, ResponseTemplate(
        content=(
            "{first_name}, you're making {progress_word} progress! You've completed {streak} "
            "daily check-ins in a row - that's fantastic commitment. {progress_note} Keep up "
            "your medications, healthy eating, gentle exercise, and daily check-ins. Your "
            "dedication is the key to successful recovery! 💙"
        ),
        severity=Severity.LOW,
        escalate=False,
        suggested_actions=(
            "Continue daily check-ins", "Maintain healthy habits", "Stay consistent with medications",
        ),
        follow_up_question=(
            "Is there any specific aspect of your recovery you'd like to know more about?"
        ),
    )),
]

GENERAL_HEALTH_RULES: List[ResponseRule] = [
    (always, ResponseTemplate(
        content=(
            "Thanks for checking in, {first_name}. Your recovery from {diagnosis} is important "
            "to us. I'm here to help with any questions about your medications, symptoms, "
            "appointments, or lifestyle changes. What specific aspect of your health would you "
            "like to discuss?"
        ),
        severity=Severity.LOW,
        escalate=False,
        follow_up_question=(
            "What would you like to know more about - medications, symptoms, diet, exercise, "
            "or appointments?"
        ),
    )),
]

UNKNOWN_RULES: List[ResponseRule] = [
    (always, ResponseTemplate(
        content=(
            "Thank you for your message, {first_name}. I want to make sure I understand "
            "correctly so I can help you best. Could you tell me a bit more? For example, are "
            "you asking about symptoms, medications, appointments, or something else? A care "
            "team member is available to chat if you'd prefer to speak with someone directly."
        ),
        severity=Severity.LOW,
        escalate=False,
        suggested_actions=("Provide more details", "Choose a topic", "Request call back"),
        follow_up_question="What would you most like help with today?",
    )),
]

RESPONSE_RULES: Dict[Intent, List[ResponseRule]] = {
    Intent.GREETING: GREETING_RULES,
    Intent.GRATITUDE: GRATITUDE_RULES,
    Intent.SYMPTOM_REPORT: SYMPTOM_RULES,
    Intent.MEDICATION_QUESTION: MEDICATION_RULES,
    Intent.APPOINTMENT_REQUEST: APPOINTMENT_RULES,
    Intent.EMOTIONAL_SUPPORT: EMOTIONAL_RULES,
    Intent.LIFESTYLE_QUESTION: LIFESTYLE_RULES,
    Intent.PROGRESS_INQUIRY: PROGRESS_RULES,
    Intent.GENERAL_HEALTH: GENERAL_HEALTH_RULES,
    Intent.UNKNOWN: UNKNOWN_RULES,
}


def _format_appointment(patient: PatientContext) -> str:
    appt = patient.next_appointment
    if appt is None:
        return "not yet scheduled"
    return f"{appt.month}/{appt.day}/{appt.year}"


def template_fields(patient: PatientContext) -> Dict[str, str]:
    improving = patient.risk_level in (RiskLevel.LOW, RiskLevel.MEDIUM)
    return {
        "first_name": patient.first_name,
        "diagnosis": patient.diagnosis,
        "next_appointment": _format_appointment(patient),
        "streak": str(patient.recovery_streak or 0),
        "progress_word": "excellent" if improving else "steady",
        "progress_note": (
            "Your care team is pleased with your recovery trajectory."
            if improving
            else "Your care team is closely monitoring your recovery."
        ),
    }


def select_template(intent: Intent, text: str) -> ResponseTemplate:
    for predicate, template in RESPONSE_RULES.get(intent, UNKNOWN_RULES):
        if predicate(text):
            return template
    return UNKNOWN_RULES[-1][1]


def generate_response(
    message: str,
    intent: Intent,
    severity: Severity,
    patient: PatientContext,
    rng: Optional[random.Random] = None,
) -> SmartResponse:
    rng = rng or random.Random()
    fields = template_fields(patient)

    if intent == Intent.EMERGENCY or severity == Severity.CRITICAL:
        return EMERGENCY_RESPONSE.render(intent, severity, fields, rng)

    template = select_template(intent, message.lower())
    return template.render(intent, severity, fields, rng)
