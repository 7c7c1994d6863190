# tests/test_responder.py
import logging
import random

import pytest
from pydantic import ValidationError

from cardioguard.engine.responder import FALLBACK_CONTENT, TriageResponder
from cardioguard.engine.responses import RESPONSE_RULES
from cardioguard.models.triage_models import Intent, PatientContext, RiskLevel, Severity
from cardioguard.services.conversation_store import InMemoryConversationStore


def test_heart_attack_is_an_emergency(responder, patient):
    response = responder.respond(patient, "I think I'm having a heart attack")
    assert response.intent == Intent.EMERGENCY
    assert response.severity == Severity.CRITICAL
    assert response.should_escalate is True
    assert "call 911" in response.content.lower()
    assert response.suggested_actions == ["Call 911", "Go to ER", "Contact emergency services"]


def test_gratitude_does_not_escalate(responder, patient):
    response = responder.respond(patient, "I'm feeling great today, thanks!")
    assert response.intent == Intent.GRATITUDE
    assert response.severity == Severity.LOW
    assert response.should_escalate is False
    assert response.content.startswith("You're very welcome, Jane!")


def test_critical_symptom_gets_the_emergency_reply(responder, patient):
    response = responder.respond(patient, "I feel dizzy")
    assert response.intent == Intent.SYMPTOM_REPORT
    assert response.severity == Severity.CRITICAL
    assert response.should_escalate is True
    assert "call 911" in response.content.lower()


def test_greeting_uses_first_name(responder, patient):
    response = responder.respond(patient, "hello there")
    assert response.intent == Intent.GREETING
    assert "Jane" in response.content
    assert response.should_escalate is False
    assert response.follow_up_question == "Is there anything specific I can help you with today?"
    assert response.suggested_actions is None


def test_greeting_choice_follows_the_rng(patient):
    first = TriageResponder(rng=random.Random(3)).respond(patient, "hello")
    second = TriageResponder(rng=random.Random(3)).respond(patient, "hello")
    assert first.content == second.content


@pytest.mark.parametrize("message, severity, escalate, fragment", [
    ("My legs are swelling a bit", Severity.MEDIUM, True, "elevate your legs"),
    ("My ankle hurts", Severity.LOW, True, "I've recorded your symptoms"),
    ("I'm having side effects from my medication", Severity.HIGH, True, "Never stop taking"),
    ("I forgot to take my pills", Severity.MEDIUM, True, "don't double up"),
    ("When should I take my metoprolol?", Severity.LOW, False, "same time each day"),
    ("Is my prescription changing?", Severity.MEDIUM, True, "recovery from Acute MI"),
    ("I have insomnia", Severity.MEDIUM, True, "consistent bedtime"),
    ("I feel so sad lately", Severity.HIGH, True, "988"),
    ("I'm feeling anxious about my recovery", Severity.MEDIUM, True, "deep breathing"),
    ("I feel lonely", Severity.MEDIUM, True, "sign of strength"),
    ("Can I exercise today?", Severity.LOW, False, "cardiac rehab"),
    ("What should I eat?", Severity.LOW, False, "heart-healthy diet"),
    ("Is alcohol okay?", Severity.LOW, False, "lifestyle modifications"),
    ("What about my heart", Severity.LOW, False, "Your recovery from Acute MI"),
    ("blah", Severity.LOW, False, "tell me a bit more"),
])
def test_canned_replies(responder, patient, message, severity, escalate, fragment):
    response = responder.respond(patient, message)
    assert response.severity == severity
    assert response.should_escalate is escalate
    assert fragment in response.content


def test_sodium_reply_when_no_earlier_lifestyle_rule_matches(responder, patient):
    response = responder.respond(patient, "how much sodium is ok")
    assert response.intent == Intent.LIFESTYLE_QUESTION
    assert "Good thinking about sodium" in response.content


def test_fatigue_escalates_only_when_assessed_above_low(responder, patient, high_risk_patient):
    low = responder.respond(patient, "I feel tired")
    assert low.severity == Severity.MEDIUM
    assert low.should_escalate is False

    high = responder.respond(high_risk_patient, "I feel tired")
    assert high.severity == Severity.MEDIUM
    assert high.should_escalate is True


def test_generic_symptom_keeps_assessed_severity(responder, high_risk_patient):
    response = responder.respond(high_risk_patient, "My ankle hurts")
    assert response.intent == Intent.SYMPTOM_REPORT
    assert response.severity == Severity.HIGH
    assert response.content.startswith("Thank you for sharing that with me, Robert.")


def test_appointment_reply_includes_next_visit(responder, patient, high_risk_patient):
    response = responder.respond(patient, "I need to schedule an appointment")
    assert response.intent == Intent.APPOINTMENT_REQUEST
    assert "11/3/2026" in response.content
    assert response.should_escalate is True

    unscheduled = responder.respond(high_risk_patient, "I need to schedule an appointment")
    assert "not yet scheduled" in unscheduled.content


def test_progress_wording_depends_on_risk_level(responder, patient, high_risk_patient):
    response = responder.respond(patient, "How is my progress?")
    assert "excellent progress" in response.content
    assert "4 daily check-ins" in response.content

    response = responder.respond(high_risk_patient, "How is my progress?")
    assert "steady progress" in response.content
    assert "closely monitoring" in response.content


def test_every_decision_list_ends_with_a_catch_all():
    for intent, rules in RESPONSE_RULES.items():
        predicate, _ = rules[-1]
        assert predicate("zzz"), intent


def test_missing_patient_gets_fallback(responder):
    response = responder.respond(None, "I have chest pain")
    assert response.content == FALLBACK_CONTENT
    assert response.intent == Intent.UNKNOWN
    assert response.severity == Severity.LOW
    assert response.should_escalate is True


def test_memory_is_updated_after_each_reply(responder, store, patient):
    responder.respond(patient, "hello")
    responder.respond(patient, "I think I'm having a heart attack")

    context = store.get(patient.id)
    assert context.recent_intents == [Intent.GREETING, Intent.EMERGENCY]
    assert context.escalation_count == 1


def test_memory_keeps_last_five_intents(responder, store, patient):
    messages = ["hello", "thanks", "my pills", "blah", "Can I exercise today?", "How is my progress?"]
    for message in messages:
        responder.respond(patient, message)

    context = store.get(patient.id)
    assert context.recent_intents == [
        Intent.GRATITUDE,
        Intent.MEDICATION_QUESTION,
        Intent.UNKNOWN,
        Intent.LIFESTYLE_QUESTION,
        Intent.PROGRESS_INQUIRY,
    ]


def test_memory_does_not_change_replies(patient):
    with_memory = TriageResponder(store=InMemoryConversationStore(), rng=random.Random(1))
    for _ in range(6):
        with_memory.respond(patient, "I think I'm having a heart attack")
    without_memory = TriageResponder(store=None, rng=random.Random(1))
    assert with_memory.respond(patient, "My ankle hurts") == without_memory.respond(patient, "My ankle hurts")


def test_failing_store_never_breaks_a_reply(patient):
    class BrokenStore:
        def record(self, patient_id, intent, escalated):
            raise RuntimeError("store unavailable")

    response = TriageResponder(store=BrokenStore()).respond(patient, "I think I'm having a heart attack")
    assert response.intent == Intent.EMERGENCY


def test_patient_context_is_read_only(patient):
    with pytest.raises(ValidationError):
        patient.name = "Someone Else"
    assert PatientContext(id="x", name="Solo", diagnosis="CHF").risk_level == RiskLevel.LOW


def test_escalation_logs_the_triggering_keyword(responder, patient, caplog):
    with caplog.at_level(logging.INFO):
        responder.respond(patient, "I feel dizzy and weak")
    assert "escalation trigger=dizzy" in caplog.text


def test_quiet_replies_do_not_log_a_trigger(responder, patient, caplog):
    with caplog.at_level(logging.INFO):
        responder.respond(patient, "thanks")
    assert "escalation trigger" not in caplog.text
