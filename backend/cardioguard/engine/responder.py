# cardioguard/engine/responder.py
import logging
import random
from typing import Optional

from cardioguard.engine.intent import assess_severity, detect_intent, severity_trigger
from cardioguard.engine.responses import generate_response
from cardioguard.models.triage_models import Intent, PatientContext, Severity, SmartResponse
from cardioguard.services.conversation_store import ConversationStore

logger = logging.getLogger(__name__)

FALLBACK_CONTENT = (
    "I'm having trouble accessing your patient information. "
    "Please try again or contact support."
)


def fallback_response() -> SmartResponse:
    return SmartResponse(
        content=FALLBACK_CONTENT,
        intent=Intent.UNKNOWN,
        severity=Severity.LOW,
        should_escalate=True,
    )


class TriageResponder:
    """
    Turns a patient's chat message into a canned, triaged reply.

    Intent, severity and the chosen template depend only on the message and
    the patient context. The optional conversation store is written after
    each reply and never consulted, so a missing or failing store cannot
    change what the patient sees.
    """

    def __init__(self, store: Optional[ConversationStore] = None, rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng or random.Random()

    def respond(self, patient: Optional[PatientContext], message: str) -> SmartResponse:
        if patient is None:
            logger.warning("⚠️ No patient context available, sending fallback response")
            return fallback_response()

        intent = detect_intent(message)
        severity = assess_severity(message, intent, patient)
        response = generate_response(message, intent, severity, patient, self.rng)

        self._remember(patient.id, intent, response.should_escalate)
        logger.info(
            f"💬 {patient.id}: intent={response.intent.value} severity={response.severity.value} "
            f"escalate={response.should_escalate}"
        )
        if response.should_escalate:
            logger.info(f"🔎 {patient.id}: escalation trigger={severity_trigger(message)}")
        return response

    def _remember(self, patient_id: str, intent: Intent, escalated: bool) -> None:
        if self.store is None:
            return
        try:
            self.store.record(patient_id, intent, escalated)
        except Exception as e:
            logger.error(f"❌ Failed to update conversation memory for {patient_id}: {e}")
