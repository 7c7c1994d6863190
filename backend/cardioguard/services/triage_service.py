# cardioguard/services/triage_service.py
import os
import logging
from datetime import datetime, timezone
from typing import Optional

from cardioguard.engine.care_plan import generate_health_tip, generate_recommendations
from cardioguard.engine.checkin_classifier import build_checkin_result, classify
from cardioguard.engine.responder import TriageResponder
from cardioguard.engine.risk import calculate_risk_score, risk_level_for_score
from cardioguard.models.triage_models import CheckInSubmission, PatientContext, PatientRegistration, RiskProfile
from cardioguard.services.conversation_store import (
    ConversationStore,
    InMemoryConversationStore,
    RedisConversationStore,
)
from cardioguard.services.escalation_service import EscalationNotifier
from cardioguard.services.patient_directory import (
    InMemoryPatientDirectory,
    PatientDirectory,
    RedisPatientDirectory,
)

# ------------------------------- Logging -------------------------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# ------------------------------- Config -------------------------------
# "memory" keeps conversation memory in-process, "redis" shares it between workers
CONVERSATION_STORE = os.getenv("CONVERSATION_STORE", "memory")
CONVERSATION_TTL_SEC = int(os.getenv("CONVERSATION_TTL_SEC", "86400"))


class TriageService:
    def __init__(
        self,
        responder: TriageResponder,
        directory: PatientDirectory,
        notifier: EscalationNotifier,
    ):
        self.responder = responder
        self.directory = directory
        self.notifier = notifier

    # ------------------------------- Check-ins -------------------------------
    def process_checkin(self, submission: CheckInSubmission, current_streak: int = 0) -> dict:
        logger.info("=== Incoming Check-in ===")
        logger.info(f"patient_id: {submission.patient_id}")
        logger.info(f"symptoms: {submission.symptoms}")
        logger.info(f"mood: {submission.mood}, energy_level: {submission.energy_level}")
        logger.info("=========================")

        outcome = classify(submission)
        result = build_checkin_result(outcome, current_streak)

        logger.info(
            f"✅ Check-in classified {result.classification.value} "
            f"(red={outcome.red_flags}, yellow={outcome.yellow_flags}, streak={result.streak})"
        )
        return {
            **result.model_dump(mode="json"),
            "red_flags": outcome.red_flags,
            "yellow_flags": outcome.yellow_flags,
            "received_at": datetime.now(timezone.utc).isoformat(),
        }

    # ------------------------------- Chat -------------------------------
    def process_message(self, patient_id: str, message: str, patient: Optional[PatientContext] = None) -> dict:
        """
        Reply to a chat message. ``patient`` overrides the directory lookup;
        an unknown patient gets the fallback reply, never an error.
        """
        if patient is None:
            patient = self._lookup(patient_id)
        response = self.responder.respond(patient, message)

        alert = self.notifier.notify(patient_id, message, response, patient)
        return {
            **response.model_dump(mode="json"),
            "received_at": datetime.now(timezone.utc).isoformat(),
            "meta": {"patient_id": patient_id, "escalation": alert},
        }

    # ------------------------------- Patients -------------------------------
    def assess_risk(self, profile: RiskProfile) -> dict:
        score = calculate_risk_score(profile)
        return {"risk_score": score, "risk_level": risk_level_for_score(score).value}

    def register_patient(self, patient_id: str, registration: PatientRegistration) -> dict:
        """
        Score the patient, store the context the chat responder reads and
        return it with the care team's follow-up recommendations.
        """
        score = calculate_risk_score(registration)
        patient = PatientContext(
            id=patient_id,
            name=registration.name,
            diagnosis=registration.diagnosis,
            risk_score=score,
            risk_level=risk_level_for_score(score),
            recovery_streak=registration.recovery_streak,
            next_appointment=registration.next_appointment,
        )
        self.directory.put(patient)
        logger.info(f"🩺 Registered {patient_id}: risk_score={score} risk_level={patient.risk_level.value}")

        recommendations = generate_recommendations(patient, registration, registration.last_check_in)
        return {
            "patient": patient.model_dump(mode="json"),
            "recommendations": [r.model_dump(mode="json") for r in recommendations],
            "health_tip": generate_health_tip(registration, self.responder.rng),
        }

    def _lookup(self, patient_id: str) -> Optional[PatientContext]:
        try:
            return self.directory.get(patient_id)
        except Exception as e:
            logger.error(f"❌ Patient lookup failed for {patient_id}: {e}")
            return None


def build_triage_service() -> TriageService:
    """Wire the service from environment settings."""
    store: ConversationStore
    if CONVERSATION_STORE == "redis":
        from cardioguard.services.redis_client import get_redis

        client = get_redis()
        store = RedisConversationStore(client, ttl_sec=CONVERSATION_TTL_SEC)
        directory: PatientDirectory = RedisPatientDirectory(client)
        notifier = EscalationNotifier(client)
        logger.info("🔌 Using Redis for conversation memory and patient lookup")
    else:
        store = InMemoryConversationStore()
        directory = InMemoryPatientDirectory()
        notifier = EscalationNotifier()
        logger.info("🧠 Using in-memory conversation memory")

    return TriageService(TriageResponder(store=store), directory, notifier)
