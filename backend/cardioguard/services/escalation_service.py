# cardioguard/services/escalation_service.py
import json
import logging
from datetime import datetime, timezone
from typing import Optional

import redis

from cardioguard.models.triage_models import PatientContext, SmartResponse

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ALERT_CHANNEL = "care-team:alerts"
MESSAGE_PREVIEW_CHARS = 100


def _preview(message: str) -> str:
    if len(message) > MESSAGE_PREVIEW_CHARS:
        return message[:MESSAGE_PREVIEW_CHARS] + "..."
    return message


def escalation_notification(patient: PatientContext, message: str, response: SmartResponse) -> str:
    """
    One-line alert for the care team, e.g.
    ``[HIGH ALERT] Jane Doe (P001): SYMPTOM REPORT - "I feel dizzy..."``
    """
    severity_label = response.severity.value.upper()
    # only the first underscore is replaced: "medication question" but "progress inquiry"
    intent_label = response.intent.value.replace("_", " ", 1).upper()
    return f'[{severity_label} ALERT] {patient.name} ({patient.id}): {intent_label} - "{_preview(message)}"'


class EscalationNotifier:
    """Logs escalations and, when a Redis client is given, publishes them for dashboards."""

    def __init__(self, client: Optional[redis.Redis] = None, channel: str = ALERT_CHANNEL):
        self.client = client
        self.channel = channel

    def notify(
        self,
        patient_id: str,
        message: str,
        response: SmartResponse,
        patient: Optional[PatientContext] = None,
    ) -> Optional[dict]:
        if not response.should_escalate:
            return None

        alert = {
            "patient_id": patient_id,
            "severity": response.severity.value,
            "intent": response.intent.value,
            "message": _preview(message),
            "raised_at": datetime.now(timezone.utc).isoformat(),
        }
        if patient is not None:
            logger.warning(f"🚨 {escalation_notification(patient, message, response)}")
        else:
            logger.warning(
                f"🚨 [{alert['severity'].upper()} ALERT] unresolved patient ({patient_id}): "
                f"{alert['intent']} - \"{alert['message']}\""
            )

        if self.client is not None:
            try:
                self.client.publish(self.channel, json.dumps(alert))
            except redis.RedisError as e:
                logger.error(f"❌ Failed to publish escalation for {patient_id}: {e}")
        return alert
