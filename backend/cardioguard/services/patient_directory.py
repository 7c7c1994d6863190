# cardioguard/services/patient_directory.py
import json
import logging
from typing import Dict, Iterable, Optional

import redis
from pydantic import ValidationError

from cardioguard.models.triage_models import PatientContext

logger = logging.getLogger(__name__)


class PatientDirectory:
    """Patient context by identifier, registered once and read on every chat message."""

    def get(self, patient_id: str) -> Optional[PatientContext]:
        raise NotImplementedError

    def put(self, patient: PatientContext, expire_sec: Optional[int] = None) -> None:
        raise NotImplementedError


class InMemoryPatientDirectory(PatientDirectory):
    def __init__(self, patients: Iterable[PatientContext] = ()):
        self._patients: Dict[str, PatientContext] = {p.id: p for p in patients}

    def put(self, patient: PatientContext, expire_sec: Optional[int] = None) -> None:
        # expiry only applies to shared stores
        self._patients[patient.id] = patient

    def get(self, patient_id: str) -> Optional[PatientContext]:
        return self._patients.get(patient_id)


class RedisPatientDirectory(PatientDirectory):
    """Patients stored as JSON documents under ``patient:{id}``."""

    def __init__(self, client: redis.Redis):
        self.client = client

    def get(self, patient_id: str) -> Optional[PatientContext]:
        raw = self.client.get(f"patient:{patient_id}")
        if raw is None:
            return None
        try:
            return PatientContext(**json.loads(raw))
        except (TypeError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"❌ Invalid patient record for {patient_id}: {e}")
            return None

    def put(self, patient: PatientContext, expire_sec: Optional[int] = None) -> None:
        self.client.set(f"patient:{patient.id}", patient.model_dump_json(), ex=expire_sec)
