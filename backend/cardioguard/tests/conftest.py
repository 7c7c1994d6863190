# tests/conftest.py
import random
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from cardioguard.engine.responder import TriageResponder
from cardioguard.main import create_app
from cardioguard.models.triage_models import CheckInSubmission, PatientContext, RiskLevel
from cardioguard.services.conversation_store import InMemoryConversationStore
from cardioguard.services.escalation_service import EscalationNotifier
from cardioguard.services.patient_directory import InMemoryPatientDirectory
from cardioguard.services.triage_service import TriageService


@pytest.fixture
def patient():
    return PatientContext(
        id="P001",
        name="Jane Doe",
        diagnosis="Acute MI",
        risk_score=20,
        risk_level=RiskLevel.LOW,
        recovery_streak=4,
        next_appointment=datetime(2026, 11, 3, 9, 30),
    )


@pytest.fixture
def high_risk_patient():
    return PatientContext(
        id="P002",
        name="Robert Smith",
        diagnosis="Heart Failure",
        risk_score=82,
        risk_level=RiskLevel.CRITICAL,
        recovery_streak=0,
    )


@pytest.fixture
def make_submission():
    def _make(**overrides):
        fields = {"patient_id": "P001", "symptoms": [], "responses": [], "mood": "okay", "energy_level": 7}
        fields.update(overrides)
        return CheckInSubmission(**fields)
    return _make


@pytest.fixture
def store():
    return InMemoryConversationStore()


@pytest.fixture
def responder(store):
    return TriageResponder(store=store, rng=random.Random(7))


@pytest.fixture
def directory(patient, high_risk_patient):
    return InMemoryPatientDirectory([patient, high_risk_patient])


@pytest.fixture
def service(responder, directory):
    return TriageService(responder, directory, EscalationNotifier())


@pytest.fixture
def client(service):
    """App wired to the test service; startup hooks are not run."""
    return TestClient(create_app(service))
