# tests/test_patient_directory.py
from unittest.mock import MagicMock

from cardioguard.models.triage_models import RiskLevel
from cardioguard.services.patient_directory import InMemoryPatientDirectory, RedisPatientDirectory


def test_in_memory_lookup(patient):
    directory = InMemoryPatientDirectory()
    assert directory.get(patient.id) is None

    directory.put(patient)
    assert directory.get(patient.id) == patient


def test_redis_round_trips_patient_json(patient):
    client = MagicMock()
    directory = RedisPatientDirectory(client)

    directory.put(patient, expire_sec=60)
    key, raw = client.set.call_args.args
    assert key == "patient:P001"
    assert client.set.call_args.kwargs == {"ex": 60}

    client.get.return_value = raw
    loaded = directory.get("P001")
    assert loaded == patient
    client.get.assert_called_with("patient:P001")


def test_redis_missing_patient():
    client = MagicMock()
    client.get.return_value = None
    assert RedisPatientDirectory(client).get("P404") is None


def test_redis_bad_records_are_unresolvable():
    client = MagicMock()
    directory = RedisPatientDirectory(client)

    client.get.return_value = "{not json"
    assert directory.get("P001") is None

    client.get.return_value = '{"id": "P001", "risk_level": "unheard-of"}'
    assert directory.get("P001") is None


def test_redis_record_with_defaults():
    client = MagicMock()
    client.get.return_value = '{"id": "P9", "name": "Al Roe", "diagnosis": "Arrhythmia"}'

    loaded = RedisPatientDirectory(client).get("P9")
    assert loaded.risk_level == RiskLevel.LOW
    assert loaded.recovery_streak == 0
