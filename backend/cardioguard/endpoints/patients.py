# cardioguard/endpoints/patients.py
import logging

import redis
from fastapi import APIRouter, Depends, HTTPException

from cardioguard.dependencies import get_triage_service
from cardioguard.models.triage_models import PatientRegistration, RiskProfile
from cardioguard.services.triage_service import TriageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.post("/risk")
def assess_risk(profile: RiskProfile, service: TriageService = Depends(get_triage_service)):
    return service.assess_risk(profile)


@router.put("/{patient_id}")
def register_patient(
    patient_id: str,
    registration: PatientRegistration,
    service: TriageService = Depends(get_triage_service),
):
    try:
        return service.register_patient(patient_id, registration)
    except redis.RedisError as e:
        logger.error(f"❌ Could not store patient {patient_id}: {e}")
        raise HTTPException(status_code=503, detail="Patient directory unavailable")
