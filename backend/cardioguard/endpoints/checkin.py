# cardioguard/endpoints/checkin.py
from fastapi import APIRouter, Depends

from cardioguard.dependencies import get_triage_service
from cardioguard.models.triage_models import CheckInRequest
from cardioguard.services.triage_service import TriageService

router = APIRouter(prefix="/checkin", tags=["Check-in"])


@router.post("/classify")
def classify_checkin(payload: CheckInRequest, service: TriageService = Depends(get_triage_service)):
    return service.process_checkin(payload.submission, payload.current_streak)
