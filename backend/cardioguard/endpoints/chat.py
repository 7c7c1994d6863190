# cardioguard/endpoints/chat.py
from fastapi import APIRouter, Depends, HTTPException

from cardioguard.dependencies import get_triage_service
from cardioguard.models.triage_models import ChatRequest
from cardioguard.services.triage_service import TriageService

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.post("/{patient_id}")
def chat(patient_id: str, payload: ChatRequest, service: TriageService = Depends(get_triage_service)):
    if not payload.message.strip():
        raise HTTPException(status_code=400, detail="No message provided")
    return service.process_message(patient_id, payload.message, payload.patient)
