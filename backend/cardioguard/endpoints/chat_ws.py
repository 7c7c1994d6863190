# cardioguard/endpoints/chat_ws.py
import os
import json
import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from cardioguard.dependencies import get_triage_service
from cardioguard.models.triage_models import ChatRequest
from cardioguard.services.triage_service import TriageService

logger = logging.getLogger(__name__)

router = APIRouter()

FOLLOW_UP_DELAY_SECONDS = float(os.getenv("FOLLOW_UP_DELAY_SECONDS", "1.5"))


@router.websocket("/ws/chat/{patient_id}")
async def ws_chat(websocket: WebSocket, patient_id: str, service: TriageService = Depends(get_triage_service)):
    await websocket.accept()
    try:
        while True:
            text = await websocket.receive_text()
            try:
                payload = ChatRequest(**json.loads(text))
            except (json.JSONDecodeError, TypeError, ValidationError):
                await websocket.send_text(json.dumps({"response": "Invalid request format"}))
                continue

            # Lookups and memory writes may hit Redis, keep them off the event loop
            result = await run_in_threadpool(service.process_message, patient_id, payload.message, payload.patient)
            await websocket.send_text(json.dumps({"type": "reply", **result}))

            # The follow-up question arrives as a separate message shortly after the reply
            follow_up = result.get("follow_up_question")
            if follow_up:
                await asyncio.sleep(FOLLOW_UP_DELAY_SECONDS)
                await websocket.send_text(json.dumps({"type": "follow_up", "content": follow_up}))

    except WebSocketDisconnect:
        logger.info(f"⚠️ WebSocket disconnected for {patient_id}")
        return
