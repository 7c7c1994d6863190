# cardioguard/main.py
from typing import Optional

from fastapi import FastAPI

from cardioguard.endpoints import chat, chat_ws, checkin, patients
from cardioguard.services.triage_service import TriageService, build_triage_service
from cardioguard.validate_keywords import collect_table_errors


def create_app(service: Optional[TriageService] = None) -> FastAPI:
    app = FastAPI(title="CardioGuard Triage API", version="1.0.0")
    app.state.triage_service = service or build_triage_service()

    @app.on_event("startup")
    async def startup_event():
        # Keyword tables are code, but a bad edit should be loud
        errors = collect_table_errors()
        if errors:
            for err in errors:
                print(f"⚠️ Keyword table problem: {err}")
        else:
            print("✅ Keyword tables validated")

    # Include HTTP routers
    app.include_router(checkin.router)
    app.include_router(chat.router)
    app.include_router(patients.router)

    # Mount WebSocket endpoints
    app.include_router(chat_ws.router)

    @app.get("/")
    def root():
        return {"message": "API is running"}

    return app


app = create_app()
