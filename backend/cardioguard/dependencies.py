from fastapi.requests import HTTPConnection

from cardioguard.services.triage_service import TriageService


# --- Triage service dependency (works for HTTP and WebSocket routes) ---
def get_triage_service(conn: HTTPConnection) -> TriageService:
    return conn.app.state.triage_service
