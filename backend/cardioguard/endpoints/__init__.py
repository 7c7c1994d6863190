# cardioguard/endpoints/__init__.py

# Endpoint modules; each exposes its own ``router``
from . import chat, chat_ws, checkin, patients

__all__ = ["checkin", "chat", "chat_ws", "patients"]
