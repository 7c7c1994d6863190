# cardioguard/services/conversation_store.py
"""
Per-patient conversation memory.

The memory is advisory: the responder writes to it after every reply but no
decision reads it back. Writers for the same patient are serialized so the
five most recent intents stay in arrival order.
"""
import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Deque, Dict, Optional

import redis

from cardioguard.models.triage_models import ConversationContext, Intent

logger = logging.getLogger(__name__)

RECENT_INTENT_LIMIT = 5


class ConversationStore:
    """Interface shared by the in-memory and Redis-backed stores."""

    def get(self, patient_id: str) -> Optional[ConversationContext]:
        raise NotImplementedError

    def get_or_create(self, patient_id: str) -> ConversationContext:
        raise NotImplementedError

    def record(self, patient_id: str, intent: Intent, escalated: bool) -> ConversationContext:
        raise NotImplementedError


class _Entry:
    __slots__ = ("intents", "last_message_time", "escalation_count")

    def __init__(self):
        self.intents: Deque[Intent] = deque(maxlen=RECENT_INTENT_LIMIT)
        self.last_message_time = datetime.now(timezone.utc)
        self.escalation_count = 0

    def snapshot(self) -> ConversationContext:
        return ConversationContext(
            recent_intents=list(self.intents),
            last_message_time=self.last_message_time,
            escalation_count=self.escalation_count,
        )


class InMemoryConversationStore(ConversationStore):
    def __init__(self):
        self._entries: Dict[str, _Entry] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, patient_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(patient_id)
            if lock is None:
                lock = self._locks[patient_id] = threading.Lock()
            return lock

    def get(self, patient_id: str) -> Optional[ConversationContext]:
        with self._lock_for(patient_id):
            entry = self._entries.get(patient_id)
            return entry.snapshot() if entry else None

    def get_or_create(self, patient_id: str) -> ConversationContext:
        with self._lock_for(patient_id):
            entry = self._entries.setdefault(patient_id, _Entry())
            return entry.snapshot()

    def record(self, patient_id: str, intent: Intent, escalated: bool) -> ConversationContext:
        with self._lock_for(patient_id):
            entry = self._entries.setdefault(patient_id, _Entry())
            entry.intents.append(intent)
            if escalated:
                entry.escalation_count += 1
            entry.last_message_time = datetime.now(timezone.utc)
            return entry.snapshot()


class RedisConversationStore(ConversationStore):
    """
    Stores each patient's memory under two keys:

    - ``conversation:{id}:intents``: list of intent values, trimmed to the last 5
    - ``conversation:{id}``: hash with ``escalation_count`` and ``last_message_time``

    Writes go through a MULTI pipeline so concurrent replies for one patient
    cannot interleave the push and the trim.
    """

    def __init__(self, client: redis.Redis, ttl_sec: Optional[int] = None):
        self.client = client
        self.ttl_sec = ttl_sec

    @staticmethod
    def _intents_key(patient_id: str) -> str:
        return f"conversation:{patient_id}:intents"

    @staticmethod
    def _meta_key(patient_id: str) -> str:
        return f"conversation:{patient_id}"

    def get(self, patient_id: str) -> Optional[ConversationContext]:
        meta = self.client.hgetall(self._meta_key(patient_id))
        if not meta:
            return None
        intents = self.client.lrange(self._intents_key(patient_id), 0, -1)
        recent = []
        for value in intents:
            try:
                recent.append(Intent(value))
            except ValueError:
                logger.warning(f"⚠️ Skipping unknown intent '{value}' in memory for {patient_id}")
        return ConversationContext(
            recent_intents=recent,
            last_message_time=datetime.fromisoformat(meta["last_message_time"]),
            escalation_count=int(meta.get("escalation_count", 0)),
        )

    def get_or_create(self, patient_id: str) -> ConversationContext:
        meta_key = self._meta_key(patient_id)
        now = datetime.now(timezone.utc).isoformat()
        # HSETNX leaves an existing context untouched
        self.client.hsetnx(meta_key, "last_message_time", now)
        self.client.hsetnx(meta_key, "escalation_count", 0)
        return self.get(patient_id)

    def record(self, patient_id: str, intent: Intent, escalated: bool) -> ConversationContext:
        intents_key = self._intents_key(patient_id)
        meta_key = self._meta_key(patient_id)

        pipe = self.client.pipeline(transaction=True)
        pipe.rpush(intents_key, intent.value)
        pipe.ltrim(intents_key, -RECENT_INTENT_LIMIT, -1)
        pipe.hincrby(meta_key, "escalation_count", 1 if escalated else 0)
        pipe.hset(meta_key, "last_message_time", datetime.now(timezone.utc).isoformat())
        if self.ttl_sec:
            pipe.expire(intents_key, self.ttl_sec)
            pipe.expire(meta_key, self.ttl_sec)
        pipe.execute()

        return self.get(patient_id)
