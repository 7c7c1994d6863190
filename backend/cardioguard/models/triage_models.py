# cardioguard/models/triage_models.py
from enum import Enum
from datetime import datetime, timezone
from typing import List, Optional, NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Classification(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class Intent(str, Enum):
    SYMPTOM_REPORT = "symptom_report"
    MEDICATION_QUESTION = "medication_question"
    APPOINTMENT_REQUEST = "appointment_request"
    EMOTIONAL_SUPPORT = "emotional_support"
    GENERAL_HEALTH = "general_health"
    EMERGENCY = "emergency"
    PROGRESS_INQUIRY = "progress_inquiry"
    LIFESTYLE_QUESTION = "lifestyle_question"
    GREETING = "greeting"
    GRATITUDE = "gratitude"
    UNKNOWN = "unknown"


_SEVERITY_RANK = {"low": 0, "medium": 1, "high": 2, "critical": 3}


class Severity(str, Enum):
    """Urgency tier of a chat message, ordered low < medium < high < critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self.value]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


class PatientContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    diagnosis: str
    risk_score: float = 0
    risk_level: RiskLevel = RiskLevel.LOW
    recovery_streak: int = 0
    next_appointment: Optional[datetime] = None

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0]


class CheckInAnswer(BaseModel):
    question: str
    answer: str


class CheckInSubmission(BaseModel):
    patient_id: str
    responses: List[CheckInAnswer] = Field(default_factory=list)
    symptoms: List[str] = Field(default_factory=list)
    mood: str = ""
    energy_level: int = Field(ge=1, le=10)


class CheckInOutcome(NamedTuple):
    classification: Classification
    red_flags: int
    yellow_flags: int


class CheckInResult(BaseModel):
    classification: Classification
    message: str
    requires_follow_up: bool
    streak: int
    template_id: str


class SmartResponse(BaseModel):
    content: str
    intent: Intent
    severity: Severity
    should_escalate: bool
    suggested_actions: Optional[List[str]] = None
    follow_up_question: Optional[str] = None


class ConversationContext(BaseModel):
    recent_intents: List[Intent] = Field(default_factory=list)
    last_message_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    escalation_count: int = 0


class VitalSigns(BaseModel):
    blood_pressure: str
    heart_rate: int
    weight: Optional[float] = None


class RiskProfile(BaseModel):
    age: int
    diagnosis: str = ""
    discharge_date: datetime
    risk_factors: List[str] = Field(default_factory=list)
    vital_signs: Optional[VitalSigns] = None


class PatientRegistration(RiskProfile):
    """Clinical profile plus the fields the chat responder reads."""

    name: str
    recovery_streak: int = Field(default=0, ge=0)
    next_appointment: Optional[datetime] = None
    last_check_in: Optional[datetime] = None


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class Recommendation(BaseModel):
    action: str
    rationale: str
    priority: Priority
    category: str


# ------------------------------- Request bodies -------------------------------
class CheckInRequest(BaseModel):
    submission: CheckInSubmission
    current_streak: int = Field(default=0, ge=0)


class ChatRequest(BaseModel):
    message: str
    patient: Optional[PatientContext] = None
