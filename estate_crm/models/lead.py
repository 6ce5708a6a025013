"""
Lead model - a prospect worked through the calling lifecycle.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlmodel import SQLModel, Field

# Hard cap on call-history notes per lead
MAX_FEEDBACKS = 3


class LeadStatus(str, Enum):
    NEW = "New"
    CONNECTED = "Connected"
    INTERESTED = "Interested"
    NOT_INTERESTED = "Not Interested"
    CALL_BACK = "Call Back"
    NOT_CONNECTED = "Not Connected"
    INVALID = "Invalid"


class Feedback(SQLModel):
    """A timestamped note on a lead's call history."""
    id: str
    text: str
    timestamp: datetime


class Lead(SQLModel):
    """
    Lead entity.
    `assigned_to` is a weak reference to an employee id; `feedbacks` is kept
    in insertion order and never holds more than MAX_FEEDBACKS entries.
    """
    id: str

    # Basic info
    name: str
    phone: str
    location: str

    # Lifecycle
    status: LeadStatus = Field(default=LeadStatus.NEW)
    assigned_to: Optional[str] = None
    feedbacks: List[Feedback] = Field(default_factory=list)

    # Timestamps
    created_at: datetime
    updated_at: datetime
    last_called_at: Optional[datetime] = None

    @property
    def feedback_full(self) -> bool:
        return len(self.feedbacks) >= MAX_FEEDBACKS

    def find_feedback(self, feedback_id: str) -> Optional[Feedback]:
        return next((fb for fb in self.feedbacks if fb.id == feedback_id), None)
