"""
Activity log model - audit trail for lifecycle operations.
Feeds the admin activity feed.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import SQLModel, Field


class ActivityLog(SQLModel):
    """
    Activity log entry for every successful mutation.
    """
    id: int
    actor_id: Optional[str] = None

    # Action details
    action: str  # lead_assigned, feedback_added, employee_deleted, etc.
    entity_type: str  # lead, employee, session
    entity_id: Optional[str] = None

    # Human-readable description
    description: Optional[str] = None

    # Additional metadata
    meta_data: Dict[str, Any] = Field(default_factory=dict)
    # Example: {"old_status": "New", "new_status": "Connected"}

    created_at: datetime


# Action constants for consistency
class Actions:
    # Lead actions
    LEADS_IMPORTED = "leads_imported"
    LEADS_ASSIGNED = "leads_assigned"
    LEAD_STATUS_CHANGED = "lead_status_changed"
    LEAD_CALLED = "lead_called"
    LEAD_DELETED = "lead_deleted"

    # Feedback actions
    FEEDBACK_ADDED = "feedback_added"
    FEEDBACK_UPDATED = "feedback_updated"
    FEEDBACK_DELETED = "feedback_deleted"

    # Employee actions
    EMPLOYEE_CREATED = "employee_created"
    EMPLOYEE_UPDATED = "employee_updated"
    EMPLOYEE_DELETED = "employee_deleted"
    EMPLOYEE_STATUS_TOGGLED = "employee_status_toggled"

    # Session actions
    USER_LOGGED_IN = "user_logged_in"
    USER_LOGGED_OUT = "user_logged_out"
