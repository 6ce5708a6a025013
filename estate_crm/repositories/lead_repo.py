"""
Lead repository with assignment and feedback operations.
"""
from typing import Iterable, List, Optional

from estate_crm.core.clock import Clock
from estate_crm.models.lead import Feedback, Lead, LeadStatus
from estate_crm.repositories.base import BaseRepository


class LeadRepository(BaseRepository[Lead]):
    """Repository for Lead operations."""

    def __init__(self, clock: Clock):
        super().__init__(Lead, clock)

    def bulk_create(self, leads: List[Lead]) -> List[Lead]:
        """Insert a batch of new leads ahead of the existing ones (newest first)."""
        return self.add_many(leads, prepend=True)

    def assigned_to(self, employee_id: str) -> List[Lead]:
        """Leads currently assigned to an employee, in collection order."""
        return self.list({"assigned_to": employee_id})

    def assign(self, lead_ids: Iterable[str], employee_id: Optional[str]) -> List[Lead]:
        """Set the assignee on every known lead id."""
        return self.update_many(lead_ids, {"assigned_to": employee_id})

    def unassign_employee(self, employee_id: str) -> List[Lead]:
        """Clear every lead that points at the employee."""
        lead_ids = [lead.id for lead in self.assigned_to(employee_id)]
        return self.update_many(lead_ids, {"assigned_to": None})

    def update_status(self, lead_id: str, status: LeadStatus) -> Optional[Lead]:
        return self.update(lead_id, {"status": status})

    def record_call(self, lead_id: str) -> Optional[Lead]:
        return self.update(lead_id, {"last_called_at": self.clock()})

    def set_feedbacks(self, lead_id: str, feedbacks: List[Feedback]) -> Optional[Lead]:
        """Replace the feedback list of a lead with a new list."""
        return self.update(lead_id, {"feedbacks": list(feedbacks)})
