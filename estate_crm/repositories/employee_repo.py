"""
Employee repository.
"""
from typing import List

from estate_crm.core.clock import Clock
from estate_crm.models.employee import Employee, EmployeeStatus
from estate_crm.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[Employee]):
    """Repository for Employee operations."""

    def __init__(self, clock: Clock):
        super().__init__(Employee, clock)

    def list_by_status(self, status: EmployeeStatus) -> List[Employee]:
        return self.list({"status": status})

    def on_leave_ids(self) -> set:
        """Ids of employees currently on leave."""
        return {emp.id for emp in self.list_by_status(EmployeeStatus.LEAVE)}
