"""
Employee service - caller management and availability.
"""
import logging
from typing import List, Optional, Union

from estate_crm.core.exceptions import fail_not_found
from estate_crm.models.activity import Actions
from estate_crm.models.employee import Employee, EmployeeStatus
from estate_crm.repositories.store import EntityStore
from estate_crm.schemas.common import OperationResult
from estate_crm.schemas.employee import EmployeeCreate, EmployeePatch

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, store: EntityStore):
        self.store = store
        self.employee_repo = store.employees
        self.lead_repo = store.leads
        self.activity_repo = store.activity

    def create(self, employee_data: EmployeeCreate, actor_id: Optional[str] = None) -> Employee:
        """Create a new employee with the next id, status Working."""
        data = employee_data.model_dump()
        data["id"] = self.store.ids.next_employee_id()
        data["status"] = EmployeeStatus.WORKING
        data["created_at"] = self.store.now()

        employee = self.employee_repo.create(data)
        logger.info(f"Created employee {employee.id} ({employee.name})")

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.EMPLOYEE_CREATED,
            entity_type="employee",
            entity_id=employee.id,
            description=f"Employee '{employee.name}' created",
            meta_data={"designation": employee.designation.value}
        )
        return employee

    def get(self, employee_id: str) -> Optional[Employee]:
        return self.employee_repo.get(employee_id)

    def list(self) -> List[Employee]:
        return self.employee_repo.list()

    def update(
        self,
        employee_id: str,
        patch: Union[EmployeePatch, dict],
        actor_id: Optional[str] = None
    ) -> OperationResult:
        """
        Merge the fields set on `patch` into the employee.

        An unknown id leaves the store untouched and is reported as NOT_FOUND.
        A dict patch carrying `id` or `created_at` raises pydantic's
        ValidationError, since those fields can never change. So does an
        explicit None for any field.
        """
        if isinstance(patch, dict):
            patch = EmployeePatch(**patch)

        if not self.employee_repo.exists(employee_id):
            logger.warning(f"Update ignored, employee {employee_id} not found")
            return fail_not_found("Employee", employee_id)

        update_data = patch.model_dump(exclude_unset=True)
        self.employee_repo.update(employee_id, update_data)

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.EMPLOYEE_UPDATED,
            entity_type="employee",
            entity_id=employee_id,
            description=f"Employee {employee_id} updated",
            # Never echo the secret into the audit trail
            meta_data={"changes": sorted(update_data.keys())}
        )
        return OperationResult(affected=1, entity_id=employee_id)

    def delete(self, employee_id: str, actor_id: Optional[str] = None) -> OperationResult:
        """Delete an employee and unassign every lead that pointed at them."""
        employee = self.employee_repo.get(employee_id)
        if not employee:
            logger.warning(f"Delete ignored, employee {employee_id} not found")
            return fail_not_found("Employee", employee_id)

        self.employee_repo.delete(employee_id)
        released = self.lead_repo.unassign_employee(employee_id)
        logger.info(f"Deleted employee {employee_id}, unassigned {len(released)} leads")

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.EMPLOYEE_DELETED,
            entity_type="employee",
            entity_id=employee_id,
            description=f"Employee '{employee.name}' deleted",
            meta_data={"unassigned_leads": [lead.id for lead in released]}
        )
        return OperationResult(affected=len(released), entity_id=employee_id)

    def toggle_status(self, employee_id: str, actor_id: Optional[str] = None) -> OperationResult:
        """Flip Working <-> Leave. Assigned leads are left alone."""
        employee = self.employee_repo.get(employee_id)
        if not employee:
            return fail_not_found("Employee", employee_id)

        new_status = EmployeeStatus.LEAVE if employee.is_working else EmployeeStatus.WORKING
        self.employee_repo.update(employee_id, {"status": new_status})
        logger.info(f"Employee {employee_id} is now {new_status.value}")

        self.activity_repo.log(
            actor_id=actor_id or employee_id,
            action=Actions.EMPLOYEE_STATUS_TOGGLED,
            entity_type="employee",
            entity_id=employee_id,
            meta_data={"old_status": employee.status.value, "new_status": new_status.value}
        )
        return OperationResult(affected=1, entity_id=employee_id, message=new_status.value)
