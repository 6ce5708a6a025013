"""
Entity store - the authoritative collections of employees and leads.
Passed explicitly to every service together with its clock and id policy.
"""
from datetime import timedelta
from typing import Optional

from estate_crm.config import Settings, settings as default_settings
from estate_crm.core.clock import Clock, IdGenerator, system_clock
from estate_crm.models.employee import Designation, EmployeeStatus
from estate_crm.models.lead import Feedback, Lead, LeadStatus
from estate_crm.repositories.activity_repo import ActivityLogRepository
from estate_crm.repositories.employee_repo import EmployeeRepository
from estate_crm.repositories.lead_repo import LeadRepository


class EntityStore:
    """In-memory store shared by the lifecycle and query services."""

    def __init__(
        self,
        clock: Clock = system_clock,
        id_generator: Optional[IdGenerator] = None,
        config: Optional[Settings] = None
    ):
        config = config or default_settings
        self.config = config
        self.clock = clock
        self.ids = id_generator or IdGenerator(
            employee_prefix=config.EMPLOYEE_ID_PREFIX,
            employee_width=config.EMPLOYEE_ID_WIDTH,
            lead_prefix=config.LEAD_ID_PREFIX
        )
        self.employees = EmployeeRepository(clock)
        self.leads = LeadRepository(clock)
        self.activity = ActivityLogRepository(clock)

    def now(self):
        return self.clock()

    def seed_demo(self) -> None:
        """Load the demo caller and two demo leads."""
        now = self.clock()

        employee = self.employees.create({
            "id": "EMP001",
            "name": "John Doe",
            "phone": "555-0101",
            "email": "john@crm.com",
            "address": "123 Main St",
            "designation": Designation.CALLER,
            "password": "password",
            "status": EmployeeStatus.WORKING,
            "created_at": now
        })
        self.ids.reserve_employee_id(employee.id)

        self.leads.add_many([
            Lead(
                id="L001",
                name="Alice Smith",
                phone="555-1111",
                location="New York",
                status=LeadStatus.NEW,
                assigned_to=employee.id,
                created_at=now,
                updated_at=now
            ),
            Lead(
                id="L002",
                name="Bob Jones",
                phone="555-2222",
                location="California",
                status=LeadStatus.INTERESTED,
                feedbacks=[Feedback(id="f1", text="Liked the property view", timestamp=now)],
                created_at=now - timedelta(days=1),
                updated_at=now
            ),
        ])
