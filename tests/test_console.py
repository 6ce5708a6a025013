"""
Integration Tests for CRMConsole
End-to-end flows through the facade the presentation layer uses.
"""
import pytest

from estate_crm.config import Settings
from estate_crm.console import CRMConsole
from estate_crm.core.exceptions import StoreNotInitializedError
from estate_crm.main import create_console
from estate_crm.models.activity import Actions
from estate_crm.models.lead import LeadStatus
from estate_crm.models.session import Role
from estate_crm.repositories.store import EntityStore


class TestInitialization:
    """Tests for console startup."""

    def test_operations_require_init(self, store):
        """Test using the console before init() is a programmer error."""
        console = CRMConsole(store=store)

        with pytest.raises(StoreNotInitializedError):
            console.add_leads([])

    def test_seed_demo_data(self, clock, config):
        console = CRMConsole(store=EntityStore(clock=clock, config=config), config=config).init(seed_demo=True)

        assert [emp.id for emp in console.list_employees()] == ["EMP001"]
        assert [lead.id for lead in console.list_leads()] == ["L001", "L002"]
        assert console.login("EMP001", "password").authenticated

    def test_seeded_ids_continue(self, clock, config, employee_data):
        console = CRMConsole(store=EntityStore(clock=clock, config=config), config=config).init(seed_demo=True)

        assert console.add_employee(employee_data(name="Jane")).id == "EMP002"

    def test_create_console_restores_session(self, db_engine, clock):
        config = Settings(SEED_DEMO_DATA=False, LOG_LEVEL="WARNING")
        first = create_console(config=config, clock=clock, db_engine=db_engine)
        first.login("admin", "12345")

        second = create_console(config=config, clock=clock, db_engine=db_engine)

        assert second.user is not None
        assert second.user.role == Role.ADMIN


class TestWorkflow:
    """Tests for an admin-to-caller working day."""

    def test_full_day(self, console, employee_data):
        assert console.login("admin", "12345", portal=Role.ADMIN)
        caller = console.add_employee(employee_data(password="pw"))
        ids = console.add_leads([
            {"name": "A", "phone": "1", "location": "X"},
            {"name": "B", "phone": "2", "location": "Y"},
        ]).lead_ids
        console.assign_leads(ids, caller.id)
        console.logout()

        assert console.login(caller.id, "pw", portal=Role.EMPLOYEE)
        queue = console.my_queue()
        assert [lead.id for lead in queue] == ids

        target = queue[0].id
        console.record_call(target)
        console.update_lead_status(target, LeadStatus.INTERESTED)
        assert console.add_feedback(target, "Wants a site visit").ok

        lead = console.get_lead(target)
        assert lead.status == LeadStatus.INTERESTED
        assert lead.last_called_at is not None
        assert len(lead.feedbacks) == 1

        # Interested lead drops behind the untouched New one
        assert [lead.id for lead in console.my_queue()] == [ids[1], ids[0]]

        actions = [entry.action for entry in console.queries.activity(limit=3)]
        assert actions[0] == Actions.FEEDBACK_ADDED
        assert console.queries.activity(limit=1)[0].actor_id == caller.id

    def test_admin_has_no_queue(self, console):
        console.login("admin", "12345")
        assert console.my_queue() == []

    def test_delete_employee_cascade_through_console(self, console, employee_data):
        caller = console.add_employee(employee_data())
        ids = console.add_leads([{"name": "A", "phone": "1", "location": "X"}]).lead_ids
        console.assign_leads(ids, caller.id)

        result = console.delete_employee(caller.id)

        assert result.affected == 1
        assert console.get_lead(ids[0]).assigned_to is None

    def test_csv_round(self, console):
        result = console.import_leads_csv("name,phone,location\nA,1,X\nB,2,Y\n")

        assert result.imported == 2
        assert console.leads.export_csv().count("\n") == 3
