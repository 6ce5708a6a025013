"""
Unit Tests for QueryService
Calling queue ordering, filters, counters and on-leave detection.
"""
from datetime import date

import pytest

from estate_crm.models.lead import LeadStatus
from estate_crm.schemas.lead import EmployeeSelector, LeadFilter, SortOrder
from estate_crm.services.employee_service import EmployeeService
from estate_crm.services.lead_service import LeadService
from estate_crm.services.query_service import QueryService, queue_priority


@pytest.fixture
def queries(store):
    return QueryService(store)


@pytest.fixture
def leads(store):
    return LeadService(store)


@pytest.fixture
def employees(store):
    return EmployeeService(store)


@pytest.fixture
def caller(employees, employee_data):
    return employees.create(employee_data())


def ingest(leads, *names):
    rows = [{"name": name, "phone": str(idx), "location": f"City {idx}"} for idx, name in enumerate(names)]
    return leads.bulk_ingest(rows).lead_ids


class TestQueue:
    """Tests for the per-employee calling queue."""

    def test_priority_values(self):
        assert queue_priority(LeadStatus.NEW) == 3
        assert queue_priority(LeadStatus.CALL_BACK) == 2
        assert queue_priority(LeadStatus.INTERESTED) == 1

    def test_queue_orders_new_then_call_back_then_rest(self, queries, leads, caller):
        """Test New > Call Back > others, ties in stable order."""
        ids = ingest(leads, "a", "b", "c", "d")
        leads.assign(ids, caller.id)
        leads.update_status(ids[0], LeadStatus.CONNECTED)
        leads.update_status(ids[1], LeadStatus.CALL_BACK)
        leads.update_status(ids[3], LeadStatus.NOT_INTERESTED)

        queue = [lead.id for lead in queries.queue_for(caller.id)]

        assert queue == [ids[2], ids[1], ids[0], ids[3]]

    def test_queue_only_own_leads(self, queries, leads, employees, caller, employee_data):
        other = employees.create(employee_data(name="Jane"))
        ids = ingest(leads, "a", "b")
        leads.assign([ids[0]], caller.id)
        leads.assign([ids[1]], other.id)

        assert [lead.id for lead in queries.queue_for(caller.id)] == [ids[0]]

    def test_queue_closed_while_on_leave(self, queries, leads, employees, caller):
        """Test an employee on leave sees an empty queue but keeps the leads."""
        ids = ingest(leads, "a")
        leads.assign(ids, caller.id)
        employees.toggle_status(caller.id)

        assert queries.queue_for(caller.id) == []
        assert len(queries.leads_for(caller.id)) == 1

    def test_queue_unknown_employee(self, queries):
        assert queries.queue_for("EMP404") == []


class TestFilters:
    """Tests for filter_leads."""

    def test_unassigned_and_specific_employee(self, queries, leads, caller):
        ids = ingest(leads, "a", "b")
        leads.assign([ids[0]], caller.id)

        unassigned = queries.filter_leads(LeadFilter(employee=EmployeeSelector.UNASSIGNED.value))
        mine = queries.filter_leads(LeadFilter(employee=caller.id))

        assert [lead.id for lead in unassigned] == [ids[1]]
        assert queries.unassigned() == unassigned
        assert [lead.id for lead in mine] == [ids[0]]

    def test_status_and_search(self, queries, leads):
        ids = ingest(leads, "Alice", "Bob")
        leads.update_status(ids[1], LeadStatus.INTERESTED)

        assert [lead.id for lead in queries.filter_leads(LeadFilter(status=LeadStatus.INTERESTED))] == [ids[1]]
        assert [lead.id for lead in queries.filter_leads(LeadFilter(search="ali"))] == [ids[0]]
        assert [lead.id for lead in queries.filter_leads(LeadFilter(search="city 1"))] == [ids[1]]

    def test_updated_on_date(self, queries, leads, store):
        ingest(leads, "a")
        today = store.leads.list()[0].updated_at.date()

        assert len(queries.filter_leads(LeadFilter(updated_on=today))) == 1
        assert queries.filter_leads(LeadFilter(updated_on=date(1999, 1, 1))) == []

    def test_sort_order(self, queries, leads):
        first = ingest(leads, "old")
        second = ingest(leads, "new")

        newest = queries.filter_leads(LeadFilter(sort=SortOrder.NEWEST))
        oldest = queries.filter_leads(LeadFilter(sort=SortOrder.OLDEST))

        assert [lead.id for lead in newest] == second + first
        assert [lead.id for lead in oldest] == first + second

    def test_paginate_leads(self, queries, leads):
        ingest(leads, *[f"lead {idx}" for idx in range(5)])

        page = queries.paginate_leads(page=2, limit=2)

        assert page["total"] == 5
        assert len(page["items"]) == 2
        assert page["pages"] == 3


class TestCounts:
    """Tests for status aggregates and dashboards."""

    def test_admin_stats(self, queries, leads, caller):
        ids = ingest(leads, "a", "b", "c")
        leads.update_status(ids[0], LeadStatus.CONNECTED)
        leads.update_status(ids[1], LeadStatus.INVALID)
        leads.assign([ids[0]], caller.id)

        overall = queries.admin_stats()
        scoped = queries.admin_stats(LeadFilter(employee=caller.id))

        assert overall.total == 3
        assert overall.connected == 1
        assert overall.invalid == 1
        assert overall.new == 1
        assert scoped.total == 1 and scoped.connected == 1

    def test_employee_stats_pending(self, queries, leads, caller):
        """Test pending counts New and Call Back together."""
        ids = ingest(leads, "a", "b", "c", "d")
        leads.assign(ids, caller.id)
        leads.update_status(ids[1], LeadStatus.CALL_BACK)
        leads.update_status(ids[2], LeadStatus.INTERESTED)
        leads.update_status(ids[3], LeadStatus.NOT_INTERESTED)

        stats = queries.employee_stats(caller.id)

        assert stats.total == 4
        assert stats.pending == 2
        assert stats.interested == 1
        assert stats.not_interested == 1
        assert stats.connected == 0

    def test_recent_feedback_newest_first(self, queries, leads, caller):
        ids = ingest(leads, "a", "b")
        leads.assign(ids, caller.id)
        leads.add_feedback(ids[0], "older")
        leads.add_feedback(ids[1], "newer")

        recent = queries.recent_feedback(caller.id, limit=1)

        assert len(recent) == 1
        assert recent[0].text == "newer"
        assert recent[0].lead_name == "b"

    def test_recent_feedback_default_limit_from_config(self, queries, leads, caller, store):
        ids = ingest(leads, "a", "b")
        leads.assign(ids, caller.id)
        for lead_id in ids:
            for n in range(3):
                leads.add_feedback(lead_id, f"note {n}")

        assert len(queries.recent_feedback(caller.id)) == store.config.RECENT_FEEDBACK_LIMIT == 5

        store.config.RECENT_FEEDBACK_LIMIT = 2
        assert len(queries.recent_feedback(caller.id)) == 2


class TestOnLeave:
    """Tests for on-leave assignment detection."""

    def test_detects_leads_of_employee_on_leave(self, queries, leads, employees, caller):
        ids = ingest(leads, "a", "b")
        leads.assign([ids[0]], caller.id)

        assert queries.on_leave_assignments() == []

        employees.toggle_status(caller.id)

        assert [lead.id for lead in queries.on_leave_assignments()] == [ids[0]]

    def test_activity_feed(self, queries, leads):
        ingest(leads, "a")
        assert queries.activity(limit=5)[0].entity_type == "lead"

    def test_activity_log_appends_in_place(self, queries, leads, store):
        ingest(leads, "a")
        items = store.activity._items
        earlier = queries.activity()

        ingest(leads, "b")

        assert store.activity._items is items
        assert len(earlier) == 1
        assert len(queries.activity()) == 2
