"""
Query service - read-only projections over the entity store.
Nothing here mutates state or caches; every call recomputes from the store.
"""
from typing import Iterable, List, Optional

from estate_crm.core.pagination import paginate
from estate_crm.models.activity import ActivityLog
from estate_crm.models.employee import EmployeeStatus
from estate_crm.models.lead import Lead, LeadStatus
from estate_crm.repositories.store import EntityStore
from estate_crm.schemas.lead import (
    EmployeeSelector,
    EmployeeStats,
    LeadFilter,
    RecentFeedback,
    SortOrder,
    StatusCounts,
)

# Calling-queue priority: New > Call Back > everything else
QUEUE_PRIORITY = {
    LeadStatus.NEW: 3,
    LeadStatus.CALL_BACK: 2,
}

STATUS_COUNT_FIELDS = {
    LeadStatus.NEW: "new",
    LeadStatus.CONNECTED: "connected",
    LeadStatus.INTERESTED: "interested",
    LeadStatus.NOT_INTERESTED: "not_interested",
    LeadStatus.CALL_BACK: "call_back",
    LeadStatus.NOT_CONNECTED: "not_connected",
    LeadStatus.INVALID: "invalid",
}


def queue_priority(status: LeadStatus) -> int:
    return QUEUE_PRIORITY.get(status, 1)


class QueryService:
    """Derived views consumed by dashboards and lists."""

    def __init__(self, store: EntityStore):
        self.store = store
        self.lead_repo = store.leads
        self.employee_repo = store.employees
        self.activity_repo = store.activity

    def leads_for(self, employee_id: str) -> List[Lead]:
        """All leads assigned to an employee regardless of their availability."""
        return self.lead_repo.assigned_to(employee_id)

    def queue_for(self, employee_id: str) -> List[Lead]:
        """
        The employee's calling list, highest priority first.

        Empty while the employee is on leave (or unknown); their leads stay
        assigned but are not workable.
        """
        employee = self.employee_repo.get(employee_id)
        if not employee or employee.status != EmployeeStatus.WORKING:
            return []

        # sorted() is stable, so ties keep collection order
        return sorted(
            self.leads_for(employee_id),
            key=lambda lead: queue_priority(lead.status),
            reverse=True
        )

    def filter_leads(self, filters: Optional[LeadFilter] = None) -> List[Lead]:
        """Apply employee / status / date / text filters, then sort by creation time."""
        filters = filters or LeadFilter()
        leads = self.lead_repo.list()

        if filters.employee == EmployeeSelector.UNASSIGNED.value:
            leads = [lead for lead in leads if lead.assigned_to is None]
        elif filters.employee == EmployeeSelector.ON_LEAVE.value:
            on_leave = self.employee_repo.on_leave_ids()
            leads = [lead for lead in leads if lead.assigned_to in on_leave]
        elif filters.employee != EmployeeSelector.ALL.value:
            leads = [lead for lead in leads if lead.assigned_to == filters.employee]

        if filters.status:
            leads = [lead for lead in leads if lead.status == filters.status]

        if filters.updated_on:
            leads = [lead for lead in leads if lead.updated_at.date() == filters.updated_on]

        if filters.search:
            term = filters.search.strip().lower()
            leads = [
                lead for lead in leads
                if term in lead.name.lower() or term in lead.location.lower()
            ]

        return sorted(
            leads,
            key=lambda lead: lead.created_at,
            reverse=filters.sort == SortOrder.NEWEST
        )

    def paginate_leads(
        self,
        filters: Optional[LeadFilter] = None,
        page: int = 1,
        limit: int = 20
    ) -> dict:
        """List leads with filtering and pagination."""
        return paginate(self.filter_leads(filters), page, limit)

    def status_counts(self, leads: Iterable[Lead]) -> StatusCounts:
        """Count leads per status."""
        counts = StatusCounts()
        for lead in leads:
            counts.total += 1
            field = STATUS_COUNT_FIELDS[lead.status]
            setattr(counts, field, getattr(counts, field) + 1)
        return counts

    def admin_stats(self, filters: Optional[LeadFilter] = None) -> StatusCounts:
        """Status breakdown for the admin dashboard over a filtered subset."""
        return self.status_counts(self.filter_leads(filters))

    def employee_stats(self, employee_id: str) -> EmployeeStats:
        """Counters shown on a caller's own dashboard."""
        counts = self.status_counts(self.leads_for(employee_id))
        return EmployeeStats(
            total=counts.total,
            interested=counts.interested,
            connected=counts.connected,
            pending=counts.new + counts.call_back,
            not_interested=counts.not_interested
        )

    def recent_feedback(self, employee_id: str, limit: Optional[int] = None) -> List[RecentFeedback]:
        """Newest feedback notes across an employee's leads, RECENT_FEEDBACK_LIMIT by default."""
        if limit is None:
            limit = self.store.config.RECENT_FEEDBACK_LIMIT
        entries = [
            RecentFeedback(
                id=fb.id,
                text=fb.text,
                timestamp=fb.timestamp,
                lead_id=lead.id,
                lead_name=lead.name,
                lead_status=lead.status
            )
            for lead in self.leads_for(employee_id)
            for fb in lead.feedbacks
        ]
        entries.sort(key=lambda entry: entry.timestamp, reverse=True)
        return entries[:limit]

    def on_leave_assignments(self) -> List[Lead]:
        """Leads whose assignee is currently on leave."""
        return self.filter_leads(LeadFilter(employee=EmployeeSelector.ON_LEAVE.value))

    def unassigned(self) -> List[Lead]:
        return self.filter_leads(LeadFilter(employee=EmployeeSelector.UNASSIGNED.value))

    def activity(self, limit: int = 20, entity_type: Optional[str] = None) -> List[ActivityLog]:
        """Newest audit trail entries."""
        return self.activity_repo.recent(limit, entity_type)
