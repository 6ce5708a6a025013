"""
Lead service - ingest, assignment, call outcomes and feedback history.
"""
import csv
import io
import logging
from typing import Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from estate_crm.core.exceptions import fail_capacity, fail_not_found, fail_validation
from estate_crm.models.activity import Actions
from estate_crm.models.lead import MAX_FEEDBACKS, Feedback, Lead, LeadStatus
from estate_crm.repositories.store import EntityStore
from estate_crm.schemas.common import OperationResult
from estate_crm.schemas.lead import LeadFilter, LeadImportResponse, LeadRow

logger = logging.getLogger(__name__)

# Header aliases accepted by the CSV import, lower-cased
CSV_COLUMNS = {
    "name": "name",
    "phone": "phone",
    "number": "phone",
    "mobile": "phone",
    "location": "location",
    "city": "location",
}

EXPORT_FIELDS = [
    "id", "name", "phone", "location", "status", "assigned_to",
    "feedback_count", "last_called_at", "created_at", "updated_at"
]


class LeadService:
    """Service for lead operations."""

    def __init__(self, store: EntityStore):
        self.store = store
        self.lead_repo = store.leads
        self.employee_repo = store.employees
        self.activity_repo = store.activity

    def get(self, lead_id: str) -> Optional[Lead]:
        return self.lead_repo.get(lead_id)

    def bulk_ingest(
        self,
        rows: Iterable[Union[Mapping, LeadRow]],
        actor_id: Optional[str] = None
    ) -> LeadImportResponse:
        """
        Create one New, unassigned lead per valid row.

        Rows missing name, phone or location are dropped and reported in
        `errors`; the valid rest of the batch is still created.
        """
        valid: List[LeadRow] = []
        errors = []
        total = 0

        for row_num, row in enumerate(rows, start=1):
            total += 1
            try:
                valid.append(row if isinstance(row, LeadRow) else LeadRow.model_validate(dict(row)))
            except PydanticValidationError as e:
                fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
                errors.append({"row": row_num, "error": f"missing or empty: {', '.join(fields)}"})

        lead_ids: List[str] = []
        if valid:
            now = self.store.now()
            ids = self.store.ids.lead_ids(now, len(valid))
            leads = [
                Lead(
                    id=lead_id,
                    name=row.name,
                    phone=row.phone,
                    location=row.location,
                    status=LeadStatus.NEW,
                    assigned_to=None,
                    feedbacks=[],
                    created_at=now,
                    updated_at=now
                )
                for lead_id, row in zip(ids, valid)
            ]
            self.lead_repo.bulk_create(leads)
            lead_ids = [lead.id for lead in leads]

        if errors:
            logger.warning(f"Dropped {len(errors)} of {total} ingest rows")
        logger.info(f"Ingested {len(lead_ids)} leads")

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.LEADS_IMPORTED,
            entity_type="lead",
            description=f"Imported {len(lead_ids)} leads",
            meta_data={"imported": len(lead_ids), "failed": len(errors)}
        )

        return LeadImportResponse(
            total_rows=total,
            imported=len(lead_ids),
            failed=len(errors),
            errors=errors[:10],  # Limit errors returned
            lead_ids=lead_ids
        )

    def import_csv(self, csv_content: str, actor_id: Optional[str] = None) -> LeadImportResponse:
        """Import leads from CSV text with a name / phone (or number) / location header."""
        reader = csv.DictReader(io.StringIO(csv_content))

        rows = []
        for raw in reader:
            row = {}
            for column, value in raw.items():
                if column is None:
                    continue
                field = CSV_COLUMNS.get(column.replace("\ufeff", "").strip().lower())
                if field and not row.get(field):
                    row[field] = value
            rows.append(row)

        return self.bulk_ingest(rows, actor_id=actor_id)

    def export_csv(self, filters: Optional[LeadFilter] = None) -> str:
        """Export leads matching `filters` to CSV."""
        from estate_crm.services.query_service import QueryService

        leads = QueryService(self.store).filter_leads(filters)

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=EXPORT_FIELDS)
        writer.writeheader()

        for lead in leads:
            writer.writerow({
                "id": lead.id,
                "name": lead.name,
                "phone": lead.phone,
                "location": lead.location,
                "status": lead.status.value,
                "assigned_to": lead.assigned_to or "",
                "feedback_count": len(lead.feedbacks),
                "last_called_at": lead.last_called_at.isoformat() if lead.last_called_at else "",
                "created_at": lead.created_at.isoformat(),
                "updated_at": lead.updated_at.isoformat()
            })

        return output.getvalue()

    def assign(
        self,
        lead_ids: Iterable[str],
        employee_id: Optional[str],
        actor_id: Optional[str] = None
    ) -> OperationResult:
        """
        Point every known lead at `employee_id`, or unassign them with None.

        Unknown lead ids are skipped. An employee on leave can still receive
        leads; the result carries a warning for it.
        """
        warnings = []
        if employee_id is not None:
            employee = self.employee_repo.get(employee_id)
            if not employee:
                logger.warning(f"Assignment to unknown employee {employee_id} rejected")
                return fail_not_found("Employee", employee_id)
            if not employee.is_working:
                warnings.append(f"Employee {employee_id} is on leave")
                logger.warning(f"Assigning leads to {employee_id} while on leave")

        requested = list(dict.fromkeys(lead_ids))
        updated = self.lead_repo.assign(requested, employee_id)

        skipped = len(requested) - len(updated)
        if skipped:
            warnings.append(f"{skipped} unknown lead ids ignored")

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.LEADS_ASSIGNED,
            entity_type="lead",
            description=f"{len(updated)} leads {'assigned to ' + employee_id if employee_id else 'unassigned'}",
            meta_data={"lead_ids": [lead.id for lead in updated], "employee_id": employee_id}
        )
        return OperationResult(affected=len(updated), entity_id=employee_id, warnings=warnings)

    def update_status(
        self,
        lead_id: str,
        status: Union[LeadStatus, str],
        actor_id: Optional[str] = None
    ) -> OperationResult:
        """Move a lead to any status; every transition is allowed."""
        status = LeadStatus(status)
        lead = self.lead_repo.get(lead_id)
        if not lead:
            return fail_not_found("Lead", lead_id)

        self.lead_repo.update_status(lead_id, status)

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.LEAD_STATUS_CHANGED,
            entity_type="lead",
            entity_id=lead_id,
            meta_data={"old_status": lead.status.value, "new_status": status.value}
        )
        return OperationResult(affected=1, entity_id=lead_id)

    def record_call(self, lead_id: str, actor_id: Optional[str] = None) -> OperationResult:
        """Stamp the time of a call attempt. Safe to repeat."""
        lead = self.lead_repo.record_call(lead_id)
        if not lead:
            return fail_not_found("Lead", lead_id)

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.LEAD_CALLED,
            entity_type="lead",
            entity_id=lead_id
        )
        return OperationResult(affected=1, entity_id=lead_id)

    def add_feedback(self, lead_id: str, text: str, actor_id: Optional[str] = None) -> OperationResult:
        """
        Append a feedback note.

        Rejected once the lead already holds MAX_FEEDBACKS notes; this limit
        holds for every caller, not only the calling screen.
        """
        lead = self.lead_repo.get(lead_id)
        if not lead:
            return fail_not_found("Lead", lead_id)
        if not text or not text.strip():
            return fail_validation("Feedback text is empty", "text")
        if lead.feedback_full:
            logger.warning(f"Feedback rejected for lead {lead_id}, already holds {MAX_FEEDBACKS}")
            return fail_capacity("Feedback", MAX_FEEDBACKS)

        now = self.store.now()
        feedback = Feedback(id=self.store.ids.feedback_id(now), text=text, timestamp=now)
        self.lead_repo.set_feedbacks(lead_id, [*lead.feedbacks, feedback])

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.FEEDBACK_ADDED,
            entity_type="lead",
            entity_id=lead_id,
            meta_data={"feedback_id": feedback.id}
        )
        return OperationResult(affected=1, entity_id=feedback.id)

    def edit_feedback(
        self,
        lead_id: str,
        feedback_id: str,
        new_text: str,
        actor_id: Optional[str] = None
    ) -> OperationResult:
        """Replace the text of one feedback; its id and timestamp stay."""
        lead = self.lead_repo.get(lead_id)
        if not lead:
            return fail_not_found("Lead", lead_id)
        if not lead.find_feedback(feedback_id):
            return fail_not_found("Feedback", feedback_id)
        if not new_text or not new_text.strip():
            return fail_validation("Feedback text is empty", "text")

        feedbacks = [
            fb.model_copy(update={"text": new_text}) if fb.id == feedback_id else fb
            for fb in lead.feedbacks
        ]
        self.lead_repo.set_feedbacks(lead_id, feedbacks)

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.FEEDBACK_UPDATED,
            entity_type="lead",
            entity_id=lead_id,
            meta_data={"feedback_id": feedback_id}
        )
        return OperationResult(affected=1, entity_id=feedback_id)

    def delete_feedback(self, lead_id: str, feedback_id: str, actor_id: Optional[str] = None) -> OperationResult:
        lead = self.lead_repo.get(lead_id)
        if not lead:
            return fail_not_found("Lead", lead_id)
        if not lead.find_feedback(feedback_id):
            return fail_not_found("Feedback", feedback_id)

        self.lead_repo.set_feedbacks(lead_id, [fb for fb in lead.feedbacks if fb.id != feedback_id])

        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.FEEDBACK_DELETED,
            entity_type="lead",
            entity_id=lead_id,
            meta_data={"feedback_id": feedback_id}
        )
        return OperationResult(affected=1, entity_id=feedback_id)

    def delete(self, lead_id: str, actor_id: Optional[str] = None) -> OperationResult:
        """Delete a lead permanently."""
        lead = self.lead_repo.get(lead_id)
        if not lead or not self.lead_repo.delete(lead_id):
            return fail_not_found("Lead", lead_id)

        logger.info(f"Deleted lead {lead_id}")
        self.activity_repo.log(
            actor_id=actor_id,
            action=Actions.LEAD_DELETED,
            entity_type="lead",
            entity_id=lead_id,
            description=f"Lead '{lead.name}' deleted"
        )
        return OperationResult(affected=1, entity_id=lead_id)
