"""
Lead schemas.
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from estate_crm.models.lead import LeadStatus


class LeadRow(BaseModel):
    """One ingest row; spreadsheets exported by the console name the phone column `number`."""
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(min_length=1)
    phone: str = Field(min_length=1, validation_alias=AliasChoices("phone", "number"))
    location: str = Field(min_length=1)

    @field_validator("name", "phone", "location", mode="before")
    @classmethod
    def _stringify(cls, value):
        # Spreadsheet readers hand numbers through as int/float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class LeadImportResponse(BaseModel):
    """Bulk ingest result."""
    total_rows: int
    imported: int
    failed: int
    errors: List[dict] = []
    lead_ids: List[str] = []


class EmployeeSelector(str, Enum):
    ALL = "all"
    UNASSIGNED = "unassigned"
    ON_LEAVE = "on_leave"


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"


class LeadFilter(BaseModel):
    """
    Lead filtering options.
    `employee` is one of the EmployeeSelector values or an employee id.
    """
    employee: str = EmployeeSelector.ALL.value
    status: Optional[LeadStatus] = None
    updated_on: Optional[date] = None
    search: Optional[str] = None  # Search in name and location
    sort: SortOrder = SortOrder.NEWEST


class StatusCounts(BaseModel):
    """Lead count per status over a filtered subset."""
    total: int = 0
    new: int = 0
    connected: int = 0
    interested: int = 0
    not_interested: int = 0
    call_back: int = 0
    not_connected: int = 0
    invalid: int = 0


class EmployeeStats(BaseModel):
    """Personal dashboard counters."""
    total: int = 0
    interested: int = 0
    connected: int = 0
    pending: int = 0  # New + Call Back
    not_interested: int = 0


class RecentFeedback(BaseModel):
    """Feedback entry flattened with the lead it belongs to."""
    id: str
    text: str
    timestamp: datetime
    lead_id: str
    lead_name: str
    lead_status: LeadStatus
