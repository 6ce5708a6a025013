"""
Employee model - a caller managed by the administrator.
"""
from datetime import datetime
from enum import Enum

from sqlmodel import SQLModel, Field


class Designation(str, Enum):
    CALLER = "Caller"
    EDITOR = "Editor"
    OWNER = "Owner"


class EmployeeStatus(str, Enum):
    WORKING = "Working"
    LEAVE = "Leave"


class Employee(SQLModel):
    """
    Employee entity.
    Lives in the in-memory entity store; `status` gates whether the
    employee's own calling queue is open.
    """
    id: str
    name: str
    phone: str
    email: str
    address: str
    designation: Designation = Field(default=Designation.CALLER)

    # Auth (plaintext shared secret)
    password: str

    status: EmployeeStatus = Field(default=EmployeeStatus.WORKING)

    # Timestamps
    created_at: datetime

    @property
    def is_working(self) -> bool:
        return self.status == EmployeeStatus.WORKING
