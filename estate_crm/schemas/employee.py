"""
Employee schemas.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from estate_crm.models.employee import Designation, EmployeeStatus


class EmployeeCreate(BaseModel):
    """Create a new employee. Every field is required."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "John Doe",
                "phone": "555-0101",
                "email": "john@crm.com",
                "address": "123 Main St",
                "designation": "Caller",
                "password": "password"
            }
        }
    )

    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: EmailStr
    address: str = Field(min_length=1)
    designation: Designation
    password: str = Field(min_length=1)


class EmployeePatch(BaseModel):
    """
    Partial update of an employee.
    Only mutable fields exist here; passing `id` or `created_at` fails validation.
    Every employee field is required, so an explicit None is rejected too.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(default=None, min_length=1)
    designation: Optional[Designation] = None
    password: Optional[str] = Field(default=None, min_length=1)
    status: Optional[EmployeeStatus] = None

    @model_validator(mode="after")
    def _reject_cleared_fields(self) -> "EmployeePatch":
        cleared = sorted(field for field in self.model_fields_set if getattr(self, field) is None)
        if cleared:
            raise ValueError(f"Employee fields cannot be cleared: {', '.join(cleared)}")
        return self
