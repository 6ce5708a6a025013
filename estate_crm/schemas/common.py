"""
Common schemas used across services.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class ErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    AUTH_FAILED = "auth_failed"


class OperationResult(BaseModel):
    """
    Outcome of a lifecycle operation.
    Failures the domain expects (unknown id, full feedback list) are reported
    here instead of being raised.
    """
    ok: bool = True
    code: Optional[ErrorCode] = None
    message: Optional[str] = None
    affected: int = 0
    entity_id: Optional[str] = None
    warnings: List[str] = []

    def __bool__(self) -> bool:
        return self.ok

