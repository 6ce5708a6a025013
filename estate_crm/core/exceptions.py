"""
Custom exceptions for the EstateCRM engine.
Domain-expected failures are turned into OperationResult values by the
fail_* helpers; only programmer errors propagate as exceptions.
"""
from typing import Optional

from estate_crm.schemas.common import ErrorCode, OperationResult


class CRMException(Exception):
    """Base exception for EstateCRM"""
    code: Optional[ErrorCode] = None

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(CRMException):
    """Resource not found"""
    code = ErrorCode.NOT_FOUND

    def __init__(self, resource: str = "Resource", resource_id: str = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class ValidationError(CRMException):
    """Validation failed"""
    code = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str = "Validation failed", field: str = None):
        if field:
            message = f"Validation failed for field '{field}': {message}"
        super().__init__(message)


class CapacityExceededError(CRMException):
    """A bounded collection is already full"""
    code = ErrorCode.CAPACITY_EXCEEDED

    def __init__(self, resource: str = "Resource", limit: int = 0):
        super().__init__(f"{resource} limit of {limit} reached")


class UnauthorizedError(CRMException):
    """Authentication failed"""
    code = ErrorCode.AUTH_FAILED

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class StoreNotInitializedError(CRMException):
    """Engine used before init()"""

    def __init__(self, message: str = "CRM console is not initialized; call init() first"):
        super().__init__(message)


# Result helpers
def fail(err: CRMException) -> OperationResult:
    """Build a failed result from an exception instance."""
    return OperationResult(ok=False, code=err.code, message=err.message)


def fail_not_found(resource: str = "Resource", resource_id: str = None) -> OperationResult:
    return fail(NotFoundError(resource, resource_id))


def fail_validation(message: str = "Validation failed", field: str = None) -> OperationResult:
    return fail(ValidationError(message, field))


def fail_capacity(resource: str = "Resource", limit: int = 0) -> OperationResult:
    return fail(CapacityExceededError(resource, limit))
