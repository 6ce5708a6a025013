"""
Authentication schemas.
"""
from typing import Optional

from pydantic import BaseModel

from estate_crm.models.session import UserSession


class LoginResult(BaseModel):
    """Login outcome. Failures are reported, not raised."""
    authenticated: bool
    session: Optional[UserSession] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.authenticated
