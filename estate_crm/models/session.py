"""
Session models.
UserSession is the authenticated principal; SessionRecord is the key-value
row the session is persisted in between restarts.
"""
from datetime import datetime
from enum import Enum

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, Text


class Role(str, Enum):
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class UserSession(SQLModel):
    """Authenticated principal driving what the presentation layer surfaces."""
    id: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class SessionRecord(SQLModel, table=True):
    """Key-value storage for the current session."""
    __tablename__ = "session_record"

    key: str = Field(primary_key=True)
    value: str = Field(sa_column=Column(Text, nullable=False))

    updated_at: datetime = Field(default_factory=datetime.utcnow)
