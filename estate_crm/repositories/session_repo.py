"""
Session record repository.
Key-value persistence for the authenticated session across restarts.
"""
from datetime import datetime
from typing import Optional

from sqlmodel import Session
from sqlalchemy.engine import Engine

from estate_crm.models.session import SessionRecord


class SessionRepository:
    """Repository for the SessionRecord key-value table."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def get(self, key: str) -> Optional[str]:
        """Get the stored value for a key."""
        with Session(self.engine) as session:
            record = session.get(SessionRecord, key)
            return record.value if record else None

    def put(self, key: str, value: str) -> None:
        """Insert or overwrite a value."""
        with Session(self.engine) as session:
            record = session.get(SessionRecord, key)
            if record:
                record.value = value
                record.updated_at = datetime.utcnow()
            else:
                record = SessionRecord(key=key, value=value)
            session.add(record)
            session.commit()

    def delete(self, key: str) -> bool:
        """Remove a key; False when nothing was stored."""
        with Session(self.engine) as session:
            record = session.get(SessionRecord, key)
            if not record:
                return False
            session.delete(record)
            session.commit()
            return True
