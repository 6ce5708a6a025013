"""
Activity log repository.
"""
from typing import Any, Dict, List, Optional

from estate_crm.core.clock import Clock
from estate_crm.models.activity import ActivityLog
from estate_crm.repositories.base import BaseRepository


class ActivityLogRepository(BaseRepository[ActivityLog]):
    """Append-only audit trail kept in memory."""

    def __init__(self, clock: Clock):
        super().__init__(ActivityLog, clock)
        self._sequence = 0

    def log(
        self,
        action: str,
        entity_type: str,
        entity_id: Optional[str] = None,
        actor_id: Optional[str] = None,
        description: Optional[str] = None,
        meta_data: Optional[Dict[str, Any]] = None
    ) -> ActivityLog:
        """Record an activity."""
        self._sequence += 1
        entry = ActivityLog(
            id=self._sequence,
            actor_id=actor_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            description=description,
            meta_data=meta_data or {},
            created_at=self.clock()
        )
        # Entries are never rewritten, so appending in place is safe for readers.
        self._items[str(entry.id)] = entry
        return entry

    def recent(self, limit: int = 20, entity_type: Optional[str] = None) -> List[ActivityLog]:
        """Newest entries first."""
        entries = self.list({"entity_type": entity_type} if entity_type else None)
        return list(reversed(entries))[:limit]
