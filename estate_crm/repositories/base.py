"""
Base repository with generic in-memory CRUD operations.
Every write swaps in a new mapping, so a reader holding the previous
collection never sees a half-applied change.
"""
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlmodel import SQLModel

from estate_crm.core.clock import Clock, later_than

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository keyed by entity id, kept in insertion order.
    Inherit and specify the model class.
    """

    def __init__(self, model: Type[ModelType], clock: Clock):
        self.model = model
        self.clock = clock
        self._items: Dict[str, ModelType] = {}

    def create(self, obj_in: dict) -> ModelType:
        """Create a new record at the end of the collection."""
        db_obj = self.model(**obj_in)
        self._swap({**self._items, db_obj.id: db_obj})
        return db_obj

    def add_many(self, objs: Iterable[ModelType], prepend: bool = False) -> List[ModelType]:
        """Insert already built records, optionally ahead of the existing ones."""
        batch = {obj.id: obj for obj in objs}
        self._swap({**batch, **self._items} if prepend else {**self._items, **batch})
        return list(batch.values())

    def get(self, id: str) -> Optional[ModelType]:
        """Get a record by ID."""
        return self._items.get(id)

    def exists(self, id: str) -> bool:
        return id in self._items

    def list(self, filters: Optional[dict] = None) -> List[ModelType]:
        """List all records, optionally matching field equality filters."""
        items = list(self._items.values())
        if filters:
            for field, value in filters.items():
                if field in self.model.model_fields:
                    items = [obj for obj in items if getattr(obj, field) == value]
        return items

    def count(self, filters: Optional[dict] = None) -> int:
        return len(self.list(filters))

    def _updated_copy(self, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        changes = {field: value for field, value in obj_in.items() if field in self.model.model_fields}

        # Update timestamp if exists
        if "updated_at" in self.model.model_fields:
            changes["updated_at"] = later_than(db_obj.updated_at, self.clock())

        return db_obj.model_copy(update=changes)

    def _swap(self, items: Dict[str, ModelType]) -> None:
        """Install a new collection; the only place `_items` is replaced after a write."""
        self._items = items

    def update(self, id: str, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """
        Replace a record with an updated copy.
        Unlike a merge that skips None, every key in `obj_in` is applied, so
        callers can clear optional fields.
        """
        db_obj = self.get(id)
        if not db_obj:
            return None

        new_obj = self._updated_copy(db_obj, obj_in)
        self._swap({**self._items, id: new_obj})
        return new_obj

    def update_many(self, ids: Iterable[str], obj_in: Dict[str, Any]) -> List[ModelType]:
        """
        Apply the same change to every known id; unknown ids are skipped.
        The collection is copied once for the whole batch.
        """
        changed = {
            id: self._updated_copy(self._items[id], obj_in)
            for id in dict.fromkeys(ids)
            if id in self._items
        }
        if changed:
            self._swap({**self._items, **changed})
        return list(changed.values())

    def delete(self, id: str) -> bool:
        """Delete a record."""
        if id not in self._items:
            return False

        self._swap({key: obj for key, obj in self._items.items() if key != id})
        return True
