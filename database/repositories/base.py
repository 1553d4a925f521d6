"""Shared in-memory keyed collection behind every repository."""

from typing import Callable, Dict, Generic, List, Optional, TypeVar

from models.base import BaseGolfModel
from database.exceptions import DuplicateError, NotFoundError

M = TypeVar("M", bound=BaseGolfModel)


class KeyedRepository(Generic[M]):
    """
    Records of one type keyed by id, in insertion order.

    Stored models are replaced on update, never mutated, so a snapshot
    taken earlier keeps seeing the old values. `on_change` is called after
    every successful mutation.
    """

    entity = "Record"

    def __init__(self, on_change: Optional[Callable[[], None]] = None):
        self._records: Dict[str, M] = {}
        self._on_change = on_change

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    # ================================================================
    # Read
    # ================================================================

    def get(self, record_id: str) -> Optional[M]:
        return self._records.get(record_id)

    def require(self, record_id: str) -> M:
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError(f"{self.entity} {record_id} not found")
        return record

    def list(self) -> List[M]:
        return list(self._records.values())

    def as_dict(self) -> Dict[str, M]:
        """Shallow copy of the keyed records."""
        return dict(self._records)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    # ================================================================
    # Write
    # ================================================================

    def add(self, record: M) -> M:
        if record.id in self._records:
            raise DuplicateError(f"{self.entity} {record.id} already exists")
        self._records[record.id] = record
        self._changed()
        return record

    def replace(self, record: M) -> M:
        self.require(record.id)
        self._records[record.id] = record
        self._changed()
        return record

    def update(self, record_id: str, **fields) -> M:
        """Validate `fields` against the model and store the new version."""
        current = self.require(record_id)
        data = {**current.model_dump(), **fields}
        return self.replace(type(current).model_validate(data))

    def delete(self, record_id: str) -> bool:
        """Remove a record. Returns True if it existed."""
        if self._records.pop(record_id, None) is None:
            return False
        self._changed()
        return True

    def load(self, records: List[M]) -> None:
        """Replace the whole collection without signalling a change."""
        self._records = {r.id: r for r in records}
