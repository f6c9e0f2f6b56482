"""In-process record store."""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any, Mapping

from ..models.domain import EntityKind, Record
from .base import build_record, merge_record

logger = logging.getLogger(__name__)


class MemoryStore:
    """One dict per entity kind plus a counter shared by all kinds.

    Ids are unique for the lifetime of this instance only; a new store
    starts counting from 1 again. Records handed out are copies.
    """

    def __init__(self) -> None:
        self._records: dict[EntityKind, dict[str, Record]] = {kind: {} for kind in EntityKind}
        self._counter = 0
        # FastAPI runs sync endpoints on a worker thread pool
        self._lock = threading.RLock()

    def _next_id(self) -> str:
        self._counter += 1
        return str(self._counter)

    def get_all(self, kind: EntityKind) -> list[Record]:
        with self._lock:
            return [copy.deepcopy(record) for record in self._records[kind].values()]

    def get_by_id(self, kind: EntityKind, record_id: str) -> Record | None:
        with self._lock:
            record = self._records[kind].get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def create(self, kind: EntityKind, data: Mapping[str, Any]) -> Record:
        with self._lock:
            record = build_record(kind, self._next_id(), data)
            self._records[kind][record.id] = record
            logger.info("Created %s %s", kind.label.lower(), record.id)
            return copy.deepcopy(record)

    def update(self, kind: EntityKind, record_id: str, patch: Mapping[str, Any]) -> Record | None:
        with self._lock:
            existing = self._records[kind].get(record_id)
            if existing is None:
                return None
            updated = merge_record(kind, existing, patch)
            self._records[kind][record_id] = updated
            logger.info("Updated %s %s (%s)", kind.label.lower(), record_id, ", ".join(sorted(patch)) or "no fields")
            return copy.deepcopy(updated)

    def delete(self, kind: EntityKind, record_id: str) -> bool:
        with self._lock:
            removed = self._records[kind].pop(record_id, None)
            if removed is not None:
                logger.info("Deleted %s %s", kind.label.lower(), record_id)
            return removed is not None

    def count(self, kind: EntityKind) -> int:
        with self._lock:
            return len(self._records[kind])
