"""Supabase table persistence for dashboard records."""

from __future__ import annotations

import dataclasses
import logging
import uuid
from datetime import date
from typing import Any, Mapping

from ..models.domain import EntityKind, Record, record_fields
from .base import build_record, merge_record

logger = logging.getLogger(__name__)

_DATE_FIELDS = {"date", "start_date", "end_date"}


def _to_row(record: Record) -> dict[str, Any]:
    row = dataclasses.asdict(record)
    for name in _DATE_FIELDS.intersection(row):
        if isinstance(row[name], date):
            row[name] = row[name].isoformat()
    return row


def _from_row(kind: EntityKind, row: Mapping[str, Any]) -> Record:
    """Convert a table row into a record, ignoring bookkeeping columns like ``created_at``."""
    values = {name: row[name] for name in record_fields(kind) if name in row}
    for name in _DATE_FIELDS.intersection(values):
        if isinstance(values[name], str):
            values[name] = date.fromisoformat(values[name][:10])
    if "shop_ids" in values and values["shop_ids"] is None:
        values["shop_ids"] = []
    values["id"] = str(values["id"])
    return kind.record_type(**values)


class SupabaseStore:
    """Entity store backed by the ``shops``, ``drivers``, ``routes`` and ``targets`` tables.

    Ids are uuid4 strings; listings follow ``created_at``. Query errors are
    logged and propagated.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def _table(self, kind: EntityKind):
        return self._client.table(kind.value)

    def get_all(self, kind: EntityKind) -> list[Record]:
        try:
            response = self._table(kind).select("*").order("created_at").execute()
        except Exception:
            logger.exception("Failed to list %s from database", kind.value)
            raise
        return [_from_row(kind, row) for row in (response.data or [])]

    def get_by_id(self, kind: EntityKind, record_id: str) -> Record | None:
        try:
            response = self._table(kind).select("*").eq("id", record_id).limit(1).execute()
        except Exception:
            logger.exception("Failed to load %s %s from database", kind.label.lower(), record_id)
            raise
        rows = response.data or []
        return _from_row(kind, rows[0]) if rows else None

    def create(self, kind: EntityKind, data: Mapping[str, Any]) -> Record:
        record = build_record(kind, str(uuid.uuid4()), data)
        try:
            response = self._table(kind).insert(_to_row(record)).execute()
        except Exception:
            logger.exception("Failed to insert %s into database", kind.label.lower())
            raise
        logger.info("Created %s %s", kind.label.lower(), record.id)
        rows = response.data or []
        return _from_row(kind, rows[0]) if rows else record

    def update(self, kind: EntityKind, record_id: str, patch: Mapping[str, Any]) -> Record | None:
        existing = self.get_by_id(kind, record_id)
        if existing is None:
            return None
        updated = merge_record(kind, existing, patch)
        changes = {name: value for name, value in _to_row(updated).items() if name != "id" and name in patch}
        if changes:
            try:
                self._table(kind).update(changes).eq("id", record_id).execute()
            except Exception:
                logger.exception("Failed to update %s %s in database", kind.label.lower(), record_id)
                raise
        logger.info("Updated %s %s (%s)", kind.label.lower(), record_id, ", ".join(sorted(changes)) or "no fields")
        return updated

    def delete(self, kind: EntityKind, record_id: str) -> bool:
        try:
            response = self._table(kind).delete().eq("id", record_id).execute()
        except Exception:
            logger.exception("Failed to delete %s %s from database", kind.label.lower(), record_id)
            raise
        removed = bool(response.data)
        if removed:
            logger.info("Deleted %s %s", kind.label.lower(), record_id)
        return removed

    def count(self, kind: EntityKind) -> int:
        return len(self.get_all(kind))
