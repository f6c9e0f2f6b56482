"""Store contract shared by the in-memory and Supabase backends."""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Protocol

from ..models.domain import EntityKind, Record, record_fields


class EntityStore(Protocol):
    """Exclusive owner of shop, driver, route and target records.

    ``create`` issues ids that are never reused; ``update`` merges only the
    fields present in the patch; unknown ids yield ``None`` / ``False``.
    """

    def get_all(self, kind: EntityKind) -> list[Record]: ...

    def get_by_id(self, kind: EntityKind, record_id: str) -> Record | None: ...

    def create(self, kind: EntityKind, data: Mapping[str, Any]) -> Record: ...

    def update(self, kind: EntityKind, record_id: str, patch: Mapping[str, Any]) -> Record | None: ...

    def delete(self, kind: EntityKind, record_id: str) -> bool: ...

    def count(self, kind: EntityKind) -> int: ...


def build_record(kind: EntityKind, record_id: str, data: Mapping[str, Any]) -> Record:
    """Instantiate a record from validated data; unknown keys and ``id`` are ignored."""
    values = {name: data[name] for name in record_fields(kind) if name != "id" and name in data}
    if "shop_ids" in values:
        values["shop_ids"] = list(values["shop_ids"])
    return kind.record_type(id=record_id, **values)


def merge_record(kind: EntityKind, record: Record, patch: Mapping[str, Any]) -> Record:
    """Field-by-field merge of ``patch`` over ``record``; ``id`` is immutable."""
    changes = {name: patch[name] for name in record_fields(kind) if name != "id" and name in patch}
    if "shop_ids" in changes:
        changes["shop_ids"] = list(changes["shop_ids"])
    return dataclasses.replace(record, **changes)
