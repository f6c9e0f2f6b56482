"""Target endpoints."""

from __future__ import annotations

from ...models.domain import EntityKind
from ...schemas.entities import TargetModel
from .crud import build_crud_router

router = build_crud_router(EntityKind.TARGET, TargetModel)
