"""Shop endpoints."""

from __future__ import annotations

from ...models.domain import EntityKind
from ...schemas.entities import ShopModel
from .crud import build_crud_router

router = build_crud_router(EntityKind.SHOP, ShopModel)
