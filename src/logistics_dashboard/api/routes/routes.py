"""Delivery route endpoints."""

from __future__ import annotations

from typing import List

from fastapi import Depends, status

from ...errors import EntityNotFoundError
from ...models.domain import EntityKind
from ...persistence.base import EntityStore
from ...schemas.entities import RouteModel, ShopModel
from ..dependencies import get_store
from .crud import build_crud_router

router = build_crud_router(EntityKind.ROUTE, RouteModel)


@router.get("/{route_id}/shops", response_model=List[ShopModel], status_code=status.HTTP_200_OK)
def route_shops(route_id: str, store: EntityStore = Depends(get_store)) -> List[ShopModel]:
    """Shops of a route in visit order; ids that no longer resolve are skipped."""
    route = store.get_by_id(EntityKind.ROUTE, route_id)
    if route is None:
        raise EntityNotFoundError(EntityKind.ROUTE.label, route_id)
    shops = []
    for shop_id in route.shop_ids:
        shop = store.get_by_id(EntityKind.SHOP, shop_id)
        if shop is not None:
            shops.append(ShopModel.model_validate(shop))
    return shops
