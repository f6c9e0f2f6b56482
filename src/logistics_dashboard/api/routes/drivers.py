"""Driver endpoints."""

from __future__ import annotations

from typing import List

from fastapi import Depends, status

from ...errors import EntityNotFoundError
from ...models.domain import EntityKind
from ...persistence.base import EntityStore
from ...schemas.entities import DriverModel, TargetModel
from ..dependencies import get_store
from .crud import build_crud_router

router = build_crud_router(EntityKind.DRIVER, DriverModel)


@router.get("/{driver_id}/targets", response_model=List[TargetModel], status_code=status.HTTP_200_OK)
def driver_targets(driver_id: str, store: EntityStore = Depends(get_store)) -> List[TargetModel]:
    """Targets assigned to a driver."""
    if store.get_by_id(EntityKind.DRIVER, driver_id) is None:
        raise EntityNotFoundError(EntityKind.DRIVER.label, driver_id)
    return [
        TargetModel.model_validate(target)
        for target in store.get_all(EntityKind.TARGET)
        if target.driver_id == driver_id
    ]
