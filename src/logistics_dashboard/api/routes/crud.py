"""Generic list/get/create/update/delete endpoints for one entity kind."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from pydantic import BaseModel

from ...errors import EntityNotFoundError
from ...models.domain import EntityKind
from ...persistence.base import EntityStore
from ...services.validation import validate_create, validate_update
from ..dependencies import get_store


def build_crud_router(kind: EntityKind, model: type[BaseModel]) -> APIRouter:
    """Router exposing the five collection operations under ``/{kind.value}``."""
    router = APIRouter(prefix=f"/{kind.value}", tags=[kind.value])

    @router.get("", response_model=list[model], status_code=status.HTTP_200_OK)
    def list_records(store: EntityStore = Depends(get_store)) -> list[BaseModel]:
        """List every record of this kind in insertion order."""
        return [model.model_validate(record) for record in store.get_all(kind)]

    @router.get("/{record_id}", response_model=model, status_code=status.HTTP_200_OK)
    def get_record(record_id: str, store: EntityStore = Depends(get_store)) -> BaseModel:
        """Fetch one record by id."""
        record = store.get_by_id(kind, record_id)
        if record is None:
            raise EntityNotFoundError(kind.label, record_id)
        return model.model_validate(record)

    @router.post("", response_model=model, status_code=status.HTTP_201_CREATED)
    def create_record(payload: Any = Body(None), store: EntityStore = Depends(get_store)) -> BaseModel:
        """Validate the body, fill defaults and store a new record."""
        data = validate_create(kind, payload)
        return model.model_validate(store.create(kind, data))

    @router.patch("/{record_id}", response_model=model, status_code=status.HTTP_200_OK)
    def update_record(record_id: str, payload: Any = Body(None), store: EntityStore = Depends(get_store)) -> BaseModel:
        """Merge the sent fields over an existing record."""
        if store.get_by_id(kind, record_id) is None:
            raise EntityNotFoundError(kind.label, record_id)
        patch = validate_update(kind, payload)
        record = store.update(kind, record_id, patch)
        if record is None:
            raise EntityNotFoundError(kind.label, record_id)
        return model.model_validate(record)

    @router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
    def delete_record(record_id: str, store: EntityStore = Depends(get_store)) -> Response:
        """Remove a record; unknown ids are a 404."""
        if not store.delete(kind, record_id):
            raise EntityNotFoundError(kind.label, record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
