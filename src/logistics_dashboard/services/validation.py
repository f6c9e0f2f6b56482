"""Schema checks applied to raw input before it reaches the store."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from ..errors import EntityValidationError, FieldIssue
from ..models.domain import EntityKind
from ..schemas.entities import (
    DriverCreate,
    DriverUpdate,
    RouteCreate,
    RouteUpdate,
    ShopCreate,
    ShopUpdate,
    TargetCreate,
    TargetUpdate,
)

logger = logging.getLogger(__name__)

_CREATE_SCHEMAS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.SHOP: ShopCreate,
    EntityKind.DRIVER: DriverCreate,
    EntityKind.ROUTE: RouteCreate,
    EntityKind.TARGET: TargetCreate,
}

_UPDATE_SCHEMAS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.SHOP: ShopUpdate,
    EntityKind.DRIVER: DriverUpdate,
    EntityKind.ROUTE: RouteUpdate,
    EntityKind.TARGET: TargetUpdate,
}


def validate_create(kind: EntityKind, payload: Any) -> dict[str, Any]:
    """Return the normalized field dict for a new record.

    Required fields are enforced and defaults filled in. Raises
    ``EntityValidationError`` listing every violated constraint.
    """
    return _validate(kind, _CREATE_SCHEMAS[kind], payload, partial=False)


def validate_update(kind: EntityKind, payload: Any) -> dict[str, Any]:
    """Return only the fields present in a partial update, type-checked."""
    return _validate(kind, _UPDATE_SCHEMAS[kind], payload, partial=True)


def _validate(kind: EntityKind, schema: type[BaseModel], payload: Any, *, partial: bool) -> dict[str, Any]:
    message = f"Invalid {kind.label.lower()} data"
    if not isinstance(payload, Mapping):
        raise EntityValidationError(message, [FieldIssue("body", "Expected a JSON object")])
    try:
        model = schema.model_validate(dict(payload))
    except ValidationError as exc:
        issues = [_issue_from_error(error) for error in exc.errors()]
        logger.debug("Rejected %s payload: %s", kind.value, issues)
        raise EntityValidationError(message, issues) from exc
    return model.model_dump(exclude_unset=partial)


def _issue_from_error(error: Mapping[str, Any]) -> FieldIssue:
    location = ".".join(str(part) for part in error.get("loc", ())) or "body"
    return FieldIssue(location, str(error.get("msg", "Invalid value")))
