"""Exception hierarchy shared by the store, services and HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class FieldIssue:
    """One violated field constraint."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class DashboardError(Exception):
    """Base exception for the logistics dashboard."""

    def __init__(self, message: str | None = None):
        self.message = message or "Dashboard error"
        super().__init__(self.message)


class EntityValidationError(DashboardError):
    """Raised when input does not satisfy an entity schema."""

    def __init__(self, message: str | None = None, issues: list[FieldIssue] | None = None):
        self.issues = list(issues or [])
        super().__init__(message or "Validation failed")


class EntityNotFoundError(DashboardError):
    """Raised when a record id is unknown."""

    def __init__(self, label: str, entity_id: str):
        self.label = label
        self.entity_id = entity_id
        super().__init__(f"{label} not found")


class OptimizationInProgressError(DashboardError):
    """Raised when the route is already being optimized."""

    def __init__(self, route_id: str):
        self.route_id = route_id
        super().__init__(f"Route {route_id} is already being optimized")


class OptimizationFailedError(DashboardError):
    """Raised when the optimizer collaborator fails or returns an unusable result.

    ``message`` stays generic for callers; ``detail`` is only for logs.
    """

    def __init__(self, detail: str, route_id: str | None = None):
        self.detail = detail
        self.route_id = route_id
        super().__init__("Optimization failed")


class ConfigurationError(DashboardError):
    """Raised when settings can not produce a working application."""

    def __init__(self, message: str | None = None, setting: str | None = None):
        self.setting = setting
        super().__init__(message or f"Configuration error for setting: {setting}")
