"""Domain records for shops, drivers, delivery routes and performance targets."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from datetime import date
from typing import Optional


class EntityKind(str, enum.Enum):
    """Entity kinds owned by the store; the value doubles as the collection name."""

    SHOP = "shops"
    DRIVER = "drivers"
    ROUTE = "routes"
    TARGET = "targets"

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def record_type(self) -> type:
        return _RECORD_TYPES[self]


@dataclass(slots=True)
class Shop:
    """A retail outlet on the delivery map."""

    id: str
    name: str
    latitude: float
    longitude: float
    category: str = "retail"
    status: str = "active"
    owner_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    added_by: Optional[str] = None
    notes: Optional[str] = None


@dataclass(slots=True)
class Driver:
    id: str
    name: str
    phone: str
    vehicle_type: str
    status: str = "available"
    vehicle_plate: Optional[str] = None
    current_latitude: Optional[float] = None
    current_longitude: Optional[float] = None


@dataclass(slots=True)
class Route:
    """An ordered sequence of shop visits planned for a given day."""

    id: str
    name: str
    date: date
    driver_id: Optional[str] = None
    shop_ids: list[str] = field(default_factory=list)
    status: str = "planned"
    estimated_distance: Optional[float] = None
    estimated_time: Optional[float] = None


@dataclass(slots=True)
class Target:
    """Shop and delivery goals for a driver over a period."""

    id: str
    driver_id: str
    period: str
    target_shops: int
    target_deliveries: int
    start_date: date
    end_date: date
    completed_shops: int = 0
    completed_deliveries: int = 0


Record = Shop | Driver | Route | Target

_RECORD_TYPES: dict[EntityKind, type] = {
    EntityKind.SHOP: Shop,
    EntityKind.DRIVER: Driver,
    EntityKind.ROUTE: Route,
    EntityKind.TARGET: Target,
}

DRIVER_STATUSES = ("available", "on_route", "off_duty")
ROUTE_STATUSES = ("planned", "in_progress", "completed")


def record_fields(kind: EntityKind) -> tuple[str, ...]:
    """Field names of a record type, ``id`` first."""
    return tuple(f.name for f in fields(kind.record_type))
