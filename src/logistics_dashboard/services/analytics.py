"""Dashboard summary analytics."""

from __future__ import annotations

from collections import Counter
from typing import Optional

from ..models.domain import DRIVER_STATUSES, ROUTE_STATUSES, EntityKind, Target
from ..persistence.base import EntityStore
from .service_area import ServiceArea


def _completion(completed: int, target: int) -> Optional[float]:
    if target <= 0:
        return None
    return round(completed / target * 100, 1)


def _status_counts(records, known: tuple[str, ...] = ()) -> dict[str, int]:
    counts: Counter[str] = Counter({status: 0 for status in known})
    for record in records:
        counts[record.status] += 1
    return dict(counts)


def target_progress(target: Target) -> dict:
    return {
        "target_id": target.id,
        "driver_id": target.driver_id,
        "period": target.period,
        "shops_completion": _completion(target.completed_shops, target.target_shops),
        "deliveries_completion": _completion(target.completed_deliveries, target.target_deliveries),
    }


def compute_summary(
    store: EntityStore,
    *,
    optimizations_run: int,
    service_area: ServiceArea | None = None,
) -> dict:
    shops = store.get_all(EntityKind.SHOP)
    drivers = store.get_all(EntityKind.DRIVER)
    routes = store.get_all(EntityKind.ROUTE)
    targets = store.get_all(EntityKind.TARGET)

    outside: Optional[int] = None
    if service_area is not None:
        outside = sum(1 for shop in shops if not service_area.contains(shop.latitude, shop.longitude))

    return {
        "total_shops": len(shops),
        "total_drivers": len(drivers),
        "total_routes": len(routes),
        "total_targets": len(targets),
        "shops_by_status": _status_counts(shops),
        "drivers_by_status": _status_counts(drivers, DRIVER_STATUSES),
        "routes_by_status": _status_counts(routes, ROUTE_STATUSES),
        "shops_outside_service_area": outside,
        "optimizations_run": optimizations_run,
        "target_progress": [target_progress(target) for target in targets],
    }
