"""Route optimization orchestration and history."""

from __future__ import annotations

import logging
import math
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from ...errors import EntityNotFoundError, OptimizationFailedError, OptimizationInProgressError
from ...models.domain import EntityKind, Route
from ...persistence.base import EntityStore
from .models import (
    OptimizationRecord,
    OptimizationRequest,
    OptimizationStop,
    RouteOptimizationResult,
    RouteOptimizer,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OptimizationHistory:
    """Append-only list of optimization records in creation order."""

    def __init__(self) -> None:
        self._records: list[OptimizationRecord] = []
        self._lock = threading.Lock()

    def append(self, record: OptimizationRecord) -> None:
        with self._lock:
            self._records.append(record)

    def list(self, route_id: Optional[str] = None) -> list[OptimizationRecord]:
        with self._lock:
            if route_id is None:
                return list(self._records)
            return [record for record in self._records if record.route_id == route_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class RouteOptimizationService:
    """Runs the optimizer collaborator for stored routes.

    At most one optimization per route runs at a time. Only successful
    results reach the history.
    """

    def __init__(
        self,
        store: EntityStore,
        optimizer: RouteOptimizer,
        history: OptimizationHistory | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.optimizer = optimizer
        self.history = history if history is not None else OptimizationHistory()
        self._clock = clock
        self._in_flight: set[str] = set()
        self._in_flight_lock = threading.Lock()

    def optimize(self, route_id: str) -> OptimizationRecord:
        route = self.store.get_by_id(EntityKind.ROUTE, route_id)
        if route is None:
            raise EntityNotFoundError(EntityKind.ROUTE.label, route_id)

        with self._in_flight_lock:
            if route_id in self._in_flight:
                raise OptimizationInProgressError(route_id)
            self._in_flight.add(route_id)
        try:
            request = self.build_request(route)
            try:
                result = self.optimizer.optimize(request)
                _check_result(result, route_id)
            except OptimizationFailedError as exc:
                logger.warning("Optimization of route %s failed: %s", route_id, exc.detail)
                raise
            except Exception as exc:
                logger.exception("Optimization of route %s failed", route_id)
                raise OptimizationFailedError(str(exc) or type(exc).__name__, route_id=route_id) from exc

            record = OptimizationRecord.from_result(route_id, result, self._clock())
            self.history.append(record)
            logger.info(
                "Recorded optimization for route %s: %.1f min, %.2f L saved",
                route_id,
                record.time_saved,
                record.fuel_saved,
            )
            return record
        finally:
            with self._in_flight_lock:
                self._in_flight.discard(route_id)

    def is_optimizing(self, route_id: str) -> bool:
        with self._in_flight_lock:
            return route_id in self._in_flight

    def build_request(self, route: Route) -> OptimizationRequest:
        """Resolve the route's shops and driver; unknown shop ids are collected, not fatal."""
        stops: list[OptimizationStop] = []
        skipped: list[str] = []
        for shop_id in route.shop_ids:
            shop = self.store.get_by_id(EntityKind.SHOP, shop_id)
            if shop is None:
                skipped.append(shop_id)
                continue
            stops.append(
                OptimizationStop(
                    shop_id=shop.id,
                    name=shop.name,
                    latitude=shop.latitude,
                    longitude=shop.longitude,
                    status=shop.status,
                )
            )
        if skipped:
            logger.warning("Route %s references unknown shops: %s", route.id, ", ".join(skipped))

        driver = self.store.get_by_id(EntityKind.DRIVER, route.driver_id) if route.driver_id else None
        return OptimizationRequest(
            route_id=route.id,
            route_name=route.name,
            stops=stops,
            vehicle_type=driver.vehicle_type if driver else None,
            driver_status=driver.status if driver else None,
            skipped_shop_ids=skipped,
        )


def _check_result(result: RouteOptimizationResult, route_id: str) -> None:
    if not isinstance(result, RouteOptimizationResult):
        raise OptimizationFailedError(f"Unexpected optimizer result type {type(result).__name__}", route_id=route_id)
    if not all(isinstance(shop_id, str) for shop_id in result.optimized_order):
        raise OptimizationFailedError("Optimized order contains non-string ids", route_id=route_id)
    for name in ("original_distance", "optimized_distance", "time_saved", "fuel_saved"):
        value = getattr(result, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise OptimizationFailedError(f"Optimizer returned invalid {name}: {value!r}", route_id=route_id)
        if value < 0:
            raise OptimizationFailedError(f"Optimizer returned negative {name}: {value!r}", route_id=route_id)
