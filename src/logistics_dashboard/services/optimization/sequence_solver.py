"""OR-Tools visit-sequence optimization for a single delivery route.

The route keeps its first shop as the starting point and does not return
to it, so the problem is an open-path TSP: a dummy end node reachable at
zero cost from every shop lets the solver finish the path anywhere.
Distances are straight-line (haversine) kilometres between shops.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ortools.constraint_solver import pywrapcp, routing_enums_pb2

from ...config import Settings, settings as default_settings
from ...errors import ConfigurationError
from ..geospatial import distance_matrix_km, path_length_km
from ..service_area import ServiceArea
from .models import OptimizationRequest, RouteOptimizationResult

logger = logging.getLogger(__name__)

# Below this the solver's answer is treated as no improvement
MIN_SAVING_KM = 1e-6


def _metres(matrix: Sequence[Sequence[float]]) -> list[list[int]]:
    return [[int(round(value * 1000)) for value in row] for row in matrix]


class SequenceOptimizer:
    """Local route optimizer backed by the OR-Tools routing solver."""

    def __init__(self, settings: Settings | None = None, service_area: ServiceArea | None = None) -> None:
        self.settings = settings or default_settings
        self.service_area = service_area
        try:
            self._first_solution_strategy = getattr(
                routing_enums_pb2.FirstSolutionStrategy, self.settings.solver_first_solution_strategy
            )
        except AttributeError as exc:
            raise ConfigurationError(
                f"Unknown first solution strategy: {self.settings.solver_first_solution_strategy}",
                setting="solver_first_solution_strategy",
            ) from exc
        try:
            self._local_search_metaheuristic = getattr(
                routing_enums_pb2.LocalSearchMetaheuristic, self.settings.solver_local_search_metaheuristic
            )
        except AttributeError as exc:
            raise ConfigurationError(
                f"Unknown local search metaheuristic: {self.settings.solver_local_search_metaheuristic}",
                setting="solver_local_search_metaheuristic",
            ) from exc

    def optimize(self, request: OptimizationRequest) -> RouteOptimizationResult:
        stops = request.stops
        original_order = [stop.shop_id for stop in stops]
        suggestions = self._context_suggestions(request)

        if len(stops) < 2:
            suggestions.append("Route needs at least two known shops to optimize its sequence")
            return RouteOptimizationResult(
                optimized_order=original_order,
                original_distance=0.0,
                optimized_distance=0.0,
                time_saved=0.0,
                fuel_saved=0.0,
                suggestions=suggestions,
            )

        matrix = distance_matrix_km([(stop.latitude, stop.longitude) for stop in stops])
        identity = list(range(len(stops)))
        original_distance = path_length_km(matrix, identity)

        sequence = self._solve(matrix)
        if sequence is None:
            logger.warning("Could not solve sequence for route %s, keeping stored order", request.route_id)
            sequence = identity
        optimized_distance = path_length_km(matrix, sequence)

        # Never report a longer route than the stored one
        if original_distance - optimized_distance < MIN_SAVING_KM:
            sequence = identity
            optimized_distance = original_distance

        saved_km = max(0.0, original_distance - optimized_distance)
        time_saved = saved_km / self.settings.average_speed_kmh * 60
        fuel_saved = saved_km * self.settings.fuel_rate_for(request.vehicle_type)

        if sequence != identity:
            names = " -> ".join(stops[index].name for index in sequence)
            suggestions.insert(0, f"Visit shops in this order: {names}")
            suggestions.insert(1, f"Reordering saves {saved_km:.2f} km ({time_saved:.0f} min)")
        else:
            suggestions.insert(0, "Current shop order is already the shortest found")

        result = RouteOptimizationResult(
            optimized_order=[stops[index].shop_id for index in sequence],
            original_distance=round(original_distance, 3),
            optimized_distance=round(optimized_distance, 3),
            time_saved=round(time_saved, 1),
            fuel_saved=round(fuel_saved, 2),
            suggestions=suggestions,
        )
        logger.info(
            "Optimized route %s: %.3f km -> %.3f km",
            request.route_id,
            result.original_distance,
            result.optimized_distance,
        )
        return result

    def _solve(self, matrix: Sequence[Sequence[float]]) -> list[int] | None:
        """Open-path TSP from node 0; returns node order or None if no solution."""
        size = len(matrix)
        end_node = size
        costs = _metres(matrix)
        for row in costs:
            row.append(0)
        costs.append([0] * (size + 1))

        manager = pywrapcp.RoutingIndexManager(size + 1, 1, [0], [end_node])
        routing = pywrapcp.RoutingModel(manager)

        def distance_callback(from_index: int, to_index: int) -> int:
            from_node = manager.IndexToNode(from_index)
            to_node = manager.IndexToNode(to_index)
            return costs[from_node][to_node]

        transit_callback_index = routing.RegisterTransitCallback(distance_callback)
        routing.SetArcCostEvaluatorOfAllVehicles(transit_callback_index)

        search_parameters = pywrapcp.DefaultRoutingSearchParameters()
        search_parameters.first_solution_strategy = self._first_solution_strategy
        search_parameters.local_search_metaheuristic = self._local_search_metaheuristic
        search_parameters.time_limit.FromSeconds(self.settings.solver_time_limit_seconds)

        assignment = routing.SolveWithParameters(search_parameters)
        if not assignment:
            return None

        order: list[int] = []
        index = routing.Start(0)
        while not routing.IsEnd(index):
            order.append(manager.IndexToNode(index))
            index = assignment.Value(routing.NextVar(index))
        return order

    def _context_suggestions(self, request: OptimizationRequest) -> list[str]:
        suggestions: list[str] = []
        for shop_id in request.skipped_shop_ids:
            suggestions.append(f"Shop {shop_id} was not found and was left out")
        for stop in request.stops:
            if stop.status != "active":
                suggestions.append(f"{stop.name} is {stop.status}; confirm the visit before dispatch")
            if self.service_area is not None and not self.service_area.contains(stop.latitude, stop.longitude):
                suggestions.append(f"{stop.name} lies outside the service area")
        if request.driver_status and request.driver_status != "available":
            suggestions.append(f"Assigned driver is {request.driver_status.replace('_', ' ')}")
        return suggestions
