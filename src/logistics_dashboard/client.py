"""HTTP client for the dashboard API and the route optimizer workflow."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

OPTIMIZATION_FAILED_NOTICE = "Optimization failed"


class ApiError(Exception):
    """Non-2xx response from the dashboard API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class OptimizationPendingError(Exception):
    """Raised when an optimization is requested while another one is running."""


class DashboardClient:
    """Thin wrapper over ``httpx.Client`` speaking the dashboard's JSON API.

    ``http`` may be any ``httpx.Client``, including FastAPI's ``TestClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        api_prefix: str = "/api",
        timeout: float = 30.0,
        http: httpx.Client | None = None,
    ) -> None:
        self._http = http or httpx.Client(base_url=base_url, timeout=httpx.Timeout(timeout, connect=10.0))
        self._owns_http = http is None
        self.api_prefix = api_prefix.rstrip("/")

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "DashboardClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._http.request(method, f"{self.api_prefix}{path}", **kwargs)
        if response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def list_records(self, collection: str) -> list[dict]:
        return self.request("GET", f"/{collection}")

    def get_record(self, collection: str, record_id: str) -> dict:
        return self.request("GET", f"/{collection}/{record_id}")

    def create_record(self, collection: str, data: dict) -> dict:
        return self.request("POST", f"/{collection}", json=data)

    def update_record(self, collection: str, record_id: str, patch: dict) -> dict:
        return self.request("PATCH", f"/{collection}/{record_id}", json=patch)

    def delete_record(self, collection: str, record_id: str) -> None:
        self.request("DELETE", f"/{collection}/{record_id}")

    def health(self) -> dict:
        return self.request("GET", "/health")

    def optimize_route(self, route_id: str) -> dict:
        return self.request("POST", f"/analytics/optimize-route/{route_id}")

    def route_optimizations(self, route_id: Optional[str] = None) -> list[dict]:
        params = {"routeId": route_id} if route_id else None
        return self.request("GET", "/analytics/route-optimizations", params=params)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase


class RouteOptimizerSession:
    """Select one route, optimize it, and keep the optimization history fresh.

    Only one optimization may be in flight per session.
    """

    def __init__(self, client: DashboardClient) -> None:
        self.client = client
        self.routes: list[dict] = []
        self.selected_route_id: Optional[str] = None
        self.history: list[dict] = []
        self.notice: Optional[str] = None
        self.last_result: Optional[dict] = None
        self.last_error: Optional[Exception] = None
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def can_optimize(self) -> bool:
        return self.selected_route_id is not None and not self._pending

    def load_routes(self) -> list[dict]:
        self.routes = self.client.list_records("routes")
        return self.routes

    def select(self, route_id: str) -> None:
        self.selected_route_id = route_id

    def refresh_history(self) -> list[dict]:
        self.history = self.client.route_optimizations()
        return self.history

    def optimize(self) -> Optional[dict]:
        """Optimize the selected route.

        Returns the result, or None when the request failed (``notice`` then
        holds the generic failure message and the history is left as is).
        """
        if self._pending:
            raise OptimizationPendingError("An optimization is already running")
        if self.selected_route_id is None:
            raise ValueError("Select a route before optimizing")

        self._pending = True
        try:
            try:
                result = self.client.optimize_route(self.selected_route_id)
            except (ApiError, httpx.HTTPError) as exc:
                logger.warning("Optimization of route %s failed: %s", self.selected_route_id, exc)
                self.last_error = exc
                self.notice = OPTIMIZATION_FAILED_NOTICE
                return None
            self.last_result = result
            self.last_error = None
            self.notice = f"Saved {result['timeSaved']} minutes and {result['fuelSaved']}L of fuel"
            try:
                self.refresh_history()
            except (ApiError, httpx.HTTPError) as exc:
                # The optimization itself succeeded; keep the cached history until the next refresh
                logger.warning("Could not refresh optimization history: %s", exc)
            return result
        finally:
            self._pending = False
