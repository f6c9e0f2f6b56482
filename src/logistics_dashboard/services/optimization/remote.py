"""HTTP client for a remote route optimization service."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from ...config import Settings, settings as default_settings
from ...errors import ConfigurationError, OptimizationFailedError
from ...schemas.analytics import RouteOptimizationResultModel
from .models import OptimizationRequest, RouteOptimizationResult

logger = logging.getLogger(__name__)


class RemoteOptimizer:
    """POSTs the resolved route to ``{optimizer_url}/optimize`` and validates the reply.

    A single attempt is made per call; timeouts come from ``optimizer_timeout_seconds``.
    """

    def __init__(self, settings: Settings | None = None, client: httpx.Client | None = None) -> None:
        self.settings = settings or default_settings
        self.base_url = (self.settings.optimizer_url or "").rstrip("/")
        if not self.base_url:
            raise ConfigurationError("Remote optimizer URL is not configured.", setting="optimizer_url")
        self.timeout = self.settings.optimizer_timeout_seconds
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is not None:
            return self._client
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=10.0))

    def optimize(self, request: OptimizationRequest) -> RouteOptimizationResult:
        url = f"{self.base_url}/optimize"
        client = self._get_client()
        try:
            response = client.post(url, json=request.to_payload())
            response.raise_for_status()
            payload = RouteOptimizationResultModel.model_validate(response.json())
        except httpx.HTTPStatusError as exc:
            raise OptimizationFailedError(
                f"Optimizer returned HTTP {exc.response.status_code}", route_id=request.route_id
            ) from exc
        except httpx.HTTPError as exc:
            raise OptimizationFailedError(f"Optimizer request failed: {exc}", route_id=request.route_id) from exc
        except (ValueError, ValidationError) as exc:
            raise OptimizationFailedError(f"Malformed optimizer response: {exc}", route_id=request.route_id) from exc
        finally:
            if client is not self._client:
                client.close()

        logger.debug("Remote optimizer answered for route %s", request.route_id)
        return RouteOptimizationResult(
            optimized_order=list(payload.optimized_order),
            original_distance=payload.original_distance,
            optimized_distance=payload.optimized_distance,
            time_saved=payload.time_saved,
            fuel_saved=payload.fuel_saved,
            suggestions=list(payload.suggestions),
        )
