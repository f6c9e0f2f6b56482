import httpx
import pytest

from logistics_dashboard.config import Settings
from logistics_dashboard.errors import OptimizationFailedError
from logistics_dashboard.services.optimization.models import OptimizationRequest, OptimizationStop
from logistics_dashboard.services.optimization.remote import RemoteOptimizer


def _request() -> OptimizationRequest:
    return OptimizationRequest(
        route_id="r1",
        route_name="Morning",
        stops=[
            OptimizationStop(shop_id="a", name="A", latitude=-1.26, longitude=36.80),
            OptimizationStop(shop_id="b", name="B", latitude=-1.26, longitude=36.81),
        ],
        vehicle_type="van",
    )


def _optimizer(handler) -> RemoteOptimizer:
    settings = Settings(optimizer_backend="remote", optimizer_url="http://optimizer.local/")
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return RemoteOptimizer(settings, client=client)


def test_posts_route_and_parses_result():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(
            200,
            json={
                "optimizedOrder": ["b", "a"],
                "originalDistance": 3.0,
                "optimizedDistance": 2.5,
                "timeSaved": 1.2,
                "fuelSaved": 0.05,
                "suggestions": ["Start at B"],
            },
        )

    result = _optimizer(handler).optimize(_request())

    assert seen["url"] == "http://optimizer.local/optimize"
    assert b'"routeId":"r1"' in seen["body"].replace(b" ", b"")
    assert result.optimized_order == ["b", "a"]
    assert result.time_saved == 1.2
    assert result.suggestions == ["Start at B"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "down"}),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"optimizedOrder": ["a"]}),
        httpx.Response(
            200,
            json={
                "optimizedOrder": ["a"],
                "originalDistance": 1.0,
                "optimizedDistance": 1.0,
                "timeSaved": -1.0,
                "fuelSaved": 0.0,
            },
        ),
    ],
)
def test_bad_responses_become_optimization_failures(response):
    optimizer = _optimizer(lambda request: response)

    with pytest.raises(OptimizationFailedError) as exc_info:
        optimizer.optimize(_request())

    assert exc_info.value.message == "Optimization failed"


def test_transport_errors_become_optimization_failures():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(OptimizationFailedError) as exc_info:
        _optimizer(handler).optimize(_request())

    assert "timed out" in exc_info.value.detail
