import pytest
from fastapi.testclient import TestClient

from logistics_dashboard.config import Settings
from logistics_dashboard.main import create_app
from logistics_dashboard.persistence.memory import MemoryStore


class FailingOptimizer:
    def optimize(self, request):
        raise TimeoutError("remote optimizer timed out")


class BrokenStore(MemoryStore):
    def get_all(self, kind):
        raise RuntimeError("disk on fire at /var/secret")


def _settings(**overrides) -> Settings:
    values = {"solver_time_limit_seconds": 1, "storage_backend": "memory", "optimizer_backend": "local"}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app(settings=_settings(), store=MemoryStore()))


def _create_shop(client: TestClient, name: str, lon: float, **extra) -> dict:
    payload = {"name": name, "latitude": -1.26, "longitude": lon, **extra}
    response = client.post("/api/shops", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_root_and_health(api_client: TestClient):
    assert api_client.get("/").json()["status"] == "running"

    response = api_client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert "timestamp" in body


def test_shop_lifecycle(api_client: TestClient):
    shop = _create_shop(api_client, "Mama Mboga", 36.86, ownerName="Achieng")

    assert shop["id"] == "1"
    assert shop["category"] == "retail"
    assert shop["status"] == "active"
    assert shop["ownerName"] == "Achieng"

    listed = api_client.get("/api/shops").json()
    assert [item["id"] for item in listed] == [shop["id"]]

    patched = api_client.patch(f"/api/shops/{shop['id']}", json={"status": "inactive"})
    assert patched.status_code == 200
    assert patched.json()["status"] == "inactive"
    assert patched.json()["name"] == "Mama Mboga"
    assert patched.json()["latitude"] == -1.26

    deleted = api_client.delete(f"/api/shops/{shop['id']}")
    assert deleted.status_code == 204
    assert deleted.content == b""

    missing = api_client.get(f"/api/shops/{shop['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Shop not found"}
    assert api_client.delete(f"/api/shops/{shop['id']}").status_code == 404


def test_create_with_invalid_fields_returns_details(api_client: TestClient):
    response = api_client.post("/api/shops", json={"latitude": "1.5", "longitude": 36.8})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid shop data"
    assert {detail["field"] for detail in body["details"]} == {"name", "latitude"}
    assert api_client.get("/api/shops").json() == []


def test_malformed_json_is_a_bad_request(api_client: TestClient):
    response = api_client.post(
        "/api/drivers",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_update_unknown_and_mistyped(api_client: TestClient):
    assert api_client.patch("/api/drivers/99", json={"name": "X"}).status_code == 404

    driver = api_client.post("/api/drivers", json={"name": "Juma", "phone": "0711", "vehicleType": "van"}).json()
    response = api_client.patch(f"/api/drivers/{driver['id']}", json={"status": "sleeping"})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "status"
    assert api_client.get(f"/api/drivers/{driver['id']}").json()["status"] == "available"


def test_route_and_target_wire_format(api_client: TestClient):
    driver = api_client.post("/api/drivers", json={"name": "Juma", "phone": "0711", "vehicleType": "van"}).json()
    route = api_client.post(
        "/api/routes",
        json={"name": "Morning", "date": "2024-05-01", "driverId": driver["id"], "shopIds": ["5", "6"]},
    )
    target = api_client.post(
        "/api/targets",
        json={
            "driverId": driver["id"],
            "period": "weekly",
            "targetShops": 10,
            "targetDeliveries": 40,
            "startDate": "2024-05-01",
            "endDate": "2024-05-07",
        },
    )

    assert route.status_code == 201
    assert route.json()["date"] == "2024-05-01"
    assert route.json()["shopIds"] == ["5", "6"]
    assert route.json()["status"] == "planned"
    assert target.status_code == 201
    assert target.json()["completedShops"] == 0

    targets = api_client.get(f"/api/drivers/{driver['id']}/targets").json()
    assert [item["id"] for item in targets] == [target.json()["id"]]
    assert api_client.get("/api/drivers/404/targets").status_code == 404


def test_route_shops_follow_route_order(api_client: TestClient):
    first = _create_shop(api_client, "First", 36.80)
    second = _create_shop(api_client, "Second", 36.81)
    route = api_client.post(
        "/api/routes",
        json={"name": "Morning", "date": "2024-05-01", "shopIds": [second["id"], "ghost", first["id"]]},
    ).json()

    shops = api_client.get(f"/api/routes/{route['id']}/shops").json()

    assert [shop["name"] for shop in shops] == ["Second", "First"]


def test_optimize_route_and_history(api_client: TestClient):
    ids = [_create_shop(api_client, f"S{index}", lon)["id"] for index, lon in enumerate([36.80, 36.83, 36.81, 36.84, 36.82])]
    driver = api_client.post("/api/drivers", json={"name": "Juma", "phone": "0711", "vehicleType": "van"}).json()
    route = api_client.post(
        "/api/routes",
        json={"name": "Morning", "date": "2024-05-01", "driverId": driver["id"], "shopIds": ids},
    ).json()

    response = api_client.post(f"/api/analytics/optimize-route/{route['id']}")

    assert response.status_code == 200
    result = response.json()
    assert result["optimizedOrder"] == [ids[0], ids[2], ids[4], ids[1], ids[3]]
    assert result["timeSaved"] > 0
    assert result["fuelSaved"] > 0
    assert result["optimizedDistance"] < result["originalDistance"]

    history = api_client.get("/api/analytics/route-optimizations").json()
    assert len(history) == 1
    assert history[0]["routeId"] == route["id"]
    assert "createdAt" in history[0]
    assert api_client.get("/api/analytics/route-optimizations", params={"routeId": "nope"}).json() == []


def test_optimize_unknown_route(api_client: TestClient):
    response = api_client.post("/api/analytics/optimize-route/404")

    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}


def test_optimizer_failure_is_generic_and_not_cached():
    client = TestClient(create_app(settings=_settings(), store=MemoryStore(), optimizer=FailingOptimizer()))
    route = client.post("/api/routes", json={"name": "Morning", "date": "2024-05-01"}).json()

    response = client.post(f"/api/analytics/optimize-route/{route['id']}")

    assert response.status_code == 502
    assert response.json() == {"error": "Optimization failed"}
    assert client.get("/api/analytics/route-optimizations").json() == []


def test_summary_counts(api_client: TestClient):
    _create_shop(api_client, "A", 36.80)
    _create_shop(api_client, "B", 36.81, status="inactive")
    driver = api_client.post("/api/drivers", json={"name": "Juma", "phone": "0711", "vehicleType": "van"}).json()
    api_client.post(
        "/api/targets",
        json={
            "driverId": driver["id"],
            "period": "weekly",
            "targetShops": 10,
            "targetDeliveries": 0,
            "completedShops": 4,
            "startDate": "2024-05-01",
            "endDate": "2024-05-07",
        },
    )

    summary = api_client.get("/api/analytics/summary").json()

    assert summary["totalShops"] == 2
    assert summary["shopsByStatus"] == {"active": 1, "inactive": 1}
    assert summary["driversByStatus"]["available"] == 1
    assert summary["routesByStatus"] == {"planned": 0, "in_progress": 0, "completed": 0}
    assert summary["shopsOutsideServiceArea"] is None
    assert summary["optimizationsRun"] == 0
    progress = summary["targetProgress"][0]
    assert progress["shopsCompletion"] == 40.0
    assert progress["deliveriesCompletion"] is None


def test_unexpected_errors_hide_internals():
    client = TestClient(create_app(settings=_settings(), store=BrokenStore()), raise_server_exceptions=False)

    response = client.get("/api/shops")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}


def test_route_lifecycle(api_client: TestClient):
    created = api_client.post("/api/routes", json={"name": "R1", "date": "2026-02-18"})

    assert created.status_code == 201
    route = created.json()
    assert route["status"] == "planned"
    assert route["shopIds"] == []
    assert api_client.get(f"/api/routes/{route['id']}").json() == route

    patched = api_client.patch(f"/api/routes/{route['id']}", json={"status": "in_progress"})
    assert patched.status_code == 200

    fetched = api_client.get(f"/api/routes/{route['id']}").json()
    assert fetched["status"] == "in_progress"
    assert fetched["name"] == "R1"
    assert fetched["date"] == "2026-02-18"

    assert api_client.delete(f"/api/routes/{route['id']}").status_code == 204
    assert api_client.get(f"/api/routes/{route['id']}").status_code == 404


def test_driver_without_vehicle_type_is_rejected(api_client: TestClient):
    response = api_client.post("/api/drivers", json={"name": "D", "phone": "+254700000000"})

    assert response.status_code == 400
    assert response.json()["details"] == [{"field": "vehicleType", "message": "Field required"}]


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_coordinates_are_rejected(api_client: TestClient, literal: str):
    response = api_client.post(
        "/api/shops",
        content='{"name": "X", "latitude": %s, "longitude": 36.8}' % literal,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert [detail["field"] for detail in response.json()["details"]] == ["latitude"]
    assert api_client.get("/api/shops").json() == []


def test_crud_handlers_are_documented(api_client: TestClient):
    paths = api_client.app.openapi()["paths"]

    assert paths["/api/shops"]["get"]["description"] == "List every record of this kind in insertion order."
    assert paths["/api/routes/{record_id}"]["patch"]["description"] == "Merge the sent fields over an existing record."
