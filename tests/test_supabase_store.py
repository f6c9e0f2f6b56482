from collections import defaultdict
from datetime import date

from logistics_dashboard.models.domain import EntityKind, Route
from logistics_dashboard.persistence.supabase_store import SupabaseStore


class _Response:
    def __init__(self, data):
        self.data = data


class _Query:
    """Enough of the postgrest query builder for the store."""

    def __init__(self, rows: list[dict]):
        self._rows = rows
        self._op = "select"
        self._payload = None
        self._filters: list[tuple[str, object]] = []
        self._order = None
        self._limit = None

    def select(self, *columns, **kwargs):
        self._op = "select"
        return self

    def insert(self, row):
        self._op, self._payload = "insert", row
        return self

    def update(self, changes):
        self._op, self._payload = "update", changes
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column):
        self._order = column
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self):
        if self._op == "insert":
            row = dict(self._payload, created_at=f"2024-05-01T08:00:{len(self._rows):02d}+00:00")
            self._rows.append(row)
            return _Response([dict(row)])
        matched = [row for row in self._rows if self._matches(row)]
        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return _Response([dict(row) for row in matched])
        if self._op == "delete":
            self._rows[:] = [row for row in self._rows if not self._matches(row)]
            return _Response([dict(row) for row in matched])
        result = [dict(row) for row in matched]
        if self._order:
            result.sort(key=lambda row: row[self._order])
        if self._limit is not None:
            result = result[: self._limit]
        return _Response(result)


class FakeSupabase:
    def __init__(self):
        self.tables: dict[str, list[dict]] = defaultdict(list)

    def table(self, name: str) -> _Query:
        return _Query(self.tables[name])


def test_create_writes_snake_case_row_with_uuid():
    fake = FakeSupabase()
    store = SupabaseStore(fake)

    shop = store.create(EntityKind.SHOP, {"name": "Duka", "latitude": -1.26, "longitude": 36.86, "owner_name": "Otieno"})

    row = fake.tables["shops"][0]
    assert row["id"] == shop.id
    assert len(shop.id) == 36
    assert row["owner_name"] == "Otieno"
    assert row["category"] == "retail"


def test_dates_round_trip_as_iso_strings():
    fake = FakeSupabase()
    store = SupabaseStore(fake)

    route = store.create(EntityKind.ROUTE, {"name": "Morning", "date": date(2024, 5, 1), "shop_ids": ["a"]})

    assert fake.tables["routes"][0]["date"] == "2024-05-01"
    fetched = store.get_by_id(EntityKind.ROUTE, route.id)
    assert isinstance(fetched, Route)
    assert fetched.date == date(2024, 5, 1)
    assert fetched.shop_ids == ["a"]


def test_get_all_follows_creation_order():
    store = SupabaseStore(FakeSupabase())
    for name in ("A", "B", "C"):
        store.create(EntityKind.SHOP, {"name": name, "latitude": 0.0, "longitude": 0.0})

    assert [shop.name for shop in store.get_all(EntityKind.SHOP)] == ["A", "B", "C"]
    assert store.count(EntityKind.SHOP) == 3


def test_update_sends_only_patched_columns():
    fake = FakeSupabase()
    store = SupabaseStore(fake)
    shop = store.create(EntityKind.SHOP, {"name": "Duka", "latitude": 1.0, "longitude": 2.0})

    updated = store.update(EntityKind.SHOP, shop.id, {"status": "inactive", "bogus": True})

    assert updated.status == "inactive"
    assert updated.name == "Duka"
    assert "bogus" not in fake.tables["shops"][0]
    assert store.get_by_id(EntityKind.SHOP, shop.id).status == "inactive"


def test_unknown_ids():
    store = SupabaseStore(FakeSupabase())

    assert store.get_by_id(EntityKind.DRIVER, "nope") is None
    assert store.update(EntityKind.DRIVER, "nope", {"name": "X"}) is None
    assert store.delete(EntityKind.DRIVER, "nope") is False


def test_delete_removes_row_once():
    store = SupabaseStore(FakeSupabase())
    driver = store.create(EntityKind.DRIVER, {"name": "Juma", "phone": "0711", "vehicle_type": "van"})

    assert store.delete(EntityKind.DRIVER, driver.id) is True
    assert store.delete(EntityKind.DRIVER, driver.id) is False
