"""HTTP surface, served from the in-memory ledger."""

from __future__ import annotations

from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.main import app
from app.repositories.memory_repository import InMemoryLedger
from app.routers import health
from app.services.dependencies import get_revenue_service
from app.services.revenue_service import RevenueService


def test_user_overall_average(client):
    response = client.get("/users/1/revenue/average")

    assert response.status_code == 200
    assert response.json() == [{"bucket_key": 1, "average_revenue": "20", "sale_count": 3}]


def test_user_daily_average(client):
    response = client.get("/users/1/revenue/average", params={"granularity": "daily"})

    assert response.status_code == 200
    assert response.json() == [
        {"bucket_key": "2024-01-05", "average_revenue": "20", "sale_count": 2},
        {"bucket_key": "2024-02-10", "average_revenue": "20", "sale_count": 1},
    ]


def test_user_daily_average_in_range(client):
    response = client.get(
        "/users/1/revenue/average",
        params={"granularity": "daily", "start": "2024-02-01", "end": "2024-02-28"},
    )

    assert response.json() == [{"bucket_key": "2024-02-10", "average_revenue": "20", "sale_count": 1}]


def test_lone_start_is_ignored(client):
    bounded_once = client.get("/users/1/revenue/average", params={"granularity": "daily", "start": "2024-02-01"})
    unbounded = client.get("/users/1/revenue/average", params={"granularity": "daily"})

    assert bounded_once.status_code == 200
    assert bounded_once.json() == unbounded.json()


def test_group_monthly_average(client):
    response = client.get(
        "/groups/10/revenue/average",
        params={"granularity": "monthly", "start": "2024-01-01", "end": "2024-01-31"},
    )

    [row] = response.json()
    assert row["bucket_key"] == "2024-01-01"
    assert Decimal(row["average_revenue"]) == Decimal(140) / Decimal(3)
    assert row["sale_count"] == 3


def test_average_keeps_the_store_precision(client):
    precise = InMemoryLedger.from_records(
        users=[1],
        sales=[
            (1, "12345678901234567.89", "2024-01-05T10:00:00"),
            (1, "0.01", "2024-01-06T10:00:00"),
        ],
    )
    app.dependency_overrides[get_revenue_service] = lambda: RevenueService(precise)

    [row] = client.get("/users/1/revenue/average").json()

    assert Decimal(row["average_revenue"]) == Decimal("6172839450617283.95")
    assert row["sale_count"] == 2


def test_group_overall_average_is_keyed_by_group(client):
    [row] = client.get("/groups/20/revenue/average").json()

    assert row == {"bucket_key": 20, "average_revenue": "75", "sale_count": 2}


def test_unknown_scope_is_an_empty_success(client):
    for path in ("/users/999/revenue/average", "/groups/999/revenue/average"):
        response = client.get(path, params={"granularity": "monthly"})
        assert response.status_code == 200
        assert response.json() == []


def test_malformed_scope_id_is_a_client_error(client):
    response = client.get("/users/abc/revenue/average")

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_scope"


def test_inverted_range_is_a_client_error(client):
    response = client.get(
        "/groups/10/revenue/average", params={"start": "2024-03-01", "end": "2024-02-01"}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "invalid_range"
    assert body["context"] == {"start": "2024-03-01", "end": "2024-02-01"}


def test_malformed_date_is_a_client_error(client):
    response = client.get("/users/1/revenue/average", params={"start": "2024-02-30", "end": "2024-03-01"})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_range"


def test_unknown_granularity_is_rejected(client):
    response = client.get("/users/1/revenue/average", params={"granularity": "weekly"})

    assert response.status_code == 422


def test_store_failure_is_a_server_error(client):
    class BrokenStore:
        def average_revenue(self, filters, granularity):
            raise OperationalError("SELECT ...", {}, Exception("timeout"))

    app.dependency_overrides[get_revenue_service] = lambda: RevenueService(BrokenStore())

    response = client.get("/users/1/revenue/average")

    assert response.status_code == 500
    assert response.json()["error"] == "store_unavailable"
    assert response.json()["detail"] == "Database query failure"


# -----------------------------------------------------------------------------
# Listings
# -----------------------------------------------------------------------------


def test_listings(client):
    assert [u["id"] for u in client.get("/users").json()] == [1, 2, 3]
    assert client.get("/users/2").json() == [{"id": 2, "name": "Grace"}]
    assert client.get("/users/999").json() == []
    assert [g["name"] for g in client.get("/groups").json()] == ["North", "South", "Empty"]
    assert client.get("/groups/30").json() == [{"id": 30, "name": "Empty"}]
    assert client.get("/groups/20/members").json() == [2, 3]
    assert client.get("/groups/30/members").json() == []

    sales = client.get("/sales").json()
    assert [s["user_id"] for s in sales] == [1, 1, 1, 2, 3]


def test_listing_with_malformed_id(client):
    assert client.get("/groups/x1").status_code == 400


# -----------------------------------------------------------------------------
# Legacy names
# -----------------------------------------------------------------------------


def test_legacy_revenue_routes_match_new_ones(client):
    legacy = client.get("/averageDailyRevenue/1", params={"start": "2024-02-01", "end": "2024-02-28"})
    current = client.get(
        "/users/1/revenue/average",
        params={"granularity": "daily", "start": "2024-02-01", "end": "2024-02-28"},
    )

    assert legacy.status_code == 200
    assert legacy.json() == current.json()
    assert legacy.headers["X-API-Deprecated"] == "true"
    assert "/users/1/revenue/average?granularity=daily" in legacy.headers["X-API-Deprecation-Info"]


def test_legacy_group_routes(client):
    assert client.get("/averageGroupRevenue/10").json() == client.get("/groups/10/revenue/average").json()
    assert (
        client.get("/averageMonthlyGroupRevenue/10").json()
        == client.get("/groups/10/revenue/average", params={"granularity": "monthly"}).json()
    )
    assert client.get("/groupInfo/10").json() == [{"id": 10, "name": "North"}]


def test_legacy_listings(client):
    response = client.get("/allUserInfo")

    assert len(response.json()) == 3
    assert response.headers["X-API-Deprecation-Info"] == "Use /users instead"
    assert len(client.get("/getallgroups").json()) == 3
    assert len(client.get("/getallsales").json()) == 5


# -----------------------------------------------------------------------------
# Health
# -----------------------------------------------------------------------------


def test_health_endpoints():
    client = TestClient(app)

    assert client.get("/health").text == "Hello World!"
    assert client.get("/healthz").json() == {"status": "ok"}


def test_readyz_reports_database(monkeypatch):
    monkeypatch.setattr(health, "health_check", lambda: {"ok": True, "database": "actifai", "user": "user"})

    response = TestClient(app).get("/readyz")

    assert response.status_code == 200
    assert response.json()["database"]["database"] == "actifai"


def test_readyz_when_database_is_down(monkeypatch):
    def down():
        raise OperationalError("SELECT 1", {}, Exception("could not connect"))

    monkeypatch.setattr(health, "health_check", down)

    response = TestClient(app).get("/readyz")

    assert response.status_code == 503
    assert response.json()["status"] == "not ready"
