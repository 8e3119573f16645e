"""Shared fixtures: an in-memory ledger and an API client wired to it."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.repositories.memory_repository import InMemoryLedger
from app.services.dependencies import get_directory_service, get_revenue_service
from app.services.directory_service import DirectoryService
from app.services.revenue_service import RevenueService


@pytest.fixture
def ledger() -> InMemoryLedger:
    """
    Users 1-3; group 10 = {1, 2}, group 20 = {2, 3}, group 30 has no members.
    User 2 belongs to two groups.
    """
    return InMemoryLedger.from_records(
        users=[
            {"id": 1, "name": "Ada"},
            {"id": 2, "name": "Grace"},
            {"id": 3, "name": "Linus"},
        ],
        groups=[
            {"id": 10, "name": "North"},
            {"id": 20, "name": "South"},
            {"id": 30, "name": "Empty"},
        ],
        memberships=[(1, 10), (2, 10), (2, 20), (3, 20)],
        sales=[
            (1, 10, "2024-01-05T09:15:00"),
            (1, 30, "2024-01-05T17:40:00"),
            (1, 20, "2024-02-10T12:00:00"),
            (2, 100, "2024-01-05T11:00:00"),
            (3, 50, "2024-03-01T08:00:00"),
        ],
    )


@pytest.fixture
def revenue_service(ledger: InMemoryLedger) -> RevenueService:
    return RevenueService(ledger)


@pytest.fixture
def client(ledger: InMemoryLedger):
    app.dependency_overrides[get_revenue_service] = lambda: RevenueService(ledger)
    app.dependency_overrides[get_directory_service] = lambda: DirectoryService(ledger, ledger)
    yield TestClient(app)
    app.dependency_overrides.clear()
