"""SQL built by the Postgres repositories, checked without a database."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from app.domain.filters import narrow, resolve_scope
from app.domain.models import ALL_TIME, Granularity, ScopeKind
from app.repositories import directory_repository, sales_repository
from app.repositories.directory_repository import DirectoryRepository
from app.repositories.sales_repository import SalesRepository

ENGINE = object()


class _FetchRecorder:
    def __init__(self, rows: list[dict[str, Any]]):
        self.rows = rows
        self.calls: list[dict[str, Any]] = []

    def __call__(self, engine, sql, params=None, timeout_ms=None):
        self.calls.append({"engine": engine, "sql": " ".join(sql.split()), "params": params, "timeout_ms": timeout_ms})
        return self.rows

    @property
    def sql(self) -> str:
        assert len(self.calls) == 1, "one query per request"
        return self.calls[0]["sql"]


@pytest.fixture
def recorder(monkeypatch):
    def install(rows, module=sales_repository):
        fake = _FetchRecorder(rows)
        monkeypatch.setattr(module, "fetch_all", fake)
        return fake

    return install


def test_overall_user_average(recorder):
    fake = recorder([{"sale_count": 3, "average_revenue": Decimal("20.0000000000000000")}])
    repo = SalesRepository(ENGINE, timeout_ms=1500)

    buckets = repo.average_revenue(resolve_scope(ScopeKind.USER, 1), Granularity.NONE)

    assert [(b.key, b.average, b.count) for b in buckets] == [(ALL_TIME, Decimal("20"), 3)]
    assert fake.sql == (
        "SELECT COUNT(*) AS sale_count, AVG(s.amount) AS average_revenue"
        " FROM sales s WHERE s.user_id = :scope_id"
    )
    assert fake.calls[0]["params"] == {"scope_id": 1}
    assert fake.calls[0]["engine"] is ENGINE
    assert fake.calls[0]["timeout_ms"] == 1500


def test_overall_average_without_sales_is_empty(recorder):
    recorder([{"sale_count": 0, "average_revenue": None}])
    repo = SalesRepository(ENGINE)

    assert repo.average_revenue(resolve_scope(ScopeKind.USER, 999), Granularity.NONE) == []


def test_daily_group_average_in_range(recorder):
    fake = recorder(
        [
            {"bucket_key": date(2024, 1, 5), "sale_count": 3, "average_revenue": Decimal("46.6666666666666667")},
            {"bucket_key": date(2024, 1, 9), "sale_count": 1, "average_revenue": Decimal("20")},
        ]
    )
    filters = narrow(resolve_scope(ScopeKind.GROUP, 10), "2024-01-01", "2024-01-31")

    buckets = SalesRepository(ENGINE).average_revenue(filters, Granularity.DAILY)

    assert [(b.key, b.count) for b in buckets] == [(date(2024, 1, 5), 3), (date(2024, 1, 9), 1)]
    assert buckets[0].average == Decimal("46.6666666666666667")
    assert fake.sql == (
        "SELECT DATE_TRUNC('day', s.date)::date AS bucket_key, COUNT(*) AS sale_count,"
        " AVG(s.amount) AS average_revenue FROM sales s"
        " WHERE s.user_id IN (SELECT ug.user_id FROM user_groups ug WHERE ug.group_id = :scope_id)"
        " AND s.date >= :start_date AND s.date < :end_date_exclusive"
        " GROUP BY bucket_key ORDER BY bucket_key"
    )
    assert fake.calls[0]["params"] == {
        "scope_id": 10,
        "start_date": date(2024, 1, 1),
        "end_date_exclusive": date(2024, 2, 1),
    }


def test_monthly_truncates_to_month(recorder):
    fake = recorder([])

    buckets = SalesRepository(ENGINE).average_revenue(resolve_scope(ScopeKind.USER, 1), Granularity.MONTHLY)

    assert buckets == []
    assert "DATE_TRUNC('month', s.date)::date AS bucket_key" in fake.sql


def test_members_of(recorder):
    fake = recorder([{"user_id": 1}, {"user_id": 2}], module=directory_repository)

    assert DirectoryRepository(ENGINE).members_of(10) == {1, 2}
    assert fake.calls[0]["params"] == {"group_id": 10}
    assert "FROM user_groups ug WHERE ug.group_id = :group_id" in fake.sql


def test_get_user_returns_first_row_or_none(recorder):
    recorder([{"id": 1, "name": "Ada"}], module=directory_repository)
    assert DirectoryRepository(ENGINE).get_user(1) == {"id": 1, "name": "Ada"}


def test_get_group_missing(recorder):
    recorder([], module=directory_repository)
    assert DirectoryRepository(ENGINE).get_group(404) is None
