"""Revenue aggregation business logic service."""

from __future__ import annotations

from datetime import date
from typing import Optional, Union

from app.core.logging import revenue_logger
from app.domain.errors import InvalidGranularity
from app.domain.filters import narrow, resolve_scope
from app.domain.models import (
    AggregateRevenueRequest,
    Granularity,
    RevenueBucket,
    ScopeKind,
)
from app.repositories.protocols import SalesRepositoryProtocol
from app.services.errors import store_read


class RevenueService:
    """
    Average revenue of one user or one group, optionally bucketed and bounded.

    Each call validates the request, builds the row predicate and issues a
    single read against the sales repository. Nothing is kept between calls.
    """

    def __init__(self, repository: SalesRepositoryProtocol):
        self.repository = repository

    def average_revenue(self, request: AggregateRevenueRequest) -> list[RevenueBucket]:
        """
        Run one aggregation request.

        Raises:
            InvalidScope: malformed scope id.
            InvalidGranularity: granularity outside none/daily/monthly.
            InvalidRange: malformed or inverted date bounds.
            StoreUnavailable: the store read failed.
        """
        try:
            granularity = Granularity(request.granularity)
        except ValueError as exc:
            raise InvalidGranularity(
                f"Unknown granularity: {request.granularity!r}",
                {"allowed": [g.value for g in Granularity]},
            ) from exc
        filters = resolve_scope(request.scope_kind, request.scope_id)
        filters = narrow(filters, request.range_start, request.range_end)

        with store_read(
            "average_revenue",
            scope_kind=filters.scope_kind.value,
            scope_id=filters.scope_id,
        ):
            buckets = self.repository.average_revenue(filters, granularity)

        revenue_logger.info(
            "Average revenue computed",
            scope_kind=filters.scope_kind.value,
            scope_id=filters.scope_id,
            granularity=granularity.value,
            bounded=filters.bounded,
            buckets=len(buckets),
        )
        return buckets

    def for_user(
        self,
        user_id: Union[int, str],
        granularity: Granularity = Granularity.NONE,
        start: Optional[Union[date, str]] = None,
        end: Optional[Union[date, str]] = None,
    ) -> list[RevenueBucket]:
        return self.average_revenue(
            AggregateRevenueRequest(ScopeKind.USER, user_id, granularity, start, end)
        )

    def for_group(
        self,
        group_id: Union[int, str],
        granularity: Granularity = Granularity.NONE,
        start: Optional[Union[date, str]] = None,
        end: Optional[Union[date, str]] = None,
    ) -> list[RevenueBucket]:
        return self.average_revenue(
            AggregateRevenueRequest(ScopeKind.GROUP, group_id, granularity, start, end)
        )
