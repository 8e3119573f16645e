"""Repository protocol definitions used by domain services."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from app.domain.filters import RevenueFilters
from app.domain.models import Granularity, RevenueBucket


class SalesRepositoryProtocol(Protocol):
    """Contract for the sales fact store (read-only)."""

    def average_revenue(
        self, filters: RevenueFilters, granularity: Granularity
    ) -> list[RevenueBucket]: ...

    def list_sales(self) -> list[dict[str, Any]]: ...


class DirectoryRepositoryProtocol(Protocol):
    """Contract for users, groups and their memberships."""

    def list_users(self) -> list[dict[str, Any]]: ...

    def get_user(self, user_id: int) -> Optional[dict[str, Any]]: ...

    def list_groups(self) -> list[dict[str, Any]]: ...

    def get_group(self, group_id: int) -> Optional[dict[str, Any]]: ...

    def members_of(self, group_id: int) -> set[int]: ...
