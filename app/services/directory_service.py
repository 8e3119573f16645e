"""Passthrough listings of users, groups and sales."""

from __future__ import annotations

from typing import Any, Union

from app.domain.filters import parse_scope_id
from app.repositories.protocols import DirectoryRepositoryProtocol, SalesRepositoryProtocol
from app.services.errors import store_read


class DirectoryService:
    """Read-only listings; single-entity lookups return zero or one row."""

    def __init__(
        self,
        directory: DirectoryRepositoryProtocol,
        sales: SalesRepositoryProtocol,
    ):
        self.directory = directory
        self.sales = sales

    def list_users(self) -> list[dict[str, Any]]:
        with store_read("list_users"):
            return self.directory.list_users()

    def get_user(self, raw_id: Union[int, str]) -> list[dict[str, Any]]:
        user_id = parse_scope_id(raw_id)
        with store_read("get_user", user_id=user_id):
            row = self.directory.get_user(user_id)
        return [row] if row else []

    def list_groups(self) -> list[dict[str, Any]]:
        with store_read("list_groups"):
            return self.directory.list_groups()

    def get_group(self, raw_id: Union[int, str]) -> list[dict[str, Any]]:
        group_id = parse_scope_id(raw_id)
        with store_read("get_group", group_id=group_id):
            row = self.directory.get_group(group_id)
        return [row] if row else []

    def members_of(self, raw_id: Union[int, str]) -> list[int]:
        group_id = parse_scope_id(raw_id)
        with store_read("members_of", group_id=group_id):
            return sorted(self.directory.members_of(group_id))

    def list_sales(self) -> list[dict[str, Any]]:
        with store_read("list_sales"):
            return self.sales.list_sales()
