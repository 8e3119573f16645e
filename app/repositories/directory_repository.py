"""
Repositório de usuários, grupos e associações (``user_groups``).
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.engine import Engine

from app.core.config import settings
from app.infra.db import fetch_all


class DirectoryRepository:
    """Read access to users, groups and group membership."""

    def __init__(self, engine: Engine, timeout_ms: Optional[int] = None):
        self.engine = engine
        self.timeout_ms = settings.QUERY_TIMEOUT_MS if timeout_ms is None else timeout_ms

    def list_users(self) -> list[dict[str, Any]]:
        return fetch_all(self.engine, "SELECT * FROM users ORDER BY id", timeout_ms=self.timeout_ms)

    def get_user(self, user_id: int) -> Optional[dict[str, Any]]:
        return _first(fetch_all(
            self.engine,
            "SELECT * FROM users WHERE id = :user_id",
            {"user_id": user_id},
            timeout_ms=self.timeout_ms,
        ))

    def list_groups(self) -> list[dict[str, Any]]:
        return fetch_all(self.engine, "SELECT * FROM groups ORDER BY id", timeout_ms=self.timeout_ms)

    def get_group(self, group_id: int) -> Optional[dict[str, Any]]:
        return _first(fetch_all(
            self.engine,
            "SELECT * FROM groups WHERE id = :group_id",
            {"group_id": group_id},
            timeout_ms=self.timeout_ms,
        ))

    def members_of(self, group_id: int) -> set[int]:
        """User ids belonging to the group; empty for unknown groups."""
        rows = fetch_all(
            self.engine,
            "SELECT DISTINCT ug.user_id FROM user_groups ug WHERE ug.group_id = :group_id",
            {"group_id": group_id},
            timeout_ms=self.timeout_ms,
        )
        return {row["user_id"] for row in rows}


def _first(rows: list[dict[str, Any]]) -> Optional[dict[str, Any]]:
    return rows[0] if rows else None
