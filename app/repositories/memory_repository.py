"""
In-memory ledger implementing both repository protocols.

Used by the test-suite and by ``STORE_BACKEND=memory``. Aggregation runs the
pure domain functions, so it is the executable reference for what the SQL
repository pushes down to Postgres.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from app.domain.bucketing import aggregate
from app.domain.filters import RevenueFilters
from app.domain.models import Granularity, Group, Membership, RevenueBucket, Sale, ScopeKind, User

DateLike = Union[str, date, datetime]


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(value)


class InMemoryLedger:
    """Read-only snapshot of users, groups, memberships and sales."""

    def __init__(
        self,
        users: Iterable[User] = (),
        groups: Iterable[Group] = (),
        memberships: Iterable[Membership] = (),
        sales: Iterable[Sale] = (),
    ):
        self._users = {user.id: user for user in users}
        self._groups = {group.id: group for group in groups}
        self._memberships = frozenset(memberships)
        self._sales = tuple(sorted(sales, key=lambda sale: sale.id))

    @classmethod
    def from_records(
        cls,
        *,
        users: Iterable[Union[int, dict[str, Any]]] = (),
        groups: Iterable[Union[int, dict[str, Any]]] = (),
        memberships: Iterable[tuple[int, int]] = (),
        sales: Iterable[tuple[int, Any, DateLike]] = (),
    ) -> "InMemoryLedger":
        """
        Build a ledger from plain values.

        ``users``/``groups`` are ids or dicts with an ``id`` key,
        ``memberships`` are ``(user_id, group_id)`` pairs and ``sales`` are
        ``(user_id, amount, date)`` triples; sale ids are assigned in order.
        """
        return cls(
            users=[_entity(User, record) for record in users],
            groups=[_entity(Group, record) for record in groups],
            memberships=[Membership(user_id=u, group_id=g) for u, g in memberships],
            sales=[
                Sale(
                    id=index,
                    user_id=user_id,
                    amount=Decimal(str(amount)),
                    date=_as_datetime(when),
                )
                for index, (user_id, amount, when) in enumerate(sales, start=1)
            ],
        )

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "InMemoryLedger":
        """Load ``{"users": [...], "groups": [...], "memberships": [...], "sales": [...]}``."""
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.from_records(
            users=payload.get("users", []),
            groups=payload.get("groups", []),
            memberships=[tuple(pair) for pair in payload.get("memberships", [])],
            sales=[
                (row["user_id"], row["amount"], row["date"])
                for row in payload.get("sales", [])
            ],
        )

    # ------------------------------------------------------------------
    # SalesRepositoryProtocol
    # ------------------------------------------------------------------

    def average_revenue(
        self, filters: RevenueFilters, granularity: Granularity
    ) -> list[RevenueBucket]:
        members = None
        if filters.scope_kind is ScopeKind.GROUP:
            members = self.members_of(filters.scope_id)
        matched = [sale for sale in self._sales if filters.matches(sale, members)]
        return aggregate(matched, granularity)

    def list_sales(self) -> list[dict[str, Any]]:
        return [
            {"id": s.id, "user_id": s.user_id, "amount": s.amount, "date": s.date}
            for s in self._sales
        ]

    # ------------------------------------------------------------------
    # DirectoryRepositoryProtocol
    # ------------------------------------------------------------------

    def list_users(self) -> list[dict[str, Any]]:
        return [self._users[key].as_row() for key in sorted(self._users)]

    def get_user(self, user_id: int) -> Optional[dict[str, Any]]:
        user = self._users.get(user_id)
        return user.as_row() if user else None

    def list_groups(self) -> list[dict[str, Any]]:
        return [self._groups[key].as_row() for key in sorted(self._groups)]

    def get_group(self, group_id: int) -> Optional[dict[str, Any]]:
        group = self._groups.get(group_id)
        return group.as_row() if group else None

    def members_of(self, group_id: int) -> set[int]:
        return {m.user_id for m in self._memberships if m.group_id == group_id}


def _entity(kind, record: Union[int, dict[str, Any]]):
    if isinstance(record, dict):
        attributes = {k: v for k, v in record.items() if k != "id"}
        return kind(id=int(record["id"]), attributes=attributes)
    return kind(id=int(record))
