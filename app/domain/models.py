"""
Modelos de domínio e DTOs.
Representam os conceitos de negócio independentes da infraestrutura.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union


class ScopeKind(str, Enum):
    """Entity the revenue is aggregated over."""

    USER = "user"
    GROUP = "group"


class Granularity(str, Enum):
    """Time-bucketing mode of an aggregation."""

    NONE = "none"
    DAILY = "daily"
    MONTHLY = "monthly"


class AllTime(Enum):
    """Key of the single bucket produced when no time bucketing applies."""

    ALL = "all"


ALL_TIME = AllTime.ALL

BucketKey = Union[date, AllTime]


@dataclass(frozen=True)
class Sale:
    """One row of the sales fact table."""

    id: int
    user_id: int
    amount: Decimal
    date: datetime


@dataclass(frozen=True)
class User:
    id: int
    attributes: dict[str, Any] = field(default_factory=dict)

    def as_row(self) -> dict[str, Any]:
        return {"id": self.id, **self.attributes}


@dataclass(frozen=True)
class Group:
    id: int
    attributes: dict[str, Any] = field(default_factory=dict)

    def as_row(self) -> dict[str, Any]:
        return {"id": self.id, **self.attributes}


@dataclass(frozen=True)
class Membership:
    user_id: int
    group_id: int


@dataclass(frozen=True)
class RevenueBucket:
    """Average revenue of the sales that fell into one bucket."""

    key: BucketKey
    average: Decimal
    count: int

    def label(self, scope_id: int) -> Union[int, date]:
        """Public key of the bucket: the scope id for the all-time bucket."""
        if self.key is ALL_TIME:
            return scope_id
        return self.key


@dataclass(frozen=True)
class AggregateRevenueRequest:
    """
    Logical request consumed by the revenue query layer.

    ``scope_id``, ``range_start`` and ``range_end`` are kept as received
    (strings straight from the transport are fine); validation happens when
    the request is resolved.
    """

    scope_kind: ScopeKind
    scope_id: Union[int, str]
    granularity: Granularity = Granularity.NONE
    range_start: Optional[Union[date, str]] = None
    range_end: Optional[Union[date, str]] = None
