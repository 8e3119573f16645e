"""
Time bucketing and the per-bucket average.

``date_trunc_expr`` is the SQL form of ``bucket_key_of``; the SQL repository
pushes it down to Postgres, the in-memory ledger calls the Python side.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from app.domain.models import ALL_TIME, BucketKey, Granularity, RevenueBucket, Sale

_SQL_GRAINS = {
    Granularity.DAILY: "day",
    Granularity.MONTHLY: "month",
}


def bucket_key_of(timestamp: datetime, granularity: Granularity) -> BucketKey:
    """Truncate ``timestamp`` to its bucket; the zone of the value is used as-is."""
    if granularity is Granularity.NONE:
        return ALL_TIME
    if granularity is Granularity.DAILY:
        return timestamp.date()
    if granularity is Granularity.MONTHLY:
        return date(timestamp.year, timestamp.month, 1)
    raise ValueError(f"Granularidade invalida: {granularity}")


def date_trunc_expr(granularity: Granularity, column: str = "s.date") -> str:
    """SQL expression producing the bucket key of ``column`` as a ``date``."""
    grain = _SQL_GRAINS.get(granularity)
    if grain is None:
        raise ValueError(f"Granularidade sem truncamento: {granularity}")
    return f"DATE_TRUNC('{grain}', {column})::date"


def aggregate(sales: Iterable[Sale], granularity: Granularity) -> list[RevenueBucket]:
    """
    Average sale amount per bucket, buckets in ascending key order.

    Empty periods produce no bucket, and no sales produce an empty list.
    """
    totals: dict[BucketKey, Decimal] = defaultdict(Decimal)
    counts: dict[BucketKey, int] = defaultdict(int)

    for sale in sales:
        key = bucket_key_of(sale.date, granularity)
        totals[key] += sale.amount
        counts[key] += 1

    keys = list(totals) if granularity is Granularity.NONE else sorted(totals)
    return [
        RevenueBucket(key=key, average=totals[key] / counts[key], count=counts[key])
        for key in keys
    ]
