"""Average revenue endpoints for users and groups."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from app.domain.filters import parse_scope_id
from app.domain.models import Granularity, RevenueBucket
from app.services.dependencies import get_revenue_service
from app.services.revenue_service import RevenueService


router = APIRouter(tags=["revenue"])


# -----------------------------------------------------------------------------
# Response Models
# -----------------------------------------------------------------------------


class RevenueBucketRow(BaseModel):
    """One bucket: the scope id for all-time averages, else the day or month."""
    bucket_key: Union[int, date]
    average_revenue: Decimal
    sale_count: int


def to_rows(buckets: list[RevenueBucket], scope_id: Union[int, str]) -> list[RevenueBucketRow]:
    key_for_all_time = parse_scope_id(scope_id)
    return [
        RevenueBucketRow(
            bucket_key=bucket.label(key_for_all_time),
            average_revenue=bucket.average,
            sale_count=bucket.count,
        )
        for bucket in buckets
    ]


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.get("/users/{user_id}/revenue/average", response_model=list[RevenueBucketRow])
def get_user_average_revenue(
    user_id: str,
    granularity: Granularity = Query(Granularity.NONE, description="none, daily ou monthly"),
    start: Optional[str] = Query(None, description="Data inicial inclusiva (ISO8601)"),
    end: Optional[str] = Query(None, description="Data final inclusiva (ISO8601)"),
    service: RevenueService = Depends(get_revenue_service),
):
    """Receita média do usuário; sem `start` e `end` juntos, todo o período."""
    buckets = service.for_user(user_id, granularity, start, end)
    return to_rows(buckets, user_id)


@router.get("/groups/{group_id}/revenue/average", response_model=list[RevenueBucketRow])
def get_group_average_revenue(
    group_id: str,
    granularity: Granularity = Query(Granularity.NONE, description="none, daily ou monthly"),
    start: Optional[str] = Query(None, description="Data inicial inclusiva (ISO8601)"),
    end: Optional[str] = Query(None, description="Data final inclusiva (ISO8601)"),
    service: RevenueService = Depends(get_revenue_service),
):
    """Receita média das vendas de todos os membros do grupo."""
    buckets = service.for_group(group_id, granularity, start, end)
    return to_rows(buckets, group_id)
