"""
Original route names, kept as deprecated aliases of the current endpoints.

Each alias answers with the payload of its replacement and points to it via
the ``X-API-Deprecation-*`` headers.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response

from app.core.deprecation import add_deprecation_headers
from app.domain.models import Granularity
from app.routers.revenue import RevenueBucketRow, to_rows
from app.services.dependencies import get_directory_service, get_revenue_service
from app.services.directory_service import DirectoryService
from app.services.revenue_service import RevenueService


router = APIRouter(tags=["legacy"], deprecated=True)

REMOVAL_VERSION = "2.0.0"


def _user_revenue(
    granularity: Granularity,
    user_id: str,
    start: Optional[str],
    end: Optional[str],
    response: Response,
    service: RevenueService,
) -> list[RevenueBucketRow]:
    add_deprecation_headers(
        response,
        f"/users/{user_id}/revenue/average?granularity={granularity.value}",
        REMOVAL_VERSION,
    )
    return to_rows(service.for_user(user_id, granularity, start, end), user_id)


def _group_revenue(
    granularity: Granularity,
    group_id: str,
    start: Optional[str],
    end: Optional[str],
    response: Response,
    service: RevenueService,
) -> list[RevenueBucketRow]:
    add_deprecation_headers(
        response,
        f"/groups/{group_id}/revenue/average?granularity={granularity.value}",
        REMOVAL_VERSION,
    )
    return to_rows(service.for_group(group_id, granularity, start, end), group_id)


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------


@router.get("/allUserInfo")
def all_user_info(
    response: Response,
    service: DirectoryService = Depends(get_directory_service),
) -> list[dict[str, Any]]:
    add_deprecation_headers(response, "/users", REMOVAL_VERSION)
    return service.list_users()


@router.get("/userInfo/{user_id}")
def user_info(
    user_id: str,
    response: Response,
    service: DirectoryService = Depends(get_directory_service),
) -> list[dict[str, Any]]:
    add_deprecation_headers(response, f"/users/{user_id}", REMOVAL_VERSION)
    return service.get_user(user_id)


@router.get("/averageUserRevenue/{user_id}", response_model=list[RevenueBucketRow])
def average_user_revenue(
    user_id: str,
    response: Response,
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    service: RevenueService = Depends(get_revenue_service),
):
    return _user_revenue(Granularity.NONE, user_id, start, end, response, service)


@router.get("/averageDailyRevenue/{user_id}", response_model=list[RevenueBucketRow])
def average_daily_revenue(
    user_id: str,
    response: Response,
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    service: RevenueService = Depends(get_revenue_service),
):
    return _user_revenue(Granularity.DAILY, user_id, start, end, response, service)


@router.get("/averageMonthlyRevenue/{user_id}", response_model=list[RevenueBucketRow])
def average_monthly_revenue(
    user_id: str,
    response: Response,
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    service: RevenueService = Depends(get_revenue_service),
):
    return _user_revenue(Granularity.MONTHLY, user_id, start, end, response, service)


# -----------------------------------------------------------------------------
# Groups
# -----------------------------------------------------------------------------


@router.get("/getallgroups")
def get_all_groups(
    response: Response,
    service: DirectoryService = Depends(get_directory_service),
) -> list[dict[str, Any]]:
    add_deprecation_headers(response, "/groups", REMOVAL_VERSION)
    return service.list_groups()


@router.get("/groupInfo/{group_id}")
def group_info(
    group_id: str,
    response: Response,
    service: DirectoryService = Depends(get_directory_service),
) -> list[dict[str, Any]]:
    add_deprecation_headers(response, f"/groups/{group_id}", REMOVAL_VERSION)
    return service.get_group(group_id)


@router.get("/averageGroupRevenue/{group_id}", response_model=list[RevenueBucketRow])
def average_group_revenue(
    group_id: str,
    response: Response,
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    service: RevenueService = Depends(get_revenue_service),
):
    return _group_revenue(Granularity.NONE, group_id, start, end, response, service)


@router.get("/averageDailyGroupRevenue/{group_id}", response_model=list[RevenueBucketRow])
def average_daily_group_revenue(
    group_id: str,
    response: Response,
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    service: RevenueService = Depends(get_revenue_service),
):
    return _group_revenue(Granularity.DAILY, group_id, start, end, response, service)


@router.get("/averageMonthlyGroupRevenue/{group_id}", response_model=list[RevenueBucketRow])
def average_monthly_group_revenue(
    group_id: str,
    response: Response,
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    service: RevenueService = Depends(get_revenue_service),
):
    return _group_revenue(Granularity.MONTHLY, group_id, start, end, response, service)


# -----------------------------------------------------------------------------
# Sales
# -----------------------------------------------------------------------------


@router.get("/getallsales")
def get_all_sales(
    response: Response,
    service: DirectoryService = Depends(get_directory_service),
) -> list[dict[str, Any]]:
    add_deprecation_headers(response, "/sales", REMOVAL_VERSION)
    return service.list_sales()
