"""Sales listing endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from app.services.dependencies import get_directory_service
from app.services.directory_service import DirectoryService


router = APIRouter(prefix="/sales", tags=["sales"])


@router.get("")
def list_sales(service: DirectoryService = Depends(get_directory_service)) -> list[dict[str, Any]]:
    """Todas as vendas, sem paginação."""
    return service.list_sales()
