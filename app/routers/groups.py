"""Group listing and membership endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from app.services.dependencies import get_directory_service
from app.services.directory_service import DirectoryService


router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("")
def list_groups(service: DirectoryService = Depends(get_directory_service)) -> list[dict[str, Any]]:
    return service.list_groups()


@router.get("/{group_id}")
def get_group(
    group_id: str,
    service: DirectoryService = Depends(get_directory_service),
) -> list[dict[str, Any]]:
    """Perfil do grupo; lista vazia se não existir."""
    return service.get_group(group_id)


@router.get("/{group_id}/members")
def get_group_members(
    group_id: str,
    service: DirectoryService = Depends(get_directory_service),
) -> list[int]:
    """Ids dos usuários associados ao grupo."""
    return service.members_of(group_id)
