"""User listing endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from app.services.dependencies import get_directory_service
from app.services.directory_service import DirectoryService


router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def list_users(service: DirectoryService = Depends(get_directory_service)) -> list[dict[str, Any]]:
    return service.list_users()


@router.get("/{user_id}")
def get_user(
    user_id: str,
    service: DirectoryService = Depends(get_directory_service),
) -> list[dict[str, Any]]:
    """Perfil do usuário; lista vazia se não existir."""
    return service.get_user(user_id)
