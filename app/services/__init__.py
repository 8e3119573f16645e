"""
Serviços de domínio separados das rotas.
"""

from .directory_service import DirectoryService  # noqa: F401
from .revenue_service import RevenueService  # noqa: F401

__all__ = [
    "DirectoryService",
    "RevenueService",
]
