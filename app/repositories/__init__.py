"""
Repositórios para acesso a dados.
Implementam a camada de persistência seguindo Clean Architecture.
"""

from .directory_repository import DirectoryRepository
from .memory_repository import InMemoryLedger
from .sales_repository import SalesRepository

__all__ = [
    "DirectoryRepository",
    "InMemoryLedger",
    "SalesRepository",
]
