"""FastAPI dependency providers for service layer."""

from functools import lru_cache

from app.core.config import settings
from app.infra.db import get_engine
from app.repositories.directory_repository import DirectoryRepository
from app.repositories.memory_repository import InMemoryLedger
from app.repositories.sales_repository import SalesRepository
from app.services.directory_service import DirectoryService
from app.services.revenue_service import RevenueService


@lru_cache(maxsize=1)
def get_memory_ledger() -> InMemoryLedger:
    if settings.MEMORY_LEDGER_PATH:
        return InMemoryLedger.from_json(settings.MEMORY_LEDGER_PATH)
    return InMemoryLedger()


def get_revenue_service() -> RevenueService:
    if settings.STORE_BACKEND == "memory":
        return RevenueService(get_memory_ledger())
    return RevenueService(SalesRepository(get_engine()))


def get_directory_service() -> DirectoryService:
    if settings.STORE_BACKEND == "memory":
        ledger = get_memory_ledger()
        return DirectoryService(ledger, ledger)
    engine = get_engine()
    return DirectoryService(DirectoryRepository(engine), SalesRepository(engine))
