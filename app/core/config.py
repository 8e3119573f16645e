from functools import lru_cache
from typing import List, Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # APP
    APP_NAME: str = "Sales Ledger Analytics API"
    ENV: str = "development"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Banco de Dados
    DATABASE_URL: str = "postgresql+psycopg2://user:pass@db:5432/actifai"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    QUERY_TIMEOUT_MS: int = 5000

    # "memory" serve o ledger em memória (demo / testes locais sem Postgres)
    STORE_BACKEND: Literal["postgres", "memory"] = "postgres"
    MEMORY_LEDGER_PATH: Optional[str] = None  # JSON com users/groups/memberships/sales

    # CORS (aceita string separada por vírgulas no .env)
    CORS_ORIGINS: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: Optional[str] = None

    @field_validator("QUERY_TIMEOUT_MS", "DB_POOL_SIZE")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("valor deve ser positivo.")
        return v

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        v = self.CORS_ORIGINS
        if not v:
            return []
        return [s.strip() for s in v.split(",") if s.strip()]

    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignora chaves extras no .env
    )

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
