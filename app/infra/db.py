from __future__ import annotations
from typing import Any, Dict, List, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, Result
from app.core.config import settings
from app.core.logging import db_logger

# -----------------------------------------------------------------------------
# 1) Engine (pool de conexões)
# -----------------------------------------------------------------------------

_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Process-wide engine, created on first use.

    Only the composition root (``app.services.dependencies``) calls this;
    repositories receive the engine they should use.
    """
    global _engine
    if _engine is None:
        _engine = create_engine(
            settings.DATABASE_URL,
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )
        db_logger.info("Engine created", pool_size=settings.DB_POOL_SIZE)
    return _engine


def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None

# -----------------------------------------------------------------------------
# 2) Healthcheck (pronto para /readyz)
# -----------------------------------------------------------------------------

def health_check(engine: Optional[Engine] = None) -> Dict[str, Any]:
    eng = engine or get_engine()
    with eng.connect() as conn:
        conn.execute(text("SELECT 1"))

        db = conn.execute(text("SELECT current_database()")).scalar()
        user = conn.execute(text("SELECT current_user")).scalar_one()
        return {
            "ok": True,
            "database": db,
            "user": user,
        }

# -----------------------------------------------------------------------------
# 3) Helpers de consulta (somente leitura)
# -----------------------------------------------------------------------------

def fetch_all(engine: Engine, sql: str, params: Optional[Dict[str, Any]] = None,
              timeout_ms: Optional[int] = None) -> List[Dict[str, Any]]:
    with engine.connect() as conn:
        if timeout_ms:
            conn.execute(text(f"SET LOCAL statement_timeout = {int(timeout_ms)}"))
        result: Result = conn.execute(text(sql), params or {})
        rows = result.mappings().all()
        return [dict(r) for r in rows]

