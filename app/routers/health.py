from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging import app_logger
from app.infra.db import health_check

router = APIRouter(tags=["health"])

@router.get("/health", response_class=PlainTextResponse)
def health():
    return "Hello World!"

@router.get("/healthz")
def healthz():
    return {"status": "ok"}

@router.get("/readyz")
def readyz():
    if settings.STORE_BACKEND == "memory":
        return {"status": "ready", "store": "memory"}
    try:
        return {"status": "ready", "database": health_check()}
    except SQLAlchemyError as exc:
        app_logger.error("Readiness check failed", exc=exc)
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "error": str(exc)},
        )
