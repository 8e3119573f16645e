"""
Application builder.
Middlewares, routes, lifespan and exception handlers are added step by step.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging import api_logger, app_logger, init_app_logging
from app.domain.errors import RevenueQueryError
from app.infra.db import dispose_engine, health_check
from app.routers import groups, health, legacy, revenue, sales, users


class ApplicationBuilder:
    """Builder for FastAPI application with separated concerns."""

    def __init__(self):
        self.app = FastAPI(
            title=settings.APP_NAME,
            version="1.0.0",
            description="Read-only revenue analytics over the sales ledger",
            docs_url="/docs",
            redoc_url="/redoc",
            openapi_url="/openapi.json",
        )
        self._middlewares_added = False
        self._routes_added = False
        self._startup_handlers_added = False

    def add_cors_middleware(self) -> ApplicationBuilder:
        """Add CORS middleware configuration."""
        if self._middlewares_added:
            raise RuntimeError("Middlewares already added")

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS_LIST or ["*"],
            allow_credentials=False,
            allow_methods=["GET", "OPTIONS"],
            allow_headers=["*"],
        )
        app_logger.info("CORS middleware added")
        return self

    def add_request_logging_middleware(self) -> ApplicationBuilder:
        """Add request logging middleware."""
        if self._middlewares_added:
            raise RuntimeError("Middlewares already added")

        @self.app.middleware("http")
        async def log_requests(request: Request, call_next):
            response = await call_next(request)
            api_logger.info(
                "Request served",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
            )
            return response

        app_logger.info("Request logging middleware added")
        return self

    def finalize_middlewares(self) -> ApplicationBuilder:
        """Mark middlewares as finalized."""
        self._middlewares_added = True
        return self

    def add_routes(self) -> ApplicationBuilder:
        """Add all API routes."""
        if self._routes_added:
            raise RuntimeError("Routes already added")

        self.app.include_router(health.router)
        self.app.include_router(users.router)
        self.app.include_router(groups.router)
        self.app.include_router(sales.router)
        self.app.include_router(revenue.router)

        # Nomes antigos das rotas (deprecated)
        self.app.include_router(legacy.router)

        app_logger.info("All routes added")
        self._routes_added = True
        return self

    def add_startup_handlers(self) -> ApplicationBuilder:
        """Add startup and shutdown event handlers."""
        if self._startup_handlers_added:
            raise RuntimeError("Startup handlers already added")

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            app_logger.info("Starting application...", store_backend=settings.STORE_BACKEND)
            if settings.STORE_BACKEND == "postgres":
                # não derruba o boot: o banco pode subir depois da API
                try:
                    info = health_check()
                    app_logger.info("Database connection validated", database=info.get("database"))
                except SQLAlchemyError as exc:
                    app_logger.warning("Database not reachable at startup", error=str(exc))
            yield

            app_logger.info("Shutting down application...")
            dispose_engine()

        self.app.router.lifespan_context = lifespan
        self._startup_handlers_added = True
        app_logger.info("Startup handlers added")
        return self

    def add_exception_handlers(self) -> ApplicationBuilder:
        """Add global exception handlers."""

        @self.app.exception_handler(RevenueQueryError)
        async def revenue_query_error_handler(request: Request, exc: RevenueQueryError):
            api_logger.warning(
                "Request rejected",
                path=request.url.path,
                kind=exc.kind,
                status=exc.status_code,
            )
            return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

        app_logger.info("Exception handlers added")
        return self

    def build(self) -> FastAPI:
        """Build and return the configured FastAPI application."""
        if not self._middlewares_added:
            raise RuntimeError("Middlewares not finalized")
        if not self._routes_added:
            raise RuntimeError("Routes not added")
        if not self._startup_handlers_added:
            raise RuntimeError("Startup handlers not added")

        app_logger.info("FastAPI application built successfully")
        return self.app


def create_application() -> FastAPI:
    """Create and configure the FastAPI application using the builder pattern."""
    init_app_logging()

    builder = (
        ApplicationBuilder()
        .add_cors_middleware()
        .add_request_logging_middleware()
        .finalize_middlewares()
        .add_routes()
        .add_startup_handlers()
        .add_exception_handlers()
    )

    return builder.build()
