from __future__ import annotations

import uvicorn

from app.core.application import create_application
from app.core.config import settings


# Instância global para uvicorn: `uvicorn app.main:app --reload`
app = create_application()


def run() -> None:
    """Sobe a API em HOST:PORT (padrão 0.0.0.0:3000)."""
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
