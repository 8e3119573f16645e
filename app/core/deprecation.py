"""
Deprecation helpers for API endpoints kept under their legacy names.
"""

from typing import Optional

from fastapi import Response

from app.core.logging import api_logger


def add_deprecation_headers(
    response: Response,
    new_endpoint: str,
    removal_version: Optional[str] = None,
) -> Response:
    """
    Mark ``response`` as coming from a deprecated endpoint.

    Args:
        response: Response the handler will return (or FastAPI's injected one)
        new_endpoint: The endpoint that replaces the deprecated one
        removal_version: Version when the deprecated endpoint will be removed
    """
    response.headers["X-API-Deprecated"] = "true"
    response.headers["X-API-Deprecation-Info"] = f"Use {new_endpoint} instead"
    if removal_version:
        response.headers["X-API-Removal-Version"] = removal_version
    api_logger.debug("Deprecated endpoint served", replacement=new_endpoint)
    return response
