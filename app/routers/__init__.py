"""API routers module."""

from . import groups, health, legacy, revenue, sales, users

__all__ = [
    "groups",
    "health",
    "legacy",
    "revenue",
    "sales",
    "users",
]
