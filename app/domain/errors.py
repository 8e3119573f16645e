"""Failures the revenue query layer reports to its callers."""

from __future__ import annotations

from typing import Any, Dict, Optional


class RevenueQueryError(RuntimeError):
    kind = "revenue_query_error"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"[{self.kind}] {message}")
        self.message = message
        self.details = details or {}

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.kind, "detail": self.message}
        if self.details:
            payload["context"] = self.details
        return payload


class InvalidScope(RevenueQueryError):
    """Scope identifier is not a valid id."""

    kind = "invalid_scope"
    status_code = 400


class InvalidRange(RevenueQueryError):
    """A range bound does not parse as a date, or start is after end."""

    kind = "invalid_range"
    status_code = 400


class StoreUnavailable(RevenueQueryError):
    """The sales store read did not complete."""

    kind = "store_unavailable"
    status_code = 500


class InvalidGranularity(RevenueQueryError):
    """Granularity is not one of none, daily or monthly."""

    kind = "invalid_granularity"
    status_code = 400
