"""
Modelos de domínio e DTOs para a aplicação.
Camada de domínio independente de infraestrutura.
"""

from .models import (
    ALL_TIME,
    AggregateRevenueRequest,
    Granularity,
    Group,
    Membership,
    RevenueBucket,
    Sale,
    ScopeKind,
    User,
)
from .errors import (
    InvalidGranularity,
    InvalidRange,
    InvalidScope,
    RevenueQueryError,
    StoreUnavailable,
)
from .filters import RevenueFilters, narrow, resolve_scope
from .bucketing import aggregate, bucket_key_of

__all__ = [
    "ALL_TIME",
    "AggregateRevenueRequest",
    "Granularity",
    "Group",
    "Membership",
    "RevenueBucket",
    "Sale",
    "ScopeKind",
    "User",
    "InvalidGranularity",
    "InvalidRange",
    "InvalidScope",
    "RevenueQueryError",
    "StoreUnavailable",
    "RevenueFilters",
    "narrow",
    "resolve_scope",
    "aggregate",
    "bucket_key_of",
]
