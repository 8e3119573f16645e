"""
Filtros de receita: escopo (usuário ou grupo) + intervalo de datas.

``resolve_scope`` turns a scope kind/id into a predicate over sale rows and
``narrow`` bounds it by an optional date range. The same predicate compiles
to SQL (``to_sql_conditions``) and evaluates in memory (``matches``).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Collection, Optional, Union

from app.domain.errors import InvalidRange, InvalidScope
from app.domain.models import Sale, ScopeKind

# Membros do grupo vêm de user_groups; um usuário em N grupos conta em todos
_GROUP_MEMBERS_SUBQUERY = (
    "SELECT ug.user_id FROM user_groups ug WHERE ug.group_id = :scope_id"
)


@dataclass(frozen=True)
class RevenueFilters:
    """
    Predicate selecting the sale rows of one scope.

    Both range bounds are calendar dates and inclusive; the range applies only
    when both are set.
    """

    scope_kind: ScopeKind
    scope_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def bounded(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    def to_sql_conditions(self) -> tuple[list[str], dict]:
        """
        Converte os filtros em condições SQL e parâmetros.

        Returns:
            Tupla contendo lista de condições WHERE e dicionário de parâmetros
        """
        if self.scope_kind is ScopeKind.USER:
            conditions = ["s.user_id = :scope_id"]
        else:
            conditions = [f"s.user_id IN ({_GROUP_MEMBERS_SUBQUERY})"]

        params: dict = {"scope_id": self.scope_id}

        if self.bounded:
            # fim exclusivo no dia seguinte: o último dia entra inteiro
            conditions.append("s.date >= :start_date")
            conditions.append("s.date < :end_date_exclusive")
            params["start_date"] = self.start_date
            params["end_date_exclusive"] = self.end_date + timedelta(days=1)

        return conditions, params

    def apply_to_query(self, base_query: str) -> tuple[str, dict]:
        """
        Aplica os filtros a uma query base.

        Args:
            base_query: Query SQL base (sem WHERE), com a tabela sales como "s"

        Returns:
            Tupla contendo query completa e parâmetros
        """
        conditions, params = self.to_sql_conditions()

        where_clause = " AND ".join(conditions)
        query = f"{base_query} WHERE {where_clause}"

        return query, params

    def matches(self, sale: Sale, members: Optional[Collection[int]] = None) -> bool:
        """Evaluate the predicate against one sale; ``members`` is the group's user ids."""
        if self.scope_kind is ScopeKind.USER:
            in_scope = sale.user_id == self.scope_id
        else:
            in_scope = sale.user_id in (members or ())
        if not in_scope:
            return False
        if self.bounded:
            return self.start_date <= sale.date.date() <= self.end_date
        return True


def parse_scope_id(raw_id: Union[int, str]) -> int:
    if isinstance(raw_id, bool):
        raise InvalidScope(f"Invalid scope id: {raw_id!r}")
    if isinstance(raw_id, int):
        value = raw_id
    elif isinstance(raw_id, str):
        candidate = raw_id.strip()
        if not (candidate.isascii() and candidate.isdigit()):
            raise InvalidScope(f"Invalid scope id: {raw_id!r}")
        value = int(candidate)
    else:
        raise InvalidScope(f"Invalid scope id: {raw_id!r}")
    if value < 0:
        raise InvalidScope(f"Invalid scope id: {raw_id!r}")
    return value


def resolve_scope(scope_kind: Union[ScopeKind, str], raw_id: Union[int, str]) -> RevenueFilters:
    """
    Build the row predicate for a user or a group.

    A scope whose entity does not exist is not an error here: the predicate
    just selects no rows.

    Raises:
        InvalidScope: unknown scope kind, or id that is not a non-negative integer.
    """
    try:
        kind = ScopeKind(scope_kind)
    except ValueError as exc:
        raise InvalidScope(f"Unknown scope kind: {scope_kind!r}") from exc
    return RevenueFilters(scope_kind=kind, scope_id=parse_scope_id(raw_id))


def parse_range_bound(value: Union[date, str], name: str) -> date:
    """Parse a range bound (ISO 8601 date, or datetime whose day is used)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidRange(f"Invalid {name} date: {value!r}")

    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise InvalidRange(
            f"Invalid {name} date: {value!r}. Use ISO 8601 (ex.: 2024-02-01).",
            details={name: value},
        ) from exc


def _is_absent(value: Optional[Union[date, str]]) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def narrow(
    filters: RevenueFilters,
    start: Optional[Union[date, str]] = None,
    end: Optional[Union[date, str]] = None,
) -> RevenueFilters:
    """
    Bound ``filters`` to ``[start, end]`` (calendar days, inclusive).

    When either bound is missing the filters come back unchanged: a lone
    ``start`` or ``end`` means all-time, same as neither.

    Raises:
        InvalidRange: a bound does not parse, or ``start`` is after ``end``.
    """
    if _is_absent(start) or _is_absent(end):
        return filters

    start_date = parse_range_bound(start, "start")
    end_date = parse_range_bound(end, "end")
    if start_date > end_date:
        raise InvalidRange(
            f"'start' ({start_date.isoformat()}) must not be after 'end' ({end_date.isoformat()}).",
            details={"start": start_date.isoformat(), "end": end_date.isoformat()},
        )
    return replace(filters, start_date=start_date, end_date=end_date)
