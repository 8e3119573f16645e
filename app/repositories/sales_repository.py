"""
Repositório de vendas.
Centraliza todo acesso a dados relacionados a vendas.

Tabelas lidas: ``sales(id, user_id, amount, date)`` e, para escopo de grupo,
``user_groups(user_id, group_id)``. Nada aqui escreve no banco.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.engine import Engine

from app.core.config import settings
from app.domain.bucketing import date_trunc_expr
from app.domain.filters import RevenueFilters
from app.domain.models import ALL_TIME, Granularity, RevenueBucket
from app.infra.db import fetch_all


class SalesRepository:
    """
    Repositório para acesso a dados de vendas.
    Encapsula toda lógica SQL relacionada a vendas.
    """

    def __init__(self, engine: Engine, timeout_ms: Optional[int] = None):
        self.engine = engine
        self.timeout_ms = settings.QUERY_TIMEOUT_MS if timeout_ms is None else timeout_ms

    def average_revenue(
        self, filters: RevenueFilters, granularity: Granularity
    ) -> list[RevenueBucket]:
        """
        Média de receita por bucket, em uma única consulta.

        Args:
            filters: Escopo e intervalo a aplicar
            granularity: Sem agrupamento, por dia ou por mês

        Returns:
            Buckets em ordem crescente; lista vazia se nenhuma venda casar
        """
        if granularity is Granularity.NONE:
            return self._overall_average(filters)

        bucket = date_trunc_expr(granularity, "s.date")
        base_query = f"""
            SELECT
                {bucket} AS bucket_key,
                COUNT(*) AS sale_count,
                AVG(s.amount) AS average_revenue
            FROM sales s
        """

        query, params = filters.apply_to_query(base_query)
        query += " GROUP BY bucket_key ORDER BY bucket_key"

        result = fetch_all(self.engine, query, params, timeout_ms=self.timeout_ms)

        return [
            RevenueBucket(
                key=row["bucket_key"],
                average=Decimal(str(row["average_revenue"])),
                count=row["sale_count"],
            )
            for row in result
        ]

    def _overall_average(self, filters: RevenueFilters) -> list[RevenueBucket]:
        base_query = """
            SELECT
                COUNT(*) AS sale_count,
                AVG(s.amount) AS average_revenue
            FROM sales s
        """

        query, params = filters.apply_to_query(base_query)

        # agregado sem GROUP BY sempre devolve uma linha, mesmo sem vendas
        result = fetch_all(self.engine, query, params, timeout_ms=self.timeout_ms)

        return [
            RevenueBucket(
                key=ALL_TIME,
                average=Decimal(str(row["average_revenue"])),
                count=row["sale_count"],
            )
            for row in result
            if row["sale_count"]
        ]

    def list_sales(self) -> list[dict[str, Any]]:
        return fetch_all(
            self.engine, "SELECT * FROM sales ORDER BY id", timeout_ms=self.timeout_ms
        )
