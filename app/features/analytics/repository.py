"""Read-only queries backing the analytics dashboard.

Every call is an independent statement on the caller's session; the reads
of one dashboard are not wrapped in a snapshot, so concurrent writes may be
observed by some reads and not others.
"""

from collections.abc import Collection, Sequence
from datetime import datetime
from typing import Any, TypeVar

from sqlalchemy import Result, Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import DatabaseError
from app.core.logging import get_logger
from app.features.analytics.periods import as_utc
from app.features.marketplace.models import (
    Category,
    Order,
    OrderStatus,
    Product,
)

logger = get_logger(__name__)

T = TypeVar("T")


class AnalyticsRepository:
    """Data access for dashboard aggregation.

    Store failures surface as ``DatabaseError``.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _execute(self, stmt: Select[Any], query: str) -> Result[Any]:
        try:
            return await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("analytics.query_failed", query=query, error=str(e))
            raise DatabaseError(
                f"Analytics query '{query}' failed: {e}",
                details={"query": query},
            ) from e

    async def _scalars(self, stmt: Select[tuple[T]], query: str) -> list[T]:
        result = await self._execute(stmt, query)
        return list(result.scalars().all())

    async def _count(self, stmt: Select[tuple[int]], query: str) -> int:
        result = await self._execute(stmt, query)
        return int(result.scalar_one())

    # =========================================================================
    # Orders
    # =========================================================================

    async def orders_since(
        self,
        start: datetime,
        statuses: Collection[OrderStatus],
    ) -> list[Order]:
        """Orders created at or after ``start`` with a status in ``statuses``."""
        stmt = (
            select(Order)
            .options(selectinload(Order.customer))
            .where(Order.created_at >= as_utc(start))
            .where(Order.status.in_([s.value for s in statuses]))
            .order_by(Order.created_at)
        )
        return await self._scalars(stmt, "orders_since")

    async def orders_between(
        self,
        start: datetime,
        end: datetime,
        statuses: Collection[OrderStatus],
    ) -> list[Order]:
        """Orders created in ``[start, end)`` with a status in ``statuses``."""
        stmt = (
            select(Order)
            .options(selectinload(Order.customer))
            .where(Order.created_at >= as_utc(start))
            .where(Order.created_at < as_utc(end))
            .where(Order.status.in_([s.value for s in statuses]))
            .order_by(Order.created_at)
        )
        return await self._scalars(stmt, "orders_between")

    async def all_orders(self) -> list[Order]:
        """Every order ever placed, any status, with line items loaded."""
        stmt = select(Order).options(selectinload(Order.items)).order_by(Order.created_at, Order.id)
        return await self._scalars(stmt, "all_orders")

    async def recent_orders(self, limit: int) -> list[Order]:
        """Latest orders, newest first, with their customer loaded."""
        stmt = (
            select(Order)
            .options(selectinload(Order.customer))
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(limit)
        )
        return await self._scalars(stmt, "recent_orders")

    # =========================================================================
    # Products
    # =========================================================================

    async def count_products_created_since(self, start: datetime) -> int:
        stmt = select(func.count()).select_from(Product).where(Product.created_at >= as_utc(start))
        return await self._count(stmt, "count_products_created_since")

    async def count_products_created_between(self, start: datetime, end: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(Product)
            .where(Product.created_at >= as_utc(start))
            .where(Product.created_at < as_utc(end))
        )
        return await self._count(stmt, "count_products_created_between")

    async def most_clicked_products(self, limit: int) -> list[Product]:
        """Products with at least one click, most clicked first."""
        stmt = (
            select(Product)
            .options(selectinload(Product.category))
            .where(Product.clicks > 0)
            .order_by(Product.clicks.desc(), Product.id)
            .limit(limit)
        )
        return await self._scalars(stmt, "most_clicked_products")

    async def product_categories(self, product_ids: Sequence[int]) -> dict[int, str | None]:
        """Resolve product ids to their current category name.

        Ids that no longer exist are absent from the result; products without
        a category map to ``None``.
        """
        if not product_ids:
            return {}

        stmt = (
            select(Product.id, Category.name)
            .outerjoin(Category, Product.category_id == Category.id)
            .where(Product.id.in_(product_ids))
        )
        result = await self._execute(stmt, "product_categories")
        return {row.id: row.name for row in result.all()}
