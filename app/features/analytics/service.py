"""Service layer for the analytics dashboard.

Builds the admin dashboard report: period cards with their change against
the previous period, best sellers per category over the whole order
history, a monthly series for the current year, the most clicked products
and the latest orders.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.logging import get_logger
from app.features.analytics.metrics import (
    monthly_series,
    percent_change,
    round_change,
    summarize_orders,
    top_products_by_category,
)
from app.features.analytics.periods import AnalyticsRange, localize, resolve_window
from app.features.analytics.repository import AnalyticsRepository
from app.features.analytics.schemas import (
    AnalyticsDashboard,
    AnalyticsErrorResponse,
    ClickedProduct,
    MonthlyStatItem,
    RecentOrder,
    TopProduct,
)
from app.features.marketplace.models import ACTIVE_ORDER_STATUSES, Order, Product

logger = get_logger(__name__)

DASHBOARD_ERROR_MESSAGE = "Failed to compute analytics"


class AnalyticsService:
    """Service for computing the admin analytics dashboard.

    Every call recomputes the report from scratch; nothing is cached
    between requests.
    """

    def __init__(self) -> None:
        """Initialize analytics service."""
        self.settings = get_settings()

    async def compute_dashboard(
        self,
        db: AsyncSession,
        range_: AnalyticsRange,
        now: datetime | None = None,
    ) -> AnalyticsDashboard:
        """Compute the dashboard report for ``range_``.

        Args:
            db: Database session.
            range_: Comparison period length.
            now: Invocation instant (defaults to the current time in the
                reporting timezone).

        Returns:
            Dashboard report.

        Raises:
            DatabaseError: If a store query fails.
        """
        tz = self.settings.analytics_tz
        now = localize(now, tz) if now is not None else datetime.now(tz)
        window = resolve_window(range_, now, tz)
        repo = AnalyticsRepository(db)

        current_orders = await repo.orders_since(window.current_start, ACTIVE_ORDER_STATUSES)
        previous_orders = await repo.orders_between(
            window.previous_start, window.previous_end, ACTIVE_ORDER_STATUSES
        )
        current = summarize_orders(current_orders)
        previous = summarize_orders(previous_orders)

        products_created = await repo.count_products_created_since(window.current_start)
        previous_products_created = await repo.count_products_created_between(
            window.previous_start, window.previous_end
        )

        clicked = await repo.most_clicked_products(self.settings.analytics_top_clicked_limit)

        history = await repo.all_orders()
        product_ids = sorted(
            {item.product_id for order in history for item in order.items if item.product_id}
        )
        category_lookup = await repo.product_categories(product_ids)
        top_by_category = top_products_by_category(
            history,
            category_lookup,
            other_label=self.settings.analytics_other_category_label,
            limit=self.settings.analytics_top_per_category,
        )
        monthly = monthly_series(
            history,
            now.year,
            tz,
            self.settings.analytics_month_locale,
        )

        recent = await repo.recent_orders(self.settings.analytics_recent_orders_limit)

        dashboard = AnalyticsDashboard(
            revenue=float(current.revenue),
            orders=current.orders,
            delivered_orders=current.delivered_orders,
            products=products_created,
            customers=current.customers,
            revenue_change=round_change(percent_change(current.revenue, previous.revenue)),
            orders_change=round_change(percent_change(current.orders, previous.orders)),
            delivered_change=round_change(
                percent_change(current.delivered_orders, previous.delivered_orders)
            ),
            customers_change=round_change(percent_change(current.customers, previous.customers)),
            products_change=round_change(
                percent_change(products_created, previous_products_created)
            ),
            top_products_by_category={
                category: [
                    TopProduct(
                        name=p.name,
                        category=p.category,
                        sales=p.sales,
                        revenue=float(p.revenue),
                    )
                    for p in products
                ]
                for category, products in top_by_category.items()
            },
            monthly_stats=[
                MonthlyStatItem(month=m.month, sales=float(m.sales), orders=m.orders)
                for m in monthly
            ],
            most_clicked_products=[self._clicked_product(p) for p in clicked],
            recent_orders=[self._recent_order(o) for o in recent],
            range=range_,
            period_start=window.current_start,
            previous_period_start=window.previous_start,
            previous_period_end=window.previous_end,
        )

        logger.info(
            "analytics.dashboard_computed",
            range=range_.value,
            period_start=window.current_start.isoformat(),
            previous_period_start=window.previous_start.isoformat(),
            previous_period_end=window.previous_end.isoformat(),
            revenue=dashboard.revenue,
            orders=dashboard.orders,
            delivered_orders=dashboard.delivered_orders,
            history_orders=len(history),
            categories=len(dashboard.top_products_by_category),
        )

        return dashboard

    @staticmethod
    def degraded(details: str) -> AnalyticsErrorResponse:
        """Zeroed dashboard carrying the failure reason."""
        return AnalyticsErrorResponse(error=DASHBOARD_ERROR_MESSAGE, details=details)

    def _clicked_product(self, product: Product) -> ClickedProduct:
        category = product.category.name if product.category else None
        return ClickedProduct(
            name=product.name,
            category=category or self.settings.analytics_uncategorized_label,
            clicks=product.clicks,
        )

    @staticmethod
    def _recent_order(order: Order) -> RecentOrder:
        customer = order.customer
        customer_label = (
            (customer.name or customer.email) if customer else None
        ) or order.shipping_name
        return RecentOrder(
            id=order.id,
            order_number=order.order_number,
            customer=customer_label,
            total_price=float(order.total_price or 0),
            status=order.status,
            created_at=order.created_at,
            is_seen=bool(order.is_seen),
        )
