"""Integration tests for AnalyticsService against an in-memory store."""

from datetime import UTC, datetime, timedelta

import pytest

from app.features.analytics.periods import AnalyticsRange
from app.features.analytics.service import DASHBOARD_ERROR_MESSAGE, AnalyticsService
from app.features.marketplace.models import OrderStatus

NOW = datetime(2025, 3, 15, 14, 30, tzinfo=UTC)
MID_FEBRUARY = datetime(2025, 2, 10, 9, 0, tzinfo=UTC)
EARLY_MARCH = datetime(2025, 3, 5, 9, 0, tzinfo=UTC)

pytestmark = pytest.mark.integration


@pytest.fixture
def service() -> AnalyticsService:
    return AnalyticsService()


class TestEmptyStore:
    """A store with no data yields a fully zeroed dashboard."""

    async def test_all_cards_are_zero(self, db_session, service):
        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.MONTH, now=NOW)

        assert dashboard.revenue == 0
        assert dashboard.orders == 0
        assert dashboard.delivered_orders == 0
        assert dashboard.products == 0
        assert dashboard.customers == 0
        assert dashboard.revenue_change == 0
        assert dashboard.orders_change == 0
        assert dashboard.delivered_change == 0
        assert dashboard.customers_change == 0
        assert dashboard.products_change == 0

    async def test_collections_are_empty_and_series_is_full(self, db_session, service):
        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.MONTH, now=NOW)

        assert dashboard.top_products_by_category == {}
        assert dashboard.most_clicked_products == []
        assert dashboard.recent_orders == []
        assert len(dashboard.monthly_stats) == 12
        assert dashboard.monthly_stats[0].month == "janv."
        assert all(m.sales == 0 and m.orders == 0 for m in dashboard.monthly_stats)


class TestPeriodCards:
    """Card values and their change against the previous period."""

    async def test_month_cards_and_changes(self, db_session, store, service):
        alice = await store.customer(name="Alice", email="alice@example.com")
        bruno = await store.customer(name="Bruno", email="bruno@example.com")
        chloe = await store.customer(name="Chloé", email="chloe@example.com")

        # Current month
        await store.order(OrderStatus.PAID, "100.00", EARLY_MARCH, customer=alice)
        await store.order(OrderStatus.DELIVERED, "50.00", EARLY_MARCH, customer=bruno)
        await store.order(OrderStatus.DELIVERED, "30.00", NOW, customer=bruno)
        await store.order(OrderStatus.PENDING, "20.00", NOW, customer=alice)
        await store.order(OrderStatus.CANCELLED, "999.00", NOW, customer=alice)
        # Previous month
        await store.order(OrderStatus.PAID, "90.00", MID_FEBRUARY, customer=alice)
        await store.order(OrderStatus.DELIVERED, "60.00", MID_FEBRUARY, customer=chloe)
        # Outside both periods
        await store.order(OrderStatus.DELIVERED, "500.00", datetime(2025, 1, 20, tzinfo=UTC))
        await store.save()

        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.MONTH, now=NOW)

        assert dashboard.revenue == 180.0
        assert dashboard.orders == 4
        assert dashboard.delivered_orders == 2
        assert dashboard.customers == 1
        assert dashboard.revenue_change == 20.0
        assert dashboard.orders_change == 100.0
        assert dashboard.delivered_change == 100.0
        assert dashboard.customers_change == 0.0

    async def test_products_created_per_period(self, db_session, store, service):
        await store.product("Lamp", created_at=EARLY_MARCH)
        await store.product("Chair", created_at=NOW)
        await store.product("Table", created_at=MID_FEBRUARY)
        await store.save()

        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.MONTH, now=NOW)

        assert dashboard.products == 2
        assert dashboard.products_change == 100.0

    async def test_january_compares_with_previous_december(self, db_session, store, service):
        now = datetime(2025, 1, 10, 12, 0, tzinfo=UTC)
        await store.order(OrderStatus.DELIVERED, "40.00", datetime(2024, 12, 20, tzinfo=UTC))
        await store.order(OrderStatus.DELIVERED, "60.00", datetime(2025, 1, 5, tzinfo=UTC))
        await store.save()

        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.MONTH, now=now)

        assert dashboard.revenue == 60.0
        assert dashboard.revenue_change == 50.0
        assert dashboard.period_start == datetime(2025, 1, 1, tzinfo=UTC)
        assert dashboard.previous_period_start == datetime(2024, 12, 1, tzinfo=UTC)
        assert dashboard.previous_period_end == datetime(2025, 1, 1, tzinfo=UTC)

    async def test_week_uses_trailing_windows(self, db_session, store, service):
        await store.order(OrderStatus.PAID, "10.00", NOW - timedelta(days=3))
        await store.order(OrderStatus.PAID, "40.00", NOW - timedelta(days=10))
        await store.order(OrderStatus.PAID, "70.00", NOW - timedelta(days=20))
        await store.save()

        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.WEEK, now=NOW)

        assert dashboard.range == AnalyticsRange.WEEK
        assert dashboard.orders == 1
        assert dashboard.orders_change == 0.0
        assert dashboard.revenue_change == -75.0

    async def test_year_against_empty_previous_year(self, db_session, store, service):
        await store.order(OrderStatus.SHIPPED, "25.00", datetime(2025, 2, 1, tzinfo=UTC))
        await store.save()

        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.YEAR, now=NOW)

        assert dashboard.revenue == 25.0
        assert dashboard.revenue_change == 100.0
        assert dashboard.delivered_change == 0.0


class TestCharts:
    """History-wide charts: best sellers, monthly series, clicks, recent orders."""

    async def test_top_products_by_category(self, db_session, store, service):
        home = await store.category("Home")
        garden = await store.category("Garden")
        lamp = await store.product("Lamp", home)
        chair = await store.product("Chair", home)
        sofa = await store.product("Sofa", home)
        rug = await store.product("Rug", home)
        hose = await store.product("Hose", garden)
        loose = await store.product("Loose item")

        await store.order(
            OrderStatus.DELIVERED,
            items=[(lamp, 5, "20.00"), (chair, 2, "50.00"), (hose, 1, "15.00")],
        )
        await store.order(
            OrderStatus.CANCELLED,
            created_at=datetime(2023, 6, 1, tzinfo=UTC),
            items=[(sofa, 3, "300.00"), (rug, 1, "80.00"), (loose, 4, "5.00")],
        )
        await store.save()

        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.MONTH, now=NOW)
        top = dashboard.top_products_by_category

        assert set(top) == {"Home", "Garden", "Other"}
        assert [p.name for p in top["Home"]] == ["Lamp", "Sofa", "Chair"]
        assert top["Home"][0].sales == 5
        assert top["Home"][0].revenue == 100.0
        assert top["Garden"][0].category == "Garden"
        assert [p.name for p in top["Other"]] == ["Loose item"]

    async def test_monthly_stats_cover_current_year_only(self, db_session, store, service):
        await store.order(OrderStatus.PAID, "10.00", datetime(2025, 1, 15, tzinfo=UTC))
        await store.order(OrderStatus.CANCELLED, "5.00", datetime(2025, 3, 2, tzinfo=UTC))
        await store.order(OrderStatus.PENDING, "7.50", datetime(2025, 3, 3, tzinfo=UTC))
        await store.order(OrderStatus.PAID, "99.00", datetime(2024, 3, 3, tzinfo=UTC))
        await store.save()

        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.MONTH, now=NOW)
        stats = dashboard.monthly_stats

        assert [s.month for s in stats[:3]] == ["janv.", "févr.", "mars"]
        assert (stats[0].sales, stats[0].orders) == (10.0, 1)
        assert (stats[1].sales, stats[1].orders) == (0.0, 0)
        assert (stats[2].sales, stats[2].orders) == (12.5, 2)
        assert sum(s.orders for s in stats) == 3

    async def test_most_clicked_products(self, db_session, store, service):
        home = await store.category("Home")
        for name, clicks in [("A", 3), ("B", 10), ("C", 0), ("D", 7), ("E", 1), ("F", 4)]:
            await store.product(name, home if name != "D" else None, clicks=clicks)
        await store.product("G", home, clicks=2)
        await store.save()

        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.MONTH, now=NOW)
        clicked = dashboard.most_clicked_products

        assert [p.name for p in clicked] == ["B", "D", "F", "A", "G"]
        assert [p.clicks for p in clicked] == [10, 7, 4, 3, 2]
        assert clicked[1].category == "Uncategorized"
        assert clicked[0].category == "Home"

    async def test_recent_orders_newest_first(self, db_session, store, service):
        alice = await store.customer(name="Alice", email="alice@example.com")
        no_name = await store.customer(email="anon@example.com")
        for day in range(1, 7):
            await store.order(
                OrderStatus.PENDING,
                f"{day}.00",
                datetime(2025, 3, day, tzinfo=UTC),
                customer=alice if day % 2 else no_name,
                is_seen=day == 6,
            )
        await store.order(
            OrderStatus.PAID,
            "1.00",
            datetime(2025, 2, 1, tzinfo=UTC),
            shipping_name="Guest",
        )
        await store.save()

        dashboard = await service.compute_dashboard(db_session, AnalyticsRange.MONTH, now=NOW)
        recent = dashboard.recent_orders

        assert len(recent) == 5
        assert [o.total_price for o in recent] == [6.0, 5.0, 4.0, 3.0, 2.0]
        assert recent[0].customer == "anon@example.com"
        assert recent[0].is_seen is True
        assert recent[1].customer == "Alice"
        assert recent[1].order_number.startswith("CMD-")


class TestDegraded:
    """Zeroed payload used when the dashboard cannot be computed."""

    def test_degraded_payload_is_zeroed(self):
        payload = AnalyticsService.degraded("boom")

        assert payload.error == DASHBOARD_ERROR_MESSAGE
        assert payload.details == "boom"
        assert payload.revenue == 0
        assert payload.top_products_by_category == {}
        assert payload.monthly_stats == []
        assert payload.range is None
