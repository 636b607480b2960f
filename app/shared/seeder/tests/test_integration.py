"""Integration tests for the seeder against an in-memory SQLite store."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from app.features.marketplace.models import Category, Order, OrderItem, Product
from app.shared.seeder import DataSeeder

pytestmark = pytest.mark.integration


class TestGenerate:
    """DataSeeder.generate inserts a consistent dataset."""

    async def test_counts_match_configuration(self, db_session, seeder_config):
        result = await DataSeeder(seeder_config).generate(db_session)

        assert result.categories_count == 3
        assert result.subcategories_count == 6
        assert result.subsubcategories_count == 12
        assert result.products_count == 12
        assert result.customers_count == 6
        assert result.orders_count == 25
        assert result.order_items_count >= 25
        assert result.seed == 7

    async def test_status_reflects_inserted_rows(self, db_session, seeder_config):
        result = await DataSeeder(seeder_config).generate(db_session)

        status = await DataSeeder(seeder_config).get_status(db_session)

        assert status["category"] == result.categories_count
        assert status["product"] == result.products_count
        assert status["customer_order"] == result.orders_count
        assert status["order_item"] == result.order_items_count

    async def test_order_totals_match_line_items(self, db_session, seeder_config):
        await DataSeeder(seeder_config).generate(db_session)

        orders = (
            await db_session.execute(select(Order).options(selectinload(Order.items)))
        ).scalars()

        for order in orders:
            subtotal = sum(
                (Decimal(i.unit_price) * i.quantity for i in order.items), Decimal("0")
            )
            assert Decimal(order.total_price) == max(
                subtotal - Decimal(order.promo_amount), Decimal("0")
            )

    async def test_line_items_reference_existing_products(self, db_session, seeder_config):
        await DataSeeder(seeder_config).generate(db_session)

        orphans = await db_session.execute(
            select(func.count())
            .select_from(OrderItem)
            .outerjoin(Product, OrderItem.product_id == Product.id)
            .where(Product.id.is_(None))
        )

        assert orphans.scalar_one() == 0

    async def test_products_belong_to_generated_categories(self, db_session, seeder_config):
        await DataSeeder(seeder_config).generate(db_session)

        category_ids = set((await db_session.execute(select(Category.id))).scalars())
        product_categories = set((await db_session.execute(select(Product.category_id))).scalars())

        assert product_categories - {None} <= category_ids


class TestDelete:
    """DataSeeder.delete_all removes everything."""

    async def test_delete_all(self, db_session, seeder_config):
        seeder = DataSeeder(seeder_config)
        result = await seeder.generate(db_session)

        deleted = await seeder.delete_all(db_session)

        assert deleted["customer_order"] == result.orders_count
        status = await seeder.get_status(db_session)
        assert all(count == 0 for count in status.values())

    async def test_dry_run_keeps_rows(self, db_session, seeder_config):
        seeder = DataSeeder(seeder_config)
        result = await seeder.generate(db_session)

        preview = await seeder.delete_all(db_session, dry_run=True)

        assert preview["product"] == result.products_count
        status = await seeder.get_status(db_session)
        assert status["product"] == result.products_count
