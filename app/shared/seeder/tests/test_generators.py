"""Tests for seeder data generators."""

import random
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from app.features.marketplace.models import OrderStatus, ProductCondition, ProductStatus
from app.shared.seeder.config import CatalogConfig, OrderConfig
from app.shared.seeder.generators import (
    CategoryGenerator,
    CustomerGenerator,
    CustomerRef,
    OrderGenerator,
    ProductGenerator,
    ProductRef,
    slugify,
)

REFERENCE_TIME = datetime(2025, 3, 15, 12, 0, tzinfo=UTC)

PRODUCTS = [
    ProductRef(id=1, name="Lampe Classique", unit_price=Decimal("5000")),
    ProductRef(id=2, name="Casque Pro", unit_price=Decimal("12500")),
    ProductRef(id=3, name="Savon Naturel", unit_price=Decimal("750")),
    ProductRef(id=4, name="Ballon Robuste", unit_price=Decimal("3000")),
    ProductRef(id=5, name="Café Original", unit_price=Decimal("2000")),
]

CUSTOMERS = [
    CustomerRef(id=1, name="Awa Koné", email="awa.kone@example.com"),
    CustomerRef(id=2, name="Yao Bamba", email="yao.bamba@example.com"),
]


class TestSlugify:
    """Tests for slug generation."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Électronique", "electronique"),
            ("Soins visage", "soins-visage"),
            ("Rouge à lèvres  Deluxe", "rouge-a-levres-deluxe"),
            ("N'Guessan", "n-guessan"),
        ],
    )
    def test_ascii_dashed(self, value, expected):
        assert slugify(value) == expected


class TestCategoryGenerator:
    """Tests for the category tree generator."""

    def test_tree_shape(self, rng, catalog_config):
        tree = CategoryGenerator(rng, catalog_config).generate()

        assert len(tree) == 3
        for category in tree:
            assert len(category["subcategories"]) == 2
            for sub in category["subcategories"]:
                assert len(sub["subsubcategories"]) == 2

    def test_unique_names_and_slugs(self, rng, catalog_config):
        tree = CategoryGenerator(rng, catalog_config).generate()

        assert len({c["name"] for c in tree}) == len(tree)
        assert len({c["slug"] for c in tree}) == len(tree)

    def test_positions_are_sequential(self, rng, catalog_config):
        tree = CategoryGenerator(rng, catalog_config).generate()

        positions = [s["position"] for s in tree[0]["subcategories"]]
        assert positions == list(range(len(positions)))

    def test_unknown_category_gets_numbered_subcategories(self, rng):
        config = CatalogConfig(categories=1, subcategories_per_category=2, category_names=["Divers"])

        tree = CategoryGenerator(rng, config).generate()

        assert [s["name"] for s in tree[0]["subcategories"]] == ["Divers 1", "Divers 2"]

    def test_too_many_categories(self, rng):
        config = CatalogConfig(categories=3, category_names=["A", "B"])

        with pytest.raises(ValueError, match="only 2 names"):
            CategoryGenerator(rng, config)

    def test_deterministic(self, catalog_config):
        first = CategoryGenerator(random.Random(1), catalog_config).generate()
        second = CategoryGenerator(random.Random(1), catalog_config).generate()

        assert first == second


class TestProductGenerator:
    """Tests for the product generator."""

    def _generate(self, rng, config, categories=("Maison", "Sport")):
        generator = ProductGenerator(rng, config, REFERENCE_TIME, history_days=30)
        return generator.generate(list(categories))

    def test_count_and_unique_slugs(self, rng, catalog_config):
        products = self._generate(rng, catalog_config)

        assert len(products) == catalog_config.products
        assert len({p["slug"] for p in products}) == len(products)

    def test_field_ranges(self, rng, catalog_config):
        products = self._generate(rng, catalog_config)

        for product in products:
            assert product["price"] >= 500
            assert product["price"] % 50 == 0
            assert product["promo_price"] is None or product["promo_price"] < product["price"]
            assert 0 <= product["clicks"] <= catalog_config.max_clicks
            assert product["status"] in {s.value for s in ProductStatus}
            assert product["condition"] in {c.value for c in ProductCondition}
            assert product["category"] in {"Maison", "Sport", None}

    def test_created_within_history(self, rng, catalog_config):
        products = self._generate(rng, catalog_config)

        for product in products:
            assert REFERENCE_TIME - timedelta(days=30) <= product["created_at"] <= REFERENCE_TIME

    def test_no_categories_means_uncategorized(self, rng, catalog_config):
        products = self._generate(rng, catalog_config, categories=())

        assert all(p["category"] is None for p in products)

    def test_special_offer_price_only_when_featured(self, rng):
        products = self._generate(rng, CatalogConfig(products=200))

        for product in products:
            assert (product["special_offer_price"] is not None) == product["is_special_offer"]


class TestCustomerGenerator:
    """Tests for the customer generator."""

    def test_unique_emails(self, rng):
        customers = CustomerGenerator(rng, count=300).generate()

        assert len(customers) == 300
        assert len({c["email"] for c in customers}) == 300

    def test_fields(self, rng):
        customer = CustomerGenerator(rng, count=1).generate()[0]

        assert set(customer) == {"name", "email", "phone", "address", "city"}
        assert customer["email"].endswith("@example.com")
        assert customer["phone"].startswith("+225")


class TestOrderGenerator:
    """Tests for the order generator."""

    def _generate(self, rng, config):
        return OrderGenerator(rng, config, REFERENCE_TIME).generate(CUSTOMERS, PRODUCTS)

    def test_total_is_lines_minus_promo_floored_at_zero(self, rng):
        config = OrderConfig(orders=200, promo_probability=0.5)
        orders = self._generate(rng, config)

        for order in orders:
            subtotal = sum(i["unit_price"] * i["quantity"] for i in order["items"])
            assert order["total_price"] == max(subtotal - order["promo_amount"], 0)
            assert order["total_price"] >= 0

    def test_some_promos_exceed_the_cart(self):
        config = OrderConfig(orders=300, promo_probability=1.0, max_items_per_order=1)
        cheap = [ProductRef(id=1, name="Savon", unit_price=Decimal("500"))]

        orders = OrderGenerator(random.Random(3), config, REFERENCE_TIME).generate(
            CUSTOMERS, cheap
        )

        assert any(o["total_price"] == 0 for o in orders)

    def test_line_items(self, rng, order_config):
        orders = self._generate(rng, order_config)

        for order in orders:
            assert 1 <= len(order["items"]) <= order_config.max_items_per_order
            product_ids = [i["product_id"] for i in order["items"]]
            assert len(product_ids) == len(set(product_ids))
            for item in order["items"]:
                assert 1 <= item["quantity"] <= order_config.max_quantity

    def test_line_items_snapshot_product(self, rng, order_config):
        by_id = {p.id: p for p in PRODUCTS}
        orders = self._generate(rng, order_config)

        for item in orders[0]["items"]:
            assert item["name"] == by_id[item["product_id"]].name
            assert item["unit_price"] == by_id[item["product_id"]].unit_price

    def test_status_follows_weights(self, rng):
        config = OrderConfig(orders=50, status_weights={"delivered": 1.0, "cancelled": 0.0})

        orders = self._generate(rng, config)

        assert {o["status"] for o in orders} == {OrderStatus.DELIVERED.value}

    def test_orders_sorted_with_unique_numbers(self, rng, order_config):
        orders = self._generate(rng, order_config)

        created = [o["created_at"] for o in orders]
        assert created == sorted(created)
        assert len({o["order_number"] for o in orders}) == len(orders)
        assert all(o["order_number"].startswith("CMD-") for o in orders)

    def test_shipping_snapshot_matches_customer(self, rng, order_config):
        by_id = {c.id: c for c in CUSTOMERS}
        orders = self._generate(rng, order_config)

        for order in orders:
            if order["customer_id"] is not None:
                assert order["shipping_email"] == by_id[order["customer_id"]].email

    def test_requires_products(self, rng, order_config):
        with pytest.raises(ValueError, match="without products"):
            OrderGenerator(rng, order_config, REFERENCE_TIME).generate(CUSTOMERS, [])

    def test_deterministic(self, order_config):
        first = OrderGenerator(random.Random(5), order_config, REFERENCE_TIME).generate(
            CUSTOMERS, PRODUCTS
        )
        second = OrderGenerator(random.Random(5), order_config, REFERENCE_TIME).generate(
            CUSTOMERS, PRODUCTS
        )

        assert first == second
