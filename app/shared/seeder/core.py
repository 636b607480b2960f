"""Core seeder orchestration module."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.features.marketplace.models import (
    Category,
    Customer,
    Order,
    OrderItem,
    Product,
    Subcategory,
    SubSubcategory,
)
from app.shared.seeder.generators import (
    CategoryGenerator,
    CustomerGenerator,
    CustomerRef,
    OrderGenerator,
    ProductGenerator,
    ProductRef,
)

if TYPE_CHECKING:
    from app.shared.seeder.config import SeederConfig

logger = get_logger(__name__)

# Children before parents, so deleting in this order never violates a FK
TABLES_IN_DELETE_ORDER: list[tuple[str, type[Any]]] = [
    ("order_item", OrderItem),
    ("customer_order", Order),
    ("customer", Customer),
    ("product", Product),
    ("subsubcategory", SubSubcategory),
    ("subcategory", Subcategory),
    ("category", Category),
]


@dataclass
class SeederResult:
    """Result of a seeder operation.

    Attributes:
        categories_count: Number of categories generated.
        subcategories_count: Number of subcategories generated.
        subsubcategories_count: Number of third-level categories generated.
        products_count: Number of products generated.
        customers_count: Number of customers generated.
        orders_count: Number of orders generated.
        order_items_count: Number of order line items generated.
        seed: Random seed used.
    """

    categories_count: int = 0
    subcategories_count: int = 0
    subsubcategories_count: int = 0
    products_count: int = 0
    customers_count: int = 0
    orders_count: int = 0
    order_items_count: int = 0
    seed: int = 42


class DataSeeder:
    """Orchestrates synthetic marketplace data generation.

    Inserts the catalog tree, products, customers and an order history
    whose timestamps end at the configured reference time.
    """

    def __init__(self, config: SeederConfig) -> None:
        """Initialize the data seeder.

        Args:
            config: Seeder configuration.
        """
        self.config = config
        self.rng = random.Random(config.seed)
        self.reference_time = config.reference_time or datetime.now(UTC)

    async def _insert_returning_ids(
        self,
        db: AsyncSession,
        model: type[Any],
        records: list[dict[str, Any]],
    ) -> list[int]:
        """Insert records in batches and return their ids in input order."""
        ids: list[int] = []
        size = self.config.batch_size

        for i in range(0, len(records), size):
            batch = records[i : i + size]
            result = await db.execute(
                insert(model).returning(model.id, sort_by_parameter_order=True),
                batch,
            )
            ids.extend(result.scalars().all())

        return ids

    async def _insert(
        self,
        db: AsyncSession,
        model: type[Any],
        records: list[dict[str, Any]],
    ) -> int:
        size = self.config.batch_size
        for i in range(0, len(records), size):
            await db.execute(insert(model), records[i : i + size])
        return len(records)

    async def _generate_catalog(
        self,
        db: AsyncSession,
    ) -> tuple[dict[str, int], dict[str, list[int]], int, int]:
        """Generate and insert the category tree.

        Returns:
            Tuple of (category id by name, subcategory ids by category name,
            subcategory count, sub-subcategory count).
        """
        tree = CategoryGenerator(self.rng, self.config.catalog).generate()

        logger.info("seeder.categories.generating", count=len(tree))

        category_ids = await self._insert_returning_ids(
            db,
            Category,
            [{"name": c["name"], "slug": c["slug"], "image": c["image"]} for c in tree],
        )
        category_id_by_name = {c["name"]: cid for c, cid in zip(tree, category_ids, strict=True)}

        sub_records: list[dict[str, Any]] = []
        sub_children: list[list[dict[str, Any]]] = []
        sub_owner: list[str] = []
        for category in tree:
            for sub in category["subcategories"]:
                sub_records.append(
                    {
                        "category_id": category_id_by_name[category["name"]],
                        "name": sub["name"],
                        "image": sub["image"],
                        "position": sub["position"],
                    }
                )
                sub_children.append(sub["subsubcategories"])
                sub_owner.append(category["name"])

        sub_ids = await self._insert_returning_ids(db, Subcategory, sub_records)

        subcategory_ids_by_category: dict[str, list[int]] = {
            name: [] for name in category_id_by_name
        }
        for owner, sub_id in zip(sub_owner, sub_ids, strict=True):
            subcategory_ids_by_category[owner].append(sub_id)

        subsub_records = [
            {
                "subcategory_id": sub_id,
                "name": child["name"],
                "position": child["position"],
                "product_count": 0,
            }
            for sub_id, children in zip(sub_ids, sub_children, strict=True)
            for child in children
        ]
        await self._insert(db, SubSubcategory, subsub_records)

        return category_id_by_name, subcategory_ids_by_category, len(sub_ids), len(subsub_records)

    async def _generate_products(
        self,
        db: AsyncSession,
        category_id_by_name: dict[str, int],
        subcategory_ids_by_category: dict[str, list[int]],
    ) -> list[ProductRef]:
        generator = ProductGenerator(
            self.rng,
            self.config.catalog,
            reference_time=self.reference_time,
            history_days=self.config.orders.history_days,
        )
        products = generator.generate(sorted(category_id_by_name))

        logger.info("seeder.products.generating", count=len(products))

        records: list[dict[str, Any]] = []
        for product in products:
            category = product.pop("category")
            subcategories = subcategory_ids_by_category.get(category, []) if category else []
            records.append(
                {
                    **product,
                    "category_id": category_id_by_name[category] if category else None,
                    "subcategory_id": self.rng.choice(subcategories) if subcategories else None,
                }
            )

        ids = await self._insert_returning_ids(db, Product, records)
        return [
            ProductRef(
                id=pid,
                name=record["name"],
                unit_price=record["promo_price"] or record["price"],
                image=f"/images/products/{record['slug']}.webp",
            )
            for pid, record in zip(ids, records, strict=True)
        ]

    async def _generate_customers(self, db: AsyncSession) -> list[CustomerRef]:
        records = CustomerGenerator(self.rng, self.config.orders.customers).generate()

        logger.info("seeder.customers.generating", count=len(records))

        ids = await self._insert_returning_ids(db, Customer, records)
        return [
            CustomerRef(id=cid, **record) for cid, record in zip(ids, records, strict=True)
        ]

    async def _generate_orders(
        self,
        db: AsyncSession,
        customers: list[CustomerRef],
        products: list[ProductRef],
    ) -> tuple[int, int]:
        generator = OrderGenerator(self.rng, self.config.orders, self.reference_time)
        orders = generator.generate(customers, products)

        logger.info("seeder.orders.generating", count=len(orders))

        items_per_order = [order.pop("items") for order in orders]
        order_ids = await self._insert_returning_ids(db, Order, orders)

        item_records = [
            {**item, "order_id": order_id}
            for order_id, items in zip(order_ids, items_per_order, strict=True)
            for item in items
        ]
        items_count = await self._insert(db, OrderItem, item_records)

        return len(order_ids), items_count

    async def generate(self, db: AsyncSession) -> SeederResult:
        """Generate a complete marketplace dataset.

        Args:
            db: Async database session.

        Returns:
            SeederResult with counts of generated records.
        """
        logger.info(
            "seeder.generation.started",
            seed=self.config.seed,
            categories=self.config.catalog.categories,
            products=self.config.catalog.products,
            customers=self.config.orders.customers,
            orders=self.config.orders.orders,
            reference_time=self.reference_time.isoformat(),
        )

        category_id_by_name, subcategory_ids, sub_count, subsub_count = (
            await self._generate_catalog(db)
        )
        products = await self._generate_products(db, category_id_by_name, subcategory_ids)
        customers = await self._generate_customers(db)
        orders_count, items_count = await self._generate_orders(db, customers, products)

        # Commit all changes
        await db.commit()

        result = SeederResult(
            categories_count=len(category_id_by_name),
            subcategories_count=sub_count,
            subsubcategories_count=subsub_count,
            products_count=len(products),
            customers_count=len(customers),
            orders_count=orders_count,
            order_items_count=items_count,
            seed=self.config.seed,
        )

        logger.info(
            "seeder.generation.completed",
            categories=result.categories_count,
            products=result.products_count,
            customers=result.customers_count,
            orders=result.orders_count,
            order_items=result.order_items_count,
            seed=self.config.seed,
        )

        return result

    async def delete_all(self, db: AsyncSession, dry_run: bool = False) -> dict[str, int]:
        """Delete all marketplace data.

        Args:
            db: Async database session.
            dry_run: If True, only report what would be deleted.

        Returns:
            Dictionary of table names to row counts (deleted or would be deleted).
        """
        counts = await self.get_status(db)

        if dry_run:
            logger.info("seeder.delete.dry_run", counts=counts)
            return counts

        for name, model in TABLES_IN_DELETE_ORDER:
            logger.info("seeder.delete.table", table=name, count=counts[name])
            await db.execute(delete(model))

        await db.commit()

        logger.info("seeder.delete.completed", total_deleted=sum(counts.values()))

        return counts

    async def get_status(self, db: AsyncSession) -> dict[str, int]:
        """Get current row counts for all marketplace tables.

        Args:
            db: Async database session.

        Returns:
            Dictionary of table names to row counts.
        """
        counts: dict[str, int] = {}
        for name, model in reversed(TABLES_IN_DELETE_ORDER):
            result = await db.execute(select(func.count()).select_from(model))
            counts[name] = result.scalar() or 0
        return counts
