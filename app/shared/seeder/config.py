"""Configuration dataclasses for the seeder module."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from app.features.marketplace.models import OrderStatus


class ScenarioPreset(str, Enum):
    """Pre-built scenario presets for common dashboard demos."""

    STANDARD = "standard"
    BUSY_SEASON = "busy_season"
    SPARSE = "sparse"


@dataclass
class CatalogConfig:
    """Configuration for the catalog tree and products.

    Attributes:
        categories: Number of top-level categories (capped by ``category_names``).
        subcategories_per_category: Subcategories generated under each category.
        subsubcategories_per_subcategory: Third-level entries per subcategory.
        products: Number of products to generate.
        uncategorized_probability: Probability a product has no category.
        max_clicks: Upper bound for a product's storefront clicks.
        category_names: Pool of category names.
    """

    categories: int = 6
    subcategories_per_category: int = 3
    subsubcategories_per_subcategory: int = 2
    products: int = 60
    uncategorized_probability: float = 0.05
    max_clicks: int = 500
    category_names: list[str] = field(
        default_factory=lambda: [
            "Électronique",
            "Mode",
            "Maison",
            "Beauté",
            "Sport",
            "Alimentation",
            "Jouets",
            "Auto",
        ]
    )


@dataclass
class OrderConfig:
    """Configuration for customers and their order history.

    Attributes:
        customers: Number of customers to generate.
        orders: Number of orders to generate.
        history_days: Orders and products are spread over this many past days.
        max_items_per_order: Upper bound of line items per order.
        max_quantity: Upper bound of units per line item.
        promo_probability: Probability an order gets a promotional deduction.
        status_weights: Relative weight of each order status.
    """

    customers: int = 40
    orders: int = 300
    history_days: int = 450
    max_items_per_order: int = 4
    max_quantity: int = 3
    promo_probability: float = 0.15
    status_weights: dict[str, float] = field(
        default_factory=lambda: {
            OrderStatus.PENDING.value: 0.15,
            OrderStatus.PAID.value: 0.2,
            OrderStatus.SHIPPED.value: 0.15,
            OrderStatus.DELIVERED.value: 0.4,
            OrderStatus.CANCELLED.value: 0.1,
        }
    )


@dataclass
class SeederConfig:
    """Master configuration for the data seeder.

    Attributes:
        seed: Random seed for reproducibility.
        catalog: Catalog generation configuration.
        orders: Customer and order generation configuration.
        reference_time: Instant the history ends at (defaults to now).
        batch_size: Batch size for database inserts.
    """

    seed: int = 42
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    orders: OrderConfig = field(default_factory=OrderConfig)
    reference_time: datetime | None = None
    batch_size: int = 500

    def __post_init__(self) -> None:
        unknown = set(self.orders.status_weights) - {s.value for s in OrderStatus}
        if unknown:
            raise ValueError(f"Unknown order statuses in status_weights: {sorted(unknown)}")
        if self.orders.max_items_per_order < 1 or self.orders.max_quantity < 1:
            raise ValueError("max_items_per_order and max_quantity must be at least 1")
        if self.orders.history_days < 1:
            raise ValueError("history_days must be at least 1")

    @classmethod
    def from_scenario(cls, scenario: ScenarioPreset, seed: int = 42) -> SeederConfig:
        """Create configuration from a pre-built scenario.

        Args:
            scenario: The scenario preset to use.
            seed: Random seed for reproducibility.

        Returns:
            SeederConfig configured for the scenario.
        """
        if scenario == ScenarioPreset.BUSY_SEASON:
            return cls(
                seed=seed,
                catalog=CatalogConfig(categories=8, products=150, max_clicks=2000),
                orders=OrderConfig(customers=200, orders=2000, history_days=400),
            )

        if scenario == ScenarioPreset.SPARSE:
            return cls(
                seed=seed,
                catalog=CatalogConfig(
                    categories=2,
                    subcategories_per_category=1,
                    products=10,
                    uncategorized_probability=0.3,
                ),
                orders=OrderConfig(customers=5, orders=20, history_days=90),
            )

        return cls(seed=seed)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SeederConfig:
        """Build a configuration from a parsed YAML document.

        Missing keys keep their defaults.
        """
        catalog_defaults = CatalogConfig()
        catalog_data = data.get("catalog", {})
        catalog = CatalogConfig(
            categories=catalog_data.get("categories", catalog_defaults.categories),
            subcategories_per_category=catalog_data.get(
                "subcategories_per_category", catalog_defaults.subcategories_per_category
            ),
            subsubcategories_per_subcategory=catalog_data.get(
                "subsubcategories_per_subcategory",
                catalog_defaults.subsubcategories_per_subcategory,
            ),
            products=catalog_data.get("products", catalog_defaults.products),
            uncategorized_probability=catalog_data.get(
                "uncategorized_probability", catalog_defaults.uncategorized_probability
            ),
            max_clicks=catalog_data.get("max_clicks", catalog_defaults.max_clicks),
            category_names=catalog_data.get("category_names", catalog_defaults.category_names),
        )

        order_defaults = OrderConfig()
        order_data = data.get("orders", {})
        orders = OrderConfig(
            customers=order_data.get("customers", order_defaults.customers),
            orders=order_data.get("count", order_defaults.orders),
            history_days=order_data.get("history_days", order_defaults.history_days),
            max_items_per_order=order_data.get(
                "max_items_per_order", order_defaults.max_items_per_order
            ),
            max_quantity=order_data.get("max_quantity", order_defaults.max_quantity),
            promo_probability=order_data.get(
                "promo_probability", order_defaults.promo_probability
            ),
            status_weights=order_data.get("status_weights", order_defaults.status_weights),
        )

        reference_time = data.get("reference_time")
        if isinstance(reference_time, str):
            reference_time = datetime.fromisoformat(reference_time)

        return cls(
            seed=data.get("seed", 42),
            catalog=catalog,
            orders=orders,
            reference_time=reference_time,
            batch_size=data.get("batch_size", 500),
        )


def load_config_from_yaml(path: Path) -> SeederConfig:
    """Load seeder configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        SeederConfig loaded from file.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config file is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    return SeederConfig.from_dict(data)
