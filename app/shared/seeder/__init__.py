"""Seeder module for generating synthetic marketplace data.

Fills a development database with a realistic catalog, customers and an
order history so the analytics dashboard has something to show.

Provides:
- Generators for the category tree, products, customers and orders
- Pre-built scenarios and YAML configuration
- Safe delete with dry-run support
"""

from app.shared.seeder.config import (
    CatalogConfig,
    OrderConfig,
    ScenarioPreset,
    SeederConfig,
    load_config_from_yaml,
)
from app.shared.seeder.core import DataSeeder, SeederResult

__all__ = [
    "CatalogConfig",
    "DataSeeder",
    "OrderConfig",
    "ScenarioPreset",
    "SeederConfig",
    "SeederResult",
    "load_config_from_yaml",
]
