"""Data generators for the marketplace seeder."""

from app.shared.seeder.generators.catalog import CategoryGenerator, slugify
from app.shared.seeder.generators.customer import CustomerGenerator
from app.shared.seeder.generators.order import CustomerRef, OrderGenerator, ProductRef
from app.shared.seeder.generators.product import ProductGenerator

__all__ = [
    "CategoryGenerator",
    "CustomerGenerator",
    "CustomerRef",
    "OrderGenerator",
    "ProductGenerator",
    "ProductRef",
    "slugify",
]
