"""Product generator."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from app.features.marketplace.models import ProductCondition, ProductStatus
from app.shared.seeder.generators.catalog import slugify

if TYPE_CHECKING:
    from app.shared.seeder.config import CatalogConfig


# Product name components for realistic generation
PRODUCT_ADJECTIVES = [
    "Classique",
    "Premium",
    "Compact",
    "Élégant",
    "Pro",
    "Confort",
    "Essentiel",
    "Original",
    "Léger",
    "Robuste",
    "Naturel",
    "Deluxe",
]

PRODUCT_NOUNS_BY_CATEGORY = {
    "Électronique": ["Smartphone", "Casque", "Enceinte", "Chargeur", "Tablette", "Montre"],
    "Mode": ["Robe", "Chemise", "Pagne", "Sandales", "Sac à main", "Veste"],
    "Maison": ["Lampe", "Marmite", "Coussin", "Ventilateur", "Tapis", "Miroir"],
    "Beauté": ["Crème", "Parfum", "Savon", "Huile", "Rouge à lèvres", "Shampoing"],
    "Sport": ["Ballon", "Maillot", "Haltères", "Tapis de yoga", "Baskets", "Gourde"],
    "Alimentation": ["Café", "Riz", "Huile de palme", "Jus", "Chocolat", "Attiéké"],
    "Jouets": ["Puzzle", "Peluche", "Voiture", "Jeu de cartes", "Poupée", "Cubes"],
    "Auto": ["Pneu", "Batterie", "Huile moteur", "Housse", "Autoradio", "Essuie-glace"],
}

# Default nouns if category not in dict
DEFAULT_NOUNS = ["Article", "Produit", "Coffret", "Lot"]


class ProductGenerator:
    """Generator for product records."""

    def __init__(
        self,
        rng: random.Random,
        config: CatalogConfig,
        reference_time: datetime,
        history_days: int,
    ) -> None:
        """Initialize the product generator.

        Args:
            rng: Random number generator for reproducibility.
            config: Catalog configuration.
            reference_time: Latest possible creation time.
            history_days: Products are created within this many days before
                ``reference_time``.
        """
        self.rng = rng
        self.config = config
        self.reference_time = reference_time
        self.history_days = history_days
        self._used_slugs: set[str] = set()

    def _generate_name(self, category: str | None) -> str:
        adjective = self.rng.choice(PRODUCT_ADJECTIVES)
        nouns = PRODUCT_NOUNS_BY_CATEGORY.get(category or "", DEFAULT_NOUNS)
        return f"{self.rng.choice(nouns)} {adjective}"

    def _unique_slug(self, name: str) -> str:
        base = slugify(name)
        slug = base
        suffix = 2
        while slug in self._used_slugs:
            slug = f"{base}-{suffix}"
            suffix += 1
        self._used_slugs.add(slug)
        return slug

    def _generate_prices(self) -> tuple[Decimal, Decimal | None, bool, Decimal | None]:
        """Generate price, promo price and special offer.

        Prices are whole amounts between 500 and 250 000, rounded to 50.

        Returns:
            Tuple of (price, promo_price, is_special_offer, special_offer_price).
        """
        price = Decimal(self.rng.randint(10, 5000) * 50)

        promo_price = None
        if self.rng.random() < 0.25:
            promo_price = (price * Decimal(str(self.rng.uniform(0.6, 0.95)))).quantize(
                Decimal("1")
            )

        is_special_offer = self.rng.random() < 0.1
        special_offer_price = (
            (price * Decimal("0.8")).quantize(Decimal("1")) if is_special_offer else None
        )
        return price, promo_price, is_special_offer, special_offer_price

    def generate(self, categories: list[str]) -> list[dict[str, Any]]:
        """Generate product records.

        Args:
            categories: Category names products may be assigned to.

        Returns:
            List of product dictionaries. ``category`` holds a category name,
            or None for uncategorized products.
        """
        products: list[dict[str, Any]] = []

        for _ in range(self.config.products):
            category: str | None = None
            if categories and self.rng.random() >= self.config.uncategorized_probability:
                category = self.rng.choice(categories)

            name = self._generate_name(category)
            price, promo_price, is_special_offer, special_offer_price = self._generate_prices()
            age = timedelta(minutes=self.rng.randint(0, self.history_days * 24 * 60))

            products.append(
                {
                    "slug": self._unique_slug(name),
                    "name": name,
                    "description": f"{name} - sélection {category or 'divers'}.",
                    "category": category,
                    "price": price,
                    "promo_price": promo_price,
                    "is_special_offer": is_special_offer,
                    "special_offer_price": special_offer_price,
                    "stock": self.rng.randint(0, 200),
                    "status": (
                        ProductStatus.ACTIVE.value
                        if self.rng.random() < 0.9
                        else ProductStatus.INACTIVE.value
                    ),
                    "condition": self.rng.choices(
                        [c.value for c in ProductCondition], weights=[0.8, 0.15, 0.05]
                    )[0],
                    "clicks": self.rng.randint(0, self.config.max_clicks),
                    "created_at": self.reference_time - age,
                }
            )

        return products
