"""Category tree generator."""

from __future__ import annotations

import random
import re
import unicodedata
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.shared.seeder.config import CatalogConfig


SUBCATEGORY_NAMES_BY_CATEGORY = {
    "Électronique": ["Téléphones", "Ordinateurs", "Audio", "Télévisions", "Accessoires"],
    "Mode": ["Femme", "Homme", "Enfant", "Chaussures", "Sacs"],
    "Maison": ["Cuisine", "Salon", "Chambre", "Décoration", "Jardin"],
    "Beauté": ["Soins visage", "Parfums", "Maquillage", "Cheveux"],
    "Sport": ["Fitness", "Football", "Running", "Plein air"],
    "Alimentation": ["Épicerie", "Boissons", "Produits frais", "Snacks"],
    "Jouets": ["Jeux de société", "Poupées", "Construction", "Éveil"],
    "Auto": ["Pièces", "Entretien", "Équipement", "Audio embarqué"],
}

SUBSUBCATEGORY_SUFFIXES = ["Premium", "Essentiels", "Nouveautés", "Promotions"]


def slugify(value: str) -> str:
    """ASCII, lowercase, dash-separated slug."""
    ascii_value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode()
    return re.sub(r"[^a-z0-9]+", "-", ascii_value.lower()).strip("-")


class CategoryGenerator:
    """Generator for the three-level category tree."""

    def __init__(self, rng: random.Random, config: CatalogConfig) -> None:
        """Initialize the category generator.

        Args:
            rng: Random number generator for reproducibility.
            config: Catalog configuration.

        Raises:
            ValueError: If more categories are requested than names exist.
        """
        self.rng = rng
        self.config = config

        if config.categories > len(config.category_names):
            raise ValueError(
                f"Cannot generate {config.categories} categories: "
                f"only {len(config.category_names)} names configured"
            )

    def _subcategory_names(self, category: str) -> list[str]:
        pool = SUBCATEGORY_NAMES_BY_CATEGORY.get(category)
        count = self.config.subcategories_per_category
        if not pool:
            return [f"{category} {index + 1}" for index in range(count)]
        if count <= len(pool):
            return self.rng.sample(pool, count)
        return pool + [f"{category} {index + 1}" for index in range(len(pool), count)]

    def generate(self) -> list[dict[str, Any]]:
        """Generate category records with nested subcategories.

        Returns:
            List of category dictionaries, each with a ``subcategories`` list
            whose entries carry their own ``subsubcategories`` list.
        """
        names = self.rng.sample(self.config.category_names, self.config.categories)
        categories: list[dict[str, Any]] = []

        for name in names:
            slug = slugify(name)
            subcategories = []
            for position, sub_name in enumerate(self._subcategory_names(name)):
                subsubcategories = [
                    {"name": f"{sub_name} {suffix}", "position": sub_position}
                    for sub_position, suffix in enumerate(
                        SUBSUBCATEGORY_SUFFIXES[: self.config.subsubcategories_per_subcategory]
                    )
                ]
                subcategories.append(
                    {
                        "name": sub_name,
                        "position": position,
                        "image": f"/images/categories/{slug}/{slugify(sub_name)}.webp",
                        "subsubcategories": subsubcategories,
                    }
                )

            categories.append(
                {
                    "name": name,
                    "slug": slug,
                    "image": f"/images/categories/{slug}.webp",
                    "subcategories": subcategories,
                }
            )

        return categories
