"""Customer generator."""

from __future__ import annotations

import random
from typing import Any

from app.shared.seeder.generators.catalog import slugify

FIRST_NAMES = [
    "Awa",
    "Koffi",
    "Aminata",
    "Yao",
    "Fatou",
    "Moussa",
    "Adjoua",
    "Ibrahim",
    "Mariam",
    "Serge",
    "Chloé",
    "Kouadio",
    "Nadia",
    "Olivier",
    "Salimata",
    "Jean",
]

LAST_NAMES = [
    "Kouassi",
    "Traoré",
    "Koné",
    "Diallo",
    "Bamba",
    "N'Guessan",
    "Ouattara",
    "Yao",
    "Coulibaly",
    "Touré",
    "Konan",
    "Diabaté",
]

CITIES = ["Abidjan", "Bouaké", "Yamoussoukro", "San-Pédro", "Daloa", "Korhogo", "Man"]

DISTRICTS = ["Cocody", "Plateau", "Marcory", "Yopougon", "Treichville", "Riviera", "Adjamé"]


class CustomerGenerator:
    """Generator for customer records."""

    def __init__(self, rng: random.Random, count: int) -> None:
        """Initialize the customer generator.

        Args:
            rng: Random number generator for reproducibility.
            count: Number of customers to generate.
        """
        self.rng = rng
        self.count = count
        self._used_emails: set[str] = set()

    def _unique_email(self, first: str, last: str) -> str:
        base = f"{slugify(first)}.{slugify(last)}"
        email = f"{base}@example.com"
        suffix = 2
        while email in self._used_emails:
            email = f"{base}{suffix}@example.com"
            suffix += 1
        self._used_emails.add(email)
        return email

    def generate(self) -> list[dict[str, Any]]:
        """Generate customer records.

        Returns:
            List of customer dictionaries ready for database insertion.
        """
        customers: list[dict[str, Any]] = []

        for _ in range(self.count):
            first = self.rng.choice(FIRST_NAMES)
            last = self.rng.choice(LAST_NAMES)
            customers.append(
                {
                    "name": f"{first} {last}",
                    "email": self._unique_email(first, last),
                    "phone": f"+225 07 {self.rng.randint(10, 99)} {self.rng.randint(10, 99)}"
                    f" {self.rng.randint(10, 99)} {self.rng.randint(10, 99)}",
                    "address": f"{self.rng.randint(1, 250)} Rue {self.rng.choice(DISTRICTS)}",
                    "city": self.rng.choice(CITIES),
                }
            )

        return customers
