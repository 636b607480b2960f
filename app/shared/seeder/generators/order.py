"""Order and line item generator."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from app.features.marketplace.models import OrderStatus

if TYPE_CHECKING:
    from app.shared.seeder.config import OrderConfig


PAYMENT_METHODS = ["cash", "mobile_money", "card"]

# Fixed coupon values; a coupon larger than the cart empties the total
PROMO_AMOUNTS = [Decimal("1000"), Decimal("2500"), Decimal("5000"), Decimal("10000")]

GUEST_PROBABILITY = 0.1


@dataclass(frozen=True)
class ProductRef:
    """Product fields an order line snapshots."""

    id: int
    name: str
    unit_price: Decimal
    image: str | None = None


@dataclass(frozen=True)
class CustomerRef:
    """Customer fields an order snapshots as its shipping address."""

    id: int
    name: str | None
    email: str | None
    phone: str | None = None
    address: str | None = None
    city: str | None = None


class OrderGenerator:
    """Generator for orders with their line items."""

    def __init__(
        self,
        rng: random.Random,
        config: OrderConfig,
        reference_time: datetime,
    ) -> None:
        """Initialize the order generator.

        Args:
            rng: Random number generator for reproducibility.
            config: Order configuration.
            reference_time: Latest possible order time.
        """
        self.rng = rng
        self.config = config
        self.reference_time = reference_time
        self._statuses = list(config.status_weights)
        self._weights = [config.status_weights[s] for s in self._statuses]

    def _created_at(self) -> datetime:
        age = timedelta(minutes=self.rng.randint(0, self.config.history_days * 24 * 60))
        return self.reference_time - age

    def _generate_items(self, products: list[ProductRef]) -> list[dict[str, Any]]:
        count = min(self.rng.randint(1, self.config.max_items_per_order), len(products))
        return [
            {
                "product_id": product.id,
                "quantity": self.rng.randint(1, self.config.max_quantity),
                "unit_price": product.unit_price,
                "name": product.name,
                "image": product.image,
                "position": position,
            }
            for position, product in enumerate(self.rng.sample(products, count))
        ]

    def generate(
        self,
        customers: list[CustomerRef],
        products: list[ProductRef],
    ) -> list[dict[str, Any]]:
        """Generate order records.

        ``total_price`` is the sum of ``unit_price * quantity`` over the line
        items minus ``promo_amount``, never below zero.

        Args:
            customers: Customers orders may belong to.
            products: Products orders may contain.

        Returns:
            List of order dictionaries, each with an ``items`` list, sorted by
            creation time.

        Raises:
            ValueError: If orders are requested but no products exist.
        """
        if self.config.orders and not products:
            raise ValueError("Cannot generate orders without products")

        created_times = sorted(self._created_at() for _ in range(self.config.orders))
        orders: list[dict[str, Any]] = []

        for seq, created_at in enumerate(created_times, start=1):
            customer = None
            if customers and self.rng.random() >= GUEST_PROBABILITY:
                customer = self.rng.choice(customers)

            items = self._generate_items(products)
            subtotal = sum(
                (item["unit_price"] * item["quantity"] for item in items), Decimal("0")
            )
            promo_amount = Decimal("0")
            if self.rng.random() < self.config.promo_probability:
                promo_amount = self.rng.choice(PROMO_AMOUNTS)

            status = self.rng.choices(self._statuses, weights=self._weights)[0]

            orders.append(
                {
                    "order_number": f"CMD-{created_at:%Y%m%d}-{seq:05d}",
                    "customer_id": customer.id if customer else None,
                    "total_price": max(subtotal - promo_amount, Decimal("0")),
                    "promo_amount": promo_amount,
                    "status": status,
                    "payment_method": self.rng.choice(PAYMENT_METHODS),
                    "shipping_name": customer.name if customer else "Client invité",
                    "shipping_email": customer.email if customer else None,
                    "shipping_phone": customer.phone if customer else None,
                    "shipping_address": customer.address if customer else None,
                    "shipping_city": customer.city if customer else None,
                    "notes": None,
                    "is_seen": status != OrderStatus.PENDING.value or self.rng.random() < 0.5,
                    "created_at": created_at,
                    "items": items,
                }
            )

        return orders
