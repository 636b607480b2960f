"""Pure aggregation helpers for the analytics dashboard.

Everything here works on already-fetched ORM rows (or any object with the
same attributes) and never touches the database.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from app.features.analytics.periods import as_utc, month_bounds, month_label
from app.features.marketplace.models import (
    ACTIVE_ORDER_STATUSES,
    DELIVERED_ORDER_STATUSES,
    PAID_ORDER_STATUSES,
    Order,
)

_ONE_DECIMAL = Decimal("0.1")

_ACTIVE = {s.value for s in ACTIVE_ORDER_STATUSES}
_PAID = {s.value for s in PAID_ORDER_STATUSES}
_DELIVERED = {s.value for s in DELIVERED_ORDER_STATUSES}


@dataclass(frozen=True)
class PeriodMetrics:
    """Order-derived card values for one period."""

    revenue: Decimal
    orders: int
    delivered_orders: int
    customers: int


@dataclass
class ProductSales:
    """Cumulative sales of one product across the whole order history."""

    name: str
    category: str
    sales: int = 0
    revenue: Decimal = Decimal("0")


@dataclass(frozen=True)
class MonthlyStat:
    """Order volume for one calendar month."""

    month: str
    sales: Decimal
    orders: int


def percent_change(current: float | Decimal, previous: float | Decimal) -> float:
    """Relative change from ``previous`` to ``current`` in percent.

    A zero baseline yields 0 when nothing happened in either period and a
    flat 100 otherwise.
    """
    current_f = float(current)
    previous_f = float(previous)
    if previous_f == 0:
        return 0.0 if current_f == 0 else 100.0
    return (current_f - previous_f) / previous_f * 100


def round_change(value: float) -> float:
    """Round to one decimal place, halves away from zero."""
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def normalize_status(status: str | None) -> str:
    return (status or "").strip().lower()


def customer_identity(order: Order) -> str:
    """Identity used to count distinct customers: email, then name, then id."""
    customer = order.customer
    email = (customer.email if customer else None) or order.shipping_email
    if email:
        return f"email:{email.strip().lower()}"
    name = (customer.name if customer else None) or order.shipping_name
    if name:
        return f"name:{name.strip()}"
    if order.customer_id is not None:
        return f"customer:{order.customer_id}"
    return f"order:{order.id}"


def summarize_orders(orders: Iterable[Order]) -> PeriodMetrics:
    """Compute revenue, order, delivery and customer counts for one period.

    - ``orders`` counts every allow-listed order, pending included.
    - ``revenue`` sums ``total_price`` of paid-or-later orders only.
    - ``customers`` counts distinct identities among delivered orders only.
    """
    revenue = Decimal("0")
    count = 0
    delivered = 0
    identities: set[str] = set()

    for order in orders:
        status = normalize_status(order.status)
        if status not in _ACTIVE:
            continue
        count += 1
        if status in _PAID:
            revenue += Decimal(order.total_price or 0)
        if status in _DELIVERED:
            delivered += 1
            identities.add(customer_identity(order))

    return PeriodMetrics(
        revenue=revenue,
        orders=count,
        delivered_orders=delivered,
        customers=len(identities),
    )


def accumulate_product_sales(
    orders: Iterable[Order],
) -> dict[int | str, tuple[str, int, Decimal]]:
    """Sum quantity and line revenue per product over ``orders``.

    Lines whose product was deleted are keyed by their snapshot name.

    Returns:
        Mapping of product key to ``(first seen name, quantity, revenue)``,
        in first-seen order.
    """
    totals: dict[int | str, tuple[str, int, Decimal]] = {}
    for order in orders:
        for item in order.items:
            key: int | str = (
                item.product_id if item.product_id is not None else f"deleted:{item.name}"
            )
            name, quantity, revenue = totals.get(key, (item.name, 0, Decimal("0")))
            line_revenue = Decimal(item.unit_price or 0) * item.quantity
            totals[key] = (name, quantity + item.quantity, revenue + line_revenue)
    return totals


def top_products_by_category(
    orders: Iterable[Order],
    category_lookup: Mapping[int, str | None],
    other_label: str,
    limit: int = 3,
) -> dict[str, list[ProductSales]]:
    """Best-selling products per category, by cumulative units sold.

    Args:
        orders: Orders to aggregate (the full history, any status).
        category_lookup: Product id to category name; ``None`` or a missing
            id sends the product to the ``other_label`` bucket.
        other_label: Placeholder category name.
        limit: Products kept per category.

    Returns:
        Category name to at most ``limit`` products, sales descending.
    """
    buckets: dict[str, list[ProductSales]] = {}
    for key, (name, quantity, revenue) in accumulate_product_sales(orders).items():
        category = category_lookup.get(key) if isinstance(key, int) else None
        bucket = category or other_label
        buckets.setdefault(bucket, []).append(
            ProductSales(name=name, category=bucket, sales=quantity, revenue=revenue)
        )

    return {
        category: sorted(products, key=lambda p: p.sales, reverse=True)[:limit]
        for category, products in buckets.items()
    }


def monthly_series(
    orders: Iterable[Order],
    year: int,
    tz: tzinfo = UTC,
    locale: Literal["fr", "en"] = "fr",
) -> list[MonthlyStat]:
    """Twelve calendar-month buckets of order totals for ``year``."""
    bounds = month_bounds(year, tz)
    sales = [Decimal("0")] * 12
    counts = [0] * 12

    for order in orders:
        created = as_utc(order.created_at)
        for index, (start, end) in enumerate(bounds):
            if start <= created < end:
                sales[index] += Decimal(order.total_price or 0)
                counts[index] += 1
                break

    return [
        MonthlyStat(month=month_label(index + 1, locale), sales=sales[index], orders=counts[index])
        for index in range(12)
    ]
