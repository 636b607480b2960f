#!/usr/bin/env python
"""Print the admin dashboard for every comparison range.

Usage:
    uv run python examples/analytics_demo.py

Prerequisites:
    - PostgreSQL running (docker-compose up -d)
    - Database migrated (uv run alembic upgrade head)
    - Demo data seeded (uv run python scripts/seed_random.py --full-new --confirm)
    - API running (uv run uvicorn app.main:app --reload --port 8000)
"""

import sys

import httpx

API_BASE = "http://localhost:8000"

CARDS = [
    ("Revenue", "revenue", "revenueChange"),
    ("Orders", "orders", "ordersChange"),
    ("Delivered", "deliveredOrders", "deliveredChange"),
    ("Customers", "customers", "customersChange"),
    ("New products", "products", "productsChange"),
]


def print_section(title: str) -> None:
    """Print a section header."""
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


def print_dashboard(data: dict) -> None:
    """Print cards and charts of one dashboard."""
    print(f"Period start: {data['periodStart']}")
    print(f"Compared to:  {data['previousPeriodStart']} -> {data['previousPeriodEnd']}\n")

    for label, key, change_key in CARDS:
        print(f"  {label:<14} {data[key]:>14,.0f}   {data[change_key]:+6.1f}%")

    print("\nTop products by category:")
    for category, products in data["topProductsByCategory"].items():
        names = ", ".join(f"{p['name']} ({p['sales']})" for p in products)
        print(f"  {category}: {names}")

    print("\nMonthly stats:")
    for month in data["monthlyStats"]:
        print(f"  {month['month']:<6} {month['orders']:>5} orders {month['sales']:>14,.0f}")

    print("\nMost clicked:")
    for product in data["mostClickedProducts"]:
        print(f"  {product['clicks']:>6}  {product['name']} [{product['category']}]")


def main() -> int:
    """Fetch and print the dashboard for week, month and year."""
    client = httpx.Client(base_url=API_BASE, timeout=30)

    try:
        health = client.get("/health")
    except httpx.ConnectError:
        print(f"Cannot connect to API at {API_BASE}")
        print("Start the API with: uv run uvicorn app.main:app --reload --port 8000")
        return 1

    if health.status_code != 200:
        print(f"API not healthy: {health.status_code}")
        return 1

    for range_ in ("week", "month", "year"):
        print_section(f"Dashboard - {range_}")
        response = client.get("/api/analytics", params={"range": range_})
        data = response.json()
        if response.status_code != 200:
            print(f"Dashboard failed [{response.status_code}]: {data.get('details')}")
            return 1
        print_dashboard(data)

    return 0


if __name__ == "__main__":
    sys.exit(main())
