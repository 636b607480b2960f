#!/usr/bin/env python
"""Randomized marketplace database seeder CLI.

Fill a development database with categories, products, customers and an
order history so the analytics dashboard has data to show.

Usage:
    # Generate complete dataset
    uv run python scripts/seed_random.py --full-new --seed 42 --confirm

    # Run pre-built scenario
    uv run python scripts/seed_random.py --full-new --scenario busy_season --confirm

    # Show current row counts
    uv run python scripts/seed_random.py --status

    # Preview deletion
    uv run python scripts/seed_random.py --delete --dry-run

    # Delete all data
    uv run python scripts/seed_random.py --delete --confirm
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.shared.seeder import (
    CatalogConfig,
    DataSeeder,
    OrderConfig,
    ScenarioPreset,
    SeederConfig,
    load_config_from_yaml,
)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="Marketplace Analytics randomized database seeder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate standard dataset
  seed_random.py --full-new --seed 42 --confirm

  # Bigger catalog and history
  seed_random.py --full-new --products 200 --orders 3000 --confirm

  # Busy season scenario
  seed_random.py --full-new --scenario busy_season --confirm

  # Preview deletion
  seed_random.py --delete --dry-run

  # Load config from YAML
  seed_random.py --full-new --config examples/seed/config_demo.yaml --confirm
        """,
    )

    # Operation modes (mutually exclusive)
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument(
        "--full-new",
        action="store_true",
        help="Generate complete dataset",
    )
    mode_group.add_argument(
        "--delete",
        action="store_true",
        help="Delete all marketplace data",
    )
    mode_group.add_argument(
        "--status",
        action="store_true",
        help="Show current data counts",
    )

    # Data generation options
    parser.add_argument(
        "--seed",
        type=int,
        default=get_settings().seeder_default_seed,
        help="Random seed for reproducibility (default: SEEDER_DEFAULT_SEED)",
    )
    parser.add_argument(
        "--categories",
        type=int,
        default=6,
        help="Number of categories to generate (default: 6)",
    )
    parser.add_argument(
        "--products",
        type=int,
        default=60,
        help="Number of products to generate (default: 60)",
    )
    parser.add_argument(
        "--customers",
        type=int,
        default=40,
        help="Number of customers to generate (default: 40)",
    )
    parser.add_argument(
        "--orders",
        type=int,
        default=300,
        help="Number of orders to generate (default: 300)",
    )
    parser.add_argument(
        "--history-days",
        type=int,
        default=450,
        help="Spread orders over this many past days (default: 450)",
    )

    # Scenario and config
    parser.add_argument(
        "--scenario",
        choices=[s.value for s in ScenarioPreset],
        help="Run pre-built scenario",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Load configuration from YAML file",
    )

    # Safety options
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="Confirm destructive operations",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview without executing",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=get_settings().seeder_batch_size,
        help="Batch insert size (default: SEEDER_BATCH_SIZE)",
    )

    return parser


def build_config(args: argparse.Namespace) -> SeederConfig:
    """Build the seeder configuration from a YAML file, a scenario or flags."""
    if args.config:
        print(f"Loading configuration from: {args.config}")
        return load_config_from_yaml(args.config)

    if args.scenario:
        print(f"Using scenario: {args.scenario}")
        return SeederConfig.from_scenario(ScenarioPreset(args.scenario), seed=args.seed)

    return SeederConfig(
        seed=args.seed,
        catalog=CatalogConfig(categories=args.categories, products=args.products),
        orders=OrderConfig(
            customers=args.customers,
            orders=args.orders,
            history_days=args.history_days,
        ),
        batch_size=args.batch_size,
    )


def production_blocked() -> bool:
    """Refuse to touch a production database unless explicitly allowed."""
    settings = get_settings()
    if settings.is_production and not settings.seeder_allow_production:
        print("ERROR: Cannot run seeder in production environment.")
        print("Set SEEDER_ALLOW_PRODUCTION=true to override (not recommended).")
        return True
    return False


def print_banner() -> None:
    """Print the seeder banner."""
    print()
    print("=" * 60)
    print(f"  {get_settings().app_name}")
    print("  Randomized Database Seeder")
    print("=" * 60)
    print()


def print_counts(counts: dict[str, int], title: str = "Current Data Counts") -> None:
    """Print table counts in a formatted way."""
    print(f"\n{title}:")
    print("-" * 40)
    for table, count in counts.items():
        print(f"  {table:<30} {count:>8,}")
    print("-" * 40)
    print(f"  {'Total':<30} {sum(counts.values()):>8,}")
    print()


async def run_full_new(args: argparse.Namespace, session: AsyncSession) -> int:
    """Run full generation."""
    if production_blocked():
        return 1

    try:
        config = build_config(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    print("Configuration:")
    print(f"  Seed:        {config.seed}")
    print(f"  Categories:  {config.catalog.categories}")
    print(f"  Products:    {config.catalog.products}")
    print(f"  Customers:   {config.orders.customers}")
    print(f"  Orders:      {config.orders.orders} over {config.orders.history_days} days")
    print()

    if args.dry_run:
        print("DRY RUN - No data will be generated")
        return 0

    if not args.confirm:
        print("ERROR: --confirm flag required for data generation.")
        print("This will insert new data. Use --confirm to proceed.")
        return 1

    result = await DataSeeder(config).generate(session)

    print("\nGeneration Complete!")
    print("-" * 40)
    print(f"  Categories:       {result.categories_count:>8,}")
    print(f"  Subcategories:    {result.subcategories_count:>8,}")
    print(f"  Sub-subcategories:{result.subsubcategories_count:>8,}")
    print(f"  Products:         {result.products_count:>8,}")
    print(f"  Customers:        {result.customers_count:>8,}")
    print(f"  Orders:           {result.orders_count:>8,}")
    print(f"  Order items:      {result.order_items_count:>8,}")
    print("-" * 40)
    print(f"  Seed used:        {result.seed}")
    print()

    return 0


async def run_delete(args: argparse.Namespace, session: AsyncSession) -> int:
    """Run delete operation."""
    if production_blocked():
        return 1

    # Dry run mode
    if args.dry_run:
        print("DRY RUN - No data will be deleted")
        print()
    elif not args.confirm:
        print("ERROR: --confirm flag required for data deletion.")
        print("Use --dry-run to preview or --confirm to proceed.")
        return 1

    seeder = DataSeeder(SeederConfig(seed=args.seed))
    counts = await seeder.delete_all(session, dry_run=args.dry_run)

    action = "Would delete" if args.dry_run else "Deleted"
    print_counts(counts, title=action)

    return 0


async def run_status(session: AsyncSession) -> int:
    """Show current data status."""
    counts = await DataSeeder(SeederConfig()).get_status(session)
    print_counts(counts)
    return 0


async def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    configure_logging()
    print_banner()

    settings = get_settings()
    engine = create_async_engine(settings.database_url)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with session_maker() as session:
            if args.full_new:
                return await run_full_new(args, session)
            if args.delete:
                return await run_delete(args, session)
            return await run_status(session)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
