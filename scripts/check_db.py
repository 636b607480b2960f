#!/usr/bin/env python
"""Check database connectivity and the marketplace schema.

Usage:
    uv run python scripts/check_db.py
"""

import asyncio
import sys

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import create_async_engine

from app.core.config import get_settings
from app.core.database import Base
from app.features.marketplace import models  # noqa: F401  # register tables


async def check_database():
    """Verify database connection and that the marketplace tables exist."""
    settings = get_settings()

    print(f"{settings.app_name} - Database Connectivity Check")
    print("=" * 45)
    print(f"Database URL: {settings.database_url.split('@')[-1]}")  # Hide credentials
    print()

    engine = create_async_engine(settings.database_url)

    try:
        async with engine.connect() as conn:
            # Test basic connectivity
            result = await conn.execute(text("SELECT 1"))
            if result.scalar() != 1:
                print("[FAIL] SELECT 1 returned an unexpected value")
                return 1
            print("[OK] Basic connectivity")

            # Check PostgreSQL version
            if conn.dialect.name == "postgresql":
                result = await conn.execute(text("SELECT version()"))
                version = result.scalar() or ""
                print(f"[OK] PostgreSQL version: {version[:50]}...")

            # Check marketplace tables
            existing = set(
                await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            )
            missing = sorted(set(Base.metadata.tables) - existing)
            if missing:
                print(f"[WARN] Missing tables: {', '.join(missing)}")
                print("       Run: uv run alembic upgrade head")
            else:
                print(f"[OK] All {len(Base.metadata.tables)} marketplace tables present")

        print()
        print("Database check completed successfully!")
        return 0

    except Exception as e:
        print(f"[FAIL] Connection failed: {e}")
        print()
        print("Troubleshooting:")
        print("  1. Ensure Docker is running: docker-compose up -d")
        print("  2. Check DATABASE_URL in .env file")
        print("  3. Verify PostgreSQL container is healthy: docker-compose ps")
        return 1

    finally:
        await engine.dispose()


def main():
    sys.exit(asyncio.run(check_database()))


if __name__ == "__main__":
    main()
