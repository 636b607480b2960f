"""Pytest fixtures for seeder tests."""

import random
from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.features.marketplace import models  # noqa: F401  # register tables
from app.shared.seeder.config import CatalogConfig, OrderConfig, SeederConfig

REFERENCE_TIME = datetime(2025, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def rng():
    """Create a seeded random number generator."""
    return random.Random(42)


@pytest.fixture
def catalog_config():
    """Create a small catalog config for testing."""
    return CatalogConfig(
        categories=3,
        subcategories_per_category=2,
        subsubcategories_per_subcategory=2,
        products=12,
        uncategorized_probability=0.2,
        max_clicks=50,
    )


@pytest.fixture
def order_config():
    """Create a small order config for testing."""
    return OrderConfig(
        customers=6,
        orders=25,
        history_days=60,
        promo_probability=0.3,
    )


@pytest.fixture
def seeder_config(catalog_config, order_config):
    """Create a complete, time-pinned seeder config."""
    return SeederConfig(
        seed=7,
        catalog=catalog_config,
        orders=order_config,
        reference_time=REFERENCE_TIME,
        batch_size=5,
    )


@pytest.fixture
async def db_session():
    """In-memory SQLite session with the marketplace schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()
