"""Test fixtures for analytics module.

Integration fixtures run against an in-memory SQLite database (aiosqlite)
so the dashboard can be exercised end to end without PostgreSQL.
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from decimal import Decimal
from itertools import count

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.features.analytics.periods import as_utc
from app.features.marketplace.models import (
    Category,
    Customer,
    Order,
    OrderItem,
    OrderStatus,
    Product,
)
from app.main import app

NOW = datetime(2025, 3, 15, 14, 30, tzinfo=UTC)


class StoreBuilder:
    """Insert marketplace rows with explicit timestamps."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._seq = count(1)

    async def category(self, name: str) -> Category:
        category = Category(name=name, slug=f"{name.lower()}-{next(self._seq)}")
        self.session.add(category)
        await self.session.flush()
        return category

    async def product(
        self,
        name: str,
        category: Category | None = None,
        clicks: int = 0,
        price: str = "10.00",
        created_at: datetime = NOW,
    ) -> Product:
        product = Product(
            name=name,
            slug=f"product-{next(self._seq)}",
            category=category,
            price=Decimal(price),
            clicks=clicks,
            created_at=as_utc(created_at),
        )
        self.session.add(product)
        await self.session.flush()
        return product

    async def customer(self, name: str | None = None, email: str | None = None) -> Customer:
        customer = Customer(name=name, email=email)
        self.session.add(customer)
        await self.session.flush()
        return customer

    async def order(
        self,
        status: OrderStatus = OrderStatus.PAID,
        total: str = "100.00",
        created_at: datetime = NOW,
        customer: Customer | None = None,
        items: Sequence[tuple[Product, int, str]] = (),
        shipping_name: str | None = None,
        is_seen: bool = False,
    ) -> Order:
        seq = next(self._seq)
        order = Order(
            order_number=f"CMD-{seq:06d}",
            customer=customer,
            total_price=Decimal(total),
            status=status.value,
            shipping_name=shipping_name,
            is_seen=is_seen,
            created_at=as_utc(created_at),
            items=[
                OrderItem(
                    product_id=product.id,
                    quantity=quantity,
                    unit_price=Decimal(unit_price),
                    name=product.name,
                    position=position,
                )
                for position, (product, quantity, unit_price) in enumerate(items)
            ],
        )
        self.session.add(order)
        await self.session.flush()
        return order

    async def save(self) -> None:
        """Commit and detach everything so reads load fresh rows."""
        await self.session.commit()
        self.session.expunge_all()


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


@pytest.fixture
def store(db_session: AsyncSession) -> StoreBuilder:
    """Row builder bound to the test session."""
    return StoreBuilder(db_session)


@pytest.fixture
async def client(db_session: AsyncSession):
    """HTTP client whose requests use the SQLite test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_db, None)
