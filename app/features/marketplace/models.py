"""Marketplace ORM models: catalog, customers and orders.

Catalog hierarchy:
- Category -> Subcategory -> SubSubcategory (ordered by ``position``)
- Product references a Category and optionally one of its Subcategories

Orders snapshot the name, unit price and image of every line item so the
order stays readable after the product is edited or deleted.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.shared.models import TimestampMixin

# ============================================================================
# ENUMERATIONS
# ============================================================================


class OrderStatus(str, Enum):
    """Order lifecycle states.

    State transitions:
    - PENDING -> PAID -> SHIPPED -> DELIVERED
    - Any non-delivered state -> CANCELLED
    """

    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Statuses that count as business activity (everything except cancelled)
ACTIVE_ORDER_STATUSES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.PENDING, OrderStatus.PAID, OrderStatus.SHIPPED, OrderStatus.DELIVERED}
)

# Paid or further along: the orders that contribute to revenue
PAID_ORDER_STATUSES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.PAID, OrderStatus.SHIPPED, OrderStatus.DELIVERED}
)

DELIVERED_ORDER_STATUSES: frozenset[OrderStatus] = frozenset({OrderStatus.DELIVERED})


class ProductStatus(str, Enum):
    """Storefront visibility of a product."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class ProductCondition(str, Enum):
    """Physical condition of a listed product."""

    NEW = "new"
    USED = "used"
    REFURBISHED = "refurbished"


def _in_clause(column: str, enum: type[Enum]) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum)
    return f"{column} IN ({values})"


# ============================================================================
# CATALOG
# ============================================================================


class Category(TimestampMixin, Base):
    """Top-level catalog category.

    Attributes:
        id: Primary key.
        name: Display name (unique).
        slug: URL slug (unique).
        image: Banner image URL.
    """

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True)
    slug: Mapped[str] = mapped_column(String(120), unique=True, index=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    subcategories: Mapped[list[Subcategory]] = relationship(
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="Subcategory.position",
    )
    products: Mapped[list[Product]] = relationship(back_populates="category")


class Subcategory(TimestampMixin, Base):
    """Second catalog level, owned by a Category."""

    __tablename__ = "subcategory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("category.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(100))
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    position: Mapped[int] = mapped_column(Integer, default=0)

    category: Mapped[Category] = relationship(back_populates="subcategories")
    subsubcategories: Mapped[list[SubSubcategory]] = relationship(
        back_populates="subcategory",
        cascade="all, delete-orphan",
        order_by="SubSubcategory.position",
    )


class SubSubcategory(TimestampMixin, Base):
    """Third catalog level with a denormalized product count."""

    __tablename__ = "subsubcategory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    subcategory_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subcategory.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(100))
    position: Mapped[int] = mapped_column(Integer, default=0)
    product_count: Mapped[int] = mapped_column(Integer, default=0)

    subcategory: Mapped[Subcategory] = relationship(back_populates="subsubcategories")

    __table_args__ = (
        CheckConstraint("product_count >= 0", name="ck_subsubcategory_product_count_positive"),
    )


class Product(TimestampMixin, Base):
    """Sellable product.

    Attributes:
        id: Primary key.
        slug: URL slug (unique).
        name: Display name.
        category_id: Owning category (NULL when uncategorized).
        subcategory_id: Optional subcategory inside the category.
        price: Regular price.
        promo_price: Discounted price, if any.
        is_special_offer: Whether the product is featured as a special offer.
        special_offer_price: Price while featured as a special offer.
        stock: Units on hand.
        status: Storefront visibility.
        condition: New, used or refurbished.
        clicks: Number of storefront clicks recorded for the product.
    """

    __tablename__ = "product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(220), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("category.id", ondelete="SET NULL"), index=True, nullable=True
    )
    subcategory_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("subcategory.id", ondelete="SET NULL"), nullable=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    promo_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    is_special_offer: Mapped[bool] = mapped_column(Boolean, default=False)
    special_offer_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    stock: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[str] = mapped_column(String(20), default=ProductStatus.ACTIVE.value)
    condition: Mapped[str] = mapped_column(String(20), default=ProductCondition.NEW.value)
    clicks: Mapped[int] = mapped_column(Integer, default=0)

    category: Mapped[Category | None] = relationship(back_populates="products")
    subcategory: Mapped[Subcategory | None] = relationship()

    __table_args__ = (
        Index("ix_product_clicks", "clicks"),
        Index("ix_product_created_at", "created_at"),
        CheckConstraint("price >= 0", name="ck_product_price_positive"),
        CheckConstraint("stock >= 0", name="ck_product_stock_positive"),
        CheckConstraint("clicks >= 0", name="ck_product_clicks_positive"),
        CheckConstraint(_in_clause("status", ProductStatus), name="ck_product_valid_status"),
        CheckConstraint(
            _in_clause("condition", ProductCondition), name="ck_product_valid_condition"
        ),
    )


# ============================================================================
# CUSTOMERS & ORDERS
# ============================================================================


class Customer(TimestampMixin, Base):
    """Shopper who placed at least one order."""

    __tablename__ = "customer"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), unique=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)

    orders: Mapped[list[Order]] = relationship(back_populates="customer")


class Order(TimestampMixin, Base):
    """Customer order.

    ``total_price`` is authoritative: it is the cart total after the
    promotional deduction and is never recomputed from the line items.

    Attributes:
        id: Primary key.
        order_number: Human-facing unique reference (e.g. "CMD-...").
        customer_id: Ordering customer.
        total_price: Amount due after ``promo_amount`` was deducted.
        promo_amount: Promotional deduction applied at checkout.
        status: Lifecycle state (see OrderStatus).
        payment_method: Payment method label.
        is_seen: Whether an admin has opened the order.
    """

    __tablename__ = "customer_order"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_number: Mapped[str] = mapped_column(String(40), unique=True, index=True)
    customer_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("customer.id", ondelete="SET NULL"), index=True, nullable=True
    )
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    promo_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    status: Mapped[str] = mapped_column(String(20), default=OrderStatus.PENDING.value)
    payment_method: Mapped[str] = mapped_column(String(40), default="cash")

    # Shipping address snapshot
    shipping_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    shipping_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    shipping_phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    shipping_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    shipping_city: Mapped[str | None] = mapped_column(String(100), nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_seen: Mapped[bool] = mapped_column(Boolean, default=False)

    customer: Mapped[Customer | None] = relationship(back_populates="orders")
    items: Mapped[list[OrderItem]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    __table_args__ = (
        Index("ix_customer_order_status_created", "status", "created_at"),
        CheckConstraint("total_price >= 0", name="ck_customer_order_total_positive"),
        CheckConstraint("promo_amount >= 0", name="ck_customer_order_promo_positive"),
        CheckConstraint(_in_clause("status", OrderStatus), name="ck_customer_order_valid_status"),
    )


class OrderItem(TimestampMixin, Base):
    """Line item of an order.

    ``product_id`` becomes NULL when the product is deleted; the snapshot
    columns keep the line readable.
    """

    __tablename__ = "order_item"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("customer_order.id", ondelete="CASCADE"), index=True
    )
    product_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("product.id", ondelete="SET NULL"), index=True, nullable=True
    )
    quantity: Mapped[int] = mapped_column(Integer)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    name: Mapped[str] = mapped_column(String(200))
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    position: Mapped[int] = mapped_column(Integer, default=0)

    order: Mapped[Order] = relationship(back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_item_quantity_positive"),
        CheckConstraint("unit_price >= 0", name="ck_order_item_price_positive"),
    )
