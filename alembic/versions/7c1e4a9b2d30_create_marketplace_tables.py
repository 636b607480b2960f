"""create_marketplace_tables

Revision ID: 7c1e4a9b2d30
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "7c1e4a9b2d30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    """created_at / updated_at columns (from TimestampMixin)."""
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Apply migration - create catalog, customer and order tables."""
    # Catalog
    op.create_table(
        "category",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=120), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_category_slug", "category", ["slug"], unique=True)

    op.create_table(
        "subcategory",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["category_id"], ["category.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_subcategory_category_id", "subcategory", ["category_id"])

    op.create_table(
        "subsubcategory",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("subcategory_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("product_count", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "product_count >= 0", name="ck_subsubcategory_product_count_positive"
        ),
        sa.ForeignKeyConstraint(["subcategory_id"], ["subcategory.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_subsubcategory_subcategory_id", "subsubcategory", ["subcategory_id"])

    op.create_table(
        "product",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("slug", sa.String(length=220), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("subcategory_id", sa.Integer(), nullable=True),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("promo_price", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("is_special_offer", sa.Boolean(), nullable=False),
        sa.Column("special_offer_price", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("stock", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("condition", sa.String(length=20), nullable=False),
        sa.Column("clicks", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("price >= 0", name="ck_product_price_positive"),
        sa.CheckConstraint("stock >= 0", name="ck_product_stock_positive"),
        sa.CheckConstraint("clicks >= 0", name="ck_product_clicks_positive"),
        sa.CheckConstraint("status IN ('active', 'inactive')", name="ck_product_valid_status"),
        sa.CheckConstraint(
            "condition IN ('new', 'used', 'refurbished')", name="ck_product_valid_condition"
        ),
        sa.ForeignKeyConstraint(["category_id"], ["category.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["subcategory_id"], ["subcategory.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_product_slug", "product", ["slug"], unique=True)
    op.create_index("ix_product_category_id", "product", ["category_id"])
    op.create_index("ix_product_clicks", "product", ["clicks"])
    op.create_index("ix_product_created_at", "product", ["created_at"])

    # Customers & orders
    op.create_table(
        "customer",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=True),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=40), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "customer_order",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_number", sa.String(length=40), nullable=False),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("total_price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("promo_amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("payment_method", sa.String(length=40), nullable=False),
        # Shipping address snapshot
        sa.Column("shipping_name", sa.String(length=200), nullable=True),
        sa.Column("shipping_email", sa.String(length=320), nullable=True),
        sa.Column("shipping_phone", sa.String(length=40), nullable=True),
        sa.Column("shipping_address", sa.String(length=500), nullable=True),
        sa.Column("shipping_city", sa.String(length=100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_seen", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("total_price >= 0", name="ck_customer_order_total_positive"),
        sa.CheckConstraint("promo_amount >= 0", name="ck_customer_order_promo_positive"),
        sa.CheckConstraint(
            "status IN ('pending', 'paid', 'shipped', 'delivered', 'cancelled')",
            name="ck_customer_order_valid_status",
        ),
        sa.ForeignKeyConstraint(["customer_id"], ["customer.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_customer_order_order_number", "customer_order", ["order_number"], unique=True)
    op.create_index("ix_customer_order_customer_id", "customer_order", ["customer_id"])
    op.create_index(
        "ix_customer_order_status_created", "customer_order", ["status", "created_at"]
    )

    op.create_table(
        "order_item",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("quantity > 0", name="ck_order_item_quantity_positive"),
        sa.CheckConstraint("unit_price >= 0", name="ck_order_item_price_positive"),
        sa.ForeignKeyConstraint(["order_id"], ["customer_order.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["product.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_order_item_order_id", "order_item", ["order_id"])
    op.create_index("ix_order_item_product_id", "order_item", ["product_id"])


def downgrade() -> None:
    """Revert migration - drop marketplace tables."""
    op.drop_index("ix_order_item_product_id", table_name="order_item")
    op.drop_index("ix_order_item_order_id", table_name="order_item")
    op.drop_table("order_item")

    op.drop_index("ix_customer_order_status_created", table_name="customer_order")
    op.drop_index("ix_customer_order_customer_id", table_name="customer_order")
    op.drop_index("ix_customer_order_order_number", table_name="customer_order")
    op.drop_table("customer_order")

    op.drop_table("customer")

    op.drop_index("ix_product_created_at", table_name="product")
    op.drop_index("ix_product_clicks", table_name="product")
    op.drop_index("ix_product_category_id", table_name="product")
    op.drop_index("ix_product_slug", table_name="product")
    op.drop_table("product")

    op.drop_index("ix_subsubcategory_subcategory_id", table_name="subsubcategory")
    op.drop_table("subsubcategory")

    op.drop_index("ix_subcategory_category_id", table_name="subcategory")
    op.drop_table("subcategory")

    op.drop_index("ix_category_slug", table_name="category")
    op.drop_table("category")
