"""Marketplace data model: catalog, customers and orders.

- Catalog: Category, Subcategory, SubSubcategory, Product
- Sales: Customer, Order, OrderItem
"""

from app.features.marketplace.models import (
    ACTIVE_ORDER_STATUSES,
    DELIVERED_ORDER_STATUSES,
    PAID_ORDER_STATUSES,
    Category,
    Customer,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    ProductCondition,
    ProductStatus,
    Subcategory,
    SubSubcategory,
)

__all__ = [
    "ACTIVE_ORDER_STATUSES",
    "DELIVERED_ORDER_STATUSES",
    "PAID_ORDER_STATUSES",
    "Category",
    "Customer",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Product",
    "ProductCondition",
    "ProductStatus",
    "SubSubcategory",
    "Subcategory",
]
