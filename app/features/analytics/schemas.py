"""Pydantic schemas for the analytics dashboard endpoint.

Responses are serialized with camelCase keys, the shape the admin
dashboard consumes.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.features.analytics.periods import AnalyticsRange


class CamelModel(BaseModel):
    """Base schema that serializes field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Dashboard sections
# =============================================================================


class TopProduct(CamelModel):
    """A best-selling product inside its category bucket."""

    name: str = Field(..., description="Product name as snapshotted on its first order line.")
    category: str = Field(..., description="Category bucket the product was attributed to.")
    sales: int = Field(..., ge=0, description="Cumulative units sold across all orders.")
    revenue: float = Field(..., ge=0, description="Cumulative unit price x quantity.")


class MonthlyStatItem(CamelModel):
    """Order volume for one calendar month of the current year."""

    month: str = Field(..., description="Localized abbreviated month name.")
    sales: float = Field(..., ge=0, description="Sum of order totals created that month.")
    orders: int = Field(..., ge=0, description="Number of orders created that month.")


class ClickedProduct(CamelModel):
    """A product ranked by storefront clicks."""

    name: str
    category: str = Field(..., description="Category name or the uncategorized label.")
    clicks: int = Field(..., gt=0)


class RecentOrder(CamelModel):
    """Summary of one of the latest orders."""

    id: int
    order_number: str
    customer: str | None = Field(None, description="Customer name, falling back to email.")
    total_price: float
    status: str
    created_at: datetime
    is_seen: bool


# =============================================================================
# Dashboard response
# =============================================================================


class AnalyticsDashboard(CamelModel):
    """Full dashboard report for one range.

    Card values describe the current period; each ``*_change`` field is the
    percent change against the previous period, rounded to one decimal.
    """

    revenue: float = Field(0.0, description="Total of paid-or-later orders in the period.")
    orders: int = Field(0, ge=0, description="Allow-listed orders in the period.")
    delivered_orders: int = Field(0, ge=0, description="Delivered orders in the period.")
    products: int = Field(0, ge=0, description="Products created in the period.")
    customers: int = Field(0, ge=0, description="Distinct customers with a delivered order.")

    revenue_change: float = 0.0
    orders_change: float = 0.0
    delivered_change: float = 0.0
    customers_change: float = 0.0
    products_change: float = 0.0

    top_products_by_category: dict[str, list[TopProduct]] = Field(default_factory=dict)
    monthly_stats: list[MonthlyStatItem] = Field(default_factory=list)
    most_clicked_products: list[ClickedProduct] = Field(default_factory=list)
    recent_orders: list[RecentOrder] = Field(default_factory=list)

    range: AnalyticsRange | None = Field(None, description="Range the report was computed for.")
    period_start: datetime | None = None
    previous_period_start: datetime | None = None
    previous_period_end: datetime | None = None


class AnalyticsErrorResponse(AnalyticsDashboard):
    """Degraded dashboard returned when the report cannot be computed.

    Same keys as a successful report with every number zeroed and every
    collection empty, plus an operator-facing error message.
    """

    error: str = Field(..., description="Fixed summary of the failure.")
    details: str = Field(..., description="Underlying exception message.")
