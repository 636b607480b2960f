"""API routes for the admin analytics dashboard."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db
from app.core.logging import get_logger
from app.features.analytics.periods import AnalyticsRange
from app.features.analytics.schemas import AnalyticsDashboard, AnalyticsErrorResponse
from app.features.analytics.service import AnalyticsService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get(
    "",
    response_model=AnalyticsDashboard,
    summary="Compute the admin dashboard",
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": AnalyticsErrorResponse,
            "description": "Zeroed dashboard with the failure reason.",
        }
    },
    description="""
Compute the admin dashboard for the requested comparison range.

**Ranges** (`range` query parameter, default `month`; unknown values fall
back to `month`):
- `week`: last 7 days vs. the 7 days before
- `month`: this calendar month vs. the previous one
- `year`: this calendar year vs. the previous one

**Cards**: `revenue` (paid, shipped or delivered orders), `orders`
(every non-cancelled order), `deliveredOrders`, `customers` (distinct
customers with a delivered order), `products` (products created in the
period), each with a `*Change` percentage against the previous period.

**Charts**: `topProductsByCategory` (top 3 per category by units, all-time),
`monthlyStats` (12 calendar months of the current year),
`mostClickedProducts` (top 5), `recentOrders` (latest 5).

**Failures** never escape: the endpoint answers 500 with the same keys
zeroed plus `error` and `details`.
""",
)
async def get_analytics(
    range_: str | None = Query(
        None,
        alias="range",
        description="Comparison range: week, month or year.",
    ),
    db: AsyncSession = Depends(get_db),
) -> AnalyticsDashboard | JSONResponse:
    """Compute the dashboard, degrading to a zeroed payload on failure.

    Args:
        range_: Requested range (raw query value).
        db: Database session.

    Returns:
        Dashboard report, or a 500 response with the degraded payload.
    """
    selected = AnalyticsRange.parse(range_ or get_settings().analytics_default_range)
    service = AnalyticsService()

    try:
        return await service.compute_dashboard(db=db, range_=selected)
    except Exception as e:
        logger.error(
            "analytics.dashboard_failed",
            range=selected.value,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        try:
            await db.rollback()
        except Exception as rollback_error:
            logger.warning("analytics.rollback_failed", error=str(rollback_error))
        payload = service.degraded(details=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=payload.model_dump(mode="json", by_alias=True),
        )
