"""Admin analytics dashboard.

Period-over-period sales cards, best sellers per category, a monthly
series for the current year and click rankings, served at
``GET /api/analytics``.
"""

from app.features.analytics.periods import AnalyticsRange, ReportingWindow, resolve_window
from app.features.analytics.routes import router
from app.features.analytics.schemas import AnalyticsDashboard, AnalyticsErrorResponse
from app.features.analytics.service import AnalyticsService

__all__ = [
    "AnalyticsDashboard",
    "AnalyticsErrorResponse",
    "AnalyticsRange",
    "AnalyticsService",
    "ReportingWindow",
    "resolve_window",
    "router",
]
