"""Reporting windows for the analytics dashboard.

A dashboard compares a current period with the period that immediately
precedes it:

- ``week``: trailing clock-time windows. Current = last 7 days,
  previous = the 7 days before that.
- ``month``: calendar months. Current starts on the 1st of this month,
  previous is the whole prior month (rolling back into December of the
  prior year when invoked in January).
- ``year``: calendar years. Current starts on Jan 1, previous is the whole
  prior year.

The current period has no upper bound: anything created at or after its
start counts. Calendar boundaries are midnight in the reporting timezone.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo
from enum import Enum
from typing import Literal


class AnalyticsRange(str, Enum):
    """Length of the dashboard comparison period."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "str | AnalyticsRange | None") -> "AnalyticsRange":
        """Resolve a query value, falling back to ``month`` for anything unknown."""
        if isinstance(value, AnalyticsRange):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MONTH


@dataclass(frozen=True)
class ReportingWindow:
    """Current and previous period boundaries.

    Attributes:
        range: Range the window was derived from.
        current_start: Inclusive start of the current period.
        previous_start: Inclusive start of the previous period.
        previous_end: Exclusive end of the previous period.
    """

    range: AnalyticsRange
    current_start: datetime
    previous_start: datetime
    previous_end: datetime


MONTH_LABELS: dict[str, tuple[str, ...]] = {
    "fr": (
        "janv.",
        "févr.",
        "mars",
        "avr.",
        "mai",
        "juin",
        "juil.",
        "août",
        "sept.",
        "oct.",
        "nov.",
        "déc.",
    ),
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
}


def localize(moment: datetime, tz: tzinfo) -> datetime:
    """Express ``moment`` in ``tz``; naive values are taken as already in ``tz``."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def as_utc(moment: datetime) -> datetime:
    """Convert to UTC; naive values (as read back from SQLite) are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def month_start(year: int, month: int, tz: tzinfo) -> datetime:
    """Midnight on the first day of ``month``, normalizing out-of-range months.

    ``month`` may be 0 or 13: ``month_start(2025, 0, tz)`` is Dec 1 2024.
    """
    years, month_index = divmod(month - 1, 12)
    return datetime(year + years, month_index + 1, 1, tzinfo=tz)


def resolve_window(
    range_: AnalyticsRange,
    now: datetime,
    tz: tzinfo = UTC,
) -> ReportingWindow:
    """Derive the current and previous periods for ``range_`` at ``now``.

    Args:
        range_: Period length.
        now: Invocation instant.
        tz: Timezone used for calendar-aligned boundaries.

    Returns:
        Window with timezone-aware boundaries in ``tz``.
    """
    local_now = localize(now, tz)

    if range_ == AnalyticsRange.WEEK:
        current_start = local_now - timedelta(days=7)
        previous_end = current_start
        previous_start = previous_end - timedelta(days=7)
    elif range_ == AnalyticsRange.YEAR:
        current_start = datetime(local_now.year, 1, 1, tzinfo=tz)
        previous_end = current_start
        previous_start = datetime(local_now.year - 1, 1, 1, tzinfo=tz)
    else:
        current_start = month_start(local_now.year, local_now.month, tz)
        previous_end = current_start
        previous_start = month_start(local_now.year, local_now.month - 1, tz)

    return ReportingWindow(
        range=range_,
        current_start=current_start,
        previous_start=previous_start,
        previous_end=previous_end,
    )


def month_bounds(year: int, tz: tzinfo = UTC) -> list[tuple[datetime, datetime]]:
    """Twelve ``[start, end)`` pairs covering the calendar months of ``year``."""
    return [(month_start(year, m, tz), month_start(year, m + 1, tz)) for m in range(1, 13)]


def month_label(month: int, locale: Literal["fr", "en"] = "fr") -> str:
    """Abbreviated month name for ``month`` (1-12)."""
    return MONTH_LABELS[locale][month - 1]
