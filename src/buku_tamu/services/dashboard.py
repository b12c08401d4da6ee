"""
Dashboard statistics for the kiosk home screen.

- Today's guests
- Month-to-date total
- 7-day trend (calendar days, oldest first, ending today)
- Satisfaction breakdown OR average guests per day, depending on variant

aggregate() is pure: same records + same reference instant, same snapshot.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Protocol

from buku_tamu.models.guest import (
    SATISFACTION_LEVELS,
    DashboardSnapshot,
    DashboardVariant,
    GuestRecord,
    TrendDay,
)
from buku_tamu.utils.config import config
from buku_tamu.utils.dates import day_label, start_of_day, start_of_month
from buku_tamu.utils.logger import get_logger

logger = get_logger(__name__)

TREND_DAYS = 7


class SupportsMonthQuery(Protocol):
    def get_guests_since(self, instant: datetime) -> List[GuestRecord]: ...


def build_weekly_trend(records: Iterable[GuestRecord], reference: datetime) -> List[TrendDay]:
    """
    Seven buckets keyed by calendar date, so a visit at 23:59 and one at 00:01
    land on different days regardless of how many hours apart they are.
    """
    today = reference.date()
    days: List[date] = [today - timedelta(days=i) for i in range(TREND_DAYS - 1, -1, -1)]
    counts: Dict[date, int] = {d: 0 for d in days}

    for r in records:
        d = r.created_at.date()
        if d in counts:
            counts[d] += 1

    return [TrendDay(day_label=day_label(d), date=d, count=counts[d]) for d in days]


def satisfaction_distribution(records: Iterable[GuestRecord]) -> Dict[str, int]:
    """Counts per known level, fixed level order, zero levels dropped."""
    counts: Dict[str, int] = {level: 0 for level in SATISFACTION_LEVELS}

    for r in records:
        if r.satisfaction and r.satisfaction in counts:
            counts[r.satisfaction] += 1

    return {level: n for level, n in counts.items() if n > 0}


def average_daily(month_count: int, reference: datetime) -> float:
    if month_count == 0:
        return 0.0
    return month_count / reference.day


def aggregate(
    records: Iterable[GuestRecord],
    reference: datetime,
    variant: DashboardVariant = DashboardVariant.SATISFACTION,
) -> DashboardSnapshot:
    """
    Summarise current-month records as of `reference`.

    The caller fetches the month; records are not re-filtered here, so
    month_count is simply how many were passed in.
    """
    records = list(records)
    midnight = start_of_day(reference)

    today_count = sum(1 for r in records if r.created_at >= midnight)
    month_count = len(records)
    trend = build_weekly_trend(records, reference)

    if variant is DashboardVariant.AVERAGE:
        return DashboardSnapshot(
            today_count=today_count,
            month_count=month_count,
            weekly_trend=trend,
            average_daily=average_daily(month_count, reference),
        )

    return DashboardSnapshot(
        today_count=today_count,
        month_count=month_count,
        weekly_trend=trend,
        satisfaction_distribution=satisfaction_distribution(records),
    )


def resolve_variant(value: str) -> DashboardVariant:
    """DASHBOARD_VARIANT setting; unknown values fall back to the satisfaction view."""
    try:
        return DashboardVariant((value or "").strip().lower())
    except ValueError:
        logger.warning("Unknown DASHBOARD_VARIANT %r, using satisfaction", value)
        return DashboardVariant.SATISFACTION


class DashboardService:
    def __init__(self, store: SupportsMonthQuery, variant: Optional[DashboardVariant] = None):
        self.store = store
        self.variant = variant or resolve_variant(config.DASHBOARD_VARIANT)

    def load(self, now: Optional[datetime] = None) -> DashboardSnapshot:
        """Re-read this month's guests and recompute. StoreError propagates."""
        now = now or datetime.now()
        records = self.store.get_guests_since(start_of_month(now))

        snapshot = aggregate(records, now, self.variant)
        logger.info(
            "Dashboard refreshed | today=%d month=%d",
            snapshot.today_count,
            snapshot.month_count,
        )
        return snapshot
