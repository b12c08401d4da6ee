# src/buku_tamu/reporting/periods.py
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from buku_tamu.exceptions import InvalidReportType
from buku_tamu.models.guest import PeriodKind, ReportPeriod
from buku_tamu.utils.dates import (
    end_of_day,
    format_month_stamp,
    previous_month_bounds,
    start_of_day,
    start_of_month,
)

FILE_PREFIX = "Laporan_Tamu"


def parse_period_kind(value: str | PeriodKind) -> PeriodKind:
    if isinstance(value, PeriodKind):
        return value
    try:
        return PeriodKind(value)
    except ValueError:
        raise InvalidReportType() from None


def resolve_period(
    kind: str | PeriodKind,
    now: datetime,
    year: Optional[int] = None,
) -> ReportPeriod:
    """
    Date window for a report kind. All bounds local time and inclusive.

    daily          today 00:00            -> now
    weekly         today-6 00:00          -> now
    monthly        1st of month 00:00     -> now
    previousMonth  1st of prev month      -> last of prev month 23:59:59.999
    annual         Jan 1 of `year`        -> Dec 31 23:59:59.999
    """
    kind = parse_period_kind(kind)
    stamp = now.strftime("%Y-%m-%d")

    if kind is PeriodKind.DAILY:
        start, end = start_of_day(now), now
        stem = f"{FILE_PREFIX}_Harian_{stamp}"

    elif kind is PeriodKind.WEEKLY:
        start, end = start_of_day(now - timedelta(days=6)), now
        stem = f"{FILE_PREFIX}_Mingguan_{stamp}"

    elif kind is PeriodKind.MONTHLY:
        start, end = start_of_month(now), now
        stem = f"{FILE_PREFIX}_Bulanan_{format_month_stamp(now)}"

    elif kind is PeriodKind.PREVIOUS_MONTH:
        start, end = previous_month_bounds(now)
        stem = f"{FILE_PREFIX}_Bulan_Sebelumnya_{format_month_stamp(start)}"

    else:
        year = int(year) if year is not None else now.year
        start = datetime(year, 1, 1)
        end = end_of_day(datetime(year, 12, 31))
        stem = f"{FILE_PREFIX}_Tahunan_{year}"

    return ReportPeriod(kind=kind, start=start, end=end, file_stem=stem)
