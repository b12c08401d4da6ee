# src/buku_tamu/utils/dates.py
from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta

# Indonesian locale names
MONTH_NAMES = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]

# Sunday-first, matching the dashboard's weekday table
DAY_LABELS = ["Min", "Sen", "Sel", "Rab", "Kam", "Jum", "Sab"]

END_OF_DAY = time(23, 59, 59, 999000)


def start_of_day(d: date | datetime) -> datetime:
    if isinstance(d, datetime):
        d = d.date()
    return datetime.combine(d, time.min)


def end_of_day(d: date | datetime) -> datetime:
    if isinstance(d, datetime):
        d = d.date()
    return datetime.combine(d, END_OF_DAY)


def start_of_month(d: date | datetime) -> datetime:
    return start_of_day(d).replace(day=1)


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def previous_month_bounds(today: date | datetime) -> tuple[datetime, datetime]:
    """First instant and last millisecond of the month before `today`'s month."""
    first_this = start_of_month(today)
    last_prev = (first_this - timedelta(days=1)).date()
    return start_of_month(last_prev), end_of_day(last_prev)


def day_label(d: date | datetime) -> str:
    # date.weekday() is Monday=0
    return DAY_LABELS[(d.weekday() + 1) % 7]


def month_name(d: date | datetime) -> str:
    return MONTH_NAMES[d.month - 1]


def format_visit_date(ts: datetime) -> str:
    """dd MMMM yyyy, HH:mm -> '05 Maret 2026, 14:30'"""
    return f"{ts.day:02d} {month_name(ts)} {ts.year}, {ts.hour:02d}:{ts.minute:02d}"


def format_month_stamp(d: date | datetime) -> str:
    """MMMM-yyyy -> 'Maret-2026'"""
    return f"{month_name(d)}-{d.year}"
