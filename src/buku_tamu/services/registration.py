# src/buku_tamu/services/registration.py
from __future__ import annotations

from datetime import datetime
from typing import Protocol

from buku_tamu.exceptions import StoreError
from buku_tamu.utils.dates import start_of_month
from buku_tamu.utils.logger import get_logger

logger = get_logger(__name__)


class SupportsCount(Protocol):
    def count_guests_since(self, instant: datetime) -> int: ...


def date_stamp(now: datetime) -> str:
    """DDMMYYYY, zero padded, no separators."""
    return f"{now.day:02d}{now.month:02d}{now.year:04d}"


def generate_registration_number(now: datetime, store: SupportsCount) -> str:
    """
    DDMMYYYY-NNN where NNN = guests registered so far this month + 1.

    Display-only: nothing reserves the number, so two kiosks submitting at
    the same time can end up with the same value. Never raises; a failed
    count gives DDMMYYYY-ERR.
    """
    stamp = date_stamp(now)

    try:
        count = store.count_guests_since(start_of_month(now))
    except StoreError as e:
        logger.error("Gagal mengambil data tamu: %s", e)
        return f"{stamp}-ERR"
    except Exception:
        logger.error("Unexpected error counting guests", exc_info=True)
        return f"{stamp}-ERR"

    sequence = (count or 0) + 1
    return f"{stamp}-{sequence:03d}"
