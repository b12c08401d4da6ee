# src/buku_tamu/exceptions.py
"""
Failure outcomes of guest-book actions.

Each one is terminal for the action that raised it only; the CLI turns them
into a message for the person at the kiosk.
"""

from __future__ import annotations


class GuestBookError(Exception):
    """Base class for every guest-book failure."""

    message = "Terjadi kesalahan tidak diketahui"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class StoreError(GuestBookError):
    """The record store rejected an insert, count or query."""


class FormIncomplete(GuestBookError):
    message = "Mohon lengkapi semua field yang wajib diisi."


class WrongPassword(GuestBookError):
    message = "Password Salah"


class InvalidReportType(GuestBookError):
    message = "Jenis laporan tidak valid."


class EmptyReport(GuestBookError):
    """Not an error: the selected period simply has no guests."""

    message = "Tidak ada data tamu yang ditemukan untuk periode yang dipilih."
