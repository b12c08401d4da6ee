# src/buku_tamu/reporting/guest_report.py
"""
Guest visit report - the table behind every Excel export.

Input is already newest-first (store order). Row numbering counts down so the
newest visit carries the highest number and the oldest is 1.
"""

from __future__ import annotations

from dataclasses import astuple
from datetime import datetime
from typing import List, Optional, Sequence

import pandas as pd

from buku_tamu.exceptions import EmptyReport
from buku_tamu.models.guest import GuestRecord, PeriodKind, ReportRow, ReportTable
from buku_tamu.reporting.periods import parse_period_kind
from buku_tamu.utils.config import config
from buku_tamu.utils.dates import format_visit_date

MISSING = "-"

# Header labels in export order; one per ReportRow field
COLUMNS = [
    "No.",
    "No. Registrasi",
    "Nama Lengkap",
    "NIK",
    "Instansi/Lembaga/Domisili",
    "Jabatan",
    "Bidang",
    "Nomor Kontak",
    "Keperluan",
    "Kepuasan Layanan",
    "Tanggal Kunjungan",
]


def _text(value: Optional[str]) -> str:
    return value if value else MISSING


def build_row(record: GuestRecord, sequence_number: int) -> ReportRow:
    return ReportRow(
        sequence_number=sequence_number,
        registration_number=_text(record.registration_number),
        full_name=record.full_name,
        national_id=_text(record.national_id),
        origin=_text(record.origin),
        position=_text(record.position),
        department=_text(record.department),
        contact_number=_text(record.contact_number),
        purpose=_text(record.purpose),
        satisfaction=_text(record.satisfaction),
        visit_date=format_visit_date(record.created_at),
    )


def column_widths(rows: Sequence[ReportRow], columns: Sequence[str] = COLUMNS) -> List[int]:
    """max(header length, longest rendered cell) per column."""
    widths = [len(h) for h in columns]
    for row in rows:
        for i, value in enumerate(astuple(row)):
            widths[i] = max(widths[i], len(str(value)))
    return widths


def format_report(
    records: Sequence[GuestRecord],
    start: datetime,
    end: datetime,
    kind: str | PeriodKind,
    title: Optional[str] = None,
) -> ReportTable:
    """
    Turn fetched records into the export table.

    Raises EmptyReport when there is nothing to export; that is an
    informational outcome, not a failed fetch.
    """
    kind = parse_period_kind(kind)

    if not records:
        raise EmptyReport()

    total = len(records)
    rows = [build_row(r, total - i) for i, r in enumerate(records)]

    return ReportTable(
        title=title or config.REPORT_TITLE,
        kind=kind,
        start=start,
        end=end,
        columns=list(COLUMNS),
        rows=rows,
        column_widths=column_widths(rows),
    )


def to_dataframe(table: ReportTable) -> pd.DataFrame:
    return pd.DataFrame([astuple(r) for r in table.rows], columns=table.columns)
