# src/buku_tamu/services/export_service.py
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol

from buku_tamu.exceptions import EmptyReport, WrongPassword
from buku_tamu.models.guest import ExportResult, GuestRecord, PeriodKind
from buku_tamu.reporting.excel_builder import write_excel_report
from buku_tamu.reporting.guest_report import format_report
from buku_tamu.reporting.periods import resolve_period
from buku_tamu.services.credentials import CredentialVerifier, StaticPasswordVerifier
from buku_tamu.utils.config import config
from buku_tamu.utils.logger import get_logger

logger = get_logger(__name__)


class SupportsRangeQuery(Protocol):
    def get_guests_in_range(self, start: datetime, end: datetime) -> List[GuestRecord]: ...


class ReportExportService:
    """
    Password-gated Excel export.

    Order matters:
    1. password        -> WrongPassword
    2. report type     -> InvalidReportType (nothing fetched)
    3. fetch           -> StoreError
    4. no rows         -> ExportResult(status="empty"), no file
    5. format + write  -> ExportResult(status="exported")
    """

    def __init__(
        self,
        store: SupportsRangeQuery,
        verifier: Optional[CredentialVerifier] = None,
        output_dir: Optional[Path] = None,
    ):
        self.store = store
        self.verifier = verifier or StaticPasswordVerifier()
        self.output_dir = Path(output_dir) if output_dir is not None else config.OUTPUT_DIR

    def export(
        self,
        password: str,
        kind: str | PeriodKind,
        year: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ExportResult:
        if not self.verifier.verify(password):
            logger.warning("Report export rejected: wrong password")
            raise WrongPassword()

        now = now or datetime.now()
        period = resolve_period(kind, now, year)

        logger.info(
            "Exporting %s report | %s -> %s",
            period.kind.value,
            period.start.isoformat(),
            period.end.isoformat(),
        )

        guests = self.store.get_guests_in_range(period.start, period.end)

        try:
            table = format_report(guests, period.start, period.end, period.kind)
        except EmptyReport:
            logger.info("No guests for %s report", period.kind.value)
            return ExportResult(status="empty", period=period)

        path = write_excel_report(table, self.output_dir, period.file_stem)
        logger.info("%d guests exported to %s", len(table.rows), path)

        return ExportResult(
            status="exported",
            period=period,
            row_count=len(table.rows),
            path=path,
        )
