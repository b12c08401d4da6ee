from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


# ------------------------------------------------------------
# Fixed option sets (kiosk form)
# ------------------------------------------------------------
PURPOSE_OPTIONS = [
    "Audiensi / Silaturahmi",
    "Koordinasi Perencanaan",
    "Rapat",
    "Konsultasi / Asistensi",
    "Kunjungan Kerja",
    "Undangan Khusus",
    "Seremoni",
    "Ekspedisi Surat",
]

DEPARTMENT_OPTIONS = [
    "Sekretariat",
    "Bidang Litbang Renbang",
    "Bidang Ekonomi",
    "Bidang Sosial Budaya",
    "Bidang Sarana Prasarana Wilayah",
]

# Ordinal, best first. Dashboard output keeps this order.
SATISFACTION_LEVELS = [
    "Sangat Puas",
    "Puas",
    "Cukup Puas",
    "Kurang Puas",
    "Tidak Puas",
]


class PeriodKind(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    PREVIOUS_MONTH = "previousMonth"
    ANNUAL = "annual"


class DashboardVariant(Enum):
    SATISFACTION = "satisfaction"
    AVERAGE = "average"


# ------------------------------------------------------------
# Stored visit row (append-only)
# ------------------------------------------------------------
@dataclass(frozen=True)
class GuestRecord:
    registration_number: str
    first_name: str
    last_name: str
    origin: str
    contact_number: str
    purpose: str
    created_at: datetime
    national_id: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    satisfaction: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# ------------------------------------------------------------
# Form input (what the visitor typed)
# ------------------------------------------------------------
@dataclass(frozen=True)
class GuestSubmission:
    first_name: str = ""
    last_name: str = ""
    origin: str = ""
    contact_number: str = ""
    purpose: str = ""
    registration_number: Optional[str] = None
    national_id: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    satisfaction: Optional[str] = None

    REQUIRED_FIELDS = ("first_name", "last_name", "origin", "purpose", "contact_number")

    def missing_fields(self) -> List[str]:
        return [f for f in self.REQUIRED_FIELDS if not (getattr(self, f) or "").strip()]


# ------------------------------------------------------------
# Dashboard
# ------------------------------------------------------------
@dataclass(frozen=True)
class TrendDay:
    day_label: str
    date: date
    count: int


@dataclass(frozen=True)
class DashboardSnapshot:
    today_count: int
    month_count: int
    weekly_trend: List[TrendDay]

    # exactly one of these is set, depending on the variant
    satisfaction_distribution: Optional[Dict[str, int]] = None
    average_daily: Optional[float] = None

    @property
    def max_daily(self) -> int:
        """Busiest trend bucket, floored at 1 so bar widths never divide by zero."""
        return max([d.count for d in self.weekly_trend] + [1])


# ------------------------------------------------------------
# Reports
# ------------------------------------------------------------
@dataclass(frozen=True)
class ReportPeriod:
    kind: PeriodKind
    start: datetime
    end: datetime
    file_stem: str


@dataclass(frozen=True)
class ReportRow:
    sequence_number: int
    registration_number: str
    full_name: str
    national_id: str
    origin: str
    position: str
    department: str
    contact_number: str
    purpose: str
    satisfaction: str
    visit_date: str


@dataclass
class ReportTable:
    title: str
    kind: PeriodKind
    start: datetime
    end: datetime
    columns: List[str]
    rows: List[ReportRow] = field(default_factory=list)
    column_widths: List[int] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.columns)


@dataclass
class ExportResult:
    status: str          # "exported" or "empty"
    period: ReportPeriod
    row_count: int = 0
    path: Optional[Path] = None
