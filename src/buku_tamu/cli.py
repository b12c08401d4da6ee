# src/buku_tamu/cli.py
import argparse
import sys
from datetime import datetime

from buku_tamu.data.guests import GuestStore, build_engine
from buku_tamu.exceptions import (
    FormIncomplete,
    GuestBookError,
    InvalidReportType,
    StoreError,
    WrongPassword,
)
from buku_tamu.models.guest import (
    DEPARTMENT_OPTIONS,
    PURPOSE_OPTIONS,
    SATISFACTION_LEVELS,
    DashboardVariant,
    GuestSubmission,
    PeriodKind,
)
from buku_tamu.presentation.console import render_dashboard
from buku_tamu.services.dashboard import DashboardService
from buku_tamu.services.export_service import ReportExportService
from buku_tamu.services.guest_service import GuestRegistrationService
from buku_tamu.utils.config import config
from buku_tamu.utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buku-tamu",
        description="Buku Tamu Bapperida - guest registration and reports",
    )
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="Database URL. Defaults to DATABASE_URL from .env.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # register
    reg = sub.add_parser("register", help="Register a visiting guest")
    reg.add_argument("--first-name", default="")
    reg.add_argument("--last-name", default="")
    reg.add_argument("--origin", default="", help="Instansi/Lembaga/Alamat Domisili")
    reg.add_argument("--contact", default="", help="Nomor Kontak (Whatsapp)")
    reg.add_argument("--purpose", default="", choices=PURPOSE_OPTIONS)
    reg.add_argument("--nik", default=None)
    reg.add_argument("--position", default=None)
    reg.add_argument("--department", default=None, choices=DEPARTMENT_OPTIONS)
    reg.add_argument("--satisfaction", default=None, choices=SATISFACTION_LEVELS)
    reg.add_argument("--reg-number", default=None, help="Number shown on the form, if any")

    # next-number
    sub.add_parser("next-number", help="Show the registration number for the next guest")

    # dashboard
    dash = sub.add_parser("dashboard", help="Print dashboard statistics")
    dash.add_argument(
        "--variant",
        choices=[v.value for v in DashboardVariant],
        default=None,
        help="Satisfaction breakdown or average per day. Defaults to DASHBOARD_VARIANT.",
    )

    # export
    exp = sub.add_parser("export", help="Export an Excel guest report")
    exp.add_argument("--type", dest="kind", default=PeriodKind.DAILY.value,
                     help="daily, weekly, monthly, previousMonth or annual")
    exp.add_argument("--year", type=int, default=None, help="Year for annual reports")
    exp.add_argument("--password", required=True)
    exp.add_argument("--output", default=None, help="Output directory. Defaults to OUTPUT_DIR.")

    return parser


def _cmd_register(args, store: GuestStore) -> int:
    service = GuestRegistrationService(store)
    submission = GuestSubmission(
        first_name=args.first_name,
        last_name=args.last_name,
        origin=args.origin,
        contact_number=args.contact,
        purpose=args.purpose,
        registration_number=args.reg_number,
        national_id=args.nik,
        position=args.position,
        department=args.department,
        satisfaction=args.satisfaction,
    )

    try:
        next_number = service.submit(submission)
    except FormIncomplete as e:
        print(f"Formulir Tidak Lengkap: {e.message}", file=sys.stderr)
        return 2
    except StoreError as e:
        print(f"Gagal Mendaftar: Terjadi kesalahan: {e.message}", file=sys.stderr)
        return 1

    print(f"Berhasil Mendaftar. Selamat datang {submission.first_name} {submission.last_name}!")
    print(f"No. Registrasi berikutnya: {next_number}")
    return 0


def _cmd_next_number(args, store: GuestStore) -> int:
    print(GuestRegistrationService(store).next_registration_number())
    return 0


def _cmd_dashboard(args, store: GuestStore) -> int:
    variant = DashboardVariant(args.variant) if args.variant else None
    try:
        snapshot = DashboardService(store, variant).load()
    except StoreError as e:
        print(f"Gagal memuat data dasbor: {e.message}", file=sys.stderr)
        return 1

    print(render_dashboard(snapshot), end="")
    return 0


def _cmd_export(args, store: GuestStore) -> int:
    service = ReportExportService(store, output_dir=args.output)
    try:
        result = service.export(args.password, args.kind, year=args.year, now=datetime.now())
    except (WrongPassword, InvalidReportType) as e:
        print(e.message, file=sys.stderr)
        return 2
    except GuestBookError as e:
        print(f"Gagal Mengekspor Laporan: {e.message}", file=sys.stderr)
        return 1

    if result.status == "empty":
        print("Tidak Ada Data: tidak ada data tamu yang ditemukan untuk periode yang dipilih.")
        return 0

    print(f"Laporan Berhasil Diekspor: {result.row_count} data tamu -> {result.path}")
    return 0


COMMANDS = {
    "register": _cmd_register,
    "next-number": _cmd_next_number,
    "dashboard": _cmd_dashboard,
    "export": _cmd_export,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    store = GuestStore(build_engine(args.db) if args.db else None)
    try:
        store.create_schema()
    except StoreError as e:
        print(f"Database tidak tersedia: {e.message}", file=sys.stderr)
        return 1

    logger.debug("Running %s against %s", args.command, args.db or config.DATABASE_URL)
    return COMMANDS[args.command](args, store)


if __name__ == "__main__":
    sys.exit(main())
