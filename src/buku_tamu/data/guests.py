# src/buku_tamu/data/guests.py
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    func,
    select,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from buku_tamu.exceptions import StoreError
from buku_tamu.models.guest import GuestRecord
from buku_tamu.utils.config import config
from buku_tamu.utils.logger import get_logger

logger = get_logger(__name__)

metadata = MetaData()

guests = Table(
    "guests",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("reg_number", String(32), nullable=False),
    Column("first_name", String(120), nullable=False),
    Column("last_name", String(120), nullable=False),
    Column("nik", String(32)),
    Column("origin", String(255), nullable=False),
    Column("position", String(120)),
    Column("bidang", String(120)),
    Column("contact_number", String(32), nullable=False),
    Column("purpose", String(120), nullable=False),
    Column("satisfaction", String(32)),
    Column("created_at", DateTime, nullable=False, index=True),
)

REPORT_COLUMNS = [
    guests.c.reg_number,
    guests.c.first_name,
    guests.c.last_name,
    guests.c.nik,
    guests.c.origin,
    guests.c.position,
    guests.c.bidang,
    guests.c.contact_number,
    guests.c.purpose,
    guests.c.satisfaction,
    guests.c.created_at,
]


def build_engine(url: Optional[str] = None) -> Engine:
    return create_engine(url or config.DATABASE_URL)


def _record_from_row(row) -> GuestRecord:
    m = row._mapping
    return GuestRecord(
        registration_number=m["reg_number"],
        first_name=m["first_name"],
        last_name=m["last_name"],
        national_id=m["nik"],
        origin=m["origin"],
        position=m["position"],
        department=m["bidang"],
        contact_number=m["contact_number"],
        purpose=m["purpose"],
        satisfaction=m["satisfaction"],
        created_at=m["created_at"],
    )


class GuestStore:
    """
    Record store for guest visits.

    The three operations the kiosk needs:
    - insert_guest
    - count_guests_since
    - get_guests_in_range (newest first)

    Every SQLAlchemy failure surfaces as StoreError carrying the driver message.
    """

    def __init__(
        self,
        engine: Optional[Engine] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.engine = engine or build_engine()
        self.clock = clock

    @contextmanager
    def _connect(self, action: str) -> Iterator[Connection]:
        try:
            with self.engine.begin() as conn:
                yield conn
        except SQLAlchemyError as e:
            logger.error("Store %s failed: %s", action, e)
            raise StoreError(str(e)) from e

    def create_schema(self) -> None:
        with self._connect("create_schema") as conn:
            metadata.create_all(conn)

    # ============================================================
    # WRITE
    # ============================================================

    def insert_guest(self, record: GuestRecord | dict) -> datetime:
        """
        Insert one visit. created_at is assigned here (store clock) unless the
        caller supplies it. Returns the created_at that was written.
        """
        if isinstance(record, GuestRecord):
            values = {
                "reg_number": record.registration_number,
                "first_name": record.first_name,
                "last_name": record.last_name,
                "nik": record.national_id,
                "origin": record.origin,
                "position": record.position,
                "bidang": record.department,
                "contact_number": record.contact_number,
                "purpose": record.purpose,
                "satisfaction": record.satisfaction,
                "created_at": record.created_at,
            }
        else:
            values = dict(record)

        if values.get("created_at") is None:
            values["created_at"] = self.clock()

        with self._connect("insert") as conn:
            conn.execute(guests.insert().values(**values))

        logger.info("Stored guest %s", values.get("reg_number"))
        return values["created_at"]

    # ============================================================
    # READ
    # ============================================================

    def count_guests_since(self, instant: datetime) -> int:
        sql = select(func.count()).select_from(guests).where(guests.c.created_at >= instant)
        with self._connect("count") as conn:
            return int(conn.execute(sql).scalar() or 0)

    def get_guests_in_range(self, start: datetime, end: datetime) -> List[GuestRecord]:
        """Inclusive on both ends, newest first."""
        sql = (
            select(*REPORT_COLUMNS)
            .where(guests.c.created_at >= start)
            .where(guests.c.created_at <= end)
            .order_by(guests.c.created_at.desc())
        )
        with self._connect("query") as conn:
            rows = conn.execute(sql).fetchall()

        logger.debug("Fetched %d guests between %s and %s", len(rows), start, end)
        return [_record_from_row(r) for r in rows]

    def get_guests_since(self, instant: datetime) -> List[GuestRecord]:
        sql = (
            select(*REPORT_COLUMNS)
            .where(guests.c.created_at >= instant)
            .order_by(guests.c.created_at.desc())
        )
        with self._connect("query") as conn:
            rows = conn.execute(sql).fetchall()
        return [_record_from_row(r) for r in rows]
