from datetime import datetime
from typing import List

import pytest

from buku_tamu.data.guests import GuestStore, build_engine
from buku_tamu.exceptions import StoreError
from buku_tamu.models.guest import GuestRecord


def make_record(created_at: datetime, n: int = 1, **overrides) -> GuestRecord:
    values = dict(
        registration_number=f"{created_at:%d%m%Y}-{n:03d}",
        first_name=f"Tamu{n}",
        last_name="Santoso",
        origin="Dinas Pekerjaan Umum",
        contact_number="081234567890",
        purpose="Rapat",
        created_at=created_at,
    )
    values.update(overrides)
    return GuestRecord(**values)


class FakeStore:
    """In-memory stand-in for GuestStore; records call counts."""

    def __init__(self, records: List[GuestRecord] = None, fail: bool = False):
        self.records = list(records or [])
        self.fail = fail
        self.inserted: List[dict] = []
        self.range_queries = 0

    def _check(self):
        if self.fail:
            raise StoreError("connection refused")

    def insert_guest(self, values: dict) -> datetime:
        self._check()
        created_at = values.get("created_at") or datetime.now()
        self.inserted.append(dict(values, created_at=created_at))
        self.records.append(
            GuestRecord(
                registration_number=values["reg_number"],
                first_name=values["first_name"],
                last_name=values["last_name"],
                origin=values["origin"],
                contact_number=values["contact_number"],
                purpose=values["purpose"],
                created_at=created_at,
            )
        )
        return created_at

    def count_guests_since(self, instant: datetime) -> int:
        self._check()
        return sum(1 for r in self.records if r.created_at >= instant)

    def get_guests_since(self, instant: datetime) -> List[GuestRecord]:
        self._check()
        return sorted(
            (r for r in self.records if r.created_at >= instant),
            key=lambda r: r.created_at,
            reverse=True,
        )

    def get_guests_in_range(self, start: datetime, end: datetime) -> List[GuestRecord]:
        self._check()
        self.range_queries += 1
        return sorted(
            (r for r in self.records if start <= r.created_at <= end),
            key=lambda r: r.created_at,
            reverse=True,
        )


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def sqlite_store(tmp_path):
    store = GuestStore(build_engine(f"sqlite:///{tmp_path / 'guests.db'}"))
    store.create_schema()
    yield store
    store.engine.dispose()
