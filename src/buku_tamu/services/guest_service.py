# src/buku_tamu/services/guest_service.py
from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from buku_tamu.exceptions import FormIncomplete
from buku_tamu.models.guest import GuestRecord, GuestSubmission
from buku_tamu.services.notifier import AdminNotifier
from buku_tamu.services.registration import generate_registration_number
from buku_tamu.utils.logger import get_logger

logger = get_logger(__name__)


class SupportsRegistration(Protocol):
    def insert_guest(self, record: dict) -> datetime: ...
    def count_guests_since(self, instant: datetime) -> int: ...


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class GuestRegistrationService:
    """
    Kiosk form submission.

    Rules:
    - required fields checked locally, before any store call
    - registration number taken from the form (generated if the form has none)
    - no duplicate-submission guard: two quick submits store two rows
    """

    def __init__(self, store: SupportsRegistration, notifier: Optional[AdminNotifier] = None):
        self.store = store
        self.notifier = notifier or AdminNotifier()

    def next_registration_number(self, now: Optional[datetime] = None) -> str:
        return generate_registration_number(now or datetime.now(), self.store)

    def new_form(self, now: Optional[datetime] = None) -> GuestSubmission:
        """Blank form pre-filled with the number the next guest will see."""
        return GuestSubmission(registration_number=self.next_registration_number(now))

    def submit(self, submission: GuestSubmission, now: Optional[datetime] = None) -> str:
        """
        Store one visit and return the registration number for the next form.

        FormIncomplete if a required field is blank; StoreError if the insert
        is rejected. Either way `submission` is left as it was.
        """
        if submission.missing_fields():
            logger.info("Form incomplete, missing: %s", ", ".join(submission.missing_fields()))
            raise FormIncomplete()

        reg_number = submission.registration_number or self.next_registration_number(now)

        values = {
            "reg_number": reg_number,
            "first_name": submission.first_name.strip(),
            "last_name": submission.last_name.strip(),
            "nik": _blank_to_none(submission.national_id),
            "origin": submission.origin.strip(),
            "position": _blank_to_none(submission.position),
            "bidang": _blank_to_none(submission.department),
            "contact_number": submission.contact_number.strip(),
            "purpose": submission.purpose.strip(),
            "satisfaction": _blank_to_none(submission.satisfaction),
            "created_at": now,
        }

        created_at = self.store.insert_guest(values)

        record = GuestRecord(
            registration_number=reg_number,
            first_name=values["first_name"],
            last_name=values["last_name"],
            national_id=values["nik"],
            origin=values["origin"],
            position=values["position"],
            department=values["bidang"],
            contact_number=values["contact_number"],
            purpose=values["purpose"],
            satisfaction=values["satisfaction"],
            created_at=created_at,
        )
        logger.info("Guest registered: %s (%s)", record.full_name, reg_number)

        self.notifier.notify(record)

        return self.next_registration_number(now)
