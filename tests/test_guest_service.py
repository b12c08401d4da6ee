from datetime import datetime

import pytest

from buku_tamu.exceptions import FormIncomplete, StoreError
from buku_tamu.models.guest import GuestSubmission
from buku_tamu.services.guest_service import GuestRegistrationService
from buku_tamu.services.notifier import AdminNotifier
from conftest import FakeStore

NOW = datetime(2026, 3, 18, 10, 0)


class RecordingNotifier(AdminNotifier):
    def __init__(self):
        super().__init__(enabled=False)
        self.seen = []

    def notify(self, record):
        self.seen.append(record)
        return True


def submission(**overrides):
    values = dict(
        first_name="Budi",
        last_name="Santoso",
        origin="Dinas PU",
        contact_number="081234567890",
        purpose="Rapat",
        registration_number="18032026-001",
    )
    values.update(overrides)
    return GuestSubmission(**values)


def test_submit_stores_and_returns_next_number(fake_store):
    notifier = RecordingNotifier()
    service = GuestRegistrationService(fake_store, notifier)

    next_number = service.submit(submission(), now=NOW)

    assert next_number == "18032026-002"
    assert fake_store.inserted[0]["reg_number"] == "18032026-001"
    assert fake_store.inserted[0]["created_at"] == NOW
    assert notifier.seen[0].full_name == "Budi Santoso"


@pytest.mark.parametrize("field", ["first_name", "last_name", "origin", "contact_number", "purpose"])
def test_missing_required_field_blocks_store(fake_store, field):
    service = GuestRegistrationService(fake_store, RecordingNotifier())

    with pytest.raises(FormIncomplete) as exc:
        service.submit(submission(**{field: "  "}), now=NOW)

    assert exc.value.message == "Mohon lengkapi semua field yang wajib diisi."
    assert fake_store.inserted == []


def test_blank_optional_fields_stored_as_null(fake_store):
    service = GuestRegistrationService(fake_store, RecordingNotifier())
    service.submit(submission(national_id="", position="  ", department=None), now=NOW)

    stored = fake_store.inserted[0]
    assert stored["nik"] is None
    assert stored["position"] is None
    assert stored["bidang"] is None


def test_number_generated_when_form_has_none(fake_store):
    service = GuestRegistrationService(fake_store, RecordingNotifier())
    service.submit(submission(registration_number=None), now=NOW)
    assert fake_store.inserted[0]["reg_number"] == "18032026-001"


def test_store_failure_leaves_submission_intact():
    service = GuestRegistrationService(FakeStore(fail=True), RecordingNotifier())
    form = submission()

    with pytest.raises(StoreError):
        service.submit(form, now=NOW)

    assert form == submission()


def test_duplicate_submission_is_not_guarded(fake_store):
    service = GuestRegistrationService(fake_store, RecordingNotifier())
    form = submission()

    service.submit(form, now=NOW)
    service.submit(form, now=NOW)

    assert [r["reg_number"] for r in fake_store.inserted] == ["18032026-001", "18032026-001"]


def test_new_form_carries_next_number(fake_store):
    form = GuestRegistrationService(fake_store, RecordingNotifier()).new_form(NOW)
    assert form.registration_number == "18032026-001"
    assert form.first_name == ""


def test_disabled_notifier_does_nothing():
    from conftest import make_record

    assert AdminNotifier(enabled=False).notify(make_record(NOW)) is False
