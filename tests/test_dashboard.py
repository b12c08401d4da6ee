from datetime import date, datetime, timedelta

import pytest

from buku_tamu.models.guest import DashboardVariant
from buku_tamu.services.dashboard import (
    DashboardService,
    aggregate,
    average_daily,
    build_weekly_trend,
    resolve_variant,
    satisfaction_distribution,
)
from buku_tamu.utils.config import config
from buku_tamu.exceptions import StoreError
from conftest import FakeStore, make_record

# Wednesday
NOW = datetime(2026, 3, 18, 15, 0)


def test_month_count_equals_input_count():
    records = [make_record(datetime(2026, 3, d, 10), n=d) for d in range(1, 18)]
    snapshot = aggregate(records, NOW)
    assert snapshot.month_count == len(records)


def test_today_count_uses_local_midnight():
    records = [
        make_record(datetime(2026, 3, 18, 0, 0)),
        make_record(datetime(2026, 3, 18, 14, 59)),
        make_record(datetime(2026, 3, 17, 23, 59)),
    ]
    assert aggregate(records, NOW).today_count == 2


def test_weekly_trend_always_seven_days_ending_today():
    trend = aggregate([], NOW).weekly_trend

    assert len(trend) == 7
    assert [d.date for d in trend] == [date(2026, 3, 12) + timedelta(days=i) for i in range(7)]
    assert trend[-1].date == NOW.date()
    assert all(d.count == 0 for d in trend)


def test_weekly_trend_labels_are_sunday_first_names():
    trend = build_weekly_trend([], NOW)
    # 12 March 2026 is a Thursday
    assert [d.day_label for d in trend] == ["Kam", "Jum", "Sab", "Min", "Sen", "Sel", "Rab"]


def test_weekly_trend_buckets_by_calendar_date():
    records = [
        make_record(datetime(2026, 3, 17, 23, 59)),
        make_record(datetime(2026, 3, 18, 0, 1)),
        make_record(datetime(2026, 3, 12, 0, 0)),
        # eight days old: outside the window
        make_record(datetime(2026, 3, 10, 12, 0)),
        make_record(datetime(2026, 3, 11, 23, 59)),
    ]
    trend = build_weekly_trend(records, NOW)
    counts = {d.date: d.count for d in trend}

    assert counts[date(2026, 3, 17)] == 1
    assert counts[date(2026, 3, 18)] == 1
    assert counts[date(2026, 3, 12)] == 1
    assert sum(d.count for d in trend) == 3


def test_satisfaction_distribution_drops_zero_and_unknown():
    records = [
        make_record(NOW, satisfaction=s)
        for s in ["Puas", "Puas", "Unknown", "Sangat Puas"]
    ]
    dist = satisfaction_distribution(records)

    assert dist == {"Sangat Puas": 1, "Puas": 2}
    assert list(dist) == ["Sangat Puas", "Puas"]


def test_missing_satisfaction_not_counted():
    assert satisfaction_distribution([make_record(NOW)]) == {}


def test_satisfaction_variant_has_no_average():
    snapshot = aggregate([make_record(NOW, satisfaction="Puas")], NOW)
    assert snapshot.satisfaction_distribution == {"Puas": 1}
    assert snapshot.average_daily is None


def test_average_variant():
    records = [make_record(datetime(2026, 3, 2, 9), n=i) for i in range(9)]
    snapshot = aggregate(records, NOW, DashboardVariant.AVERAGE)

    assert snapshot.average_daily == pytest.approx(9 / 18)
    assert snapshot.satisfaction_distribution is None


def test_average_daily_zero_month():
    assert average_daily(0, NOW) == 0
    assert aggregate([], NOW, DashboardVariant.AVERAGE).average_daily == 0


def test_max_daily_floored_at_one():
    assert aggregate([], NOW).max_daily == 1

    records = [make_record(NOW, n=i) for i in range(4)] + [make_record(NOW - timedelta(days=1))]
    assert aggregate(records, NOW).max_daily == 4


def test_aggregate_is_deterministic():
    records = [make_record(NOW - timedelta(hours=h), n=h) for h in range(0, 100, 7)]
    assert aggregate(records, NOW) == aggregate(records, NOW)


def test_service_reads_current_month_only():
    store = FakeStore([
        make_record(datetime(2026, 2, 27, 10)),
        make_record(datetime(2026, 3, 1, 8)),
        make_record(datetime(2026, 3, 18, 9)),
    ])
    snapshot = DashboardService(store, DashboardVariant.SATISFACTION).load(NOW)

    assert snapshot.month_count == 2
    assert snapshot.today_count == 1


def test_service_propagates_store_failure():
    with pytest.raises(StoreError):
        DashboardService(FakeStore(fail=True), DashboardVariant.SATISFACTION).load(NOW)


def test_unknown_configured_variant_falls_back_to_satisfaction():
    assert resolve_variant("pie-chart") is DashboardVariant.SATISFACTION
    assert resolve_variant(" Average ") is DashboardVariant.AVERAGE


def test_service_with_bad_configured_variant(monkeypatch):
    monkeypatch.setattr(config, "DASHBOARD_VARIANT", "bogus")
    service = DashboardService(FakeStore())
    assert service.variant is DashboardVariant.SATISFACTION
    assert service.load(NOW).satisfaction_distribution == {}
