from datetime import datetime

from buku_tamu.models.guest import DashboardVariant
from buku_tamu.presentation.console import bar_percent, render_dashboard
from buku_tamu.services.dashboard import aggregate
from conftest import make_record

NOW = datetime(2026, 3, 18, 15, 0)


def test_bar_percent_scales_to_busiest_day():
    assert bar_percent(2, 4) == 50
    assert bar_percent(0, 0) == 0


def test_render_satisfaction_dashboard():
    records = [
        make_record(NOW, satisfaction="Puas"),
        make_record(datetime(2026, 3, 17, 9), satisfaction="Sangat Puas"),
    ]
    text = render_dashboard(aggregate(records, NOW))

    assert "Tamu Hari Ini:   1" in text
    assert "Total Bulan Ini: 2" in text
    assert "Sangat Puas" in text
    assert "Rab  2026-03-18" in text


def test_render_empty_distribution():
    text = render_dashboard(aggregate([], NOW))
    assert "Belum ada data" in text


def test_render_average_variant():
    text = render_dashboard(aggregate([make_record(NOW)], NOW, DashboardVariant.AVERAGE))
    assert "Rata-rata/Hari:  0.1" in text
    assert "Kepuasan Layanan" not in text
