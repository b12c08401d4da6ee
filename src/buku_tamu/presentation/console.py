from __future__ import annotations

import io

from buku_tamu.models.guest import DashboardSnapshot

BAR_WIDTH = 30


def bar_percent(count: int, max_daily: int) -> float:
    """0-100 width of one trend bar, relative to the busiest day."""
    return (count / max(max_daily, 1)) * 100


def render_dashboard(snapshot: DashboardSnapshot, title: str = "Buku Tamu Bapperida") -> str:
    out = io.StringIO()

    print("=" * 60, file=out)
    print(title.upper(), file=out)
    print("=" * 60, file=out)
    print(f"Tamu Hari Ini:   {snapshot.today_count}", file=out)
    print(f"Total Bulan Ini: {snapshot.month_count}", file=out)

    if snapshot.average_daily is not None:
        print(f"Rata-rata/Hari:  {snapshot.average_daily:.1f}", file=out)
    print(file=out)

    if snapshot.satisfaction_distribution is not None:
        print("Kepuasan Layanan", file=out)
        print("-" * 30, file=out)
        if snapshot.satisfaction_distribution:
            for level, n in snapshot.satisfaction_distribution.items():
                print(f"  {level:<12} {n:>4}", file=out)
        else:
            print("  Belum ada data", file=out)
        print(file=out)

    print("Tren Mingguan", file=out)
    print("-" * 30, file=out)
    peak = snapshot.max_daily
    for day in snapshot.weekly_trend:
        filled = round(bar_percent(day.count, peak) / 100 * BAR_WIDTH)
        bar = "#" * filled + "." * (BAR_WIDTH - filled)
        print(f"  {day.day_label:<4} {day.date.isoformat()} {bar} {day.count:>3}", file=out)

    return out.getvalue()
