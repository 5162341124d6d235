from datetime import date

from itops_dashboard.config import SHEET_GIDS
from itops_dashboard.dashboard import get_weekly_wifi_usage
from itops_dashboard.metrics import router_total_gb
from itops_dashboard.reconcile import reconcile_date, reconcile_week, working_week
from itops_dashboard.simulator import generate_sheets, reseed

END = date(2025, 11, 25)


def test_generated_dataset_has_every_sheet():
    reseed(1)
    dataset = generate_sheets(end=END, n_days=5)
    assert list(dataset) == list(SHEET_GIDS)


def test_generated_dates_skip_fridays_and_saturdays():
    reseed(1)
    dataset = generate_sheets(end=END, n_days=8)

    dates = [row["Date"] for row in dataset["binLocation"]]
    assert len(dates) == 8
    assert dates[-1] == "11/25/2025"
    assert "11/22/2025" not in dates
    assert "11/21/2025" not in dates


def test_generated_rows_reconcile_to_the_end_date():
    reseed(2)
    filtered = reconcile_date(generate_sheets(end=END), "2025-11-25")

    for name, rows in filtered.items():
        assert len(rows) == 1, name


def test_router_counters_are_cumulative():
    reseed(3)
    rows = generate_sheets(end=END, n_days=6)["network"]

    totals = [router_total_gb(row) for row in rows]
    assert totals == sorted(totals)


def test_generated_week_feeds_weekly_usage():
    reseed(4)
    raw = generate_sheets(end=END)
    days = working_week(END)

    usage = get_weekly_wifi_usage(reconcile_week(raw, days), days)

    assert (usage["usage_gb"] >= 0).all()
    assert usage["usage_gb"].iloc[-1] == 0


def test_reseed_is_reproducible():
    reseed(9)
    first = generate_sheets(end=END, n_days=3)
    reseed(9)
    assert generate_sheets(end=END, n_days=3) == first
