import copy
from datetime import date

import pytest

from itops_dashboard.reconcile import (
    filter_rows_for_date,
    get_data_availability,
    has_date_column,
    reconcile_date,
    reconcile_week,
    working_week,
)


def test_has_date_column_checks_first_row_only():
    assert has_date_column([{"Date": "1/1/2025"}])
    assert has_date_column([{"date": "1/1/2025"}])
    assert not has_date_column([{"DATE": "1/1/2025"}])
    assert not has_date_column([{"Gate 1": "Good"}, {"Date": "1/1/2025"}])
    assert not has_date_column([])


def test_selecting_a_date_yields_only_that_row(raw_dataset):
    filtered = reconcile_date(raw_dataset, "2025-11-25")

    assert filtered["binLocation"] == [raw_dataset["binLocation"][1]]
    assert filtered["gates"] == [raw_dataset["gates"][1]]


def test_date_without_rows_gives_empty_dated_sheets(raw_dataset):
    filtered = reconcile_date(raw_dataset, "2025-11-26")

    assert filtered["binLocation"] == []
    assert filtered["gates"] == []
    assert filtered["network"] == []
    assert filtered["vm"] == []


def test_undated_sheet_applies_to_every_date(raw_dataset):
    for day in ("2025-11-24", "2025-11-26", "2030-01-01"):
        assert reconcile_date(raw_dataset, day)["wifiCoverage"] == raw_dataset["wifiCoverage"]


def test_rows_with_malformed_dates_are_dropped():
    rows = [
        {"Date": "11/25/2025", "Gate 1": "Good"},
        {"Date": "2025-11-25", "Gate 1": "Down"},
        {"Date": "", "Gate 1": "Down"},
        {"Gate 1": "Down"},
    ]
    assert filter_rows_for_date(rows, "2025-11-25") == [rows[0]]


def test_lowercase_date_column_is_reconciled():
    rows = [{"date": "1/5/2025", "VM1": "Online"}, {"date": "1/6/2025", "VM1": "Offline"}]
    assert reconcile_date({"vm": rows}, "2025-01-05") == {"vm": [rows[0]]}


def test_reconcile_never_mutates_raw(raw_dataset):
    snapshot = copy.deepcopy(raw_dataset)

    filtered = reconcile_date(raw_dataset, "2025-11-25")
    filtered["wifiCoverage"].append({"extra": "row"})
    filtered["binLocation"].clear()

    assert raw_dataset == snapshot


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2025, 11, 23), ["2025-11-23"]),
        (date(2025, 11, 26), ["2025-11-23", "2025-11-24", "2025-11-25", "2025-11-26"]),
        (date(2025, 11, 27), ["2025-11-23", "2025-11-24", "2025-11-25", "2025-11-26", "2025-11-27"]),
    ],
)
def test_working_week_runs_from_sunday_to_today(today, expected):
    assert working_week(today) == expected


@pytest.mark.parametrize("today", [date(2025, 11, 28), date(2025, 11, 29)])
def test_working_week_is_empty_on_friday_and_saturday(today):
    assert working_week(today) == []


def test_working_week_never_contains_friday_or_saturday():
    for offset in range(7):
        today = date(2025, 11, 23 + offset)
        for day in working_week(today):
            assert date.fromisoformat(day).weekday() not in (4, 5)


def test_reconcile_week_repeats_single_date_reconciliation(raw_dataset):
    days = working_week(date(2025, 11, 25))
    weekly = reconcile_week(raw_dataset, days)

    assert list(weekly) == ["2025-11-23", "2025-11-24", "2025-11-25"]
    for day in days:
        assert weekly[day] == reconcile_date(raw_dataset, day)
    assert weekly["2025-11-23"]["binLocation"] == []
    assert len(weekly["2025-11-23"]["network"]) == 1


def test_availability_reports_pending_date():
    raw = {"binLocation": [{"Date": "11/25/2025", "Needed Bins in EnterLock WH": "3"}]}
    filtered = reconcile_date(raw, "2025-11-26")

    notice = get_data_availability(filtered, "2025-11-26")

    assert notice is not None
    assert notice.kind == "pending"
    assert notice.title == "This Date Is Still Pending"


@pytest.mark.parametrize(
    "selected, kind, title",
    [
        ("2025-11-28", "friday", "No IT Check in Friday"),
        ("2025-11-29", "saturday", "No IT Check in Saturday"),
    ],
)
def test_availability_reports_days_without_checks(selected, kind, title):
    notice = get_data_availability({"gates": [], "vm": []}, selected)

    assert notice.kind == kind
    assert notice.title == title


def test_availability_is_none_when_any_sheet_has_rows(raw_dataset):
    filtered = reconcile_date(raw_dataset, "2025-11-28")
    assert get_data_availability(filtered, "2025-11-28") is None
