from datetime import date, datetime, timedelta

import pytest

from itops_dashboard.state import DashboardState, RefreshResult


def _fixed_today():
    return date(2025, 11, 25)


def test_selected_date_defaults_to_today():
    state = DashboardState(loader=dict, today=_fixed_today)
    assert state.selected_date == "2025-11-25"


def test_refresh_replaces_raw_and_filters(raw_dataset):
    state = DashboardState(loader=lambda: raw_dataset, today=_fixed_today)

    result = state.refresh()

    assert not result.skipped
    assert result.sheet_count == 5
    assert result.empty_sheets == ("vm",)
    assert not result.all_failed
    assert state.raw is raw_dataset
    assert state.filtered["binLocation"] == [raw_dataset["binLocation"][1]]
    assert state.last_updated is not None
    assert state.has_data


def test_refresh_while_in_flight_is_skipped(raw_dataset):
    nested = []

    def loader():
        nested.append(state.refresh())
        return raw_dataset

    state = DashboardState(loader=loader, today=_fixed_today)
    result = state.refresh()

    assert nested == [RefreshResult(skipped=True)]
    assert not result.skipped
    # The lock is released afterwards
    assert not state.refresh().skipped


def test_refresh_with_every_sheet_empty_is_a_total_failure():
    state = DashboardState(loader=lambda: {"gates": [], "vm": []}, today=_fixed_today)

    result = state.refresh()

    assert result.all_failed
    assert not state.has_data


def test_skipped_refresh_is_not_a_failure():
    assert not RefreshResult(skipped=True).all_failed


def test_select_date_recomputes_filtered_view(raw_dataset):
    state = DashboardState(loader=lambda: raw_dataset, today=_fixed_today)
    state.refresh()

    state.select_date("2025-11-24")
    assert state.filtered["binLocation"] == [raw_dataset["binLocation"][0]]

    state.select_date(date(2025, 11, 23))
    assert state.selected_date == "2025-11-23"
    assert state.filtered["binLocation"] == []


def test_reset_date_returns_to_today(raw_dataset):
    state = DashboardState(loader=lambda: raw_dataset, today=_fixed_today)
    state.refresh()
    state.select_date("2025-11-24")

    state.reset_date()

    assert state.selected_date == "2025-11-25"
    assert state.filtered["binLocation"] == [raw_dataset["binLocation"][1]]


def test_select_date_rejects_non_iso_strings(raw_dataset):
    state = DashboardState(loader=lambda: raw_dataset, today=_fixed_today)

    with pytest.raises(ValueError):
        state.select_date("11/25/2025")
    assert state.selected_date == "2025-11-25"


def test_availability_for_friday():
    state = DashboardState(loader=lambda: {"gates": []}, today=_fixed_today)
    state.refresh()
    state.select_date("2025-11-28")

    assert state.availability().kind == "friday"


def test_week_uses_injected_today(raw_dataset):
    state = DashboardState(loader=lambda: raw_dataset, today=_fixed_today)
    state.refresh()

    days, weekly = state.week()

    assert days == ["2025-11-23", "2025-11-24", "2025-11-25"]
    assert len(weekly["2025-11-23"]["network"]) == 1


def test_week_label_uses_injected_today(raw_dataset):
    state = DashboardState(loader=lambda: raw_dataset, today=lambda: date(2025, 11, 26))
    assert state.week_label() == "Nov 23 - Nov 26 (Wednesday)"

    state.today = lambda: date(2025, 11, 28)
    assert state.week_label() == "No data (Friday/Saturday)"


def test_state_is_stale_until_loaded_and_after_interval(raw_dataset):
    state = DashboardState(loader=lambda: raw_dataset, today=_fixed_today)
    assert state.is_stale(60)

    state.refresh()
    loaded_at = state.last_updated

    assert not state.is_stale(60, now=loaded_at + timedelta(seconds=59))
    assert state.is_stale(60, now=loaded_at + timedelta(seconds=60))
    assert isinstance(loaded_at, datetime)
