import pytest

from itops_dashboard.metrics import (
    capacity_pct,
    classify_coverage,
    classify_status,
    count_gate_statuses,
    daily_usage_deltas,
    enter_lock_severity,
    extract_bin_metrics,
    extract_camera_counts,
    extract_network_metrics,
    field_float,
    field_int,
    field_text,
    find_field,
    pivot_wide_row,
    router_total_gb,
)


# ---------------------------------------------------------------------------
# Field resolution
# ---------------------------------------------------------------------------

def test_find_field_prefers_first_alias():
    row = {"Good Bins in EnterLock WH": "12", "Good Bins": "99"}
    assert find_field(row, "good_bins") == "12"


def test_find_field_falls_back_past_missing_and_empty_aliases():
    assert find_field({"Good Bins": "7"}, "good_bins") == "7"
    assert find_field({"Good Bins in EnterLock WH": "", "Good Bins": "7"}, "good_bins") == "7"


def test_find_field_keeps_a_present_zero():
    assert find_field({"Needed Bins in EnterLock WH": "0"}, "enter_lock") == "0"


def test_find_field_signals_absence_with_none():
    assert find_field({}, "enter_lock") is None
    assert find_field({"Needed Bins in EnterLock WH": ""}, "enter_lock") is None


def test_find_field_accepts_literal_columns_and_tuples():
    row = {"Router 9": "5", "Legacy": "6"}
    assert find_field(row, "Router 9") == "5"
    assert find_field(row, ("Missing", "Legacy")) == "6"


def test_field_defaults():
    assert field_int({}, "enter_lock") == 0
    assert field_float({}, "router_1") == 0.0
    assert field_text({}, "router_1_status") == ""
    assert field_text({}, "router_1_status", "Good") == "Good"
    assert field_int({"Needed Bins in EnterLock WH": "oops"}, "enter_lock") == 0


# ---------------------------------------------------------------------------
# Capacity percentages
# ---------------------------------------------------------------------------

def test_capacity_pct_is_clamped_to_100():
    assert capacity_pct(60, 49) == 100.0


def test_capacity_pct_basic_values():
    assert capacity_pct(0, 49) == 0.0
    assert capacity_pct(21, 42) == pytest.approx(50.0)
    assert capacity_pct(100, 400) == pytest.approx(25.0)
    assert capacity_pct(-5, 42) == 0.0


def test_capacity_pct_is_monotonic_and_bounded():
    previous = -1.0
    for value in range(0, 120):
        pct = capacity_pct(value, 49)
        assert 0.0 <= pct <= 100.0
        assert pct >= previous
        previous = pct


# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "status, expected",
    [
        ("Damaged", "bad"),
        ("Good ", "good"),
        ("  READY", "good"),
        ("Completed", "good"),
        ("online", "good"),
        ("pending", "warning"),
        ("", "warning"),
        (None, "warning"),
        ("Maintenance", "warning"),
        ("something new", "warning"),
        ("Not Ready", "bad"),
        ("NotWorking", "bad"),
        ("Deleted", "bad"),
        ("printer not working since monday", "bad"),
        ("task not done", "bad"),
        ("camera is down near dock", "bad"),
        ("3 cameras down", "bad"),
        ("2 camera at gate are down", "bad"),
    ],
)
def test_classify_status(status, expected):
    assert classify_status(status) == expected


def test_classify_coverage_thresholds():
    assert classify_coverage(80) == "good"
    assert classify_coverage(79.9) == "warning"
    assert classify_coverage(50) == "warning"
    assert classify_coverage(49.9) == "bad"


def test_enter_lock_severity_thresholds():
    assert enter_lock_severity(24) == "Good"
    assert enter_lock_severity(25) == "Warning"
    assert enter_lock_severity(34) == "Warning"
    assert enter_lock_severity(35) == "Critical"


# ---------------------------------------------------------------------------
# Cumulative counters
# ---------------------------------------------------------------------------

def test_daily_usage_from_cumulative_series():
    assert daily_usage_deltas([100, 150, 150]) == [50, 0, 0]


def test_daily_usage_clamps_counter_resets():
    assert daily_usage_deltas([100, 40, 90]) == [0, 50, 0]


def test_daily_usage_most_recent_day_is_zero():
    assert daily_usage_deltas([10]) == [0]
    assert daily_usage_deltas([]) == []


def test_daily_usage_with_missing_readings():
    assert daily_usage_deltas([100, None, 180, 200]) == [0, 0, 20, 0]


# ---------------------------------------------------------------------------
# Wide rows
# ---------------------------------------------------------------------------

def test_pivot_wide_row_skips_date_columns_and_empty_values():
    row = {"Date": "11/25/2025", "Gate 1": "Good", "Gate 2": "", " timestamp ": "x", "Gate 3": "Down"}
    assert list(pivot_wide_row(row)) == [("Gate 1", "Good"), ("Gate 3", "Down")]


def test_pivot_wide_row_can_keep_empty_values():
    row = {"date": "11/25/2025", "VM1": "", "VM2": "Online"}
    assert list(pivot_wide_row(row, skip_empty=False)) == [("VM1", ""), ("VM2", "Online")]


def test_count_gate_statuses():
    row = {
        "Date": "11/25/2025",
        "Gate 1": "Good",
        "Gate 2": "working",
        "Gate 3": "Failed",
        "Gate 4": "Slow barrier",
        "Gate 5": "",
    }
    assert count_gate_statuses(row) == {"operational": 2, "with_issues": 1, "down": 1}


# ---------------------------------------------------------------------------
# Per-sheet extractors
# ---------------------------------------------------------------------------

def test_extract_bin_metrics_resolves_legacy_headers():
    row = {
        "tags have been removed": "4",
        "Needed Bins in EnterLock WH": "30",
        "Good Bins": "19",
        "Row Material Spring Repair": "4",
        "Row Material Issue in Scanning": "3",
        "Row Material need Cement": "5",
    }
    bins = extract_bin_metrics(row)

    assert bins.fg_wh == 4
    assert bins.enter_lock == 30
    assert bins.good_bins == 19
    assert bins.row_material_wh == 0
    assert bins.scanning_issue == 3
    assert bins.row_material_total == 12


def test_extract_bin_metrics_without_row_is_all_zero():
    bins = extract_bin_metrics(None)
    assert bins.enter_lock == 0
    assert bins.row_material_total == 0


def test_extract_network_metrics():
    row = {
        "Router 1": "500",
        "WE router 2": "100",
        "Static IP": "Unstable",
        "overall PAFT wifi speed Upload": "45.5",
        "overall PAFT wifi speed Download": "120",
    }
    network = extract_network_metrics(row)

    assert [r.gb for r in network.routers] == [500.0, 100.0, 0.0]
    assert [r.pct for r in network.routers] == [100.0, 25.0, 0.0]
    assert [r.status for r in network.routers] == ["Unstable", "Good", "Good"]
    assert network.upload_mbps == 45.5
    assert network.download_mbps == 120.0
    assert network.total_gb == 600.0


def test_router_total_gb():
    assert router_total_gb({"Router 1": "10", "WE router 2": "5.5", "Router 3": ""}) == 15.5
    assert router_total_gb(None) is None
    assert router_total_gb({}) is None


def test_extract_camera_counts_from_matching_columns():
    cameras = extract_camera_counts({"Cameras Working": "50", "Cameras Down": "1", "UPS": "Good"})

    assert (cameras.working, cameras.down) == (50, 1)
    assert not cameras.working_defaulted
    assert not cameras.down_defaulted


def test_extract_camera_counts_falls_back_to_fixed_defaults():
    cameras = extract_camera_counts({"UPS": "Good"})

    assert (cameras.working, cameras.down) == (48, 3)
    assert cameras.working_defaulted
    assert cameras.down_defaulted


def test_extract_camera_counts_treats_zero_as_missing():
    cameras = extract_camera_counts({"Camera Working": "45", "Camera Down": "0"})

    assert cameras.working == 45
    assert cameras.down == 3
    assert cameras.down_defaulted
