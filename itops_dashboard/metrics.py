"""
Metric extraction — pure functions with no side effects.

Provides alias-based field resolution, capacity percentages, status
classification, cumulative-to-daily deltas, and the per-sheet extractors that
turn one reconciled row into typed metrics.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator

from .config import (
    BAD_STATUS_PHRASES,
    BAD_STATUSES,
    COVERAGE_GOOD,
    COVERAGE_WARNING,
    DATE_COLUMN_NAMES,
    DEFAULT_CAMERAS_DOWN,
    DEFAULT_CAMERAS_WORKING,
    ENTER_LOCK_CRITICAL,
    ENTER_LOCK_WARNING,
    FIELD_ALIASES,
    GATE_DOWN,
    GATE_OPERATIONAL,
    GOOD_STATUSES,
    ROUTER_CAPACITY_GB,
    ROUTER_COUNT,
)
from .loaders.sheets import SheetRow
from .loaders.utils import safe_float, safe_int

logger = logging.getLogger(__name__)

GOOD = "good"
WARNING = "warning"
BAD = "bad"

_CAMERAS_DOWN_PATTERN = re.compile(r"\d+\s*cameras?.*down")


# ---------------------------------------------------------------------------
# Field resolution
# ---------------------------------------------------------------------------

def _aliases(name_or_aliases: str | tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(name_or_aliases, str):
        return FIELD_ALIASES.get(name_or_aliases, (name_or_aliases,))
    return name_or_aliases


def find_field(row: SheetRow, field_name: str | tuple[str, ...]) -> str | None:
    """Return the first present, non-empty value among a field's aliases.

    `field_name` is either a key of config.FIELD_ALIASES, a literal column
    name, or an explicit tuple of column names. None means every alias was
    absent or empty, which lets callers tell a defaulted value from a real 0.
    """
    for column in _aliases(field_name):
        value = row.get(column)
        if value is not None and str(value) != "":
            return str(value)
    return None


def field_int(row: SheetRow, field_name: str | tuple[str, ...], default: int = 0) -> int:
    value = safe_int(find_field(row, field_name))
    return default if value is None else value


def field_float(
    row: SheetRow,
    field_name: str | tuple[str, ...],
    default: float = 0.0,
) -> float:
    value = safe_float(find_field(row, field_name))
    return default if value is None else value


def field_text(row: SheetRow, field_name: str | tuple[str, ...], default: str = "") -> str:
    value = find_field(row, field_name)
    return default if value is None else value


# ---------------------------------------------------------------------------
# Percentages and classification
# ---------------------------------------------------------------------------

def capacity_pct(value: float, capacity: float) -> float:
    """Percentage of a fixed capacity, clamped to [0, 100]."""
    if capacity <= 0:
        return 0.0
    pct = (value / capacity) * 100
    return max(0.0, min(100.0, pct))


def classify_status(status) -> str:
    """Return 'good', 'warning' or 'bad' for a free-text status.

    Matching is case- and whitespace-insensitive. Anything not recognised,
    including an empty status, is 'warning' so unknown states still draw
    attention.
    """
    text = "" if status is None else str(status).lower().strip()

    if text in GOOD_STATUSES:
        return GOOD

    if text in BAD_STATUSES:
        return BAD
    if any(phrase in text for phrase in BAD_STATUS_PHRASES):
        return BAD
    if _CAMERAS_DOWN_PATTERN.search(text):
        return BAD

    return WARNING


def classify_coverage(coverage_pct: float) -> str:
    """Classify a WiFi coverage percentage."""
    if coverage_pct >= COVERAGE_GOOD:
        return GOOD
    if coverage_pct >= COVERAGE_WARNING:
        return WARNING
    return BAD


def enter_lock_severity(enter_lock: int) -> str:
    """Return 'Critical', 'Warning' or 'Good' for a damaged enter-lock bin count."""
    if enter_lock >= ENTER_LOCK_CRITICAL:
        return "Critical"
    if enter_lock >= ENTER_LOCK_WARNING:
        return "Warning"
    return "Good"


# ---------------------------------------------------------------------------
# Cumulative counters
# ---------------------------------------------------------------------------

def daily_usage_deltas(cumulative: list[float | None]) -> list[float]:
    """Derive per-day usage from a series of cumulative readings.

    A reading is the amount used so far, so the usage of day i is only known
    once day i+1 has been read: usage[i] = cumulative[i+1] - cumulative[i].
    This direction is chosen so that [100, 150, 150] gives [50, 0, 0]; the
    reverse (current minus next) would report 0 for every growing counter.

    - Negative results (counter reset) are clamped to 0.
    - The most recent day has no next reading and reports 0.
    - A missing reading on either side gives 0 for that day.
    """
    usage = []
    for i, current in enumerate(cumulative):
        if i == len(cumulative) - 1:
            usage.append(0.0)
            continue
        following = cumulative[i + 1]
        if current is None or following is None:
            usage.append(0.0)
            continue
        usage.append(max(0.0, following - current))
    return usage


# ---------------------------------------------------------------------------
# Wide rows
# ---------------------------------------------------------------------------

def is_date_column(column_name) -> bool:
    return (column_name or "").lower().strip() in DATE_COLUMN_NAMES


def pivot_wide_row(row: SheetRow, skip_empty: bool = True) -> Iterator[tuple[str, str]]:
    """Yield (item, status) pairs from a row with one column per item.

    Date columns and blank column names are skipped; empty statuses are
    skipped unless `skip_empty` is False.
    """
    for column, value in row.items():
        if not column or is_date_column(column):
            continue
        value = "" if value is None else str(value)
        if skip_empty and not value:
            continue
        yield column, value


def count_gate_statuses(row: SheetRow) -> dict[str, int]:
    """Count gates as operational, down, or with issues (any other non-empty status)."""
    counts = {"operational": 0, "with_issues": 0, "down": 0}
    for _, status in pivot_wide_row(row):
        text = status.lower().strip()
        if text in GATE_OPERATIONAL:
            counts["operational"] += 1
        elif text in GATE_DOWN:
            counts["down"] += 1
        elif text:
            counts["with_issues"] += 1
    return counts


# ---------------------------------------------------------------------------
# Per-sheet extractors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BinMetrics:
    enter_lock: int
    fg_wh: int
    good_bins: int
    row_material_wh: int
    spring_repair: int
    scanning_issue: int
    cement: int

    @property
    def row_material_total(self) -> int:
        return self.spring_repair + self.scanning_issue + self.cement


def extract_bin_metrics(row: SheetRow | None) -> BinMetrics:
    """Pull bin counts from a binLocation row. A missing row gives all zeros."""
    row = row or {}
    return BinMetrics(
        enter_lock=field_int(row, "enter_lock"),
        fg_wh=field_int(row, "fg_wh"),
        good_bins=field_int(row, "good_bins"),
        row_material_wh=field_int(row, "row_material_wh"),
        spring_repair=field_int(row, "spring_repair"),
        scanning_issue=field_int(row, "scanning_issue"),
        cement=field_int(row, "cement"),
    )


@dataclass(frozen=True)
class RouterReading:
    name: str
    gb: float
    status: str
    pct: float


@dataclass(frozen=True)
class NetworkMetrics:
    routers: list[RouterReading] = field(default_factory=list)
    upload_mbps: float = 0.0
    download_mbps: float = 0.0

    @property
    def total_gb(self) -> float:
        return sum(r.gb for r in self.routers)


def router_total_gb(row: SheetRow | None) -> float | None:
    """Sum of the router counters in a network row, or None without a row."""
    if not row:
        return None
    return sum(field_float(row, f"router_{i}") for i in range(1, ROUTER_COUNT + 1))


def extract_network_metrics(row: SheetRow | None) -> NetworkMetrics:
    """Router usage against capacity plus WiFi speeds from a network row."""
    row = row or {}
    routers = []
    for i in range(1, ROUTER_COUNT + 1):
        gb = field_float(row, f"router_{i}")
        status = field_text(row, f"router_{i}_status", "Good") if i == 1 else "Good"
        routers.append(RouterReading(
            name=f"Router {i}",
            gb=gb,
            status=status,
            pct=capacity_pct(gb, ROUTER_CAPACITY_GB),
        ))
    return NetworkMetrics(
        routers=routers,
        upload_mbps=field_float(row, "upload_speed"),
        download_mbps=field_float(row, "download_speed"),
    )


@dataclass(frozen=True)
class CameraCounts:
    working: int
    down: int
    working_defaulted: bool
    down_defaulted: bool


def extract_camera_counts(row: SheetRow | None) -> CameraCounts:
    """Find camera working/down counts in any column mentioning cameras.

    When no count is found, or the count is 0, the fixed fallbacks
    DEFAULT_CAMERAS_WORKING / DEFAULT_CAMERAS_DOWN are reported and flagged.
    """
    working = 0
    down = 0
    for column, value in (row or {}).items():
        lower = (column or "").lower()
        if "camera" not in lower:
            continue
        if "working" in lower:
            working = safe_int(value) or 0
        elif "down" in lower:
            down = safe_int(value) or 0

    return CameraCounts(
        working=working or DEFAULT_CAMERAS_WORKING,
        down=down or DEFAULT_CAMERAS_DOWN,
        working_defaulted=not working,
        down_defaulted=not down,
    )
