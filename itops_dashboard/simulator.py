"""
Simulated data generator for the IT operations dashboard.

Produces raw sheet rows shaped like the published spreadsheet (M/D/YYYY dates,
wide one-column-per-item rows, legacy header spellings) so the dashboard can
run offline. All values are synthetic.
"""

from datetime import date, timedelta

import numpy as np

from .config import SHEET_GIDS
from .loaders.sheets import SheetDataset, SheetRow
from .reconcile import NO_CHECK_DAYS

# ---------------------------------------------------------------------------
# Item names per wide sheet and the statuses they draw from
# ---------------------------------------------------------------------------
_FORKLIFTS = ["Reach Truck 1", "Reach Truck 2", "Counterbalance 1", "Pallet Jack 1"]
_GATES = ["Gate 1", "Gate 2", "Gate 3", "Gate 4", "Dock Gate"]
_SERVICES = ["ERP", "WMS", "Email", "Printing", "VPN"]
_VMS = ["DC01", "FS01", "WMS-APP", "WMS-DB", "Backup"]
_SERVER_ROOM = ["UPS", "AC Unit", "NVR", "Core Switch"]
_SECURITY = ["Screen Lobby", "Screen Dock", "Screen Yard"]
_WHATSAPP = ["WhatsApp Group", "Handheld Charging"]
_WIFI_AREAS = ["Warehouse A", "Warehouse B", "Office", "Yard"]

_STATUS_WEIGHTS = {
    "Working": 0.8,
    "Not Working": 0.08,
    "Pending": 0.07,
    "Maintenance": 0.05,
}

_rng = np.random.default_rng(7)


def reseed(seed: int) -> None:
    """Reset the module RNG so generated sheets are reproducible."""
    global _rng
    _rng = np.random.default_rng(seed)


def _sheet_date(day: date) -> str:
    return f"{day.month}/{day.day}/{day.year}"


def _recent_check_days(end: date, n_days: int) -> list[date]:
    days = []
    day = end
    while len(days) < n_days:
        if day.weekday() not in NO_CHECK_DAYS:
            days.append(day)
        day -= timedelta(days=1)
    return list(reversed(days))


def _status() -> str:
    labels = list(_STATUS_WEIGHTS)
    return str(_rng.choice(labels, p=list(_STATUS_WEIGHTS.values())))


def _wide_rows(days: list[date], items: list[str]) -> list[SheetRow]:
    return [
        {"Date": _sheet_date(day), **{item: _status() for item in items}}
        for day in days
    ]


def generate_bins(days: list[date]) -> list[SheetRow]:
    """Daily bins counts with a slow drift in damaged enter-lock bins."""
    rows = []
    enter_lock = int(_rng.integers(15, 30))
    for day in days:
        enter_lock = int(np.clip(enter_lock + _rng.integers(-3, 4), 0, 49))
        rows.append({
            "Date": _sheet_date(day),
            "FG WH": str(int(_rng.integers(0, 10))),
            "Needed Bins in EnterLock WH": str(enter_lock),
            "Good Bins in EnterLock WH": str(49 - enter_lock),
            "Row Material WH": str(int(_rng.integers(20, 42))),
            "Row Material Spring Repair": str(int(_rng.integers(0, 8))),
            "Row Material Issue in Scanning ": str(int(_rng.integers(0, 6))),
            "Row Material need Cement": str(int(_rng.integers(0, 5))),
        })
    return rows


def generate_network(days: list[date]) -> list[SheetRow]:
    """Router counters that accumulate day over day, plus WiFi speeds."""
    rows = []
    totals = _rng.uniform(20, 80, size=3)
    for day in days:
        totals = totals + _rng.uniform(5, 40, size=3)
        rows.append({
            "Date": _sheet_date(day),
            "Router 1": f"{totals[0]:.1f}",
            "Router 2": f"{totals[1]:.1f}",
            "Router 3": f"{totals[2]:.1f}",
            "Static IP": "Good",
            "overall PAFT wifi speed Upload": f"{_rng.uniform(20, 90):.1f}",
            "overall PAFT wifi speed Download": f"{_rng.uniform(40, 200):.1f}",
        })
    return rows


def generate_wifi_coverage() -> list[SheetRow]:
    """Undated current-state coverage row."""
    return [{area: f"{_rng.uniform(35, 100):.0f}" for area in _WIFI_AREAS}]


def generate_server_room(days: list[date]) -> list[SheetRow]:
    rows = _wide_rows(days, _SERVER_ROOM)
    for row in rows:
        row["Cameras Working"] = str(int(_rng.integers(44, 51)))
        row["Cameras Down"] = str(int(_rng.integers(0, 5)))
    return rows


def generate_sheets(end: date | None = None, n_days: int = 10) -> SheetDataset:
    """Generate a raw dataset covering the last `n_days` check days up to `end`.

    Returns
    -------
    Sheet name -> rows, with the same sheet names as config.SHEET_GIDS.
    """
    days = _recent_check_days(end or date.today(), n_days)

    dataset: SheetDataset = {
        "binLocation": generate_bins(days),
        "forklifts": _wide_rows(days, _FORKLIFTS),
        "gates": _wide_rows(days, _GATES),
        "services": _wide_rows(days, _SERVICES),
        "wifiCoverage": generate_wifi_coverage(),
        "vm": _wide_rows(days, _VMS),
        "serverRoom": generate_server_room(days),
        "network": generate_network(days),
        "whatsappCharging": _wide_rows(days, _WHATSAPP),
        "security": _wide_rows(days, _SECURITY),
    }
    return {name: dataset[name] for name in SHEET_GIDS}
