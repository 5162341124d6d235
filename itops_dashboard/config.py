"""
Configuration: sheet registry, field aliases, capacities, status vocabularies.

FIELD_ALIASES maps each logical field to the ordered column names it has been
published under. The first present, non-empty column wins, so newer headers
go first and legacy headers follow.
"""

import os

# ---------------------------------------------------------------------------
# Spreadsheet identity (override with ITOPS_SPREADSHEET_ID)
# ---------------------------------------------------------------------------
SPREADSHEET_ID = os.environ.get(
    "ITOPS_SPREADSHEET_ID", "1JN_qNVXftCBSIedeNx1HzFAgjRYk_onh1PCMr-t9NQM"
)

EXPORT_URL_TEMPLATE = (
    "https://docs.google.com/spreadsheets/d/{spreadsheet_id}/export?format=csv&gid={gid}"
)

# Sheet name -> tab gid
SHEET_GIDS: dict[str, int] = {
    "binLocation": 1314543807,
    "forklifts": 1512102468,
    "gates": 1123234426,
    "services": 1560847808,
    "wifiCoverage": 659928693,
    "vm": 1126565793,
    "serverRoom": 1903997037,
    "network": 235920846,
    "whatsappCharging": 1888422654,
    "security": 172318027,
}


def sheet_export_url(gid: int, spreadsheet_id: str | None = None) -> str:
    """Return the CSV export URL for one tab of the spreadsheet."""
    return EXPORT_URL_TEMPLATE.format(
        spreadsheet_id=spreadsheet_id or SPREADSHEET_ID,
        gid=gid,
    )


SHEET_URLS: dict[str, str] = {
    name: sheet_export_url(gid) for name, gid in SHEET_GIDS.items()
}

# ---------------------------------------------------------------------------
# Intervals (seconds)
# ---------------------------------------------------------------------------
FETCH_TIMEOUT = float(os.environ.get("ITOPS_FETCH_TIMEOUT", "15"))
REFRESH_INTERVAL = int(os.environ.get("ITOPS_REFRESH_INTERVAL", "60"))
CACHE_TTL = float(os.environ.get("ITOPS_CACHE_TTL", "30"))

# ---------------------------------------------------------------------------
# Capacities, per metric
# ---------------------------------------------------------------------------
ENTER_LOCK_GAUGE_CAPACITY = 49  # daily gauge
ENTER_LOCK_WEEKLY_CAPACITY = 42  # weekly breakdown and insights
ROW_MATERIAL_CAPACITY = 42
ROUTER_CAPACITY_GB = 400

# Enter-lock severity thresholds (bins)
ENTER_LOCK_CRITICAL = 35
ENTER_LOCK_WARNING = 25

# Row-material issue count above which maintenance review is suggested
ROW_MATERIAL_REVIEW_THRESHOLD = 10

# WiFi coverage thresholds (%)
COVERAGE_GOOD = 80.0
COVERAGE_WARNING = 50.0

# Fallback camera counts when the server-room sheet carries none
DEFAULT_CAMERAS_WORKING = 48
DEFAULT_CAMERAS_DOWN = 3

ROUTER_COUNT = 3

# ---------------------------------------------------------------------------
# Field aliases
# ---------------------------------------------------------------------------
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    # binLocation
    "fg_wh": ("FG WH", "tags have been removed"),
    "enter_lock": ("Needed Bins in EnterLock WH",),
    "good_bins": ("Good Bins in EnterLock WH", "Good Bins"),
    "row_material_wh": ("Row Material WH",),
    "spring_repair": ("Row Material Spring Repair",),
    "scanning_issue": ("Row Material Issue in Scanning ", "Row Material Issue in Scanning"),
    "cement": ("Row Material need Cement",),
    # network
    "router_1": ("Router 1", "WE router 1"),
    "router_2": ("Router 2", "WE router 2"),
    "router_3": ("Router 3", "WE router 3"),
    "router_1_status": ("Static IP",),
    "upload_speed": ("overall PAFT wifi speed Upload2", "overall PAFT wifi speed Upload"),
    "download_speed": ("overall PAFT wifi speed Download",),
    # any dated sheet
    "date": ("Date", "date"),
}

# Column names treated as the date axis of a wide row
DATE_COLUMN_NAMES = {"date", "dates", "timestamp"}

# ---------------------------------------------------------------------------
# Status vocabularies (lower-case, trimmed)
# ---------------------------------------------------------------------------
GOOD_STATUSES = {
    "good", "ready", "working", "operational", "ok",
    "online", "active", "done", "completed",
}

BAD_STATUSES = {
    "not working", "notworking", "down", "not done", "notdone",
    "error", "failed", "offline", "deleted", "damaged",
    "broken", "critical", "not ready", "notready",
}

BAD_STATUS_PHRASES = (
    "not working",
    "not done",
    "camera is down",
    "cameras is down",
    "camera down",
    "cameras down",
)

# Gate rollup uses its own, narrower vocabulary
GATE_OPERATIONAL = {"good", "working", "operational"}
GATE_DOWN = {"down", "not working", "failed"}

# Sheets shown as name/status tables in the weekly view
WEEKLY_STATUS_SHEETS = ("services", "vm", "forklifts", "security")
