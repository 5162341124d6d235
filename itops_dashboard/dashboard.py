"""
Dashboard-ready output functions.

These are the entry points for the Streamlit front end. Each function takes a
reconciled dataset (one date) or a weekly mapping (date -> dataset) and
returns plain dicts or DataFrames suitable for rendering gauges, tables, and
trend charts.
"""

import logging
from datetime import date

import pandas as pd

from .config import (
    ENTER_LOCK_GAUGE_CAPACITY,
    ENTER_LOCK_WEEKLY_CAPACITY,
    ROW_MATERIAL_CAPACITY,
    ROW_MATERIAL_REVIEW_THRESHOLD,
    ENTER_LOCK_CRITICAL,
    ENTER_LOCK_WARNING,
    WEEKLY_STATUS_SHEETS,
)
from .loaders.sheets import SheetDataset, SheetRow
from .loaders.utils import safe_float
from .metrics import (
    capacity_pct,
    classify_coverage,
    classify_status,
    count_gate_statuses,
    daily_usage_deltas,
    enter_lock_severity,
    extract_bin_metrics,
    extract_camera_counts,
    extract_network_metrics,
    pivot_wide_row,
    router_total_gb,
)

logger = logging.getLogger(__name__)

# Daily-view sheets rendered as name/status panels
STATUS_PANELS = {
    "forklifts": "Forklifts",
    "gates": "Gates",
    "services": "Services",
    "whatsappCharging": "WhatsApp & Charging",
    "vm": "Virtual Machines",
    "serverRoom": "Server Room",
    "security": "Security Screens",
}


def current_row(rows: list[SheetRow] | None) -> SheetRow | None:
    """The row a panel displays: the first row of a filtered sheet."""
    if not rows:
        return None
    return rows[0]


# ---------------------------------------------------------------------------
# Daily view
# ---------------------------------------------------------------------------

def get_bins_overview(rows: list[SheetRow]) -> dict | None:
    """Damaged enter-lock bin gauge values for the selected date.

    Returns None when the bins sheet has no row for the date.
    """
    row = current_row(rows)
    if row is None:
        logger.warning("No bins data for the selected date")
        return None

    bins = extract_bin_metrics(row)
    pct = capacity_pct(bins.enter_lock, ENTER_LOCK_GAUGE_CAPACITY)
    return {
        "enter_lock": bins.enter_lock,
        "capacity": ENTER_LOCK_GAUGE_CAPACITY,
        "pct": pct,
        "label": f"{bins.enter_lock}/{ENTER_LOCK_GAUGE_CAPACITY} Bins",
        "fg_wh": bins.fg_wh,
        "good_bins": bins.good_bins,
        "row_material_wh": bins.row_material_wh,
    }


def get_row_materials_breakdown(rows: list[SheetRow]) -> pd.DataFrame:
    """Row-material issue counts as shares of the row-material capacity.

    Returns
    -------
    DataFrame with columns: issue, count, pct. Empty when there are no issues.
    """
    columns = ["issue", "count", "pct"]
    row = current_row(rows)
    if row is None:
        return pd.DataFrame(columns=columns)

    bins = extract_bin_metrics(row)
    if not bins.row_material_total:
        return pd.DataFrame(columns=columns)

    issues = [
        ("Spring Repair", bins.spring_repair),
        ("Scanning Issue", bins.scanning_issue),
        ("Cement", bins.cement),
    ]
    return pd.DataFrame(
        [
            {"issue": name, "count": count, "pct": capacity_pct(count, ROW_MATERIAL_CAPACITY)}
            for name, count in issues
        ],
        columns=columns,
    )


def get_status_items(rows: list[SheetRow], skip_empty: bool = True) -> pd.DataFrame:
    """Pivot a wide status row into one line per item.

    Returns
    -------
    DataFrame with columns: name, status, status_class
    """
    row = current_row(rows)
    if row is None:
        return pd.DataFrame(columns=["name", "status", "status_class"])

    items = [
        {"name": name, "status": status, "status_class": classify_status(status)}
        for name, status in pivot_wide_row(row, skip_empty=skip_empty)
    ]
    return pd.DataFrame(items, columns=["name", "status", "status_class"])


def get_wifi_coverage(rows: list[SheetRow]) -> pd.DataFrame:
    """Coverage percentage per area. Non-numeric cells are left out.

    Returns
    -------
    DataFrame with columns: area, coverage, status_class
    """
    row = current_row(rows)
    if row is None:
        return pd.DataFrame(columns=["area", "coverage", "status_class"])

    items = []
    for area, value in pivot_wide_row(row):
        coverage = safe_float(value)
        if coverage is None:
            continue
        items.append({
            "area": area,
            "coverage": coverage,
            "status_class": classify_coverage(coverage),
        })
    return pd.DataFrame(items, columns=["area", "coverage", "status_class"])


def get_network_overview(rows: list[SheetRow]) -> dict:
    """Router gauges and WiFi speeds. Without data every value is zeroed."""
    row = current_row(rows)
    if row is None:
        logger.info("No network data available for selected date")

    network = extract_network_metrics(row)
    return {
        "has_data": row is not None,
        "routers": [
            {"name": r.name, "gb": r.gb, "pct": r.pct, "status": r.status}
            for r in network.routers
        ],
        "upload_mbps": network.upload_mbps or None,
        "download_mbps": network.download_mbps or None,
    }


def get_camera_summary(rows: list[SheetRow]) -> dict | None:
    """Camera working/down counts, read from the server-room sheet."""
    row = current_row(rows)
    if row is None:
        return None
    cameras = extract_camera_counts(row)
    return {
        "working": cameras.working,
        "down": cameras.down,
        "defaulted": cameras.working_defaulted or cameras.down_defaulted,
    }


def get_daily_overview(filtered: SheetDataset) -> dict:
    """Single entry point for the daily page: every widget's values in one dict."""
    overview = {
        "bins": get_bins_overview(filtered.get("binLocation", [])),
        "row_materials": get_row_materials_breakdown(filtered.get("binLocation", [])),
        "wifi_coverage": get_wifi_coverage(filtered.get("wifiCoverage", [])),
        "network": get_network_overview(filtered.get("network", [])),
        "cameras": get_camera_summary(filtered.get("serverRoom", [])),
    }
    for sheet_name in STATUS_PANELS:
        overview[sheet_name] = get_status_items(filtered.get(sheet_name, []))
    return overview


# ---------------------------------------------------------------------------
# Weekly view
# ---------------------------------------------------------------------------

def latest_row(weekly: dict[str, SheetDataset], days: list[str], sheet: str) -> SheetRow | None:
    """Current row of `sheet` on the most recent day in `days` that has one."""
    for day in reversed(days):
        row = current_row(weekly.get(day, {}).get(sheet))
        if row is not None:
            return row
    return None


def _day_label(day: str) -> str:
    d = date.fromisoformat(day)
    return f"{d:%b} {d.day}"


def get_weekly_bins_trend(weekly: dict[str, SheetDataset], days: list[str]) -> pd.DataFrame:
    """Bins counts per working day. Days without data report zeros.

    Returns
    -------
    DataFrame with columns:
        date, label, enter_lock, spring_repair, scanning_issue, cement
    """
    rows = []
    for day in days:
        bins = extract_bin_metrics(current_row(weekly.get(day, {}).get("binLocation")))
        rows.append({
            "date": day,
            "label": _day_label(day),
            "enter_lock": bins.enter_lock,
            "spring_repair": bins.spring_repair,
            "scanning_issue": bins.scanning_issue,
            "cement": bins.cement,
        })
    return pd.DataFrame(
        rows,
        columns=["date", "label", "enter_lock", "spring_repair", "scanning_issue", "cement"],
    )


def get_weekly_wifi_usage(weekly: dict[str, SheetDataset], days: list[str]) -> pd.DataFrame:
    """Daily WiFi usage derived from the cumulative router counters.

    Returns
    -------
    DataFrame with columns: date, label, cumulative_gb, usage_gb
    """
    cumulative = [
        router_total_gb(current_row(weekly.get(day, {}).get("network")))
        for day in days
    ]
    usage = daily_usage_deltas(cumulative)
    return pd.DataFrame(
        {
            "date": days,
            "label": [_day_label(d) for d in days],
            "cumulative_gb": cumulative,
            "usage_gb": usage,
        },
        columns=["date", "label", "cumulative_gb", "usage_gb"],
    )


def get_weekly_summary(weekly: dict[str, SheetDataset], days: list[str]) -> pd.DataFrame:
    """Weekly rollup table: latest bins values, total WiFi usage, gate counts.

    Returns
    -------
    DataFrame with columns: metric, value, css_class
    """
    bins = extract_bin_metrics(latest_row(weekly, days, "binLocation"))
    total_usage = float(get_weekly_wifi_usage(weekly, days)["usage_gb"].sum()) if days else 0.0

    gates_row = latest_row(weekly, days, "gates")
    gates = count_gate_statuses(gates_row) if gates_row else {
        "operational": 0, "with_issues": 0, "down": 0,
    }

    summary = [
        ("Working Days", len(days), "info"),
        ("Damaged Bins in Enterlock", bins.enter_lock, "danger"),
        ("Total Row Material Issues", bins.row_material_total, "warning"),
        ("Spring Repair", bins.spring_repair, "sub"),
        ("Scanning Issues", bins.scanning_issue, "sub"),
        ("Need Cement", bins.cement, "sub"),
        ("Total WiFi Usage", f"{total_usage:.1f} GB", "primary"),
        ("Gates Status", "", "info"),
        ("Operational", gates["operational"], "sub success"),
        ("With Issues", gates["with_issues"], "sub warning"),
        ("Down", gates["down"], "sub danger"),
    ]
    return pd.DataFrame(summary, columns=["metric", "value", "css_class"])


def get_latest_status_table(
    weekly: dict[str, SheetDataset],
    days: list[str],
    sheet: str,
) -> pd.DataFrame:
    """Status table for `sheet` from the most recent day with data."""
    row = latest_row(weekly, days, sheet)
    return get_status_items([row] if row else [], skip_empty=False)


def get_weekly_status_tables(
    weekly: dict[str, SheetDataset],
    days: list[str],
) -> dict[str, pd.DataFrame]:
    return {sheet: get_latest_status_table(weekly, days, sheet) for sheet in WEEKLY_STATUS_SHEETS}


def get_weekly_insights(weekly: dict[str, SheetDataset], days: list[str]) -> list[dict]:
    """Short plain-language observations about the bins over the week.

    Returns a list of {"icon": ..., "text": ...} dicts; never empty.
    """
    insights: list[dict] = []
    if not days:
        return [{"icon": "check", "text": "All bins are operating within normal parameters."}]

    first_row = current_row(weekly.get(days[0], {}).get("binLocation"))
    last_row = current_row(weekly.get(days[-1], {}).get("binLocation"))

    if first_row and last_row:
        first = extract_bin_metrics(first_row).enter_lock
        last = extract_bin_metrics(last_row).enter_lock
        if last > first:
            insights.append({
                "icon": "arrow-up",
                "text": (
                    f"Damaged Enterlock bins increased from {first} to {last} "
                    f"({last - first} more damaged bins)."
                ),
            })
        elif last < first:
            insights.append({
                "icon": "arrow-down",
                "text": (
                    f"Damaged Enterlock bins decreased from {first} to {last} "
                    f"({first - last} fewer damaged bins)."
                ),
            })
        else:
            insights.append({
                "icon": "minus",
                "text": f"Damaged Enterlock bins remained stable at {last} throughout the week.",
            })

    trend = get_weekly_bins_trend(weekly, days)
    days_with_data = sum(
        1 for day in days if current_row(weekly.get(day, {}).get("binLocation"))
    )
    if days_with_data:
        totals = [
            ("Spring Repair", int(trend["spring_repair"].sum())),
            ("Scanning Issues", int(trend["scanning_issue"].sum())),
            ("Need Cement", int(trend["cement"].sum())),
        ]
        top_name, top_count = sorted(totals, key=lambda t: t[1], reverse=True)[0]
        if top_count > 0:
            insights.append({
                "icon": "exclamation-circle",
                "text": (
                    f"{top_name} is the most common row material issue with "
                    f"{top_count} total bins affected over {len(days)} days."
                ),
            })

        if last_row:
            latest_total = extract_bin_metrics(last_row).row_material_total
            if latest_total > ROW_MATERIAL_REVIEW_THRESHOLD:
                insights.append({
                    "icon": "exclamation-triangle",
                    "text": (
                        f"Currently {latest_total} row material bins with issues. "
                        "Consider maintenance review."
                    ),
                })
            elif latest_total > 0:
                insights.append({
                    "icon": "info-circle",
                    "text": f"Currently {latest_total} row material bins with issues.",
                })
            else:
                insights.append({
                    "icon": "check",
                    "text": "No row material issues in the latest report!",
                })

    if last_row:
        enter_lock = extract_bin_metrics(last_row).enter_lock
        pct = enter_lock / ENTER_LOCK_WEEKLY_CAPACITY * 100
        detail = (
            f"Damaged Enterlock bins at {pct:.1f}% of capacity "
            f"({enter_lock}/{ENTER_LOCK_WEEKLY_CAPACITY})."
        )
        if enter_lock >= ENTER_LOCK_CRITICAL:
            insights.append({"icon": "exclamation-triangle", "text": f"{detail} Consider urgent action."})
        elif enter_lock >= ENTER_LOCK_WARNING:
            insights.append({"icon": "info-circle", "text": detail})

    if not insights:
        insights.append({"icon": "check", "text": "All bins are operating within normal parameters."})
    return insights


def get_daily_breakdown(weekly: dict[str, SheetDataset], days: list[str]) -> pd.DataFrame:
    """Per-day bins card values with an enter-lock severity badge.

    Returns
    -------
    DataFrame with columns:
        date, day_name, enter_lock, enter_lock_pct, severity, spring_repair,
        scanning_issue, cement, row_material_total
    """
    rows = []
    for day in days:
        bins = extract_bin_metrics(current_row(weekly.get(day, {}).get("binLocation")))
        d = date.fromisoformat(day)
        rows.append({
            "date": day,
            "day_name": f"{d:%A}, {d:%b} {d.day}",
            "enter_lock": bins.enter_lock,
            "enter_lock_pct": round(bins.enter_lock / ENTER_LOCK_WEEKLY_CAPACITY * 100, 1),
            "severity": enter_lock_severity(bins.enter_lock),
            "spring_repair": bins.spring_repair,
            "scanning_issue": bins.scanning_issue,
            "cement": bins.cement,
            "row_material_total": bins.row_material_total,
        })
    return pd.DataFrame(rows, columns=[
        "date", "day_name", "enter_lock", "enter_lock_pct", "severity",
        "spring_repair", "scanning_issue", "cement", "row_material_total",
    ])


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

def format_week_range(days: list[str], today: date | None = None) -> str:
    """Header text for the weekly page, e.g. "Nov 23 - Nov 26 (Wednesday)"."""
    if not days:
        return "No data (Friday/Saturday)"
    today = today or date.today()
    return f"{_day_label(days[0])} - {_day_label(days[-1])} ({today:%A})"


def describe_relative_date(selected: str, today: date | None = None) -> str:
    """Describe a selected date relative to today ("Yesterday", "3 days ago", ...)."""
    today = today or date.today()
    selected_date = date.fromisoformat(selected)
    diff_days = (today - selected_date).days

    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days == -1:
        return "Tomorrow"
    if 1 < diff_days <= 30:
        return f"{diff_days} days ago"
    if -30 <= diff_days < -1:
        return f"In {abs(diff_days)} days"
    if diff_days > 30:
        months = diff_days // 30
        return f"{months} month{'s' if months > 1 else ''} ago"
    return f"{selected_date:%b} {selected_date.day}, {selected_date.year}"
