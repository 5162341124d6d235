"""
IT Operations Dashboard — End-to-end pipeline.

Fetches every sheet, reconciles it for a date and for the current working
week, and prints the dashboard-ready outputs.

Usage:
    python main.py [--date YYYY-MM-DD] [--demo]
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from itops_dashboard.dashboard import (
    STATUS_PANELS,
    describe_relative_date,
    get_daily_breakdown,
    get_daily_overview,
    get_weekly_insights,
    get_weekly_summary,
    get_weekly_wifi_usage,
)
from itops_dashboard.simulator import generate_sheets
from itops_dashboard.state import DashboardState

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="IT operations status pipeline")
    ap.add_argument("--date", help="Date to report on (YYYY-MM-DD). Defaults to today.")
    ap.add_argument("--demo", action="store_true", help="Use generated data instead of the spreadsheet.")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline and print the daily and weekly outputs."""
    args = parse_args(argv)

    state = DashboardState(loader=generate_sheets) if args.demo else DashboardState()

    print("=" * 70)
    print("  IT OPERATIONS — Daily & Weekly Status")
    print("=" * 70)

    # ------------------------------------------------------------------
    # 1. Fetch
    # ------------------------------------------------------------------
    print("\n[ 1 ] FETCHING SHEETS")
    print("-" * 40)
    result = state.refresh()
    if result.all_failed:
        logger.error("Failed to fetch data from the spreadsheet. Check that the sheets are published.")
        return 1
    for name, rows in state.raw.items():
        print(f"  {name:18s} {len(rows):4d} rows")

    # ------------------------------------------------------------------
    # 2. Daily view
    # ------------------------------------------------------------------
    if args.date:
        state.select_date(args.date)
    selected = state.selected_date
    print(f"\n[ 2 ] DAILY VIEW — {selected} ({describe_relative_date(selected)})")
    print("-" * 40)

    notice = state.availability()
    if notice is not None:
        print(f"\n  {notice.title}\n  {notice.message}")
    else:
        overview = get_daily_overview(state.filtered)

        bins = overview["bins"]
        if bins:
            print(f"\nBins: {bins['label']} — {bins['pct']:.1f}% damaged (EnterLock WH)")
        if not overview["row_materials"].empty:
            print(overview["row_materials"].to_string(index=False))

        network = overview["network"]
        for router in network["routers"]:
            print(f"  {router['name']}: {router['gb']} GB ({router['pct']:.0f}%)")
        print(f"  Upload: {network['upload_mbps'] or '--'} Mbps | Download: {network['download_mbps'] or '--'} Mbps")

        cameras = overview["cameras"]
        if cameras:
            print(f"\nCameras: {cameras['working']} working, {cameras['down']} down")

        if not overview["wifi_coverage"].empty:
            print("\nWiFi coverage:")
            print(overview["wifi_coverage"].to_string(index=False))

        for sheet_name, label in STATUS_PANELS.items():
            items = overview[sheet_name]
            if items.empty:
                continue
            print(f"\n{label}:")
            print(items.to_string(index=False))

    # ------------------------------------------------------------------
    # 3. Weekly view
    # ------------------------------------------------------------------
    days, weekly = state.week()
    print(f"\n[ 3 ] WEEKLY VIEW — {state.week_label()}")
    print("-" * 40)

    if days:
        print("\nSummary:")
        print(get_weekly_summary(weekly, days)[["metric", "value"]].to_string(index=False))

        print("\nDaily WiFi usage:")
        print(get_weekly_wifi_usage(weekly, days)[["label", "usage_gb"]].to_string(index=False))

        print("\nDaily breakdown:")
        print(get_daily_breakdown(weekly, days).to_string(index=False))

        print("\nInsights:")
        for insight in get_weekly_insights(weekly, days):
            print(f"  - {insight['text']}")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
