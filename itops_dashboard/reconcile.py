"""
Date reconciliation: bucket raw sheet rows into calendar dates.

A sheet is date-scoped when its first row has a "Date" (or "date") column.
Undated sheets hold a single current-state row that applies to every date.
Reconciliation always builds new lists and never touches the raw dataset.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from .loaders.sheets import SheetDataset, SheetRow
from .loaders.utils import parse_sheet_date

logger = logging.getLogger(__name__)

# datetime.weekday(): Monday=0 ... Friday=4, Saturday=5, Sunday=6
FRIDAY = 4
SATURDAY = 5
NO_CHECK_DAYS = {FRIDAY, SATURDAY}


def has_date_column(rows: list[SheetRow]) -> bool:
    """True if the sheet's first row carries a Date/date column."""
    if not rows:
        return False
    first = rows[0]
    return "Date" in first or "date" in first


def row_date(row: SheetRow) -> str | None:
    """Normalised YYYY-MM-DD date of a row, or None if missing or malformed."""
    raw = row.get("Date") or row.get("date") or ""
    return parse_sheet_date(raw)


def filter_rows_for_date(rows: list[SheetRow], target: str) -> list[SheetRow]:
    """Rows whose normalised date equals `target`. Malformed dates are dropped."""
    return [row for row in rows if row_date(row) == target]


def reconcile_date(raw: SheetDataset, target: str) -> SheetDataset:
    """Filter every sheet in `raw` to the rows for a single date.

    Parameters
    ----------
    raw : Sheet name -> all rows.
    target : Date string in YYYY-MM-DD form.

    Returns
    -------
    New dataset with the same sheet names. Undated sheets keep all rows.
    """
    filtered: SheetDataset = {}
    for sheet_name, rows in raw.items():
        if not rows:
            filtered[sheet_name] = []
            continue

        if not has_date_column(rows):
            filtered[sheet_name] = list(rows)
            logger.debug("%s: no date column, including all rows", sheet_name)
            continue

        filtered[sheet_name] = filter_rows_for_date(rows, target)
        logger.debug(
            "%s: %d rows for date %s", sheet_name, len(filtered[sheet_name]), target
        )
    return filtered


def working_week(today: date | None = None) -> list[str]:
    """Working days from the most recent Sunday through `today`.

    Fridays and Saturdays are not checked, so the list is empty when today is
    one of them.
    """
    today = today or date.today()
    if today.weekday() in NO_CHECK_DAYS:
        logger.info("Today is Friday or Saturday - no working week to show")
        return []

    days_since_sunday = (today.weekday() + 1) % 7
    sunday = today - timedelta(days=days_since_sunday)

    days = []
    for offset in range(days_since_sunday + 1):
        day = sunday + timedelta(days=offset)
        if day.weekday() not in NO_CHECK_DAYS:
            days.append(day.isoformat())
    return days


def reconcile_week(raw: SheetDataset, days: list[str]) -> dict[str, SheetDataset]:
    """Reconcile each day of a range independently.

    Returns a dict mapping each date to its filtered dataset, in range order.
    """
    weekly = {day: reconcile_date(raw, day) for day in days}
    logger.info("Reconciled %d days across %d sheets", len(days), len(raw))
    return weekly


# ---------------------------------------------------------------------------
# Data availability
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AvailabilityNotice:
    """User-facing explanation for an empty filtered view."""

    kind: str  # "friday", "saturday" or "pending"
    title: str
    message: str


def has_any_data(filtered: SheetDataset) -> bool:
    return any(rows for rows in filtered.values())


def get_data_availability(
    filtered: SheetDataset,
    selected_date: str,
) -> AvailabilityNotice | None:
    """Explain why the filtered view is empty, or return None if it is not.

    Fridays and Saturdays are days without IT checks, which is reported
    separately from a date whose data has not been captured yet.
    """
    if has_any_data(filtered):
        return None

    weekday = date.fromisoformat(selected_date).weekday()
    if weekday == FRIDAY:
        return AvailabilityNotice(
            kind="friday",
            title="No IT Check in Friday",
            message="IT checks are not performed on Fridays. Please select another date.",
        )
    if weekday == SATURDAY:
        return AvailabilityNotice(
            kind="saturday",
            title="No IT Check in Saturday",
            message="IT checks are not performed on Saturdays. Please select another date.",
        )
    return AvailabilityNotice(
        kind="pending",
        title="This Date Is Still Pending",
        message=(
            "No data available for the selected date. "
            "Please choose another date or check back later."
        ),
    )
