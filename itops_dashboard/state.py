"""
Application state for one dashboard session.

DashboardState owns the raw dataset, the selected date, and the filtered view
derived from them. Raw data is only replaced through apply_raw(), and every
change to raw data or the selected date recomputes the filtered view in full.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable

from .dashboard import format_week_range
from .loaders.sheets import SheetDataset, load_all_sheets
from .reconcile import (
    AvailabilityNotice,
    get_data_availability,
    has_any_data,
    reconcile_date,
    reconcile_week,
    working_week,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of one refresh call."""

    skipped: bool = False
    sheet_count: int = 0
    empty_sheets: tuple[str, ...] = ()

    @property
    def all_failed(self) -> bool:
        """True when the cycle ran and no sheet produced any rows."""
        return not self.skipped and self.sheet_count > 0 and len(self.empty_sheets) == self.sheet_count


@dataclass
class DashboardState:
    loader: Callable[[], SheetDataset] = load_all_sheets
    today: Callable[[], date] = date.today
    raw: SheetDataset = field(default_factory=dict)
    filtered: SheetDataset = field(default_factory=dict)
    selected_date: str | None = None
    last_updated: datetime | None = None
    _in_flight: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.selected_date is None:
            self.selected_date = self.today().isoformat()

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------
    def refresh(self) -> RefreshResult:
        """Run one fetch cycle and replace the raw data wholesale.

        A refresh requested while another is still running is skipped.
        """
        if not self._in_flight.acquire(blocking=False):
            logger.info("Refresh already in progress - skipping")
            return RefreshResult(skipped=True)

        try:
            dataset = self.loader()
            self.apply_raw(dataset)
        finally:
            self._in_flight.release()

        empty = tuple(name for name, rows in dataset.items() if not rows)
        result = RefreshResult(sheet_count=len(dataset), empty_sheets=empty)
        if result.all_failed:
            logger.error("Failed to fetch data from every sheet")
        elif empty:
            logger.warning("Sheets with no data: %s", ", ".join(empty))
        return result

    def apply_raw(self, dataset: SheetDataset) -> None:
        """Swap in a new raw dataset and recompute the filtered view."""
        self.raw = dataset
        self.last_updated = datetime.now()
        self._recompute()

    def select_date(self, selected: str | date | None) -> None:
        """Change the selected date. None resets it to today."""
        if selected is None:
            selected = self.today()
        if isinstance(selected, date):
            selected = selected.isoformat()
        # Validates the ISO format before it is stored
        date.fromisoformat(selected)
        self.selected_date = selected
        logger.info("Filtering by date: %s", selected)
        self._recompute()

    def reset_date(self) -> None:
        self.select_date(None)

    def _recompute(self) -> None:
        self.filtered = reconcile_date(self.raw, self.selected_date)

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------
    @property
    def has_data(self) -> bool:
        return has_any_data(self.filtered)

    def availability(self) -> AvailabilityNotice | None:
        return get_data_availability(self.filtered, self.selected_date)

    def is_stale(self, interval: float, now: datetime | None = None) -> bool:
        """True when nothing has been loaded yet or the data is `interval` seconds old."""
        if self.last_updated is None:
            return True
        now = now or datetime.now()
        return now - self.last_updated >= timedelta(seconds=interval)

    def week(self) -> tuple[list[str], dict[str, SheetDataset]]:
        """Working-week days and the per-day reconciled datasets."""
        days = working_week(self.today())
        return days, reconcile_week(self.raw, days)

    def week_label(self) -> str:
        """Header for the weekly view, using the same `today` as week()."""
        days = working_week(self.today())
        return format_week_range(days, self.today())
