"""Data ingestion loaders for the published status spreadsheet."""

from .sheets import fetch_sheet_text, fetch_sheet_texts, parse_sheet_csv, load_all_sheets
from .sheets import SheetDataset, SheetRow
from .utils import parse_sheet_date, safe_float, safe_int

__all__ = [
    "fetch_sheet_text",
    "fetch_sheet_texts",
    "parse_sheet_csv",
    "load_all_sheets",
    "SheetDataset",
    "SheetRow",
    "parse_sheet_date",
    "safe_float",
    "safe_int",
]
