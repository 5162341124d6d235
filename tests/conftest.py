import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


BINS_CSV = (
    "Date,FG WH,Needed Bins in EnterLock WH,Good Bins in EnterLock WH,"
    "Row Material Spring Repair,Row Material Issue in Scanning ,Row Material need Cement\n"
    "11/23/2025,3,20,29,2,1,0\n"
    "11/24/2025,4,22,27,3,2,1\n"
    "11/25/2025,5,30,19,4,3,5\n"
)


@pytest.fixture()
def bins_csv():
    return BINS_CSV


@pytest.fixture()
def raw_dataset():
    """Two dated wide sheets, one dated numeric sheet, one undated sheet."""
    return {
        "binLocation": [
            {
                "Date": "11/24/2025",
                "Needed Bins in EnterLock WH": "22",
                "Row Material Spring Repair": "3",
                "Row Material Issue in Scanning ": "2",
                "Row Material need Cement": "1",
            },
            {
                "Date": "11/25/2025",
                "Needed Bins in EnterLock WH": "30",
                "Row Material Spring Repair": "4",
                "Row Material Issue in Scanning ": "",
                "Row Material Issue in Scanning": "3",
                "Row Material need Cement": "5",
            },
        ],
        "gates": [
            {"Date": "11/24/2025", "Gate 1": "Working", "Gate 2": "Down", "Gate 3": "Pending"},
            {"Date": "11/25/2025", "Gate 1": "Good", "Gate 2": "Working", "Gate 3": "Not Working"},
        ],
        "network": [
            {"Date": "11/23/2025", "Router 1": "100", "Router 2": "0", "Router 3": "0"},
            {"Date": "11/24/2025", "Router 1": "150", "Router 2": "0", "Router 3": "0"},
            {"Date": "11/25/2025", "WE router 1": "150", "Router 2": "", "Router 3": "0"},
        ],
        "wifiCoverage": [
            {"Warehouse A": "85", "Office": "60", "Yard": "30"},
        ],
        "vm": [],
    }
