"""
Loader for the published spreadsheet tabs.

Each logical sheet is a CSV export URL. All sheets are requested together on
one event loop and gathered; a sheet that fails to download or parse comes
back as an empty row list without affecting the others.
"""

import asyncio
import io
import logging
from typing import Mapping

import httpx
import pandas as pd

from ..config import FETCH_TIMEOUT, SHEET_URLS

logger = logging.getLogger(__name__)

SheetRow = dict[str, str]
SheetDataset = dict[str, list[SheetRow]]

_BLANK_HEADER = r"^Unnamed: \d+$"


async def fetch_sheet_text(
    client: httpx.AsyncClient,
    name: str,
    url: str,
) -> str | None:
    """Download one sheet's CSV text. Returns None on any transport or HTTP error."""
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        logger.warning("Error fetching %s: %s", name, exc)
        return None

    if not response.is_success:
        logger.warning("Failed to fetch %s: HTTP %d", name, response.status_code)
        return None

    return response.text


async def fetch_sheet_texts(
    sources: Mapping[str, str],
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, str | None]:
    """Fetch every sheet concurrently and wait for all of them to settle.

    Parameters
    ----------
    sources : Sheet name -> CSV export URL.
    timeout : Per-request timeout in seconds. Defaults to config.FETCH_TIMEOUT.
    transport : Optional httpx transport (tests pass an httpx.MockTransport).

    Returns
    -------
    Dict mapping each sheet name to its CSV text, or None where the fetch failed.
    """
    names = list(sources)
    async with httpx.AsyncClient(
        timeout=timeout or FETCH_TIMEOUT,
        follow_redirects=True,
        transport=transport,
    ) as client:
        texts = await asyncio.gather(
            *(fetch_sheet_text(client, name, sources[name]) for name in names)
        )
    return dict(zip(names, texts))


def parse_sheet_csv(name: str, text: str | None) -> list[SheetRow]:
    """Parse CSV text into row dicts (header -> cell text).

    Every cell is kept as a string and empty cells stay as "". Header text is
    kept verbatim; some legacy headers carry trailing spaces. Columns with a
    blank header and blank lines are skipped. Empty or unparseable text
    yields an empty list.
    """
    if text is None or not text.strip():
        return []

    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError):
        logger.exception("Parse error for %s", name)
        return []

    # pandas names blank header cells "Unnamed: N"; those columns carry no item
    df.columns = [str(c) for c in df.columns]
    df = df.loc[:, ~df.columns.str.match(_BLANK_HEADER)]
    rows = df.to_dict(orient="records")
    logger.info("Loaded %d rows for %s", len(rows), name)
    return rows


def load_all_sheets(
    sources: Mapping[str, str] | None = None,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SheetDataset:
    """Run one fetch cycle and return sheet name -> parsed rows.

    Failed sheets map to an empty list. The returned dict is built only after
    every fetch has settled.
    """
    sources = SHEET_URLS if sources is None else sources
    logger.info("Fetching data from %d sheets", len(sources))

    texts = asyncio.run(fetch_sheet_texts(sources, timeout=timeout, transport=transport))
    dataset = {name: parse_sheet_csv(name, text) for name, text in texts.items()}

    if not any(dataset.values()):
        logger.warning("No data received from any sheet. Check that the sheets are published.")
    return dataset
