import asyncio
import logging
import time
from datetime import datetime, timezone

import httpx
from flask import Blueprint, Response, current_app, jsonify

from ..loaders.sheets import fetch_sheet_texts

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _proxy_state() -> dict:
    return current_app.extensions["sheet_proxy"]


def _fetch_sheet(url: str) -> str:
    state = _proxy_state()
    with httpx.Client(
        timeout=current_app.config["FETCH_TIMEOUT"],
        follow_redirects=True,
        transport=state.get("transport"),
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        return response.text


def _csv_response(text: str) -> Response:
    return Response(text, mimetype="text/csv")


@api_bp.get("/sheet/<name>")
def get_sheet(name: str):
    sheet_urls = current_app.config["SHEET_URLS"]
    url = sheet_urls.get(name)
    if url is None:
        return jsonify({"error": "Sheet not found"}), 404

    cache = _proxy_state()["cache"]
    cached = cache.get(name)
    if cached is not None:
        logger.info("Returning cached data for %s", name)
        return _csv_response(cached)

    try:
        logger.info("Fetching fresh data for %s", name)
        text = _fetch_sheet(url)
    except httpx.HTTPError:
        logger.exception("Error fetching %s", name)
        return jsonify({"error": f"Failed to fetch {name}"}), 500

    cache.set(name, text)
    logger.info("Data fetched and cached for %s", name)
    return _csv_response(text)


@api_bp.get("/sheets/all")
def get_all_sheets():
    sheet_urls = current_app.config["SHEET_URLS"]
    logger.info("Fetching all sheets")
    texts = asyncio.run(fetch_sheet_texts(
        sheet_urls,
        timeout=current_app.config["FETCH_TIMEOUT"],
        transport=_proxy_state().get("transport"),
    ))

    failed = [name for name, text in texts.items() if text is None]
    if failed:
        logger.error("Error fetching all sheets: %s failed", ", ".join(failed))
        return jsonify({"error": "Failed to fetch sheets"}), 500

    logger.info("All sheets fetched successfully")
    return jsonify(texts)


@api_bp.get("/health")
def health():
    state = _proxy_state()
    return jsonify({
        "status": "ok",
        "uptime": time.monotonic() - state["started_at"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "sheets": list(current_app.config["SHEET_URLS"]),
        "cachedSheets": state["cache"].names(),
    })
