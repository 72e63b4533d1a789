"""Google Sheets client — published CSV and gviz JSON endpoints.

No authentication required. The CSV endpoint serves a published sheet as-is;
the gviz endpoint wraps its JSON in a JavaScript callback that has to be
stripped before decoding.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

import httpx

from ..models import SourceFormat, VariantConfig
from ..normalize import parse_csv
from ..variants import get_http_timeout

logger = logging.getLogger(__name__)

GVIZ_PREFIX = "google.visualization.Query.setResponse("


async def fetch_text(url: str, client: Optional[httpx.AsyncClient] = None) -> str:
    """GET a URL and return its body, raising on non-2xx responses."""
    if client is not None:
        response = await client.get(url, follow_redirects=True)
        response.raise_for_status()
        return response.text

    timeout = httpx.Timeout(get_http_timeout(), connect=10.0)
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.text


def strip_gviz_wrapper(body: str) -> str:
    """Return the JSON payload inside `/*O_o*/ google...setResponse( ... );`."""
    start = body.find(GVIZ_PREFIX)
    if start == -1:
        raise ValueError("Response is not a gviz envelope")
    start += len(GVIZ_PREFIX)
    end = body.rfind(")")
    if end < start:
        raise ValueError("Unterminated gviz envelope")
    return body[start:end]


def _cell_value(cell: Optional[dict]) -> str:
    if not cell or cell.get("v") is None:
        return ""
    value = cell["v"]
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return value if isinstance(value, str) else str(value)


def parse_gviz(body: str) -> list[list[str]]:
    """Decode a gviz response into records of display strings."""
    data = json.loads(strip_gviz_wrapper(body))
    if data.get("status") == "error":
        errors = "; ".join(e.get("detailed_message") or e.get("message", "") for e in data.get("errors", []))
        raise ValueError(f"gviz query failed: {errors}")

    records = []
    for row in data.get("table", {}).get("rows", []):
        records.append([_cell_value(c) for c in row.get("c") or []])
    return records


async def fetch_csv_rows(url: str, client: Optional[httpx.AsyncClient] = None) -> list[list[str]]:
    text = await fetch_text(url, client)
    records = parse_csv(text)
    logger.info("Fetched %d CSV records from %s", len(records), url)
    return records


async def fetch_gviz_rows(url: str, client: Optional[httpx.AsyncClient] = None) -> list[list[str]]:
    body = await fetch_text(url, client)
    records = parse_gviz(body)
    logger.info("Fetched %d gviz records from %s", len(records), url)
    return records


async def fetch_rows(variant: VariantConfig, client: Optional[httpx.AsyncClient] = None) -> list[list[str]]:
    """Fetch raw records for a variant in whatever format it is published in."""
    if variant.source_format == SourceFormat.GVIZ:
        return await fetch_gviz_rows(variant.url, client)
    return await fetch_csv_rows(variant.url, client)
