"""Tariff Scorecard MCP Server.

FastMCP server exposing the published scorecards as read-only tools and an
HTML table resource.
Run: tariff-scorecard-mcp
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .core.grading import rank
from .core.models import Scorecard, ScoredRow
from .core.scorecard import (
    DEFAULT_SORT_COLUMN,
    filter_rows,
    load_scorecard,
    row_detail,
    sort_rows,
)
from .core.variants import DEFAULT_VARIANT, VARIANTS, get_variant
from .page import render_page

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)

# Each variant is fetched once per process and then served from memory.
_scorecards: dict[str, Scorecard] = {}
_load_lock = asyncio.Lock()


async def get_scorecard(variant: str) -> Scorecard:
    """Load a variant on first use; later calls return the cached scorecard."""
    config = get_variant(variant)
    async with _load_lock:
        if config.key not in _scorecards:
            _scorecards[config.key] = await load_scorecard(config)
        return _scorecards[config.key]


def reset_cache() -> None:
    _scorecards.clear()


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging; scorecards load lazily on the first tool call."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        yield
    finally:
        reset_cache()


mcp = FastMCP(
    "Tariff Scorecard",
    instructions="Look up how legislators are graded on tariff messaging. Sortable, filterable grades with a per-legislator detail view.",
    lifespan=lifespan,
)


def _row_to_dict(scored: ScoredRow) -> dict:
    row = scored.row
    return {
        "row_id": row.row_id,
        "name": row.name,
        "party_state": row.party_state,
        "party": row.party,
        "state": row.state,
        "cells": [
            {
                "column": c.column,
                "title": c.title,
                "value": c.value,
                "sort_key": c.sort_key,
                "html": c.fragment.html,
            }
            for c in scored.cells
        ],
        "reason": row.reason,
    }


# ─── HTML Resource ───────────────────────────────────────────────────────────


@mcp.resource("scorecard://{variant}/table", mime_type="text/html")
async def scorecard_page(variant: str) -> str:
    """The full scorecard as an HTML page with rank-keyed, sortable cells."""
    return render_page(await get_scorecard(variant))


# ─── Tool 1: Variants ────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def scorecard_variants() -> dict:
    """List the published scorecards this server can load."""
    return {
        "title": "Scorecard Variants",
        "default": DEFAULT_VARIANT,
        "variants": [
            {
                "key": v.key,
                "title": v.title,
                "format": v.source_format.value,
                "grades": list(v.scale.letters),
            }
            for v in VARIANTS.values()
        ],
    }


# ─── Tool 2: Table ───────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def scorecard_table(
    variant: str = DEFAULT_VARIANT,
    search: str = "",
    party: str = "",
    state: str = "",
    grade: str = "",
    sort_by: str = DEFAULT_SORT_COLUMN,
    descending: bool = False,
) -> dict:
    """Scorecard rows with rank sort keys and rendered grade fragments.

    Args:
        variant: 'house-tariff', 'senate-tariff' or 'senate-2026'.
        search: Free-text search over names, states, reasons and grades.
        party: Party prefix, e.g. 'D', 'R', 'I'.
        state: Two-letter state, e.g. 'DE'.
        grade: Final-grade prefix, e.g. 'A' matches A+, A and A-.
        sort_by: Column id to sort on. Default 'final'.
        descending: Reverse the sort order.
    """
    scorecard = await get_scorecard(variant)
    rows = filter_rows(scorecard, search=search, party=party, state=state, grade=grade)
    try:
        rows = sort_rows(rows, sort_by, descending)
    except KeyError:
        raise ValueError(f"Unknown sort column: {sort_by}")

    if scorecard.is_empty:
        summary = "No records available — the source sheet could not be loaded or is empty."
    else:
        summary = f"{len(rows)} of {len(scorecard.rows)} legislators shown."

    return {
        "title": scorecard.title,
        "variant": scorecard.variant,
        "columns": scorecard.columns,
        "rows": [_row_to_dict(r) for r in rows],
        "total_rows": len(scorecard.rows),
        "summary": summary,
    }


# ─── Tool 3: Detail ──────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def scorecard_detail(row_id: int, variant: str = DEFAULT_VARIANT) -> dict:
    """Every grade, verdict and the reasoning for one legislator.

    Args:
        row_id: The row_id returned by scorecard_table.
        variant: Which scorecard the row belongs to.
    """
    scorecard = await get_scorecard(variant)
    try:
        detail = row_detail(scorecard, row_id)
    except KeyError:
        raise ValueError(f"No row {row_id} in the {variant} scorecard")

    return {
        "title": detail.name,
        "party_state": detail.party_state,
        "party": detail.party,
        "state": detail.state,
        "criteria": [
            {"title": c.title, "value": c.value, "html": c.fragment.html}
            for c in detail.cells
        ],
        "overall": {
            "grade": detail.overall.text,
            "label": detail.overall.label,
            "html": detail.overall.html,
        },
        "reason": detail.reason,
    }


# ─── Tool 4: Facets ──────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def scorecard_facets(variant: str = DEFAULT_VARIANT) -> dict:
    """Party and state values present in a scorecard, for building filters."""
    scale = get_variant(variant).scale
    scorecard = await get_scorecard(variant)
    return {
        "title": f"{scorecard.title} — Filters",
        "parties": scorecard.parties,
        "states": scorecard.states,
        "grades": sorted({s.row.final for s in scorecard.rows}, key=lambda g: rank(g, scale)),
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
