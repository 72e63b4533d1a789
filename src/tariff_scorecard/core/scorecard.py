"""Scorecard assembly — rows joined with rank keys, fragments and facets.

Also owns the operations a table display performs over the loaded data:
free-text search, party/state/grade filters, rank-keyed sorting and the
per-row detail payload.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import httpx

from .clients import sheets
from .grading import pass_fail_rank, rank, render, render_overall, render_pass_fail
from .models import Cell, Row, RowDetail, Scorecard, ScoredRow, VariantConfig
from .normalize import normalize_rows

logger = logging.getLogger(__name__)

DEFAULT_SORT_COLUMN = "final"


def table_columns(variant: VariantConfig) -> list[tuple[str, str]]:
    """(column id, title) for every ranked column, in display order."""
    columns = list(variant.grade_columns)
    columns.insert(1, ("authority", "Congressional Authority"))
    columns.append(("final", "Final Grade"))
    return columns


def _score_cell(row: Row, column: str, title: str, variant: VariantConfig) -> Cell:
    value = row.value_of(column)
    if column == "authority":
        sort_key, fragment = pass_fail_rank(value), render_pass_fail(value)
    elif column == "final":
        sort_key, fragment = rank(value, variant.scale), render_overall(value, variant.scale)
    else:
        sort_key, fragment = rank(value, variant.scale), render(value, variant.scale)
    return Cell(column=column, title=title, value=value, sort_key=sort_key, fragment=fragment)


def score_row(row: Row, variant: VariantConfig) -> ScoredRow:
    """Attach a sort key and display fragment to every ranked column of a row."""
    cells = [_score_cell(row, column, title, variant) for column, title in table_columns(variant)]
    return ScoredRow(row=row, cells=cells)


def build_scorecard(rows: Iterable[Row], variant: VariantConfig) -> Scorecard:
    scored = [score_row(r, variant) for r in rows]
    parties = sorted({s.row.party for s in scored if s.row.party})
    states = sorted({s.row.state for s in scored if s.row.state})
    return Scorecard(
        variant=variant.key,
        title=variant.title,
        columns=[title for _, title in table_columns(variant)],
        rows=scored,
        parties=parties,
        states=states,
    )


async def load_scorecard(variant: VariantConfig, client: Optional[httpx.AsyncClient] = None) -> Scorecard:
    """Fetch, normalize and score a variant. Any fetch failure yields an empty scorecard."""
    try:
        records = await sheets.fetch_rows(variant, client)
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Failed to load %s scorecard from %s: %s", variant.key, variant.url, exc)
        return build_scorecard([], variant)

    rows = normalize_rows(records, variant.layout)
    logger.info("Loaded %d rows for %s", len(rows), variant.key)
    return build_scorecard(rows, variant)


def _search_text(scored: ScoredRow) -> str:
    row = scored.row
    parts = [row.name, row.party_state, row.reason]
    parts.extend(c.value for c in scored.cells)
    return " ".join(parts).lower()


def filter_rows(
    scorecard: Scorecard,
    search: str = "",
    party: str = "",
    state: str = "",
    grade: str = "",
) -> list[ScoredRow]:
    """Rows matching every non-empty filter.

    search: case-insensitive substring over name, party/state, reason and grades.
    party: prefix of the party/state string ("D" matches "D / DE").
    state: exact state facet.
    grade: prefix of the final grade ("A" matches A+, A and A-).
    """
    needle = search.strip().lower()
    party = party.strip()
    state = state.strip()
    grade = grade.strip()

    matched = []
    for scored in scorecard.rows:
        row = scored.row
        if needle and needle not in _search_text(scored):
            continue
        if party and not row.party_state.startswith(party):
            continue
        if state and row.state != state:
            continue
        if grade and not row.final.startswith(grade):
            continue
        matched.append(scored)
    return matched


def sort_rows(
    rows: Iterable[ScoredRow],
    column: str = DEFAULT_SORT_COLUMN,
    descending: bool = False,
) -> list[ScoredRow]:
    """Order rows by a column's numeric sort key; 'name', 'state' and 'party_state' sort lexically."""
    rows = list(rows)
    if column == "name":
        return sorted(rows, key=lambda s: s.row.name.lower(), reverse=descending)
    if column == "state":
        return sorted(rows, key=lambda s: s.row.state.lower(), reverse=descending)
    if column == "party_state":
        return sorted(rows, key=lambda s: s.row.party_state.lower(), reverse=descending)
    return sorted(rows, key=lambda s: s.cell(column).sort_key, reverse=descending)


def row_detail(scorecard: Scorecard, row_id: int) -> RowDetail:
    """Everything the detail view shows for one row. Raises KeyError if unknown."""
    scored = scorecard.get(row_id)
    row = scored.row
    return RowDetail(
        row_id=row.row_id,
        name=row.name,
        party_state=row.party_state,
        party=row.party,
        state=row.state,
        cells=[c for c in scored.cells if c.column != "final"],
        overall=scored.cell("final").fragment,
        reason=row.reason,
    )


class DetailView:
    """Open/closed state of the detail view. Both transitions are idempotent."""

    def __init__(self, scorecard: Scorecard):
        self._scorecard = scorecard
        self._detail: Optional[RowDetail] = None

    @property
    def is_open(self) -> bool:
        return self._detail is not None

    @property
    def detail(self) -> Optional[RowDetail]:
        return self._detail

    def open(self, row_id: int) -> RowDetail:
        if self._detail is None or self._detail.row_id != row_id:
            self._detail = row_detail(self._scorecard, row_id)
        return self._detail

    def close(self) -> None:
        self._detail = None
