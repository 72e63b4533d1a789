"""Row normalization — raw spreadsheet records into fixed-width Rows.

Handles quoted-comma CSV splitting, header detection, padding of short
records, canonicalization of blank grades to the "No Record" sentinel,
and party/state facet extraction.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterable, Optional

from .models import NO_RECORD, ColumnLayout, Row

logger = logging.getLogger(__name__)

# Spellings a sheet uses for "no grade"; NS marks a new senator.
BLANK_GRADES = {"", "-", "–", "no record", "ns"}


def _clean_field(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        value = value[1:-1]
    return value.strip()


def split_line(line: str) -> list[str]:
    """Split one CSV line on commas that are not inside double quotes.

    >>> split_line('"Smith, John",A,B')
    ['Smith, John', 'A', 'B']
    """
    try:
        fields = next(csv.reader([line], skipinitialspace=True))
    except StopIteration:
        return []
    return [_clean_field(f) for f in fields]


def parse_csv(text: str) -> list[list[str]]:
    """Parse a CSV document into records, skipping blank lines."""
    records = []
    for fields in csv.reader(io.StringIO(text), skipinitialspace=True):
        cleaned = [_clean_field(f) for f in fields]
        if not any(cleaned):
            continue
        records.append(cleaned)
    return records


def canonical_grade(value: Optional[str]) -> str:
    """Map every blank/placeholder spelling to the single NO_RECORD sentinel."""
    text = (value or "").strip()
    if text.lower() in BLANK_GRADES:
        return NO_RECORD
    return text


def is_header(record: list[str]) -> bool:
    return bool(record) and "name" in (record[0] or "").lower()


def extract_facets(party_state: str) -> tuple[str, str]:
    """Split a composite party/state string into (party, state).

    "D / DE" -> ("D", "DE"), "D-CO" -> ("D", "CO"), "R" -> ("R", "").
    """
    text = (party_state or "").strip()
    party = text[:1]
    for delimiter in ("/", "-"):
        if delimiter in text:
            return party, text.rsplit(delimiter, 1)[1].strip()
    return party, ""


# Header titles recognized when a sheet is narrower than its variant's layout.
NAME_TITLES = {"name", "legislator", "member", "senator"}
PARTY_STATE_TITLES = {"party", "state", "party/state", "party / state", "district"}
PRE_TRUMP_TITLES = {"pre-trump", "pre trump"}
AUTHORITY_TITLES = {"authority", "congressional authority", "pass/fail"}
MESSAGING_TITLES = {"messaging"}
FINAL_TITLES = {"grade", "final", "final grade", "overall", "overall grade"}
REASON_TITLES = {"reason", "reasoning", "explanation", "description"}


def _find_title(titles: list[str], names: set[str]) -> Optional[int]:
    for i, title in enumerate(titles):
        if title in names:
            return i
    return None


def resolve_layout(header: list[str], layout: ColumnLayout) -> ColumnLayout:
    """Read a narrower, labelled sheet by its header titles instead of by position.

    Applies only when the header has fewer columns than the layout and names a
    final-grade column. Columns the header does not name are absent (No Record),
    and the minimum-width check is lifted since the header fixes the shape.
    """
    if len(header) >= layout.width:
        return layout
    titles = [(h or "").strip().lower() for h in header]
    final = _find_title(titles, FINAL_TITLES)
    if final is None:
        return layout

    name = _find_title(titles, NAME_TITLES)
    party_state = _find_title(titles, PARTY_STATE_TITLES)
    return ColumnLayout(
        width=len(header),
        min_width=None,
        name=name if name is not None else 0,
        party_state=party_state if party_state is not None else 1,
        pre_trump=_find_title(titles, PRE_TRUMP_TITLES),
        authority=_find_title(titles, AUTHORITY_TITLES),
        responses=(None,) * len(layout.responses),
        messaging=_find_title(titles, MESSAGING_TITLES),
        final=final,
        reason=_find_title(titles, REASON_TITLES),
    )


def _field(fields: list[str], index: Optional[int]) -> str:
    if index is None or index >= len(fields):
        return ""
    return fields[index]


def normalize_row(record: list[str], layout: ColumnLayout, row_id: int) -> Optional[Row]:
    """Build a Row from one raw record, or None if it is too short to be viable."""
    if layout.min_width is not None and len(record) < layout.min_width:
        return None

    fields = [(f if f is not None else "").strip() for f in record]
    if len(fields) < layout.width:
        fields.extend([""] * (layout.width - len(fields)))

    party_state = _field(fields, layout.party_state)
    party, state = extract_facets(party_state)

    return Row(
        row_id=row_id,
        name=_field(fields, layout.name),
        party_state=party_state,
        party=party,
        state=state,
        pre_trump=canonical_grade(_field(fields, layout.pre_trump)),
        authority=canonical_grade(_field(fields, layout.authority)),
        responses=tuple(canonical_grade(_field(fields, i)) for i in layout.responses),
        messaging=canonical_grade(_field(fields, layout.messaging)) if layout.messaging is not None else None,
        final=canonical_grade(_field(fields, layout.final)),
        reason=_field(fields, layout.reason),
    )


def normalize_rows(records: Iterable[list[str]], layout: ColumnLayout) -> list[Row]:
    """Normalize a whole sheet.

    A leading header record is skipped if present; a narrower labelled sheet
    is read by its header titles (see resolve_layout).
    """
    records = [r for r in records if r and any((f or "").strip() for f in r)]
    if records and is_header(records[0]):
        layout = resolve_layout(records[0], layout)
        records = records[1:]

    rows: list[Row] = []
    dropped = 0
    for record in records:
        row = normalize_row(record, layout, row_id=len(rows))
        if row is None:
            dropped += 1
            logger.debug("Dropping short record (%d fields): %r", len(record), record[:2])
            continue
        rows.append(row)

    if dropped:
        logger.info("Dropped %d malformed record(s) below %s fields", dropped, layout.min_width)
    return rows
