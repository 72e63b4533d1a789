"""Pydantic data models — the shared scorecard objects.

Rows, grade scales, column layouts and display fragments flow between the
normalizer, the grader, the HTML renderer and the MCP tools through these.
"""

from __future__ import annotations

from enum import Enum
from html import escape
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

NO_RECORD = "No Record"


class SourceFormat(str, Enum):
    """Wire format the spreadsheet is published in."""

    CSV = "csv"
    GVIZ = "gviz"


class FragmentKind(str, Enum):
    """Which renderer produced a display fragment."""

    GRADE = "grade"
    PASS_FAIL = "pass_fail"
    OVERALL = "overall"


class GradeScale(BaseModel):
    """Ordered letter grades (best first) and their overall-pill labels."""

    model_config = ConfigDict(frozen=True)

    letters: tuple[str, ...]
    labels: tuple[str, ...]

    def position(self, grade: str) -> Optional[int]:
        try:
            return self.letters.index(grade)
        except ValueError:
            return None

    def label_for(self, grade: str) -> Optional[str]:
        pos = self.position(grade)
        if pos is None or pos >= len(self.labels):
            return None
        return self.labels[pos]


class ColumnLayout(BaseModel):
    """Positional layout of one spreadsheet row. None marks a column the sheet lacks."""

    model_config = ConfigDict(frozen=True)

    width: int
    min_width: Optional[int] = None
    name: int = 0
    party_state: int = 1
    pre_trump: Optional[int] = 2
    authority: Optional[int] = 3
    responses: tuple[Optional[int], ...]
    messaging: Optional[int] = None
    final: int
    reason: Optional[int]


class VariantConfig(BaseModel):
    """Everything that differs between the published scorecards."""

    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    url: str
    source_format: SourceFormat
    layout: ColumnLayout
    scale: GradeScale
    response_titles: tuple[str, ...]

    @property
    def grade_columns(self) -> list[tuple[str, str]]:
        """(column id, column title) for every grade-circle column, in display order."""
        columns = [("pre_trump", "Pre-Trump")]
        for i, title in enumerate(self.response_titles):
            columns.append((f"response_{i}", title))
        if self.layout.messaging is not None:
            columns.append(("messaging", "Messaging"))
        return columns


class Row(BaseModel):
    """One legislator, normalized. Built once per fetch and never mutated."""

    model_config = ConfigDict(frozen=True)

    row_id: int
    name: str
    party_state: str
    party: str = ""
    state: str = ""
    pre_trump: str = NO_RECORD
    authority: str = NO_RECORD
    responses: tuple[str, ...] = ()
    messaging: Optional[str] = None
    final: str = NO_RECORD
    reason: str = ""

    def value_of(self, column: str) -> str:
        """Raw field value for a column id such as 'final' or 'response_2'."""
        if column.startswith("response_"):
            return self.responses[int(column.split("_", 1)[1])]
        value = getattr(self, column)
        return value if value is not None else NO_RECORD


class DisplayFragment(BaseModel):
    """Semantic rendering of one cell: CSS class plus literal text."""

    model_config = ConfigDict(frozen=True)

    kind: FragmentKind
    css_class: str
    text: str
    label: Optional[str] = None
    title: Optional[str] = None

    @property
    def html(self) -> str:
        title_attr = f' title="{escape(self.title)}"' if self.title else ""
        if self.kind == FragmentKind.OVERALL:
            return (
                f'<span class="{escape(self.css_class)}">'
                f'<span class="grade-circle">{escape(self.text)}</span>'
                f'<span class="grade-label">{escape(self.label or "")}</span>'
                "</span>"
            )
        return f'<span class="{escape(self.css_class)}"{title_attr}>{escape(self.text)}</span>'


class Cell(BaseModel):
    """A sortable cell: raw value, explicit numeric sort key, and its fragment."""

    column: str
    title: str
    value: str
    sort_key: int
    fragment: DisplayFragment


class ScoredRow(BaseModel):
    """A row together with its rendered, rank-keyed cells."""

    row: Row
    cells: list[Cell]

    def cell(self, column: str) -> Cell:
        for c in self.cells:
            if c.column == column:
                return c
        raise KeyError(column)


class Scorecard(BaseModel):
    """The whole dataset for one variant, plus the facet values for filters."""

    variant: str
    title: str
    columns: list[str] = Field(default_factory=list)
    rows: list[ScoredRow] = Field(default_factory=list)
    parties: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def get(self, row_id: int) -> ScoredRow:
        for scored in self.rows:
            if scored.row.row_id == row_id:
                return scored
        raise KeyError(row_id)


class RowDetail(BaseModel):
    """Every rendered fragment for one selected row (the detail view payload)."""

    row_id: int
    name: str
    party_state: str
    party: str
    state: str
    cells: list[Cell]
    overall: DisplayFragment
    reason: str
