"""HTML rendering of a loaded scorecard.

Produces table markup for a browser table widget: every sortable cell
carries its rank in a data-order attribute so the widget sorts by rank
instead of lexically. Styling is left to the host page.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .core.models import Scorecard, ScoredRow


@lru_cache(maxsize=1)
def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _context(scorecard: Scorecard, rows: Optional[list[ScoredRow]] = None) -> dict:
    return {
        "scorecard": scorecard,
        "rows": scorecard.rows if rows is None else rows,
        "headers": ["Name", "Party / State", *scorecard.columns, "Reason"],
    }


def render_table(scorecard: Scorecard, rows: Optional[list[ScoredRow]] = None) -> str:
    """Render the scorecard (or a filtered subset of its rows) as a <table>."""
    return _template_env().get_template("table.html").render(_context(scorecard, rows))


def render_filters(scorecard: Scorecard) -> str:
    """Party and state <select> elements populated from the scorecard facets."""
    return _template_env().get_template("filters.html").render(scorecard=scorecard)


def render_page(scorecard: Scorecard) -> str:
    """A complete HTML document: title, filters and the table."""
    return _template_env().get_template("page.html").render(_context(scorecard))
