"""Grade ranking and rendering.

Every function takes the variant's GradeScale explicitly. Ranking is total:
scale letters rank 1..n best to worst, anything unrecognized ranks n + 1,
and the No Record sentinel ranks n + 2 so it always sorts last.
"""

from __future__ import annotations

from .models import NO_RECORD, DisplayFragment, FragmentKind, GradeScale
from .normalize import canonical_grade

NO_RECORD_GLYPH = "–"
# Hover text on the grey circle; a blank grade also covers a newly seated senator (NS).
NO_RECORD_TITLE = "No Record / New Senator"

PASS_RANK = 0
FAIL_RANK = 1
PASS_FAIL_NO_RECORD_RANK = 2


def css_key(grade: str) -> str:
    """CSS-safe key for a grade: 'A+' -> 'Aplus', 'A-' -> 'Aminus'."""
    return grade.replace("+", "plus").replace("-", "minus").replace(" ", "")


def unranked(scale: GradeScale) -> int:
    return len(scale.letters) + 1


def no_record_rank(scale: GradeScale) -> int:
    return len(scale.letters) + 2


def rank(grade: str, scale: GradeScale) -> int:
    grade = canonical_grade(grade)
    if grade == NO_RECORD:
        return no_record_rank(scale)
    pos = scale.position(grade)
    if pos is None:
        return unranked(scale)
    return pos + 1


def render(grade: str, scale: GradeScale) -> DisplayFragment:
    """Coloured grade circle, or the grey no-record placeholder."""
    grade = canonical_grade(grade)
    if grade == NO_RECORD:
        return DisplayFragment(
            kind=FragmentKind.GRADE,
            css_class="grade-circle no-record",
            text=NO_RECORD_GLYPH,
            title=NO_RECORD_TITLE,
        )
    return DisplayFragment(
        kind=FragmentKind.GRADE,
        css_class=f"grade-circle grade-{css_key(grade)}",
        text=grade,
    )


def _verdict(value: str) -> str:
    return (value or "").strip().lower()


def pass_fail_rank(value: str) -> int:
    verdict = _verdict(value)
    if verdict == "pass":
        return PASS_RANK
    if verdict == "fail":
        return FAIL_RANK
    return PASS_FAIL_NO_RECORD_RANK


def render_pass_fail(value: str) -> DisplayFragment:
    """Pass / Fail label. Anything that is neither renders as no record."""
    verdict = _verdict(value)
    if verdict == "pass":
        return DisplayFragment(kind=FragmentKind.PASS_FAIL, css_class="pass", text="Pass")
    if verdict == "fail":
        return DisplayFragment(kind=FragmentKind.PASS_FAIL, css_class="fail", text="Fail")
    return DisplayFragment(
        kind=FragmentKind.PASS_FAIL,
        css_class="grade-circle no-record",
        text=NO_RECORD_GLYPH,
        title=NO_RECORD,
    )


def render_overall(grade: str, scale: GradeScale) -> DisplayFragment:
    """Overall pill: rank-coloured circle plus the scale's label for the grade."""
    grade = canonical_grade(grade)
    if grade == NO_RECORD:
        return DisplayFragment(
            kind=FragmentKind.OVERALL,
            css_class="overall-pill overall-no-record",
            text=NO_RECORD_GLYPH,
            label=NO_RECORD,
        )
    label = scale.label_for(grade)
    return DisplayFragment(
        kind=FragmentKind.OVERALL,
        css_class=f"overall-pill overall-{css_key(grade)}",
        text=grade,
        label=label if label is not None else grade,
    )
