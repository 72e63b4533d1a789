"""Published scorecard variants.

Each variant pins a spreadsheet URL, a column layout and a grade scale.
URLs can be overridden per variant with SCORECARD_URL_<KEY>, e.g.
SCORECARD_URL_SENATE_2026.
"""

from __future__ import annotations

import os

from .models import ColumnLayout, GradeScale, SourceFormat, VariantConfig

HOUSE_SHEET_ID = "1Kptpi3Rc2DydW4P7hkABFS0IsgOyIoFFixnGBGzNVp4"
HOUSE_SHEET_NAME = "Sheet1"
HOUSE_URL = f"https://docs.google.com/spreadsheets/d/{HOUSE_SHEET_ID}/gviz/tq?tqx=out:json&sheet={HOUSE_SHEET_NAME}"

SENATE_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQaiqHpsgzBh1dcGZCqO0GG1cTa6gfArPxuuo4AhYcrlijksH4aqeRnY2r18FeTwa_1jJojRSCHLu-y"
    "/pub?gid=0&single=true&output=csv"
)

STANDARD_SCALE = GradeScale(
    letters=("A+", "A", "B", "C", "D", "F"),
    labels=("Champion", "Great", "Good", "Okay", "Poor", "Fail"),
)

SENATE_TARIFF_SCALE = GradeScale(
    letters=("A+", "A", "A-", "B", "C", "D", "F"),
    labels=("Champion", "Ally", "Defender", "Good", "Okay", "Poor", "Protectionist"),
)

HOUSE_LAYOUT = ColumnLayout(width=10, responses=(4, 5, 6, 7), final=8, reason=9)

SENATE_LAYOUT = ColumnLayout(width=11, responses=(4, 5, 6, 7), messaging=8, final=9, reason=10)

SENATE_2026_LAYOUT = ColumnLayout(
    width=11, min_width=10, responses=(4, 5, 6, 7), messaging=8, final=9, reason=10,
)

VARIANTS: dict[str, VariantConfig] = {
    "house-tariff": VariantConfig(
        key="house-tariff",
        title="Congressional Tariff Messaging Index",
        url=HOUSE_URL,
        source_format=SourceFormat.GVIZ,
        layout=HOUSE_LAYOUT,
        scale=STANDARD_SCALE,
        response_titles=("Canada", "Mexico", "Liberation Day", "Strategic"),
    ),
    "senate-tariff": VariantConfig(
        key="senate-tariff",
        title="Senate Tariff Messaging Index",
        url=SENATE_CSV_URL,
        source_format=SourceFormat.CSV,
        layout=SENATE_LAYOUT,
        scale=SENATE_TARIFF_SCALE,
        response_titles=("S.J.Res. 81", "S.J.Res. 77", "S.J.Res. 88", "232/301"),
    ),
    "senate-2026": VariantConfig(
        key="senate-2026",
        title="Senate Tariff Messaging Index 2026",
        url=SENATE_CSV_URL,
        source_format=SourceFormat.CSV,
        layout=SENATE_2026_LAYOUT,
        scale=STANDARD_SCALE,
        response_titles=("S.J.Res. 81", "S.J.Res. 77", "S.J.Res. 88", "Section 232"),
    ),
}

DEFAULT_VARIANT = "senate-2026"


def get_variant(key: str) -> VariantConfig:
    """Look up a variant by key, applying any URL override from the environment."""
    config = VARIANTS.get(key)
    if config is None:
        raise ValueError(f"Unknown scorecard variant: {key}. Choose one of: {', '.join(VARIANTS)}")
    override = os.environ.get(f"SCORECARD_URL_{key.upper().replace('-', '_')}")
    if override:
        return config.model_copy(update={"url": override})
    return config


def get_http_timeout() -> float:
    return float(os.environ.get("SCORECARD_HTTP_TIMEOUT", "30"))
