"""
Pytest fixtures for tariff scorecard tests.

Provides sample sheet payloads in both published formats (CSV and gviz JSON)
and a factory for httpx clients backed by MockTransport, so no test touches
the network.
"""
import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))


SENATE_CSV = (
    "Name,Party/State,Pre-Trump,Authority,SJ81,SJ77,SJ88,Sec232,Messaging,Final,Reason\n"
    '"Coons, Chris",D / DE,A,Pass,A+,A,-,NS,B,A+,"Voted for all, spoke often"\n'
    "Jane Smith,R / TX,F,fail,F,F,F,F,D,F,\n"
    "\n"
    "John Doe,I / ME,,,B,C,,–,No Record,B,\n"
    "Short,Row,A\n"
)


def _gviz_envelope(payload: dict) -> str:
    return "/*O_o*/\ngoogle.visualization.Query.setResponse(" + json.dumps(payload) + ");"


HOUSE_GVIZ = _gviz_envelope({
    "version": "0.6",
    "reqId": "0",
    "status": "ok",
    "table": {
        "cols": [{"id": "A", "label": "Name", "type": "string"}],
        "rows": [
            {"c": [
                {"v": "Ann Lee"}, {"v": "D / CA"}, {"v": "A"}, {"v": "Pass"},
                {"v": "A+"}, {"v": "A"}, None, {"v": "B"}, {"v": "A"}, {"v": "Strong record"},
            ]},
            {"c": [
                {"v": "Bob Ray"}, {"v": "R / OH"}, {"v": "C"}, {"v": "Fail"},
                {"v": "F"}, {"v": None}, {"v": "D"}, {"v": 3.0}, {"v": "F"},
            ]},
        ],
    },
})


@pytest.fixture
def senate_csv():
    return SENATE_CSV


@pytest.fixture
def house_gviz():
    return HOUSE_GVIZ


@pytest.fixture
def mock_client():
    """Build an AsyncClient whose every request is answered by `handler`."""
    def _make(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def senate(senate_csv):
    """The senate-2026 scorecard built from SENATE_CSV."""
    from tariff_scorecard.core.normalize import normalize_rows, parse_csv
    from tariff_scorecard.core.scorecard import build_scorecard
    from tariff_scorecard.core.variants import VARIANTS

    variant = VARIANTS["senate-2026"]
    return build_scorecard(normalize_rows(parse_csv(senate_csv), variant.layout), variant)
