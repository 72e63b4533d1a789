"""
Tests for core/clients/sheets.py

HTTP is served by httpx.MockTransport; coroutines are driven with asyncio.run.
"""
import asyncio
import json

import httpx
import pytest

from tariff_scorecard.core.clients import sheets
from tariff_scorecard.core.variants import VARIANTS


# ── strip_gviz_wrapper / parse_gviz ───────────────────────────────────────────

class TestGvizParsing:
    def test_strips_wrapper(self, house_gviz):
        payload = json.loads(sheets.strip_gviz_wrapper(house_gviz))
        assert payload["status"] == "ok"

    def test_rejects_plain_json(self):
        with pytest.raises(ValueError):
            sheets.strip_gviz_wrapper('{"table": {}}')

    def test_null_cells_become_empty_strings(self, house_gviz):
        records = sheets.parse_gviz(house_gviz)
        assert records[0][6] == ""
        assert records[1][5] == ""

    def test_numbers_stringified(self, house_gviz):
        assert sheets.parse_gviz(house_gviz)[1][7] == "3"

    def test_short_row_kept_as_is(self, house_gviz):
        assert len(sheets.parse_gviz(house_gviz)[1]) == 9

    def test_error_status_raises(self):
        body = (
            "/*O_o*/\ngoogle.visualization.Query.setResponse("
            + json.dumps({"status": "error", "errors": [{"message": "access_denied"}]})
            + ");"
        )
        with pytest.raises(ValueError, match="access_denied"):
            sheets.parse_gviz(body)


# ── fetch_rows ────────────────────────────────────────────────────────────────

class TestFetchRows:
    def test_csv_variant(self, senate_csv, mock_client):
        seen = []

        def handler(request):
            seen.append(request.url.host)
            return httpx.Response(200, text=senate_csv)

        async def run():
            async with mock_client(handler) as client:
                return await sheets.fetch_rows(VARIANTS["senate-2026"], client)

        records = asyncio.run(run())
        assert len(records) == 5
        assert seen == ["docs.google.com"]

    def test_gviz_variant(self, house_gviz, mock_client):
        async def run():
            async with mock_client(lambda request: httpx.Response(200, text=house_gviz)) as client:
                return await sheets.fetch_rows(VARIANTS["house-tariff"], client)

        records = asyncio.run(run())
        assert [r[0] for r in records] == ["Ann Lee", "Bob Ray"]

    def test_http_error_raises(self, mock_client):
        async def run():
            async with mock_client(lambda request: httpx.Response(404)) as client:
                return await sheets.fetch_text("https://example.test/sheet.csv", client)

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(run())
