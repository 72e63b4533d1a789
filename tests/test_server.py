"""
Tests for server.py

The tool functions are called directly; load_scorecard is replaced so the
cache and filtering paths run without any HTTP.
"""
import asyncio

import pytest

from tariff_scorecard import server


@pytest.fixture(autouse=True)
def fake_loader(monkeypatch, senate):
    calls = []

    async def _load(config):
        calls.append(config.key)
        return senate

    server.reset_cache()
    monkeypatch.setattr(server, "load_scorecard", _load)
    yield calls
    server.reset_cache()


class TestCache:
    def test_loaded_once(self, fake_loader):
        async def run():
            await server.get_scorecard("senate-2026")
            await server.get_scorecard("senate-2026")

        asyncio.run(run())
        assert fake_loader == ["senate-2026"]

    def test_unknown_variant(self):
        with pytest.raises(ValueError, match="Unknown scorecard variant"):
            asyncio.run(server.get_scorecard("assembly"))


class TestTools:
    def test_variants(self):
        result = asyncio.run(server.scorecard_variants())
        assert [v["key"] for v in result["variants"]] == ["house-tariff", "senate-tariff", "senate-2026"]
        assert result["default"] == "senate-2026"

    def test_table_sorted_by_final(self):
        result = asyncio.run(server.scorecard_table())
        assert [r["name"] for r in result["rows"]] == ["Coons, Chris", "John Doe", "Jane Smith"]
        assert result["summary"] == "3 of 3 legislators shown."

    def test_table_filtered(self):
        result = asyncio.run(server.scorecard_table(state="TX"))
        assert [r["name"] for r in result["rows"]] == ["Jane Smith"]
        assert result["total_rows"] == 3

    def test_table_bad_sort(self):
        with pytest.raises(ValueError, match="Unknown sort column"):
            asyncio.run(server.scorecard_table(sort_by="bogus"))

    def test_detail(self):
        result = asyncio.run(server.scorecard_detail(0))
        assert result["title"] == "Coons, Chris"
        assert result["overall"]["label"] == "Champion"
        assert result["criteria"][1]["title"] == "Congressional Authority"

    def test_detail_unknown_row(self):
        with pytest.raises(ValueError, match="No row 42"):
            asyncio.run(server.scorecard_detail(42))

    def test_facets(self):
        result = asyncio.run(server.scorecard_facets())
        assert result["states"] == ["DE", "ME", "TX"]
        assert result["grades"] == ["A+", "B", "F"]

    def test_page_resource(self):
        html = asyncio.run(server.scorecard_page("senate-2026"))
        assert 'data-variant="senate-2026"' in html
