import asyncio
from urllib.parse import quote

import httpx
import pytest

from conftest import books_transport
from curator.config import Settings
from curator.enricher import enrich, retail_search_url


def _enrich(item: dict, covers: dict | None = None, settings: Settings | None = None):
    async def run():
        async with httpx.AsyncClient(transport=books_transport(covers)) as http:
            return await enrich(item, http, settings)
    return asyncio.run(run())


class TestRetailSearchUrl:
    """Test the retail deep link."""

    def test_encodes_title_and_creator(self):
        url = retail_search_url("AKIRA", "大友克洋")
        assert url == "https://www.amazon.co.jp/s?k=" + quote("AKIRA 大友克洋", safe="")
        assert "AKIRA%20" in url

    def test_reserved_characters(self):
        url = retail_search_url("Q&A/Part 1", "A=B")
        assert url.endswith("Q%26A%2FPart%201%20A%3DB")

    @pytest.mark.parametrize("title,creator", [("", ""), ("AKIRA", ""), ("", "大友克洋")])
    def test_empty_parts(self, title, creator):
        url = retail_search_url(title, creator)
        assert url.startswith("https://www.amazon.co.jp/s?k=")
        assert quote(title, safe="") in url
        assert quote(creator, safe="") in url

    def test_custom_base(self):
        assert retail_search_url("A", "B", "https://shop.example/?q=") == "https://shop.example/?q=A%20B"


class TestEnrich:
    """Test mapping of raw model items onto CuratedItem."""

    def test_full_item(self):
        item = {
            "title_ja": "AKIRA", "title_en": "Akira", "creator": "大友克洋",
            "media_type": "漫画", "analysis": "a", "structural_insight": "s",
            "match_tags": ["t1", "t2"],
        }
        result = _enrich(item, {"AKIRA": "http://img/akira.jpg"})
        assert result.title == "AKIRA"
        assert result.title_en == "Akira"
        assert result.media_type == "漫画"
        assert result.match_tags == ["t1", "t2"]
        assert result.image_url == "https://img/akira.jpg"
        assert "AKIRA" in result.retail_url

    def test_generic_title_fallback(self):
        result = _enrich({"title": "Neuromancer", "creator": "William Gibson"})
        assert result.title == "Neuromancer"
        assert result.title_ja == "Neuromancer"

    def test_english_title_fallback(self):
        result = _enrich({"title_en": "Blade Runner", "creator": "Ridley Scott"},
                         {"Blade Runner": "http://img/br.jpg"})
        assert result.title == "Blade Runner"
        assert result.image_url == "https://img/br.jpg"

    def test_legacy_fields(self):
        item = {"title": "X", "creator": "Y", "category": "BOOK", "reason": "because"}
        result = _enrich(item)
        assert result.media_type == "BOOK"
        assert result.analysis == "because"

    def test_empty_item(self):
        result = _enrich({})
        assert result.title == ""
        assert result.creator == ""
        assert result.match_tags == []
        assert result.image_url is None
        assert result.retail_url == "https://www.amazon.co.jp/s?k=%20"

    def test_no_cover(self):
        assert _enrich({"title": "Unknown", "creator": "Nobody"}).image_url is None

    def test_non_string_values(self):
        result = _enrich({"title": 1984, "creator": None, "match_tags": "not-a-list"})
        assert result.title == "1984"
        assert result.creator == ""
        assert result.match_tags == []

    def test_settings_retail_url(self):
        settings = Settings(retail_url="https://shop.example/?q=")
        result = _enrich({"title": "A", "creator": "B"}, settings=settings)
        assert result.retail_url == "https://shop.example/?q=A%20B"
