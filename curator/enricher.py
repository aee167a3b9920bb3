"""
Result enrichment: raw model item → CuratedItem with cover and retail link.

Field names in model output have drifted between prompt revisions, so every
field is read with a fallback chain and defaulted rather than required:

    title_ja → title → ""          (display title)
    media_type → category
    analysis → reason
    structural_insight → focus_point
"""

from typing import Any
from urllib.parse import quote

import httpx

from curator.config import RETAIL_SEARCH_URL, Settings
from curator.covers import lookup_cover
from curator.models import CuratedItem


def _text(item: dict[str, Any], *keys: str) -> str:
    """First non-empty value among keys, as a string."""
    for key in keys:
        value = item.get(key)
        if value is None or value == "":
            continue
        return value if isinstance(value, str) else str(value)
    return ""


def _tags(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(t) for t in value if t is not None and t != ""]


def retail_search_url(title: str, creator: str, base: str = RETAIL_SEARCH_URL) -> str:
    """Search deep link for "<title> <creator>"; not checked against inventory."""
    return base + quote(f"{title} {creator}", safe="")


async def enrich(
    item: dict[str, Any],
    http: httpx.AsyncClient,
    settings: Settings | None = None,
) -> CuratedItem:
    settings = settings or Settings()

    title    = _text(item, "title_ja", "title")
    title_en = _text(item, "title_en")
    creator  = _text(item, "creator", "author")

    image_url = await lookup_cover(
        http, title or title_en, creator, api_key=settings.books_api_key
    )

    return CuratedItem(
        title=title or title_en,
        title_ja=title,
        title_en=title_en,
        creator=creator,
        media_type=_text(item, "media_type", "category"),
        analysis=_text(item, "analysis", "reason"),
        structural_insight=_text(item, "structural_insight", "focus_point"),
        match_tags=_tags(item.get("match_tags")),
        image_url=image_url,
        retail_url=retail_search_url(title or title_en, creator, settings.retail_url),
    )
