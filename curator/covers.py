"""
Cover image lookup against the Google Books volumes API.

lookup_cover() is fail-soft: "no match" and "provider error" both come back
as None. A missing cover is an ordinary outcome; the frontend shows a
placeholder for it.
"""

import logging

import httpx

from curator.config import GOOGLE_BOOKS_URL

log = logging.getLogger(__name__)


def build_query(title: str, creator: str) -> str:
    """Exact-title / exact-author query; keeps encyclopedias and guides out."""
    query = f'intitle:"{title}"'
    if creator:
        query += f' inauthor:"{creator}"'
    return query


def _thumbnail(data: dict) -> str | None:
    items = data.get("items") or []
    if not items or not isinstance(items[0], dict):
        return None
    links = (items[0].get("volumeInfo") or {}).get("imageLinks") or {}
    thumb = links.get("thumbnail") or links.get("smallThumbnail")
    if not isinstance(thumb, str) or not thumb:
        return None
    return thumb.replace("http://", "https://", 1)


async def lookup_cover(
    http: httpx.AsyncClient,
    title: str,
    creator: str,
    api_key: str | None = None,
) -> str | None:
    title = (title or "").strip()
    creator = (creator or "").strip()
    if not title:
        return None

    params = {"q": build_query(title, creator), "maxResults": "1"}
    if api_key:
        params["key"] = api_key

    try:
        resp = await http.get(GOOGLE_BOOKS_URL, params=params)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            return None
        return _thumbnail(data)
    except Exception as exc:
        log.warning("Cover lookup failed for %r / %r: %s", title, creator, exc)
        return None
