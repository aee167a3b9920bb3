import json
from types import SimpleNamespace

import httpx
import pytest


class FakeCompletions:
    """Stands in for AsyncOpenAI().chat.completions."""

    def __init__(self, text: str | None = None, error: Exception | None = None):
        self.text  = text
        self.error = error
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.text)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeLLM:
    def __init__(self, text: str | None = None, error: Exception | None = None):
        self.chat = SimpleNamespace(completions=FakeCompletions(text, error))

    @property
    def calls(self) -> list[dict]:
        return self.chat.completions.calls

    @property
    def prompt(self) -> str:
        return self.calls[-1]["messages"][-1]["content"]


def books_transport(covers: dict[str, str] | None = None, status: int = 200) -> httpx.MockTransport:
    """
    Mock Google Books: returns a thumbnail when the query mentions a key of
    `covers`, otherwise an empty result.
    """
    covers = covers or {}

    def handler(request: httpx.Request) -> httpx.Response:
        if status != 200:
            return httpx.Response(status, json={"error": "boom"})
        q = request.url.params.get("q", "")
        for title, url in covers.items():
            if title in q:
                body = {"items": [{"volumeInfo": {"imageLinks": {"thumbnail": url}}}]}
                return httpx.Response(200, json=body)
        return httpx.Response(200, json={"totalItems": 0})

    return httpx.MockTransport(handler)


def model_items(n: int, title_prefix: str = "Work") -> list[dict]:
    return [
        {
            "title_ja": f"{title_prefix} {i}",
            "title_en": f"{title_prefix} {i} EN",
            "creator": f"Creator {i}",
            "media_type": "小説",
            "analysis": "解説",
            "structural_insight": "分析",
            "match_tags": ["タグ"],
        }
        for i in range(1, n + 1)
    ]


@pytest.fixture
def akira_reply() -> str:
    """Five well-formed items of different media types."""
    media = ["映画", "SF小説", "画集", "歴史資料", "漫画"]
    items = [
        {
            "title_ja": f"AKIRA 関連作 {i}",
            "title_en": f"AKIRA Related {i}",
            "creator": f"作者{i}",
            "media_type": m,
            "analysis": "解説",
            "structural_insight": "分析",
            "match_tags": ["崩壊", "都市"],
        }
        for i, m in enumerate(media, start=1)
    ]
    return json.dumps({"input_analysis_tags": ["ディストピア", "超能力"], "results": items},
                      ensure_ascii=False)
