"""
Generation orchestrator.

Curator.generate(mode, query, filters) performs one chat-completion call,
parses and normalises the JSON reply, keeps at most MAX_RESULTS items and
enriches them concurrently (cover lookup + retail link).

Failures in the model call or in parsing are not retried: they are logged
and returned as an empty ResultSet, indistinguishable from "nothing found".

Clients are injected so the orchestrator can be exercised without network
access or credentials. Passing llm=None defers building the OpenAI client
to the first generation:

    curator = Curator(None, httpx.AsyncClient(), Settings.from_env())
    result  = await curator.generate("narrative", "AKIRA")
"""

import asyncio
import logging
from typing import Any

import httpx
from openai import AsyncOpenAI

from curator.config import Settings
from curator.enricher import enrich
from curator.models import CuratedItem, Filters, Mode, ResultSet
from curator.parsing import normalize_shape, parse_model_text
from curator.prompt import SYSTEM_PROMPT, build_prompt

log = logging.getLogger(__name__)


class Curator:
    def __init__(
        self,
        llm: AsyncOpenAI | None,
        http: httpx.AsyncClient,
        settings: Settings | None = None,
    ):
        self.llm      = llm
        self.http     = http
        self.settings = settings or Settings()

    def _client(self) -> AsyncOpenAI:
        """
        The OpenAI client, built on first use when none was injected.

        Construction raises on a missing key; it happens inside generate()
        so that surfaces as an empty result, not a startup failure.
        """
        if self.llm is None:
            self.llm = AsyncOpenAI(api_key=self.settings.openai_api_key or None)
        return self.llm

    async def aclose(self) -> None:
        if self.llm is not None:
            await self.llm.close()

    async def _complete(self, prompt: str) -> str:
        completion = await self._client().chat.completions.create(
            model=self.settings.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user",   "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=self.settings.temperature,
        )
        return completion.choices[0].message.content or ""

    async def _enrich_all(self, items: list[dict[str, Any]]) -> list[CuratedItem]:
        """Enrich every item concurrently; order follows the input."""
        limit = asyncio.Semaphore(max(1, self.settings.max_results))

        async def _one(item: dict[str, Any]) -> CuratedItem:
            async with limit:
                return await enrich(item, self.http, self.settings)

        return list(await asyncio.gather(*(_one(item) for item in items)))

    async def generate(
        self,
        mode: Mode | str,
        query: str,
        filters: Filters | None = None,
    ) -> ResultSet:
        try:
            prompt = build_prompt(query, mode, filters)
            text = await self._complete(prompt)
            tags, items = normalize_shape(parse_model_text(text))

            if len(items) > self.settings.max_results:
                log.info("Model returned %d items, keeping %d.",
                         len(items), self.settings.max_results)
            items = items[: self.settings.max_results]

            results = await self._enrich_all(items)
        except Exception:
            log.exception("Generation failed for query=%r mode=%r", query, mode)
            return ResultSet.empty()

        return ResultSet(input_analysis_tags=tags, results=results)
