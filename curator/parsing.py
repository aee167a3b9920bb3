"""
Model output parsing and shape normalisation.

The model's reply is free text that should be JSON, but the shape has drifted
over time. Accepted shapes:

    [ {...}, {...} ]                                   bare array
    {"results" | "ideas" | "items": [...], ...}        keyed array in object
    {"title": ..., ...}                                single item

An optional "input_analysis_tags" list travels alongside the keyed form.

Public API:
    parse_model_text(text)   → decoded JSON value (raises ModelOutputError)
    extract_json_object(text) → first balanced {...} span, or None
    normalize_shape(payload) → (tags, items)
"""

import json
from typing import Any

LIST_KEYS = ("results", "ideas", "items")
TAGS_KEY  = "input_analysis_tags"

RawItem = dict[str, Any]


class ModelOutputError(ValueError):
    """The model reply contained no parseable JSON."""


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        lines = [l for l in text.split("\n") if not l.strip().startswith("```")]
        text = "\n".join(lines)
    return text.strip()


def extract_json_object(text: str) -> str | None:
    """
    Return the first balanced {...} span in text.

    Only the span opened by the first brace is considered: a reply cut off
    mid-object yields None rather than one of its inner objects. Braces
    inside JSON strings (including escaped quotes) are ignored.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def parse_model_text(text: str | None) -> Any:
    if not text or not text.strip():
        raise ModelOutputError("Empty model response.")

    cleaned = _strip_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    span = extract_json_object(cleaned)
    if span is None:
        raise ModelOutputError("No JSON object found in model response.")
    try:
        return json.loads(span)
    except json.JSONDecodeError as exc:
        raise ModelOutputError(f"Malformed JSON in model response: {exc}") from exc


def _only_items(values: list) -> list[RawItem]:
    return [v for v in values if isinstance(v, dict)]


def normalize_shape(payload: Any) -> tuple[list[str], list[RawItem]]:
    """Map any accepted response shape onto (tags, items)."""
    if isinstance(payload, list):
        return [], _only_items(payload)

    if not isinstance(payload, dict):
        return [], []

    raw_tags = payload.get(TAGS_KEY)
    tags = [t for t in raw_tags if isinstance(t, str)] if isinstance(raw_tags, list) else []

    for key in LIST_KEYS:
        if key in payload:
            value = payload[key]
            if isinstance(value, list):
                return tags, _only_items(value)
            if isinstance(value, dict):
                return tags, [value]
            return tags, []

    single = {k: v for k, v in payload.items() if k != TAGS_KEY}
    return tags, [single] if single else []
