"""Turn free-form model replies into data the pipelines can use.

Models wrap JSON in prose and code fences, and the styleguide prompt makes
them repeat the same key several times in one object. The helpers here
tolerate that noise and raise ``MalformedModelOutput`` for anything else.
"""

from __future__ import annotations

import json
import re
from functools import lru_cache
from typing import Any, Iterable, Optional

from app.core.config import settings
from app.core.errors import MalformedModelOutput, MissingField, WrongType

CODE_FENCE_RE = re.compile(r"```json|```")


@lru_cache(maxsize=8)
def _asset_url_re(domain: str) -> re.Pattern[str]:
    return re.compile(
        r"https?://a-[a-z]+\.{}/f/\d+/\d+x\d+/[0-9a-fA-F]+/[\w.-]+?\.(?i:jpe?g|png|gif)\b".format(re.escape(domain))
    )


def extract_image_url(text: Any, domain: Optional[str] = None) -> Optional[str]:
    if not text or not isinstance(text, str):
        return None
    match = _asset_url_re(domain or settings.storyblok_asset_domain).search(text)
    return match.group(0) if match else None


def extract_json_object(model_text: str) -> dict[str, Any]:
    cleaned = (model_text or "").strip()
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end < start:
        raise MalformedModelOutput("No JSON object found in model output", model_text)

    try:
        parsed = json.loads(cleaned[start : end + 1])
    except json.JSONDecodeError as exc:
        raise MalformedModelOutput("Model output is not valid JSON: {}".format(exc), model_text) from exc

    if not isinstance(parsed, dict):
        raise MalformedModelOutput("Model output is not a JSON object", model_text)
    return parsed


def validate_required_string_fields(obj: dict[str, Any], field_names: Iterable[str]) -> dict[str, Any]:
    for name in field_names:
        if name not in obj:
            raise MissingField(name)
        if not isinstance(obj[name], str):
            raise WrongType(name, type(obj[name]).__name__)
    return obj


def _string_end(text: str, start: int) -> int:
    """Index just past the string literal opening at ``start``, or -1."""
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return i + 1
        i += 1
    return -1


def _object_end(text: str, start: int) -> int:
    """Index just past the balanced object opening at ``start``, or -1."""
    depth = 0
    i = start
    while i < len(text):
        ch = text[i]
        if ch == '"':
            i = _string_end(text, i)
            if i == -1:
                return -1
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return -1


def extract_repeated_content_blocks(model_text: str, field_name: str = "content") -> list[dict[str, Any]]:
    """Collect every ``"<field_name>": {...}`` object in source order.

    The reply is read as a sequence of named objects rather than as one JSON
    document, because duplicate keys would collapse under ``json.loads``.
    Keys are located first, so stray quotes in surrounding prose do not
    matter; each object is then balanced by hand so nested braces and braces
    inside string values are handled. An object that opens but never closes
    raises ``MalformedModelOutput``.
    """
    text = CODE_FENCE_RE.sub("", model_text or "").strip()
    blocks: list[dict[str, Any]] = []

    key_re = re.compile(r'"{}"\s*:\s*\{{'.format(re.escape(field_name)))
    match = key_re.search(text)
    while match:
        brace = match.end() - 1
        obj_end = _object_end(text, brace)
        if obj_end == -1:
            raise MalformedModelOutput("Unterminated {!r} object in model output".format(field_name), model_text)
        try:
            parsed = json.loads(text[brace:obj_end])
        except json.JSONDecodeError as exc:
            raise MalformedModelOutput(
                "Invalid {!r} object in model output: {}".format(field_name, exc), model_text
            ) from exc

        blocks.append({"fieldName": field_name, **parsed})
        match = key_re.search(text, obj_end)

    return blocks
