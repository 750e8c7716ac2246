from __future__ import annotations

import json
from typing import Any

from app.core.config import settings
from app.models.schemas import SEO_FIELDS, SeoMetadata
from app.services.llm_client import LLMClient
from app.services.response_extractor import extract_json_object, validate_required_string_fields

SEO_INSTRUCTION = (
    "You are a senior SEO strategist. Read the Storyblok story below and write search and social metadata for it. "
    "Respond with a single JSON object with exactly these string keys: "
    "title (max 60 characters), description (max 160 characters), "
    "og_title (max 60 characters), og_description (max 160 characters), "
    "twitter_title (max 70 characters), twitter_description (max 200 characters). "
    "Do not add commentary."
)


def build_seo_prompt(story: dict[str, Any]) -> str:
    return "{}\n\nStory:\n{}".format(SEO_INSTRUCTION, json.dumps(story, ensure_ascii=False))


def parse_seo_metadata(model_text: str) -> SeoMetadata:
    data = validate_required_string_fields(extract_json_object(model_text), SEO_FIELDS)
    return SeoMetadata(**{name: data[name] for name in SEO_FIELDS})


def merge_seo_metadata(existing: Any, metadata: SeoMetadata) -> dict[str, Any]:
    """Overlay the generated fields on the story's SEO object, keeping image and plugin keys."""
    merged = dict(existing) if isinstance(existing, dict) else {}
    merged.update(metadata.model_dump())
    return merged


async def generate_seo_metadata(llm: LLMClient, story: dict[str, Any]) -> SeoMetadata:
    reply = await llm.complete(
        model=settings.seo_model,
        prompt=build_seo_prompt(story),
        max_tokens=settings.seo_max_tokens,
    )
    return parse_seo_metadata(reply)
