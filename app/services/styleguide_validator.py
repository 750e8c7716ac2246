from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import MalformedModelOutput
from app.models.schemas import ValidationResult
from app.services.llm_client import LLMClient
from app.services.response_extractor import extract_repeated_content_blocks

VALIDATION_INSTRUCTION = """You are a strict JSON validator. Given the following content and styleguide, analyze each field in the content and determine if it follows the styleguide. If a field does not follow the styleguide, give a brief explanation why, then on a new line your recommended fix. Only respond with fields named "content". There may be more than one field named "content"; return them all.

Content:
{content}

Styleguide:
{styleguide}

Respond strictly in the following JSON format:
{{
  "fieldName": {{
    "follows": boolean,
    "_uid": "string (the original _uid of the block holding the field)",
    "explanation": "string (only if follows is false)"
  }}
}}

Example of the expected response:
{{
  "content": {{
    "follows": true,
    "_uid": "b67099fb-d304-4403-9d27-80792f757b4d",
    "explanation": ""
  }},
  "content": {{
    "follows": false,
    "_uid": "6be42f71-15fb-4ec0-9f30-fe6a7ad38b1e",
    "explanation": "The content does not meet the styleguide requirements because ..."
  }}
}}

Return only the JSON object with no additional commentary or formatting."""


def build_validation_prompt(story_content: dict[str, Any], styleguide: dict[str, Any]) -> str:
    blocks = story_content.get("bloks", story_content)
    return VALIDATION_INSTRUCTION.format(
        content=json.dumps(blocks, ensure_ascii=False),
        styleguide=json.dumps(styleguide, ensure_ascii=False),
    )


def parse_validation_results(model_text: str) -> list[ValidationResult]:
    try:
        return [ValidationResult.model_validate(block) for block in extract_repeated_content_blocks(model_text)]
    except ValidationError as exc:
        raise MalformedModelOutput("Validation entry has unexpected shape: {}".format(exc), model_text) from exc


async def validate_against_styleguide(
    llm: LLMClient,
    story_content: dict[str, Any],
    styleguide: dict[str, Any],
) -> list[ValidationResult]:
    reply = await llm.complete(
        model=settings.validator_model,
        prompt=build_validation_prompt(story_content, styleguide),
        max_tokens=settings.validator_max_tokens,
    )
    return parse_validation_results(reply)
