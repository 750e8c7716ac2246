from __future__ import annotations

import logging
from typing import Any

from app.core.config import settings
from app.core.errors import AssistantError
from app.models.schemas import (
    DiscussionOutcome,
    StyleguideReport,
    StyleguideValidationRequest,
    ValidationResult,
    find_block,
)
from app.services.llm_client import LLMClient
from app.services.storyblok_client import StoryblokClient
from app.services.styleguide_validator import validate_against_styleguide

logger = logging.getLogger(__name__)


async def post_discussions(
    cms: StoryblokClient,
    story_id: int,
    story_content: dict[str, Any],
    results: list[ValidationResult],
) -> list[DiscussionOutcome]:
    outcomes: list[DiscussionOutcome] = []
    for result in results:
        if result.follows:
            continue

        block = find_block(story_content, result.uid)
        component = block.get("component") if block else None
        try:
            await cms.create_discussion(
                story_id,
                field_name=result.field_name,
                block_uid=result.uid,
                message=result.explanation or "",
                component=component or settings.discussion_component,
            )
        except AssistantError as exc:
            logger.warning("Could not create discussion for block %s: %s", result.uid, exc)
            outcomes.append(DiscussionOutcome(field_name=result.field_name, uid=result.uid, created=False, error=str(exc)))
            continue
        outcomes.append(DiscussionOutcome(field_name=result.field_name, uid=result.uid, created=True))
    return outcomes


async def process_styleguide_check(
    request: StyleguideValidationRequest,
    cms: StoryblokClient,
    llm: LLMClient,
) -> StyleguideReport:
    styleguide_story = await cms.get_story(request.styleguide_slug or settings.storyblok_styleguide_slug)
    story = await cms.get_story(request.story_slug)
    story_content = story.get("content") or {}

    results = await validate_against_styleguide(llm, story_content, styleguide_story.get("content") or {})
    if not results:
        logger.warning("Model returned no content fields for story %s", request.story_id)

    outcomes = await post_discussions(cms, request.story_id, story_content, results)
    created = sum(1 for outcome in outcomes if outcome.created)
    logger.info("Created %d discussions on story %s (%d failed)", created, request.story_id, len(outcomes) - created)

    return StyleguideReport(
        story_id=request.story_id,
        results=results,
        outcomes=outcomes,
        discussions_created=created,
        discussions_failed=len(outcomes) - created,
    )
