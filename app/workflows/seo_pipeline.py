from __future__ import annotations

import logging

from app.models.schemas import SeoResponse, SeoWebhook
from app.services.llm_client import LLMClient
from app.services.seo_metadata import generate_seo_metadata, merge_seo_metadata
from app.services.storyblok_client import StoryblokClient

logger = logging.getLogger(__name__)


async def process_seo_metadata(payload: SeoWebhook, cms: StoryblokClient, llm: LLMClient) -> SeoResponse:
    story = await cms.get_story(payload.full_slug)
    logger.info("Generating SEO metadata for story %s (%s)", payload.story_id, payload.full_slug)
    metadata = await generate_seo_metadata(llm, story)

    content = dict(story.get("content") or {})
    content["SEO"] = merge_seo_metadata(content.get("SEO"), metadata)
    await cms.update_story_content(payload.story_id, content)

    return SeoResponse(
        message="SEO metadata updated",
        storyId=payload.story_id,
        fullSlug=payload.full_slug,
        updatedMetadata=metadata,
    )
