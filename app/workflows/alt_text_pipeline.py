from __future__ import annotations

import logging

from app.core.errors import NotFound
from app.models.schemas import AltTextResponse, AltTextWebhook
from app.services.alt_text import describe_image
from app.services.llm_client import LLMClient
from app.services.response_extractor import extract_image_url
from app.services.storyblok_client import StoryblokClient

logger = logging.getLogger(__name__)


async def process_alt_text(payload: AltTextWebhook, cms: StoryblokClient, llm: LLMClient) -> AltTextResponse:
    image_url = extract_image_url(payload.text)
    if not image_url:
        raise NotFound("No image URL found in webhook text")

    logger.info("Generating alt text for asset %s from %s", payload.asset_id, image_url)
    alt_text = await describe_image(llm, image_url)
    updated_asset = await cms.update_asset_alt(payload.asset_id, alt_text)
    return AltTextResponse(altText=alt_text, updatedAsset=updated_asset)
