from __future__ import annotations

from app.core.config import settings
from app.services.llm_client import LLMClient

ALT_TEXT_INSTRUCTION = (
    "You are an accessibility specialist. Write alt text for the attached image. "
    "Describe what the image shows and why it matters in one or two short sentences, "
    "at most 125 characters. Do not start with 'Image of' or 'Picture of'. "
    "If the image is purely decorative, reply with exactly: Presentation only. "
    "Return the alt text only, without quotes."
)


async def describe_image(llm: LLMClient, image_url: str) -> str:
    return await llm.complete(
        model=settings.vision_model,
        prompt=ALT_TEXT_INSTRUCTION,
        max_tokens=settings.alt_text_max_tokens,
        image_url=image_url,
    )
