from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_llm_client, get_storyblok_client
from app.core.auth import verify_webhook_signature
from app.models.schemas import AltTextResponse, AltTextWebhook, ErrorResponse, SeoResponse, SeoWebhook
from app.services.llm_client import LLMClient
from app.services.storyblok_client import StoryblokClient
from app.workflows.alt_text_pipeline import process_alt_text
from app.workflows.seo_pipeline import process_seo_metadata

router = APIRouter(
    prefix="/api/webhooks",
    tags=["webhooks"],
    dependencies=[Depends(verify_webhook_signature)],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


@router.post("/alt-text", response_model=AltTextResponse)
async def alt_text_webhook(
    payload: AltTextWebhook,
    cms: StoryblokClient = Depends(get_storyblok_client),
    llm: LLMClient = Depends(get_llm_client),
) -> AltTextResponse:
    return await process_alt_text(payload, cms, llm)


@router.post("/seo-metadata", response_model=SeoResponse)
async def seo_metadata_webhook(
    payload: SeoWebhook,
    cms: StoryblokClient = Depends(get_storyblok_client),
    llm: LLMClient = Depends(get_llm_client),
) -> SeoResponse:
    return await process_seo_metadata(payload, cms, llm)
