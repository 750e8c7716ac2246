from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_llm_client, get_storyblok_client
from app.models.schemas import ErrorResponse, StyleguideReport, StyleguideValidationRequest
from app.services.llm_client import LLMClient
from app.services.storyblok_client import StoryblokClient
from app.workflows.styleguide_pipeline import process_styleguide_check

router = APIRouter(prefix="/api", tags=["styleguide"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post(
    "/styleguide/validate",
    response_model=StyleguideReport,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def validate_story(
    payload: StyleguideValidationRequest,
    cms: StoryblokClient = Depends(get_storyblok_client),
    llm: LLMClient = Depends(get_llm_client),
) -> StyleguideReport:
    return await process_styleguide_check(payload, cms, llm)
