from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

SEO_FIELDS = (
    "title",
    "description",
    "og_title",
    "og_description",
    "twitter_title",
    "twitter_description",
)


class AltTextWebhook(BaseModel):
    text: str
    asset_id: int


class SeoWebhook(BaseModel):
    story_id: int
    full_slug: str = Field(min_length=1)


class StyleguideValidationRequest(BaseModel):
    story_id: int
    story_slug: str = Field(min_length=1)
    styleguide_slug: Optional[str] = None


class SeoMetadata(BaseModel):
    title: str
    description: str
    og_title: str
    og_description: str
    twitter_title: str
    twitter_description: str


class ValidationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field_name: str = Field(alias="fieldName")
    follows: bool
    uid: str = Field(alias="_uid")
    explanation: Optional[str] = None


class DiscussionOutcome(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field_name: str = Field(alias="fieldName")
    uid: str = Field(alias="_uid")
    created: bool
    error: Optional[str] = None


class StyleguideReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    story_id: int = Field(alias="storyId")
    results: list[ValidationResult] = Field(default_factory=list)
    outcomes: list[DiscussionOutcome] = Field(default_factory=list)
    discussions_created: int = Field(default=0, alias="discussionsCreated")
    discussions_failed: int = Field(default=0, alias="discussionsFailed")


class AltTextResponse(BaseModel):
    altText: str
    updatedAsset: dict[str, Any]


class SeoResponse(BaseModel):
    message: str
    storyId: int
    fullSlug: str
    updatedMetadata: SeoMetadata


class ErrorResponse(BaseModel):
    error: str


def find_block(content: Any, uid: str) -> Optional[dict[str, Any]]:
    """Depth-first search of a story content tree for the block with ``_uid``."""
    if isinstance(content, dict):
        if content.get("_uid") == uid:
            return content
        children = content.values()
    elif isinstance(content, list):
        children = content
    else:
        return None

    for child in children:
        found = find_block(child, uid)
        if found is not None:
            return found
    return None
