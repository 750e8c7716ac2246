from __future__ import annotations

from app.services.llm_client import LLMClient, llm_client
from app.services.storyblok_client import StoryblokClient, storyblok_client


def get_storyblok_client() -> StoryblokClient:
    return storyblok_client


def get_llm_client() -> LLMClient:
    return llm_client
