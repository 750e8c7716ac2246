from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    openai_base_url: Optional[str] = os.getenv("OPENAI_BASE_URL")
    vision_model: str = os.getenv("VISION_MODEL", "gpt-4o")
    seo_model: str = os.getenv("SEO_MODEL", "gpt-4o")
    validator_model: str = os.getenv("VALIDATOR_MODEL", "gpt-4o")
    alt_text_max_tokens: int = int(os.getenv("ALT_TEXT_MAX_TOKENS", "300"))
    seo_max_tokens: int = int(os.getenv("SEO_MAX_TOKENS", "500"))
    validator_max_tokens: int = int(os.getenv("VALIDATOR_MAX_TOKENS", "1000"))
    storyblok_management_token: Optional[str] = os.getenv("STORYBLOK_MANAGEMENT_TOKEN")
    storyblok_access_token: Optional[str] = os.getenv("STORYBLOK_ACCESS_TOKEN")
    storyblok_space_id: Optional[str] = os.getenv("STORYBLOK_SPACE_ID")
    storyblok_region: str = os.getenv("STORYBLOK_REGION", "us")
    storyblok_asset_domain: str = os.getenv("STORYBLOK_ASSET_DOMAIN", "storyblok.com")
    storyblok_styleguide_slug: str = os.getenv("STORYBLOK_STYLEGUIDE_SLUG", "12729627")
    storyblok_publish_updates: bool = os.getenv("STORYBLOK_PUBLISH_UPDATES", "false").lower() == "true"
    storyblok_webhook_secret: Optional[str] = os.getenv("STORYBLOK_WEBHOOK_SECRET")
    app_login_user: Optional[str] = os.getenv("APP_LOGIN_USER")
    app_login_password: Optional[str] = os.getenv("APP_LOGIN_PASSWORD")
    discussion_component: str = os.getenv("DISCUSSION_COMPONENT", "RichText")
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "20.0"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_host: str = os.getenv("APP_HOST", "0.0.0.0")
    app_port: int = int(os.getenv("APP_PORT", "8000"))


settings = Settings()
