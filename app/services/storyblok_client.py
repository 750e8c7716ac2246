from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from app.core.config import Settings, settings
from app.core.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


def cdn_base_url(region: str) -> str:
    if region == "eu":
        return "https://api.storyblok.com/v2/cdn"
    return "https://api-{}.storyblok.com/v2/cdn".format(region)


def management_base_url(region: str) -> str:
    if region == "eu":
        return "https://mapi.storyblok.com/v1"
    return "https://api-{}.storyblok.com/v1".format(region)


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamError("storyblok", response.status_code, response.text) from exc


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    if not response.content:
        return {}
    return _json_body(response)


class StoryblokClient:
    def __init__(self, config: Settings = settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._config = config
        self._transport = transport

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._config.http_timeout, transport=self._transport) as client:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.HTTPError as exc:
                raise UpstreamError("storyblok", None, str(exc)) from exc

        if not response.is_success:
            raise UpstreamError("storyblok", response.status_code, response.text)
        return response

    def _management(self, path: str) -> tuple[str, dict[str, str]]:
        token = self._config.storyblok_management_token
        space_id = self._config.storyblok_space_id
        if not token or not space_id:
            raise ConfigurationError("STORYBLOK_MANAGEMENT_TOKEN and STORYBLOK_SPACE_ID are required")
        url = "{}/spaces/{}/{}".format(management_base_url(self._config.storyblok_region), space_id, path)
        return url, {"Authorization": token}

    async def get_story(self, slug: str, version: str = "published") -> dict[str, Any]:
        if not self._config.storyblok_access_token:
            raise ConfigurationError("STORYBLOK_ACCESS_TOKEN is required")

        url = "{}/stories/{}".format(cdn_base_url(self._config.storyblok_region), slug.strip("/"))
        response = await self._request(
            "GET",
            url,
            params={"token": self._config.storyblok_access_token, "version": version},
        )
        body = _json_body(response)
        story = body.get("story") if isinstance(body, dict) else None
        if not isinstance(story, dict):
            raise UpstreamError("storyblok", response.status_code, "Response has no story for slug {}".format(slug))
        return story

    async def update_asset_alt(self, asset_id: int, alt_text: str) -> dict[str, Any]:
        url, headers = self._management("assets/{}".format(asset_id))
        logger.info("Updating alt text of asset %s", asset_id)
        response = await self._request("PUT", url, headers=headers, json={"asset": {"alt": alt_text}})
        return _json_or_empty(response) or {"id": asset_id, "alt": alt_text}

    async def update_story_content(self, story_id: int, content: dict[str, Any]) -> dict[str, Any]:
        url, headers = self._management("stories/{}".format(story_id))
        body: dict[str, Any] = {"story": {"content": content}, "force_update": "1"}
        if self._config.storyblok_publish_updates:
            body["publish"] = 1
        logger.info("Updating content of story %s", story_id)
        response = await self._request("PUT", url, headers=headers, json=body)
        return _json_or_empty(response)

    async def create_discussion(
        self,
        story_id: int,
        *,
        field_name: str,
        block_uid: str,
        message: str,
        component: str,
    ) -> dict[str, Any]:
        url, headers = self._management("stories/{}/discussions".format(story_id))
        body = {
            "discussion": {
                "comment": {"message_json": [{"type": "text", "text": message}]},
                "lang": "default",
                "title": field_name,
                "fieldname": field_name,
                "block_uid": block_uid,
                "component": component,
            }
        }
        response = await self._request("POST", url, headers=headers, json=body)
        return _json_or_empty(response)


storyblok_client = StoryblokClient()
