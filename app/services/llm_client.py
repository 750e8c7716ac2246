from __future__ import annotations

from typing import Any, Optional

import httpx
import openai
from openai import AsyncOpenAI

from app.core.config import Settings, settings
from app.core.errors import ConfigurationError, MalformedModelOutput, UpstreamError


class LLMClient:
    def __init__(self, config: Settings = settings, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self._client = (
            AsyncOpenAI(
                api_key=config.openai_api_key,
                base_url=config.openai_base_url,
                timeout=config.http_timeout * 3,
                max_retries=0,
                http_client=http_client,
            )
            if config.openai_api_key
            else None
        )

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        max_tokens: int,
        image_url: Optional[str] = None,
    ) -> str:
        if not self._client:
            raise ConfigurationError("LLM disabled. Add OPENAI_API_KEY to enable model output.")

        content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
        if image_url:
            content.append({"type": "image_url", "image_url": {"url": image_url}})

        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": content}],
                max_tokens=max_tokens,
            )
        except openai.APIStatusError as exc:
            raise UpstreamError("openai", exc.status_code, exc.response.text) from exc
        except openai.APIError as exc:
            raise UpstreamError("openai", None, str(exc)) from exc

        text = response.choices[0].message.content if response.choices else None
        if not text:
            raise MalformedModelOutput("Model returned an empty completion", "")
        return text.strip()


llm_client = LLMClient()
