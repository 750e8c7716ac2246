"""Pytest fixtures: fake model client, stubbed Storyblok API and a test app client."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_llm_client, get_storyblok_client
from app.core.config import Settings
from app.main import app
from app.services.storyblok_client import StoryblokClient

TEST_SETTINGS = Settings(
    openai_api_key=None,
    storyblok_management_token="mgmt-token",
    storyblok_access_token="preview-token",
    storyblok_space_id="1001",
    storyblok_region="us",
    storyblok_asset_domain="example.com",
    storyblok_styleguide_slug="styleguide",
    storyblok_publish_updates=False,
    storyblok_webhook_secret=None,
    app_login_user=None,
    app_login_password=None,
    discussion_component="RichText",
)


class FakeLLM:
    def __init__(self):
        self.reply = ""
        self.error = None
        self.calls = []

    async def complete(self, *, model, prompt, max_tokens, image_url=None):
        self.calls.append({"model": model, "prompt": prompt, "max_tokens": max_tokens, "image_url": image_url})
        if self.error is not None:
            raise self.error
        return self.reply


class StoryblokStub:
    """Routes requests the way the Storyblok CDN and Management APIs answer them."""

    def __init__(self):
        self.stories = {}
        self.failing_paths = set()
        self.queued = {}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.queued.get(path):
            return self.queued[path].pop(0)
        if path in self.failing_paths:
            return httpx.Response(422, json={"error": "rejected"})

        if request.method == "GET" and path.startswith("/v2/cdn/stories/"):
            story = self.stories.get(path[len("/v2/cdn/stories/"):])
            if story is None:
                return httpx.Response(404, json={"error": "This record could not be found"})
            return httpx.Response(200, json={"story": story})
        if request.method == "PUT" and "/assets/" in path:
            return httpx.Response(204)
        if request.method == "PUT" and "/stories/" in path:
            return httpx.Response(200, json=json.loads(request.content))
        if request.method == "POST" and path.endswith("/discussions"):
            return httpx.Response(200, json={"discussion": {"id": len(self.requests)}})
        return httpx.Response(404, json={"error": "unknown route"})

    def client(self, config=TEST_SETTINGS):
        return StoryblokClient(config, transport=httpx.MockTransport(self.handler))

    @property
    def writes(self):
        return [request for request in self.requests if request.method != "GET"]


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    for module in (
        "app.core.auth",
        "app.main",
        "app.services.response_extractor",
        "app.workflows.styleguide_pipeline",
    ):
        monkeypatch.setattr("{}.settings".format(module), TEST_SETTINGS)
    return TEST_SETTINGS


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def storyblok():
    return StoryblokStub()


@pytest.fixture
def api_client(fake_llm, storyblok):
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    app.dependency_overrides[get_storyblok_client] = lambda: storyblok.client()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
