from __future__ import annotations

import base64
import binascii
import logging
import secrets
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from app.api.routes_styleguide import router as styleguide_router
from app.api.routes_webhooks import router as webhooks_router
from app.core.config import settings
from app.core.errors import (
    AssistantError,
    FieldError,
    InvalidSignature,
    MalformedModelOutput,
    NotFound,
    UpstreamError,
)
from app.core.logging_setup import configure_logging

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

INTERNAL_ERROR = {"error": "Internal server error"}

app = FastAPI(title="Storyblok AI Assistants")
app.include_router(webhooks_router)
app.include_router(styleguide_router)

frontend_dir = Path(__file__).resolve().parent.parent / "frontend"

# Webhooks carry their own signature check
PUBLIC_PATHS = ("/api/health",)
PUBLIC_PREFIXES = ("/api/webhooks/",)


def _is_auth_enabled() -> bool:
    return bool(settings.app_login_user and settings.app_login_password)


def _unauthorized_response() -> PlainTextResponse:
    return PlainTextResponse(
        "Unauthorized",
        status_code=401,
        headers={"WWW-Authenticate": 'Basic realm="Storyblok AI Assistants"'},
    )


def _has_valid_basic_auth(request: Request) -> bool:
    auth_header = request.headers.get("authorization", "")
    if not auth_header.startswith("Basic "):
        return False

    token = auth_header.split(" ", 1)[1].strip()
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return False

    if ":" not in decoded:
        return False

    username, password = decoded.split(":", 1)
    return secrets.compare_digest(username, settings.app_login_user or "") and secrets.compare_digest(
        password, settings.app_login_password or ""
    )


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    path = request.url.path
    if not _is_auth_enabled() or path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES):
        return await call_next(request)

    if not _has_valid_basic_auth(request):
        return _unauthorized_response()

    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected payload on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid payload"})


@app.exception_handler(AssistantError)
async def assistant_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    if isinstance(exc, NotFound):
        return JSONResponse(status_code=400, content={"error": str(exc)})
    if isinstance(exc, InvalidSignature):
        return JSONResponse(status_code=401, content={"error": str(exc)})

    if isinstance(exc, UpstreamError):
        logger.error("%s failed on %s (status %s): %s", exc.service, request.url.path, exc.status_code, exc.body)
    elif isinstance(exc, MalformedModelOutput):
        logger.error("Unparsable model output on %s: %s\n%s", request.url.path, exc, exc.raw_text)
    elif isinstance(exc, FieldError):
        logger.error("Model output failed validation on %s: %s", request.url.path, exc)
    else:
        logger.error("Request to %s failed: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content=INTERNAL_ERROR)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=INTERNAL_ERROR)


@app.get("/")
def root() -> FileResponse:
    return FileResponse(frontend_dir / "index.html")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.app_host, port=settings.app_port)
