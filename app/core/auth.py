from __future__ import annotations

import hashlib
import hmac
from typing import Optional

from fastapi import Request

from app.core.config import settings
from app.core.errors import InvalidSignature

SIGNATURE_HEADER = "webhook-signature"


def sign_body(body: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha1).hexdigest()


def is_valid_signature(body: bytes, signature: Optional[str], secret: str) -> bool:
    if not signature:
        return False
    return hmac.compare_digest(sign_body(body, secret), signature.strip())


async def verify_webhook_signature(request: Request) -> None:
    secret = settings.storyblok_webhook_secret
    if not secret:
        return

    body = await request.body()
    if not is_valid_signature(body, request.headers.get(SIGNATURE_HEADER), secret):
        raise InvalidSignature("Webhook signature missing or invalid")
