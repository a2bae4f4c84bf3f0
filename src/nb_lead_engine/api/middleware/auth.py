"""HMAC/shared-secret authentication."""

import hashlib
import hmac

from fastapi import HTTPException, Request

from ..config import settings

SIGNATURE_HEADER = "X-NB-Signature"
SECRET_HEADER = "X-NB-Secret"


def sign_body(body: bytes, secret: str) -> str:
    """HMAC-SHA256 hex digest of a request body."""
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


async def verify_signature(request: Request):
    """Validate requests using HMAC-SHA256 signature or shared secret.

    Header options (checked in order):
    1. X-NB-Signature: HMAC-SHA256 of request body using NB_API_SECRET
    2. X-NB-Secret: Direct match against NB_API_SECRET
    """
    body = await request.body()

    signature = request.headers.get(SIGNATURE_HEADER)
    if signature and hmac.compare_digest(signature, sign_body(body, settings.api_secret)):
        return True

    secret = request.headers.get(SECRET_HEADER)
    if secret and hmac.compare_digest(secret, settings.api_secret):
        return True

    raise HTTPException(
        status_code=401,
        detail={"success": False, "error": "auth_error", "detail": "Invalid or missing authentication"},
    )
