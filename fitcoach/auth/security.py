# -*- coding: utf-8 -*-
"""Auth — password hashing, signed session tokens and request identity.

The token carries identity only. Mutable attributes (subscription tier,
admin flag) are re-read from the database on every request.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import secrets
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request

from ..config import settings
from ..timeutil import utc_now
from .storage import get_user_by_id

TOKEN_COOKIE_NAME = "fitcoach_token"

PASSWORD_HASH_NAME = "sha256"
PASSWORD_ROUNDS = 200_000
_TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


def _urlsafe(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _from_urlsafe(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def hash_password(password: str) -> str:
    """Encoded as ``pbkdf2_<hash>$<rounds>$<salt>$<digest>``."""
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac(PASSWORD_HASH_NAME, password.encode("utf-8"), salt, PASSWORD_ROUNDS)
    return "$".join([f"pbkdf2_{PASSWORD_HASH_NAME}", str(PASSWORD_ROUNDS), _urlsafe(salt), _urlsafe(digest)])


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, rounds, salt, expected = password_hash.split("$", 3)
        prefix, _, hash_name = scheme.partition("_")
        if prefix != "pbkdf2" or not hash_name:
            return False
        digest = hashlib.pbkdf2_hmac(hash_name, password.encode("utf-8"), _from_urlsafe(salt), int(rounds))
    except (ValueError, TypeError):
        return False
    return hmac.compare_digest(digest, _from_urlsafe(expected))


def is_admin_email(email: str) -> bool:
    return (email or "").strip().lower() in settings.admin_emails


def _signature(message: str) -> bytes:
    return hmac.new(settings.jwt_secret.encode("utf-8"), message.encode("ascii"), hashlib.sha256).digest()


def _encode_segment(value: Dict[str, Any]) -> str:
    return _urlsafe(json.dumps(value, separators=(",", ":")).encode("utf-8"))


def create_access_token(*, user_id: str) -> str:
    issued = int(utc_now().timestamp())
    claims = {"sub": user_id, "iat": issued, "exp": issued + int(settings.token_ttl_days) * 86400}
    message = f"{_encode_segment(_TOKEN_HEADER)}.{_encode_segment(claims)}"
    return f"{message}.{_urlsafe(_signature(message))}"


def decode_token(token: str) -> Dict[str, Any]:
    """Verified claims of `token`; 401 when it is forged, malformed or expired."""
    message, _, signature = token.rpartition(".")
    try:
        if message.count(".") != 1 or not hmac.compare_digest(_signature(message), _from_urlsafe(signature)):
            raise ValueError("signature mismatch")
        claims = json.loads(_from_urlsafe(message.split(".", 1)[1]))
    except (ValueError, TypeError) as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc
    if not isinstance(claims, dict):
        raise HTTPException(status_code=401, detail="Invalid token")
    expires = int(claims.get("exp") or 0)
    if expires and expires < int(utc_now().timestamp()):
        raise HTTPException(status_code=401, detail="Token expired")
    return claims


def get_token_from_request(request: Request) -> Optional[str]:
    """Bearer header first, then the session cookie."""
    scheme, _, value = (request.headers.get("authorization") or "").partition(" ")
    if scheme.lower() == "bearer":
        return value.strip() or None
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    cached = getattr(request.state, "user", None)
    if cached:
        return cached

    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    user_id = str(decode_token(token).get("sub") or "")
    user = get_user_by_id(user_id) if user_id else None
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")
    user["is_admin"] = is_admin_email(user["email"])

    # Request-scoped only; never outlives this request.
    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user


def require_admin(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    if not user.get("is_admin"):
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
