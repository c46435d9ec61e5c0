from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from config import settings

_LOG = logging.getLogger(__name__)

_ALGO = "HS256"
_BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)


def _clip(plain: str) -> str:
    # bcrypt only looks at the first 72 bytes
    raw = plain.encode("utf-8")
    if len(raw) > _BCRYPT_MAX_BYTES:
        return raw[:_BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")
    return plain


def hash_password(plain: str) -> str:
    return pwd_context.hash(_clip(plain))


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(_clip(plain), hashed)


def create_token(user_id: int, email: str, name: str, ttl_days: int | None = None) -> str:
    exp = datetime.now(timezone.utc) + timedelta(days=ttl_days or settings.jwt_ttl_days)
    payload = {"id": user_id, "email": email, "name": name, "exp": exp}
    return jwt.encode(payload, settings.jwt_secret, algorithm=_ALGO)


def verify_token(token: str) -> dict[str, Any]:
    return jwt.decode(token, settings.jwt_secret, algorithms=[_ALGO])


def current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any]:
    """Decoded token payload `{id, email, name}` or 401."""
    if creds is None or not creds.credentials:
        _LOG.debug("missing or malformed Authorization header")
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Unauthorized")
    try:
        payload = verify_token(creds.credentials)
    except jwt.PyJWTError as exc:
        _LOG.warning("rejected bearer token: %s", exc)
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Unauthorized") from exc
    if not payload.get("id"):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Unauthorized")
    return payload
