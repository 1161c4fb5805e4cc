# app/security/jwt.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Literal

from jose import JWTError, jwt
from app.core.settings import settings

ALGO = settings.JWT_ALGORITHM or "HS256"
SECRET = settings.JWT_SECRET_KEY or "dev-secret"

TokenType = Literal["access", "refresh"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _exp_ts(minutes: int) -> int:
    # exp as an integer UNIX timestamp
    return int((_utcnow() + timedelta(minutes=minutes)).timestamp())


def _encode(subject: int | str, token_type: TokenType, minutes: int, extra: Dict[str, Any] | None) -> str:
    payload: Dict[str, Any] = {
        "sub": str(subject),
        "type": token_type,
        "iat": int(_utcnow().timestamp()),
        "exp": _exp_ts(minutes),
    }
    if extra:
        payload.update({k: v for k, v in extra.items() if k not in payload})
    return jwt.encode(payload, SECRET, algorithm=ALGO)


def create_access_token(subject: int | str, extra: Dict[str, Any] | None = None) -> str:
    return _encode(subject, "access", settings.ACCESS_MIN, extra)


def create_refresh_token(subject: int | str, extra: Dict[str, Any] | None = None) -> str:
    return _encode(subject, "refresh", settings.REFRESH_MIN, extra)


def decode_token(token: str, *, expected_type: TokenType | None = None) -> Dict[str, Any]:
    """
    Raises jose.JWTError (ExpiredSignatureError included) on a bad token,
    or when the token's "type" claim differs from expected_type.
    """
    claims = jwt.decode(
        token,
        SECRET,
        algorithms=[ALGO],
        options={"verify_aud": False, "verify_iss": False},
    )
    if expected_type and claims.get("type") != expected_type:
        raise JWTError(f"Expected a {expected_type} token")
    return claims
