# salesboard/core/security.py
from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import HTTPException, status
from fastapi.security import HTTPBearer
from jose import JWTError, jwt

from salesboard.core.config import settings

bearer_scheme = HTTPBearer(auto_error=True)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def generate_magic_code() -> str:
    return str(secrets.randbelow(900000) + 100000)  # 6 digits


def magic_code_expiry() -> datetime:
    return utcnow() + timedelta(minutes=settings.MAGIC_CODE_EXPIRY_MINUTES)


def should_return_magic_code() -> bool:
    """
    Never echo the code in production. Elsewhere an explicit
    RETURN_MAGIC_CODE_IN_RESPONSE wins; unset means echo.
    """
    if settings.is_production:
        return False
    if settings.RETURN_MAGIC_CODE_IN_RESPONSE is not None:
        return settings.RETURN_MAGIC_CODE_IN_RESPONSE
    return True


def _normalize_token(token: str) -> str:
    """
    Tolerate common copy-paste damage: surrounding whitespace or quotes and a
    'Bearer ' prefix pasted into the token field.
    """
    if token is None:
        return ""

    t = token.strip()
    if len(t) >= 2 and t[0] == t[-1] and t[0] in {'"', "'"}:
        t = t[1:-1].strip()
    if t.lower().startswith("bearer "):
        t = t[7:].strip()
    return t


def create_access_token(subject: str, expires_minutes: Optional[int] = None) -> str:
    now = utcnow()
    expire_dt = now + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    claims: dict[str, Any] = {
        "sub": str(subject),
        "exp": int(expire_dt.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    Returns the token subject. Any decoding failure (expired, bad signature,
    malformed, missing sub) is a 401.
    """
    token = _normalize_token(token)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require_sub": True, "require_exp": True},
        )
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return str(sub)
