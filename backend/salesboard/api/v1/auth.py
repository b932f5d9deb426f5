# backend/salesboard/api/v1/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.auth import get_current_user
from salesboard.core.config import settings
from salesboard.core.security import (
    as_utc,
    create_access_token,
    generate_magic_code,
    magic_code_expiry,
    should_return_magic_code,
    utcnow,
)
from salesboard.db.session import get_db
from salesboard.models.user import User
from salesboard.schemas.auth import MagicCodeRequest, MagicCodeVerify, MeResponse, ProfileUpdateRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


async def purge_expired_magic_codes(db: AsyncSession) -> None:
    stmt = (
        update(User)
        .where(User.magic_code_expires_at.is_not(None))
        .where(User.magic_code_expires_at < utcnow())
        .values(magic_code=None, magic_code_expires_at=None)
    )
    await db.execute(stmt)


async def _get_user_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


@router.post("/request-code")
async def request_code(payload: MagicCodeRequest, db: AsyncSession = Depends(get_db)):
    """
    Body: {"email": "seller@store.com"}
    Creates the user on first contact and stores a one-time login code.
    """
    email = payload.email.strip().lower()

    await purge_expired_magic_codes(db)

    user = await _get_user_by_email(db, email)
    if user is None:
        user = User(email=email, is_active=True)
        db.add(user)
        await db.flush()
        logger.info("Created user %s on first login request", email)

    code = generate_magic_code()
    user.magic_code = code
    user.magic_code_expires_at = magic_code_expiry()
    await db.commit()

    resp = {"status": "ok", "expires_in_minutes": settings.MAGIC_CODE_EXPIRY_MINUTES}
    if should_return_magic_code():
        resp["code"] = code
    return resp


@router.post("/verify-code", response_model=TokenResponse)
async def verify_code(payload: MagicCodeVerify, db: AsyncSession = Depends(get_db)) -> TokenResponse:
    """
    Body: {"email": "seller@store.com", "code": "123456"}
    Returns: access_token
    """
    email = payload.email.strip().lower()
    code = payload.code.strip()

    user = await _get_user_by_email(db, email)

    if not user or not user.magic_code or not user.magic_code_expires_at:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid code")

    if user.magic_code != code:
        logger.warning("Rejected login code for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid code")

    if as_utc(user.magic_code_expires_at) < utcnow():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Code expired")

    # One-time use
    user.magic_code = None
    user.magic_code_expires_at = None
    await db.commit()

    logger.info("User %s logged in", email)
    return TokenResponse(access_token=create_access_token(subject=str(user.id)))


def _to_me_response(user: User) -> MeResponse:
    return MeResponse(
        id=str(user.id),
        email=user.email,
        is_active=user.is_active,
        full_name=user.full_name,
        display_name=user.display_name,
    )


@router.get("/me", response_model=MeResponse)
async def me(user: User = Depends(get_current_user)) -> MeResponse:
    return _to_me_response(user)


@router.patch("/me", response_model=MeResponse)
async def update_me(
    payload: ProfileUpdateRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
) -> MeResponse:
    data = payload.model_dump(exclude_unset=True)
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields provided to update.")

    # already whitespace-normalized by ProfileUpdateRequest
    user.full_name = data.get("full_name")

    await db.commit()
    await db.refresh(user)
    return _to_me_response(user)
