from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth import get_current_user, hash_password, verify_password
from services.db import User, get_session
from services.plans import get_profile
from api.v1.schemas import (
    PasswordChange,
    ProfileOut,
    UserEnvelope,
    UserOut,
    UserProfileEnvelope,
    UserUpdate,
)

_LOG = logging.getLogger(__name__)

router = APIRouter()

MIN_PASSWORD_LEN = 6


# ───────────────────────── fetch ───────────────────────────
@router.get("/me", response_model=UserEnvelope)
async def fetch_me(user: User = Depends(get_current_user)) -> UserEnvelope:
    return UserEnvelope(
        user=UserOut.model_validate(user),
        message="User data retrieved successfully",
    )


@router.get("/me/profile", response_model=UserProfileEnvelope)
async def fetch_me_with_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> UserProfileEnvelope:
    profile = await get_profile(db, user.id)
    return UserProfileEnvelope(
        user=UserOut.model_validate(user),
        profile=ProfileOut.model_validate(profile) if profile else None,
        message="User profile data retrieved successfully",
    )


# ───────────────────────── update ──────────────────────────
@router.put("/me", response_model=UserEnvelope)
async def update_me(
    body: UserUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> UserEnvelope:
    if not body.name and not body.email:
        raise HTTPException(400, "At least one field (name or email) is required")

    if body.email:
        taken = (
            await db.execute(
                select(User.id).where(User.email == str(body.email), User.id != user.id)
            )
        ).scalar_one_or_none()
        if taken is not None:
            raise HTTPException(400, "Email already in use")
        user.email = str(body.email)

    if body.name:
        user.name = body.name

    await db.commit()
    await db.refresh(user)
    _LOG.info("user %s updated", user.id)
    return UserEnvelope(user=UserOut.model_validate(user), message="User updated successfully")


@router.put("/me/password", status_code=status.HTTP_200_OK)
async def change_password(
    body: PasswordChange,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, str]:
    if not body.current_password or not body.new_password:
        raise HTTPException(400, "Both current_password and new_password are required")
    if len(body.new_password) < MIN_PASSWORD_LEN:
        raise HTTPException(
            400, f"New password must be at least {MIN_PASSWORD_LEN} characters long"
        )
    if not verify_password(body.current_password, user.password_hash):
        raise HTTPException(400, "Current password is incorrect")

    user.password_hash = hash_password(body.new_password)
    await db.commit()
    _LOG.info("password updated for user %s", user.id)
    return {"message": "Password updated successfully"}
