from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from services.auth import create_token, email_domain_accepts_mail, hash_password, verify_password
from services.db import User, get_session
from api.v1.schemas import AuthOut, LoginIn, SignupIn, UserOut

_LOG = logging.getLogger(__name__)

router = APIRouter()


async def _user_by_email(db: AsyncSession, email: str) -> User | None:
    return (
        await db.execute(select(User).where(User.email == email))
    ).scalar_one_or_none()


# ───────────────────────── signup ──────────────────────────
@router.post(
    "/signup",
    response_model=AuthOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user and return a bearer token",
)
async def signup(
    body: SignupIn,
    db: AsyncSession = Depends(get_session),
) -> AuthOut:
    email = str(body.email)
    if settings.check_email_domain and not await email_domain_accepts_mail(email):
        raise HTTPException(status_code=400, detail="Invalid email domain")

    if await _user_by_email(db, email):
        raise HTTPException(status_code=400, detail="Email already in use")

    user = User(name=body.username, email=email, password_hash=hash_password(body.password))
    db.add(user)
    await db.commit()
    await db.refresh(user)

    _LOG.info("user %s signed up", user.id)
    return AuthOut(
        user=UserOut.model_validate(user),
        token=create_token(user),
        message="User registered successfully",
    )


# ───────────────────────── login ───────────────────────────
@router.post("/login", response_model=AuthOut, summary="Exchange credentials for a token")
async def login(
    body: LoginIn,
    db: AsyncSession = Depends(get_session),
) -> AuthOut:
    user = await _user_by_email(db, str(body.email))
    if user is None or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=400, detail="Invalid email or password")

    _LOG.info("user %s logged in", user.id)
    return AuthOut(
        user=UserOut.model_validate(user),
        token=create_token(user),
        message="Login successful",
    )
