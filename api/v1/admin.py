from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from services.auth import get_current_user
from services.db import User, get_session
from api.v1.schemas import UserList, UserOut

router = APIRouter()


@router.get("/users", response_model=UserList, summary="List every registered user")
async def list_users(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> UserList:
    if not settings.admin_email or user.email.lower() != settings.admin_email.lower():
        raise HTTPException(status_code=403, detail="Forbidden")

    rows = (await db.execute(select(User).order_by(User.id))).scalars().all()
    return UserList(users=[UserOut.model_validate(u) for u in rows])
