from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.plan_calc import Profile as PlanProfile
from services.auth import get_current_user
from services.db import Profile, User, get_session
from services.plans import create_plan, get_profile
from api.v1.schemas import PlanOut, ProfileIn, ProfileOut

_LOG = logging.getLogger(__name__)

router = APIRouter()


def _validated(body: ProfileIn) -> PlanProfile:
    """Raises `InvalidProfile` (→ 400) on missing / out-of-range answers."""
    return PlanProfile.from_mapping(body.model_dump())


# ───────────────────────── create ──────────────────────────
@router.post("", status_code=status.HTTP_200_OK, summary="Save onboarding answers")
async def submit_onboarding(
    body: ProfileIn,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> dict:
    checked = _validated(body)
    if await get_profile(db, user.id):
        raise HTTPException(400, "Profile already exists for this user")

    profile = Profile(
        user_id=user.id,
        age=int(checked.age),
        height=checked.height,
        weight=checked.weight,
        goal=checked.goal,
    )
    db.add(profile)
    await db.commit()
    await db.refresh(profile)
    _LOG.info("onboarding saved for user %s", user.id)

    plan = await create_plan(db, profile)
    return {
        "message": "Onboarding complete",
        "profile": ProfileOut.model_validate(profile),
        "plan": PlanOut.model_validate(plan),
    }


# ───────────────────────── read ────────────────────────────
@router.get("", summary="Fetch onboarding answers")
async def fetch_onboarding(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> dict:
    profile = await get_profile(db, user.id)
    if profile is None:
        raise HTTPException(404, "Onboarding data not found")
    return {"onboarding_data": ProfileOut.model_validate(profile)}


# ───────────────────────── replace ─────────────────────────
@router.put("", summary="Replace onboarding answers and recompute the plan")
async def update_onboarding(
    body: ProfileIn,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> dict:
    checked = _validated(body)
    profile = await get_profile(db, user.id)
    if profile is None:
        raise HTTPException(400, "Profile does not exist for this user")

    profile.age = int(checked.age)
    profile.height = checked.height
    profile.weight = checked.weight
    profile.goal = checked.goal
    await db.commit()
    await db.refresh(profile)
    _LOG.info("onboarding updated for user %s", user.id)

    plan = await create_plan(db, profile)
    return {
        "message": "Onboarding updated",
        "profile": ProfileOut.model_validate(profile),
        "plan": PlanOut.model_validate(plan),
    }
