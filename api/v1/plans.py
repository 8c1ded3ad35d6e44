from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.goal_tips import goal_tips, macro_shares
from services.auth import get_current_user
from services.db import Plan, User, get_session
from services.plans import create_plan, get_profile, list_plans
from api.v1.schemas import PlanCreate, PlanEnvelope, PlanList, PlanOut, PlanSummary, PlanUpdate

_LOG = logging.getLogger(__name__)

router = APIRouter()


# ───────────────────────── generate ────────────────────────
@router.post(
    "",
    response_model=PlanEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Compute a plan from the stored profile and save it",
)
async def generate_plan(
    body: PlanCreate | None = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> PlanEnvelope:
    profile = await get_profile(db, user.id)
    if profile is None:
        raise HTTPException(404, "User profile not found. Please complete onboarding first.")

    overrides: dict = {}
    if body and body.bmi is not None:
        overrides["bmi"] = body.bmi
    if body and body.plan_data:
        overrides.update(body.plan_data)

    plan = await create_plan(db, profile, overrides)
    return PlanEnvelope(message="Plan generated successfully", plan=PlanOut.model_validate(plan))


# ───────────────────────── read ────────────────────────────
@router.get("", response_model=PlanList, summary="All plans, newest first (or only the latest)")
async def get_plans(
    latest: bool = Query(False),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> PlanList:
    plans = await list_plans(db, user.id, latest=latest)
    if not plans:
        raise HTTPException(404, "No plans found for this user")

    if latest:
        return PlanList(message="Latest plan retrieved", plans=PlanOut.model_validate(plans[0]))
    return PlanList(
        message="Plans retrieved",
        plans=[PlanOut.model_validate(p) for p in plans],
    )


@router.get("/latest/summary", response_model=PlanSummary)
async def latest_summary(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> PlanSummary:
    plans = await list_plans(db, user.id, latest=True)
    if not plans:
        raise HTTPException(404, "No plans found for this user")

    plan = plans[0]
    data = plan.plan_data or {}
    return PlanSummary(
        plan=PlanOut.model_validate(plan),
        macro_shares=macro_shares(data.get("macros") or {}),
        tips=goal_tips(data.get("goal")),
    )


# ───────────────────────── customise ───────────────────────
@router.put("/{plan_id}", response_model=PlanEnvelope)
async def update_plan(
    plan_id: int,
    body: PlanUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> PlanEnvelope:
    if not body.plan_data and body.bmi is None:
        raise HTTPException(400, "plan_data or bmi is required for update")

    plan = await db.get(Plan, plan_id)
    if plan is None or plan.user_id != user.id:
        raise HTTPException(404, "Plan not found")

    if body.plan_data:
        # reassign so the JSON column is flagged dirty
        plan.plan_data = {**(plan.plan_data or {}), **body.plan_data}
    if body.bmi is not None:
        plan.bmi = body.bmi

    await db.commit()
    await db.refresh(plan)
    _LOG.info("plan %s updated for user %s", plan.id, user.id)
    return PlanEnvelope(message="Plan updated successfully", plan=PlanOut.model_validate(plan))
