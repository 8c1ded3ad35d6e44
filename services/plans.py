"""
services/plans.py
────────────────────────────────────────────────────────────────────────
Glue between the stored profile row and the pure calculator: compute a
plan snapshot and append it to the `plans` table.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.plan_calc import Profile as PlanProfile, compute_plan
from services.db import Plan, Profile

_LOG = logging.getLogger(__name__)


def build_plan_data(
    profile: Profile, overrides: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Profile snapshot + computed result (+ caller overrides on top)."""
    snapshot = {
        "goal": profile.goal,
        "age": profile.age,
        "height": profile.height,
        "weight": profile.weight,
    }
    result = compute_plan(
        PlanProfile(
            age=profile.age,
            height=profile.height,
            weight=profile.weight,
            goal=profile.goal,
        )
    )
    return {**snapshot, **result, **(overrides or {})}


async def create_plan(
    db: AsyncSession,
    profile: Profile,
    overrides: Mapping[str, Any] | None = None,
) -> Plan:
    data = build_plan_data(profile, overrides)
    bmi = data.get("bmi")
    plan = Plan(
        user_id=profile.user_id,
        plan_data=data,
        bmi=bmi if isinstance(bmi, (int, float)) else None,
    )
    db.add(plan)
    await db.commit()
    await db.refresh(plan)
    _LOG.info("plan %s created for user %s", plan.id, profile.user_id)
    return plan


async def get_profile(db: AsyncSession, user_id: int) -> Profile | None:
    return (
        await db.execute(select(Profile).where(Profile.user_id == user_id))
    ).scalar_one_or_none()


async def list_plans(
    db: AsyncSession, user_id: int, latest: bool = False
) -> list[Plan]:
    q = (
        select(Plan)
        .where(Plan.user_id == user_id)
        .order_by(Plan.created_at.desc(), Plan.id.desc())
    )
    if latest:
        q = q.limit(1)
    return list((await db.execute(q)).scalars().all())
