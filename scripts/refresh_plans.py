"""
scripts/refresh_plans.py
────────────────────────────────────────────────────────────────────────
Recompute – and append – a nutrition plan from the stored profile.

Every user with a profile:

    python -m scripts.refresh_plans

One user (e.g. after a formula change or a manual profile fix):

    python -m scripts.refresh_plans --user 123
"""
from __future__ import annotations

import asyncio
import logging
from argparse import ArgumentParser

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.plan_calc import InvalidProfile
from services.db import Profile, dispose_engine, init_models, session_factory
from services.plans import create_plan, get_profile

_LOG = logging.getLogger(__name__)


async def refresh_user(db: AsyncSession, user_id: int) -> bool:
    profile = await get_profile(db, user_id)
    if profile is None:
        _LOG.info("skip %s – no profile", user_id)
        return False
    try:
        plan = await create_plan(db, profile)
    except InvalidProfile as exc:
        _LOG.warning("skip %s – invalid profile (%s: %s)", user_id, exc.field, exc.message)
        return False
    _LOG.info("✓ plan %s stored for user %s", plan.id, user_id)
    return True


async def refresh(user_id: int | None = None) -> int:
    await init_models()
    refreshed = 0
    try:
        async with session_factory()() as db:
            if user_id is not None:
                ids = [user_id]
            else:
                ids = list((await db.execute(select(Profile.user_id))).scalars().all())
            for uid in ids:
                refreshed += await refresh_user(db, uid)
    finally:
        await dispose_engine()
    return refreshed


# ───────────────────────────────
# CLI entrypoint
# ───────────────────────────────
def main() -> None:  # pragma: no cover
    ap = ArgumentParser()
    ap.add_argument("--user", type=int, help="refresh only this user-id")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    count = asyncio.run(refresh(args.user))
    print(f"{count} plan(s) refreshed")


if __name__ == "__main__":  # pragma: no cover
    main()
