from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class PlanCreate(BaseModel):
    plan_data: dict[str, Any] | None = None   # merged over the computed plan
    bmi: float | None = None                  # replaces the computed BMI


class PlanUpdate(BaseModel):
    plan_data: dict[str, Any] | None = None
    bmi: float | None = None


class PlanOut(BaseModel):
    id: int
    user_id: int
    plan_data: dict[str, Any]
    bmi: float | None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PlanEnvelope(BaseModel):
    message: str
    plan: PlanOut


class PlanList(BaseModel):
    message: str
    plans: PlanOut | list[PlanOut]


class PlanSummary(BaseModel):
    plan: PlanOut
    macro_shares: dict[str, int]
    tips: list[str]
