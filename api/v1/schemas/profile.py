from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProfileIn(BaseModel):
    """Raw onboarding answers; type and range checks happen in the calculator."""
    age: Any = Field(None, description="whole years")
    height: Any = Field(None, description="centimetres")
    weight: Any = Field(None, description="kilograms")
    goal: Any = Field(
        None, examples=["lose weight", "gain weight", "maintain weight", "build_muscle"]
    )


class ProfileOut(BaseModel):
    age: int
    height: float
    weight: float
    goal: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
