"""
core/plan_calc.py
────────────────────────────────────────────────────────────────────────
Daily nutrition plan from a user's onboarding profile:

1. BMI + category (category from the unrounded value)
2. BMR  (Mifflin–St Jeor, single sex-neutral form: +5)
3. Activity-adjusted base (fixed sedentary multiplier, 1.4 for muscle gain)
4. Goal branch → calorie delta + macro split
5. Calories (floored at 1 200 kcal) and gram-level macros (Atwater 4/4/9)

All rounding is half-up (2008.5 → 2009), never banker's rounding.
Each macro is rounded on its own, so protein·4 + carbs·4 + fat·9 can sit
up to 0.5·(4 + 4 + 9) = 8.5 kcal away from the calorie target.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping

Logger = logging.getLogger(__name__)

MIN_CALORIES = 1200
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9
MAX_ATWATER_DRIFT = 0.5 * (KCAL_PER_G_PROTEIN + KCAL_PER_G_CARBS + KCAL_PER_G_FAT)

# inclusive sanity bounds
AGE_RANGE = (10, 120)
HEIGHT_RANGE = (100.0, 250.0)   # cm
WEIGHT_RANGE = (30.0, 300.0)    # kg


class InvalidProfile(ValueError):
    """Profile is missing a field or holds a value outside the sane bounds."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


# ──────────────────────────────────────────────────────────────────────
#  Goal table
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class GoalRule:
    name: str
    calorie_delta: int
    activity_factor: float
    protein_pct: float
    carbs_pct: float
    fat_pct: float


LOSE = GoalRule("lose_weight", -500, 1.2, 0.30, 0.40, 0.30)
GAIN = GoalRule("gain_weight", +500, 1.2, 0.25, 0.50, 0.25)
BUILD_MUSCLE = GoalRule("build_muscle", +300, 1.4, 0.35, 0.40, 0.25)
MAINTAIN = GoalRule("maintain_weight", 0, 1.2, 0.25, 0.45, 0.30)

_GOAL_ALIASES: dict[str, GoalRule] = {
    "lose weight": LOSE,
    "weight loss": LOSE,
    "lose": LOSE,
    "gain weight": GAIN,
    "weight gain": GAIN,
    "gain": GAIN,
    "build muscle": BUILD_MUSCLE,
    "muscle gain": BUILD_MUSCLE,
    "maintain weight": MAINTAIN,
    "maintain": MAINTAIN,
}


def _normalise_goal(goal: str) -> str:
    return " ".join(goal.lower().replace("_", " ").replace("-", " ").split())


def goal_rule(goal: str | None) -> GoalRule:
    """Resolve a free-text goal; anything unrecognised maps to maintain."""
    if not goal:
        return MAINTAIN
    return _GOAL_ALIASES.get(_normalise_goal(goal), MAINTAIN)


def round_half_up(value: float, ndigits: int = 0) -> float | int:
    q = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(repr(value)).quantize(q, rounding=ROUND_HALF_UP)
    return int(rounded) if ndigits == 0 else float(rounded)


def bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


# ──────────────────────────────────────────────────────────────────────
#  Profile dataclass
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Profile:
    age: int
    height: float        # cm
    weight: float        # kg
    goal: str = "maintain weight"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Profile":
        """Build a validated profile from a dict / ORM-ish mapping."""
        profile = cls(
            age=data.get("age"),             # type: ignore[arg-type]
            height=data.get("height"),       # type: ignore[arg-type]
            weight=data.get("weight"),       # type: ignore[arg-type]
            goal=data.get("goal"),           # type: ignore[arg-type]
        )
        validate_profile(profile)
        return profile


def _number(field: str, value: Any, bounds: tuple[float, float]) -> float:
    if value is None:
        raise InvalidProfile(field, f"{field} is required")
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidProfile(field, f"{field} must be a number")
    if value <= 0:
        raise InvalidProfile(field, f"{field} must be positive")
    lo, hi = bounds
    if not lo <= value <= hi:
        raise InvalidProfile(field, f"{field} must be between {lo:g} and {hi:g}")
    return float(value)


def validate_profile(profile: Profile) -> None:
    age = _number("age", profile.age, AGE_RANGE)
    if not age.is_integer():
        raise InvalidProfile("age", "age must be a whole number of years")
    _number("height", profile.height, HEIGHT_RANGE)
    _number("weight", profile.weight, WEIGHT_RANGE)
    if not isinstance(profile.goal, str) or not profile.goal.strip():
        raise InvalidProfile("goal", "goal is required")


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class PlanCalculator:
    """Source-of-truth for BMI, calorie target and macro grams."""

    # --------------- public entrypoint --------------------------------
    def plan(
        self, p: Profile, overrides: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        validate_profile(p)
        exact_bmi = self.bmi_exact(p)
        kcal = self.calories_target(p)
        result: dict[str, Any] = {
            "bmi": round_half_up(exact_bmi, 1),
            "bmi_category": bmi_category(exact_bmi),
            "calories_target": kcal,
            "macros": self.macros(p, kcal),
        }
        if overrides:
            result.update(overrides)
        return result

    # --------------- BMI / BMR / base ---------------------------------
    def bmi_exact(self, p: Profile) -> float:
        height_m = p.height / 100
        return p.weight / (height_m * height_m)

    def bmi(self, p: Profile) -> float:
        """Reported BMI, one decimal; classify on `bmi_exact`."""
        return round_half_up(self.bmi_exact(p), 1)

    def bmr(self, p: Profile) -> float:
        return 10 * p.weight + 6.25 * p.height - 5 * p.age + 5

    def activity_factor(self, p: Profile) -> float:
        return goal_rule(p.goal).activity_factor

    # --------------- Calories -----------------------------------------
    def calories_target(self, p: Profile) -> int:
        rule = goal_rule(p.goal)
        kcal = round_half_up(self.bmr(p) * rule.activity_factor + rule.calorie_delta)
        if kcal < MIN_CALORIES:
            Logger.debug("calorie target %s clamped to %s", kcal, MIN_CALORIES)
            return MIN_CALORIES
        return kcal

    # --------------- Macros -------------------------------------------
    def macros(self, p: Profile, kcal: int) -> dict[str, int]:
        rule = goal_rule(p.goal)
        return {
            "protein_g": round_half_up(kcal * rule.protein_pct / KCAL_PER_G_PROTEIN),
            "carbs_g": round_half_up(kcal * rule.carbs_pct / KCAL_PER_G_CARBS),
            "fat_g": round_half_up(kcal * rule.fat_pct / KCAL_PER_G_FAT),
        }


_calc = PlanCalculator()


def compute_plan(
    profile: Profile | Mapping[str, Any],
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Pure function form of `PlanCalculator.plan`; accepts a dict too."""
    if not isinstance(profile, Profile):
        profile = Profile.from_mapping(profile)
    return _calc.plan(profile, overrides)
