"""Goal-specific advice and calorie-share breakdown shown next to a plan."""

from __future__ import annotations

from typing import Mapping

from core.plan_calc import (
    BUILD_MUSCLE,
    GAIN,
    KCAL_PER_G_CARBS,
    KCAL_PER_G_FAT,
    KCAL_PER_G_PROTEIN,
    LOSE,
    MAINTAIN,
    goal_rule,
    round_half_up,
)

BASE_TIPS = [
    "Drink plenty of water throughout the day",
    "Track your progress regularly",
    "Stay consistent with your plan",
]

_GOAL_TIPS: dict[str, list[str]] = {
    LOSE.name: [
        "Create a moderate calorie deficit",
        "Focus on protein to maintain muscle mass",
        "Include fiber-rich foods to stay full",
        "Eat slowly and mindfully",
    ],
    GAIN.name: [
        "Eat frequent, nutrient-dense meals",
        "Include healthy fats in your diet",
        "Add strength training to build muscle",
        "Don't skip meals",
    ],
    BUILD_MUSCLE.name: [
        "Prioritize protein intake (aim for 35% of calories)",
        "Eat in a slight calorie surplus",
        "Focus on progressive overload in training",
        "Get adequate sleep for recovery",
        "Include post-workout protein",
    ],
    MAINTAIN.name: [
        "Focus on balanced, whole foods",
        "Maintain regular exercise routine",
        "Listen to your hunger cues",
        "Include variety in your meals",
    ],
}


def goal_tips(goal: str | None) -> list[str]:
    return BASE_TIPS + _GOAL_TIPS[goal_rule(goal).name]


def macro_shares(macros: Mapping[str, float]) -> dict[str, int]:
    """Percent of total calories coming from each macro."""
    protein = (macros.get("protein_g") or 0) * KCAL_PER_G_PROTEIN
    carbs = (macros.get("carbs_g") or 0) * KCAL_PER_G_CARBS
    fat = (macros.get("fat_g") or 0) * KCAL_PER_G_FAT
    total = protein + carbs + fat
    if not total:
        return {"protein": 0, "carbs": 0, "fat": 0}
    return {
        "protein": round_half_up(protein / total * 100),
        "carbs": round_half_up(carbs / total * 100),
        "fat": round_half_up(fat / total * 100),
    }
