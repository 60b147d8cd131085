"""XP calculation engine for fitness-rank.

Pure functions that convert lifetime activity logs into XP points.
All calculations use integers (math.floor for rounding). XP is always a
full recomputation over every log; there is no incremental path.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from fitness_rank.models import ActivityLogs, NutritionStatus

# Base XP values
XP_PER_WEIGHT_LOG = 50
XP_PER_KM = 10
XP_PER_STRENGTH_SET = 20
XP_PER_BODYWEIGHT_UNIT = 1

NUTRITION_XP: dict[NutritionStatus, int] = {
    NutritionStatus.GREEN: 50,
    NutritionStatus.YELLOW: 30,
    NutritionStatus.ORANGE: 10,
    NutritionStatus.RED: 5,
}
DEFAULT_NUTRITION_XP = 5


@dataclass
class XPBreakdown:
    """XP contribution per log category."""

    weight: int = 0
    cardio: int = 0
    strength: int = 0
    bodyweight: int = 0
    nutrition: int = 0

    @property
    def total(self) -> int:
        return self.weight + self.cardio + self.strength + self.bodyweight + self.nutrition

    def as_dict(self) -> dict[str, int]:
        return {
            "weight": self.weight,
            "cardio": self.cardio,
            "strength": self.strength,
            "bodyweight": self.bodyweight,
            "nutrition": self.nutrition,
        }


def _clamp_non_negative(value: int) -> int:
    """Treat negative values as 0."""
    return max(0, value)


def nutrition_xp(status: NutritionStatus | None) -> int:
    """XP for a single nutrition log. Unknown statuses earn the red rate."""
    if status is None:
        return DEFAULT_NUTRITION_XP
    return NUTRITION_XP.get(status, DEFAULT_NUTRITION_XP)


def distance_xp(total_distance_km: float) -> int:
    """10 XP per km of lifetime distance, fractional XP truncated. Non-finite -> 0."""
    if not math.isfinite(total_distance_km):
        return 0
    return _clamp_non_negative(math.floor(total_distance_km * XP_PER_KM))


def calculate_xp(logs: ActivityLogs) -> XPBreakdown:
    """Fold every lifetime log into an XP breakdown. Order-independent."""
    total_distance = sum(log.distance or 0.0 for log in logs.cardio)
    bodyweight_units = sum(log.count or 0 for log in logs.bodyweight)

    return XPBreakdown(
        weight=len(logs.weight) * XP_PER_WEIGHT_LOG,
        cardio=distance_xp(total_distance),
        strength=len(logs.strength) * XP_PER_STRENGTH_SET,
        bodyweight=_clamp_non_negative(bodyweight_units * XP_PER_BODYWEIGHT_UNIT),
        nutrition=sum(nutrition_xp(log.status) for log in logs.nutrition),
    )


def calculate_total_xp(logs: ActivityLogs) -> int:
    return calculate_xp(logs).total
