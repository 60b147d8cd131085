"""Activity log records for fitness-rank.

Plain dataclasses for the five log collections plus the closed enums for
their categorical fields. Computations never mutate these records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from itertools import chain

RUNNING_EQUIPMENT = "Running"

BIKE_EQUIPMENT: dict[str, str] = {
    "Hammer Speed Race": "Indoor Trainer",
    "Canyon Ultimate CF 7": "Road Racer",
    "Canyon Precede:ON": "City E-Bike",
    "Triban RC 520": "Gravel Bike",
}


class NutritionStatus(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"

    @classmethod
    def parse(cls, raw: object) -> NutritionStatus:
        """Map a stored status to the enum. Unknown values fall to RED, the lowest bucket."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.RED


class BodyweightType(str, Enum):
    SITUPS = "Situps"
    PUSHUPS = "Pushups"
    PLANKING = "Planking"

    @classmethod
    def parse(cls, raw: object) -> BodyweightType | None:
        if isinstance(raw, cls):
            return raw
        for member in cls:
            if str(raw).strip().lower() == member.value.lower():
                return member
        return None

    @property
    def unit(self) -> str:
        return "s" if self is BodyweightType.PLANKING else "reps"


@dataclass(frozen=True)
class WeightLog:
    id: str
    date: datetime
    weight: float = 0.0  # kg


@dataclass(frozen=True)
class CardioLog:
    id: str
    date: datetime
    equipment: str = ""
    duration: float = 0.0  # minutes
    distance: float = 0.0  # km
    calories: int = 0
    elevation_gain: float | None = None  # metres
    elevation_loss: float | None = None

    @property
    def is_running(self) -> bool:
        return self.equipment == RUNNING_EQUIPMENT


@dataclass(frozen=True)
class StrengthLog:
    """One logged set of a strength exercise."""

    id: str
    date: datetime
    exercise: str = ""
    weight: float = 0.0  # kg
    reps: int = 0

    @property
    def volume(self) -> float:
        return self.weight * self.reps


@dataclass(frozen=True)
class BodyweightLog:
    id: str
    date: datetime
    type: BodyweightType | None = None
    count: int = 0  # reps, or seconds for planking


@dataclass(frozen=True)
class NutritionLog:
    id: str
    date: datetime
    status: NutritionStatus = NutritionStatus.RED


@dataclass
class ActivityLogs:
    """Snapshot of all five log collections at one instant."""

    weight: list[WeightLog] = field(default_factory=list)
    cardio: list[CardioLog] = field(default_factory=list)
    strength: list[StrengthLog] = field(default_factory=list)
    bodyweight: list[BodyweightLog] = field(default_factory=list)
    nutrition: list[NutritionLog] = field(default_factory=list)

    def all_dates(self) -> list[datetime]:
        """Dates of every log across all categories."""
        return [
            log.date
            for log in chain(self.weight, self.cardio, self.strength, self.bodyweight, self.nutrition)
        ]

    def total_count(self) -> int:
        return (
            len(self.weight) + len(self.cardio) + len(self.strength)
            + len(self.bodyweight) + len(self.nutrition)
        )

    def is_empty(self) -> bool:
        return self.total_count() == 0
