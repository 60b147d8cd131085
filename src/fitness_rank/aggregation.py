"""Per-category activity summaries for a time window.

Pure functions that fold the raw log collections into totals and averages.
No side effects, no I/O - accepts the log snapshot and `now` as input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, TypeVar

from fitness_rank.dates import local_day
from fitness_rank.models import (
    ActivityLogs,
    BodyweightLog,
    CardioLog,
    NutritionLog,
    NutritionStatus,
    WeightLog,
)

T = TypeVar("T")


class TimeWindow(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    OVERALL = "overall"


# Ordinal grade per nutrition status, used for the window average
NUTRITION_SCORES: dict[NutritionStatus, int] = {
    NutritionStatus.GREEN: 3,
    NutritionStatus.YELLOW: 2,
    NutritionStatus.ORANGE: 1,
    NutritionStatus.RED: 0,
}

RUNNING = "running"
CYCLING = "cycling"
OTHER_BODYWEIGHT = "Other"


@dataclass
class CardioTotals:
    sessions: int = 0
    duration: float = 0.0
    distance: float = 0.0
    calories: int = 0
    elevation_gain: float = 0.0
    elevation_loss: float = 0.0

    def add(self, log: CardioLog) -> None:
        self.sessions += 1
        self.duration += log.duration or 0.0
        self.distance += log.distance or 0.0
        self.calories += log.calories or 0
        self.elevation_gain += log.elevation_gain or 0.0
        self.elevation_loss += log.elevation_loss or 0.0


@dataclass
class BodyweightTotal:
    count: int = 0
    unit: str = "reps"


@dataclass
class WindowSummary:
    """Aggregated activity for one window."""

    window: TimeWindow
    avg_weight: float
    weight_entries: int
    cardio: CardioTotals
    cardio_by_category: dict[str, CardioTotals] = field(default_factory=dict)
    sets_count: int = 0
    total_volume: float = 0.0
    bw_count: int = 0
    bw_total: int = 0
    bw_by_type: dict[str, BodyweightTotal] = field(default_factory=dict)
    nutrition_score: float = 0.0
    nutrition_entries: int = 0

    def to_dict(self) -> dict:
        return {
            "window": self.window.value,
            "avgWeight": round(self.avg_weight, 2),
            "weightEntries": self.weight_entries,
            "cardio": _cardio_dict(self.cardio),
            "cardioByCategory": {
                name: _cardio_dict(totals) for name, totals in self.cardio_by_category.items()
            },
            "setsCount": self.sets_count,
            "totalVolume": round(self.total_volume, 2),
            "bwCount": self.bw_count,
            "bwTotal": self.bw_total,
            "bwByType": {
                name: {"count": totals.count, "unit": totals.unit} for name, totals in self.bw_by_type.items()
            },
            "nutritionScore": round(self.nutrition_score, 2),
            "nutritionEntries": self.nutrition_entries,
        }


def _cardio_dict(totals: CardioTotals) -> dict:
    return {
        "sessions": totals.sessions,
        "duration": round(totals.duration, 2),
        "distance": round(totals.distance, 2),
        "calories": totals.calories,
        "elevationGain": round(totals.elevation_gain, 1),
        "elevationLoss": round(totals.elevation_loss, 1),
    }


def in_window(moment: datetime, window: TimeWindow, now: datetime) -> bool:
    """True if a log instant falls in the window anchored at now.

    DAILY: same local calendar day. WEEKLY: same ISO week (Monday start).
    MONTHLY: same calendar month. OVERALL: always.
    """
    if window is TimeWindow.OVERALL:
        return True
    day = local_day(moment, now)
    today = local_day(now, now)
    if window is TimeWindow.DAILY:
        return day == today
    if window is TimeWindow.WEEKLY:
        return day.isocalendar()[:2] == today.isocalendar()[:2]
    return (day.year, day.month) == (today.year, today.month)


def filter_window(logs: Iterable[T], window: TimeWindow, now: datetime) -> list[T]:
    return [log for log in logs if in_window(log.date, window, now)]


def cardio_category(log: CardioLog) -> str:
    """Running is tagged by exact equipment name; everything else is a bike."""
    return RUNNING if log.is_running else CYCLING


def average_weight(weight_logs: list[WeightLog], window: TimeWindow, now: datetime) -> float:
    """Average in-window weight, else the most recent all-time weight, else 0."""
    in_range = filter_window(weight_logs, window, now)
    if in_range:
        return sum(log.weight or 0.0 for log in in_range) / len(in_range)
    if not weight_logs:
        return 0.0
    # timestamp() orders naive and aware instants together
    latest = max(weight_logs, key=lambda log: log.date.timestamp())
    return latest.weight or 0.0


def nutrition_score(nutrition_logs: list[NutritionLog], window: TimeWindow, now: datetime) -> float:
    """Average ordinal grade of in-window logs. No entries -> 0, never the all-time value."""
    in_range = filter_window(nutrition_logs, window, now)
    if not in_range:
        return 0.0
    total = sum(NUTRITION_SCORES.get(log.status, 0) for log in in_range)
    return total / len(in_range)


def bodyweight_by_type(bodyweight_logs: list[BodyweightLog]) -> dict[str, BodyweightTotal]:
    """Total count per exercise type. Planking is summed in seconds, the rest in reps."""
    totals: dict[str, BodyweightTotal] = {}
    for log in bodyweight_logs:
        name = log.type.value if log.type is not None else OTHER_BODYWEIGHT
        unit = log.type.unit if log.type is not None else "reps"
        totals.setdefault(name, BodyweightTotal(unit=unit)).count += log.count or 0
    return totals


def aggregate_window(logs: ActivityLogs, window: TimeWindow, now: datetime) -> WindowSummary:
    """Aggregate every category for the given window."""
    cardio = CardioTotals()
    by_category = {RUNNING: CardioTotals(), CYCLING: CardioTotals()}
    for log in filter_window(logs.cardio, window, now):
        cardio.add(log)
        by_category[cardio_category(log)].add(log)

    sets = filter_window(logs.strength, window, now)
    bodyweight = filter_window(logs.bodyweight, window, now)

    return WindowSummary(
        window=window,
        avg_weight=average_weight(logs.weight, window, now),
        weight_entries=len(filter_window(logs.weight, window, now)),
        cardio=cardio,
        cardio_by_category=by_category,
        sets_count=len(sets),
        total_volume=sum(log.volume for log in sets),
        bw_count=len(bodyweight),
        bw_total=sum(log.count or 0 for log in bodyweight),
        bw_by_type=bodyweight_by_type(bodyweight),
        nutrition_score=nutrition_score(logs.nutrition, window, now),
        nutrition_entries=len(filter_window(logs.nutrition, window, now)),
    )
