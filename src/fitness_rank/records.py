"""Personal records, weight history and the activity heatmap.

Pure functions over log lists, used by the records view and the MCP tools.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from fitness_rank.dates import local_day
from fitness_rank.models import CardioLog, WeightLog

# Sessions this short are ignored for top speed (sensor glitches)
MIN_MINUTES_FOR_SPEED_RECORD = 15

# Heatmap intensity thresholds in km, highest first
HEATMAP_THRESHOLDS: list[tuple[float, int]] = [(40, 4), (20, 3), (10, 2)]


@dataclass
class CardioRecords:
    total_distance: float = 0.0
    best_distance: float = 0.0
    best_calories: int = 0
    best_speed: float = 0.0  # km/h


@dataclass
class HeatmapCell:
    day: date
    count: int
    total_distance: float
    intensity: int


def speed_kmh(log: CardioLog) -> float:
    """Average speed in km/h. 0 when distance or duration is missing."""
    distance = log.distance or 0.0
    duration = log.duration or 0.0
    if distance == 0 or duration == 0:
        return 0.0
    value = distance / (duration / 60)
    return value if math.isfinite(value) else 0.0


def format_duration(total_minutes: float) -> str:
    """Decimal minutes -> 'm:ss'."""
    minutes = math.floor(total_minutes)
    seconds = round((total_minutes - minutes) * 60)
    if seconds == 60:
        minutes, seconds = minutes + 1, 0
    return f"{minutes}:{seconds:02d}"


def pace_per_km(log: CardioLog) -> str:
    """Running pace as 'm:ss' per km. '0:00' when distance or duration is missing."""
    distance = log.distance or 0.0
    duration = log.duration or 0.0
    if distance == 0 or duration == 0:
        return "0:00"
    return format_duration(duration / distance)


def cardio_records(cardio_logs: list[CardioLog]) -> CardioRecords:
    """All-time totals and personal bests for a list of cardio sessions."""
    if not cardio_logs:
        return CardioRecords()
    speeds = [
        speed_kmh(log) for log in cardio_logs
        if (log.duration or 0.0) > MIN_MINUTES_FOR_SPEED_RECORD
    ]
    return CardioRecords(
        total_distance=sum(log.distance or 0.0 for log in cardio_logs),
        best_distance=max(log.distance or 0.0 for log in cardio_logs),
        best_calories=max(log.calories or 0 for log in cardio_logs),
        best_speed=max(speeds, default=0.0),
    )


def daily_weight_series(weight_logs: list[WeightLog], now: datetime) -> list[tuple[date, float]]:
    """Average weight per local day, oldest first, rounded to 0.1 kg."""
    totals: dict[date, list[float]] = {}
    for log in weight_logs:
        totals.setdefault(local_day(log.date, now), []).append(log.weight or 0.0)
    return [
        (day, round(sum(values) / len(values), 1))
        for day, values in sorted(totals.items())
    ]


def weight_goal_progress(weight_logs: list[WeightLog], target_weight: float, now: datetime) -> float:
    """Percent of the way from the first logged weight to the target.

    Uses daily averages, so several weigh-ins on one day count once.
    Returns 0.0 with no data or when the start weight already equals the target.
    """
    series = daily_weight_series(weight_logs, now)
    if not series:
        return 0.0
    start = series[0][1]
    latest = series[-1][1]
    if start == target_weight:
        return 0.0
    return (start - latest) / (start - target_weight) * 100


def heatmap_intensity(count: int, total_distance: float) -> int:
    if count == 0:
        return 0
    for threshold, level in HEATMAP_THRESHOLDS:
        if total_distance > threshold:
            return level
    return 1


def activity_heatmap(cardio_logs: list[CardioLog], now: datetime, days: int = 365) -> list[HeatmapCell]:
    """One cell per day for the last `days` days (today included), oldest first."""
    today = local_day(now, now)
    start = today - timedelta(days=days - 1)
    counts: dict[date, int] = {}
    distances: dict[date, float] = {}
    for log in cardio_logs:
        day = local_day(log.date, now)
        counts[day] = counts.get(day, 0) + 1
        distances[day] = distances.get(day, 0.0) + (log.distance or 0.0)

    cells: list[HeatmapCell] = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        count = counts.get(day, 0)
        distance = distances.get(day, 0.0)
        cells.append(HeatmapCell(day, count, distance, heatmap_intensity(count, distance)))
    return cells
