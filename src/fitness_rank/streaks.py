"""Streak tracking for fitness-rank."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable

from fitness_rank.dates import local_day


@dataclass
class StreakInfo:
    current_streak: int
    longest_streak: int
    last_active_date: str | None  # YYYY-MM-DD
    is_active_today: bool


def active_days(dates: Iterable[datetime], now: datetime) -> set[date]:
    """Reduce log instants to the set of distinct local calendar days."""
    return {local_day(moment, now) for moment in dates}


def get_streak_from_dates(day_set: set[date], reference: date) -> int:
    """Count consecutive days backwards from reference while each is present."""
    streak = 0
    current = reference
    while current in day_set:
        streak += 1
        current -= timedelta(days=1)
    return streak


def _longest_run(day_set: set[date]) -> int:
    longest = 0
    streak = 0
    previous: date | None = None
    for day in sorted(day_set):
        if previous is not None and (day - previous).days == 1:
            streak += 1
        else:
            streak = 1
        longest = max(longest, streak)
        previous = day
    return longest


def calculate_streak(day_set: set[date], today: date) -> StreakInfo:
    """Calculate the current streak from a set of active days.

    Rules:
    - Count from today if today is active
    - Otherwise count from yesterday if yesterday is active (an unlogged today
      does not break the streak yet)
    - Otherwise the streak is 0
    - Only the run ending today/yesterday counts; longest_streak is reported separately
    """
    if not day_set:
        return StreakInfo(
            current_streak=0,
            longest_streak=0,
            last_active_date=None,
            is_active_today=False,
        )

    is_active_today = today in day_set
    yesterday = today - timedelta(days=1)

    if is_active_today:
        current_streak = get_streak_from_dates(day_set, today)
    elif yesterday in day_set:
        current_streak = get_streak_from_dates(day_set, yesterday)
    else:
        current_streak = 0

    return StreakInfo(
        current_streak=current_streak,
        longest_streak=max(_longest_run(day_set), current_streak),
        last_active_date=max(day_set).isoformat(),
        is_active_today=is_active_today,
    )


def streak_from_logs(dates: Iterable[datetime], now: datetime) -> StreakInfo:
    """Streak over the union of all log dates, anchored at now's local day."""
    return calculate_streak(active_days(dates, now), local_day(now, now))
