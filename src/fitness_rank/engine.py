"""Full gamification evaluation over one log snapshot.

Every value is recomputed from the raw logs on each call; nothing derived
is cached or stored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime

from fitness_rank.badges import Badge, calculate_badges, group_badges
from fitness_rank.dates import to_local
from fitness_rank.levels import LevelInfo, resolve_level
from fitness_rank.models import ActivityLogs, NutritionStatus
from fitness_rank.streaks import StreakInfo, streak_from_logs
from fitness_rank.xp import XPBreakdown, calculate_xp

EARLY_BIRD_HOURS = range(4, 9)
NIGHT_OWL_HOURS = set(range(20, 24)) | {0, 1}


@dataclass
class StatsSnapshot:
    """Lifetime statistics that drive the badge families."""

    streak: int = 0
    total_dist: float = 0.0
    total_workouts: int = 0
    total_green_food: int = 0
    total_bw_reps: int = 0
    early_bird_count: int = 0
    night_owl_count: int = 0
    weekend_count: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class TimeBuckets:
    early_bird: int = 0
    night_owl: int = 0
    weekend: int = 0


@dataclass
class Evaluation:
    stats: StatsSnapshot
    streak: StreakInfo
    xp: XPBreakdown
    level: LevelInfo
    badges: list[Badge] = field(default_factory=list)  # grouped for display
    all_badges: list[Badge] = field(default_factory=list)

    @property
    def total_xp(self) -> int:
        return self.xp.total

    @property
    def progress_to_next_level(self) -> float:
        return self.level.progress_percent

    def to_dict(self) -> dict:
        return {
            "xp": self.total_xp,
            "level": self.level.level,
            "progressToNextLevel": self.progress_to_next_level,
            "xpBreakdown": self.xp.as_dict(),
            "stats": {
                "streak": self.stats.streak,
                "totalDist": self.stats.total_dist,
                "totalWorkouts": self.stats.total_workouts,
                "totalGreenFood": self.stats.total_green_food,
                "totalBwReps": self.stats.total_bw_reps,
                "earlyBirdCount": self.stats.early_bird_count,
                "nightOwlCount": self.stats.night_owl_count,
                "weekendCount": self.stats.weekend_count,
            },
            "longestStreak": self.streak.longest_streak,
            "badges": [b.to_dict() for b in self.badges],
            "badgesEarned": sum(1 for b in self.all_badges if b.is_earned),
            "badgesTotal": len(self.all_badges),
        }


def count_time_buckets(dates: list[datetime], now: datetime) -> TimeBuckets:
    """Count logs by local hour-of-day and day-of-week.

    Early bird: hour in [4, 9). Night owl: hour in [20, 24) or [0, 2).
    Weekend: Saturday or Sunday. One log may land in several buckets.
    """
    buckets = TimeBuckets()
    for moment in dates:
        local = to_local(moment, now)
        if local.hour in EARLY_BIRD_HOURS:
            buckets.early_bird += 1
        if local.hour in NIGHT_OWL_HOURS:
            buckets.night_owl += 1
        if local.weekday() >= 5:
            buckets.weekend += 1
    return buckets


def build_stats(logs: ActivityLogs, now: datetime, streak: StreakInfo | None = None) -> StatsSnapshot:
    """Build the lifetime StatsSnapshot used as badge input."""
    if streak is None:
        streak = streak_from_logs(logs.all_dates(), now)
    buckets = count_time_buckets(logs.all_dates(), now)
    return StatsSnapshot(
        streak=streak.current_streak,
        total_dist=sum(log.distance or 0.0 for log in logs.cardio),
        total_workouts=len(logs.strength),
        total_green_food=sum(1 for log in logs.nutrition if log.status is NutritionStatus.GREEN),
        total_bw_reps=sum(log.count or 0 for log in logs.bodyweight),
        early_bird_count=buckets.early_bird,
        night_owl_count=buckets.night_owl,
        weekend_count=buckets.weekend,
    )


def evaluate(logs: ActivityLogs, now: datetime) -> Evaluation:
    """Run streak, XP, level and badge evaluation for the snapshot at now."""
    streak = streak_from_logs(logs.all_dates(), now)
    stats = build_stats(logs, now, streak=streak)
    xp = calculate_xp(logs)
    level = resolve_level(xp.total)
    all_badges = calculate_badges(stats, level.level)
    return Evaluation(
        stats=stats,
        streak=streak,
        xp=xp,
        level=level,
        badges=group_badges(all_badges),
        all_badges=all_badges,
    )
