"""Badge family definitions and evaluation for fitness-rank.

Two stages: calculate_badges() expands every family into one badge per
milestone, then group_badges() collapses each family to what the dashboard
shows and orders the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from fitness_rank.engine import StatsSnapshot


class BadgeTier(str, Enum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"
    DIAMOND = "diamond"


TIERS: list[BadgeTier] = list(BadgeTier)

_NUMERALS = ["I", "II", "III", "IV", "V", "VI", "VII"]


@dataclass
class BadgeFamily:
    group_id: str
    name: str
    icon: str
    milestones: list[int]
    describe: Callable[[int], str]
    check_field: str


@dataclass
class Badge:
    id: str
    group_id: str
    name: str
    description: str
    tier: BadgeTier
    icon: str
    sort_order: int
    is_earned: bool
    progress: float
    target: int

    @property
    def completion(self) -> float:
        return self.progress / self.target if self.target > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "groupId": self.group_id,
            "name": self.name,
            "description": self.description,
            "tier": self.tier.value,
            "icon": self.icon,
            "sortOrder": self.sort_order,
            "isEarned": self.is_earned,
            "progress": self.progress,
            "target": self.target,
        }


BADGE_FAMILIES: list[BadgeFamily] = [
    BadgeFamily(
        group_id="streak",
        name="Consistency",
        icon="flame",
        milestones=[3, 7, 14, 30, 60, 100, 365],
        describe=lambda v: f"{v} Day Streak",
        check_field="streak",
    ),
    BadgeFamily(
        group_id="distance",
        name="Road Runner",
        icon="footprints",
        milestones=[42, 100, 500, 1000, 2500, 5000, 10000],
        describe=lambda v: f"{v}km Total Distance",
        check_field="total_dist",
    ),
    BadgeFamily(
        group_id="workouts",
        name="Iron Warrior",
        icon="dumbbell",
        milestones=[10, 25, 50, 100, 250, 500, 1000],
        describe=lambda v: f"{v} Workouts Completed",
        check_field="total_workouts",
    ),
    BadgeFamily(
        group_id="food",
        name="Clean Eater",
        icon="salad",
        milestones=[10, 50, 100, 200, 365, 500, 1000],
        describe=lambda v: f"{v} Healthy Meals",
        check_field="total_green_food",
    ),
    BadgeFamily(
        group_id="level",
        name="Legend",
        icon="crown",
        milestones=[2, 5, 10, 20, 30, 50, 100],
        describe=lambda v: f"Reach Level {v}",
        check_field="level",
    ),
    BadgeFamily(
        group_id="bodyweight",
        name="Calisthenics",
        icon="zap",
        milestones=[100, 500, 1000, 5000, 10000, 25000, 50000],
        describe=lambda v: f"{v} Total Reps",
        check_field="total_bw_reps",
    ),
    BadgeFamily(
        group_id="early",
        name="Early Bird",
        icon="sun",
        milestones=[5, 20, 50, 100, 200],
        describe=lambda v: f"{v} Morning Workouts",
        check_field="early_bird_count",
    ),
    BadgeFamily(
        group_id="night",
        name="Night Owl",
        icon="moon",
        milestones=[5, 20, 50, 100, 200],
        describe=lambda v: f"{v} Late Night Workouts",
        check_field="night_owl_count",
    ),
    BadgeFamily(
        group_id="weekend",
        name="Weekend Warrior",
        icon="calendar",
        milestones=[10, 50, 100, 250, 500],
        describe=lambda v: f"{v} Weekend Activities",
        check_field="weekend_count",
    ),
]


def tier_for_index(index: int) -> BadgeTier:
    """Milestone index -> tier. Indices past the last tier stay diamond."""
    return TIERS[min(max(index, 0), len(TIERS) - 1)]


def _numeral(index: int) -> str:
    return _NUMERALS[index] if index < len(_NUMERALS) else "Max"


def family_badges(family: BadgeFamily, current_value: float) -> list[Badge]:
    """One badge per milestone of a family, in milestone order."""
    return [
        Badge(
            id=f"{family.group_id}_{index}",
            group_id=family.group_id,
            name=f"{family.name} {_numeral(index)}",
            description=family.describe(target),
            tier=tier_for_index(index),
            icon=family.icon,
            sort_order=index * 100,
            is_earned=current_value >= target,
            progress=current_value,
            target=target,
        )
        for index, target in enumerate(family.milestones)
    ]


def calculate_badges(stats: StatsSnapshot, level: int) -> list[Badge]:
    """Stage 1: the full flat badge list, in catalog order."""
    values = stats.as_dict()
    values["level"] = level
    badges: list[Badge] = []
    for family in BADGE_FAMILIES:
        badges.extend(family_badges(family, values.get(family.check_field, 0)))
    return badges


def sort_badges(badges: list[Badge]) -> list[Badge]:
    """Earned first (highest target first), then unearned by completion ratio.

    Ties keep their input order.
    """
    def key(badge: Badge) -> tuple[int, float]:
        if badge.is_earned:
            return (0, -badge.target)
        return (1, -badge.completion)

    return sorted(badges, key=key)


def group_badges(badges: list[Badge]) -> list[Badge]:
    """Stage 2: collapse each family to its best earned and next unearned badge.

    The earned badge is the highest-indexed one; the next target is the
    lowest-indexed unearned one. Families with nothing earned show only
    their next target, and fully-earned families show only their top badge.
    """
    by_group: dict[str, list[Badge]] = {}
    for badge in badges:
        by_group.setdefault(badge.group_id, []).append(badge)

    visible: list[Badge] = []
    for group in by_group.values():
        ordered = sorted(group, key=lambda b: b.sort_order)
        earned = [b for b in ordered if b.is_earned]
        unearned = [b for b in ordered if not b.is_earned]
        if earned:
            visible.append(earned[-1])
        if unearned:
            visible.append(unearned[0])
    return sort_badges(visible)


def get_closest_badges(badges: list[Badge], n: int = 3) -> list[Badge]:
    """Return the N unearned badges closest to completion."""
    in_progress = [b for b in badges if not b.is_earned]
    in_progress.sort(key=lambda b: b.completion, reverse=True)
    return in_progress[:n]
