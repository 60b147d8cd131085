"""Level progression calculation. Pure functions, no side effects."""

from dataclasses import dataclass

XP_PER_LEVEL = 1000


@dataclass
class LevelInfo:
    level: int
    level_start_xp: int
    xp_in_level: int
    xp_for_next: int
    progress_percent: float


def level_from_xp(total_xp: int) -> int:
    """Given total XP, return the current level. Level 1 starts at 0 XP; no cap."""
    if total_xp <= 0:
        return 1
    return total_xp // XP_PER_LEVEL + 1


def level_start_xp(level: int) -> int:
    """Total XP at which a level begins."""
    return max(0, (level - 1) * XP_PER_LEVEL)


def xp_progress_in_level(total_xp: int) -> tuple[int, int]:
    """Return (current_xp_in_level, xp_needed_for_next_level)."""
    total_xp = max(0, total_xp)
    return (total_xp - level_start_xp(level_from_xp(total_xp)), XP_PER_LEVEL)


def progress_percent(total_xp: int) -> float:
    """Percent through the current level, in [0, 100)."""
    xp_in_level, xp_needed = xp_progress_in_level(total_xp)
    return xp_in_level * 100 / xp_needed


def resolve_level(total_xp: int) -> LevelInfo:
    level = level_from_xp(total_xp)
    xp_in_level, xp_needed = xp_progress_in_level(total_xp)
    return LevelInfo(
        level=level,
        level_start_xp=level_start_xp(level),
        xp_in_level=xp_in_level,
        xp_for_next=xp_needed,
        progress_percent=progress_percent(total_xp),
    )
