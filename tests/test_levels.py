"""Tests for fitness_rank.levels."""

import pytest

from fitness_rank.levels import (
    LevelInfo,
    level_from_xp,
    level_start_xp,
    progress_percent,
    resolve_level,
    xp_progress_in_level,
)


class TestLevelFromXP:
    @pytest.mark.parametrize(
        "xp, level",
        [(0, 1), (1, 1), (999, 1), (1000, 2), (1500, 2), (9999, 10), (250_000, 251)],
    )
    def test_levels(self, xp, level):
        assert level_from_xp(xp) == level

    def test_negative_xp_is_level_one(self):
        assert level_from_xp(-20) == 1


class TestLevelStartXP:
    def test_level_one(self):
        assert level_start_xp(1) == 0

    def test_level_five(self):
        assert level_start_xp(5) == 4000


class TestProgress:
    def test_zero(self):
        assert xp_progress_in_level(0) == (0, 1000)
        assert progress_percent(0) == 0.0

    def test_half_way(self):
        assert xp_progress_in_level(1500) == (500, 1000)
        assert progress_percent(1500) == 50.0

    def test_just_below_boundary(self):
        assert progress_percent(999) == 99.9

    def test_boundary_resets(self):
        assert progress_percent(2000) == 0.0


class TestResolveLevel:
    def test_zero(self):
        assert resolve_level(0) == LevelInfo(
            level=1, level_start_xp=0, xp_in_level=0, xp_for_next=1000, progress_percent=0.0
        )

    def test_mid_level(self):
        info = resolve_level(1500)
        assert info.level == 2
        assert info.level_start_xp == 1000
        assert info.xp_in_level == 500
        assert info.progress_percent == 50.0
