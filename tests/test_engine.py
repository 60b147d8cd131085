"""Tests for fitness_rank.engine: full evaluation over a log snapshot."""

from datetime import datetime

import pytest

from fitness_rank.engine import build_stats, count_time_buckets, evaluate
from fitness_rank.models import (
    ActivityLogs,
    BodyweightLog,
    BodyweightType,
    CardioLog,
    NutritionLog,
    NutritionStatus,
    StrengthLog,
    WeightLog,
)
from fitness_rank.parser import LogSnapshotParser

NOW = datetime(2026, 1, 14, 12, 0)


@pytest.fixture
def today_logs():
    """One weight log, a 10 km cardio session and two strength sets, all today."""
    return ActivityLogs(
        weight=[WeightLog("w1", datetime(2026, 1, 14, 10, 0), 90.0)],
        cardio=[CardioLog("c1", datetime(2026, 1, 14, 10, 30), "Running", duration=40, distance=10)],
        strength=[
            StrengthLog("s1", datetime(2026, 1, 14, 11, 0), "Squat", 100, 5),
            StrengthLog("s2", datetime(2026, 1, 14, 11, 5), "Squat", 100, 5),
        ],
    )


class TestTimeBuckets:
    def test_early_bird_range(self):
        dates = [datetime(2026, 1, 14, h, 0) for h in (3, 4, 8, 9)]
        assert count_time_buckets(dates, NOW).early_bird == 2

    def test_night_owl_wraps_midnight(self):
        dates = [datetime(2026, 1, 14, h, 30) for h in (19, 20, 23, 0, 1, 2)]
        assert count_time_buckets(dates, NOW).night_owl == 4

    def test_weekend(self):
        dates = [datetime(2026, 1, 17, 10), datetime(2026, 1, 18, 10), datetime(2026, 1, 19, 10)]
        assert count_time_buckets(dates, NOW).weekend == 2

    def test_one_log_in_several_buckets(self):
        buckets = count_time_buckets([datetime(2026, 1, 17, 6, 0)], NOW)
        assert buckets.early_bird == 1
        assert buckets.weekend == 1
        assert buckets.night_owl == 0


class TestBuildStats:
    def test_counts_across_categories(self):
        logs = ActivityLogs(
            cardio=[
                CardioLog("a", datetime(2026, 1, 10, 7), "Running", distance=12.5),
                CardioLog("b", datetime(2026, 1, 11, 21), "Triban RC 520", distance=30.0),
            ],
            bodyweight=[BodyweightLog("p", datetime(2026, 1, 13, 8), BodyweightType.PUSHUPS, 40)],
            nutrition=[
                NutritionLog("f1", datetime(2026, 1, 14, 8), NutritionStatus.GREEN),
                NutritionLog("f2", datetime(2026, 1, 14, 13), NutritionStatus.YELLOW),
            ],
        )
        stats = build_stats(logs, NOW)
        assert stats.total_dist == 42.5
        assert stats.total_bw_reps == 40
        assert stats.total_green_food == 1
        assert stats.streak == 2
        assert stats.early_bird_count == 3
        assert stats.night_owl_count == 1
        # Sat 10 Jan and Sun 11 Jan
        assert stats.weekend_count == 2


class TestEvaluate:
    def test_end_to_end_scenario(self, today_logs):
        result = evaluate(today_logs, NOW)
        assert result.xp.weight == 50
        assert result.xp.cardio == 100
        assert result.xp.strength == 40
        assert result.total_xp == 190
        assert result.level.level == 1
        assert result.progress_to_next_level == pytest.approx(19.0)
        assert result.stats.streak == 1

        streak_badges = [b for b in result.badges if b.group_id == "streak"]
        assert len(streak_badges) == 1
        assert streak_badges[0].id == "streak_0"
        assert streak_badges[0].is_earned is False
        assert streak_badges[0].progress == 1
        assert streak_badges[0].target == 3

    def test_input_order_does_not_matter(self, today_logs):
        reversed_logs = ActivityLogs(
            weight=today_logs.weight,
            cardio=today_logs.cardio,
            strength=list(reversed(today_logs.strength)),
        )
        assert evaluate(reversed_logs, NOW).to_dict() == evaluate(today_logs, NOW).to_dict()

    def test_empty_snapshot_resets_everything(self):
        result = evaluate(ActivityLogs(), NOW)
        assert result.total_xp == 0
        assert result.level.level == 1
        assert result.progress_to_next_level == 0.0
        assert result.stats.streak == 0
        assert result.streak.longest_streak == 0
        assert not any(b.is_earned for b in result.all_badges)

    def test_level_badge_follows_xp(self):
        logs = ActivityLogs(
            cardio=[CardioLog("long", datetime(2026, 1, 1, 9), "Canyon Ultimate CF 7", distance=150)]
        )
        result = evaluate(logs, NOW)
        assert result.level.level == 2
        level_badges = {b.id: b for b in result.all_badges if b.group_id == "level"}
        assert level_badges["level_0"].is_earned is True
        assert level_badges["level_1"].is_earned is False

    def test_to_dict(self, today_logs):
        data = evaluate(today_logs, NOW).to_dict()
        assert data["xp"] == 190
        assert data["level"] == 1
        assert data["xpBreakdown"]["strength"] == 40
        assert data["stats"]["totalDist"] == 10
        assert data["stats"]["totalWorkouts"] == 2
        assert data["longestStreak"] == 1
        assert data["badgesEarned"] == 0
        assert data["badgesTotal"] == 57
        assert len(data["badges"]) == 9


class TestMalformedNumbers:
    def test_nan_distance_from_snapshot(self, tmp_path):
        (tmp_path / "cardio_logs.json").write_text(
            '[{"date": "2026-01-14T08:00:00", "distance": NaN, "duration": 30}]', encoding="utf-8"
        )
        logs = LogSnapshotParser(tmp_path).parse_snapshot()
        result = evaluate(logs, NOW)
        assert result.total_xp == 0
        assert result.stats.streak == 1

    def test_nan_distance_on_log(self):
        logs = ActivityLogs(
            cardio=[CardioLog("c", datetime(2026, 1, 14, 8), "Running", duration=30, distance=float("nan"))]
        )
        assert evaluate(logs, NOW).xp.cardio == 0
