"""Tests for fitness_rank.records."""

from datetime import date, datetime

import pytest

from fitness_rank.models import CardioLog, WeightLog
from fitness_rank.records import (
    CardioRecords,
    activity_heatmap,
    cardio_records,
    daily_weight_series,
    format_duration,
    heatmap_intensity,
    pace_per_km,
    speed_kmh,
    weight_goal_progress,
)

NOW = datetime(2026, 1, 14, 12, 0)


def _ride(log_id: str, day: int, distance: float, duration: float = 60, calories: int = 0) -> CardioLog:
    return CardioLog(
        log_id, datetime(2026, 1, day, 9), "Canyon Ultimate CF 7",
        duration=duration, distance=distance, calories=calories,
    )


class TestSpeedAndPace:
    def test_speed(self):
        assert speed_kmh(_ride("a", 1, 30, 60)) == 30.0

    def test_speed_without_duration(self):
        assert speed_kmh(_ride("a", 1, 30, 0)) == 0.0

    def test_pace(self):
        run = CardioLog("r", NOW, "Running", duration=27.5, distance=5)
        assert pace_per_km(run) == "5:30"

    def test_pace_missing_distance(self):
        assert pace_per_km(CardioLog("r", NOW, "Running", duration=30)) == "0:00"

    @pytest.mark.parametrize(
        "minutes, expected",
        [(5.0, "5:00"), (4.25, "4:15"), (6.999, "7:00"), (0.5, "0:30")],
    )
    def test_format_duration(self, minutes, expected):
        assert format_duration(minutes) == expected


class TestCardioRecords:
    def test_empty(self):
        assert cardio_records([]) == CardioRecords()

    def test_bests(self):
        records = cardio_records([
            _ride("a", 1, 40, 90, calories=800),
            _ride("b", 2, 25, 45, calories=950),
        ])
        assert records.total_distance == 65
        assert records.best_distance == 40
        assert records.best_calories == 950
        assert records.best_speed == pytest.approx(33.33, abs=0.01)

    def test_short_sessions_ignored_for_speed(self):
        records = cardio_records([_ride("sprint", 1, 10, 10), _ride("easy", 2, 20, 60)])
        assert records.best_speed == 20.0
        assert records.best_distance == 20


class TestWeightSeries:
    def test_daily_average_rounded(self):
        logs = [
            WeightLog("a", datetime(2026, 1, 2, 7), 90.0),
            WeightLog("b", datetime(2026, 1, 2, 21), 90.25),
            WeightLog("c", datetime(2026, 1, 1, 7), 91.0),
        ]
        assert daily_weight_series(logs, NOW) == [(date(2026, 1, 1), 91.0), (date(2026, 1, 2), 90.1)]

    def test_goal_progress(self):
        logs = [
            WeightLog("a", datetime(2026, 1, 1, 7), 95.0),
            WeightLog("b", datetime(2026, 1, 10, 7), 90.0),
        ]
        assert weight_goal_progress(logs, 85.0, NOW) == 50.0

    def test_goal_progress_without_data(self):
        assert weight_goal_progress([], 85.0, NOW) == 0.0

    def test_goal_already_at_start(self):
        logs = [WeightLog("a", datetime(2026, 1, 1, 7), 85.0)]
        assert weight_goal_progress(logs, 85.0, NOW) == 0.0


class TestHeatmap:
    @pytest.mark.parametrize(
        "count, distance, expected",
        [(0, 0, 0), (1, 5, 1), (1, 15, 2), (2, 25, 3), (1, 41, 4), (1, 40, 3)],
    )
    def test_intensity(self, count, distance, expected):
        assert heatmap_intensity(count, distance) == expected

    def test_cells_cover_window(self):
        cells = activity_heatmap([], NOW, days=7)
        assert len(cells) == 7
        assert cells[0].day == date(2026, 1, 8)
        assert cells[-1].day == date(2026, 1, 14)
        assert all(c.intensity == 0 for c in cells)

    def test_sessions_summed_per_day(self):
        logs = [_ride("a", 14, 12), _ride("b", 14, 10), _ride("c", 13, 5), _ride("old", 1, 80)]
        cells = activity_heatmap(logs, NOW, days=3)
        assert [c.count for c in cells] == [0, 1, 2]
        assert cells[-1].total_distance == 22
        assert cells[-1].intensity == 3
