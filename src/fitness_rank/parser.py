"""Load activity log snapshots exported from the log store.

The snapshot directory holds one JSON array per store collection:
weight_logs.json, cardio_logs.json, workouts.json, bodyweight_logs.json
and food_logs.json.
"""

from __future__ import annotations

import json
import math
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

from fitness_rank.dates import parse_timestamp
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

logger = logging.getLogger(__name__)

T = TypeVar("T")

COLLECTION_FILES: dict[str, str] = {
    "weight": "weight_logs.json",
    "cardio": "cardio_logs.json",
    "strength": "workouts.json",
    "bodyweight": "bodyweight_logs.json",
    "nutrition": "food_logs.json",
}


def _number(record: dict, *keys: str) -> float:
    """First finite numeric value found under any of keys. Missing, invalid, NaN or inf -> 0."""
    for key in keys:
        value = record.get(key)
        if value is None or isinstance(value, bool):
            continue
        try:
            result = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(result):
            return result
    return 0.0


def _optional_number(record: dict, *keys: str) -> float | None:
    if not any(record.get(key) is not None for key in keys):
        return None
    return _number(record, *keys)


def parse_weight(record: dict, log_id: str, **kwargs: Any) -> WeightLog:
    return WeightLog(id=log_id, weight=_number(record, "weight"), **kwargs)


def parse_cardio(record: dict, log_id: str, **kwargs: Any) -> CardioLog:
    return CardioLog(
        id=log_id,
        equipment=str(record.get("equipment") or ""),
        duration=_number(record, "duration"),
        distance=_number(record, "distance"),
        calories=int(_number(record, "calories")),
        elevation_gain=_optional_number(record, "elevation_gain", "elevationGain"),
        elevation_loss=_optional_number(record, "elevation_loss", "elevationLoss"),
        **kwargs,
    )


def parse_strength(record: dict, log_id: str, **kwargs: Any) -> StrengthLog:
    return StrengthLog(
        id=log_id,
        exercise=str(record.get("exercise") or ""),
        weight=_number(record, "weight"),
        reps=int(_number(record, "reps")),
        **kwargs,
    )


def parse_bodyweight(record: dict, log_id: str, **kwargs: Any) -> BodyweightLog:
    return BodyweightLog(
        id=log_id,
        type=BodyweightType.parse(record.get("type")),
        count=int(_number(record, "count")),
        **kwargs,
    )


def parse_nutrition(record: dict, log_id: str, **kwargs: Any) -> NutritionLog:
    return NutritionLog(id=log_id, status=NutritionStatus.parse(record.get("status")), **kwargs)


def parse_records(
    records: list, builder: Callable[..., T], collection: str = "logs"
) -> list[T]:
    """Build log objects from raw records, skipping any that cannot be dated."""
    logs: list[T] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping non-object record %d in %s", index, collection)
            continue
        moment = parse_timestamp(record.get("date"))
        if moment is None:
            logger.warning("Skipping record %d in %s: missing or invalid date", index, collection)
            continue
        log_id = str(record.get("id") or f"{collection}-{index}")
        logs.append(builder(record, log_id, date=moment))
    return logs


class LogSnapshotParser:
    def __init__(self, data_dir: Path):
        self.data_dir = data_dir

    def _read_collection(self, name: str) -> list:
        """Read one collection file. Missing or malformed files yield []."""
        path = self.data_dir / COLLECTION_FILES[name]
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return []

        # Some exports wrap the array: {"logs": [...]}
        if isinstance(raw, dict):
            raw = raw.get("logs", raw.get(name))
        if not isinstance(raw, list):
            logger.warning("Expected a JSON array in %s, ignoring it", path)
            return []
        return raw

    def parse_snapshot(self) -> ActivityLogs:
        """Parse every collection in the data directory."""
        logs = ActivityLogs(
            weight=parse_records(self._read_collection("weight"), parse_weight, "weight_logs"),
            cardio=parse_records(self._read_collection("cardio"), parse_cardio, "cardio_logs"),
            strength=parse_records(self._read_collection("strength"), parse_strength, "workouts"),
            bodyweight=parse_records(
                self._read_collection("bodyweight"), parse_bodyweight, "bodyweight_logs"
            ),
            nutrition=parse_records(self._read_collection("nutrition"), parse_nutrition, "food_logs"),
        )
        logger.debug(
            "Loaded %d logs from %s (weight=%d cardio=%d strength=%d bodyweight=%d nutrition=%d)",
            logs.total_count(), self.data_dir, len(logs.weight), len(logs.cardio),
            len(logs.strength), len(logs.bodyweight), len(logs.nutrition),
        )
        return logs
