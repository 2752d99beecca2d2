"""Serialize workouts to a key-value store and rebuild them on load."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Any, Iterable

from mapty.storage.kv_store import KeyValueStore
from mapty.workout.model import WORKOUT_TYPES, Workout


logger = logging.getLogger(__name__)

STORAGE_KEY = "workouts"

_ELEVATION_KEYS = ("elevation_gain", "elevationGain", "elevation")


class WorkoutDecodeError(ValueError):
    """Raised when a stored workout record cannot be rebuilt."""


def workout_to_record(workout: Workout) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": workout.id,
        "type": workout.type,
        "position": [workout.position[0], workout.position[1]],
        "distance": workout.distance,
        "duration": workout.duration,
        "date": workout.date.isoformat(),
        "description": workout.description,
    }
    if workout.type == "running":
        record["cadence"] = workout.cadence
        record["pace"] = workout.pace
    else:
        record["elevation_gain"] = workout.elevation_gain
        record["speed"] = workout.speed
    return record


def workout_from_record(raw: object) -> Workout:
    """Rebuild a workout from its stored record.

    The variant comes from the ``type`` field. Stored ``pace``, ``speed`` and
    ``description`` values are ignored and derived again.
    """
    if not isinstance(raw, dict):
        raise WorkoutDecodeError("Workout record must be an object")

    workout_type = raw.get("type")
    if workout_type not in WORKOUT_TYPES:
        raise WorkoutDecodeError(f"Unknown workout type {workout_type!r}")

    workout_id = raw.get("id")
    if isinstance(workout_id, bool) or not isinstance(workout_id, (str, int)):
        raise WorkoutDecodeError("Workout field 'id' must be a string")

    position = _parse_position(raw.get("position"))
    distance = _parse_number(raw.get("distance"), "distance")
    duration = _parse_number(raw.get("duration"), "duration")
    date = _parse_date(raw.get("date"))

    try:
        if workout_type == "running":
            return Workout.running(
                id=str(workout_id),
                position=position,
                distance=distance,
                duration=duration,
                cadence=_parse_number(raw.get("cadence"), "cadence"),
                date=date,
            )
        elevation_key = next((key for key in _ELEVATION_KEYS if key in raw), "elevation_gain")
        return Workout.cycling(
            id=str(workout_id),
            position=position,
            distance=distance,
            duration=duration,
            elevation_gain=_parse_number(raw.get(elevation_key), "elevation_gain"),
            date=date,
        )
    except ValueError as exc:
        if isinstance(exc, WorkoutDecodeError):
            raise
        raise WorkoutDecodeError(f"Workout {workout_id}: {exc}") from exc


def encode_workouts(workouts: Iterable[Workout]) -> str:
    return json.dumps([workout_to_record(w) for w in workouts], ensure_ascii=True)


def decode_workouts(blob: str) -> list[Workout]:
    try:
        data = json.loads(blob)
    except ValueError as exc:
        raise WorkoutDecodeError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise WorkoutDecodeError("Stored workouts must be an array")
    return [workout_from_record(item) for item in data]


class WorkoutCodec:
    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._store = store
        self._key = key

    def save(self, workouts: Iterable[Workout]) -> None:
        items = list(workouts)
        self._store.set(self._key, encode_workouts(items))
        logger.debug("Saved %d workouts under '%s'", len(items), self._key)

    def load(self) -> list[Workout]:
        blob = self._store.get(self._key)
        if blob is None:
            return []
        try:
            data = json.loads(blob)
        except ValueError as exc:
            logger.warning("Ignoring stored workouts: invalid JSON (%s)", exc)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring stored workouts: expected an array")
            return []

        out: list[Workout] = []
        for index, item in enumerate(data):
            try:
                out.append(workout_from_record(item))
            except WorkoutDecodeError as exc:
                logger.warning("Skipping stored workout #%d: %s", index + 1, exc)
        logger.info("Loaded %d workouts", len(out))
        return out

    def reset(self) -> None:
        self._store.remove(self._key)
        logger.info("Cleared stored workouts under '%s'", self._key)


def _parse_number(raw: object, field_name: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise WorkoutDecodeError(f"Workout field '{field_name}' is missing")
    try:
        value = float(raw) if isinstance(raw, (int, float)) else float(str(raw).strip())
    except (ValueError, OverflowError) as exc:
        raise WorkoutDecodeError(f"Workout field '{field_name}' must be a number") from exc
    if not math.isfinite(value):
        raise WorkoutDecodeError(f"Workout field '{field_name}' must be finite")
    return value


def _parse_position(raw: object) -> tuple[float, float]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise WorkoutDecodeError("Workout field 'position' must be [lat, lng]")
    return _parse_number(raw[0], "position"), _parse_number(raw[1], "position")


def _parse_date(raw: object) -> datetime:
    if not isinstance(raw, str):
        raise WorkoutDecodeError("Workout field 'date' must be an ISO string")
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise WorkoutDecodeError(f"Invalid workout date {raw!r}") from exc
    return parsed if parsed.tzinfo is not None else parsed.astimezone()
