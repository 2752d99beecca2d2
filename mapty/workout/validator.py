"""Numeric checks for raw workout form input."""

from __future__ import annotations

import math
from dataclasses import dataclass

from mapty.workout.model import WorkoutType


INVALID_INPUT_MESSAGE = "All values should be positive numbers"


class InvalidWorkoutInput(ValueError):
    """Raised when workout form values fail validation."""

    def __init__(self, message: str = INVALID_INPUT_MESSAGE) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ParsedInputs:
    workout_type: WorkoutType
    distance: float
    duration: float
    extra: float


def parse_number(raw: object) -> float:
    """Coerce a form value to float; anything that is not a number becomes NaN."""
    if raw is None or isinstance(raw, bool):
        return math.nan
    try:
        if isinstance(raw, (int, float)):
            return float(raw)
        text = str(raw).strip()
        if not text or "_" in text:
            return math.nan
        return float(text)
    except (ValueError, OverflowError):
        return math.nan


def is_number(*values: float) -> bool:
    return all(isinstance(value, (int, float)) and math.isfinite(value) for value in values)


def is_positive(*values: float) -> bool:
    return all(value > 0 for value in values)


def check_workout_inputs(
    workout_type: WorkoutType,
    distance: float,
    duration: float,
    extra: float,
) -> bool:
    # Elevation gain only has to be a number; cadence must also be positive.
    if workout_type == "running":
        return is_number(distance, duration, extra) and is_positive(distance, duration, extra)
    if workout_type == "cycling":
        return is_number(distance, duration, extra) and is_positive(distance, duration)
    return False


def parse_workout_inputs(
    workout_type: WorkoutType,
    distance: object,
    duration: object,
    extra: object,
) -> ParsedInputs:
    parsed_distance = parse_number(distance)
    parsed_duration = parse_number(duration)
    parsed_extra = parse_number(extra)
    if not check_workout_inputs(workout_type, parsed_distance, parsed_duration, parsed_extra):
        raise InvalidWorkoutInput()
    return ParsedInputs(
        workout_type=workout_type,
        distance=parsed_distance,
        duration=parsed_duration,
        extra=parsed_extra,
    )
