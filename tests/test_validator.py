from __future__ import annotations

import math

import pytest

from mapty.workout.validator import (
    INVALID_INPUT_MESSAGE,
    InvalidWorkoutInput,
    check_workout_inputs,
    is_number,
    is_positive,
    parse_number,
    parse_workout_inputs,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("5", 5.0), (" 7.5 ", 7.5), ("-3", -3.0), (3, 3.0), (2.5, 2.5)],
)
def test_parse_number_accepts_numbers(raw: object, expected: float) -> None:
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "5km", "1_0", None, True])
def test_parse_number_turns_garbage_into_nan(raw: object) -> None:
    assert math.isnan(parse_number(raw))


def test_predicates_are_independent() -> None:
    assert is_number(1.0, -2.0, 0.0)
    assert not is_number(1.0, math.nan)
    assert not is_number(math.inf)
    assert is_positive(1.0, 0.1)
    assert not is_positive(1.0, 0.0)
    assert not is_positive(math.nan)


def test_running_requires_all_positive() -> None:
    assert check_workout_inputs("running", 5, 30, 170)
    assert not check_workout_inputs("running", 5, 30, 0)
    assert not check_workout_inputs("running", -5, 30, 170)
    assert not check_workout_inputs("running", 5, math.nan, 170)


def test_cycling_exempts_elevation_from_positivity() -> None:
    assert check_workout_inputs("cycling", 20, 60, 0)
    assert check_workout_inputs("cycling", 20, 60, -150)
    assert not check_workout_inputs("cycling", 20, 60, math.nan)
    assert not check_workout_inputs("cycling", 20, 0, 100)


def test_parse_workout_inputs_returns_numbers() -> None:
    parsed = parse_workout_inputs("cycling", "20", "60", "-40")

    assert parsed.workout_type == "cycling"
    assert parsed.distance == 20.0
    assert parsed.duration == 60.0
    assert parsed.extra == -40.0


def test_non_numeric_duration_is_rejected_with_uniform_message() -> None:
    with pytest.raises(InvalidWorkoutInput) as excinfo:
        parse_workout_inputs("running", "5", "abc", "170")

    assert str(excinfo.value) == INVALID_INPUT_MESSAGE
    assert isinstance(excinfo.value, ValueError)


def test_empty_elevation_is_rejected_for_cycling() -> None:
    with pytest.raises(InvalidWorkoutInput):
        parse_workout_inputs("cycling", "20", "60", "")


def test_out_of_range_numbers_are_rejected() -> None:
    assert math.isnan(parse_number(10**400))
    assert math.isinf(parse_number("1e400"))

    with pytest.raises(InvalidWorkoutInput):
        parse_workout_inputs("running", 10**400, "30", "170")
    with pytest.raises(InvalidWorkoutInput):
        parse_workout_inputs("cycling", "1e400", "60", "10")
