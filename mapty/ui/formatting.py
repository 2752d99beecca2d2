"""Display helpers for workout list rows and map popups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mapty.workout.model import Workout, WorkoutType


WORKOUT_ICONS: dict[WorkoutType, str] = {
    "running": "🏃‍♂️",
    "cycling": "🚴‍♀️",
}


@dataclass(frozen=True)
class DetailItem:
    icon: str
    value: str
    unit: str


def fmt_value(value: float) -> str:
    number = float(value)
    return str(int(number)) if number.is_integer() else str(number)


def fmt_metric(value: float) -> str:
    return f"{value:.1f}"


def popup_options(style_class: str) -> dict[str, Any]:
    return {
        "maxWidth": 250,
        "minWidth": 100,
        "autoClose": False,
        "closeOnClick": False,
        "className": style_class,
    }


def list_entry_details(workout: Workout) -> tuple[DetailItem, ...]:
    items = [
        DetailItem(WORKOUT_ICONS[workout.type], fmt_value(workout.distance), "km"),
        DetailItem("⏱", fmt_value(workout.duration), "min"),
    ]
    metric, unit = workout.metric
    items.append(DetailItem("⚡️", fmt_metric(metric), unit))
    if workout.cadence is not None:
        items.append(DetailItem("🦶🏼", fmt_value(workout.cadence), "spm"))
    if workout.elevation_gain is not None:
        items.append(DetailItem("⛰", fmt_value(workout.elevation_gain), "m"))
    return tuple(items)


def format_list_entry(workout: Workout) -> str:
    details = " | ".join(f"{d.icon} {d.value} {d.unit}" for d in list_entry_details(workout))
    return f"{workout.description} | {details}"
