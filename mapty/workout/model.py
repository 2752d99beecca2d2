"""Workout domain models."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Literal


WorkoutType = Literal["running", "cycling"]
WORKOUT_TYPES: tuple[WorkoutType, ...] = ("running", "cycling")

Position = tuple[float, float]

MONTHS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

ID_DIGITS = 10


def round_metric(value: float) -> float:
    """Round to one decimal, half up on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_description(workout_type: WorkoutType, date: datetime) -> str:
    return f"{workout_type} on {MONTHS[date.month - 1]} {date.day}"


def now_local() -> datetime:
    return datetime.now().astimezone()


def _is_positive_finite(value: float) -> bool:
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class RunningDetails:
    cadence: float


@dataclass(frozen=True)
class CyclingDetails:
    elevation_gain: float


WorkoutDetails = RunningDetails | CyclingDetails


@dataclass(frozen=True)
class Workout:
    id: str
    position: Position
    distance: float
    duration: float
    date: datetime
    type: WorkoutType
    details: WorkoutDetails
    description: str = field(init=False)

    def __post_init__(self) -> None:
        if self.type == "running":
            if not isinstance(self.details, RunningDetails):
                raise ValueError("Running workout requires RunningDetails")
            if not _is_positive_finite(self.details.cadence):
                raise ValueError("cadence must be a finite number > 0")
        elif self.type == "cycling":
            if not isinstance(self.details, CyclingDetails):
                raise ValueError("Cycling workout requires CyclingDetails")
        else:
            raise ValueError(f"Unknown workout type '{self.type}'")
        if not _is_positive_finite(self.distance):
            raise ValueError("distance must be a finite number > 0")
        if not _is_positive_finite(self.duration):
            raise ValueError("duration must be a finite number > 0")

        lat, lng = self.position
        object.__setattr__(self, "position", (float(lat), float(lng)))
        object.__setattr__(self, "description", format_description(self.type, self.date))

    @classmethod
    def running(
        cls,
        *,
        id: str,
        position: Position,
        distance: float,
        duration: float,
        cadence: float,
        date: datetime,
    ) -> Workout:
        return cls(
            id=id,
            position=position,
            distance=distance,
            duration=duration,
            date=date,
            type="running",
            details=RunningDetails(cadence=cadence),
        )

    @classmethod
    def cycling(
        cls,
        *,
        id: str,
        position: Position,
        distance: float,
        duration: float,
        elevation_gain: float,
        date: datetime,
    ) -> Workout:
        return cls(
            id=id,
            position=position,
            distance=distance,
            duration=duration,
            date=date,
            type="cycling",
            details=CyclingDetails(elevation_gain=elevation_gain),
        )

    @property
    def cadence(self) -> float | None:
        if isinstance(self.details, RunningDetails):
            return self.details.cadence
        return None

    @property
    def elevation_gain(self) -> float | None:
        if isinstance(self.details, CyclingDetails):
            return self.details.elevation_gain
        return None

    @property
    def pace(self) -> float | None:
        """Minutes per km, running only."""
        if self.type != "running":
            return None
        return round_metric(self.duration / self.distance)

    @property
    def speed(self) -> float | None:
        """Km per hour, cycling only."""
        if self.type != "cycling":
            return None
        return round_metric(self.distance / (self.duration / 60))

    @property
    def metric(self) -> tuple[float, str]:
        if self.type == "running":
            return round_metric(self.duration / self.distance), "min/km"
        return round_metric(self.distance / (self.duration / 60)), "km/h"


class WorkoutIdGenerator:
    """Issue workout ids from a nanosecond wall clock.

    Stamps never repeat within one generator: when the clock has not advanced
    since the last id, the previous stamp is bumped by one.
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns) -> None:
        self._clock = clock
        self._last_stamp = 0

    def next_id(self) -> str:
        stamp = max(int(self._clock()), self._last_stamp + 1)
        self._last_stamp = stamp
        return str(stamp)[-ID_DIGITS:]
