"""One-shot location providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol


logger = logging.getLogger(__name__)

LocationCallback = Callable[[float, float], None]
FailureCallback = Callable[[], None]


class LocationUnavailable(RuntimeError):
    """Raised by providers when no position fix can be obtained."""


class LocationProvider(Protocol):
    def get_current_position(
        self,
        on_success: LocationCallback,
        on_failure: FailureCallback,
    ) -> None: ...


@dataclass(frozen=True)
class FixedLocationProvider:
    latitude: float
    longitude: float

    def get_current_position(
        self,
        on_success: LocationCallback,
        on_failure: FailureCallback,
    ) -> None:
        on_success(self.latitude, self.longitude)


class UnavailableLocationProvider:
    def __init__(self, reason: str = "No location source configured") -> None:
        self.reason = reason

    def get_current_position(
        self,
        on_success: LocationCallback,
        on_failure: FailureCallback,
    ) -> None:
        logger.info("Location unavailable: %s", self.reason)
        on_failure()


def parse_coordinates(text: str) -> tuple[float, float]:
    """Parse ``"lat,lng"`` into a checked coordinate pair."""
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Expected 'lat,lng', got {text!r}")
    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise ValueError(f"Invalid coordinates {text!r}") from exc
    check_coordinates(lat, lng)
    return lat, lng


def check_coordinates(lat: float, lng: float) -> None:
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"Latitude {lat} out of range")
    if not -180.0 <= lng <= 180.0:
        raise ValueError(f"Longitude {lng} out of range")
