from __future__ import annotations

import pytest

from mapty.geo.location import (
    FixedLocationProvider,
    UnavailableLocationProvider,
    parse_coordinates,
)


def test_fixed_location_reports_success() -> None:
    hits: list[tuple[float, float]] = []
    failures: list[bool] = []

    FixedLocationProvider(51.5, -0.12).get_current_position(
        lambda lat, lng: hits.append((lat, lng)),
        lambda: failures.append(True),
    )

    assert hits == [(51.5, -0.12)]
    assert failures == []


def test_unavailable_location_reports_failure() -> None:
    hits: list[tuple[float, float]] = []
    failures: list[bool] = []

    UnavailableLocationProvider().get_current_position(
        lambda lat, lng: hits.append((lat, lng)),
        lambda: failures.append(True),
    )

    assert hits == []
    assert failures == [True]


def test_parse_coordinates() -> None:
    assert parse_coordinates("51.5,-0.12") == (51.5, -0.12)
    assert parse_coordinates(" 48.85 , 2.35 ") == (48.85, 2.35)


@pytest.mark.parametrize("text", ["51.5", "a,b", "1,2,3", "91,0", "0,181"])
def test_parse_coordinates_rejects_bad_input(text: str) -> None:
    with pytest.raises(ValueError):
        parse_coordinates(text)
