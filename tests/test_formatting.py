from __future__ import annotations

from datetime import datetime, timezone

import pytest

from mapty.ui.console_map import ConsoleMapProvider
from mapty.ui.formatting import (
    DetailItem,
    fmt_value,
    format_list_entry,
    list_entry_details,
    popup_options,
)
from mapty.workout.model import Workout


WHEN = datetime(2024, 3, 5, 8, 0, tzinfo=timezone.utc)


def test_fmt_value_drops_trailing_zero() -> None:
    assert fmt_value(5) == "5"
    assert fmt_value(5.0) == "5"
    assert fmt_value(5.5) == "5.5"
    assert fmt_value(-40) == "-40"


def test_running_list_entry_details() -> None:
    workout = Workout.running(
        id="1", position=(0.0, 0.0), distance=5, duration=30, cadence=170, date=WHEN
    )

    assert list_entry_details(workout) == (
        DetailItem("🏃‍♂️", "5", "km"),
        DetailItem("⏱", "30", "min"),
        DetailItem("⚡️", "6.0", "min/km"),
        DetailItem("🦶🏼", "170", "spm"),
    )


def test_cycling_list_entry_text() -> None:
    workout = Workout.cycling(
        id="2", position=(0.0, 0.0), distance=20, duration=60, elevation_gain=-40, date=WHEN
    )

    assert format_list_entry(workout) == (
        "cycling on March 5 | 🚴‍♀️ 20 km | ⏱ 60 min | ⚡️ 20.0 km/h | ⛰ -40 m"
    )


def test_popup_options() -> None:
    assert popup_options("running-popup") == {
        "maxWidth": 250,
        "minWidth": 100,
        "autoClose": False,
        "closeOnClick": False,
        "className": "running-popup",
    }


def test_console_map_lists_newest_first_and_needs_view_for_clicks() -> None:
    lines: list[str] = []
    console_map = ConsoleMapProvider(echo=lines.append)

    with pytest.raises(RuntimeError):
        console_map.click(1.0, 2.0)

    clicks: list[tuple[float, float]] = []
    console_map.init_view((1.0, 2.0), 13)
    console_map.on_click(lambda lat, lng: clicks.append((lat, lng)))
    console_map.click(3.0, 4.0)
    assert clicks == [(3.0, 4.0)]

    first = Workout.running(
        id="1", position=(0.0, 0.0), distance=5, duration=30, cadence=170, date=WHEN
    )
    second = Workout.cycling(
        id="2", position=(0.0, 0.0), distance=20, duration=60, elevation_gain=0, date=WHEN
    )
    console_map.add_list_entry(first)
    console_map.add_list_entry(second)

    assert console_map.entries[0].startswith("cycling on March 5")
    assert lines[0].startswith("- running on March 5")

    console_map.set_view((5.0, 6.0), 13)
    assert console_map.center == (5.0, 6.0)
    assert lines[-1] == "Map centered on 5.00000, 6.00000"
