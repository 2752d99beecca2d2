"""Terminal stand-in for the map used by the CLI."""

from __future__ import annotations

import logging
from typing import Callable

from mapty.core.controller import FOCUS_PAN_DURATION_SEC, ClickHandler
from mapty.ui.formatting import format_list_entry
from mapty.workout.model import Position, Workout


logger = logging.getLogger(__name__)


class ConsoleMapProvider:
    def __init__(self, echo: Callable[[str], None] = print) -> None:
        self._echo = echo
        self._click_handler: ClickHandler | None = None
        self.center: Position | None = None
        self.zoom: int | None = None
        self.entries: list[str] = []

    def init_view(self, center: Position, zoom: int) -> None:
        self.center = center
        self.zoom = zoom
        logger.info("Map view at %.5f, %.5f (zoom %d)", center[0], center[1], zoom)

    def on_click(self, handler: ClickHandler) -> None:
        self._click_handler = handler

    def click(self, lat: float, lng: float) -> None:
        if self._click_handler is None:
            raise RuntimeError("Map is not ready for clicks")
        self._click_handler(lat, lng)

    def add_marker(self, position: Position, popup_text: str, style_class: str) -> None:
        logger.info("Marker [%s] at %.5f, %.5f: %s", style_class, position[0], position[1], popup_text)

    def set_view(
        self,
        position: Position,
        zoom: int,
        animate: bool = True,
        duration_sec: float = FOCUS_PAN_DURATION_SEC,
    ) -> None:
        self.center = position
        self.zoom = zoom
        self._echo(f"Map centered on {position[0]:.5f}, {position[1]:.5f}")

    def add_list_entry(self, workout: Workout) -> None:
        line = format_list_entry(workout)
        self.entries.insert(0, line)
        self._echo(f"- {line}")

    def clear(self) -> None:
        self.entries.clear()
        self.center = None
        self.zoom = None
