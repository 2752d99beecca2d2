"""NiceGUI adapters: Leaflet map, workout list and browser geolocation."""

from __future__ import annotations

import logging
from typing import Any, Callable

from nicegui import Client, background_tasks, events, ui

from mapty.core.controller import FOCUS_PAN_DURATION_SEC, ClickHandler
from mapty.core.state import TILE_ATTRIBUTION, TILE_URL
from mapty.geo.location import (
    FailureCallback,
    LocationCallback,
    LocationUnavailable,
    check_coordinates,
)
from mapty.ui.formatting import list_entry_details, popup_options
from mapty.workout.model import Position, Workout


logger = logging.getLogger(__name__)

GEOLOCATION_JS = """
return await new Promise((resolve) => {
  if (!navigator.geolocation) {
    resolve(null);
    return;
  }
  navigator.geolocation.getCurrentPosition(
    (pos) => resolve({lat: pos.coords.latitude, lng: pos.coords.longitude}),
    () => resolve(null),
  );
});
"""


def use_tile_layer(leaflet: Any, url_template: str, attribution: str) -> None:
    """Replace the default OSM tiles with the configured layer."""
    leaflet.clear_layers()
    leaflet.tile_layer(
        url_template=url_template,
        options={"attribution": attribution, "maxZoom": 19},
    )


class BrowserLocationProvider:
    """Ask the connected browser for its position once."""

    def __init__(self, client: Client, timeout_sec: float = 30.0) -> None:
        self._client = client
        self._timeout_sec = timeout_sec

    def get_current_position(
        self,
        on_success: LocationCallback,
        on_failure: FailureCallback,
    ) -> None:
        background_tasks.create(self._request(on_success, on_failure), name="geolocation")

    async def fetch(self) -> tuple[float, float]:
        try:
            await self._client.connected(timeout=self._timeout_sec)
            result = await self._client.run_javascript(GEOLOCATION_JS, timeout=self._timeout_sec)
        except TimeoutError as exc:
            raise LocationUnavailable("Timed out waiting for the browser") from exc
        if not isinstance(result, dict):
            raise LocationUnavailable("Browser refused or lacks geolocation")
        try:
            lat = float(result["lat"])
            lng = float(result["lng"])
            check_coordinates(lat, lng)
        except (KeyError, TypeError, ValueError) as exc:
            raise LocationUnavailable(f"Unexpected geolocation payload: {result!r}") from exc
        return lat, lng

    async def _request(self, on_success: LocationCallback, on_failure: FailureCallback) -> None:
        try:
            lat, lng = await self.fetch()
        except LocationUnavailable as exc:
            logger.warning("Browser location failed: %s", exc)
            on_failure()
            return
        on_success(lat, lng)


class LeafletMapProvider:
    def __init__(
        self,
        map_container: ui.element,
        list_container: ui.element,
        *,
        on_entry_click: Callable[[str], Any],
        tile_url: str = TILE_URL,
        tile_attribution: str = TILE_ATTRIBUTION,
    ) -> None:
        self._map_container = map_container
        self._list_container = list_container
        self._on_entry_click = on_entry_click
        self._tile_url = tile_url
        self._tile_attribution = tile_attribution
        self._leaflet: ui.leaflet | None = None
        self._click_handler: ClickHandler | None = None
        self._markers: list[Any] = []

    def init_view(self, center: Position, zoom: int) -> None:
        self._map_container.clear()
        with self._map_container:
            with ui.leaflet(center=center, zoom=zoom).classes("w-full h-full") as leaflet:
                use_tile_layer(leaflet, self._tile_url, self._tile_attribution)
        leaflet.on("map-click", self._handle_click)
        self._leaflet = leaflet
        self._markers.clear()

    def on_click(self, handler: ClickHandler) -> None:
        self._click_handler = handler

    def add_marker(self, position: Position, popup_text: str, style_class: str) -> None:
        leaflet = self._require_map()
        marker = leaflet.marker(latlng=position)
        marker.run_method("bindPopup", popup_text, popup_options(style_class))
        marker.run_method("openPopup")
        self._markers.append(marker)

    def set_view(
        self,
        position: Position,
        zoom: int,
        animate: bool = True,
        duration_sec: float = FOCUS_PAN_DURATION_SEC,
    ) -> None:
        self._require_map().run_map_method(
            "setView",
            [position[0], position[1]],
            zoom,
            {"animate": animate, "pan": {"duration": duration_sec}},
        )

    def add_list_entry(self, workout: Workout) -> None:
        with self._list_container:
            with ui.card().classes(
                f"w-full mapty-workout mapty-workout--{workout.type} cursor-pointer"
            ) as card:
                ui.label(workout.description).classes("text-base font-semibold")
                with ui.row().classes("w-full gap-3 flex-wrap"):
                    for item in list_entry_details(workout):
                        with ui.row().classes("items-baseline gap-1"):
                            ui.label(item.icon)
                            ui.label(item.value).classes("font-semibold")
                            ui.label(item.unit).classes("text-xs mapty-muted")
        card.on("click", lambda workout_id=workout.id: self._on_entry_click(workout_id))
        card.move(target_index=0)

    def clear(self) -> None:
        if self._leaflet is not None:
            for marker in self._markers:
                self._leaflet.remove_layer(marker)
        self._markers.clear()
        self._list_container.clear()

    def _handle_click(self, event: events.GenericEventArguments) -> None:
        if self._click_handler is None:
            return
        latlng = event.args.get("latlng") or {}
        self._click_handler(float(latlng["lat"]), float(latlng["lng"]))

    def _require_map(self) -> ui.leaflet:
        if self._leaflet is None:
            raise RuntimeError("Map view is not initialized")
        return self._leaflet
