"""NiceGUI web UI for Mapty."""

from __future__ import annotations

from typing import Callable

from nicegui import Client, ui

from mapty.core.controller import SessionController
from mapty.core.state import AppSettings
from mapty.geo.location import FixedLocationProvider, LocationProvider
from mapty.storage.kv_store import JsonFileStore
from mapty.ui.leaflet_map import BrowserLocationProvider, LeafletMapProvider


TYPE_OPTIONS = {"running": "Running", "cycling": "Cycling"}

STYLE = """
<style>
  :root {
    --mapty-brand-running: #00c46a;
    --mapty-brand-cycling: #ffb545;
    --mapty-dark: #2d3439;
    --mapty-darker: #42484d;
    --mapty-muted: #aaaaaa;
  }
  body {
    background: var(--mapty-dark);
    color: #ececec;
    font-family: "Manrope", Arial, sans-serif;
  }
  .mapty-sidebar {
    background: var(--mapty-dark);
    width: 420px;
    min-width: 340px;
    height: 100vh;
    overflow-y: auto;
    padding: 24px;
  }
  .mapty-card {
    background: var(--mapty-darker);
    border-radius: 8px;
  }
  .mapty-workout {
    background: var(--mapty-darker);
    border-radius: 8px;
  }
  .mapty-workout--running { border-left: 5px solid var(--mapty-brand-running); }
  .mapty-workout--cycling { border-left: 5px solid var(--mapty-brand-cycling); }
  .mapty-muted { color: var(--mapty-muted); }
  .mapty-map { background: #aaaaaa; }
  .leaflet-popup-content-wrapper {
    background: var(--mapty-dark);
    color: #ececec;
    border-radius: 5px;
  }
  .running-popup .leaflet-popup-content-wrapper {
    border-left: 5px solid var(--mapty-brand-running);
  }
  .cycling-popup .leaflet-popup-content-wrapper {
    border-left: 5px solid var(--mapty-brand-cycling);
  }
</style>
"""


def run_web_ui(
    *,
    host: str = "127.0.0.1",
    port: int = 8088,
    settings: AppSettings | None = None,
) -> int:
    app_settings = settings or AppSettings()
    store = JsonFileStore(app_settings.storage_path)

    @ui.page("/")
    def index(client: Client) -> None:
        ui.add_head_html(STYLE)

        with ui.row().classes("w-full no-wrap gap-0"):
            with ui.column().classes("mapty-sidebar gap-4") as sidebar:
                ui.label("MAPTY").classes("text-2xl font-bold tracking-wide")
                with ui.card().classes("w-full mapty-card") as form_card:
                    with ui.row().classes("w-full items-end gap-2"):
                        type_select = ui.select(TYPE_OPTIONS, label="Type", value="running")
                        distance_input = ui.input("Distance", placeholder="km")
                        duration_input = ui.input("Duration", placeholder="min")
                        cadence_input = ui.input("Cadence", placeholder="step/min")
                        elevation_input = ui.input("Elev Gain", placeholder="meters")
                        submit_btn = ui.button("OK")
                list_column = ui.column().classes("w-full gap-2")
                reset_btn = ui.button("Reset all workouts").props("outline color=negative")
            with ui.column().classes("grow h-screen mapty-map") as map_column:
                ui.label("Waiting for your location...").classes("m-auto text-lg")

        def alert(message: str) -> None:
            with sidebar:
                ui.notify(message, color="negative")

        def schedule(delay_sec: float, callback: Callable[[], None]) -> None:
            with sidebar:
                ui.timer(delay_sec, callback, once=True)

        def on_entry_click(workout_id: str) -> None:
            controller.focus_workout(workout_id)

        location: LocationProvider
        if app_settings.fixed_location is not None:
            location = FixedLocationProvider(*app_settings.fixed_location)
        else:
            location = BrowserLocationProvider(client)

        map_provider = LeafletMapProvider(
            map_column,
            list_column,
            on_entry_click=on_entry_click,
            tile_url=app_settings.tile_url,
            tile_attribution=app_settings.tile_attribution,
        )
        controller = SessionController(
            location,
            map_provider,
            store,
            alert=alert,
            schedule=schedule,
            reload=ui.navigate.reload,
            zoom=app_settings.map_zoom,
            form_reshow_delay_sec=app_settings.form_reshow_delay_sec,
            storage_key=app_settings.storage_key,
        )

        form = controller.form
        form_card.bind_visibility_from(form, "visible")
        type_select.bind_value_from(form, "workout_type")
        distance_input.bind_value(form, "distance")
        duration_input.bind_value(form, "duration")
        cadence_input.bind_value(form, "cadence")
        elevation_input.bind_value(form, "elevation")
        cadence_input.bind_visibility_from(form, "shows_cadence")
        elevation_input.bind_visibility_from(form, "shows_elevation")

        type_select.on_value_change(lambda e: controller.select_type(e.value))
        submit_btn.on_click(controller.submit)
        for field in (distance_input, duration_input, cadence_input, elevation_input):
            field.on("keydown.enter", controller.submit)
        reset_btn.on_click(controller.reset)

        controller.start()

    ui.run(host=host, port=port, reload=False, title="Mapty")
    return 0
