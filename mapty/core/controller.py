"""Click-to-record session controller shared by the web UI and the CLI."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Protocol

from mapty.core.state import (
    DEFAULT_ZOOM,
    FORM_RESHOW_DELAY_SEC,
    FormState,
    SessionState,
)
from mapty.geo.location import LocationProvider
from mapty.storage.kv_store import KeyValueStore
from mapty.workout.codec import STORAGE_KEY, WorkoutCodec
from mapty.workout.model import (
    WORKOUT_TYPES,
    Position,
    Workout,
    WorkoutIdGenerator,
    WorkoutType,
    now_local,
)
from mapty.workout.validator import InvalidWorkoutInput, ParsedInputs, parse_workout_inputs


logger = logging.getLogger(__name__)

LOCATION_ERROR_MESSAGE = "Could not get your position"
FOCUS_PAN_DURATION_SEC = 1.0

ClickHandler = Callable[[float, float], None]
AlertCallback = Callable[[str], None]
ScheduleCallback = Callable[[float, Callable[[], None]], None]


class MapProvider(Protocol):
    def init_view(self, center: Position, zoom: int) -> None: ...

    def on_click(self, handler: ClickHandler) -> None: ...

    def add_marker(self, position: Position, popup_text: str, style_class: str) -> None: ...

    def set_view(
        self,
        position: Position,
        zoom: int,
        animate: bool = True,
        duration_sec: float = FOCUS_PAN_DURATION_SEC,
    ) -> None: ...

    def add_list_entry(self, workout: Workout) -> None: ...

    def clear(self) -> None: ...


def _run_now(delay_sec: float, callback: Callable[[], None]) -> None:
    callback()


class SessionController:
    def __init__(
        self,
        location: LocationProvider,
        map_provider: MapProvider,
        store: KeyValueStore,
        *,
        alert: AlertCallback = print,
        schedule: ScheduleCallback = _run_now,
        reload: Callable[[], None] | None = None,
        id_generator: WorkoutIdGenerator | None = None,
        clock: Callable[[], datetime] = now_local,
        zoom: int = DEFAULT_ZOOM,
        form_reshow_delay_sec: float = FORM_RESHOW_DELAY_SEC,
        storage_key: str = STORAGE_KEY,
    ) -> None:
        self._location = location
        self._map = map_provider
        self._codec = WorkoutCodec(store, key=storage_key)
        self._alert = alert
        self._schedule = schedule
        self._reload = reload
        self._ids = id_generator or WorkoutIdGenerator()
        self._clock = clock
        self._zoom = zoom
        self._form_reshow_delay_sec = form_reshow_delay_sec

        self._state: SessionState = "awaiting_location"
        self._workouts: list[Workout] = []
        self._form = FormState()
        self._click_position: Position | None = None
        self._pending_type: WorkoutType = self._form.workout_type
        self._location_resolved = False
        self._click_registered = False
        self._generation = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def workouts(self) -> tuple[Workout, ...]:
        return tuple(self._workouts)

    @property
    def form(self) -> FormState:
        return self._form

    def start(self) -> None:
        self._state = "awaiting_location"
        self._location_resolved = False
        generation = self._generation
        self._location.get_current_position(
            lambda lat, lng: self._on_location(generation, lat, lng),
            lambda: self._on_location_failure(generation),
        )

    def click_map(self, lat: float, lng: float) -> None:
        if self._state == "awaiting_location":
            logger.debug("Ignoring map click before a location fix")
            return
        self._click_position = (lat, lng)
        self._pending_type = self._form.workout_type
        self._form.hidden = False
        self._state = "form_open"

    def select_type(self, workout_type: WorkoutType) -> None:
        if workout_type not in WORKOUT_TYPES:
            raise ValueError(f"Unknown workout type '{workout_type}'")
        self._form.workout_type = workout_type
        self._pending_type = workout_type

    def submit(self) -> Workout | None:
        if self._state != "form_open" or self._click_position is None:
            logger.debug("Ignoring submit while form is not open")
            return None

        form = self._form
        workout_type = self._pending_type
        extra = form.cadence if workout_type == "running" else form.elevation
        try:
            parsed = parse_workout_inputs(workout_type, form.distance, form.duration, extra)
        except InvalidWorkoutInput as exc:
            logger.info("Rejected %s workout input", workout_type)
            self._alert(str(exc))
            return None

        workout = self._build_workout(parsed, self._click_position)
        self._workouts.append(workout)
        self._render(workout)
        self._codec.save(self._workouts)
        logger.info("Created %s workout %s at %s", workout.type, workout.id, workout.position)

        form.clear_inputs()
        self._hide_form()
        self._click_position = None
        self._state = "form_closed"
        return workout

    def focus_workout(self, workout_id: str) -> Workout | None:
        workout = next((w for w in self._workouts if w.id == workout_id), None)
        if workout is None:
            logger.warning("No workout with id %s", workout_id)
            return None
        self._map.set_view(
            workout.position,
            self._zoom,
            animate=True,
            duration_sec=FOCUS_PAN_DURATION_SEC,
        )
        return workout

    def reset(self) -> None:
        self._codec.reset()
        self._generation += 1
        self._workouts.clear()
        self._click_position = None
        self._form.clear_inputs()
        self._form.workout_type = "running"
        self._form.hidden = True
        self._form.suppressed = False
        self._pending_type = self._form.workout_type
        self._state = "awaiting_location"
        logger.info("Session reset")

        if self._reload is not None:
            self._reload()
            return
        self._map.clear()
        self.start()

    def _on_location(self, generation: int, lat: float, lng: float) -> None:
        if generation != self._generation or self._location_resolved:
            logger.debug("Ignoring stale location fix")
            return
        self._location_resolved = True
        logger.info("Location acquired: %.5f, %.5f", lat, lng)

        self._state = "map_ready"
        self._map.init_view((lat, lng), self._zoom)
        if not self._click_registered:
            self._map.on_click(self.click_map)
            self._click_registered = True

        for workout in self._codec.load():
            self._workouts.append(workout)
            self._render(workout)

    def _on_location_failure(self, generation: int) -> None:
        if generation != self._generation or self._location_resolved:
            return
        self._location_resolved = True
        logger.warning("Location request failed")
        self._alert(LOCATION_ERROR_MESSAGE)

    def _build_workout(self, parsed: ParsedInputs, position: Position) -> Workout:
        if parsed.workout_type == "running":
            return Workout.running(
                id=self._ids.next_id(),
                position=position,
                distance=parsed.distance,
                duration=parsed.duration,
                cadence=parsed.extra,
                date=self._clock(),
            )
        return Workout.cycling(
            id=self._ids.next_id(),
            position=position,
            distance=parsed.distance,
            duration=parsed.duration,
            elevation_gain=parsed.extra,
            date=self._clock(),
        )

    def _render(self, workout: Workout) -> None:
        self._map.add_marker(workout.position, workout.description, f"{workout.type}-popup")
        self._map.add_list_entry(workout)

    def _hide_form(self) -> None:
        self._form.hidden = True
        self._form.suppressed = True
        self._schedule(self._form_reshow_delay_sec, self._end_form_suppression)

    def _end_form_suppression(self) -> None:
        self._form.suppressed = False
