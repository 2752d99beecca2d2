"""Session state, form model and application settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from mapty.storage.kv_store import default_storage_path
from mapty.workout.codec import STORAGE_KEY
from mapty.workout.model import WorkoutType


SessionState = Literal["awaiting_location", "map_ready", "form_open", "form_closed"]

DEFAULT_ZOOM = 13
FORM_RESHOW_DELAY_SEC = 1.0
TILE_URL = "https://tile.openstreetmap.fr/hot/{z}/{x}/{y}.png"
TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)


@dataclass
class FormState:
    """Raw form input as typed by the user, plus form visibility."""

    workout_type: WorkoutType = "running"
    distance: str = ""
    duration: str = ""
    cadence: str = ""
    elevation: str = ""
    hidden: bool = True
    suppressed: bool = False

    @property
    def visible(self) -> bool:
        return not self.hidden and not self.suppressed

    @property
    def shows_cadence(self) -> bool:
        return self.workout_type == "running"

    @property
    def shows_elevation(self) -> bool:
        return self.workout_type == "cycling"

    def clear_inputs(self) -> None:
        self.distance = ""
        self.duration = ""
        self.cadence = ""
        self.elevation = ""


@dataclass(frozen=True)
class AppSettings:
    storage_path: Path = field(default_factory=default_storage_path)
    storage_key: str = STORAGE_KEY
    map_zoom: int = DEFAULT_ZOOM
    form_reshow_delay_sec: float = FORM_RESHOW_DELAY_SEC
    tile_url: str = TILE_URL
    tile_attribution: str = TILE_ATTRIBUTION
    fixed_location: tuple[float, float] | None = None
