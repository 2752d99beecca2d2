from __future__ import annotations

from typing import Any

from mapty.core.state import TILE_ATTRIBUTION, TILE_URL
from mapty.ui.leaflet_map import use_tile_layer


class _RecordingLeaflet:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def clear_layers(self) -> None:
        self.calls.append(("clear_layers", {}))

    def tile_layer(self, **kwargs: Any) -> None:
        self.calls.append(("tile_layer", kwargs))


def test_tile_layer_replaces_default_tiles() -> None:
    leaflet = _RecordingLeaflet()

    use_tile_layer(leaflet, TILE_URL, TILE_ATTRIBUTION)

    assert [name for name, _ in leaflet.calls] == ["clear_layers", "tile_layer"]
    options = leaflet.calls[1][1]
    assert options["url_template"] == TILE_URL
    assert options["options"]["attribution"] == TILE_ATTRIBUTION
