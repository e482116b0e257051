# stationflow/viz/projection.py
from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Tuple

from stationflow.config import CENTER_LAT, CENTER_LON, MAX_ZOOM, MIN_ZOOM, VIEWPORT_HEIGHT, VIEWPORT_WIDTH, ZOOM_START
from stationflow.data.types import Station

log = logging.getLogger(__name__)

TILE_SIZE = 256
MAX_LATITUDE = 85.0511287798

VIEWPORT_EVENTS = ("move", "zoom", "resize", "moveend")

Listener = Callable[[str], None]


def _world_xy(lon: float, lat: float, zoom: float) -> Tuple[float, float]:
    """Spherical mercator: lon/lat -> absolute pixel coords at this zoom."""
    size = TILE_SIZE * (2 ** zoom)
    lat = max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))
    x = (lon + 180.0) / 360.0 * size
    s = math.sin(math.radians(lat))
    y = (0.5 - math.log((1 + s) / (1 - s)) / (4 * math.pi)) * size
    return x, y


class Viewport:
    """
    Server-side stand-in for the browser map: holds center / zoom / size,
    projects lon/lat to pixels inside the current view and emits the
    same change events as Leaflet (move, zoom, resize, moveend).
    """

    def __init__(
        self,
        *,
        lat: float = CENTER_LAT,
        lon: float = CENTER_LON,
        zoom: float = ZOOM_START,
        width: int = VIEWPORT_WIDTH,
        height: int = VIEWPORT_HEIGHT,
        min_zoom: float = MIN_ZOOM,
        max_zoom: float = MAX_ZOOM,
    ):
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.lat = float(lat)
        self.lon = float(lon)
        self.zoom = self._clamp_zoom(zoom)
        self.width = int(width)
        self.height = int(height)
        self._listeners: Dict[str, List[Listener]] = {e: [] for e in VIEWPORT_EVENTS}

    def _clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, float(zoom)))

    def on(self, event: str, listener: Listener) -> None:
        if event not in self._listeners:
            raise ValueError(f"unknown viewport event: {event}")
        self._listeners[event].append(listener)

    def off(self, event: str, listener: Listener) -> None:
        if listener in self._listeners.get(event, []):
            self._listeners[event].remove(listener)

    def _fire(self, event: str) -> None:
        for listener in list(self._listeners[event]):
            listener(event)

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        """lon/lat -> pixel (x, y) relative to the top-left of the view."""
        x, y = _world_xy(lon, lat, self.zoom)
        cx, cy = _world_xy(self.lon, self.lat, self.zoom)
        return x - cx + self.width / 2, y - cy + self.height / 2

    def set_view(self, lat: float, lon: float, zoom: float | None = None) -> None:
        zoom = self.zoom if zoom is None else self._clamp_zoom(zoom)
        zoomed = zoom != self.zoom

        self.lat = float(lat)
        self.lon = float(lon)
        self.zoom = zoom

        self._fire("move")
        if zoomed:
            self._fire("zoom")
        self._fire("moveend")

    def resize(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self._fire("resize")


class ProjectionAdapter:
    """
    Station -> screen pixels for the current view, plus a single
    change channel for anyone who needs to re-project after the view moves.
    """

    def __init__(self, viewport: Viewport):
        self.viewport = viewport
        self._subscribers: List[Listener] = []
        for event in VIEWPORT_EVENTS:
            viewport.on(event, self._on_viewport_event)

    def project(self, station: Station) -> Tuple[float, float]:
        return self.viewport.project(station.longitude, station.latitude)

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register a callback; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _on_viewport_event(self, event: str) -> None:
        log.debug("viewport %s -> notifying %d subscribers", event, len(self._subscribers))
        for callback in list(self._subscribers):
            callback(event)
