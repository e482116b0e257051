# stationflow/viz/controller.py
from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Sequence

from stationflow.data.stations import StationRegistry, load_stations
from stationflow.data.trips import TripStore, load_trips
from stationflow.data.types import Station, Trip
from stationflow.errors import FetchFailure, MapNotReady
from stationflow.traffic.time_filter import NO_FILTER, filter_trips_by_time, is_active_filter, validate_time_filter
from stationflow.viz.format import station_tooltip, time_label
from stationflow.viz.projection import ProjectionAdapter, Viewport
from stationflow.viz.scales import BALANCED_COLOR, RGB, RadiusScale, flow_color, radius_range_for

log = logging.getLogger(__name__)


class MapState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FILTERING = "filtering"
    FAILED = "failed"


@dataclass(eq=False)
class Marker:
    """One circle on the map, bound to a station for the whole session."""
    station: Station
    cx: float = 0.0
    cy: float = 0.0
    radius: float = 0.0
    fill: RGB = BALANCED_COLOR
    tooltip: str = ""

    @property
    def station_id(self) -> str:
        return self.station.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.station_id,
            "lat": self.station.latitude,
            "lon": self.station.longitude,
            "cx": round(self.cx, 2),
            "cy": round(self.cy, 2),
            "radius": round(self.radius, 3),
            "fill": self.fill.css(),
            "tooltip": self.tooltip,
        }


class StationMapController:
    """
    Drives the station overlay:

      LOADING  -> fetch stations + trips (concurrently)
      READY    -> markers built, viewport changes re-project only
      FILTERING-> transient, while a time filter pass runs
      FAILED   -> a fetch failed; no markers, nothing interactive

    Owns the time filter value; nothing else writes it. `lock` serializes
    filter passes, repositioning and reads of the markers across threads.
    """

    def __init__(self, projection: ProjectionAdapter | None = None):
        self.projection = projection or ProjectionAdapter(Viewport())
        self.state = MapState.LOADING
        self.error: FetchFailure | None = None

        self.registry: StationRegistry | None = None
        self.trip_store: TripStore | None = None
        self.radius_scale = RadiusScale()

        self._time_filter = NO_FILTER
        self._markers: Dict[str, Marker] = {}
        self._unsubscribe: Callable[[], None] | None = None
        self.lock = threading.RLock()

    # ----------------------------
    # Loading
    # ----------------------------
    async def load(
        self,
        fetch_stations: Callable[[], Awaitable[List[Station]]],
        fetch_trips: Callable[[], Awaitable[Sequence[Trip]]],
    ) -> bool:
        """
        Run both fetches and, if both succeed, build the overlay.
        Returns False (and stays non-interactive) if either fails.
        """
        if self.state is not MapState.LOADING:
            raise RuntimeError(f"load() called in state {self.state.value}")

        try:
            stations, trips = await asyncio.gather(fetch_stations(), fetch_trips())
        except FetchFailure as e:
            log.error("Station overlay disabled: %s", e)
            self.error = e
            self.state = MapState.FAILED
            return False

        self._start(stations, trips)
        return True

    async def load_sources(self, stations_source: str | Path, trips_source: str | Path) -> bool:
        return await self.load(
            lambda: asyncio.to_thread(load_stations, stations_source),
            lambda: asyncio.to_thread(load_trips, trips_source),
        )

    def _start(self, stations: List[Station], trips: Sequence[Trip]) -> None:
        self.registry = StationRegistry(stations)
        self.trip_store = TripStore(trips)
        self._markers = {s.id: Marker(station=s) for s in self.registry}

        self._recompute()
        self.reposition()
        self._unsubscribe = self.projection.subscribe(self.reposition)

        self.state = MapState.READY
        log.info(
            "Overlay ready: %d stations, %d trips, max traffic %d",
            len(self.registry),
            len(self.trip_store),
            self.registry.max_traffic(),
        )

    # ----------------------------
    # Accessors
    # ----------------------------
    @property
    def interactive(self) -> bool:
        return self.state in (MapState.READY, MapState.FILTERING)

    @property
    def time_filter(self) -> int:
        return self._time_filter

    @property
    def time_label(self) -> str:
        return time_label(self._time_filter)

    @property
    def markers(self) -> List[Marker]:
        return list(self._markers.values())

    def marker(self, station_id: str) -> Marker | None:
        return self._markers.get(station_id)

    def _require_ready(self) -> None:
        if self.state is not MapState.READY:
            raise MapNotReady(f"station overlay is {self.state.value}")

    # ----------------------------
    # Transitions
    # ----------------------------
    def set_time_filter(self, value: int | None) -> List[Marker]:
        """
        Apply a new slider value (-1 = any time) and update every
        marker's radius, fill and tooltip in place.
        """
        with self.lock:
            self._require_ready()
            value = validate_time_filter(value)

            self.state = MapState.FILTERING
            try:
                self._time_filter = value
                self._recompute()
            finally:
                self.state = MapState.READY

            return self.markers

    def reposition(self, event: str | None = None) -> List[Marker]:
        with self.lock:
            for marker in self._markers.values():
                marker.cx, marker.cy = self.projection.project(marker.station)
            return self.markers

    def teardown(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _recompute(self) -> None:
        trips = filter_trips_by_time(self.trip_store.trips, self._time_filter)
        self.registry.apply_traffic(trips)

        self.radius_scale.radius_range = radius_range_for(is_active_filter(self._time_filter))
        self.radius_scale.max_traffic = self.registry.max_traffic()

        for marker in self._markers.values():
            st = marker.station
            marker.radius = self.radius_scale(st.total_traffic)
            marker.fill = flow_color(st)
            marker.tooltip = station_tooltip(st)

        log.debug(
            "Filter %s: %d trips, max traffic %d",
            self.time_label,
            len(trips),
            self.radius_scale.max_traffic,
        )
