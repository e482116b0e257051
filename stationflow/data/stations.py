# stationflow/data/stations.py
from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any, Dict, Iterator, List

from stationflow.data.types import Station, Trip
from stationflow.errors import FetchFailure
from stationflow.traffic.aggregate import compute_station_traffic

log = logging.getLogger(__name__)


def is_url(source: str | Path) -> bool:
    return str(source).lower().startswith(("http:", "https:", "ftp:"))


def _http_get_json(url: str, timeout: int = 30) -> Dict[str, Any]:
    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": "stationflow/1.0",
            "Accept": "application/json",
        },
    )
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return json.loads(resp.read().decode("utf-8", errors="replace"))


def parse_stations(raw: Dict[str, Any]) -> List[Station]:
    """
    Pull stations out of a GBFS-style document:
      {"data": {"stations": [{"short_name": ..., "lon": ..., "lat": ...}, ...]}}

    lon / lat may be strings.
    """
    stations = []
    for s in raw["data"]["stations"]:
        stations.append(
            Station(
                id=str(s["short_name"]),
                longitude=float(s["lon"]),
                latitude=float(s["lat"]),
            )
        )
    return stations


def load_stations(source: str | Path) -> List[Station]:
    """
    Load station metadata from a URL or a local JSON file.
    Any read or parse problem is raised as FetchFailure.
    """
    log.info("Loading station registry from %s", source)
    try:
        if is_url(source):
            raw = _http_get_json(str(source))
        else:
            with open(source) as f:
                raw = json.load(f)
        stations = parse_stations(raw)
    except (OSError, urllib.error.URLError, ValueError, KeyError, TypeError) as e:
        raise FetchFailure(str(source), e) from e

    log.info("Loaded %d stations", len(stations))
    return stations


class StationRegistry:
    """
    Sole owner of the Station objects for a session.

    The set of stations is fixed at construction; aggregation passes
    only rewrite their counts, in place.
    """

    def __init__(self, stations: List[Station]):
        self._stations = list(stations)
        self._by_id = {s.id: s for s in self._stations}

    def __len__(self) -> int:
        return len(self._stations)

    def __iter__(self) -> Iterator[Station]:
        return iter(self._stations)

    def __contains__(self, station_id: str) -> bool:
        return station_id in self._by_id

    def get(self, station_id: str) -> Station | None:
        return self._by_id.get(station_id)

    @property
    def stations(self) -> List[Station]:
        return self._stations

    def apply_traffic(self, trips: List[Trip]) -> List[Station]:
        return compute_station_traffic(self._stations, trips)

    def max_traffic(self) -> int:
        return max((s.total_traffic for s in self._stations), default=0)
