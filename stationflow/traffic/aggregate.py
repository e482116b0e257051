# stationflow/traffic/aggregate.py
from __future__ import annotations

from typing import Dict, Iterable, List

from stationflow.data.types import Station, Trip


def count_by_station(trips: Iterable[Trip], key: str) -> Dict[str, int]:
    """Group trips by the station id in `key` and count each group."""
    counts: Dict[str, int] = {}
    for trip in trips:
        sid = getattr(trip, key)
        counts[sid] = counts.get(sid, 0) + 1
    return counts


def compute_station_traffic(stations: List[Station], trips: Iterable[Trip]) -> List[Station]:
    """
    Recount arrivals / departures / total_traffic for every station.

    Stations are updated in place and the same list is returned, so
    anything keyed on a Station keeps tracking it. Stations with no
    trips get zeros.
    """
    trips = list(trips)
    departures = count_by_station(trips, "start_station_id")
    arrivals = count_by_station(trips, "end_station_id")

    for station in stations:
        station.arrivals = arrivals.get(station.id, 0)
        station.departures = departures.get(station.id, 0)
        station.total_traffic = station.arrivals + station.departures

    return stations
