# stationflow/data/types.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Trip:
    start_station_id: str
    end_station_id: str
    started_at: datetime
    ended_at: datetime


@dataclass(eq=False)
class Station:
    """
    Station metadata plus the traffic counts of the latest aggregation pass.

    arrivals / departures / total_traffic are derived: only
    compute_station_traffic writes them.
    """
    id: str
    longitude: float
    latitude: float
    arrivals: int = 0
    departures: int = 0
    total_traffic: int = 0
