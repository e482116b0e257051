"""
Pytest configuration and fixtures for station map tests.
"""

import asyncio
import json
from datetime import datetime

import pytest

from stationflow.data.types import Station, Trip
from stationflow.viz.controller import StationMapController


def make_trip(start, end, started="08:00", ended="08:10", day="2024-03-01", end_day=None):
    """Build a Trip from HH:MM strings."""
    return Trip(
        start_station_id=start,
        end_station_id=end,
        started_at=datetime.fromisoformat(f"{day} {started}"),
        ended_at=datetime.fromisoformat(f"{end_day or day} {ended}"),
    )


@pytest.fixture
def stations():
    return [
        Station(id="A", longitude=-71.09, latitude=42.36),
        Station(id="B", longitude=-71.10, latitude=42.35),
        Station(id="C", longitude=-71.08, latitude=42.37),
        Station(id="D", longitude=-71.07, latitude=42.38),
    ]


@pytest.fixture
def trips():
    return [
        make_trip("A", "B", "08:00", "08:10"),
        make_trip("A", "C", "08:30", "08:45"),
        make_trip("B", "A", "17:00", "17:20"),
        make_trip("C", "A", "17:05", "17:30"),
        make_trip("A", "B", "23:50", "00:05", end_day="2024-03-02"),
        make_trip("X", "A", "12:00", "12:15"),  # unknown start station
    ]


@pytest.fixture
def stations_json(tmp_path):
    doc = {
        "data": {
            "stations": [
                {"short_name": "A", "lon": "-71.09", "lat": "42.36", "name": "Alpha"},
                {"short_name": "B", "lon": -71.10, "lat": 42.35, "name": "Bravo"},
                {"short_name": "C", "lon": "-71.08", "lat": "42.37", "name": "Charlie"},
            ]
        }
    }
    path = tmp_path / "stations.json"
    path.write_text(json.dumps(doc))
    return path


@pytest.fixture
def trips_csv(tmp_path):
    rows = [
        "ride_id,start_station_id,end_station_id,started_at,ended_at,is_member",
        "r1,A,B,2024-03-01 08:00:00,2024-03-01 08:10:00,1",
        "r2,A,C,2024-03-01 08:30:00,2024-03-01 08:45:00,0",
        "r3,B,A,2024-03-01 17:00:00,2024-03-01 17:20:00,1",
        "r4,C,A,2024-03-02 17:05:00,2024-03-02 17:30:00,1",
    ]
    path = tmp_path / "trips.csv"
    path.write_text("\n".join(rows) + "\n")
    return path


@pytest.fixture
def ready_controller(stations, trips):
    controller = StationMapController()

    async def fetch_stations():
        return stations

    async def fetch_trips():
        return trips

    assert asyncio.run(controller.load(fetch_stations, fetch_trips))
    yield controller
    controller.teardown()
