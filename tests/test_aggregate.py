"""
Tests for per-station traffic aggregation.
"""

from conftest import make_trip
from stationflow.data.stations import StationRegistry
from stationflow.data.types import Station
from stationflow.traffic.aggregate import compute_station_traffic, count_by_station


def test_single_trip_scenario():
    """One A->B trip gives A one departure and nothing else."""
    stations = [Station(id="A", longitude=0.0, latitude=0.0)]
    trips = [make_trip("A", "B", "08:00", "08:10")]

    result = compute_station_traffic(stations, trips)

    a = result[0]
    assert a.departures == 1
    assert a.arrivals == 0
    assert a.total_traffic == 1


def test_total_is_sum_for_every_station(stations, trips):
    compute_station_traffic(stations, trips)

    for s in stations:
        assert s.total_traffic == s.arrivals + s.departures, f"station {s.id}"


def test_counts(stations, trips):
    compute_station_traffic(stations, trips)
    by_id = {s.id: s for s in stations}

    assert (by_id["A"].departures, by_id["A"].arrivals) == (3, 3)
    assert (by_id["B"].departures, by_id["B"].arrivals) == (1, 2)
    assert (by_id["C"].departures, by_id["C"].arrivals) == (1, 1)


def test_station_without_trips_gets_zeros(stations, trips):
    compute_station_traffic(stations, trips)
    d = next(s for s in stations if s.id == "D")

    assert (d.arrivals, d.departures, d.total_traffic) == (0, 0, 0)


def test_mutates_same_objects(stations, trips):
    ids_before = [id(s) for s in stations]

    result = compute_station_traffic(stations, trips)

    assert result is stations
    assert [id(s) for s in result] == ids_before


def test_rerun_does_not_double_count(stations, trips):
    compute_station_traffic(stations, trips)
    first = [(s.arrivals, s.departures, s.total_traffic) for s in stations]

    compute_station_traffic(compute_station_traffic(stations, trips), trips)
    second = [(s.arrivals, s.departures, s.total_traffic) for s in stations]

    assert first == second


def test_smaller_trip_set_resets_counts(stations, trips):
    compute_station_traffic(stations, trips)
    compute_station_traffic(stations, [])

    assert all(s.total_traffic == 0 for s in stations)


def test_trips_list_untouched(stations, trips):
    before = list(trips)
    compute_station_traffic(stations, trips)
    assert trips == before


def test_count_by_station():
    trips = [make_trip("A", "B"), make_trip("A", "C"), make_trip("B", "C")]

    assert count_by_station(trips, "start_station_id") == {"A": 2, "B": 1}
    assert count_by_station(trips, "end_station_id") == {"B": 1, "C": 2}


def test_registry_owns_stations(stations, trips):
    registry = StationRegistry(stations)
    registry.apply_traffic(trips)

    assert len(registry) == 4
    assert "A" in registry and "X" not in registry
    assert registry.get("A") is stations[0]
    assert registry.max_traffic() == 6


def test_registry_max_traffic_empty():
    assert StationRegistry([]).max_traffic() == 0
