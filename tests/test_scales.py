"""
Tests for marker radius and flow color mapping.
"""

import math

import pytest

from stationflow.data.types import Station
from stationflow.viz.scales import (
    ARRIVAL_COLOR,
    BALANCED_COLOR,
    DEPARTURE_COLOR,
    FILTERED_RADIUS_RANGE,
    RGB,
    UNFILTERED_RADIUS_RANGE,
    RadiusScale,
    departure_ratio,
    flow_bucket,
    flow_color,
    interpolate_rgb,
    radius_range_for,
)


def _station(arrivals, departures):
    return Station(
        id="S",
        longitude=0.0,
        latitude=0.0,
        arrivals=arrivals,
        departures=departures,
        total_traffic=arrivals + departures,
    )


def test_radius_is_sqrt_scaled():
    scale = RadiusScale(100, (0, 25))

    assert scale(0) == 0
    assert scale(100) == pytest.approx(25)
    assert scale(25) == pytest.approx(12.5)


def test_radius_area_linear_in_traffic():
    scale = RadiusScale(400, (0, 20))
    assert scale(100) ** 2 * 4 == pytest.approx(scale(400) ** 2)


def test_filtered_range():
    scale = RadiusScale(50, FILTERED_RADIUS_RANGE)

    assert scale(0) == 3
    assert scale(50) == pytest.approx(50)


def test_zero_max_collapses_to_min():
    assert RadiusScale(0, (0, 25))(0) == 0
    assert RadiusScale(0, (3, 50))(0) == 3
    assert not math.isnan(RadiusScale(0, (3, 50))(10))


def test_domain_follows_current_max():
    scale = RadiusScale(100, (0, 25))
    scale.max_traffic = 4

    assert scale(4) == pytest.approx(25)


def test_negative_max_rejected():
    with pytest.raises(ValueError):
        RadiusScale(-1)


def test_radius_range_for():
    assert radius_range_for(False) == UNFILTERED_RADIUS_RANGE
    assert radius_range_for(True) == FILTERED_RADIUS_RANGE


@pytest.mark.parametrize(
    "ratio, bucket",
    [
        (0.0, 0.0),
        (0.2, 0.0),
        (1 / 3, 0.5),
        (0.5, 0.5),
        (0.66, 0.5),
        (2 / 3, 1.0),
        (1.0, 1.0),
    ],
)
def test_flow_bucket(ratio, bucket):
    assert flow_bucket(ratio) == bucket


def test_flow_bucket_clamps():
    assert flow_bucket(-0.5) == 0.0
    assert flow_bucket(1.5) == 1.0


def test_zero_traffic_ratio_is_balanced():
    assert departure_ratio(_station(0, 0)) == 0.5
    assert flow_color(_station(0, 0)) == BALANCED_COLOR


def test_only_arrivals_is_arrival_color():
    assert flow_color(_station(arrivals=5, departures=0)) == ARRIVAL_COLOR


def test_only_departures_is_departure_color():
    assert flow_color(_station(arrivals=0, departures=5)) == DEPARTURE_COLOR


def test_equal_flow_is_balanced():
    assert flow_color(_station(arrivals=4, departures=4)) == BALANCED_COLOR


def test_exactly_three_colors():
    colors = {
        flow_color(_station(a, d))
        for a in range(0, 12)
        for d in range(0, 12)
    }
    assert colors == {ARRIVAL_COLOR, BALANCED_COLOR, DEPARTURE_COLOR}


def test_color_values():
    assert ARRIVAL_COLOR.css() == "rgb(255, 140, 0)"
    assert DEPARTURE_COLOR.css() == "rgb(70, 130, 180)"
    assert BALANCED_COLOR == RGB(163, 135, 90)
    assert DEPARTURE_COLOR.hex() == "#4682b4"


def test_interpolate_endpoints():
    assert interpolate_rgb(ARRIVAL_COLOR, DEPARTURE_COLOR, 0) == ARRIVAL_COLOR
    assert interpolate_rgb(ARRIVAL_COLOR, DEPARTURE_COLOR, 1) == DEPARTURE_COLOR
