# stationflow/viz/scales.py
from __future__ import annotations

import math
from bisect import bisect_right
from typing import NamedTuple, Tuple

from stationflow.data.types import Station

UNFILTERED_RADIUS_RANGE: Tuple[float, float] = (0.0, 25.0)
# fewer trips survive a time filter, so the markers get a wider range
FILTERED_RADIUS_RANGE: Tuple[float, float] = (3.0, 50.0)

# ratio given to a station with no traffic at all
BALANCED_RATIO = 0.5

FLOW_BUCKETS: Tuple[float, ...] = (0.0, 0.5, 1.0)


class RGB(NamedTuple):
    r: int
    g: int
    b: int

    def css(self) -> str:
        return f"rgb({self.r}, {self.g}, {self.b})"

    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


ARRIVAL_COLOR = RGB(255, 140, 0)     # darkorange
DEPARTURE_COLOR = RGB(70, 130, 180)  # steelblue


class RadiusScale:
    """
    Square-root scale [0, max_traffic] -> [r_min, r_max], so marker
    area grows linearly with traffic.

    With max_traffic == 0 every value maps to r_min.
    """

    def __init__(self, max_traffic: float = 0, radius_range: Tuple[float, float] = UNFILTERED_RADIUS_RANGE):
        self.max_traffic = max_traffic
        self.radius_range = radius_range

    @property
    def radius_range(self) -> Tuple[float, float]:
        return self._range

    @radius_range.setter
    def radius_range(self, value: Tuple[float, float]) -> None:
        lo, hi = value
        self._range = (float(lo), float(hi))

    @property
    def max_traffic(self) -> float:
        return self._max

    @max_traffic.setter
    def max_traffic(self, value: float) -> None:
        if value < 0:
            raise ValueError("max_traffic must be >= 0")
        self._max = float(value)

    def __call__(self, traffic: float) -> float:
        lo, hi = self._range
        if self._max <= 0:
            return lo
        t = math.sqrt(max(0.0, float(traffic))) / math.sqrt(self._max)
        return lo + (hi - lo) * t


def radius_range_for(filter_active: bool) -> Tuple[float, float]:
    return FILTERED_RADIUS_RANGE if filter_active else UNFILTERED_RADIUS_RANGE


def departure_ratio(station: Station) -> float:
    if station.total_traffic <= 0:
        return BALANCED_RATIO
    return station.departures / station.total_traffic


def flow_bucket(ratio: float) -> float:
    """
    Quantize a ratio in [0, 1] into three equal-width buckets -> 0, 0.5, 1.
    A value on a boundary (1/3, 2/3) falls into the upper bucket.
    """
    n = len(FLOW_BUCKETS)
    thresholds = [i / n for i in range(1, n)]
    idx = bisect_right(thresholds, ratio)
    return FLOW_BUCKETS[idx]


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def interpolate_rgb(a: RGB, b: RGB, t: float) -> RGB:
    return RGB(
        _round_half_up(a.r + (b.r - a.r) * t),
        _round_half_up(a.g + (b.g - a.g) * t),
        _round_half_up(a.b + (b.b - a.b) * t),
    )


def flow_color(station: Station) -> RGB:
    """
    Marker fill: arrival color (bucket 0), midpoint (0.5) or departure
    color (1), picked by the station's departure ratio.
    """
    return interpolate_rgb(ARRIVAL_COLOR, DEPARTURE_COLOR, flow_bucket(departure_ratio(station)))


BALANCED_COLOR = interpolate_rgb(ARRIVAL_COLOR, DEPARTURE_COLOR, BALANCED_RATIO)
