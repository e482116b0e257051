# stationflow/viz/format.py
from __future__ import annotations

from stationflow.data.types import Station
from stationflow.traffic.time_filter import is_active_filter

ANY_TIME_LABEL = "(any time)"


def format_time(minutes: int) -> str:
    """
    Minutes since midnight -> 12-hour clock, e.g. 0 -> "12:00 AM",
    495 -> "8:15 AM", 1439 -> "11:59 PM".
    """
    h, m = divmod(int(minutes) % 1440, 60)
    suffix = "AM" if h < 12 else "PM"
    h12 = h % 12 or 12
    return f"{h12}:{m:02d} {suffix}"


def time_label(time_filter: int | None) -> str:
    """Text shown next to the slider."""
    if not is_active_filter(time_filter):
        return ANY_TIME_LABEL
    return format_time(time_filter)


def station_tooltip(station: Station) -> str:
    return (
        f"{station.total_traffic} trips "
        f"({station.departures} departures, {station.arrivals} arrivals)"
    )
