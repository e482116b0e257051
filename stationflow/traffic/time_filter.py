# stationflow/traffic/time_filter.py
from __future__ import annotations

from datetime import datetime
from typing import Sequence

from stationflow.data.types import Trip
from stationflow.errors import InvalidTimeFilter

NO_FILTER = -1
MINUTES_PER_DAY = 1440

# half-width of the window around the selected time, inclusive
TIME_WINDOW_MINUTES = 60


def minutes_since_midnight(ts: datetime) -> int:
    return ts.hour * 60 + ts.minute


def is_active_filter(center: int | None) -> bool:
    return center is not None and center != NO_FILTER


def validate_time_filter(value: int | None) -> int:
    """
    Normalize a slider value: None -> NO_FILTER, otherwise an int
    in [-1, 1439]. Raises InvalidTimeFilter for anything else,
    including non-integral numbers like 480.5.
    """
    if value is None:
        return NO_FILTER
    if isinstance(value, float) and not value.is_integer():
        raise InvalidTimeFilter(f"time filter must be an integer, got {value!r}")
    try:
        value = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidTimeFilter(f"time filter must be an integer, got {value!r}") from e
    if not NO_FILTER <= value < MINUTES_PER_DAY:
        raise InvalidTimeFilter(f"time filter must be in [-1, 1439], got {value}")
    return value


def trip_in_window(trip: Trip, center: int, window: int = TIME_WINDOW_MINUTES) -> bool:
    """
    True if the trip started or ended within `window` minutes of `center`.

    Only the time of day is compared. There is no wraparound at midnight:
    center=5 does not match a trip ending at 23:58.
    """
    started = minutes_since_midnight(trip.started_at)
    ended = minutes_since_midnight(trip.ended_at)
    return abs(started - center) <= window or abs(ended - center) <= window


def filter_trips_by_time(
    trips: Sequence[Trip],
    center: int | None,
    *,
    window: int = TIME_WINDOW_MINUTES,
) -> Sequence[Trip]:
    """
    Trips starting or ending within `window` minutes of `center`
    (minutes since midnight).

    center of None or NO_FILTER returns `trips` itself, unchanged.
    """
    if not is_active_filter(center):
        return trips
    return [t for t in trips if trip_in_window(t, center, window)]
