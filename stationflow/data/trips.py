# stationflow/data/trips.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

import pandas as pd

from stationflow.data.types import Trip
from stationflow.errors import FetchFailure

log = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["start_station_id", "end_station_id", "started_at", "ended_at"]


def trips_from_frame(df: pd.DataFrame) -> List[Trip]:
    """
    Convert a trips DataFrame into Trip records.

    df must have start_station_id, end_station_id, started_at, ended_at.
    Timestamps are parsed with pandas; station ids are kept as strings.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Trips CSV missing columns: {', '.join(missing)}")

    started = pd.to_datetime(df["started_at"])
    ended = pd.to_datetime(df["ended_at"])

    return [
        Trip(
            start_station_id=str(s0),
            end_station_id=str(s1),
            started_at=t0.to_pydatetime(),
            ended_at=t1.to_pydatetime(),
        )
        for s0, s1, t0, t1 in zip(
            df["start_station_id"], df["end_station_id"], started, ended
        )
    ]


def load_trips(source: str | Path) -> List[Trip]:
    """
    Load the trip log from a URL or local CSV.
    Any read or parse problem is raised as FetchFailure.
    """
    log.info("Loading trips from %s", source)
    try:
        # station ids like "A32000" or "M32006" must stay strings
        df = pd.read_csv(
            source,
            usecols=lambda c: c in REQUIRED_COLUMNS,
            dtype={"start_station_id": str, "end_station_id": str},
        )
        trips = trips_from_frame(df)
    except (OSError, ValueError, KeyError, pd.errors.ParserError) as e:
        raise FetchFailure(str(source), e) from e

    log.info("Loaded %d trips", len(trips))
    return trips


class TripStore:
    """Read-only holder for the trip log loaded at startup."""

    def __init__(self, trips: Sequence[Trip]):
        self._trips: Tuple[Trip, ...] = tuple(trips)

    def __len__(self) -> int:
        return len(self._trips)

    def __iter__(self) -> Iterator[Trip]:
        return iter(self._trips)

    @property
    def trips(self) -> Tuple[Trip, ...]:
        return self._trips
