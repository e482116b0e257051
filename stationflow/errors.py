# stationflow/errors.py
from __future__ import annotations


class StationFlowError(Exception):
    """Base class for stationflow errors."""


class FetchFailure(StationFlowError):
    """A data source was unreachable or could not be parsed."""

    def __init__(self, source: str, cause: BaseException | None = None):
        self.source = str(source)
        self.cause = cause
        msg = f"failed to load {self.source}"
        if cause is not None:
            msg += f": {cause!r}"
        super().__init__(msg)


class MapNotReady(StationFlowError):
    """The station overlay is not interactive (still loading, or loading failed)."""


class InvalidTimeFilter(StationFlowError, ValueError):
    """A time filter value that is not an integer in [-1, 1439]."""
