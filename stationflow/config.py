# stationflow/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Tuple


# ============================================================
# DATA SOURCES
# ============================================================
DEFAULT_STATIONS_SOURCE = "https://dsc106.com/labs/lab07/data/bluebikes-stations.json"
DEFAULT_TRIPS_SOURCE = "https://dsc106.com/labs/lab07/data/bluebikes-traffic-2024-03.csv"

# Bike lane networks drawn under the station markers
DEFAULT_ROUTE_SOURCES: Tuple[Tuple[str, str], ...] = (
    (
        "boston-bike-lanes",
        "https://bostonopendata-boston.opendata.arcgis.com/datasets/boston::existing-bike-network-2022.geojson",
    ),
    (
        "cambridge-bike-lanes",
        "https://raw.githubusercontent.com/cambridgegis/cambridgegis_data/main/Recreation/Bike_Facilities/RECREATION_BikeFacilities.geojson",
    ),
)

ROUTE_COLOR = "#d4adef"
ROUTE_WEIGHT = 5
ROUTE_OPACITY = 0.6


# ============================================================
# MAP
# ============================================================
CENTER_LAT = 42.36027
CENTER_LON = -71.09415
ZOOM_START = 12
MIN_ZOOM = 5
MAX_ZOOM = 18
TILES = "cartodbpositron"

# server-side viewport used for projected marker positions
VIEWPORT_WIDTH = 1024
VIEWPORT_HEIGHT = 768


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    stations_source: str = DEFAULT_STATIONS_SOURCE
    trips_source: str = DEFAULT_TRIPS_SOURCE
    route_sources: List[Tuple[str, str]] = field(
        default_factory=lambda: list(DEFAULT_ROUTE_SOURCES)
    )
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    log_level: str = "INFO"
    title: str = "Bluebikes Station Traffic"


def load_settings() -> Settings:
    """
    Build Settings from environment variables:
      STATIONS_SOURCE, TRIPS_SOURCE  (URL or local path)
      HOST, PORT, DEBUG, LOG_LEVEL
      ROUTES=0 disables the bike lane overlays
    """
    settings = Settings(
        stations_source=os.environ.get("STATIONS_SOURCE", DEFAULT_STATIONS_SOURCE),
        trips_source=os.environ.get("TRIPS_SOURCE", DEFAULT_TRIPS_SOURCE),
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8080")),
        debug=_env_bool("DEBUG", False),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
    if not _env_bool("ROUTES", True):
        settings.route_sources = []
    return settings
