# stationflow/viz/overlays/stations.py
from __future__ import annotations

from typing import Dict, Iterable

import folium

from stationflow.viz.controller import Marker

FILL_OPACITY = 0.6
OPACITY = 0.8
STROKE_COLOR = "white"
STROKE_WEIGHT = 1


def add_station_markers(m: folium.Map, markers: Iterable[Marker]) -> Dict[str, str]:
    """
    One CircleMarker per station, sized and colored from its Marker.

    Returns station_id -> Leaflet variable name, so the page script can
    update the same circles in place when the time filter changes.
    """
    layer_names: Dict[str, str] = {}

    for mk in markers:
        circle = folium.CircleMarker(
            location=[mk.station.latitude, mk.station.longitude],
            radius=mk.radius,
            color=STROKE_COLOR,
            weight=STROKE_WEIGHT,
            opacity=OPACITY,
            fill=True,
            fill_color=mk.fill.css(),
            fill_opacity=FILL_OPACITY,
            tooltip=mk.tooltip,
        )
        circle.add_to(m)
        layer_names[mk.station_id] = circle.get_name()

    return layer_names
