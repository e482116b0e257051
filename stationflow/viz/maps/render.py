# stationflow/viz/maps/render.py
from html import escape

import folium

from stationflow.config import CENTER_LAT, CENTER_LON, MAX_ZOOM, MIN_ZOOM, TILES, ZOOM_START
from stationflow.viz.overlays.routes import build_route_layers
from stationflow.viz.overlays.stations import add_station_markers
from stationflow.viz.widgets.legend import build_legend_widget
from stationflow.viz.widgets.time_slider import build_time_slider


def render_map_document(controller, *, title=None, route_sources=()):
    """
    Single place that assembles the full Folium map HTML document.

    The base map always renders. Markers, legend and slider are only
    added once the controller is interactive.
    """
    m = folium.Map(
        location=[CENTER_LAT, CENTER_LON],
        zoom_start=ZOOM_START,
        min_zoom=MIN_ZOOM,
        max_zoom=MAX_ZOOM,
        tiles=TILES,
        prefer_canvas=False,
    )

    # bike lanes (under markers)
    route_sources = list(route_sources)
    if route_sources:
        m.get_root().html.add_child(build_route_layers(m.get_name(), route_sources))

    if controller.interactive:
        layer_names = add_station_markers(m, controller.markers)
        m.get_root().html.add_child(build_legend_widget())
        m.get_root().html.add_child(build_time_slider(layer_names, controller.time_filter))

    # title floats over the map like the legend and slider
    if title:
        m.get_root().html.add_child(
            folium.Element(
                f"""
<div id="map-title" style="position:absolute; top:12px; left:50%; transform:translateX(-50%);
     z-index:1300; background:rgba(255,255,255,0.95); padding:6px 16px;
     border-radius:999px; font-size:14px; font-weight:600;">{escape(title)}</div>
"""
            )
        )

    return m.get_root().render()
