# stationflow/viz/app/single.py
from __future__ import annotations

import asyncio
import logging

from flask import Flask, jsonify, request

from stationflow.config import Settings
from stationflow.errors import InvalidTimeFilter, MapNotReady
from stationflow.traffic.time_filter import NO_FILTER, is_active_filter
from stationflow.viz.controller import StationMapController
from stationflow.viz.maps.render import render_map_document

log = logging.getLogger(__name__)


def _traffic_payload(controller: StationMapController):
    return {
        "time_filter": controller.time_filter,
        "label": controller.time_label,
        "any_time": not is_active_filter(controller.time_filter),
        "max_traffic": controller.radius_scale.max_traffic,
        "markers": [mk.to_dict() for mk in controller.markers],
    }


def create_app(controller: StationMapController, settings: Settings | None = None) -> Flask:
    """
    Flask app around one loaded controller.

      GET /               map page (?t= sets the initial filter)
      GET /api/traffic    ?t=<-1..1439> -> markers after a filter pass
      GET /api/viewport   ?lat&lon&zoom&width&height -> re-projected markers
    """
    settings = settings or Settings()
    app = Flask(__name__)

    def _time_arg(default):
        raw = request.args.get("t", None)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError as e:
            raise InvalidTimeFilter(f"time filter must be an integer, got {raw!r}") from e

    @app.errorhandler(MapNotReady)
    def _not_ready(e):
        return jsonify(error=str(e), state=controller.state.value), 503

    @app.errorhandler(InvalidTimeFilter)
    def _bad_time(e):
        return jsonify(error=str(e)), 400

    @app.route("/")
    def _index():
        t_req = _time_arg(None)
        with controller.lock:
            if t_req is not None and controller.interactive:
                controller.set_time_filter(t_req)

            return render_map_document(
                controller,
                title=settings.title,
                route_sources=settings.route_sources,
            )

    @app.route("/api/traffic")
    def _traffic():
        t_req = _time_arg(NO_FILTER)
        # hold the lock until the payload is built so markers match time_filter
        with controller.lock:
            controller.set_time_filter(t_req)
            return jsonify(_traffic_payload(controller))

    @app.route("/api/viewport")
    def _viewport():
        with controller.lock:
            if not controller.interactive:
                raise MapNotReady(f"station overlay is {controller.state.value}")

            viewport = controller.projection.viewport
            width = request.args.get("width", None, type=int)
            height = request.args.get("height", None, type=int)
            if width is not None or height is not None:
                viewport.resize(
                    viewport.width if width is None else width,
                    viewport.height if height is None else height,
                )

            lat = request.args.get("lat", viewport.lat, type=float)
            lon = request.args.get("lon", viewport.lon, type=float)
            zoom = request.args.get("zoom", viewport.zoom, type=float)
            viewport.set_view(lat, lon, zoom)

            return jsonify(
                {
                    "lat": viewport.lat,
                    "lon": viewport.lon,
                    "zoom": viewport.zoom,
                    "width": viewport.width,
                    "height": viewport.height,
                    "markers": [mk.to_dict() for mk in controller.markers],
                }
            )

    return app


def serve_station_map(settings: Settings) -> None:
    """
    Load stations + trips, then serve the map. A failed load still
    serves the base map, just without the station overlay.
    """
    controller = StationMapController()
    ok = asyncio.run(controller.load_sources(settings.stations_source, settings.trips_source))
    if not ok:
        log.warning("Serving base map only")

    app = create_app(controller, settings)
    try:
        app.run(host=settings.host, port=int(settings.port), debug=settings.debug)
    finally:
        controller.teardown()
