# stationflow/viz/overlays/routes.py
from __future__ import annotations

import json
from typing import Iterable, Tuple

import folium

from stationflow.config import ROUTE_COLOR, ROUTE_OPACITY, ROUTE_WEIGHT


def build_route_layers(map_name: str, route_sources: Iterable[Tuple[str, str]]) -> folium.Element:
    """
    Bike lane lines, fetched by the browser so a slow or missing
    GeoJSON never blocks rendering the page.
    """
    sources = [{"id": rid, "url": url} for rid, url in route_sources]
    style = {"color": ROUTE_COLOR, "weight": ROUTE_WEIGHT, "opacity": ROUTE_OPACITY}

    return folium.Element(
        f"""
<script>
document.addEventListener("DOMContentLoaded", () => {{
  const map = window["{map_name}"];
  if (!map) return;

  const style = {json.dumps(style)};
  {json.dumps(sources)}.forEach((src) => {{
    fetch(src.url)
      .then((r) => r.json())
      .then((data) => {{
        const layer = L.geoJSON(data, {{ style: () => style }});
        layer.addTo(map);
        layer.bringToBack();
      }})
      .catch((e) => console.error("route layer " + src.id + " failed:", e));
  }});
}});
</script>
"""
    )
