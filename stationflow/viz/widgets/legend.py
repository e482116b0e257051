# stationflow/viz/widgets/legend.py
import folium

from stationflow.viz.scales import ARRIVAL_COLOR, BALANCED_COLOR, DEPARTURE_COLOR

LEGEND_TITLE = "Traffic Flow"

LEGEND_ITEMS = [
    ("More Departures", DEPARTURE_COLOR),
    ("Balanced", BALANCED_COLOR),
    ("More Arrivals", ARRIVAL_COLOR),
]


def build_legend_widget():
    """
    Returns a Folium Element that injects the floating flow legend.
    """
    rows = "".join(
        f'<div><span class="legend-swatch" style="background:{color.css()}"></span> {label}</div>'
        for label, color in LEGEND_ITEMS
    )

    return folium.Element(
        f"""
<style>
#map-legend {{
  position: absolute;
  bottom: 90px;
  left: 16px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  z-index: 1200;
}}
#map-legend .legend-title {{
  font-weight: bold;
  margin-bottom: 4px;
}}
.legend-swatch {{
  width: 15px;
  height: 15px;
  display: inline-block;
  vertical-align: middle;
  margin-right: 6px;
}}
</style>

<div id="map-legend">
  <div class="legend-title">{LEGEND_TITLE}</div>
  {rows}
</div>
"""
    )
