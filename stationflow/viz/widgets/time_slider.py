# stationflow/viz/widgets/time_slider.py
import json

import folium

from stationflow.traffic.time_filter import MINUTES_PER_DAY, NO_FILTER, is_active_filter
from stationflow.viz.format import ANY_TIME_LABEL, time_label


def build_time_slider(layer_names, t_current, *, api_url="/api/traffic"):
    """
    Time-of-day slider:
      - value -1 = any time, otherwise minutes since midnight
      - on input, asks the server for a new filter pass and updates
        the existing circles (radius, fill, tooltip) by station id

    layer_names: station_id -> Leaflet variable name of its circle
    """
    active = is_active_filter(t_current)
    label = time_label(t_current) if active else ""

    return folium.Element(
        f"""
<style>
#timeslider {{
  position: absolute;
  left: 50%;
  bottom: 24px;
  transform: translateX(-50%);
  z-index: 1200;
  background: rgba(255,255,255,0.95);
  padding: 8px 16px;
  border-radius: 10px;
  font-size: 13px;
  box-shadow: 0 1px 4px rgba(0,0,0,0.2);
}}
#timeslider label {{
  display: flex;
  gap: 8px;
  align-items: baseline;
}}
#time-slider {{
  width: 320px;
}}
#selected-time {{
  font-weight: 600;
  min-width: 70px;
}}
#any-time {{
  color: #777;
  font-style: italic;
  display: {'none' if active else 'inline'};
}}
</style>

<div id="timeslider">
  <label>
    Filter by time:
    <input id="time-slider" type="range" min="{NO_FILTER}" max="{MINUTES_PER_DAY - 1}" value="{t_current}">
    <time id="selected-time">{label}</time>
    <em id="any-time">{ANY_TIME_LABEL}</em>
  </label>
</div>

<script>
const stationLayers = {json.dumps(layer_names)};

function applyTraffic(payload) {{
  const selected = document.getElementById("selected-time");
  const anyTime = document.getElementById("any-time");
  selected.textContent = payload.any_time ? "" : payload.label;
  anyTime.style.display = payload.any_time ? "inline" : "none";

  payload.markers.forEach((mk) => {{
    const layer = window[stationLayers[mk.id]];
    if (!layer) return;
    layer.setRadius(mk.radius);
    layer.setStyle({{ fillColor: mk.fill }});
    layer.setTooltipContent(mk.tooltip);
  }});
}}

let pendingTime = null;

function setTime(t) {{
  pendingTime = t;
  fetch("{api_url}?t=" + encodeURIComponent(t))
    .then((r) => r.json())
    .then((payload) => {{
      // drop stale responses while dragging
      if (payload.time_filter !== pendingTime) return;
      applyTraffic(payload);
    }})
    .catch((e) => console.error("time filter failed:", e));
}}

document.addEventListener("DOMContentLoaded", () => {{
  const slider = document.getElementById("time-slider");
  if (!slider) return;
  slider.addEventListener("input", () => setTime(Number(slider.value)));
}});
</script>
"""
    )
