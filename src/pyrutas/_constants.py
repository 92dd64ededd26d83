"""Fixed rendering parameters for route layers."""

from __future__ import annotations

# Route polylines
ROUTE_WEIGHT = 5
ROUTE_OPACITY = 0.6
ROUTE_HIGHLIGHT_WEIGHT = 8
ROUTE_HIGHLIGHT_OPACITY = 1.0
ROUTE_LINE_CAP = "round"

# Start / end markers
ENDPOINT_MARKER_RADIUS = 6
ENDPOINT_MARKER_STROKE = "white"
START_MARKER_FILL = "#27ae60"
END_MARKER_FILL = "#c0392b"

# User position marker
USER_MARKER_RADIUS = 8
USER_MARKER_STROKE = "white"
USER_MARKER_FILL = "#2980b9"
USER_MARKER_WEIGHT = 3

# Directional arrows. Neutral color so arrows stay legible over any route color.
ARROW_COLOR = "white"
ARROW_INTERVAL_PX = 60
ARROW_SIZE_PX = 10
ARROW_WEIGHT = 2
ARROW_OPACITY = 0.7
ARROW_OFFSET = "1%"

USER_POPUP_TEXT = "You are here"
LOCATION_FAILED_NOTICE = "We could not find your location."
ROUTES_UNAVAILABLE_NOTICE = "Routes could not be loaded."

ROUTES_ENDPOINT = "/rutas"
HEALTH_ENDPOINT = "/"
