"""Frame composition.

:func:`build_frame` is a pure projection of the visible routes, the
highlight and the user position. :class:`MapRenderer` re-evaluates it
after each state transition and hands the result to the surface.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Sequence

from pyrutas._constants import (
    ENDPOINT_MARKER_RADIUS,
    ENDPOINT_MARKER_STROKE,
    END_MARKER_FILL,
    ROUTE_HIGHLIGHT_OPACITY,
    ROUTE_HIGHLIGHT_WEIGHT,
    ROUTE_LINE_CAP,
    ROUTE_OPACITY,
    ROUTE_WEIGHT,
    START_MARKER_FILL,
    USER_MARKER_FILL,
    USER_MARKER_RADIUS,
    USER_MARKER_STROKE,
    USER_MARKER_WEIGHT,
    USER_POPUP_TEXT,
)
from pyrutas.models.geometry import LatLng
from pyrutas.models.layers import CircleMarkerLayer, DirectionOverlay, Frame, MarkerRole, PolylineLayer
from pyrutas.models.route import RouteRecord
from pyrutas.render.overlays import DirectionOverlayManager
from pyrutas.render.surface import MapSurface
from pyrutas.state.highlight import HighlightController
from pyrutas.state.store import RouteStore


def _polyline(route: RouteRecord, highlighted: bool) -> PolylineLayer:
    return PolylineLayer(
        route_id=route.id,
        points=route.geometry,
        color=route.color,
        weight=ROUTE_HIGHLIGHT_WEIGHT if highlighted else ROUTE_WEIGHT,
        opacity=ROUTE_HIGHLIGHT_OPACITY if highlighted else ROUTE_OPACITY,
        line_cap=ROUTE_LINE_CAP,
    )


def _endpoint_markers(route: RouteRecord) -> tuple[CircleMarkerLayer, CircleMarkerLayer]:
    name = html.escape(route.name)
    start = CircleMarkerLayer(
        role=MarkerRole.START,
        route_id=route.id,
        center=route.start,
        radius=ENDPOINT_MARKER_RADIUS,
        color=ENDPOINT_MARKER_STROKE,
        fill_color=START_MARKER_FILL,
        popup=f"<strong>Start:</strong> {name}<br/>{html.escape(route.fare)}",
    )
    end = CircleMarkerLayer(
        role=MarkerRole.END,
        route_id=route.id,
        center=route.end,
        radius=ENDPOINT_MARKER_RADIUS,
        color=ENDPOINT_MARKER_STROKE,
        fill_color=END_MARKER_FILL,
        popup=f"<strong>End:</strong> {name}",
    )
    return start, end


def _user_marker(position: LatLng) -> CircleMarkerLayer:
    return CircleMarkerLayer(
        role=MarkerRole.USER,
        center=position,
        radius=USER_MARKER_RADIUS,
        color=USER_MARKER_STROKE,
        fill_color=USER_MARKER_FILL,
        weight=USER_MARKER_WEIGHT,
        popup=USER_POPUP_TEXT,
    )


def build_frame(
    visible_routes: Sequence[RouteRecord],
    active_id: int | None,
    user_position: LatLng | None,
    overlays: Sequence[DirectionOverlay] = (),
) -> Frame:
    """Layers for one frame, in visible-route order."""
    polylines: list[PolylineLayer] = []
    markers: list[CircleMarkerLayer] = []
    for route in visible_routes:
        polylines.append(_polyline(route, route.id == active_id))
        markers.extend(_endpoint_markers(route))

    return Frame(
        polylines=tuple(polylines),
        markers=tuple(markers),
        overlays=tuple(overlays),
        user_marker=_user_marker(user_position) if user_position is not None else None,
    )


class MapRenderer:
    """Redraws the map from the current state."""

    def __init__(
        self,
        store: RouteStore,
        highlight: HighlightController,
        overlays: DirectionOverlayManager,
        *,
        user_position: Callable[[], LatLng | None] | None = None,
    ) -> None:
        self._store = store
        self._highlight = highlight
        self._overlays = overlays
        self._user_position = user_position
        self._surface: MapSurface | None = None
        self._last_frame = Frame()

    @property
    def last_frame(self) -> Frame:
        return self._last_frame

    def attach(self, surface: MapSurface) -> None:
        self._surface = surface

    def detach(self) -> None:
        self._surface = None

    def render(self) -> Frame:
        visible = self._store.visible_routes()
        self._overlays.sync(visible)
        ordered_overlays = [
            overlay for overlay in (self._overlays.get(route.id) for route in visible) if overlay is not None
        ]

        active_id = self._highlight.active_id
        position = self._user_position() if self._user_position is not None else None
        frame = build_frame(visible, active_id, position, ordered_overlays)

        self._last_frame = frame
        if self._surface is not None:
            self._surface.draw(frame)
        return frame
