"""Map surfaces.

A surface receives declarative frames, overlay acquire/release calls and
camera commands. :class:`FoliumMapSurface` keeps the latest state and
turns it into a standalone Leaflet page with folium.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import folium
from folium.plugins import PolyLineTextPath

from pyrutas.config import RutasConfig
from pyrutas.models.geometry import LatLng
from pyrutas.models.layers import CircleMarkerLayer, DirectionOverlay, FitBounds, Frame, SetView

_logger = logging.getLogger(__name__)

_ARROW_GLYPH = "➤"
# Rough width of a non-breaking space relative to the font size.
_SPACE_WIDTH_RATIO = 0.5


class MapSurface(Protocol):
    """Structural interface of the drawing target.

    Calls arrive from the event loop thread only, in the order the
    state transitions happened.
    """

    def draw(self, frame: Frame) -> None: ...

    def add_overlay(self, overlay: DirectionOverlay) -> None: ...

    def remove_overlay(self, route_id: int) -> None: ...

    def fit_bounds(self, command: FitBounds) -> None: ...

    def set_view(self, command: SetView) -> None: ...


def arrow_text(overlay: DirectionOverlay) -> str:
    """Text repeated along the path so arrows land roughly ``interval_px`` apart."""
    gap_px = max(overlay.interval_px - overlay.size_px, 0)
    spaces = max(1, round(gap_px / (overlay.size_px * _SPACE_WIDTH_RATIO)))
    return "\u00a0" * spaces + _ARROW_GLYPH


class FoliumMapSurface:
    """Retained-mode surface rendered to HTML through folium."""

    def __init__(self, config: RutasConfig | None = None) -> None:
        self._config = config or RutasConfig()
        self._frame = Frame()
        self._overlays: dict[int, DirectionOverlay] = {}
        self._view = SetView(center=LatLng(*self._config.default_center), zoom=self._config.default_zoom)
        self._fit: FitBounds | None = None

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def overlays(self) -> dict[int, DirectionOverlay]:
        return dict(self._overlays)

    @property
    def view(self) -> SetView:
        return self._view

    @property
    def fit(self) -> FitBounds | None:
        return self._fit

    def draw(self, frame: Frame) -> None:
        self._frame = frame

    def add_overlay(self, overlay: DirectionOverlay) -> None:
        if overlay.route_id in self._overlays:
            _logger.debug("Replacing overlay for route %s", overlay.route_id)
        self._overlays[overlay.route_id] = overlay

    def remove_overlay(self, route_id: int) -> None:
        self._overlays.pop(route_id, None)

    def fit_bounds(self, command: FitBounds) -> None:
        self._fit = command

    def set_view(self, command: SetView) -> None:
        self._view = command
        self._fit = None

    # ------------------------------------------------------------------
    # folium output
    # ------------------------------------------------------------------

    def _add_marker(self, fmap: folium.Map, marker: CircleMarkerLayer) -> None:
        kwargs: dict[str, float] = {}
        if marker.weight is not None:
            kwargs["weight"] = marker.weight
        folium.CircleMarker(
            location=list(marker.center),
            radius=marker.radius,
            color=marker.color,
            fill=True,
            fill_color=marker.fill_color,
            fill_opacity=marker.fill_opacity,
            popup=folium.Popup(marker.popup, max_width=300) if marker.popup else None,
            **kwargs,
        ).add_to(fmap)

    def _add_overlay(self, fmap: folium.Map, overlay: DirectionOverlay) -> None:
        # Text paths need a carrier line; keep it invisible so only arrows show.
        carrier = folium.PolyLine(
            locations=[list(point) for point in overlay.path],
            opacity=0,
            weight=overlay.weight,
        ).add_to(fmap)
        PolyLineTextPath(
            carrier,
            arrow_text(overlay),
            repeat=True,
            attributes={
                "fill": overlay.arrow_color,
                "font-size": f"{overlay.size_px}px",
                "font-weight": "bold",
                "opacity": str(overlay.opacity),
            },
        ).add_to(fmap)

    def to_map(self) -> folium.Map:
        """Build a folium map for the current state."""
        fmap = folium.Map(
            location=list(self._view.center),
            zoom_start=self._view.zoom,
            tiles=None,
        )
        folium.TileLayer(tiles=self._config.tile_url, attr=self._config.tile_attribution).add_to(fmap)

        for line in self._frame.polylines:
            folium.PolyLine(
                locations=[list(point) for point in line.points],
                color=line.color,
                weight=line.weight,
                opacity=line.opacity,
                line_cap=line.line_cap,
            ).add_to(fmap)

        for overlay in self._overlays.values():
            self._add_overlay(fmap, overlay)

        for marker in self._frame.markers:
            self._add_marker(fmap, marker)

        if self._frame.user_marker is not None:
            self._add_marker(fmap, self._frame.user_marker)

        if self._fit is not None:
            bounds = self._fit.bounds
            fmap.fit_bounds(
                [list(bounds.south_west), list(bounds.north_east)],
                padding=self._fit.padding,
            )
        return fmap

    def save(self, path: str | Path) -> Path:
        """Write the current map as a standalone HTML page."""
        target = Path(path)
        self.to_map().save(str(target))
        _logger.debug("Wrote map to %s", target)
        return target
