"""Declarative draw commands handed to a map surface."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict

from pyrutas.models.geometry import Bounds, LatLng


class MarkerRole(enum.StrEnum):
    START = "start"
    END = "end"
    USER = "user"


class PolylineLayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    route_id: int
    points: tuple[LatLng, ...]
    color: str
    weight: float
    opacity: float
    line_cap: str


class CircleMarkerLayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: MarkerRole
    center: LatLng
    radius: float
    color: str
    fill_color: str
    fill_opacity: float = 1.0
    weight: float | None = None
    popup: str = ""
    route_id: int | None = None


class DirectionOverlay(BaseModel):
    """Repeated arrow marks along a route's path.

    ``route_color`` ties the overlay to the route's current color so a
    recolored route gets a fresh overlay; the arrows themselves are drawn
    in ``arrow_color``.
    """

    model_config = ConfigDict(frozen=True)

    route_id: int
    path: tuple[LatLng, ...]
    route_color: str
    arrow_color: str
    interval_px: int
    size_px: int
    weight: float
    opacity: float
    offset: str


class FitBounds(BaseModel):
    model_config = ConfigDict(frozen=True)

    bounds: Bounds
    padding: tuple[int, int]


class SetView(BaseModel):
    model_config = ConfigDict(frozen=True)

    center: LatLng
    zoom: int


class Frame(BaseModel):
    """Every layer drawn for the current state."""

    model_config = ConfigDict(frozen=True)

    polylines: tuple[PolylineLayer, ...] = ()
    markers: tuple[CircleMarkerLayer, ...] = ()
    overlays: tuple[DirectionOverlay, ...] = ()
    user_marker: CircleMarkerLayer | None = None

    @property
    def route_ids(self) -> tuple[int, ...]:
        return tuple(layer.route_id for layer in self.polylines)

    @property
    def overlay_ids(self) -> tuple[int, ...]:
        return tuple(overlay.route_id for overlay in self.overlays)
