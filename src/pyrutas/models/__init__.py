"""Data models for routes, geometry, location and map layers."""

from pyrutas.models._base import RutasBaseModel
from pyrutas.models.geometry import Bounds, LatLng
from pyrutas.models.layers import (
    CircleMarkerLayer,
    DirectionOverlay,
    FitBounds,
    Frame,
    MarkerRole,
    PolylineLayer,
    SetView,
)
from pyrutas.models.location import LocationErrorCode, LocationFix, LocationStatus
from pyrutas.models.route import LoadReport, RawRoute, RejectedRoute, RouteRecord, RouteRow

__all__ = [
    "Bounds",
    "CircleMarkerLayer",
    "DirectionOverlay",
    "FitBounds",
    "Frame",
    "LatLng",
    "LoadReport",
    "LocationErrorCode",
    "LocationFix",
    "LocationStatus",
    "MarkerRole",
    "PolylineLayer",
    "RawRoute",
    "RejectedRoute",
    "RouteRecord",
    "RouteRow",
    "RutasBaseModel",
    "SetView",
]
