from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyrutas.config import RutasConfig
from pyrutas.exceptions import DataFetchError, LocationError
from pyrutas.models.geometry import LatLng
from pyrutas.models.layers import DirectionOverlay, FitBounds, Frame, SetView
from pyrutas.models.location import LocationFix
from pyrutas.models.route import RouteRecord


def line(*points: tuple[float, float]) -> str:
    """GeoJSON LineString from (lng, lat) pairs."""
    return json.dumps({"type": "LineString", "coordinates": [list(p) for p in points]})


def make_route(
    route_id: int,
    name: str = "Ruta",
    color: str = "red",
    points: tuple[tuple[float, float], ...] = ((26.0, -98.0), (26.1, -98.1)),
    description: str | None = None,
) -> RouteRecord:
    return RouteRecord(
        id=route_id,
        name=name,
        color=color,
        geometry=tuple(LatLng(lat, lng) for lat, lng in points),
        description=description,
        fare="$12.00",
        schedule="5am-10pm",
    )


@dataclass
class RecordingSurface:
    """Map surface double that records every call in order."""

    calls: list[tuple[str, Any]] = field(default_factory=list)
    overlays: dict[int, DirectionOverlay] = field(default_factory=dict)
    frames: list[Frame] = field(default_factory=list)
    fits: list[FitBounds] = field(default_factory=list)
    views: list[SetView] = field(default_factory=list)

    def draw(self, frame: Frame) -> None:
        self.calls.append(("draw", frame))
        self.frames.append(frame)

    def add_overlay(self, overlay: DirectionOverlay) -> None:
        assert overlay.route_id not in self.overlays, f"overlay {overlay.route_id} added twice"
        self.calls.append(("add_overlay", overlay.route_id))
        self.overlays[overlay.route_id] = overlay

    def remove_overlay(self, route_id: int) -> None:
        assert route_id in self.overlays, f"overlay {route_id} removed but never added"
        self.calls.append(("remove_overlay", route_id))
        del self.overlays[route_id]

    def fit_bounds(self, command: FitBounds) -> None:
        self.calls.append(("fit_bounds", command))
        self.fits.append(command)

    def set_view(self, command: SetView) -> None:
        self.calls.append(("set_view", command))
        self.views.append(command)

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)


@dataclass
class FakeTransport:
    rows: Any = field(default_factory=list)
    error: DataFetchError | None = None
    health: str = "Servidor de Peceras activo"
    calls: dict[str, int] = field(default_factory=dict)

    async def get_json(self, endpoint: str) -> Any:
        self.calls[endpoint] = self.calls.get(endpoint, 0) + 1
        if self.error is not None:
            raise self.error
        return self.rows

    async def get_text(self, endpoint: str) -> str:
        self.calls[endpoint] = self.calls.get(endpoint, 0) + 1
        if self.error is not None:
            raise self.error
        return self.health


class FakeLocationProvider:
    """Location provider that blocks until released."""

    def __init__(self, fix: LocationFix | None = None, error: LocationError | None = None) -> None:
        self.fix = fix or LocationFix(latitude=26.08, longitude=-98.29)
        self.error = error
        self.calls = 0
        self.high_accuracy: list[bool] = []
        self.release = asyncio.Event()

    async def locate(self, *, high_accuracy: bool) -> LocationFix:
        self.calls += 1
        self.high_accuracy.append(high_accuracy)
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.fix


@pytest.fixture
def config() -> RutasConfig:
    return RutasConfig(base_url="http://backend.test", locate_timeout=1.0)


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()
