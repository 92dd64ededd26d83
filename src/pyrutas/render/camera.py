"""Camera commands issued to the map surface."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pyrutas.models.geometry import Bounds, LatLng
from pyrutas.models.layers import FitBounds, SetView
from pyrutas.render.surface import MapSurface

_logger = logging.getLogger(__name__)


class CameraController:
    """Fits the viewport to routes and centers it on points.

    Commands are dropped while no surface is attached (the map may not
    be mounted yet).
    """

    def __init__(self, *, padding: tuple[int, int] = (50, 50)) -> None:
        self._padding = padding
        self._surface: MapSurface | None = None

    @property
    def is_attached(self) -> bool:
        return self._surface is not None

    def attach(self, surface: MapSurface) -> None:
        self._surface = surface

    def detach(self) -> None:
        self._surface = None

    def focus(self, geometry: Sequence[LatLng]) -> FitBounds | None:
        """Fit the viewport to every point of *geometry* plus the padding margin.

        Returns the issued command, or ``None`` when nothing was issued.
        """
        if self._surface is None:
            _logger.debug("Camera focus ignored: no map surface attached")
            return None
        bounds = Bounds.from_points(geometry)
        if bounds is None:
            return None
        command = FitBounds(bounds=bounds, padding=self._padding)
        _logger.debug("Fit viewport to %s", bounds)
        self._surface.fit_bounds(command)
        return command

    def center_on(self, point: LatLng, zoom: int) -> SetView | None:
        if self._surface is None:
            _logger.debug("Camera recenter ignored: no map surface attached")
            return None
        command = SetView(center=point, zoom=zoom)
        self._surface.set_view(command)
        return command
