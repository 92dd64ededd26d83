"""Directional arrow overlays, one per visible route.

After every :meth:`DirectionOverlayManager.sync` the overlays held (and,
when a surface is attached, drawn) are exactly those of the visible
routes. Overlays whose route is still visible and unchanged are left in
place so they do not flicker.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from pyrutas._constants import (
    ARROW_COLOR,
    ARROW_INTERVAL_PX,
    ARROW_OFFSET,
    ARROW_OPACITY,
    ARROW_SIZE_PX,
    ARROW_WEIGHT,
)
from pyrutas.models.layers import DirectionOverlay
from pyrutas.models.route import RouteRecord
from pyrutas.render.surface import MapSurface

_logger = logging.getLogger(__name__)


def build_overlay(route: RouteRecord) -> DirectionOverlay:
    return DirectionOverlay(
        route_id=route.id,
        path=route.geometry,
        route_color=route.color,
        arrow_color=ARROW_COLOR,
        interval_px=ARROW_INTERVAL_PX,
        size_px=ARROW_SIZE_PX,
        weight=ARROW_WEIGHT,
        opacity=ARROW_OPACITY,
        offset=ARROW_OFFSET,
    )


@dataclass(frozen=True, slots=True)
class OverlayDiff:
    """Route ids touched by one sync."""

    added: tuple[int, ...] = ()
    removed: tuple[int, ...] = ()
    kept: tuple[int, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


class DirectionOverlayManager:
    """Owns overlay acquisition and release on the map surface."""

    def __init__(self) -> None:
        self._overlays: dict[int, DirectionOverlay] = {}
        self._surface: MapSurface | None = None

    @property
    def overlay_ids(self) -> frozenset[int]:
        return frozenset(self._overlays)

    def get(self, route_id: int) -> DirectionOverlay | None:
        return self._overlays.get(route_id)

    def attach(self, surface: MapSurface) -> None:
        """Attach a surface and draw every current overlay on it."""
        if self._surface is surface:
            return
        if self._surface is not None:
            self.detach()
        self._surface = surface
        for overlay in self._overlays.values():
            surface.add_overlay(overlay)

    def detach(self) -> None:
        """Remove every overlay from the attached surface."""
        surface = self._surface
        self._surface = None
        if surface is None:
            return
        for route_id in self._overlays:
            surface.remove_overlay(route_id)

    def release_all(self) -> None:
        """Remove and forget every overlay."""
        if self._surface is not None:
            for route_id in self._overlays:
                self._surface.remove_overlay(route_id)
        self._overlays.clear()

    def sync(self, visible_routes: Iterable[RouteRecord]) -> OverlayDiff:
        """Bring the overlay set in line with *visible_routes*.

        A visible route whose path or color changed gets its overlay
        replaced (reported as both removed and added).
        """
        required = {route.id: build_overlay(route) for route in visible_routes}

        removed: list[int] = []
        added: list[int] = []
        kept: list[int] = []

        for route_id, current in list(self._overlays.items()):
            wanted = required.get(route_id)
            if wanted == current:
                kept.append(route_id)
                continue
            del self._overlays[route_id]
            removed.append(route_id)
            if self._surface is not None:
                self._surface.remove_overlay(route_id)

        for route_id, overlay in required.items():
            if route_id in self._overlays:
                continue
            self._overlays[route_id] = overlay
            added.append(route_id)
            if self._surface is not None:
                self._surface.add_overlay(overlay)

        diff = OverlayDiff(added=tuple(added), removed=tuple(removed), kept=tuple(kept))
        if diff.changed:
            _logger.debug("Overlays synced: added=%s removed=%s", diff.added, diff.removed)
        return diff
