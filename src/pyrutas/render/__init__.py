"""Rendering layer: camera, directional overlays, frame building and map surfaces."""

from pyrutas.render.camera import CameraController
from pyrutas.render.overlays import DirectionOverlayManager, OverlayDiff, build_overlay
from pyrutas.render.renderer import MapRenderer, build_frame
from pyrutas.render.surface import FoliumMapSurface, MapSurface

__all__ = [
    "CameraController",
    "DirectionOverlayManager",
    "FoliumMapSurface",
    "MapRenderer",
    "MapSurface",
    "OverlayDiff",
    "build_frame",
    "build_overlay",
]
