"""Ingestion layer.

Turns raw backend rows into normalized :class:`pyrutas.models.RouteRecord`
objects. Only the state/store layer holds the results.
"""

from pyrutas.ingestion.normalize import normalize_route, normalize_routes, parse_geometry

__all__ = ["normalize_route", "normalize_routes", "parse_geometry"]
