"""Sidebar search."""

from __future__ import annotations

from collections.abc import Iterable

from pyrutas.models.route import RouteRecord


def filter_routes(routes: Iterable[RouteRecord], query: str) -> list[RouteRecord]:
    """Routes whose name or description contains *query*, ignoring case.

    An empty query matches everything. Order is preserved. Visibility is
    not consulted or changed.
    """
    needle = query.casefold()
    if not needle:
        return list(routes)
    return [
        route
        for route in routes
        if needle in route.name.casefold() or (route.description is not None and needle in route.description.casefold())
    ]
