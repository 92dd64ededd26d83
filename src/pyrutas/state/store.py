"""In-memory route store.

Holds the loaded routes and their visibility flags. The visibility map's
keys always equal the loaded route ids.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from pyrutas.exceptions import UnknownIdError
from pyrutas.models.route import RouteRecord
from pyrutas.state.events import StateChange, StateListener, emit

_logger = logging.getLogger(__name__)


class RouteStore:
    """Loaded routes plus per-route visibility.

    Iteration order is load order, which keeps overlay diffing and frame
    output deterministic.
    """

    def __init__(self, *, on_change: StateListener | None = None) -> None:
        self._routes: dict[int, RouteRecord] = {}
        self._visible: dict[int, bool] = {}
        self._on_change = on_change

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, route_id: object) -> bool:
        return route_id in self._routes

    def __iter__(self) -> Iterator[RouteRecord]:
        return iter(self._routes.values())

    @property
    def routes(self) -> tuple[RouteRecord, ...]:
        return tuple(self._routes.values())

    @property
    def visibility(self) -> dict[int, bool]:
        """Copy of the visibility map."""
        return dict(self._visible)

    def load(self, records: Iterable[RouteRecord]) -> None:
        """Replace the whole route set; every route starts visible.

        Raises
        ------
        ValueError
            If two records share an id. The store is left untouched.
        """
        routes: dict[int, RouteRecord] = {}
        for record in records:
            if record.id in routes:
                raise ValueError(f"duplicate route id {record.id}")
            routes[record.id] = record

        self._routes = routes
        self._visible = dict.fromkeys(routes, True)
        _logger.debug("Loaded %d routes", len(routes))
        emit(self._on_change, StateChange.ROUTES_LOADED)

    def get(self, route_id: int) -> RouteRecord:
        try:
            return self._routes[route_id]
        except KeyError:
            raise UnknownIdError(route_id) from None

    def is_visible(self, route_id: int) -> bool:
        return self._visible.get(route_id, False)

    def set_visible(self, route_id: int, value: bool) -> bool:
        """Show or hide a route.

        Unknown ids are ignored. Returns ``True`` when the flag changed.
        """
        if route_id not in self._visible:
            _logger.debug("Ignoring visibility change for unknown route %s", route_id)
            return False
        if self._visible[route_id] == value:
            return False
        self._visible[route_id] = value
        emit(self._on_change, StateChange.VISIBILITY, route_id)
        return True

    def toggle(self, route_id: int) -> bool:
        """Flip a route's visibility. Returns the new flag (``False`` for unknown ids)."""
        if route_id not in self._visible:
            _logger.debug("Ignoring toggle for unknown route %s", route_id)
            return False
        value = not self._visible[route_id]
        self.set_visible(route_id, value)
        return value

    def visible_routes(self) -> list[RouteRecord]:
        return [route for route_id, route in self._routes.items() if self._visible[route_id]]
