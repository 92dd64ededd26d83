"""Hover highlight for a single route."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pyrutas.state.events import StateChange, StateListener, emit

_logger = logging.getLogger(__name__)


class HighlightController:
    """Tracks at most one highlighted route id.

    ``is_known`` reports whether an id is in the current route set; a
    highlight on an id that has since been unloaded reads as no highlight.
    """

    def __init__(
        self,
        *,
        is_known: Callable[[int], bool] | None = None,
        on_change: StateListener | None = None,
    ) -> None:
        self._active: int | None = None
        self._is_known = is_known
        self._on_change = on_change

    @property
    def active_id(self) -> int | None:
        active = self._active
        if active is not None and self._is_known is not None and not self._is_known(active):
            return None
        return active

    @property
    def is_idle(self) -> bool:
        return self.active_id is None

    def is_active(self, route_id: int) -> bool:
        return self.active_id == route_id

    def enter(self, route_id: int) -> None:
        """Pointer entered the row for *route_id*."""
        if self._is_known is not None and not self._is_known(route_id):
            _logger.debug("Ignoring hover on unknown route %s", route_id)
            return
        if self._active == route_id:
            return
        self._active = route_id
        emit(self._on_change, StateChange.HIGHLIGHT, route_id)

    def leave(self, route_id: int) -> None:
        """Pointer left the row for *route_id*; only clears if it is the active one."""
        if self._active != route_id:
            return
        self._active = None
        emit(self._on_change, StateChange.HIGHLIGHT, route_id)

    def clear(self) -> None:
        if self._active is None:
            return
        previous = self._active
        self._active = None
        emit(self._on_change, StateChange.HIGHLIGHT, previous)

    def prune(self) -> None:
        """Drop a highlight that points at an unloaded route."""
        if self._active is not None and self.active_id is None:
            self.clear()
