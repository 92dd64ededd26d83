"""State layer.

This package is the single source of truth for what routes exist, which
are shown, which one is highlighted, and where the user is. Every
transition emits a :class:`pyrutas.state.events.StateEvent`.
"""

from pyrutas.state.events import StateChange, StateEvent
from pyrutas.state.geolocation import GeolocationTracker, LocationProvider
from pyrutas.state.highlight import HighlightController
from pyrutas.state.search import filter_routes
from pyrutas.state.store import RouteStore

__all__ = [
    "GeolocationTracker",
    "HighlightController",
    "LocationProvider",
    "RouteStore",
    "StateChange",
    "StateEvent",
    "filter_routes",
]
