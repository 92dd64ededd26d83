"""State change notifications.

Controllers never call the renderer directly; they report what changed
and the composition root decides what to redraw.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class StateChange(StrEnum):
    ROUTES_LOADED = "routes_loaded"
    VISIBILITY = "visibility"
    HIGHLIGHT = "highlight"
    LOCATION = "location"


class StateEvent(BaseModel):
    """A completed state transition."""

    model_config = ConfigDict(frozen=True)

    change: StateChange
    route_id: int | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


StateListener = Callable[[StateEvent], None]


def emit(listener: StateListener | None, change: StateChange, route_id: int | None = None) -> None:
    if listener is not None:
        listener(StateEvent(change=change, route_id=route_id))
