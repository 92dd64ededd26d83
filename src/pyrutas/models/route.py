"""Route models: the wire record and the normalized record."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pyrutas.models._base import RutasBaseModel
from pyrutas.models.geometry import LatLng


class RawRoute(RutasBaseModel):
    """A route row as served by ``GET /rutas``.

    Geometry is still the serialized GeoJSON object with coordinates in
    (longitude, latitude) order; see :func:`pyrutas.ingestion.normalize.normalize_route`.

    Parameters
    ----------
    id : int
        Stable route identifier.
    name : str
        Display name (``nombre``).
    color : str
        Stroke color.
    geojson : str or dict
        Serialized GeoJSON geometry (or an already decoded object).
    description : str or None
        Places the route passes through (``descripcion``).
    fare : str or None
        Fare text (``costo``).
    schedule : str or None
        Operating hours (``horario``).
    """

    id: int
    name: str = Field(validation_alias=AliasChoices("nombre", "name"))
    color: str
    geojson: str | dict[str, Any] = Field(validation_alias=AliasChoices("geojson", "geometry", "recorrido"))
    description: str | None = Field(default=None, validation_alias=AliasChoices("descripcion", "description"))
    fare: str | None = Field(default=None, validation_alias=AliasChoices("costo", "fare"))
    schedule: str | None = Field(default=None, validation_alias=AliasChoices("horario", "schedule"))

    @field_validator("name", "color")
    @classmethod
    def _require_text(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must be non-empty")
        return text

    @field_validator("fare", "schedule", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        # Numeric columns (e.g. a NUMERIC fare) arrive as numbers.
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class RouteRecord(BaseModel):
    """A normalized route, immutable once loaded.

    ``geometry`` is always in (latitude, longitude) order and holds at
    least two points; the first and last are the route's start and end.
    ``description`` is ``None`` when the backend sent none, which is kept
    distinct from an empty string.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    color: str
    geometry: tuple[LatLng, ...] = Field(min_length=2)
    description: str | None = None
    fare: str
    schedule: str

    @property
    def start(self) -> LatLng:
        return self.geometry[0]

    @property
    def end(self) -> LatLng:
        return self.geometry[-1]


class RouteRow(BaseModel):
    """One entry of the sidebar route list."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    color: str
    fare: str
    schedule: str
    description: str | None = None
    visible: bool
    highlighted: bool

    @property
    def shows_description(self) -> bool:
        """Whether a "passes through" line should be shown."""
        return bool(self.description)


class RejectedRoute(BaseModel):
    """A raw record dropped during normalization."""

    model_config = ConfigDict(frozen=True)

    route_id: int | None = None
    reason: str


class LoadReport(BaseModel):
    """Outcome of a route load."""

    model_config = ConfigDict(frozen=True)

    loaded: tuple[int, ...] = ()
    rejected: tuple[RejectedRoute, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        """``True`` when the payload was fetched (individual records may still be rejected)."""
        return self.error is None
