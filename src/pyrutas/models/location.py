"""Device-location models."""

from __future__ import annotations

import enum

from pydantic import AliasChoices, Field

from pyrutas.models._base import RutasBaseModel
from pyrutas.models.geometry import LatLng


class LocationErrorCode(enum.IntEnum):
    """Failure reasons for a location request.

    Values follow the browser geolocation API. Unmapped values resolve to
    ``UNKNOWN`` instead of raising ``ValueError``.
    """

    UNKNOWN = -1
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3

    @classmethod
    def _missing_(cls, value: object) -> LocationErrorCode:
        return cls.UNKNOWN


class LocationStatus(enum.StrEnum):
    IDLE = "idle"
    REQUESTING = "requesting"
    FOUND = "found"
    FAILED = "failed"


class LocationFix(RutasBaseModel):
    """A single resolved device location.

    Parameters
    ----------
    latitude : float
        Latitude in degrees.
    longitude : float
        Longitude in degrees.
    accuracy : float or None
        Accuracy radius in meters, when the provider reports one.
    """

    latitude: float = Field(ge=-90, le=90, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(ge=-180, le=180, validation_alias=AliasChoices("longitude", "lng", "lon"))
    accuracy: float | None = Field(default=None, validation_alias=AliasChoices("accuracy", "accuracy_radius"))

    @property
    def position(self) -> LatLng:
        return LatLng(self.latitude, self.longitude)
