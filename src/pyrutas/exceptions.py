"""Custom exception hierarchy for pyrutas."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyrutas.models.location import LocationErrorCode


class RutasError(Exception):
    """Base exception for all pyrutas errors."""


class RutasConfigError(RutasError):
    """Invalid or missing configuration."""


class DataFetchError(RutasError):
    """Route data could not be retrieved (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class InvalidRecordError(RutasError):
    """A raw route record could not be turned into a :class:`RouteRecord`.

    Only the offending record is dropped; the rest of the payload loads.
    """

    def __init__(self, message: str, *, route_id: int | None = None) -> None:
        self.route_id = route_id
        super().__init__(message)


class GeometryError(InvalidRecordError):
    """Route geometry is empty, malformed, or has fewer than two points."""


class LocationError(RutasError):
    """A device-location request failed (denied, timed out, unavailable)."""

    def __init__(self, message: str, *, code: LocationErrorCode) -> None:
        self.code = code
        super().__init__(message)


class UnknownIdError(RutasError):
    """A route id is not present in the currently loaded route set.

    Expected when UI events race with a reload; interactive entry points
    ignore it.
    """

    def __init__(self, route_id: int) -> None:
        self.route_id = route_id
        super().__init__(f"Unknown route id: {route_id}")
