"""Location providers.

Python has no browser geolocation; :class:`HttpLocationProvider` asks a
JSON geolocation service instead and maps its failures onto the same
error codes.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from pyrutas.config import RutasConfig
from pyrutas.exceptions import LocationError
from pyrutas.models.geometry import LatLng
from pyrutas.models.location import LocationErrorCode, LocationFix

_logger = logging.getLogger(__name__)


class HttpLocationProvider:
    """Resolve the current position from a JSON geolocation endpoint.

    The response must carry ``lat``/``latitude`` and ``lon``/``lng``/``longitude``.
    A ``status`` of ``"fail"`` (ip-api style) is treated as unavailable.
    """

    def __init__(self, config: RutasConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.locate_timeout)

    async def locate(self, *, high_accuracy: bool) -> LocationFix:
        url = self._config.location_url
        _logger.debug("GET %s (high_accuracy=%s)", url, high_accuracy)
        try:
            async with self._http.get(url, timeout=self._timeout) as resp:
                if resp.status in (401, 403):
                    raise LocationError(
                        f"Location service refused the request (HTTP {resp.status})",
                        code=LocationErrorCode.PERMISSION_DENIED,
                    )
                if resp.status != 200:
                    raise LocationError(
                        f"Location service returned HTTP {resp.status}",
                        code=LocationErrorCode.POSITION_UNAVAILABLE,
                    )
                body: Any = await resp.json(content_type=None)
        except LocationError:
            raise
        except TimeoutError as exc:
            raise LocationError("Location service timed out", code=LocationErrorCode.TIMEOUT) from exc
        except (aiohttp.ClientError, ValueError) as exc:
            raise LocationError(
                f"Location service unavailable: {exc}",
                code=LocationErrorCode.POSITION_UNAVAILABLE,
            ) from exc

        return parse_location(body)


class StaticLocationProvider:
    """Always reports the same position."""

    def __init__(self, position: LatLng, *, accuracy: float | None = None) -> None:
        self._fix = LocationFix(latitude=position.lat, longitude=position.lng, accuracy=accuracy)

    async def locate(self, *, high_accuracy: bool) -> LocationFix:
        return self._fix


def parse_location(body: Any) -> LocationFix:
    """Build a :class:`LocationFix` from a geolocation service body."""
    if not isinstance(body, dict) or body.get("status") == "fail":
        raise LocationError("Location service could not resolve a position", code=LocationErrorCode.POSITION_UNAVAILABLE)
    try:
        return LocationFix.model_validate(body)
    except ValidationError as exc:
        raise LocationError(
            "Location service returned no usable coordinates",
            code=LocationErrorCode.POSITION_UNAVAILABLE,
        ) from exc
