"""Client configuration for pyrutas."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyrutas.exceptions import RutasConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise RutasConfigError(f"{name} must be a number, got {value!r}") from exc


def _env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise RutasConfigError(f"{name} must be an integer, got {value!r}") from exc


def _env_point(name: str, value: str) -> tuple[float, float]:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2:
        raise RutasConfigError(f"{name} must be 'lat,lng', got {value!r}")
    return (_env_float(name, parts[0]), _env_float(name, parts[1]))


@dataclasses.dataclass(frozen=True)
class RutasConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Backend base URL serving ``/rutas``.
    request_timeout : float
        Total timeout in seconds for backend requests.
    default_center : tuple of float
        Initial map center as ``(lat, lng)``.
    default_zoom : int
        Initial map zoom level.
    tile_url : str
        Tile URL template for the base layer.
    tile_attribution : str
        Attribution shown for the tile layer.
    fit_padding : tuple of int
        Pixel margin kept around a route when fitting the viewport to it.
    locate_zoom : int
        Zoom level applied when centering on the user's position.
    locate_timeout : float
        Upper bound in seconds for a single location request.
    locate_high_accuracy : bool
        Ask the location provider for a high-accuracy fix.
    location_url : str
        JSON geolocation endpoint used by :class:`HttpLocationProvider`.
    default_fare : str
        Fare shown when a route carries none.
    default_schedule : str
        Schedule shown when a route carries none.
    """

    base_url: str = "http://localhost:3000"
    request_timeout: float = 10.0
    default_center: tuple[float, float] = (26.09, -98.28)
    default_zoom: int = 13
    tile_url: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    tile_attribution: str = "&copy; OpenStreetMap contributors"
    fit_padding: tuple[int, int] = (50, 50)
    locate_zoom: int = 16
    locate_timeout: float = 10.0
    locate_high_accuracy: bool = True
    location_url: str = "http://ip-api.com/json/"
    default_fare: str = "$12.00"
    default_schedule: str = "5am-10pm"

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise RutasConfigError("request_timeout must be positive")
        if self.locate_timeout <= 0:
            raise RutasConfigError("locate_timeout must be positive")
        if not self.base_url:
            raise RutasConfigError("base_url must be non-empty")

    @property
    def api_url(self) -> str:
        """Base URL without a trailing slash."""
        return self.base_url.rstrip("/")

    @classmethod
    def from_env(cls, **overrides: Any) -> RutasConfig:
        """Create configuration from environment variables.

        Reads optional ``RUTAS_*`` variables. Explicit keyword arguments
        override environment values.

        Raises
        ------
        RutasConfigError
            When a numeric or coordinate variable cannot be parsed.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "RUTAS_API_URL": "base_url",
            "RUTAS_TILE_URL": "tile_url",
            "RUTAS_LOCATION_URL": "location_url",
            "RUTAS_DEFAULT_FARE": "default_fare",
            "RUTAS_DEFAULT_SCHEDULE": "default_schedule",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "RUTAS_REQUEST_TIMEOUT": "request_timeout",
            "RUTAS_LOCATE_TIMEOUT": "locate_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        _ENV_INT_MAP = {
            "RUTAS_DEFAULT_ZOOM": "default_zoom",
            "RUTAS_LOCATE_ZOOM": "locate_zoom",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        center_env = env.get("RUTAS_DEFAULT_CENTER")
        if center_env is not None and "default_center" not in overrides:
            config_kwargs["default_center"] = _env_point("RUTAS_DEFAULT_CENTER", center_env)

        if "locate_high_accuracy" not in overrides:
            config_kwargs["locate_high_accuracy"] = _env_bool(env.get("RUTAS_LOCATE_HIGH_ACCURACY"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
