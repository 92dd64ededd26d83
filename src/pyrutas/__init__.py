"""pyrutas - Async route map engine for transit routes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyrutas")
except PackageNotFoundError:
    __version__ = "0+local"

from pyrutas._api.location import HttpLocationProvider, StaticLocationProvider
from pyrutas.client import RutasClient
from pyrutas.config import RutasConfig
from pyrutas.exceptions import (
    DataFetchError,
    GeometryError,
    InvalidRecordError,
    LocationError,
    RutasConfigError,
    RutasError,
    UnknownIdError,
)
from pyrutas.models import (
    Bounds,
    Frame,
    LatLng,
    LoadReport,
    LocationErrorCode,
    LocationFix,
    LocationStatus,
    RouteRecord,
    RouteRow,
)
from pyrutas.render import FoliumMapSurface, MapSurface

__all__ = [
    "__version__",
    "Bounds",
    "DataFetchError",
    "FoliumMapSurface",
    "Frame",
    "GeometryError",
    "HttpLocationProvider",
    "InvalidRecordError",
    "LatLng",
    "LoadReport",
    "LocationError",
    "LocationErrorCode",
    "LocationFix",
    "LocationStatus",
    "MapSurface",
    "RouteRecord",
    "RouteRow",
    "RutasClient",
    "RutasConfig",
    "RutasConfigError",
    "RutasError",
    "StaticLocationProvider",
    "UnknownIdError",
]
