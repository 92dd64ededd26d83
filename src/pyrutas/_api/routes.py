"""Routes backend endpoints."""

from __future__ import annotations

from typing import Any

from pyrutas._constants import HEALTH_ENDPOINT, ROUTES_ENDPOINT
from pyrutas._transport import Transport
from pyrutas.exceptions import DataFetchError


async def fetch_route_rows(transport: Transport) -> list[Any]:
    """Fetch the raw route rows from ``GET /rutas``.

    Raises
    ------
    DataFetchError
        On transport failure or when the body is not a JSON array.
    """
    body = await transport.get_json(ROUTES_ENDPOINT)
    if not isinstance(body, list):
        raise DataFetchError(
            f"Expected a JSON array from {ROUTES_ENDPOINT}, got {type(body).__name__}",
            endpoint=ROUTES_ENDPOINT,
        )
    return body


async def fetch_health(transport: Transport) -> str:
    """Liveness text served at ``GET /``."""
    return (await transport.get_text(HEALTH_ENDPOINT)).strip()
