from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest

from pyrutas._api.location import HttpLocationProvider, StaticLocationProvider, parse_location
from pyrutas._api.routes import fetch_health, fetch_route_rows
from pyrutas._transport import HttpTransport
from pyrutas.config import RutasConfig
from pyrutas.exceptions import DataFetchError, LocationError
from pyrutas.models.geometry import LatLng
from pyrutas.models.location import LocationErrorCode


@dataclass
class _FakeResponse:
    status: int
    body: str

    async def text(self) -> str:
        return self.body

    async def json(self, content_type: str | None = None) -> Any:
        return json.loads(self.body)

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


@dataclass
class _FakeSession:
    """Stands in for aiohttp.ClientSession.get()."""

    status: int = 200
    body: str = "[]"
    error: BaseException | None = None
    urls: list[str] = field(default_factory=list)

    def get(self, url: str, **_kwargs: Any) -> _FakeResponse:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return _FakeResponse(self.status, self.body)


def _transport(session: _FakeSession) -> HttpTransport:
    return HttpTransport(RutasConfig(base_url="http://backend.test/"), session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_fetch_route_rows_returns_array() -> None:
    session = _FakeSession(body='[{"id": 1, "nombre": "Ruta"}]')

    rows = await fetch_route_rows(_transport(session))

    assert rows == [{"id": 1, "nombre": "Ruta"}]
    assert session.urls == ["http://backend.test/rutas"]


@pytest.mark.asyncio
async def test_non_2xx_raises_data_fetch_error() -> None:
    session = _FakeSession(status=500, body="Error en el servidor")

    with pytest.raises(DataFetchError) as excinfo:
        await fetch_route_rows(_transport(session))

    assert excinfo.value.status_code == 500
    assert excinfo.value.endpoint == "/rutas"


@pytest.mark.asyncio
async def test_malformed_json_raises_data_fetch_error() -> None:
    with pytest.raises(DataFetchError, match="Invalid JSON"):
        await fetch_route_rows(_transport(_FakeSession(body="<html>")))


@pytest.mark.asyncio
async def test_non_array_body_raises_data_fetch_error() -> None:
    with pytest.raises(DataFetchError, match="JSON array"):
        await fetch_route_rows(_transport(_FakeSession(body='{"rows": []}')))


@pytest.mark.asyncio
async def test_network_failures_wrapped() -> None:
    with pytest.raises(DataFetchError):
        await fetch_route_rows(_transport(_FakeSession(error=aiohttp.ClientConnectionError("refused"))))
    with pytest.raises(DataFetchError, match="timed out"):
        await fetch_route_rows(_transport(_FakeSession(error=TimeoutError())))


@pytest.mark.asyncio
async def test_health_text() -> None:
    session = _FakeSession(body="Servidor de Peceras activo\n")

    assert await fetch_health(_transport(session)) == "Servidor de Peceras activo"
    assert session.urls == ["http://backend.test/"]


def _provider(session: _FakeSession) -> HttpLocationProvider:
    return HttpLocationProvider(RutasConfig(location_url="http://geo.test/json"), session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_http_location_provider_parses_fix() -> None:
    session = _FakeSession(body='{"status": "success", "lat": 26.08, "lon": -98.29}')

    fix = await _provider(session).locate(high_accuracy=True)

    assert fix.position == LatLng(26.08, -98.29)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("session", "code"),
    [
        (_FakeSession(status=403, body=""), LocationErrorCode.PERMISSION_DENIED),
        (_FakeSession(status=503, body=""), LocationErrorCode.POSITION_UNAVAILABLE),
        (_FakeSession(error=TimeoutError()), LocationErrorCode.TIMEOUT),
        (_FakeSession(error=aiohttp.ClientConnectionError()), LocationErrorCode.POSITION_UNAVAILABLE),
        (_FakeSession(body='{"status": "fail"}'), LocationErrorCode.POSITION_UNAVAILABLE),
        (_FakeSession(body="not json"), LocationErrorCode.POSITION_UNAVAILABLE),
    ],
)
async def test_http_location_provider_failures(session: _FakeSession, code: LocationErrorCode) -> None:
    with pytest.raises(LocationError) as excinfo:
        await _provider(session).locate(high_accuracy=True)

    assert excinfo.value.code == code


def test_parse_location_rejects_out_of_range() -> None:
    with pytest.raises(LocationError):
        parse_location({"lat": 123.0, "lon": 0.0})


@pytest.mark.asyncio
async def test_static_provider() -> None:
    fix = await StaticLocationProvider(LatLng(1.0, 2.0), accuracy=5.0).locate(high_accuracy=False)

    assert fix.position == LatLng(1.0, 2.0)
    assert fix.accuracy == 5.0
