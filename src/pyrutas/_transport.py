"""HTTP transport for the routes backend."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pyrutas._redact import preview_for_log
from pyrutas.config import RutasConfig
from pyrutas.exceptions import DataFetchError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Tests pass doubles; :class:`HttpTransport` talks to the backend.
    """

    async def get_json(self, endpoint: str) -> Any: ...

    async def get_text(self, endpoint: str) -> str: ...


class HttpTransport:
    """GET requests against the configured backend, mapping every failure to :class:`DataFetchError`."""

    def __init__(self, config: RutasConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_text(self, endpoint: str) -> str:
        url = f"{self._config.api_url}{endpoint}"
        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, timeout=self._timeout) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise DataFetchError(
                        f"HTTP {resp.status} from {endpoint}: {preview_for_log(text)}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except DataFetchError:
            raise
        except TimeoutError as exc:
            raise DataFetchError(f"Request to {endpoint} timed out", endpoint=endpoint) from exc
        except aiohttp.ClientError as exc:
            raise DataFetchError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc

        return text

    async def get_json(self, endpoint: str) -> Any:
        text = await self.get_text(endpoint)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DataFetchError(
                f"Invalid JSON from {endpoint}: {preview_for_log(text)}",
                endpoint=endpoint,
            ) from exc
