"""High-level async client for the route map."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pyrutas._api.location import HttpLocationProvider
from pyrutas._api.routes import fetch_health, fetch_route_rows
from pyrutas._constants import ROUTES_UNAVAILABLE_NOTICE
from pyrutas._transport import HttpTransport, Transport
from pyrutas.config import RutasConfig
from pyrutas.exceptions import DataFetchError, RutasError, UnknownIdError
from pyrutas.ingestion.normalize import normalize_routes
from pyrutas.models.geometry import LatLng
from pyrutas.models.layers import FitBounds, Frame
from pyrutas.models.location import LocationStatus
from pyrutas.models.route import LoadReport, RouteRecord, RouteRow
from pyrutas.render.camera import CameraController
from pyrutas.render.overlays import DirectionOverlayManager
from pyrutas.render.renderer import MapRenderer
from pyrutas.render.surface import MapSurface
from pyrutas.state.events import StateEvent, StateListener
from pyrutas.state.geolocation import GeolocationTracker, LocationProvider
from pyrutas.state.highlight import HighlightController
from pyrutas.state.search import filter_routes
from pyrutas.state.store import RouteStore

_logger = logging.getLogger(__name__)


class RutasClient:
    """Async client and interactive state for the route map.

    Every interaction (load, toggle, hover, locate) runs to completion on
    the event loop and redraws the attached surface afterwards.

    Usage::

        async with RutasClient(config) as client:
            client.attach_surface(FoliumMapSurface(config))
            await client.load_routes()
            client.toggle_route(3)
    """

    def __init__(
        self,
        config: RutasConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        location_provider: LocationProvider | None = None,
        on_notice: Callable[[str], None] | None = None,
        on_change: StateListener | None = None,
    ) -> None:
        self._config = config or RutasConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._on_notice_cb = on_notice
        self._on_change_cb = on_change
        self._surface: MapSurface | None = None
        self._query = ""

        self._store = RouteStore(on_change=self._on_state_change)
        self._highlight = HighlightController(is_known=self._store.__contains__, on_change=self._on_state_change)
        self._camera = CameraController(padding=self._config.fit_padding)
        self._overlays = DirectionOverlayManager()
        self._tracker: GeolocationTracker | None = None
        if location_provider is not None:
            self._tracker = self._build_tracker(location_provider)
        self._renderer = MapRenderer(
            self._store,
            self._highlight,
            self._overlays,
            user_position=lambda: self.user_position,
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RutasClient:
        if self._transport is None or self._tracker is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            if self._transport is None:
                self._transport = HttpTransport(self._config, self._http_session)
            if self._tracker is None:
                self._tracker = self._build_tracker(HttpLocationProvider(self._config, self._http_session))
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._tracker is not None:
            await self._tracker.cancel()
        self.detach_surface()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _build_tracker(self, provider: LocationProvider) -> GeolocationTracker:
        return GeolocationTracker(
            provider,
            camera=self._camera,
            zoom=self._config.locate_zoom,
            timeout=self._config.locate_timeout,
            high_accuracy=self._config.locate_high_accuracy,
            on_change=self._on_state_change,
            on_notice=self._notify,
        )

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise RutasError("Client not initialized. Use 'async with RutasClient(...) as client:'")
        return self._transport

    def _require_tracker(self) -> GeolocationTracker:
        if self._tracker is None:
            raise RutasError("No location provider. Use 'async with RutasClient(...) as client:'")
        return self._tracker

    def _notify(self, message: str) -> None:
        if self._on_notice_cb is not None:
            self._on_notice_cb(message)
        else:
            _logger.info("Notice: %s", message)

    def _on_state_change(self, event: StateEvent) -> None:
        self._renderer.render()
        if self._on_change_cb is not None:
            self._on_change_cb(event)

    # ------------------------------------------------------------------
    # Map surface
    # ------------------------------------------------------------------

    def attach_surface(self, surface: MapSurface) -> None:
        """Mount the map: camera, overlays and frames start flowing to *surface*."""
        if self._surface is not None:
            self.detach_surface()
        self._surface = surface
        self._camera.attach(surface)
        self._overlays.attach(surface)
        self._renderer.attach(surface)
        self._renderer.render()

    def detach_surface(self) -> None:
        """Unmount the map, releasing every overlay drawn on it."""
        if self._surface is None:
            return
        self._overlays.detach()
        self._camera.detach()
        self._renderer.detach()
        self._surface = None

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    @property
    def config(self) -> RutasConfig:
        return self._config

    @property
    def store(self) -> RouteStore:
        return self._store

    @property
    def highlight(self) -> HighlightController:
        return self._highlight

    @property
    def overlays(self) -> DirectionOverlayManager:
        return self._overlays

    @property
    def frame(self) -> Frame:
        return self._renderer.last_frame

    async def check_health(self) -> str:
        """Backend liveness text."""
        return await fetch_health(self._require_transport())

    async def load_routes(self, *, raise_on_error: bool = False) -> LoadReport:
        """Fetch, normalize and load every route.

        A failed fetch leaves the store as it was and emits a notice;
        there is no automatic retry. Bad records are dropped one by one.
        """
        transport = self._require_transport()
        try:
            rows = await fetch_route_rows(transport)
        except DataFetchError as exc:
            _logger.warning("Could not load routes: %s", exc)
            self._notify(ROUTES_UNAVAILABLE_NOTICE)
            if raise_on_error:
                raise
            return LoadReport(error=str(exc))

        records, rejected = normalize_routes(rows, self._config)
        self._store.load(records)
        self._highlight.prune()
        return LoadReport(loaded=tuple(record.id for record in records), rejected=tuple(rejected))

    def load_records(self, records: list[RouteRecord]) -> None:
        """Load already normalized routes (no fetch)."""
        self._store.load(records)
        self._highlight.prune()

    # ------------------------------------------------------------------
    # Sidebar interactions
    # ------------------------------------------------------------------

    @property
    def query(self) -> str:
        return self._query

    def search(self, query: str) -> list[RouteRow]:
        """Set the sidebar search text and return the matching rows."""
        self._query = query
        return self.list_routes()

    def list_routes(self, query: str | None = None) -> list[RouteRow]:
        """Sidebar rows for *query* (default: the current search text)."""
        text = self._query if query is None else query
        active_id = self._highlight.active_id
        return [
            RouteRow(
                id=route.id,
                name=route.name,
                color=route.color,
                fare=route.fare,
                schedule=route.schedule,
                description=route.description,
                visible=self._store.is_visible(route.id),
                highlighted=route.id == active_id,
            )
            for route in filter_routes(self._store.routes, text)
        ]

    def toggle_route(self, route_id: int) -> bool:
        return self._store.toggle(route_id)

    def set_route_visible(self, route_id: int, visible: bool) -> None:
        self._store.set_visible(route_id, visible)

    def hover(self, route_id: int) -> None:
        self._highlight.enter(route_id)

    def unhover(self, route_id: int) -> None:
        self._highlight.leave(route_id)

    def focus_route(self, route_id: int) -> FitBounds | None:
        """Fit the viewport to a route, whether or not it is currently shown."""
        try:
            route = self._store.get(route_id)
        except UnknownIdError:
            _logger.debug("Ignoring focus on unknown route %s", route_id)
            return None
        return self._camera.focus(route.geometry)

    # ------------------------------------------------------------------
    # Location
    # ------------------------------------------------------------------

    @property
    def location_status(self) -> LocationStatus:
        return self._tracker.status if self._tracker is not None else LocationStatus.IDLE

    @property
    def user_position(self) -> LatLng | None:
        return self._tracker.position if self._tracker is not None else None

    def locate_me(self) -> asyncio.Task[LatLng | None]:
        """Request the user's location; repeated calls share one request."""
        return self._require_tracker().request()
