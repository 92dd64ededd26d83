"""User location tracking.

A request asks the provider for one high-accuracy fix with a bounded
wait. Success stores the position and recenters the camera; failure is
reported once and leaves the last known position alone. Nothing retries
on its own.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from pyrutas._constants import LOCATION_FAILED_NOTICE
from pyrutas.exceptions import LocationError
from pyrutas.models.geometry import LatLng
from pyrutas.models.location import LocationErrorCode, LocationFix, LocationStatus
from pyrutas.state.events import StateChange, StateListener, emit

if TYPE_CHECKING:
    from pyrutas.render.camera import CameraController

_logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    """Source of device location fixes.

    Implementations raise :class:`LocationError` on failure. Any other
    exception is reported as ``POSITION_UNAVAILABLE``.
    """

    async def locate(self, *, high_accuracy: bool) -> LocationFix: ...


class GeolocationTracker:
    """State machine: ``IDLE`` → ``REQUESTING`` → ``FOUND`` | ``FAILED``."""

    def __init__(
        self,
        provider: LocationProvider,
        *,
        camera: CameraController | None = None,
        zoom: int = 16,
        timeout: float = 10.0,
        high_accuracy: bool = True,
        on_change: StateListener | None = None,
        on_notice: Callable[[str], None] | None = None,
    ) -> None:
        self._provider = provider
        self._camera = camera
        self._zoom = zoom
        self._timeout = timeout
        self._high_accuracy = high_accuracy
        self._on_change = on_change
        self._on_notice = on_notice
        self._status = LocationStatus.IDLE
        self._position: LatLng | None = None
        self._last_error: LocationError | None = None
        self._task: asyncio.Task[LatLng | None] | None = None

    @property
    def status(self) -> LocationStatus:
        return self._status

    @property
    def position(self) -> LatLng | None:
        return self._position

    @property
    def last_error(self) -> LocationError | None:
        return self._last_error

    def request(self) -> asyncio.Task[LatLng | None]:
        """Start a location request, or return the one already in flight.

        Must be called from a running event loop. The returned task
        resolves to the new position, or ``None`` when the request failed.
        """
        if self._task is not None and not self._task.done():
            return self._task

        self._status = LocationStatus.REQUESTING
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._task.add_done_callback(self._on_task_done)
        emit(self._on_change, StateChange.LOCATION)
        return self._task

    async def cancel(self) -> None:
        """Abandon the in-flight request, if any, and wait for it to unwind."""
        task = self._task
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    def _on_task_done(self, task: asyncio.Task[LatLng | None]) -> None:
        # Covers a task cancelled before it got to run.
        if task.cancelled() and self._status == LocationStatus.REQUESTING:
            self._status = LocationStatus.IDLE
            emit(self._on_change, StateChange.LOCATION)

    async def _run(self) -> LatLng | None:
        try:
            fix = await asyncio.wait_for(
                self._provider.locate(high_accuracy=self._high_accuracy),
                self._timeout,
            )
        except TimeoutError:
            self._fail(LocationError("Location request timed out", code=LocationErrorCode.TIMEOUT))
            return None
        except LocationError as exc:
            self._fail(exc)
            return None
        except asyncio.CancelledError:
            self._status = LocationStatus.IDLE
            _logger.debug("Location request cancelled")
            emit(self._on_change, StateChange.LOCATION)
            raise
        except Exception as exc:
            error = LocationError(f"Location provider failed: {exc!r}", code=LocationErrorCode.POSITION_UNAVAILABLE)
            error.__cause__ = exc
            self._fail(error)
            return None

        self._position = fix.position
        self._last_error = None
        self._status = LocationStatus.FOUND
        _logger.debug("Location fix at %s (accuracy=%s)", fix.position, fix.accuracy)
        if self._camera is not None:
            self._camera.center_on(fix.position, self._zoom)
        emit(self._on_change, StateChange.LOCATION)
        return fix.position

    def _fail(self, error: LocationError) -> None:
        self._last_error = error
        self._status = LocationStatus.FAILED
        _logger.warning("Location request failed (%s): %s", error.code.name, error)
        if self._on_notice is not None:
            self._on_notice(LOCATION_FAILED_NOTICE)
        emit(self._on_change, StateChange.LOCATION)
