from __future__ import annotations

import asyncio

import pytest

from conftest import FakeLocationProvider, RecordingSurface
from pyrutas.exceptions import LocationError
from pyrutas.models.geometry import LatLng
from pyrutas.models.location import LocationErrorCode, LocationFix, LocationStatus
from pyrutas.render.camera import CameraController
from pyrutas.state.geolocation import GeolocationTracker


def _tracker(
    provider: FakeLocationProvider,
    surface: RecordingSurface | None = None,
    notices: list[str] | None = None,
    timeout: float = 1.0,
) -> GeolocationTracker:
    camera = CameraController()
    if surface is not None:
        camera.attach(surface)
    return GeolocationTracker(
        provider,
        camera=camera,
        zoom=16,
        timeout=timeout,
        on_notice=notices.append if notices is not None else None,
    )


@pytest.mark.asyncio
async def test_request_while_requesting_issues_one_query() -> None:
    provider = FakeLocationProvider()
    tracker = _tracker(provider)

    first = tracker.request()
    second = tracker.request()
    assert first is second
    assert tracker.status == LocationStatus.REQUESTING

    await asyncio.sleep(0)
    provider.release.set()
    await first

    assert provider.calls == 1
    assert provider.high_accuracy == [True]


@pytest.mark.asyncio
async def test_success_updates_position_and_recenters(surface: RecordingSurface) -> None:
    provider = FakeLocationProvider(fix=LocationFix(latitude=26.08, longitude=-98.29))
    tracker = _tracker(provider, surface)
    provider.release.set()

    position = await tracker.request()

    assert position == LatLng(26.08, -98.29)
    assert tracker.status == LocationStatus.FOUND
    assert tracker.position == LatLng(26.08, -98.29)
    assert surface.views[-1].center == LatLng(26.08, -98.29)
    assert surface.views[-1].zoom == 16


@pytest.mark.asyncio
async def test_failure_keeps_previous_position_and_notifies_once(surface: RecordingSurface) -> None:
    notices: list[str] = []
    provider = FakeLocationProvider()
    tracker = _tracker(provider, surface, notices)
    provider.release.set()
    await tracker.request()

    provider.error = LocationError("denied", code=LocationErrorCode.PERMISSION_DENIED)
    result = await tracker.request()

    assert result is None
    assert tracker.status == LocationStatus.FAILED
    assert tracker.position == LatLng(26.08, -98.29)
    assert tracker.last_error is not None
    assert tracker.last_error.code == LocationErrorCode.PERMISSION_DENIED
    assert len(notices) == 1
    assert len(surface.views) == 1
    # no silent retry
    await asyncio.sleep(0)
    assert provider.calls == 2


@pytest.mark.asyncio
async def test_slow_provider_times_out() -> None:
    notices: list[str] = []
    provider = FakeLocationProvider()
    tracker = _tracker(provider, notices=notices, timeout=0.01)

    result = await tracker.request()

    assert result is None
    assert tracker.status == LocationStatus.FAILED
    assert tracker.last_error is not None
    assert tracker.last_error.code == LocationErrorCode.TIMEOUT
    assert tracker.position is None
    assert notices


def test_unknown_error_code_maps_to_unknown() -> None:
    assert LocationErrorCode(42) is LocationErrorCode.UNKNOWN


class _BrokenProvider:
    async def locate(self, *, high_accuracy: bool) -> LocationFix:
        raise OSError("device unavailable")


@pytest.mark.asyncio
async def test_unexpected_provider_error_fails_request() -> None:
    notices: list[str] = []
    tracker = GeolocationTracker(_BrokenProvider(), on_notice=notices.append)

    result = await tracker.request()

    assert result is None
    assert tracker.status == LocationStatus.FAILED
    assert tracker.last_error is not None
    assert tracker.last_error.code == LocationErrorCode.POSITION_UNAVAILABLE
    assert isinstance(tracker.last_error.__cause__, OSError)
    assert len(notices) == 1


@pytest.mark.asyncio
async def test_cancel_in_flight_request_returns_to_idle() -> None:
    notices: list[str] = []
    provider = FakeLocationProvider()
    tracker = _tracker(provider, notices=notices)

    task = tracker.request()
    while provider.calls == 0:
        await asyncio.sleep(0)

    await tracker.cancel()

    assert task.cancelled()
    assert tracker.status == LocationStatus.IDLE
    assert tracker.position is None
    assert notices == []


@pytest.mark.asyncio
async def test_cancel_before_request_starts_returns_to_idle() -> None:
    provider = FakeLocationProvider()
    tracker = _tracker(provider)

    task = tracker.request()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert tracker.status == LocationStatus.IDLE
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_new_request_after_cancel_queries_again() -> None:
    provider = FakeLocationProvider()
    tracker = _tracker(provider)
    tracker.request()
    while provider.calls == 0:
        await asyncio.sleep(0)
    await tracker.cancel()

    provider.release.set()
    position = await tracker.request()

    assert position == LatLng(26.08, -98.29)
    assert tracker.status == LocationStatus.FOUND
    assert provider.calls == 2
