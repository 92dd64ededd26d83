"""Route normalization.

Centralizes defensive parsing of backend geometry. GeoJSON coordinates
arrive as ``[longitude, latitude]`` pairs, either as a single line or as
nested arrays for multi-segment lines; everything downstream consumes a
single flat sequence of ``(latitude, longitude)`` points.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from pyrutas._redact import preview_for_log
from pyrutas.config import RutasConfig
from pyrutas.exceptions import GeometryError, InvalidRecordError
from pyrutas.models.geometry import LatLng
from pyrutas.models.route import RawRoute, RejectedRoute, RouteRecord

_logger = logging.getLogger(__name__)

_MIN_POINTS = 2


def safe_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    result = float(value)
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def _is_position(value: Any) -> bool:
    return isinstance(value, list | tuple) and bool(value) and not isinstance(value[0], list | tuple)


def _to_point(position: Any, route_id: int | None) -> LatLng:
    if len(position) < 2:
        raise GeometryError(f"coordinate {preview_for_log(position)} has fewer than 2 values", route_id=route_id)
    lng = safe_float(position[0])
    lat = safe_float(position[1])
    if lng is None or lat is None:
        raise GeometryError(f"coordinate {preview_for_log(position)} is not numeric", route_id=route_id)
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        raise GeometryError(f"coordinate {preview_for_log(position)} is out of range", route_id=route_id)
    return LatLng(lat, lng)


def _flatten(coordinates: Any, route_id: int | None, out: list[LatLng]) -> None:
    if _is_position(coordinates):
        out.append(_to_point(coordinates, route_id))
        return
    if not isinstance(coordinates, list | tuple):
        raise GeometryError(f"unexpected coordinates value {preview_for_log(coordinates)}", route_id=route_id)
    for item in coordinates:
        _flatten(item, route_id, out)


def parse_geometry(geojson: str | Mapping[str, Any], *, route_id: int | None = None) -> tuple[LatLng, ...]:
    """Decode a GeoJSON geometry into a flat ``(lat, lng)`` sequence.

    Segments of a multi-part line are concatenated in order. An altitude
    (third value) is ignored.

    Raises
    ------
    GeometryError
        If the geometry cannot be decoded, is empty, or has fewer than
        two points.
    """
    if isinstance(geojson, str):
        try:
            decoded: Any = json.loads(geojson)
        except json.JSONDecodeError as exc:
            raise GeometryError(f"geometry is not valid JSON: {preview_for_log(geojson)}", route_id=route_id) from exc
    else:
        decoded = geojson

    if not isinstance(decoded, Mapping) or "coordinates" not in decoded:
        raise GeometryError("geometry has no 'coordinates' field", route_id=route_id)

    points: list[LatLng] = []
    _flatten(decoded["coordinates"], route_id, points)

    if len(points) < _MIN_POINTS:
        raise GeometryError(f"geometry has {len(points)} point(s), need at least {_MIN_POINTS}", route_id=route_id)
    return tuple(points)


def normalize_route(raw: Mapping[str, Any], config: RutasConfig | None = None) -> RouteRecord:
    """Build a :class:`RouteRecord` from a backend row.

    Missing ``fare``/``schedule`` get the configured placeholders; a
    missing ``description`` stays ``None``.

    Raises
    ------
    InvalidRecordError
        If required fields are missing or invalid.
    GeometryError
        If the geometry is unusable.
    """
    config = config or RutasConfig()
    route_id = raw.get("id") if isinstance(raw.get("id"), int) else None
    try:
        parsed = RawRoute.model_validate(dict(raw))
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in exc.errors())
        raise InvalidRecordError(f"invalid route record ({fields})", route_id=route_id) from exc

    geometry = parse_geometry(parsed.geojson, route_id=parsed.id)
    return RouteRecord(
        id=parsed.id,
        name=parsed.name,
        color=parsed.color,
        geometry=geometry,
        description=parsed.description,
        fare=parsed.fare if parsed.fare is not None else config.default_fare,
        schedule=parsed.schedule if parsed.schedule is not None else config.default_schedule,
    )


def normalize_routes(
    rows: Iterable[Any],
    config: RutasConfig | None = None,
) -> tuple[list[RouteRecord], list[RejectedRoute]]:
    """Normalize a whole payload, isolating per-record failures.

    Returns the accepted records in payload order and the rejected ones.
    A repeated id keeps its first occurrence.
    """
    accepted: list[RouteRecord] = []
    rejected: list[RejectedRoute] = []
    seen: set[int] = set()

    for row in rows:
        if not isinstance(row, Mapping):
            reason = f"record is not an object: {preview_for_log(row)}"
            _logger.warning("Dropping route record: %s", reason)
            rejected.append(RejectedRoute(reason=reason))
            continue
        try:
            record = normalize_route(row, config)
        except InvalidRecordError as exc:
            _logger.warning("Dropping route %s: %s", exc.route_id, exc)
            rejected.append(RejectedRoute(route_id=exc.route_id, reason=str(exc)))
            continue
        if record.id in seen:
            reason = "duplicate route id"
            _logger.warning("Dropping route %s: %s", record.id, reason)
            rejected.append(RejectedRoute(route_id=record.id, reason=reason))
            continue
        seen.add(record.id)
        accepted.append(record)

    return accepted, rejected
