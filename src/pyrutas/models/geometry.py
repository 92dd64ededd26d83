"""Coordinate and bounding-box models."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, model_validator


class LatLng(NamedTuple):
    """A point in (latitude, longitude) order, the order every renderer consumes."""

    lat: float
    lng: float


class Bounds(BaseModel):
    """Axis-aligned bounding region in degrees."""

    model_config = ConfigDict(frozen=True)

    south: float
    west: float
    north: float
    east: float

    @model_validator(mode="after")
    def _check_order(self) -> Bounds:
        if self.south > self.north or self.west > self.east:
            raise ValueError("bounds must satisfy south <= north and west <= east")
        return self

    @classmethod
    def from_points(cls, points: Iterable[LatLng]) -> Bounds | None:
        """Smallest region covering *points*, or ``None`` when there are none."""
        lats: list[float] = []
        lngs: list[float] = []
        for lat, lng in points:
            lats.append(lat)
            lngs.append(lng)
        if not lats:
            return None
        return cls(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))

    @property
    def south_west(self) -> LatLng:
        return LatLng(self.south, self.west)

    @property
    def north_east(self) -> LatLng:
        return LatLng(self.north, self.east)

    def contains(self, point: LatLng) -> bool:
        return self.south <= point.lat <= self.north and self.west <= point.lng <= self.east
