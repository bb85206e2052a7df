from __future__ import annotations

from typing import Iterable, Union

from geoshapes.bbox import BBox
from geoshapes.point import GeoPoint


PointLike = Union[GeoPoint, tuple[float, float], tuple[float, float, float]]


class BBoxAccumulator:
    """
    Grows a bounding box point by point.

    Starts from an inverse box; `result()` hands out an independent copy, so
    boxes returned earlier do not change when more points are added.
    """

    def __init__(self, elevation: bool = False) -> None:
        self._box = BBox.create_inverse(elevation)
        self.count = 0

    @property
    def elevation(self) -> bool:
        return self._box.has_elevation

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def add(self, lat: float, lon: float, ele: float | None = None) -> "BBoxAccumulator":
        self._box.update(lat, lon, ele)
        self.count += 1
        return self

    def add_all(self, points: Iterable[PointLike]) -> "BBoxAccumulator":
        """
        Add `GeoPoint`s or `(lat, lon)` / `(lat, lon, ele)` tuples.
        """
        for p in points:
            if isinstance(p, GeoPoint):
                self.add(p.lat, p.lon)
            else:
                self.add(*p)
        return self

    def result(self) -> BBox:
        return self._box.copy()
