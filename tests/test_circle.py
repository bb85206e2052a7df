from __future__ import annotations

import dataclasses
import math

import pytest

from geoshapes.bbox import BBox
from geoshapes.circle import Circle
from geoshapes.distance import DIST_EARTH, DIST_PLANE, R, DistanceGeod
from geoshapes.point import GeoPoint


def _deg(meters: float) -> float:
    # Degrees of arc along a meridian (or the equator) for the haversine sphere.
    return math.degrees(meters / R)


def test_contains_point_at_radius_due_north():
    c = Circle(0, 0, 1000, calc=DIST_EARTH)
    assert c.contains_point(0, 0)
    assert c.contains_point(_deg(1000 - 0.01), 0)
    assert not c.contains_point(_deg(1000 + 1), 0)
    assert c.contains_point(0, -_deg(999))
    assert not c.contains_point(0, -_deg(1001))


def test_contains_point_with_plane_projection():
    c = Circle(50.0755, 14.4378, 500, calc=DIST_PLANE)
    assert c.contains_point(50.0755 + _deg(499), 14.4378)
    assert not c.contains_point(50.0755 + _deg(501), 14.4378)


def test_contains_point_with_ellipsoid():
    geod = DistanceGeod()
    c = Circle(50.0755, 14.4378, 1000, calc=geod)
    lon_in, lat_in, _ = geod.geod.fwd(14.4378, 50.0755, 45.0, 999.0)
    lon_out, lat_out, _ = geod.geod.fwd(14.4378, 50.0755, 45.0, 1001.0)
    assert c.contains_point(lat_in, lon_in)
    assert not c.contains_point(lat_out, lon_out)


def test_normalized_radius_matches_strategy():
    c = Circle(10, 10, 2500, calc=DIST_PLANE)
    assert c.normalized_radius == DIST_PLANE.normalize(2500)


def test_zero_radius_circle_intersects_itself():
    assert Circle(0, 0, 0, calc=DIST_EARTH).intersects_circle(Circle(0, 0, 0, calc=DIST_EARTH))
    assert Circle(0, 0, 0).intersects(Circle(0, 0, 0))


def test_intersects_circle():
    a = Circle(0, 0, 1000, calc=DIST_EARTH)
    near = Circle(0, _deg(1500), 1000, calc=DIST_EARTH)
    far = Circle(0, _deg(2500), 1000, calc=DIST_EARTH)

    assert a.intersects_circle(near)
    assert near.intersects_circle(a)
    assert not a.intersects_circle(far)
    assert not far.intersects_circle(a)


def test_intersects_bbox_side_region():
    box = BBox(0.1, 0.2, -0.05, 0.05)
    assert not Circle(0, 0, 1000, calc=DIST_EARTH).intersects_bbox(box)
    assert Circle(0, 0, 12_000, calc=DIST_EARTH).intersects_bbox(box)


def test_intersects_bbox_above_and_below():
    box = BBox(-0.05, 0.05, 0.1, 0.2)
    assert not Circle(0, 0, 10_000, calc=DIST_EARTH).intersects_bbox(box)
    assert Circle(0, 0, 12_000, calc=DIST_EARTH).intersects_bbox(box)
    assert Circle(0.3, 0, 12_000, calc=DIST_EARTH).intersects_bbox(box)
    assert not Circle(0.3, 0, 10_000, calc=DIST_EARTH).intersects_bbox(box)


def test_intersects_bbox_corner_region():
    box = BBox(0.01, 0.02, 0.01, 0.02)
    # Nearest corner (0.01, 0.01) is ~1572m away.
    assert not Circle(0, 0, 1500, calc=DIST_EARTH).intersects_bbox(box)
    assert Circle(0, 0, 1600, calc=DIST_EARTH).intersects_bbox(box)
    assert Circle(0.03, 0.03, 1600, calc=DIST_EARTH).intersects_bbox(box)
    assert not Circle(0.03, 0.03, 1500, calc=DIST_EARTH).intersects_bbox(box)


def test_intersects_bbox_center_inside():
    assert Circle(0.5, 0.5, 0, calc=DIST_EARTH).intersects_bbox(BBox(0, 1, 0, 1))


def test_contains_bbox():
    c = Circle(0, 0, 10_000, calc=DIST_EARTH)
    # Corners ~1572m away.
    assert c.contains_bbox(BBox(-0.01, 0.01, -0.01, 0.01))
    # Inside the circle's bounds, but the corners are ~12.6km away.
    assert c.bounds.contains_bbox(BBox(-0.08, 0.08, -0.08, 0.08))
    assert not c.contains_bbox(BBox(-0.08, 0.08, -0.08, 0.08))
    assert not c.contains_bbox(BBox(-1, 1, -1, 1))


def test_contains_circle():
    big = Circle(0, 0, 1000, calc=DIST_EARTH)
    small = Circle(0, 0, 500, calc=DIST_EARTH)
    off_center = Circle(0, _deg(600), 500, calc=DIST_EARTH)

    assert big.contains_circle(small)
    assert big.contains_circle(big)
    assert not small.contains_circle(big)
    assert not big.contains_circle(off_center)
    assert big.contains_circle(Circle(0, _deg(400), 500, calc=DIST_EARTH))


def test_area_center_and_bounds():
    c = Circle(50, 14, 100, calc=DIST_EARTH)
    assert c.area() == pytest.approx(math.pi * 100 * 100)
    assert c.center == GeoPoint(50, 14)

    b = c.bounds
    assert b.contains_point(50, 14)
    assert b.max_lat - 50 == pytest.approx(_deg(100))
    assert b.max_lon - 14 > b.max_lat - 50  # parallels shrink towards the pole


def test_bounds_cannot_be_mutated_through_accessor():
    c = Circle(0, 0, 1000, calc=DIST_EARTH)
    b = c.bounds
    b.update(10, 10)
    assert c.bounds.max_lat < 1


def test_circle_is_immutable():
    c = Circle(0, 0, 1000)
    with pytest.raises(dataclasses.FrozenInstanceError):
        c.radius_in_meter = 5  # type: ignore[misc]


@pytest.mark.parametrize("radius", [-1.0, float("nan")])
def test_rejects_invalid_radius(radius):
    with pytest.raises(ValueError):
        Circle(0, 0, radius)


def test_equality_hash_and_str():
    a = Circle(1, 2, 3)
    assert a == Circle(1 + 1e-12, 2, 3 - 1e-12)
    assert hash(a) == hash(Circle(1 + 1e-12, 2, 3 - 1e-12))
    assert a != Circle(1.001, 2, 3)
    assert a != BBox(0, 1, 0, 1)
    assert str(a) == "1.0,2.0, radius:3.0"


def test_default_calc_comes_from_environment(monkeypatch):
    monkeypatch.setenv("GEOSHAPES_DISTANCE_CALC", "plane")
    assert Circle(0, 0, 10).calc is DIST_PLANE

    monkeypatch.delenv("GEOSHAPES_DISTANCE_CALC")
    assert Circle(0, 0, 10).calc is DIST_EARTH
