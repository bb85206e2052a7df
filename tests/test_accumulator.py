from __future__ import annotations

import pytest

from geoshapes.accumulator import BBoxAccumulator
from geoshapes.bbox import BBox
from geoshapes.errors import InvalidStateError
from geoshapes.point import GeoPoint


def test_empty_accumulator_yields_inverse_box():
    acc = BBoxAccumulator()
    assert acc.is_empty
    assert not acc.elevation
    assert not acc.result().is_valid


def test_accumulates_mixed_points():
    acc = BBoxAccumulator().add_all([GeoPoint(50.0, 14.3), (50.1, 14.5)])
    assert acc.count == 2
    assert acc.result() == BBox(14.3, 14.5, 50.0, 50.1)
    assert acc.result().is_valid


def test_accumulates_elevation():
    acc = BBoxAccumulator(elevation=True)
    acc.add(10, 20, 5).add(-10, -20, -5)
    b = acc.result()
    assert (b.min_ele, b.max_ele) == (-5, 5)
    assert b.has_elevation


def test_results_are_snapshots():
    acc = BBoxAccumulator().add(0, 0).add(1, 1)
    first = acc.result()
    acc.add(5, 5)

    assert first == BBox(0, 1, 0, 1)
    assert acc.result() == BBox(0, 5, 0, 5)


def test_elevation_on_2d_accumulator_fails():
    acc = BBoxAccumulator()
    with pytest.raises(InvalidStateError):
        acc.add(1, 1, 1)
    assert acc.is_empty
