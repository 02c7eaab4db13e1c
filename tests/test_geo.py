"""Tests for GeoLocation."""

import math

import pytest

from dwgraph import GeoLocation


def test_default_location_is_origin():
    loc = GeoLocation()
    assert (loc.x, loc.y, loc.z) == (0.0, 0.0, 0.0)


def test_distance_is_planar():
    a = GeoLocation(0.0, 0.0, 0.0)
    b = GeoLocation(3.0, 4.0, 100.0)

    # z is stored but ignored by the metric
    assert a.distance(b) == 5.0
    assert b.distance(a) == 5.0
    assert b.z == 100.0


def test_distance_to_self_is_zero():
    loc = GeoLocation(35.2, 32.1, 0.0)
    assert loc.distance(loc) == 0.0


def test_distance_non_integer():
    a = GeoLocation(1.0, 1.0)
    b = GeoLocation(2.0, 2.0)
    assert math.isclose(a.distance(b), math.sqrt(2))


def test_coordinates_mutable_in_place():
    loc = GeoLocation(1.0, 2.0, 3.0)
    loc.x = 10.0
    loc.move_to(GeoLocation(7.0, 8.0, 9.0))
    assert (loc.x, loc.y, loc.z) == (7.0, 8.0, 9.0)


def test_copy_is_independent():
    original = GeoLocation(1.0, 2.0, 3.0)
    clone = original.copy()
    clone.x = 99.0

    assert original.x == 1.0
    assert clone == GeoLocation(99.0, 2.0, 3.0)


def test_str_and_parse():
    loc = GeoLocation(35.19, 32.10, 0.0)
    assert str(loc) == "35.19,32.1,0.0"
    assert GeoLocation.parse(str(loc)) == loc
    assert GeoLocation.parse(" 1, 2 ,3 ") == GeoLocation(1.0, 2.0, 3.0)


@pytest.mark.parametrize("text", ["", "1,2", "1,2,3,4", "a,b,c"])
def test_parse_rejects_malformed_text(text):
    with pytest.raises(ValueError):
        GeoLocation.parse(text)
