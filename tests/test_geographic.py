"""
Test suite for geographic coordinates and their conversion to cartesian.
"""

import math
import pytest
import numpy as np
from globe import Coords, geographic
from globe.geographic import Longitude, Latitude, Altitude


class TestLongitude:
    """Longitude wraps into [-pi, pi]."""

    @pytest.mark.parametrize("value,expected", [
        (1.0, 1.0),
        (-3.0, -3.0),
        (math.pi + 1.0, -math.pi + 1.0),
        (-math.pi - 1.0, math.pi - 1.0),
    ])
    def test_wrapping(self, value, expected):
        assert math.isclose(Longitude(value).as_float(), expected, abs_tol=1e-12)

    @pytest.mark.parametrize("value,expected", [
        (0.0, 0.0),
        (math.pi, 1.0),
        (math.pi / 2, 0.5),
        (-math.pi, -1.0),
        (-math.pi / 2, -0.5),
    ])
    def test_normal(self, value, expected):
        assert Longitude(value).normal() == expected


class TestLatitude:
    """Latitude folds into [-pi/2, pi/2]."""

    def test_in_range_unchanged(self):
        assert Latitude(0.3).as_float() == 0.3

    def test_overflow_folds_back(self):
        assert math.isclose(Latitude(-5 * math.pi / 4).as_float(), math.pi / 4)
        assert math.isclose(Latitude(3 * math.pi / 4).as_float(), math.pi / 4)

    @pytest.mark.parametrize("value,expected", [
        (0.0, 0.0),
        (math.pi / 2, 1.0),
        (-math.pi / 4, -0.5),
    ])
    def test_normal(self, value, expected):
        assert Latitude(value).normal() == expected


class TestAltitude:

    def test_absolute_value(self):
        assert Altitude(-1.56) == Altitude(1.56)


class TestConversion:
    """Geographic to cartesian and back."""

    @pytest.mark.parametrize("point,expected", [
        (geographic.Coords(0.0, 0.0, 1.0), Coords(1.0, 0.0, 0.0)),
        (geographic.Coords(math.pi / 2, 0.0, 1.0), Coords(0.0, 1.0, 0.0)),
        (geographic.Coords(0.0, math.pi / 2, 1.0), Coords(0.0, 0.0, 1.0)),
        (geographic.Coords(math.pi, 0.0, 2.0), Coords(-2.0, 0.0, 0.0)),
        (geographic.Coords(-math.pi / 2, -math.pi / 2, 3.0), Coords(0.0, 0.0, -3.0)),
    ])
    def test_to_cartesian(self, point, expected):
        result = point.to_cartesian()
        assert np.allclose(result.to_numpy(), expected.to_numpy(), atol=1e-12)

    def test_zero_altitude_is_unit_sphere(self):
        assert geographic.Coords(0.0, 0.0, 0.0).to_cartesian() == Coords(1.0, 0.0, 0.0)

    @pytest.mark.parametrize("point", [
        Coords(1.0, 2.0, 3.0),
        Coords(-4.0, 0.5, -2.0),
        Coords(0.0, -7.0, 1.0),
        Coords(6378.0, 0.0, 0.0),
    ])
    def test_round_trip(self, point):
        back = point.to_geographic().to_cartesian()
        assert np.allclose(back.to_numpy(), point.to_numpy(), rtol=1e-12, atol=1e-9)

    def test_from_cartesian_axes(self):
        north = geographic.Coords.from_cartesian(Coords(0.0, 0.0, 5.0))
        assert math.isclose(north.latitude.as_float(), math.pi / 2)
        assert north.altitude.as_float() == 5.0

        west = geographic.Coords.from_cartesian(Coords(0.0, -1.0, 0.0))
        assert math.isclose(west.longitude.as_float(), -math.pi / 2)
        assert west.latitude.as_float() == 0.0

    def test_origin_falls_back_to_zero(self):
        origin = geographic.Coords.from_cartesian(Coords())
        assert origin.longitude.as_float() == 0.0
        assert origin.latitude.as_float() == 0.0
        assert origin.altitude.as_float() == 0.0


class TestGreatCircleDistance:

    def test_same_point(self):
        p = geographic.Coords(0.4, 0.2, 1.0)
        assert p.distance(p) == pytest.approx(0.0, abs=1e-7)

    def test_antipodes(self):
        a = geographic.Coords(0.0, 0.0)
        b = geographic.Coords(math.pi, 0.0)
        assert math.isclose(a.distance(b), math.pi)

    def test_pole_to_equator(self):
        pole = geographic.Coords(0.0, math.pi / 2)
        equator = geographic.Coords(1.0, 0.0)
        assert math.isclose(pole.distance(equator), math.pi / 2)

    def test_arc_length_with_radius(self):
        a = geographic.Coords(0.0, 0.0)
        b = geographic.Coords(math.pi / 2, 0.0)
        assert math.isclose(a.distance(b, radius=6371.0), 6371.0 * math.pi / 2)
