"""
Test suite for Body and Spin.

Tests cover:
- Construction and unit wrapping
- Validation
- Immutability
- Spin angle over time
"""

import math
from dataclasses import FrozenInstanceError
from datetime import timedelta
import pytest
from globe import (
    Body, Spin, Distance, Mass, Luminosity, Radian, GRAVITATIONAL_CONSTANT, temp_config
)


class TestConstruction:
    """Valid Body construction patterns."""

    def test_plain_numbers_are_wrapped(self):
        body = Body('Vesta', radius=262.7, mass=2.59e20, luminosity=0.0)
        assert body.radius == Distance.km(262.7)
        assert body.mass == Mass.kg(2.59e20)
        assert body.luminosity == Luminosity.ZERO

    def test_units_are_kept(self):
        radius = Distance.meters(1000.0)
        body = Body('Rock', radius=radius)
        assert body.radius is radius

    def test_defaults(self):
        body = Body('Dust')
        assert body.radius == Distance.ZERO
        assert body.mass == Mass.ZERO
        assert body.spin == Spin()
        assert not body.is_luminous()

    @pytest.mark.parametrize("name", ["", None, 42])
    def test_invalid_name(self, name):
        with pytest.raises(ValueError):
            Body(name)

    def test_invalid_spin(self):
        with pytest.raises(TypeError):
            Body('Rock', spin=86400.0)

    def test_immutable(self):
        body = Body('Rock')
        with pytest.raises(FrozenInstanceError):
            body.name = 'Stone'

    def test_dict_round_trip(self):
        body = Body('Venus', radius=6052.0, spin=Spin(2.1e7, clockwise=True), mass=4.87e24)
        assert Body.from_dict(body.to_dict()) == body

    def test_from_dict_unknown_keys(self):
        with pytest.raises(ValueError):
            Body.from_dict({'name': 'Rock', 'albedo': 0.3})


class TestPhysicalProperties:

    def test_gravitational_parameter(self):
        body = Body('Earth', mass=5.9722e24)
        assert body.gravitational_parameter() == GRAVITATIONAL_CONSTANT * 5.9722e24

    def test_is_luminous(self):
        assert Body('Star', luminosity=Luminosity.SUN).is_luminous()
        assert not Body('Planet').is_luminous()

    def test_sidereal_period(self):
        assert Body('Earth', spin=Spin(86164.0905)).sidereal_period() == 86164.0905


class TestSpin:
    """Rotation angle of a body about its own axis."""

    def test_timedelta_period(self):
        assert Spin(timedelta(hours=24)).period == 86400.0

    def test_negative_period_rejected(self):
        with pytest.raises(ValueError):
            Spin(-10.0)

    def test_negative_period_warns_when_lenient(self):
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning):
                spin = Spin(-10.0)
        assert spin.period == 10.0

    def test_angle_at(self):
        spin = Spin(100.0)
        assert spin.angle_at(0.0) == Radian.ZERO
        assert math.isclose(spin.angle_at(25.0).as_float(), math.pi / 2)
        assert math.isclose(spin.angle_at(125.0).as_float(), math.pi / 2)

    def test_clockwise_angle(self):
        spin = Spin(100.0, clockwise=True)
        assert math.isclose(spin.angle_at(25.0).as_float(), 3 * math.pi / 2)

    def test_negative_time(self):
        spin = Spin(100.0)
        assert math.isclose(spin.angle_at(-25.0).as_float(), 3 * math.pi / 2)

    def test_no_rotation(self):
        assert Spin().angle_at(1e9) == Radian.ZERO
        assert Spin().angular_rate() == 0.0

    def test_angular_rate_sign(self):
        assert Spin(100.0).angular_rate() > 0.0
        assert Spin(100.0, clockwise=True).angular_rate() < 0.0

    def test_from_frequency(self):
        spin = Spin(100.0)
        assert math.isclose(Spin.from_frequency(spin.frequency()).period, 100.0)

    def test_body_spin_at(self):
        body = Body('Earth', spin=Spin(86400.0))
        assert math.isclose(body.spin_at(timedelta(hours=6)).as_float(), math.pi / 2)
