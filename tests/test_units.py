"""
Test suite for the physical unit types.

Tests cover:
1. Clamping invariants (absolute value, [0, 1], [0, 2*pi))
2. Conversions between named units
3. Arithmetic preserving invariants
4. Equality, ordering and hashing
5. Rejection of NaN and wrong types
"""

import math
import warnings
import pytest
import numpy as np
from globe import (
    Distance, Mass, Velocity, Frequency, Luminosity, Ratio, Radian, temp_config
)


TWO_PI = 2 * math.pi


# =============================================================================
# Invariants
# =============================================================================

class TestPositiveUnits:
    """Distance, Mass, Velocity, Frequency and Luminosity are never negative."""

    @pytest.mark.parametrize("value", [0.0, 1.0, -1.0, 1e-300, -1e300, 149597870.7, -42.5])
    def test_distance_km_is_absolute(self, value):
        assert Distance.km(value).as_km() == abs(value)

    @pytest.mark.parametrize("unit", [Distance, Mass, Velocity, Frequency, Luminosity])
    def test_negative_input_takes_absolute_value(self, unit):
        assert float(unit(-3.5)) == 3.5

    def test_subtraction_stays_positive(self):
        diff = Distance.km(1.0) - Distance.km(3.0)
        assert diff.as_km() == 2.0

    def test_negative_scaling_stays_positive(self):
        assert (Mass.kg(2.0) * -3.0).as_kg() == 6.0


class TestRatio:
    """Ratio is clamped into [0, 1]."""

    @pytest.mark.parametrize("value,expected", [
        (0.5, 0.5),
        (1.5, 1.0),
        (-0.2, 0.0),
        (1e9, 1.0),
        (-math.inf, 0.0),
    ])
    def test_clamping(self, value, expected):
        assert Ratio(value).as_float() == expected

    def test_boundaries_are_kept(self):
        assert Ratio(0.0).as_float() == 0.0
        assert Ratio(1.0).as_float() == 1.0


class TestRadian:
    """Radian always lies within [0, 2*pi)."""

    @pytest.mark.parametrize("value", np.linspace(-100.0, 100.0, 41))
    def test_range_for_any_input(self, value):
        rad = Radian(value).as_float()
        assert 0.0 <= rad < TWO_PI

    @pytest.mark.parametrize("value", [1e15, -1e15, -1e-20, -5e-324, TWO_PI, -TWO_PI])
    def test_range_for_extreme_inputs(self, value):
        rad = Radian(value).as_float()
        assert 0.0 <= rad < TWO_PI

    def test_negative_wraps_into_positive_range(self):
        assert math.isclose(Radian(-math.pi / 2).as_float(), 3 * math.pi / 2)

    def test_full_turn_is_zero(self):
        assert Radian(TWO_PI).as_float() == 0.0

    def test_tiny_negative_is_zero(self):
        # rounds up to exactly 2*pi after reduction
        assert Radian(-1e-20).as_float() == 0.0

    def test_values_in_range_unchanged(self):
        assert Radian(1.0).as_float() == 1.0

    def test_addition_wraps(self):
        total = Radian(3 * math.pi / 2) + Radian(math.pi)
        assert math.isclose(total.as_float(), math.pi / 2)

    def test_negation(self):
        assert math.isclose((-Radian(math.pi / 2)).as_float(), 3 * math.pi / 2)

    def test_degrees(self):
        assert math.isclose(Radian.from_degrees(180.0).as_float(), math.pi)
        assert math.isclose(Radian(math.pi / 2).degrees(), 90.0)

    def test_abs_diff(self):
        assert math.isclose(Radian(1.0).abs_diff(Radian(3.0)), 2.0)

    def test_infinity_rejected(self):
        with pytest.raises(ValueError):
            Radian(math.inf)


# =============================================================================
# Conversions
# =============================================================================

class TestConversions:
    """Named accessors convert from the canonical unit."""

    def test_distance_meters(self):
        assert Distance.meters(1500.0).as_km() == 1.5
        assert Distance.km(1.5).as_meters() == 1500.0

    def test_velocity_km_sec(self):
        assert Velocity.km_sec(1.0).as_meters_sec() == 1000.0
        assert Velocity.meters_sec(2500.0).as_km_sec() == 2.5

    def test_frequency_from_period(self):
        freq = Frequency.from_period(10.0)
        assert math.isclose(freq.as_hz(), 0.1)
        assert math.isclose(freq.period(), 10.0)
        assert math.isclose(freq.angular(), TWO_PI / 10.0)

    def test_zero_frequency_has_infinite_period(self):
        assert Frequency.ZERO.period() == math.inf
        assert Frequency.from_period(0.0) == Frequency.ZERO

    def test_luminosity_relative_to_sun(self):
        assert Luminosity.SUN.relative_to_sun() == 1.0
        assert math.isclose(Luminosity.watts(3.828e25).relative_to_sun(), 0.1)

    def test_astronomical_unit(self):
        assert Distance.ASTRONOMICAL_UNIT.as_km() == 149_597_870.7


# =============================================================================
# Arithmetic, equality and ordering
# =============================================================================

class TestArithmetic:
    """Arithmetic between units of the same kind."""

    def test_addition(self):
        assert (Distance.km(1.0) + Distance.km(2.0)).as_km() == 3.0

    def test_scalar_multiplication_both_sides(self):
        assert (Distance.km(2.0) * 3).as_km() == 6.0
        assert (3 * Distance.km(2.0)).as_km() == 6.0

    def test_scalar_division(self):
        assert (Velocity.meters_sec(10.0) / 4).as_meters_sec() == 2.5

    def test_same_unit_division_is_float(self):
        ratio = Distance.km(10.0) / Distance.km(4.0)
        assert isinstance(ratio, float)
        assert ratio == 2.5

    def test_mixed_units_rejected(self):
        with pytest.raises(TypeError):
            Distance.km(1.0) + Mass.kg(1.0)

    def test_equality_within_tolerance(self):
        assert Distance.km(1.0) == Distance.km(1.0 + 1e-15)
        assert Distance.km(1.0) != Distance.km(1.001)

    def test_different_units_not_equal(self):
        assert Distance.km(1.0) != Mass.kg(1.0)

    def test_ordering(self):
        assert Distance.km(1.0) < Distance.km(2.0)
        assert Mass.kg(3.0) >= Mass.kg(2.0)
        assert max(Velocity(1.0), Velocity(5.0), Velocity(2.0)) == Velocity(5.0)

    def test_hash_matches_equality(self):
        assert hash(Distance.km(5.0)) == hash(Distance.km(5.0))
        assert len({Distance.km(5.0), Distance.km(5.0), Distance.km(6.0)}) == 2

    def test_hash_of_large_equal_values(self):
        au = 149_597_870.7
        a = Distance.km(au)
        b = Distance.km(au * (1 + 1e-13))
        assert a == b
        assert hash(a) == hash(b)

    def test_hash_near_zero(self):
        assert hash(Distance.km(0.0)) == hash(Distance.km(1e-15))

    def test_bool(self):
        assert not Distance.ZERO
        assert Distance.km(1.0)


# =============================================================================
# Validation
# =============================================================================

class TestValidation:
    """NaN, wrong types and the opt-in clamp warning."""

    @pytest.mark.parametrize("unit", [Distance, Mass, Velocity, Frequency, Luminosity, Ratio, Radian])
    def test_nan_rejected(self, unit):
        with pytest.raises(ValueError):
            unit(math.nan)

    @pytest.mark.parametrize("value", ["1.0", None, True, [1.0]])
    def test_wrong_type_rejected(self, value):
        with pytest.raises(TypeError):
            Distance.km(value)

    def test_clamp_is_silent_by_default(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert Mass.kg(-5.0).as_kg() == 5.0

    def test_clamp_warns_when_enabled(self):
        with temp_config(WARN_ON_CLAMP=True):
            with pytest.warns(UserWarning, match="Mass"):
                Mass.kg(-5.0)

    def test_no_warning_for_valid_input(self):
        with temp_config(WARN_ON_CLAMP=True):
            with warnings.catch_warnings():
                warnings.simplefilter("error")
                Ratio(0.5)
                Radian(1.0)
