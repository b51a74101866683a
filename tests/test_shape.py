"""
Test suite for shape sampling.

Tests cover:
1. Sample counts for Arc, Circle and Ellipse
2. Equidistance of circular samples from the center
3. Arc geometry (end point, length, radius)
4. Shape utilities (closing, numpy and pandas export)
"""

import math
import pytest
import numpy as np
import pandas as pd
from globe import Arc, Circle, Coords, Ellipse, Shape, temp_config


# =============================================================================
# Sample counts
# =============================================================================

class TestSampleCount:
    """sample(n) returns exactly n points."""

    @pytest.mark.parametrize("segments", [1, 2, 3, 7, 64, 1024])
    def test_arc(self, segments):
        arc = Arc(start=Coords(1.0, 0.0, 0.0), angle=math.pi)
        assert len(arc.sample(segments)) == segments

    @pytest.mark.parametrize("segments", [1, 2, 3, 7, 64, 1024])
    def test_ellipse(self, segments):
        assert len(Ellipse(10.0, 0.5).sample(segments)) == segments

    @pytest.mark.parametrize("segments", [1, 5, 360])
    def test_circle(self, segments):
        assert len(Circle(10.0).sample(segments)) == segments

    def test_default_count(self):
        with temp_config(DEFAULT_SAMPLE_SEGMENTS=16):
            assert len(Circle(1.0).sample()) == 16

    @pytest.mark.parametrize("segments", [0, -1])
    def test_non_positive_rejected(self, segments):
        with pytest.raises(ValueError):
            Circle(1.0).sample(segments)

    def test_non_integer_rejected(self):
        with pytest.raises(TypeError):
            Circle(1.0).sample(2.5)


# =============================================================================
# Geometry
# =============================================================================

class TestCircleSampling:
    """Circular samples lie on the circumference, evenly spaced."""

    def test_equidistant_from_center(self):
        shape = Circle(42.0).sample(100)
        radii = np.linalg.norm(shape.to_numpy(), axis=1)
        assert np.allclose(radii, 42.0, rtol=1e-12)

    def test_consecutive_points_evenly_spaced(self):
        shape = Circle(5.0).sample(36)
        steps = np.linalg.norm(np.diff(shape.closed().to_numpy(), axis=0), axis=1)
        assert np.allclose(steps, steps[0], rtol=1e-9)

    def test_starts_at_initial_theta(self):
        shape = Circle(1.0, initial_theta=math.pi / 2).sample(4)
        assert np.allclose(shape[0].to_numpy(), [0.0, 1.0, 0.0], atol=1e-12)

    def test_clockwise_direction(self):
        counter = Circle(1.0).sample(4)
        clockwise = Circle(1.0, clockwise=True).sample(4)
        assert counter[1].y > 0.0
        assert clockwise[1].y < 0.0


class TestEllipseSampling:

    def test_points_on_ellipse(self):
        orbit = Ellipse(10.0, 0.6)
        a = orbit.semi_major_axis.as_km()
        b = orbit.semi_minor_axis.as_km()
        pts = orbit.sample(50).to_numpy()
        assert np.allclose((pts[:, 0] / a)**2 + (pts[:, 1] / b)**2, 1.0)
        assert np.all(pts[:, 2] == 0.0)

    def test_partial_span(self):
        shape = Ellipse(2.0, 0.0).sample(2, span=math.pi)
        assert np.allclose(shape[1].to_numpy(), [0.0, 2.0, 0.0], atol=1e-12)


class TestArc:
    """Arc about an arbitrary center and axis."""

    def test_points_equidistant_from_center(self):
        center = Coords(1.0, 2.0, 3.0)
        arc = Arc(center=center, start=Coords(4.0, 2.0, 3.0),
                  axis=Coords(0.0, 1.0, 1.0), angle=2 * math.pi)
        for point in arc.sample(50):
            assert math.isclose(point.distance(center), 3.0, rel_tol=1e-9)

    def test_starts_at_start(self):
        arc = Arc(start=Coords(1.0, 0.0, 0.0), angle=math.pi)
        assert arc.sample(10)[0] == Coords(1.0, 0.0, 0.0)

    def test_end(self):
        arc = Arc(center=Coords(1.0, 1.0, 0.0), start=Coords(2.0, 1.0, 0.0),
                  angle=math.pi / 2)
        assert np.allclose(arc.end().to_numpy(), [1.0, 2.0, 0.0], atol=1e-12)

    def test_sample_stops_before_end(self):
        arc = Arc(start=Coords(1.0, 0.0, 0.0), angle=math.pi / 2)
        last = arc.sample(2)[-1]
        expected = [math.cos(math.pi / 4), math.sin(math.pi / 4), 0.0]
        assert np.allclose(last.to_numpy(), expected, atol=1e-12)

    def test_measures(self):
        arc = Arc(start=Coords(2.0, 0.0, 0.0), angle=math.pi)
        assert math.isclose(arc.radius().as_km(), 2.0)
        assert math.isclose(arc.length().as_km(), 2.0 * math.pi)
        assert math.isclose(arc.perimeter().as_km(), 4.0 * math.pi)

    def test_zero_axis_rejected(self):
        with pytest.raises(ValueError):
            Arc(axis=Coords())


# =============================================================================
# Shape
# =============================================================================

class TestShape:

    def test_closed_appends_first_point(self):
        shape = Circle(1.0).sample(8)
        closed = shape.closed()
        assert len(closed) == 9
        assert closed[-1] == closed[0]
        assert len(shape) == 8

    def test_empty_shape(self):
        assert len(Shape().closed()) == 0
        assert Shape().to_numpy().shape == (0, 3)

    def test_to_dataframe(self):
        df = Circle(1.0).sample(4).to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ['x', 'y', 'z']
        assert len(df) == 4

    def test_rejects_non_coords(self):
        with pytest.raises(TypeError):
            Shape([(1.0, 2.0, 3.0)])
