"""Unit tests for procedural patterns and noise.

Tests cover:
- Stripe, gradient, ring, checkers and radial gradient patterns
- Pattern, object and group transforms
- Nested and blended patterns
- Perlin noise and the perturbed pattern
"""

import math

import pytest

WHITE = (1, 1, 1)
BLACK = (0, 0, 0)


def _colors():
    from src.whitted.core.tuples import Color

    return Color(*WHITE), Color(*BLACK)


class TestStripePattern:
    """Tests for stripes."""

    @pytest.mark.parametrize(
        "point, expected",
        [
            ((0, 0, 0), WHITE),
            ((0, 1, 0), WHITE),
            ((0, 0, 2), WHITE),
            ((0.9, 0, 0), WHITE),
            ((1, 0, 0), BLACK),
            ((-0.1, 0, 0), BLACK),
            ((-1, 0, 0), BLACK),
            ((-1.1, 0, 0), WHITE),
        ],
    )
    def test_stripes_alternate_in_x(self, point, expected):
        """Test that stripes vary only along x."""
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.patterns import StripePattern

        pattern = StripePattern(*_colors())
        assert pattern.pattern_at(Point(*point)) == Color(*expected)

    def test_object_transform(self):
        """Test stripes on a scaled object."""
        from src.whitted.core.matrix import scaling
        from src.whitted.core.tuples import Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import StripePattern

        white, _ = _colors()
        s = Sphere(transform=scaling(2, 2, 2))
        assert StripePattern(*_colors()).pattern_at_shape(s, Point(1.5, 0, 0)) == white

    def test_pattern_transform(self):
        """Test stripes with their own transform."""
        from src.whitted.core.matrix import scaling
        from src.whitted.core.tuples import Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import StripePattern

        white, _ = _colors()
        pattern = StripePattern(*_colors(), transform=scaling(2, 2, 2))
        assert pattern.pattern_at_shape(Sphere(), Point(1.5, 0, 0)) == white

    def test_both_transforms(self):
        """Test stripes with object and pattern transforms."""
        from src.whitted.core.matrix import scaling, translation
        from src.whitted.core.tuples import Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import StripePattern

        white, _ = _colors()
        s = Sphere(transform=scaling(2, 2, 2))
        pattern = StripePattern(*_colors(), transform=translation(0.5, 0, 0))
        assert pattern.pattern_at_shape(s, Point(2.5, 0, 0)) == white


class TestPatternTransforms:
    """Tests for carrying points into pattern space."""

    def test_default_transform(self):
        """Test that a pattern starts with the identity."""
        from src.whitted.core.matrix import IDENTITY
        from src.whitted.materials.patterns import TestPattern

        assert TestPattern().transform == IDENTITY

    def test_object_transform(self):
        """Test a pattern on a scaled object."""
        from src.whitted.core.matrix import scaling
        from src.whitted.core.tuples import Color, Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import TestPattern

        s = Sphere(transform=scaling(2, 2, 2))
        assert TestPattern().pattern_at_shape(s, Point(2, 3, 4)) == Color(1, 1.5, 2)

    def test_pattern_transform(self):
        """Test a scaled pattern."""
        from src.whitted.core.matrix import scaling
        from src.whitted.core.tuples import Color, Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import TestPattern

        pattern = TestPattern(transform=scaling(2, 2, 2))
        assert pattern.pattern_at_shape(Sphere(), Point(2, 3, 4)) == Color(1, 1.5, 2)

    def test_object_and_pattern_transform(self):
        """Test a translated pattern on a scaled object."""
        from src.whitted.core.matrix import scaling, translation
        from src.whitted.core.tuples import Color, Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import TestPattern

        s = Sphere(transform=scaling(2, 2, 2))
        pattern = TestPattern(transform=translation(0.5, 1, 1.5))
        assert pattern.pattern_at_shape(s, Point(2.5, 3, 3.5)) == Color(0.75, 0.5, 0.25)

    def test_group_transform(self):
        """Test a pattern on a shape inside transformed groups."""
        from src.whitted.core.matrix import rotation_y, scaling, translation
        from src.whitted.core.tuples import Color, Point
        from src.whitted.geometry.group import Group
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import TestPattern

        s = Sphere(transform=translation(5, 0, 0))
        g2 = Group([s], transform=scaling(2, 2, 2))
        g1 = Group([g2], transform=rotation_y(math.pi / 2))
        color = TestPattern().pattern_at_shape(s, Point(-2, 0, -10), (g1, g2))
        assert color == Color(0, 0, -1)

    def test_singular_pattern_transform(self):
        """Test that a singular pattern transform is rejected."""
        from src.whitted.core.errors import NonInvertibleMatrixError
        from src.whitted.core.matrix import scaling
        from src.whitted.materials.patterns import TestPattern

        with pytest.raises(NonInvertibleMatrixError):
            TestPattern(transform=scaling(1, 0, 1))


class TestOtherPatterns:
    """Tests for gradient, ring and checkers."""

    @pytest.mark.parametrize(
        "x, expected",
        [(0, (1, 1, 1)), (0.25, (0.75, 0.75, 0.75)), (0.5, (0.5, 0.5, 0.5)), (0.75, (0.25, 0.25, 0.25))],
    )
    def test_gradient(self, x, expected):
        """Test that a gradient interpolates linearly."""
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.patterns import GradientPattern

        assert GradientPattern(*_colors()).pattern_at(Point(x, 0, 0)) == Color(*expected)

    @pytest.mark.parametrize(
        "point, expected",
        [((0, 0, 0), WHITE), ((1, 0, 0), BLACK), ((0, 0, 1), BLACK), ((0.708, 0, 0.708), BLACK)],
    )
    def test_ring(self, point, expected):
        """Test that rings extend in x and z."""
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.patterns import RingPattern

        assert RingPattern(*_colors()).pattern_at(Point(*point)) == Color(*expected)

    @pytest.mark.parametrize(
        "point, expected",
        [
            ((0, 0, 0), WHITE),
            ((0.99, 0, 0), WHITE),
            ((1.01, 0, 0), BLACK),
            ((0, 0.99, 0), WHITE),
            ((0, 1.01, 0), BLACK),
            ((0, 0, 0.99), WHITE),
            ((0, 0, 1.01), BLACK),
        ],
    )
    def test_checkers(self, point, expected):
        """Test that checkers repeat in all three dimensions."""
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.patterns import CheckersPattern

        assert CheckersPattern(*_colors()).pattern_at(Point(*point)) == Color(*expected)

    def test_radial_gradient(self):
        """Test interpolation over the distance from the origin."""
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.patterns import RadialGradientPattern

        pattern = RadialGradientPattern(*_colors())
        assert pattern.pattern_at(Point(0, 0.5, 0)) == Color(0.5, 0.5, 0.5)
        assert pattern.pattern_at(Point(0, 0, 1.25)) == Color(0.75, 0.75, 0.75)

    def test_solid(self):
        """Test that a solid pattern ignores the point."""
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.patterns import SolidPattern

        assert SolidPattern(Color(0.2, 0.3, 0.4)).pattern_at(Point(7, -3, 2)) == Color(0.2, 0.3, 0.4)


class TestNestedPatterns:
    """Tests for patterns in color slots."""

    def test_nested_stripes_in_checkers(self):
        """Test that a nested pattern is evaluated in its own space."""
        from src.whitted.core.matrix import scaling
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.patterns import CheckersPattern, StripePattern

        red = Color(1, 0, 0)
        inner = StripePattern(red, Color(0, 0, 1), transform=scaling(0.5, 1, 1))
        pattern = CheckersPattern(inner, Color(0, 0, 0))
        assert pattern.pattern_at(Point(0.25, 0, 0)) == red
        assert pattern.pattern_at(Point(0.75, 0, 0)) == Color(0, 0, 1)
        assert pattern.pattern_at(Point(1.25, 0, 0)) == Color(0, 0, 0)

    def test_blended(self):
        """Test that a blend averages its two sources."""
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.patterns import BlendedPattern, SolidPattern

        pattern = BlendedPattern(SolidPattern(Color(1, 0, 0)), Color(0, 0, 1))
        assert pattern.pattern_at(Point(0, 0, 0)) == Color(0.5, 0, 0.5)


class TestNoise:
    """Tests for Perlin noise and perturbation."""

    def test_zero_at_lattice_points(self):
        """Test that noise vanishes at integer coordinates."""
        from src.whitted.materials.noise import PerlinNoise

        noise = PerlinNoise(seed=3)
        for point in [(0, 0, 0), (1, 2, 3), (-4, 5, -6)]:
            assert noise(*point) == pytest.approx(0.0)

    def test_deterministic_for_seed(self):
        """Test that equal seeds give equal noise."""
        from src.whitted.materials.noise import PerlinNoise

        a, b = PerlinNoise(seed=11), PerlinNoise(seed=11)
        points = [(0.3, 1.7, -2.2), (5.5, 0.1, 0.9), (-3.3, -0.4, 8.8)]
        assert [a(*p) for p in points] == [b(*p) for p in points]

    def test_bounded(self):
        """Test that noise stays within [-1, 1]."""
        from src.whitted.materials.noise import PerlinNoise

        noise = PerlinNoise(seed=5)
        values = [noise(x * 0.37, x * 0.11, -x * 0.23) for x in range(200)]
        assert all(-1.0 <= v <= 1.0 for v in values)
        assert any(v != 0.0 for v in values)

    def test_turbulence_non_negative(self):
        """Test that turbulence is an absolute value."""
        from src.whitted.materials.noise import PerlinNoise

        noise = PerlinNoise()
        assert all(noise.turbulence(x * 0.3, 0.5, 0.7) >= 0.0 for x in range(20))

    def test_perturbed_jitter(self):
        """Test that the jitter offsets every axis by the scaled noise."""
        from src.whitted.core.tuples import Point
        from src.whitted.materials.noise import PerlinNoise
        from src.whitted.materials.patterns import PerturbedPattern, TestPattern

        noise = PerlinNoise(seed=2)
        pattern = PerturbedPattern(TestPattern(), scale=0.5, noise=noise)
        offset = 0.5 * noise(0.3, 0.4, 0.5)
        assert pattern.jitter(Point(0.3, 0.4, 0.5)) == Point(0.3 + offset, 0.4 + offset, 0.5 + offset)

    def test_perturbed_zero_scale_is_identity(self):
        """Test that zero amplitude leaves the source pattern unchanged."""
        from src.whitted.core.tuples import Point
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.patterns import PerturbedPattern, StripePattern

        stripes = StripePattern(*_colors())
        pattern = PerturbedPattern(stripes, scale=0.0)
        s = Sphere()
        for x in (0.2, 0.9, 1.1, -0.3):
            assert pattern.pattern_at_shape(s, Point(x, 0, 0)) == stripes.pattern_at(Point(x, 0, 0))

    def test_perturbed_jitters_when_nested(self):
        """Test that a perturbed pattern in a color slot still jitters its point."""
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.noise import PerlinNoise
        from src.whitted.materials.patterns import CheckersPattern, PerturbedPattern, TestPattern

        noise = PerlinNoise(seed=2)
        perturbed = PerturbedPattern(TestPattern(), scale=0.5, noise=noise)
        checkers = CheckersPattern(perturbed, Color(0, 0, 0))
        point = Point(0.3, 0.4, 0.5)
        jittered = perturbed.jitter(point)
        expected = Color(jittered.x, jittered.y, jittered.z)
        assert checkers.pattern_at(point) == expected
        assert perturbed.pattern_at(point) == expected
