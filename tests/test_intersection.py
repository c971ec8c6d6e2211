"""Unit tests for intersection records and shading computations.

Tests cover:
- Choosing the visible hit
- Precomputed shading state (point, eye, normal, inside flag)
- Offset points used by secondary rays
- The reflection vector
- Refractive indices at each crossing of nested glass
"""

import math

import pytest


class TestHit:
    """Tests for selecting the visible intersection."""

    def test_all_positive(self):
        """Test that the smallest positive t wins."""
        from src.whitted.geometry.intersection import Intersection, hit
        from src.whitted.geometry.sphere import Sphere

        s = Sphere()
        i1, i2 = Intersection(1, s), Intersection(2, s)
        assert hit([i2, i1]) is i1

    def test_some_negative(self):
        """Test that negative t values are skipped."""
        from src.whitted.geometry.intersection import Intersection, hit
        from src.whitted.geometry.sphere import Sphere

        s = Sphere()
        i1, i2 = Intersection(-1, s), Intersection(1, s)
        assert hit([i2, i1]) is i2

    def test_all_negative(self):
        """Test that no hit is returned when everything is behind the ray."""
        from src.whitted.geometry.intersection import Intersection, hit
        from src.whitted.geometry.sphere import Sphere

        s = Sphere()
        assert hit([Intersection(-2, s), Intersection(-1, s)]) is None

    def test_lowest_nonnegative(self):
        """Test the hit among unsorted intersections."""
        from src.whitted.geometry.intersection import Intersection, hit
        from src.whitted.geometry.sphere import Sphere

        s = Sphere()
        xs = [Intersection(5, s), Intersection(7, s), Intersection(-3, s), Intersection(2, s)]
        assert hit(xs) is xs[3]

    def test_zero_counts_as_hit(self):
        """Test that t == 0 is a visible hit."""
        from src.whitted.geometry.intersection import Intersection, hit
        from src.whitted.geometry.sphere import Sphere

        s = Sphere()
        xs = [Intersection(0, s), Intersection(1, s)]
        assert hit(xs) is xs[0]

    def test_sort_intersections(self):
        """Test that sorting orders by t in place."""
        from src.whitted.geometry.intersection import Intersection, sort_intersections
        from src.whitted.geometry.sphere import Sphere

        s = Sphere()
        xs = [Intersection(3, s), Intersection(-1, s), Intersection(2, s)]
        assert [i.t for i in sort_intersections(xs)] == [-1, 2, 3]


class TestPrepareComputations:
    """Tests for precomputed shading state."""

    def test_outside_hit(self):
        """Test the state of a hit on the outside of a sphere."""
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import Point, Vector
        from src.whitted.geometry.intersection import Intersection, prepare_computations
        from src.whitted.geometry.sphere import Sphere

        s = Sphere()
        comps = prepare_computations(Intersection(4, s), Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert comps.t == 4
        assert comps.shape is s
        assert comps.point == Point(0, 0, -1)
        assert comps.eyev == Vector(0, 0, -1)
        assert comps.normalv == Vector(0, 0, -1)
        assert comps.inside is False

    def test_inside_hit(self):
        """Test that the normal is flipped for a hit from inside."""
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import Point, Vector
        from src.whitted.geometry.intersection import Intersection, prepare_computations
        from src.whitted.geometry.sphere import Sphere

        comps = prepare_computations(Intersection(1, Sphere()), Ray(Point(0, 0, 0), Vector(0, 0, 1)))
        assert comps.point == Point(0, 0, 1)
        assert comps.eyev == Vector(0, 0, -1)
        assert comps.inside is True
        assert comps.normalv == Vector(0, 0, -1)

    def test_over_point(self):
        """Test that the over point sits just above the surface."""
        from src.whitted.core.matrix import translation
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import EPSILON, Point, Vector
        from src.whitted.geometry.intersection import Intersection, prepare_computations
        from src.whitted.geometry.sphere import Sphere

        s = Sphere(transform=translation(0, 0, 1))
        comps = prepare_computations(Intersection(5, s), Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert comps.over_point.z < -EPSILON / 2
        assert comps.point.z > comps.over_point.z

    def test_under_point(self):
        """Test that the under point sits just below the surface."""
        from src.whitted.core.matrix import translation
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import EPSILON, Point, Vector
        from src.whitted.geometry.intersection import Intersection, prepare_computations
        from src.whitted.geometry.sphere import glass_sphere

        s = glass_sphere(transform=translation(0, 0, 1))
        i = Intersection(5, s)
        comps = prepare_computations(i, Ray(Point(0, 0, -5), Vector(0, 0, 1)), [i])
        assert comps.under_point.z > EPSILON / 2
        assert comps.point.z < comps.under_point.z

    def test_reflect_vector(self):
        """Test the reflection vector off a plane."""
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import Point, Vector
        from src.whitted.geometry.intersection import Intersection, prepare_computations
        from src.whitted.geometry.plane import Plane

        half = math.sqrt(2) / 2
        ray = Ray(Point(0, 1, -1), Vector(0, -half, half))
        comps = prepare_computations(Intersection(math.sqrt(2), Plane()), ray)
        assert comps.reflectv == Vector(0, half, half)

    def test_material_resolved_through_trail(self):
        """Test that the computations carry the inherited material."""
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import Point, Vector
        from src.whitted.geometry.group import Group
        from src.whitted.geometry.intersection import prepare_computations
        from src.whitted.geometry.sphere import Sphere
        from src.whitted.materials.material import Material

        m = Material(ambient=0.5)
        g = Group([Sphere()], material=m)
        ray = Ray(Point(0, 0, -5), Vector(0, 0, 1))
        xs = g.intersect(ray)
        comps = prepare_computations(xs[0], ray, xs)
        assert comps.material is m
        assert comps.trail == (g,)


class TestRefractiveIndices:
    """Tests for n1 and n2 at each crossing."""

    @pytest.mark.parametrize(
        "index, n1, n2",
        [(0, 1.0, 1.5), (1, 1.5, 2.0), (2, 2.0, 2.5), (3, 2.5, 2.5), (4, 2.5, 1.5), (5, 1.5, 1.0)],
    )
    def test_nested_glass(self, index, n1, n2):
        """Test the indices through three overlapping glass spheres."""
        from src.whitted.core.matrix import scaling, translation
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import Point, Vector
        from src.whitted.geometry.intersection import Intersection, prepare_computations
        from src.whitted.geometry.sphere import glass_sphere

        a = glass_sphere(transform=scaling(2, 2, 2), refractive_index=1.5)
        b = glass_sphere(transform=translation(0, 0, -0.25), refractive_index=2.0)
        c = glass_sphere(transform=translation(0, 0, 0.25), refractive_index=2.5)
        xs = [
            Intersection(2, a),
            Intersection(2.75, b),
            Intersection(3.25, c),
            Intersection(4.75, b),
            Intersection(5.25, c),
            Intersection(6, a),
        ]
        comps = prepare_computations(xs[index], Ray(Point(0, 0, -4), Vector(0, 0, 1)), xs)
        assert comps.n1 == n1
        assert comps.n2 == n2

    def test_without_list_uses_hit_only(self):
        """Test that a lone hit enters the shape from air."""
        from src.whitted.geometry.intersection import Intersection, refractive_indices
        from src.whitted.geometry.sphere import glass_sphere

        i = Intersection(1, glass_sphere())
        assert refractive_indices(i, [i]) == (1.0, 1.5)
