"""Unit tests for the Shape base class.

Tests cover:
- Default and assigned transforms, and singular transforms
- Rays carried into object space before local intersection
- Normals carried back out through the transform
- Material defaults and inheritance through a trail
- Parent bookkeeping
- Parent-space bounding boxes
"""

import math

import pytest


def _recording_shape(**kwargs):
    """A shape that remembers the last object-space ray it received."""
    from src.whitted.core.tuples import Point, Vector
    from src.whitted.geometry.bounds import BoundingBox
    from src.whitted.geometry.shape import Shape

    class RecordingShape(Shape):
        saved_ray = None

        def local_intersect(self, ray, trail=(), stats=None):
            self.saved_ray = ray
            return []

        def local_normal(self, point, hit=None):
            return Vector(point.x, point.y, point.z)

        def local_bounds(self):
            return BoundingBox(Point(-1, -1, -1), Point(1, 1, 1))

    return RecordingShape(**kwargs)


class TestShapeTransform:
    """Tests for shape transforms."""

    def test_default_transform(self):
        """Test that a new shape has the identity transform."""
        from src.whitted.core.matrix import IDENTITY

        assert _recording_shape().transform == IDENTITY

    def test_assign_transform(self):
        """Test assigning a transform and its cached inverse."""
        from src.whitted.core.matrix import translation

        s = _recording_shape()
        s.transform = translation(2, 3, 4)
        assert s.transform == translation(2, 3, 4)
        assert s.inverse == translation(-2, -3, -4)

    def test_singular_transform_rejected(self):
        """Test that a singular transform fails at assignment."""
        from src.whitted.core.errors import NonInvertibleMatrixError
        from src.whitted.core.matrix import scaling

        with pytest.raises(NonInvertibleMatrixError):
            _recording_shape(transform=scaling(0, 1, 1))

    def test_base_shape_is_abstract(self):
        """Test that the base class leaves intersection to subclasses."""
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import Point, Vector
        from src.whitted.geometry.shape import Shape

        with pytest.raises(NotImplementedError):
            Shape().intersect(Ray(Point(0, 0, 0), Vector(0, 0, 1)))


class TestShapeIntersect:
    """Tests for carrying rays into object space."""

    def test_scaled_shape(self):
        """Test intersecting a scaled shape."""
        from src.whitted.core.matrix import scaling
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import Point, Vector

        s = _recording_shape(transform=scaling(2, 2, 2))
        s.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert s.saved_ray.origin == Point(0, 0, -2.5)
        assert s.saved_ray.direction == Vector(0, 0, 0.5)

    def test_translated_shape(self):
        """Test intersecting a translated shape."""
        from src.whitted.core.matrix import translation
        from src.whitted.core.ray import Ray
        from src.whitted.core.tuples import Point, Vector

        s = _recording_shape(transform=translation(5, 0, 0))
        s.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
        assert s.saved_ray.origin == Point(-5, 0, -5)
        assert s.saved_ray.direction == Vector(0, 0, 1)


class TestShapeNormal:
    """Tests for world-space normals."""

    def test_translated_shape(self):
        """Test the normal on a translated shape."""
        from src.whitted.core.matrix import translation
        from src.whitted.core.tuples import Point, Vector

        s = _recording_shape(transform=translation(0, 1, 0))
        assert s.normal_at(Point(0, 1.70711, -0.70711)) == Vector(0, 0.70711, -0.70711)

    def test_transformed_shape(self):
        """Test the normal on a scaled and rotated shape."""
        from src.whitted.core.matrix import rotation_z, scaling
        from src.whitted.core.tuples import Point, Vector

        s = _recording_shape(transform=scaling(1, 0.5, 1) * rotation_z(math.pi / 5))
        assert s.normal_at(Point(0, math.sqrt(2) / 2, -math.sqrt(2) / 2)) == Vector(0, 0.97014, -0.24254)


class TestShapeMaterial:
    """Tests for material resolution."""

    def test_default_material(self):
        """Test that a shape without a material uses the default."""
        from dataclasses import fields

        from src.whitted.materials.material import DEFAULT_MATERIAL, Material

        s = _recording_shape()
        assert s.material is None
        assert s.resolved_material() is DEFAULT_MATERIAL
        fresh = Material()
        for f in fields(Material):
            assert getattr(s.resolved_material(), f.name) == getattr(fresh, f.name)

    def test_default_material_is_read_only(self):
        """Test that the shared default cannot be edited through a shape."""
        from src.whitted.materials.material import DEFAULT_MATERIAL

        s = _recording_shape()
        with pytest.raises(AttributeError):
            s.resolved_material().ambient = 1.0
        assert DEFAULT_MATERIAL.ambient == 0.1

    def test_materials_get_their_own_color(self):
        """Test that materials and lights can be built with default colors."""
        from src.whitted.core.tuples import Color, Point
        from src.whitted.materials.light import PointLight
        from src.whitted.materials.material import Material

        assert Material().color == Color(1, 1, 1)
        assert PointLight(Point(0, 0, 0)).intensity == Color(1, 1, 1)

    def test_own_material_wins(self):
        """Test that an assigned material is used."""
        from src.whitted.materials.material import Material

        m = Material(ambient=1.0)
        parent = _recording_shape(material=Material(ambient=0.5))
        s = _recording_shape(material=m)
        assert s.resolved_material((parent,)) is m

    def test_nearest_ancestor_material(self):
        """Test inheriting the nearest ancestor's material."""
        from src.whitted.materials.material import Material

        outer = _recording_shape(material=Material(ambient=0.2))
        inner = _recording_shape(material=Material(ambient=0.3))
        middle = _recording_shape()
        s = _recording_shape()
        assert s.resolved_material((outer, middle)) is outer.material
        assert s.resolved_material((outer, inner, middle)) is inner.material


class TestShapeParent:
    """Tests for single-parent bookkeeping."""

    def test_attach_once(self):
        """Test that a shape can be attached once."""
        from src.whitted.core.errors import SceneGraphError

        s = _recording_shape()
        assert not s.has_parent
        s.attach()
        assert s.has_parent
        with pytest.raises(SceneGraphError):
            s.attach()

    def test_includes_itself(self):
        """Test that a primitive includes only itself."""
        a, b = _recording_shape(), _recording_shape()
        assert a.includes(a)
        assert not a.includes(b)


class TestShapeBounds:
    """Tests for bounding boxes in parent space."""

    def test_parent_space_bounds(self):
        """Test that parent-space bounds apply the shape's transform."""
        from src.whitted.core.matrix import compose, scaling, translation
        from src.whitted.core.tuples import Point

        s = _recording_shape(transform=compose(scaling(0.5, 2, 4), translation(1, -3, 5)))
        box = s.parent_space_bounds()
        assert box.min == Point(0.5, -5, 1)
        assert box.max == Point(1.5, -1, 9)
