"""Unit tests for intersection records and hit selection.

Tests cover:
- Intersection and Intersections containers, and the object copy each
  intersection keeps
- Hit selection (smallest positive t, ignoring negatives)
- Sorting across objects
- prepare_computations: point, eye, normal, inside flag and over point
"""

import pytest


class TestIntersectionCollection:
    """Tests for building and reading Intersections."""

    def test_intersection_holds_t_and_object(self):
        from src.raycaster.geometry.intersections import Intersection
        from src.raycaster.geometry.sphere import Sphere

        s = Sphere()
        i = Intersection(3.5, s)
        assert i.t == 3.5
        assert i.object == s

    def test_intersection_keeps_a_copy_of_the_object(self):
        from src.raycaster.core.color import Color
        from src.raycaster.geometry.intersections import Intersection
        from src.raycaster.geometry.sphere import Sphere

        s = Sphere()
        i = Intersection(3.5, s)
        s.material.color = Color(0, 0, 1)
        assert i.object.material.color == Color(1, 1, 1)
        assert i.object is not s

    def test_intersection_is_unhashable(self):
        from src.raycaster.geometry.intersections import Intersection
        from src.raycaster.geometry.sphere import Sphere

        assert Intersection.__hash__ is None
        with pytest.raises(TypeError):
            hash(Intersection(1, Sphere()))

    def test_aggregate_intersections(self):
        from src.raycaster.geometry.intersections import Intersection, Intersections
        from src.raycaster.geometry.sphere import Sphere

        s = Sphere()
        xs = Intersections([Intersection(1, s), Intersection(2, s)])
        assert len(xs) == 2
        assert xs[0].t == 1
        assert xs[1].t == 2

    def test_out_of_range_index_raises(self):
        from src.raycaster.geometry.intersections import Intersection, Intersections
        from src.raycaster.geometry.sphere import Sphere

        xs = Intersections([Intersection(1, Sphere())])
        with pytest.raises(IndexError):
            xs[1]

    def test_sort_orders_by_t(self):
        from src.raycaster.geometry.intersections import Intersection, Intersections
        from src.raycaster.geometry.sphere import Sphere

        a = Sphere()
        b = Sphere()
        xs = Intersections([Intersection(5, a), Intersection(-1, b), Intersection(2, a)])
        xs.append(Intersection(0.5, b))
        xs.sort()
        assert [i.t for i in xs] == [-1, 0.5, 2, 5]


class TestHit:
    """Tests for selecting the hit."""

    def test_all_positive(self):
        from src.raycaster.geometry.intersections import Intersection, Intersections
        from src.raycaster.geometry.sphere import Sphere

        s = Sphere()
        i1 = Intersection(1, s)
        i2 = Intersection(2, s)
        assert Intersections([i2, i1]).hit() is i1

    def test_some_negative(self):
        from src.raycaster.geometry.intersections import Intersection, Intersections
        from src.raycaster.geometry.sphere import Sphere

        s = Sphere()
        i1 = Intersection(-1, s)
        i2 = Intersection(1, s)
        assert Intersections([i2, i1]).hit() is i2

    def test_all_negative(self):
        from src.raycaster.geometry.intersections import Intersection, Intersections
        from src.raycaster.geometry.sphere import Sphere

        s = Sphere()
        xs = Intersections([Intersection(-2, s), Intersection(-1, s)])
        assert xs.hit() is None

    def test_zero_is_not_a_hit(self):
        from src.raycaster.geometry.intersections import Intersection, Intersections
        from src.raycaster.geometry.sphere import Sphere

        s = Sphere()
        xs = Intersections([Intersection(0, s)])
        assert xs.hit() is None

    def test_hit_is_lowest_nonnegative(self):
        from src.raycaster.geometry.intersections import Intersection, Intersections
        from src.raycaster.geometry.sphere import Sphere

        s = Sphere()
        i1 = Intersection(5, s)
        i2 = Intersection(7, s)
        i3 = Intersection(-3, s)
        i4 = Intersection(2, s)
        assert Intersections([i1, i2, i3, i4]).hit() is i4

    def test_empty_collection_has_no_hit(self):
        from src.raycaster.geometry.intersections import Intersections

        assert Intersections().hit() is None


class TestPrepareComputations:
    """Tests for shading precomputation."""

    def test_precomputes_state(self):
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.geometry.intersections import Intersection
        from src.raycaster.geometry.sphere import Sphere

        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = Sphere()
        comps = Intersection(4, shape).prepare_computations(r)
        assert comps.t == 4
        assert comps.object == shape
        assert comps.point == point(0, 0, -1)
        assert comps.eye == vector(0, 0, -1)
        assert comps.normal == vector(0, 0, -1)

    def test_hit_on_outside(self):
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.geometry.intersections import Intersection, prepare_computations
        from src.raycaster.geometry.sphere import Sphere

        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, Sphere()), r)
        assert comps.inside is False

    def test_hit_on_inside_flips_normal(self):
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.geometry.intersections import Intersection
        from src.raycaster.geometry.sphere import Sphere

        r = Ray(point(0, 0, 0), vector(0, 0, 1))
        comps = Intersection(1, Sphere()).prepare_computations(r)
        assert comps.point == point(0, 0, 1)
        assert comps.eye == vector(0, 0, -1)
        assert comps.inside is True
        assert comps.normal == vector(0, 0, -1)

    def test_normal_faces_eye(self):
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.geometry.intersections import Intersection
        from src.raycaster.geometry.sphere import Sphere

        direction = vector(1, 1, 1).normalize()
        r = Ray(point(0, 0, 0), direction)
        comps = Intersection(1, Sphere()).prepare_computations(r)
        assert comps.normal.dot(comps.eye) >= 0.0

    def test_hit_offsets_point(self):
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.transforms import translation
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.geometry.intersections import SHADOW_BIAS, Intersection
        from src.raycaster.geometry.sphere import Sphere

        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        shape = Sphere(translation(0, 0, 1))
        comps = Intersection(5, shape).prepare_computations(r)
        assert comps.over_point.z < -SHADOW_BIAS / 2
        assert comps.point.z > comps.over_point.z

    def test_over_point_is_offset_along_normal(self):
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.tuple import point, vector
        from src.raycaster.geometry.intersections import SHADOW_BIAS, Intersection
        from src.raycaster.geometry.sphere import Sphere

        r = Ray(point(0, 0, -5), vector(0, 0, 1))
        comps = Intersection(4, Sphere()).prepare_computations(r)
        offset = comps.over_point - comps.point
        assert abs(offset.magnitude() - SHADOW_BIAS) < 1e-9
        assert offset.normalize() == comps.normal
