"""Unit tests for the core value types.

Tests cover:
- Vector arithmetic and normalization edge cases
- Interval membership, clamping and padding
- AABB union, padding of flat boxes and the slab test
- Ray inverse direction for axis-parallel rays
- Orthonormal basis construction
"""

import math
import random

import pytest

from core.aabb import AABB, MIN_AXIS_SIZE
from core.interval import Interval
from core.onb import ONB
from core.ray import Ray
from core.vector import Point3, Vector3


def random_box(gen: random.Random) -> AABB:
    a = Point3(gen.uniform(-5, 5), gen.uniform(-5, 5), gen.uniform(-5, 5))
    b = Point3(gen.uniform(-5, 5), gen.uniform(-5, 5), gen.uniform(-5, 5))
    return AABB.from_points(a, b)


class TestVector3:
    """Tests for Vector3 arithmetic."""

    def test_element_wise_product(self):
        """Multiplying two vectors multiplies per component."""
        v = Vector3(1, 2, 3) * Vector3(2, 0.5, -1)
        assert (v.x, v.y, v.z) == (2, 1, -3)

    def test_cross_is_right_handed(self):
        """x cross y is z."""
        z = Vector3(1, 0, 0).cross(Vector3(0, 1, 0))
        assert (z.x, z.y, z.z) == (0, 0, 1)

    def test_normalize_zero_vector(self):
        """Normalizing the zero vector returns zero instead of dividing by zero."""
        v = Vector3(0, 0, 0).normalize()
        assert v.length() == 0

    def test_indexing(self):
        """Axis indexing follows x, y, z and rejects other axes."""
        v = Vector3(4, 5, 6)
        assert [v[0], v[1], v[2]] == [4, 5, 6]
        with pytest.raises(IndexError):
            v[3]

    def test_near_zero(self):
        assert Vector3(1e-9, -1e-9, 0).near_zero()
        assert not Vector3(1e-3, 0, 0).near_zero()


class TestInterval:
    """Tests for Interval."""

    def test_contains_is_closed_surrounds_is_open(self):
        i = Interval(0, 1)
        assert i.contains(0) and i.contains(1)
        assert not i.surrounds(0) and not i.surrounds(1)
        assert i.surrounds(0.5)

    def test_empty_and_universe(self):
        assert not Interval.EMPTY.contains(0)
        assert Interval.UNIVERSE.contains(1e300)

    def test_clamp(self):
        i = Interval(-1, 1)
        assert i.clamp(-3) == -1
        assert i.clamp(3) == 1
        assert i.clamp(0.25) == 0.25

    def test_expand_pads_both_sides(self):
        i = Interval(1, 2).expand(1)
        assert (i.min, i.max) == (0.5, 2.5)


class TestAABB:
    """Tests for axis-aligned bounding boxes."""

    def test_union_contains_both_and_is_tight(self):
        """The union contains each input and its faces come from the inputs."""
        gen = random.Random(7)
        for _ in range(200):
            a, b = random_box(gen), random_box(gen)
            union = AABB.surrounding_box(a, b)
            assert union.contains_box(a)
            assert union.contains_box(b)
            for axis in range(3):
                ua, aa, ba = union.axis_interval(axis), a.axis_interval(axis), b.axis_interval(axis)
                assert ua.min == min(aa.min, ba.min)
                assert ua.max == max(aa.max, ba.max)

    def test_union_contains_points_of_either_box(self):
        gen = random.Random(11)
        for _ in range(100):
            a, b = random_box(gen), random_box(gen)
            union = AABB.surrounding_box(a, b)
            for box in (a, b):
                p = Point3(gen.uniform(box.x.min, box.x.max),
                           gen.uniform(box.y.min, box.y.max),
                           gen.uniform(box.z.min, box.z.max))
                assert all(union.axis_interval(a).contains(p[a]) for a in range(3))

    def test_flat_box_is_padded(self):
        """A zero-thickness box gets the minimum extent on the flat axis."""
        box = AABB.from_points(Point3(0, 0, 0), Point3(1, 1, 0))
        assert box.z.size() == pytest.approx(MIN_AXIS_SIZE)
        assert box.x.size() == 1

    def test_empty_box(self):
        assert AABB.EMPTY.is_empty()
        assert AABB.EMPTY.surface_area() == 0.0

    def test_union_with_empty_is_identity(self):
        box = AABB.from_points(Point3(-1, -2, -3), Point3(1, 2, 3))
        union = AABB.surrounding_box(AABB.EMPTY, box)
        assert (union.x.min, union.y.max, union.z.min) == (-1, 2, -3)

    def test_slab_hit_axis_parallel_ray(self):
        """A ray with zero direction components still hits and misses correctly."""
        box = AABB.from_points(Point3(-1, -1, -3), Point3(1, 1, -2))
        inside = Ray(Point3(0, 0, 0), Vector3(0, 0, -1))
        beside = Ray(Point3(2, 0, 0), Vector3(0, 0, -1))
        assert box.hit(inside, Interval(0.001, math.inf))
        assert not box.hit(beside, Interval(0.001, math.inf))

    def test_slab_origin_on_face_plane(self):
        """An axis-parallel ray starting on a face plane still enters the box."""
        box = AABB.from_points(Point3(0, 0, -3), Point3(1, 1, -2))
        on_face = Ray(Point3(0, 0.5, 0), Vector3(0, 0, -1))
        on_far_face = Ray(Point3(1, 1, 0), Vector3(0, 0, -1))
        outside = Ray(Point3(-1e-9, 0.5, 0), Vector3(0, 0, -1))
        assert box.hit(on_face, Interval(0.001, math.inf))
        assert box.hit(on_far_face, Interval(0.001, math.inf))
        assert not box.hit(outside, Interval(0.001, math.inf))

    def test_slab_respects_window(self):
        """A box beyond the window's far end is rejected."""
        box = AABB.from_points(Point3(-1, -1, -3), Point3(1, 1, -2))
        ray = Ray(Point3(0, 0, 0), Vector3(0, 0, -1))
        assert not box.hit(ray, Interval(0.001, 1.5))

    def test_longest_axis_and_surface_area(self):
        box = AABB.from_points(Point3(0, 0, 0), Point3(1, 4, 2))
        assert box.longest_axis() == 1
        assert box.surface_area() == pytest.approx(2 * (4 + 2 + 8))

    def test_offset(self):
        box = AABB.from_points(Point3(0, 0, 0), Point3(1, 1, 1)) + Vector3(1, 2, 3)
        assert (box.x.min, box.y.min, box.z.max) == (1, 2, 4)


class TestRay:
    """Tests for Ray."""

    def test_at(self):
        p = Ray(Point3(1, 0, 0), Vector3(0, 2, 0)).at(1.5)
        assert (p.x, p.y, p.z) == (1, 3, 0)

    def test_inverse_direction_of_zero_is_infinite(self):
        ray = Ray(Point3(0, 0, 0), Vector3(0, 2, -0.0))
        assert ray.inv_direction[0] == math.inf
        assert ray.inv_direction[1] == 0.5
        assert ray.inv_direction[2] == -math.inf


class TestONB:
    """Tests for the orthonormal basis."""

    @pytest.mark.parametrize("n", [Vector3(0, 0, 1), Vector3(1, 0, 0), Vector3(0.3, -2, 5)])
    def test_basis_is_orthonormal(self, n):
        uvw = ONB(n)
        for a in (uvw.u, uvw.v, uvw.w):
            assert a.length() == pytest.approx(1.0)
        assert uvw.u.dot(uvw.v) == pytest.approx(0.0, abs=1e-12)
        assert uvw.u.dot(uvw.w) == pytest.approx(0.0, abs=1e-12)
        assert uvw.v.dot(uvw.w) == pytest.approx(0.0, abs=1e-12)

    def test_local_z_maps_to_normal(self):
        n = Vector3(1, 2, 3)
        w = ONB(n).transform(Vector3(0, 0, 1))
        unit = n.normalize()
        assert (w.x, w.y, w.z) == pytest.approx((unit.x, unit.y, unit.z))
