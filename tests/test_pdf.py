"""Tests for the direction distributions.

Tests cover:
- Densities are normalized over the sphere of directions
- Generated directions come from the distribution's support
- Mixture weights
- Light-directed sampling towards a hittable
"""

import math

import pytest

from core.interval import Interval
from core.ray import Ray
from core.utils import random_unit_vector
from core.vector import Point3, Vector3
from geometry.quad import Quad
from materials.material import EmptyMaterial
from materials.pdf import CosinePdf, HittablePdf, MixturePdf, SpherePdf


def integrate(pdf, samples=20000) -> float:
    """Monte Carlo integral of pdf.value over the unit sphere."""
    total = 0.0
    for _ in range(samples):
        total += pdf.value(random_unit_vector())
    return 4 * math.pi * total / samples


class TestNormalization:
    """Each density integrates to one over the sphere."""

    def test_sphere_pdf(self):
        assert integrate(SpherePdf(), 1000) == pytest.approx(1.0)

    def test_cosine_pdf(self):
        assert integrate(CosinePdf(Vector3(0.2, 1, -0.3))) == pytest.approx(1.0, abs=0.05)


class TestSampling:
    """Tests for generate()."""

    def test_cosine_samples_lie_in_hemisphere(self):
        normal = Vector3(1, 2, 3)
        pdf = CosinePdf(normal)
        for _ in range(500):
            d = pdf.generate()
            assert d.dot(normal) >= 0
            assert pdf.value(d) >= 0

    def test_cosine_value_below_surface_is_zero(self):
        assert CosinePdf(Vector3(0, 1, 0)).value(Vector3(0, -1, 0)) == 0.0

    def test_sphere_samples_are_unit(self):
        for _ in range(100):
            assert SpherePdf().generate().length() == pytest.approx(1.0)

    def test_mixture_value_is_average(self):
        up, down = CosinePdf(Vector3(0, 1, 0)), CosinePdf(Vector3(0, -1, 0))
        mixture = MixturePdf(up, down)
        d = Vector3(0, 1, 0)
        assert mixture.value(d) == pytest.approx(0.5 * up.value(d))

    def test_mixture_draws_from_both(self):
        mixture = MixturePdf(CosinePdf(Vector3(0, 1, 0)), CosinePdf(Vector3(0, -1, 0)))
        trials = 2000
        upward = sum(1 for _ in range(trials) if mixture.generate().y > 0)
        assert upward / trials == pytest.approx(0.5, abs=0.05)


class TestHittablePdf:
    """Tests for sampling towards a light."""

    def test_directions_point_at_the_light(self):
        light = Quad(Point3(-1, 5, -1), Vector3(2, 0, 0), Vector3(0, 0, 2), EmptyMaterial())
        origin = Point3(0, 0, 0)
        pdf = HittablePdf(light, origin)
        for _ in range(200):
            d = pdf.generate()
            assert light.hit(Ray(origin, d), Interval(0.001, math.inf)) is not None
            assert pdf.value(d) > 0

    def test_value_zero_away_from_light(self):
        light = Quad(Point3(-1, 5, -1), Vector3(2, 0, 0), Vector3(0, 0, 2), EmptyMaterial())
        pdf = HittablePdf(light, Point3(0, 0, 0))
        assert pdf.value(Vector3(0, -1, 0)) == 0.0
