"""Pytest configuration for path tracer tests.

Every test runs with the calling thread's random stream seeded, so sampling
code is reproducible test by test.
"""

import pytest

from core.utils import seed_stream
from core.vector import Color
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.metal import Metal


@pytest.fixture(autouse=True)
def seeded_stream():
    """Install a fixed random stream before each test."""
    return seed_stream(1234)


@pytest.fixture
def grey():
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def mirror():
    return Metal(Color(0.8, 0.8, 0.8), 0.0)


@pytest.fixture
def glass():
    return Dielectric(1.5)


@pytest.fixture
def lamp():
    return DiffuseLight(Color(4.0, 4.0, 4.0))
