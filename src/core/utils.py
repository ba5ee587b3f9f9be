# core/utils.py
import math
import random
import threading

from core.vector import Vector3

# One generator per thread. Row tasks install their own seeded stream with
# seed_stream() so no generator is ever shared between tasks.
_local = threading.local()


def seed_stream(seed=None) -> random.Random:
    """
    Installs a fresh generator for the calling thread and returns it.
    """
    _local.rng = random.Random(seed)
    return _local.rng


def rng() -> random.Random:
    """
    Returns the calling thread's generator, creating an unseeded one on
    first use.
    """
    gen = getattr(_local, "rng", None)
    if gen is None:
        gen = seed_stream()
    return gen


def random_double(lo: float = 0.0, hi: float = 1.0) -> float:
    """
    Returns a random real in [lo, hi).
    """
    return lo + (hi - lo) * rng().random()


def random_int(lo: int, hi: int) -> int:
    """
    Returns a random integer in [lo, hi].
    """
    return int(random_double(lo, hi + 1))


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def random_vector(lo: float = 0.0, hi: float = 1.0) -> Vector3:
    return Vector3(random_double(lo, hi), random_double(lo, hi), random_double(lo, hi))


def random_in_unit_sphere() -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = random_vector(-1, 1)
        if 1e-160 < p.dot(p) < 1.0:
            return p


def random_unit_vector() -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    return random_in_unit_sphere().normalize()


def random_in_unit_disk() -> Vector3:
    """
    Returns a random point in the z=0 unit disk, used for lens sampling.
    """
    while True:
        p = Vector3(random_double(-1, 1), random_double(-1, 1), 0)
        if p.dot(p) < 1:
            return p


def random_cosine_direction() -> Vector3:
    """
    Cosine-weighted direction on the +z hemisphere.
    """
    r1 = random_double()
    r2 = random_double()

    phi = 2 * math.pi * r1
    x = math.cos(phi) * math.sqrt(r2)
    y = math.sin(phi) * math.sqrt(r2)
    z = math.sqrt(1 - r2)
    return Vector3(x, y, z)


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Refracts the unit vector uv through a surface with normal n (Snell's law).
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * (-math.sqrt(abs(1.0 - r_out_perp.length_squared())))
    return r_out_perp + r_out_parallel
