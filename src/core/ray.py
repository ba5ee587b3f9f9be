# core/ray.py
import math

from core.vector import Vector3


def _inverse(d: float) -> float:
    # Axis-parallel rays get a signed infinity so the slab test stays defined.
    if d == 0.0:
        return math.copysign(math.inf, d)
    return 1.0 / d


class Ray:
    """
    Represents a ray in 3D space with an origin, direction and a time
    stamp in [0, 1) used for motion blur.
    """
    __slots__ = ("origin", "direction", "time", "inv_direction")

    def __init__(self, origin: Vector3, direction: Vector3, time: float = 0.0):
        self.origin = origin
        self.direction = direction
        self.time = time
        self.inv_direction = (
            _inverse(direction.x),
            _inverse(direction.y),
            _inverse(direction.z),
        )

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return f"Ray({self.origin!r}, {self.direction!r}, time={self.time})"
