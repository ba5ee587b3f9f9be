# src/core/aabb.py
from core.interval import Interval
from core.vector import Vector3

# Minimum extent of any axis, keeps flat primitives (quads) out of the
# divide-by-zero corner of the slab test.
MIN_AXIS_SIZE = 0.0001


class AABB:
    """
    Axis-aligned bounding box stored as one Interval per axis.

    Every non-empty axis is padded to at least MIN_AXIS_SIZE.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: Interval = Interval.EMPTY, y: Interval = Interval.EMPTY,
                 z: Interval = Interval.EMPTY):
        self.x = x
        self.y = y
        self.z = z
        self._pad_to_minimums()

    @classmethod
    def from_points(cls, a: Vector3, b: Vector3) -> "AABB":
        """Box spanned by two opposite corners, in any order."""
        return cls(
            Interval(a.x, b.x) if a.x <= b.x else Interval(b.x, a.x),
            Interval(a.y, b.y) if a.y <= b.y else Interval(b.y, a.y),
            Interval(a.z, b.z) if a.z <= b.z else Interval(b.z, a.z),
        )

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        # Union is computed independently per axis.
        return AABB(
            Interval.enclosing(box0.x, box1.x),
            Interval.enclosing(box0.y, box1.y),
            Interval.enclosing(box0.z, box1.z),
        )

    def axis_interval(self, n: int) -> Interval:
        if n == 1:
            return self.y
        if n == 2:
            return self.z
        return self.x

    def is_empty(self) -> bool:
        return self.x.min > self.x.max or self.y.min > self.y.max or self.z.min > self.z.max

    def hit(self, ray, ray_t: Interval) -> bool:
        # Slab method: shrink the [t_min, t_max] window axis by axis.
        t_min = ray_t.min
        t_max = ray_t.max
        origin = ray.origin
        for axis in range(3):
            ax = self.axis_interval(axis)
            orig = origin[axis]
            if ray.direction[axis] == 0:
                # Parallel to this slab: inside it for every t, or never.
                if not ax.contains(orig):
                    return False
                continue
            adinv = ray.inv_direction[axis]

            t0 = (ax.min - orig) * adinv
            t1 = (ax.max - orig) * adinv

            if t0 < t1:
                if t0 > t_min:
                    t_min = t0
                if t1 < t_max:
                    t_max = t1
            else:
                if t1 > t_min:
                    t_min = t1
                if t0 < t_max:
                    t_max = t0

            if t_max <= t_min:
                return False
        return True

    def longest_axis(self) -> int:
        x, y, z = self.x.size(), self.y.size(), self.z.size()
        if x > y:
            return 0 if x > z else 2
        return 1 if y > z else 2

    def surface_area(self) -> float:
        if self.is_empty():
            return 0.0
        dx, dy, dz = self.x.size(), self.y.size(), self.z.size()
        return 2 * (dx * dy + dx * dz + dy * dz)

    def centroid(self, axis: int) -> float:
        ax = self.axis_interval(axis)
        return (ax.min + ax.max) * 0.5

    def contains_box(self, other: "AABB") -> bool:
        """True if every point of other lies inside this box."""
        if other.is_empty():
            return True
        return all(
            self.axis_interval(a).min <= other.axis_interval(a).min
            and other.axis_interval(a).max <= self.axis_interval(a).max
            for a in range(3)
        )

    def __add__(self, offset: Vector3) -> "AABB":
        return AABB(self.x + offset.x, self.y + offset.y, self.z + offset.z)

    def _pad_to_minimums(self):
        delta = MIN_AXIS_SIZE
        if 0 <= self.x.size() < delta:
            self.x = self.x.expand(delta)
        if 0 <= self.y.size() < delta:
            self.y = self.y.expand(delta)
        if 0 <= self.z.size() < delta:
            self.z = self.z.expand(delta)

    def __repr__(self) -> str:
        return f"AABB({self.x!r}, {self.y!r}, {self.z!r})"


AABB.EMPTY = AABB()
