# geometry/hittable.py
import math
from typing import Optional

from core.aabb import AABB
from core.interval import Interval
from core.ray import Ray
from core.utils import degrees_to_radians
from core.vector import Point3, Vector3


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("p", "normal", "t", "u", "v", "front_face", "material")

    def __init__(self, p: Point3 = None, normal: Vector3 = None,
                 t: float = 0, front_face: bool = True, material=None,
                 u: float = 0.0, v: float = 0.0):
        self.p = p              # Intersection point
        self.normal = normal    # Surface normal, always facing against the ray
        self.t = t              # Ray parameter at intersection
        self.u = u              # Surface parameterization
        self.v = v
        self.front_face = front_face  # Whether the hit was on the outward side
        self.material = material

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        outward_normal is assumed to have unit length.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.
    """
    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

    def pdf_value(self, origin: Point3, direction: Vector3) -> float:
        """Density of random(origin) producing direction. Zero by default."""
        return 0.0

    def random(self, origin: Point3) -> Vector3:
        """Direction from origin towards this object, for light sampling."""
        return Vector3(1, 0, 0)


class Translate(Hittable):
    """
    Moves a wrapped object by a fixed offset.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.object = obj
        self.offset = offset
        self.bbox = obj.bounding_box() + offset

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        # Move the ray backwards by the offset, then the hit point forward.
        offset_ray = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.object.hit(offset_ray, ray_t)
        if rec is None:
            return None
        rec.p = rec.p + self.offset
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox


class RotateY(Hittable):
    """
    Rotates a wrapped object about the y axis by an angle in degrees.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.object = obj
        radians = degrees_to_radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)

        bbox = obj.bounding_box()
        lo = [math.inf, math.inf, math.inf]
        hi = [-math.inf, -math.inf, -math.inf]

        # Bound the eight rotated corners.
        for x in (bbox.x.min, bbox.x.max):
            for y in (bbox.y.min, bbox.y.max):
                for z in (bbox.z.min, bbox.z.max):
                    newx = self.cos_theta * x + self.sin_theta * z
                    newz = -self.sin_theta * x + self.cos_theta * z
                    for c, value in enumerate((newx, y, newz)):
                        lo[c] = min(lo[c], value)
                        hi[c] = max(hi[c], value)

        self.bbox = AABB.from_points(Vector3(*lo), Vector3(*hi))

    def _to_object(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x - self.sin_theta * v.z,
                       v.y,
                       self.sin_theta * v.x + self.cos_theta * v.z)

    def _to_world(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x + self.sin_theta * v.z,
                       v.y,
                       -self.sin_theta * v.x + self.cos_theta * v.z)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        rotated = Ray(self._to_object(ray.origin), self._to_object(ray.direction), ray.time)
        rec = self.object.hit(rotated, ray_t)
        if rec is None:
            return None
        rec.p = self._to_world(rec.p)
        rec.normal = self._to_world(rec.normal)
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox
