# geometry/sphere.py
import math
from typing import Optional

from core.aabb import AABB
from core.interval import Interval
from core.onb import ONB
from core.ray import Ray
from core.utils import random_double, random_unit_vector
from core.vector import Point3, Vector3
from geometry.hittable import Hittable, HitRecord


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.

    A sphere built with center2 moves linearly from center (time 0) to
    center2 (time 1); rays sample the position at their own time.
    """
    def __init__(self, center: Point3, radius: float, material,
                 center2: Optional[Point3] = None):
        self.radius = max(0.0, radius)
        self.material = material
        end = center if center2 is None else center2
        # Center path as a ray over time.
        self.center = Ray(center, end - center)
        self.is_moving = center2 is not None

        rvec = Vector3(self.radius, self.radius, self.radius)
        box1 = AABB.from_points(center - rvec, center + rvec)
        box2 = AABB.from_points(end - rvec, end + rvec)
        self.bbox = AABB.surrounding_box(box1, box2)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        current_center = self.center.at(ray.time) if self.is_moving else self.center.origin
        oc = current_center - ray.origin
        a = ray.direction.length_squared()
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0 or a == 0 or self.radius == 0:
            return None

        sqrtd = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (h - sqrtd) / a
        if not ray_t.surrounds(root):
            root = (h + sqrtd) / a
            if not ray_t.surrounds(root):
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(root)
        outward_normal = (rec.p - current_center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.u, rec.v = self.get_sphere_uv(outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox

    @staticmethod
    def get_sphere_uv(p: Point3):
        """
        Maps a point on the unit sphere to (u, v) in [0,1]^2; u from the
        angle around the y axis starting at x=-1, v from y=-1 to y=+1.
        """
        theta = math.acos(max(-1.0, min(1.0, -p.y)))
        phi = math.atan2(-p.z, p.x) + math.pi
        return phi / (2 * math.pi), theta / math.pi

    def pdf_value(self, origin: Point3, direction: Vector3) -> float:
        # Only valid for stationary spheres.
        if self.hit(Ray(origin, direction), Interval(0.001, math.inf)) is None:
            return 0.0

        dist_squared = (self.center.origin - origin).length_squared()
        r2 = self.radius * self.radius
        if dist_squared <= r2:
            # Origin inside the sphere: every direction sees it.
            return 1 / (4 * math.pi)
        cos_theta_max = math.sqrt(1 - r2 / dist_squared)
        solid_angle = 2 * math.pi * (1 - cos_theta_max)
        if solid_angle <= 0:
            return 0.0
        return 1 / solid_angle

    def random(self, origin: Point3) -> Vector3:
        direction = self.center.origin - origin
        distance_squared = direction.length_squared()
        if distance_squared <= self.radius * self.radius:
            return random_unit_vector()
        uvw = ONB(direction)
        return uvw.transform(self._random_to_sphere(self.radius, distance_squared))

    @staticmethod
    def _random_to_sphere(radius: float, distance_squared: float) -> Vector3:
        r1 = random_double()
        r2 = random_double()
        z = 1 + r2 * (math.sqrt(1 - radius * radius / distance_squared) - 1)

        phi = 2 * math.pi * r1
        x = math.cos(phi) * math.sqrt(1 - z * z)
        y = math.sin(phi) * math.sqrt(1 - z * z)
        return Vector3(x, y, z)
