# geometry/quad.py
import math
from typing import Optional

from core.aabb import AABB
from core.interval import Interval
from core.ray import Ray
from core.utils import random_double
from core.vector import Point3, Vector3
from geometry.hittable import Hittable, HitRecord
from geometry.world import HittableList

_UNIT_INTERVAL = Interval(0.0, 1.0)


class Quad(Hittable):
    """
    Planar parallelogram with corner q and edges u, v. Its outward normal is
    unit(u x v).
    """
    def __init__(self, q: Point3, u: Vector3, v: Vector3, material):
        self.q = q
        self.u = u
        self.v = v
        self.material = material

        n = u.cross(v)
        self.normal = n.normalize()
        self.d = self.normal.dot(q)
        nn = n.dot(n)
        # Degenerate (zero-area) quads never report a hit.
        self.w = n / nn if nn > 0 else Vector3(0, 0, 0)
        self.area = n.length()

        diagonal1 = AABB.from_points(q, q + u + v)
        diagonal2 = AABB.from_points(q + u, q + v)
        self.bbox = AABB.surrounding_box(diagonal1, diagonal2)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        denom = self.normal.dot(ray.direction)

        # No hit if the ray is parallel to the plane.
        if abs(denom) < 1e-8:
            return None

        t = (self.d - self.normal.dot(ray.origin)) / denom
        if not ray_t.contains(t):
            return None

        # Planar coordinates of the hit point in the (u, v) frame.
        intersection = ray.at(t)
        planar_hitpt_vector = intersection - self.q
        alpha = self.w.dot(planar_hitpt_vector.cross(self.v))
        beta = self.w.dot(self.u.cross(planar_hitpt_vector))

        if not (_UNIT_INTERVAL.contains(alpha) and _UNIT_INTERVAL.contains(beta)):
            return None

        rec = HitRecord(p=intersection, t=t, material=self.material, u=alpha, v=beta)
        rec.set_face_normal(ray, self.normal)
        return rec

    def bounding_box(self) -> AABB:
        return self.bbox

    def pdf_value(self, origin: Point3, direction: Vector3) -> float:
        rec = self.hit(Ray(origin, direction), Interval(0.001, math.inf))
        if rec is None:
            return 0.0

        distance_squared = rec.t * rec.t * direction.length_squared()
        cosine = abs(direction.dot(rec.normal)) / direction.length()
        if cosine <= 0 or self.area <= 0:
            return 0.0
        return distance_squared / (cosine * self.area)

    def random(self, origin: Point3) -> Vector3:
        p = self.q + self.u * random_double() + self.v * random_double()
        return p - origin


def make_box(a: Point3, b: Point3, material) -> HittableList:
    """
    Returns the six sides of the box with opposite corners a and b.
    """
    sides = HittableList()

    lo = Vector3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))
    hi = Vector3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))

    dx = Vector3(hi.x - lo.x, 0, 0)
    dy = Vector3(0, hi.y - lo.y, 0)
    dz = Vector3(0, 0, hi.z - lo.z)

    sides.add(Quad(Vector3(lo.x, lo.y, hi.z), dx, dy, material))   # front
    sides.add(Quad(Vector3(hi.x, lo.y, hi.z), -dz, dy, material))  # right
    sides.add(Quad(Vector3(hi.x, lo.y, lo.z), -dx, dy, material))  # back
    sides.add(Quad(Vector3(lo.x, lo.y, lo.z), dz, dy, material))   # left
    sides.add(Quad(Vector3(lo.x, hi.y, hi.z), dx, -dz, material))  # top
    sides.add(Quad(Vector3(lo.x, lo.y, lo.z), dx, dz, material))   # bottom

    return sides
