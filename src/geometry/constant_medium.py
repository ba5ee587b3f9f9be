# geometry/constant_medium.py
import math
from typing import Optional

from core.aabb import AABB
from core.interval import Interval
from core.ray import Ray
from core.utils import random_double
from core.vector import Color, Vector3
from geometry.hittable import Hittable, HitRecord
from materials.isotropic import Isotropic


class ConstantMedium(Hittable):
    """
    Participating medium of uniform density filling a closed boundary.

    A ray crossing the boundary scatters at an exponentially distributed
    distance; the returned hit carries an isotropic phase function.
    """
    def __init__(self, boundary: Hittable, density: float, albedo):
        self.boundary = boundary
        self.neg_inv_density = -1.0 / density
        self.phase_function = Isotropic(albedo if albedo is not None else Color(1, 1, 1))

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        rec1 = self.boundary.hit(ray, Interval.UNIVERSE)
        if rec1 is None:
            return None
        rec2 = self.boundary.hit(ray, Interval(rec1.t + 0.0001, math.inf))
        if rec2 is None:
            return None

        t1 = ray_t.clamp(rec1.t)
        t2 = ray_t.clamp(rec2.t)
        if t1 >= t2:
            return None
        t1 = max(t1, 0.0)

        ray_length = ray.direction.length()
        distance_inside_boundary = (t2 - t1) * ray_length
        # 1 - U lies in (0, 1], keeping log() finite.
        hit_distance = self.neg_inv_density * math.log(1.0 - random_double())

        if hit_distance > distance_inside_boundary:
            return None

        t = t1 + hit_distance / ray_length
        return HitRecord(
            p=ray.at(t),
            normal=Vector3(1, 0, 0),  # arbitrary
            t=t,
            front_face=True,          # also arbitrary
            material=self.phase_function,
        )

    def bounding_box(self) -> AABB:
        return self.boundary.bounding_box()
