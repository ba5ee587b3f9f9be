# src/geometry/world.py
from typing import Iterable, List, Optional

from core.aabb import AABB
from core.interval import Interval
from core.ray import Ray
from core.utils import random_int
from core.vector import Point3, Vector3
from geometry.hittable import Hittable, HitRecord


class HittableList(Hittable):
    """
    An ordered list of Hittable objects searched linearly.

    Used for small fixed sets (the light-sampling set, the six sides of a
    box) and as the input to the BVH builder. The bounding box is the union
    of the members and is kept up to date on add().
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = []
        self.bbox = AABB.EMPTY
        for obj in objects or ():
            self.add(obj)

    def add(self, obj: Hittable):
        self.objects.append(obj)
        self.bbox = AABB.surrounding_box(self.bbox, obj.bounding_box())

    def clear(self):
        self.objects.clear()
        self.bbox = AABB.EMPTY

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def hit(self, ray: Ray, ray_t: Interval) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = ray_t.max
        for obj in self.objects:
            rec = obj.hit(ray, Interval(ray_t.min, closest_so_far))
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self) -> AABB:
        return self.bbox

    def pdf_value(self, origin: Point3, direction: Vector3) -> float:
        if not self.objects:
            return 0.0
        weight = 1.0 / len(self.objects)
        return sum(weight * obj.pdf_value(origin, direction) for obj in self.objects)

    def random(self, origin: Point3) -> Vector3:
        if not self.objects:
            return Vector3(1, 0, 0)
        return self.objects[random_int(0, len(self.objects) - 1)].random(origin)
