"""Geometric primitives, aggregates and the BVH.

Every hittable answers hit(ray, ray_t) and bounding_box(); primitives that
can act as lights also implement pdf_value(origin, direction) and
random(origin). The set of hittable kinds is closed and listed in
Primitive below.
"""
from typing import Union

from .bvh import BVHNode, flatten_bvh
from .constant_medium import ConstantMedium
from .hittable import HitRecord, Hittable, RotateY, Translate
from .quad import Quad, make_box
from .sphere import Sphere
from .world import HittableList

Primitive = Union[Sphere, Quad, ConstantMedium, Translate, RotateY, HittableList, BVHNode]

__all__ = [
    "BVHNode",
    "ConstantMedium",
    "HitRecord",
    "Hittable",
    "HittableList",
    "Primitive",
    "Quad",
    "RotateY",
    "Sphere",
    "Translate",
    "flatten_bvh",
    "make_box",
]
