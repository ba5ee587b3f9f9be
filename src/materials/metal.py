# materials/metal.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from core.ray import Ray
from core.utils import random_unit_vector, reflect
from core.vector import Color
from materials.material import Material, ScatterRecord

if TYPE_CHECKING:
    from geometry.hittable import HitRecord


class Metal(Material):
    """
    Specular reflector. fuzz (clamped to 1) perturbs the mirror direction
    by a random vector in a sphere of that radius.
    """
    def __init__(self, albedo: Color, fuzz: float = 0.0):
        self.albedo = albedo
        self.fuzz = min(fuzz, 1.0)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> Optional[ScatterRecord]:
        reflected = reflect(ray_in.direction, rec.normal).normalize()
        if self.fuzz > 0:
            reflected = reflected + random_unit_vector() * self.fuzz

        # Absorb the ray if fuzz pushed it below the surface.
        if reflected.dot(rec.normal) <= 0:
            return None

        return ScatterRecord(
            attenuation=self.albedo,
            skip_pdf=True,
            skip_pdf_ray=Ray(rec.p, reflected, ray_in.time),
        )
