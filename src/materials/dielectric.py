# src/materials/dielectric.py
from __future__ import annotations

import math
from typing import TYPE_CHECKING

from core.ray import Ray
from core.utils import random_double, reflect, refract
from core.vector import Color
from materials.material import Material, ScatterRecord

if TYPE_CHECKING:
    from geometry.hittable import HitRecord


class Dielectric(Material):
    """
    Clear refractive material (glass, water). Each scatter either reflects
    or refracts, chosen with Schlick's reflectance as the probability.
    """
    def __init__(self, refraction_index: float):
        self.refraction_index = refraction_index

    def scatter(self, ray_in: Ray, rec: HitRecord) -> ScatterRecord:
        attenuation = Color(1.0, 1.0, 1.0)  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        ri = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        # Total internal reflection, or a Fresnel reflection draw.
        cannot_refract = ri * sin_theta > 1.0
        if cannot_refract or schlick(cos_theta, ri) > random_double():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ri)

        return ScatterRecord(
            attenuation=attenuation,
            skip_pdf=True,
            skip_pdf_ray=Ray(rec.p, direction, ray_in.time),
        )


def schlick(cos_theta: float, ref_idx: float) -> float:
    """
    Schlick's approximation of Fresnel reflectance.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cos_theta), 5)
