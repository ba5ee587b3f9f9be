# materials/lambertian.py
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Union

from core.ray import Ray
from core.vector import Vector3
from materials.material import Material, ScatterRecord, as_texture
from materials.pdf import CosinePdf
from materials.textures import Texture

if TYPE_CHECKING:
    from geometry.hittable import HitRecord


class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.

    Scattering is cosine-weighted around the surface normal; the direction
    itself is drawn by the integrator from the returned CosinePdf.
    """

    def __init__(self, albedo: Union[Vector3, Texture]):
        # Store either a solid color or a texture.
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> ScatterRecord:
        return ScatterRecord(
            attenuation=self.texture.sample(rec.u, rec.v, rec.p),
            pdf=CosinePdf(rec.normal),
        )

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        cos_theta = rec.normal.dot(scattered.direction.normalize())
        return 0.0 if cos_theta < 0 else cos_theta / math.pi
