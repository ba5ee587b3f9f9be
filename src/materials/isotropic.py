# materials/isotropic.py
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Union

from core.ray import Ray
from core.vector import Vector3
from materials.material import Material, ScatterRecord, as_texture
from materials.pdf import SpherePdf
from materials.textures import Texture

if TYPE_CHECKING:
    from geometry.hittable import HitRecord


class Isotropic(Material):
    """Phase function of a participating medium: scatters uniformly."""

    def __init__(self, albedo: Union[Vector3, Texture]):
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> ScatterRecord:
        return ScatterRecord(
            attenuation=self.texture.sample(rec.u, rec.v, rec.p),
            pdf=SpherePdf(),
        )

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        return 1 / (4 * math.pi)
