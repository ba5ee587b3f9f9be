# materials/material.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from core.ray import Ray
from core.vector import Color, Vector3
from materials.textures import SolidTexture, Texture

if TYPE_CHECKING:
    from geometry.hittable import HitRecord
    from materials.pdf import Pdf


class ScatterRecord:
    """
    Result of a successful scatter.

    Either pdf is set and the integrator samples the next direction from it,
    or skip_pdf is True and skip_pdf_ray is the next ray (specular bounces
    have no density to mix with light sampling).
    """
    __slots__ = ("attenuation", "pdf", "skip_pdf", "skip_pdf_ray")

    def __init__(self, attenuation: Color, pdf: Optional[Pdf] = None,
                 skip_pdf: bool = False, skip_pdf_ray: Optional[Ray] = None):
        self.attenuation = attenuation
        self.pdf = pdf
        self.skip_pdf = skip_pdf
        self.skip_pdf_ray = skip_pdf_ray


class Material:
    """
    Base material: emits nothing, scatters nothing.
    """
    def emitted(self, ray_in: Ray, rec: HitRecord) -> Color:
        return Color(0, 0, 0)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> Optional[ScatterRecord]:
        """
        Returns a ScatterRecord, or None if the ray is absorbed.
        """
        return None

    def scattering_pdf(self, ray_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        return 0.0


class EmptyMaterial(Material):
    """
    Non-interacting material. Marks geometry that only exists to be sampled
    as a light direction.
    """


def as_texture(value: Union[Vector3, Texture]) -> Texture:
    """Wraps a plain color in a SolidTexture."""
    if isinstance(value, Vector3):
        return SolidTexture(value)
    return value
