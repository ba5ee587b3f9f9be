# materials/diffuse_light.py
from __future__ import annotations

from typing import TYPE_CHECKING, Union

from core.ray import Ray
from core.vector import Color, Vector3
from materials.material import Material, as_texture
from materials.textures import Texture

if TYPE_CHECKING:
    from geometry.hittable import HitRecord


class DiffuseLight(Material):
    """
    Emissive material that provides constant radiance with optional texture support.

    Emission is one-sided: only the front face (the side the outward
    normal points to) glows. The light does not scatter.
    """
    def __init__(self, emit: Union[Vector3, Texture]):
        self.texture = as_texture(emit)

    def emitted(self, ray_in: Ray, rec: HitRecord) -> Color:
        """
        Return the emitted radiance, which can be textured.

        Args:
            ray_in (Ray): The incoming ray.
            rec (HitRecord): The hit on the emitting surface.

        Returns:
            Color: The emission from the texture, or black from behind.
        """
        if not rec.front_face:
            return Color(0, 0, 0)
        return self.texture.sample(rec.u, rec.v, rec.p)
