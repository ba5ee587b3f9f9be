"""Materials, textures and the direction distributions used to sample them."""
from typing import Union

from .dielectric import Dielectric
from .diffuse_light import DiffuseLight
from .isotropic import Isotropic
from .lambertian import Lambertian
from .material import EmptyMaterial, Material, ScatterRecord
from .metal import Metal
from .pdf import CosinePdf, HittablePdf, MixturePdf, Pdf, SpherePdf
from .textures import CheckerTexture, SolidTexture, Texture

MaterialKind = Union[Lambertian, Metal, Dielectric, DiffuseLight, Isotropic, EmptyMaterial]
PdfKind = Union[SpherePdf, CosinePdf, HittablePdf, MixturePdf]

__all__ = [
    "CheckerTexture",
    "CosinePdf",
    "Dielectric",
    "DiffuseLight",
    "EmptyMaterial",
    "HittablePdf",
    "Isotropic",
    "Lambertian",
    "Material",
    "MaterialKind",
    "Metal",
    "MixturePdf",
    "Pdf",
    "PdfKind",
    "ScatterRecord",
    "SolidTexture",
    "Texture",
]
