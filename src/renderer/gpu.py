# renderer/gpu.py
"""
Parameter block shared with GPU backends.

A compute backend takes the camera as one fixed-layout record plus flat
sphere, material and BVH arrays, and hands back the same (h, w, 4)
accumulation buffer the CPU renderer produces, so both finish through
resolve_accumulation.
"""
import logging

import numpy as np
from numba import cuda

from geometry.bvh import BVHNode, flatten_bvh
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.metal import Metal
from renderer.errors import BackendUnavailableError

logger = logging.getLogger(__name__)

# Material kinds understood by the kernels.
MATERIAL_LAMBERTIAN = 0
MATERIAL_METAL = 1
MATERIAL_DIELECTRIC = 2
MATERIAL_EMISSIVE = 3

BACKGROUND_SKY = 0
BACKGROUND_CONSTANT = 1

CAMERA_DTYPE = np.dtype([
    ("origin", np.float32, 4),
    ("pixel00", np.float32, 4),
    ("pixel_delta_u", np.float32, 4),
    ("pixel_delta_v", np.float32, 4),
    ("u", np.float32, 4),
    ("v", np.float32, 4),
    ("background", np.float32, 4),
    # defocus_radius, width, height, samples_per_pixel
    ("params_f", np.float32, 4),
    # max_depth, seed, primitive_count, background_mode
    ("params_u", np.uint32, 4),
])


def _vec4(v) -> list:
    return [v.x, v.y, v.z, 0.0]


def pack_camera_block(camera, seed: int = 0, primitive_count: int = 0) -> np.ndarray:
    """
    Serialize a camera into a single CAMERA_DTYPE record.

    u and v are the defocus disk basis vectors (already scaled by the
    defocus radius).
    """
    camera.update_camera()
    block = np.zeros((), dtype=CAMERA_DTYPE)
    block["origin"] = _vec4(camera.center)
    block["pixel00"] = _vec4(camera.pixel00_loc)
    block["pixel_delta_u"] = _vec4(camera.pixel_delta_u)
    block["pixel_delta_v"] = _vec4(camera.pixel_delta_v)
    block["u"] = _vec4(camera.defocus_disk_u)
    block["v"] = _vec4(camera.defocus_disk_v)

    if camera.background is None:
        background_mode = BACKGROUND_SKY
    else:
        background_mode = BACKGROUND_CONSTANT
        block["background"] = _vec4(camera.background)

    block["params_f"] = [camera.defocus_radius, camera.image_width,
                         camera.image_height, camera.samples_per_pixel]
    block["params_u"] = [camera.max_depth, seed & 0xFFFFFFFF, primitive_count, background_mode]
    return block


def _collect_spheres(world) -> list:
    if isinstance(world, BVHNode):
        objects = world.primitives()
    elif isinstance(world, HittableList):
        objects = world.objects
    else:
        objects = [world]

    spheres = []
    for obj in objects:
        if isinstance(obj, Sphere):
            spheres.append(obj)
        elif isinstance(obj, (BVHNode, HittableList)):
            spheres.extend(_collect_spheres(obj))
        else:
            logger.warning("GPU scene skips unsupported primitive %s", type(obj).__name__)
    return spheres


def _material_row(material, sphere):
    """(kind, r, g, b, fuzz, ior) for one material."""
    point = sphere.center.origin
    if isinstance(material, Metal):
        a = material.albedo
        return MATERIAL_METAL, a.x, a.y, a.z, material.fuzz, 1.0
    if isinstance(material, Dielectric):
        return MATERIAL_DIELECTRIC, 1.0, 1.0, 1.0, 0.0, material.refraction_index
    if isinstance(material, DiffuseLight):
        e = material.texture.sample(0.5, 0.5, point)
        return MATERIAL_EMISSIVE, e.x, e.y, e.z, 0.0, 1.0
    if isinstance(material, Lambertian):
        a = material.texture.sample(0.5, 0.5, point)
        return MATERIAL_LAMBERTIAN, a.x, a.y, a.z, 0.0, 1.0
    raise ValueError(f"No GPU encoding for material {type(material).__name__}")


def pack_scene(world) -> dict:
    """
    Flatten the spheres of world into GPU arrays.

    Returns a dict with:
      - spheres: (n, 4) float32 centre and radius (centre at time 0).
      - material_index: (n,) uint32 index into the material table.
      - material_kind: (m,) uint32 MATERIAL_* codes.
      - albedo_fuzz: (m, 4) float32 albedo or emission plus metal fuzz.
      - ior: (m,) float32 refraction index.
      - bvh: the six flatten_bvh arrays over the sphere table.
    """
    spheres = _collect_spheres(world)
    n = len(spheres)

    centers = np.zeros((n, 4), dtype=np.float32)
    material_index = np.zeros(n, dtype=np.uint32)
    kinds, albedo_fuzz, ior = [], [], []
    table = {}

    for i, sphere in enumerate(spheres):
        c = sphere.center.origin
        centers[i] = (c.x, c.y, c.z, sphere.radius)
        key = id(sphere.material)
        if key not in table:
            kind, r, g, b, fuzz, ref_idx = _material_row(sphere.material, sphere)
            table[key] = len(kinds)
            kinds.append(kind)
            albedo_fuzz.append((r, g, b, fuzz))
            ior.append(ref_idx)
        material_index[i] = table[key]

    bvh = flatten_bvh(BVHNode(list(spheres)), spheres)
    logger.info("Packed %d spheres, %d materials, %d BVH nodes",
                n, len(kinds), len(bvh[0]))
    return {
        "spheres": centers,
        "material_index": material_index,
        "material_kind": np.array(kinds, dtype=np.uint32),
        "albedo_fuzz": np.array(albedo_fuzz, dtype=np.float32).reshape(-1, 4),
        "ior": np.array(ior, dtype=np.float32),
        "bvh": bvh,
    }


def probe_cuda() -> str:
    """
    Name of the CUDA device numba would use.

    Raises:
        BackendUnavailableError: If numba finds no usable CUDA device.
    """
    if not cuda.is_available():
        raise BackendUnavailableError("no CUDA device or driver available")
    name = cuda.get_current_device().name
    if isinstance(name, bytes):
        name = name.decode()
    return name
