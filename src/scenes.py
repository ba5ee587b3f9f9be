# scenes.py
"""
Built-in scenes. Each builder returns (world, lights, camera): the world as
a HittableList (main wraps it in a BVH), the light-sampling set or None,
and a Camera holding the scene's defaults.
"""
import logging
import random

from camera.camera import Camera
from core.vector import Color, Point3, Vector3
from geometry.constant_medium import ConstantMedium
from geometry.hittable import RotateY, Translate
from geometry.quad import Quad, make_box
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.material import EmptyMaterial
from materials.metal import Metal
from materials.textures import CheckerTexture

logger = logging.getLogger(__name__)


def single_sphere():
    """A grey diffuse sphere under the sky gradient."""
    world = HittableList()
    world.add(Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.5, 0.5, 0.5))))

    camera = Camera(background=None)
    return world, None, camera


def _cornell_walls(world: HittableList, light_corner: Point3, light_u: Vector3,
                   light_v: Vector3, light_material):
    red = Lambertian(Color(0.65, 0.05, 0.05))
    white = Lambertian(Color(0.73, 0.73, 0.73))
    green = Lambertian(Color(0.12, 0.45, 0.15))

    world.add(Quad(Point3(555, 0, 0), Vector3(0, 0, 555), Vector3(0, 555, 0), green))
    world.add(Quad(Point3(0, 0, 555), Vector3(0, 0, -555), Vector3(0, 555, 0), red))
    world.add(Quad(Point3(0, 555, 0), Vector3(555, 0, 0), Vector3(0, 0, 555), white))
    world.add(Quad(Point3(0, 0, 555), Vector3(555, 0, 0), Vector3(0, 0, -555), white))
    world.add(Quad(Point3(555, 0, 555), Vector3(-555, 0, 0), Vector3(0, 555, 0), white))

    # Ceiling light, facing down
    world.add(Quad(light_corner, light_u, light_v, light_material))


def _cornell_camera() -> Camera:
    return Camera(
        aspect_ratio=1.0,
        image_width=600,
        samples_per_pixel=100,
        max_depth=50,
        background=Color(0, 0, 0),
        vfov=40.0,
        lookfrom=Point3(278, 278, -800),
        lookat=Point3(278, 278, 0),
        vup=Vector3(0, 1, 0),
        defocus_angle=0.0,
    )


def cornell_box():
    """Cornell box with a rotated white block and a glass sphere."""
    world = HittableList()
    _cornell_walls(world, Point3(213, 554, 227), Vector3(130, 0, 0), Vector3(0, 0, 105),
                   DiffuseLight(Color(15, 15, 15)))

    white = Lambertian(Color(0.73, 0.73, 0.73))
    box1 = make_box(Point3(0, 0, 0), Point3(165, 330, 165), white)
    box1 = RotateY(box1, 15)
    box1 = Translate(box1, Vector3(265, 0, 295))
    world.add(box1)

    glass = Dielectric(1.5)
    world.add(Sphere(Point3(190, 90, 190), 90, glass))

    # Light sampling targets the lamp and the glass sphere.
    empty = EmptyMaterial()
    lights = HittableList()
    lights.add(Quad(Point3(343, 554, 332), Vector3(-130, 0, 0), Vector3(0, 0, -105), empty))
    lights.add(Sphere(Point3(190, 90, 190), 90, empty))

    return world, lights, _cornell_camera()


def cornell_smoke():
    """Cornell box whose two blocks are replaced by smoke and fog."""
    world = HittableList()
    _cornell_walls(world, Point3(113, 554, 127), Vector3(330, 0, 0), Vector3(0, 0, 305),
                   DiffuseLight(Color(7, 7, 7)))

    white = Lambertian(Color(0.73, 0.73, 0.73))
    box1 = make_box(Point3(0, 0, 0), Point3(165, 330, 165), white)
    box1 = Translate(RotateY(box1, 15), Vector3(265, 0, 295))

    box2 = make_box(Point3(0, 0, 0), Point3(165, 165, 165), white)
    box2 = Translate(RotateY(box2, -18), Vector3(130, 0, 65))

    world.add(ConstantMedium(box1, 0.01, Color(0, 0, 0)))
    world.add(ConstantMedium(box2, 0.01, Color(1, 1, 1)))

    lights = HittableList()
    lights.add(Quad(Point3(113, 554, 127), Vector3(330, 0, 0), Vector3(0, 0, 305), EmptyMaterial()))

    camera = _cornell_camera()
    camera.samples_per_pixel = 200
    camera.update_camera()
    return world, lights, camera


def bouncing_spheres(seed: int = 0x5EED1234):
    """
    Field of small random spheres around three large ones. The diffuse
    spheres bounce upwards during the exposure.

    seed drives the layout only; it does not touch the render's random
    streams.
    """
    gen = random.Random(seed)
    world = HittableList()

    checker = CheckerTexture(Color(0.2, 0.3, 0.1), Color(0.9, 0.9, 0.9), 0.32)
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(checker)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = gen.random()
            center = Point3(a + 0.9 * gen.random(), 0.2, b + 0.9 * gen.random())

            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Color(gen.random() * gen.random(),
                               gen.random() * gen.random(),
                               gen.random() * gen.random())
                center2 = center + Vector3(0, gen.uniform(0, 0.5), 0)
                world.add(Sphere(center, 0.2, Lambertian(albedo), center2))
            elif choose_mat < 0.95:
                albedo = Color(gen.uniform(0.5, 1), gen.uniform(0.5, 1), gen.uniform(0.5, 1))
                fuzz = gen.uniform(0, 0.5)
                world.add(Sphere(center, 0.2, Metal(albedo, fuzz)))
            else:
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))
    logger.debug("bouncing_spheres: %d objects", len(world))

    camera = Camera(
        aspect_ratio=16.0 / 9.0,
        image_width=400,
        samples_per_pixel=100,
        max_depth=50,
        background=Color(0.7, 0.8, 1.0),
        vfov=20.0,
        lookfrom=Point3(13, 2, 3),
        lookat=Point3(0, 0, 0),
        vup=Vector3(0, 1, 0),
        defocus_angle=0.6,
        focus_dist=10.0,
    )
    return world, None, camera


SCENES = {
    "single_sphere": single_sphere,
    "cornell_box": cornell_box,
    "cornell_smoke": cornell_smoke,
    "bouncing_spheres": bouncing_spheres,
}
