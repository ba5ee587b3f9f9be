# camera/camera.py
import math
from typing import Optional

from core.ray import Ray
from core.utils import degrees_to_radians, random_double, random_in_unit_disk
from core.vector import Color, Point3, Vector3


class Camera:
    """
    Render configuration and primary-ray generation.

    The public attributes are the configuration block; update_camera()
    derives the viewport, pixel steps, defocus disk and sampling grid from
    them and must be called (the renderer does) after any change.

    background is a constant radiance for escaped rays, or None for the
    white-to-blue sky gradient.
    """
    def __init__(self, aspect_ratio: float = 1.0, image_width: int = 100,
                 samples_per_pixel: int = 10, max_depth: int = 10,
                 vfov: float = 90.0,
                 lookfrom: Point3 = None, lookat: Point3 = None, vup: Vector3 = None,
                 defocus_angle: float = 0.0, focus_dist: float = 10.0,
                 background: Optional[Color] = Color(0, 0, 0)):
        self.aspect_ratio = aspect_ratio
        self.image_width = image_width
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.vfov = vfov  # vertical field of view, degrees
        self.lookfrom = lookfrom if lookfrom is not None else Point3(0, 0, 0)
        self.lookat = lookat if lookat is not None else Point3(0, 0, -1)
        self.vup = vup if vup is not None else Vector3(0, 1, 0)
        self.defocus_angle = defocus_angle  # aperture cone angle, degrees
        self.focus_dist = focus_dist
        self.background = background
        self.update_camera()

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        if self.image_width < 1:
            raise ValueError(f"image_width must be positive, got {self.image_width}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")

        self.image_height = max(1, int(self.image_width / self.aspect_ratio))

        # Stratified sampling grid of sqrt_spp x sqrt_spp cells per pixel.
        self.sqrt_spp = max(1, int(math.sqrt(self.samples_per_pixel)))
        self.recip_sqrt_spp = 1.0 / self.sqrt_spp

        self.center = self.lookfrom

        # Viewport dimensions from the vertical fov, placed at the focus plane
        theta = degrees_to_radians(self.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2 * h * self.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Camera frame: w points backwards, u right, v up
        self.w = (self.lookfrom - self.lookat).normalize()
        self.u = self.vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        viewport_upper_left = (self.center
                               - self.w * self.focus_dist
                               - viewport_u / 2
                               - viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        self.defocus_radius = self.focus_dist * math.tan(degrees_to_radians(self.defocus_angle / 2))
        self.defocus_disk_u = self.u * self.defocus_radius
        self.defocus_disk_v = self.v * self.defocus_radius

    def get_ray(self, i: int, j: int, s_i: int, s_j: int) -> Ray:
        """
        Ray through a random point of stratum (s_i, s_j) of pixel (i, j),
        from the lens disk when defocus is on, at a random time.
        """
        offset = self.sample_square_stratified(s_i, s_j)
        pixel_sample = (self.pixel00_loc
                        + self.pixel_delta_u * (i + offset.x)
                        + self.pixel_delta_v * (j + offset.y))

        ray_origin = self.center if self.defocus_angle <= 0 else self.defocus_disk_sample()
        ray_direction = pixel_sample - ray_origin
        ray_time = random_double()

        return Ray(ray_origin, ray_direction, ray_time)

    def sample_square_stratified(self, s_i: int, s_j: int) -> Vector3:
        # Point in the [-.5,+.5] unit square, restricted to one grid cell.
        px = ((s_i + random_double()) * self.recip_sqrt_spp) - 0.5
        py = ((s_j + random_double()) * self.recip_sqrt_spp) - 0.5
        return Vector3(px, py, 0)

    def defocus_disk_sample(self) -> Point3:
        p = random_in_unit_disk()
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y
