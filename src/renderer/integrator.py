"""
Path tracing integrator.

Estimates the radiance arriving along a ray by walking
ray -> hit -> scatter -> next ray, adding emission at each hit. Diffuse
bounces sample a 50/50 mixture of light-directed and BRDF-directed
directions; specular bounces follow the material's ray directly. After
RR_MIN_BOUNCES bounces Russian roulette may end the path, with survivors
reweighted by 1/p so the estimate stays unbiased.

ray_color is the production loop. ray_color_recursive is the textbook
recursive form; for the same random stream both draw the same numbers in
the same order.
"""
import math
from typing import Optional

from core.interval import Interval
from core.ray import Ray
from core.utils import random_double
from core.vector import Color
from materials.pdf import HittablePdf, MixturePdf

# Minimum hit distance, avoids re-hitting the surface a ray leaves from.
T_MIN = 0.001

# Russian roulette starts once this many bounces have been taken.
RR_MIN_BOUNCES = 5

# Clamp for the survival probability.
RR_MIN_PROBABILITY = 0.05
RR_MAX_PROBABILITY = 0.95

_SKY_HORIZON = Color(1.0, 1.0, 1.0)
_SKY_ZENITH = Color(0.5, 0.7, 1.0)


def background_radiance(ray: Ray, background: Optional[Color]) -> Color:
    """Constant background, or a vertical sky gradient when None."""
    if background is not None:
        return background
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return _SKY_HORIZON * (1.0 - a) + _SKY_ZENITH * a


def survival_probability(weight: Color) -> float:
    return min(RR_MAX_PROBABILITY, max(RR_MIN_PROBABILITY, weight.max_component()))


def _has_lights(lights) -> bool:
    if lights is None:
        return False
    try:
        return len(lights) > 0
    except TypeError:
        return True


def _sampling_pdf(rec, srec, lights):
    if not _has_lights(lights):
        return srec.pdf
    return MixturePdf(HittablePdf(lights, rec.p), srec.pdf)


def _sample_direction(pdf, rec):
    direction = pdf.generate()
    if direction.near_zero():
        direction = rec.normal
    return direction


def ray_color(ray: Ray, max_depth: int, world, lights=None,
              background: Optional[Color] = None) -> Color:
    """
    Radiance along ray, following at most max_depth bounces.

    Args:
        ray: Primary ray.
        max_depth: Bounce budget; 0 returns black.
        world: Scene aggregate (usually a BVHNode).
        lights: Hittable used for light sampling, or None.
        background: Radiance of escaped rays, None for the sky gradient.

    Returns:
        Color: The radiance estimate (not clamped).
    """
    radiance = Color(0.0, 0.0, 0.0)
    throughput = Color(1.0, 1.0, 1.0)

    for bounce in range(max_depth):
        rec = world.hit(ray, Interval(T_MIN, math.inf))
        if rec is None:
            return radiance + throughput * background_radiance(ray, background)

        material = rec.material
        radiance = radiance + throughput * material.emitted(ray, rec)

        srec = material.scatter(ray, rec)
        if srec is None:
            return radiance

        rr_prob = 1.0
        if bounce >= RR_MIN_BOUNCES:
            rr_prob = survival_probability(throughput * srec.attenuation)
            if random_double() > rr_prob:
                return radiance

        if srec.skip_pdf:
            throughput = throughput * srec.attenuation / rr_prob
            ray = srec.skip_pdf_ray
            continue

        if srec.pdf is None:
            return radiance

        pdf = _sampling_pdf(rec, srec, lights)
        scattered = Ray(rec.p, _sample_direction(pdf, rec), ray.time)
        pdf_value = pdf.value(scattered.direction)
        # Also rejects NaN densities.
        if not pdf_value > 0:
            return radiance

        scattering_pdf = material.scattering_pdf(ray, rec, scattered)
        throughput = throughput * srec.attenuation * (scattering_pdf / (pdf_value * rr_prob))
        ray = scattered

    return radiance


def ray_color_recursive(ray: Ray, depth: int, world, lights=None,
                        background: Optional[Color] = None,
                        max_depth: Optional[int] = None,
                        throughput: Optional[Color] = None) -> Color:
    """
    Recursive form of ray_color. depth counts down from max_depth;
    throughput is the path weight so far, used only for Russian roulette.
    """
    if max_depth is None:
        max_depth = depth
    if throughput is None:
        throughput = Color(1.0, 1.0, 1.0)

    if depth <= 0:
        return Color(0.0, 0.0, 0.0)

    rec = world.hit(ray, Interval(T_MIN, math.inf))
    if rec is None:
        return background_radiance(ray, background)

    material = rec.material
    emitted = material.emitted(ray, rec)

    srec = material.scatter(ray, rec)
    if srec is None:
        return emitted

    rr_prob = 1.0
    if max_depth - depth >= RR_MIN_BOUNCES:
        rr_prob = survival_probability(throughput * srec.attenuation)
        if random_double() > rr_prob:
            return emitted

    if srec.skip_pdf:
        weight = srec.attenuation / rr_prob
        return emitted + weight * ray_color_recursive(
            srec.skip_pdf_ray, depth - 1, world, lights, background,
            max_depth, throughput * weight)

    if srec.pdf is None:
        return emitted

    pdf = _sampling_pdf(rec, srec, lights)
    scattered = Ray(rec.p, _sample_direction(pdf, rec), ray.time)
    pdf_value = pdf.value(scattered.direction)
    if not pdf_value > 0:
        return emitted

    scattering_pdf = material.scattering_pdf(ray, rec, scattered)
    weight = srec.attenuation * (scattering_pdf / (pdf_value * rr_prob))
    sample_color = ray_color_recursive(scattered, depth - 1, world, lights, background,
                                       max_depth, throughput * weight)
    return emitted + weight * sample_color
