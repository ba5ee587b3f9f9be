"""Path integrator, row scheduler, output stage and GPU parameter block."""
from .errors import BackendUnavailableError, RenderError, RenderOutputError
from .image_io import write_ppm
from .integrator import ray_color, ray_color_recursive
from .raytracer import Renderer, render_row
from .tone_mapping import resolve_accumulation

__all__ = [
    "BackendUnavailableError",
    "RenderError",
    "RenderOutputError",
    "Renderer",
    "ray_color",
    "ray_color_recursive",
    "render_row",
    "resolve_accumulation",
    "write_ppm",
]
