"""
Global render overrides.

Scenes set their own camera defaults; any field set here replaces the
scene's value for every render. Unset (None) fields leave the scene alone.
"""
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Tuple

from core.vector import Color, Point3, Vector3

Triple = Tuple[float, float, float]


@dataclass(frozen=True)
class RenderOverrides:
    aspect_ratio: Optional[float] = None
    image_width: Optional[int] = None
    samples_per_pixel: Optional[int] = None
    max_depth: Optional[int] = None
    vfov: Optional[float] = None
    lookfrom: Optional[Triple] = None
    lookat: Optional[Triple] = None
    vup: Optional[Triple] = None
    defocus_angle: Optional[float] = None
    focus_dist: Optional[float] = None
    background: Optional[Triple] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RenderOverrides":
        """Build overrides from a plain dict, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown render override(s): {', '.join(unknown)}")
        converted = {}
        for key, value in values.items():
            if value is not None and key in ("lookfrom", "lookat", "vup", "background"):
                value = tuple(float(c) for c in value)
                if len(value) != 3:
                    raise ValueError(f"{key} needs three components, got {len(value)}")
            converted[key] = value
        return cls(**converted)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def apply(self, camera):
        """Overwrite the set fields on camera and re-derive its viewport."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name in ("lookfrom", "lookat"):
                value = Point3(*value)
            elif f.name == "vup":
                value = Vector3(*value)
            elif f.name == "background":
                value = Color(*value)
            setattr(camera, f.name, value)
        camera.update_camera()
        return camera


# Edit to override every scene, e.g. RenderOverrides(image_width=800, samples_per_pixel=200).
OVERRIDES = RenderOverrides()
