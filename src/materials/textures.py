# materials/textures.py
import math

from core.vector import Color, Point3


class Texture:
    """Base class for all textures."""
    def sample(self, u: float, v: float, p: Point3) -> Color:
        """Sample the texture at surface coordinates (u, v) and point p."""
        raise NotImplementedError("sample() must be implemented by texture subclasses.")


class SolidTexture(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def sample(self, u: float, v: float, p: Point3) -> Color:
        return self.color


class CheckerTexture(Texture):
    """A checker pattern over the (u, v) surface parameterization."""
    def __init__(self, color1: Color, color2: Color, scale: float = 1.0):
        self.color1 = color1
        self.color2 = color2
        self.scale = scale

    def sample(self, u: float, v: float, p: Point3) -> Color:
        x = math.floor(u * self.scale)
        y = math.floor(v * self.scale)
        is_even = (x + y) % 2 == 0
        return self.color1 if is_even else self.color2
