# materials/pdf.py
"""
Direction distributions used for importance sampling.

Each distribution can evaluate its density for a direction (value) and
draw a direction from itself (generate). Densities are per unit solid
angle.
"""
import math

from core.onb import ONB
from core.utils import random_cosine_direction, random_double, random_unit_vector
from core.vector import Point3, Vector3


class Pdf:
    def value(self, direction: Vector3) -> float:
        raise NotImplementedError("value() must be implemented by subclasses.")

    def generate(self) -> Vector3:
        raise NotImplementedError("generate() must be implemented by subclasses.")


class SpherePdf(Pdf):
    """Uniform over the whole sphere of directions."""
    def value(self, direction: Vector3) -> float:
        return 1 / (4 * math.pi)

    def generate(self) -> Vector3:
        return random_unit_vector()


class CosinePdf(Pdf):
    """Cosine-weighted over the hemisphere around w."""
    def __init__(self, w: Vector3):
        self.uvw = ONB(w)

    def value(self, direction: Vector3) -> float:
        cosine_theta = direction.normalize().dot(self.uvw.w)
        return max(0.0, cosine_theta / math.pi)

    def generate(self) -> Vector3:
        return self.uvw.transform(random_cosine_direction())


class HittablePdf(Pdf):
    """
    Samples directions from origin towards a hittable (usually the light
    set), using the object's own pdf_value/random.
    """
    def __init__(self, objects, origin: Point3):
        self.objects = objects
        self.origin = origin

    def value(self, direction: Vector3) -> float:
        return self.objects.pdf_value(self.origin, direction)

    def generate(self) -> Vector3:
        return self.objects.random(self.origin)


class MixturePdf(Pdf):
    """Equal-weight blend of two distributions."""
    def __init__(self, p0: Pdf, p1: Pdf):
        self.p0 = p0
        self.p1 = p1

    def value(self, direction: Vector3) -> float:
        return 0.5 * self.p0.value(direction) + 0.5 * self.p1.value(direction)

    def generate(self) -> Vector3:
        if random_double() < 0.5:
            return self.p0.generate()
        return self.p1.generate()
