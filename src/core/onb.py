# core/onb.py
from core.vector import Vector3


class ONB:
    """
    Orthonormal basis (u, v, w) built around a normal w. Transforms samples
    from a local frame (e.g. the +z hemisphere) into world space.
    """
    __slots__ = ("u", "v", "w")

    def __init__(self, n: Vector3):
        self.w = n.normalize()
        a = Vector3(0, 1, 0) if abs(self.w.x) > 0.9 else Vector3(1, 0, 0)
        self.v = self.w.cross(a).normalize()
        self.u = self.w.cross(self.v)

    def transform(self, v: Vector3) -> Vector3:
        return self.u * v.x + self.v * v.y + self.w * v.z
