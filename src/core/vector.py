# core/vector.py
import math


class Vector3:
    """
    A simple 3D vector class supporting arithmetic, dot and cross products,
    and normalization. Also used for points and RGB colors.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return Vector3(self.x * other, self.y * other, self.z * other)
        # Element-wise multiplication (color attenuation).
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def __getitem__(self, axis: int) -> float:
        if axis == 0:
            return self.x
        if axis == 1:
            return self.y
        if axis == 2:
            return self.z
        raise IndexError(f"Vector3 axis out of range: {axis}")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> "Vector3":
        l = self.length()
        if l == 0:
            return Vector3(0, 0, 0)
        return self / l

    def near_zero(self) -> bool:
        """True if the vector is close to zero in all dimensions."""
        s = 1e-8
        return abs(self.x) < s and abs(self.y) < s and abs(self.z) < s

    def max_component(self) -> float:
        return max(self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


# Same type, named for intent at call sites.
Point3 = Vector3
Color = Vector3
