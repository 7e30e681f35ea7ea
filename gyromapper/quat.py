"""Small quaternion and 3D vector types used for gyro maths."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real


@dataclass(frozen=True)
class Quat:
    """A rotation quaternion; the default is the identity rotation."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @staticmethod
    def angle_axis(angle: float, x: float, y: float, z: float) -> Quat:
        """Build a rotation of ``angle`` radians around the axis (x, y, z)."""
        return Quat(math.cos(angle * 0.5), x, y, z).normalized()

    def __mul__(self, other: Quat) -> Quat:
        if not isinstance(other, Quat):
            return NotImplemented
        w, x, y, z = self.w, self.x, self.y, self.z
        return Quat(
            w * other.w - x * other.x - y * other.y - z * other.z,
            w * other.x + x * other.w + y * other.z - z * other.y,
            w * other.y - x * other.z + y * other.w + z * other.x,
            w * other.z + x * other.y - y * other.x + z * other.w,
        )

    def normalized(self) -> Quat:
        """Keep ``w`` and rescale the vector part so the quaternion has unit length.

        Degenerate inputs collapse to the identity rotation.
        """
        length = math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)
        target = 1.0 - self.w * self.w
        if target <= 0.0 or length <= 0.0:
            return Quat()
        factor = math.sqrt(target) / length
        return Quat(self.w, self.x * factor, self.y * factor, self.z * factor)

    def inverse(self) -> Quat:
        """Conjugate, which is the inverse of a unit quaternion."""
        return Quat(self.w, -self.x, -self.y, -self.z)


@dataclass(frozen=True)
class Vec:
    """A 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vec:
        """Unit vector in the same direction; a zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return self
        factor = 1.0 / length
        return Vec(self.x * factor, self.y * factor, self.z * factor)

    def __add__(self, other: Vec) -> Vec:
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec) -> Vec:
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: float | Quat) -> Vec:
        """Scale by a number, or rotate by a quaternion."""
        if isinstance(other, Quat):
            rotated = other * Quat(0.0, self.x, self.y, self.z) * other.inverse()
            return Vec(rotated.x, rotated.y, rotated.z)
        if isinstance(other, Real):
            return Vec(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, scalar: float) -> Vec:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Vec(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec:
        return Vec(-self.x, -self.y, -self.z)

    def dot(self, other: Vec) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec) -> Vec:
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )