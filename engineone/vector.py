"""Three-component vectors and quaternions, plus table-style helpers for game scripts."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

__all__ = [
    "Vec3",
    "Quat",
    "cross_product",
    "rotate",
    "hamilton_product",
    "quat_normalize",
    "aa_normalize",
]


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vec3) -> float:
        """Return the dot product with ``other``."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Return the cross product ``self × other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def norm2(self) -> float:
        """Return the squared length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        """Return the length."""
        return math.sqrt(self.norm2())

    def normalized(self) -> Vec3:
        """Return the unit vector in the same direction.

        Raises ValueError for the zero vector.
        """
        magnitude = self.norm()
        if magnitude == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return Vec3(self.x / magnitude, self.y / magnitude, self.z / magnitude)

    def rotated(self, q: Quat) -> Vec3:
        """Rotate by the unit quaternion ``q``."""
        result = q.hamilton(Quat(0.0, self.x, self.y, self.z)).hamilton(q.unit_inverse())
        return result.vector


@dataclass(frozen=True)
class Quat:
    """An immutable quaternion with scalar part ``w`` and vector part ``(x, y, z)``."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @property
    def vector(self) -> Vec3:
        """The vector part."""
        return Vec3(self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.w
        yield self.x
        yield self.y
        yield self.z

    def hamilton(self, other: Quat) -> Quat:
        """Return the Hamilton product ``self · other``."""
        s0, x0, y0, z0 = self
        s1, x1, y1, z1 = other
        return Quat(
            s0 * s1 - x0 * x1 - y0 * y1 - z0 * z1,
            s0 * x1 + x0 * s1 + y0 * z1 - z0 * y1,
            s0 * y1 - x0 * z1 + y0 * s1 + z0 * x1,
            s0 * z1 + x0 * y1 - y0 * x1 + z0 * s1,
        )

    def __mul__(self, other: Quat) -> Quat:
        if not isinstance(other, Quat):
            return NotImplemented
        return self.hamilton(other)

    def conjugate(self) -> Quat:
        """Return the conjugate (vector part negated)."""
        return Quat(self.w, -self.x, -self.y, -self.z)

    def unit_inverse(self) -> Quat:
        """Return the inverse of a unit quaternion, which is its conjugate."""
        return self.conjugate()

    def inverse(self) -> Quat:
        """Return every component divided by the squared norm."""
        norm2 = self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z
        return Quat(self.w / norm2, self.x / norm2, self.y / norm2, self.z / norm2)

    def norm(self) -> float:
        """Return the length."""
        return math.sqrt(self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Quat:
        """Return the unit quaternion in the same direction.

        Raises ValueError for the zero quaternion.
        """
        magnitude = self.norm()
        if magnitude == 0.0:
            raise ValueError("cannot normalize a zero-length quaternion")
        return Quat(self.w / magnitude, self.x / magnitude, self.y / magnitude, self.z / magnitude)

    def __str__(self) -> str:
        return f"quat_t {{{self.w:f}, {self.x:f}, {self.y:f}, {self.z:f}}}"


def _number(table: Mapping[str, object], key: str) -> float:
    value = table.get(key) if isinstance(table, Mapping) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Key {key} must be a number")
    return float(value)


def _vec_from(table: Mapping[str, object]) -> Vec3:
    return Vec3(_number(table, "x"), _number(table, "y"), _number(table, "z"))


def _quat_from(table: Mapping[str, object]) -> Quat:
    return Quat(_number(table, "w"), _number(table, "x"), _number(table, "y"), _number(table, "z"))


def _vec_table(v: Vec3) -> dict[str, float]:
    return {"x": v.x, "y": v.y, "z": v.z}


def _quat_table(q: Quat) -> dict[str, float]:
    return {"w": q.w, "x": q.x, "y": q.y, "z": q.z}


def cross_product(a: Mapping[str, object], b: Mapping[str, object]) -> dict[str, float]:
    """Cross product of two ``{x, y, z}`` tables."""
    return _vec_table(_vec_from(a).cross(_vec_from(b)))


def rotate(vector: Mapping[str, object], orientation: Mapping[str, object]) -> dict[str, float]:
    """Rotate an ``{x, y, z}`` table by a unit ``{w, x, y, z}`` quaternion table."""
    return _vec_table(_vec_from(vector).rotated(_quat_from(orientation)))


def hamilton_product(q0: Mapping[str, object], q1: Mapping[str, object]) -> dict[str, float]:
    """Hamilton product of two ``{w, x, y, z}`` tables."""
    return _quat_table(_quat_from(q0).hamilton(_quat_from(q1)))


def quat_normalize(q: Mapping[str, object]) -> dict[str, float]:
    """Normalize a ``{w, x, y, z}`` table; a zero quaternion is returned unchanged."""
    quat = _quat_from(q)
    try:
        quat = quat.normalized()
    except ValueError:
        pass
    return _quat_table(quat)


def aa_normalize(axis_angle: Mapping[str, object]) -> dict[str, float]:
    """Normalize the axis of a ``{w, x, y, z}`` axis-angle table, keeping ``w``.

    Raises ValueError when the axis has zero length.
    """
    quat = _quat_from(axis_angle)
    try:
        axis = quat.vector.normalized()
    except ValueError as exc:
        raise ValueError("aaNormalize failed.") from exc
    return {"w": quat.w, "x": axis.x, "y": axis.y, "z": axis.z}