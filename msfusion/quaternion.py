"""Unit quaternions with Hamilton product and x, y, z, w coefficient order."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class Quaternion:
    """A quaternion ``w + xi + yj + zk``."""

    w: float
    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        for name in ("w", "x", "y", "z"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @classmethod
    def identity(cls) -> Quaternion:
        """Return the identity rotation."""
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_coeffs(cls, coeffs: Iterable[float]) -> Quaternion:
        """Build a quaternion from coefficients ordered x, y, z, w."""
        values = np.asarray(coeffs, dtype=float).reshape(-1)
        if values.shape != (4,):
            raise ValueError("quaternion coefficients must have 4 entries")
        x, y, z, w = values
        return cls(w, x, y, z)

    @classmethod
    def from_rotation_matrix(cls, matrix) -> Quaternion:
        """Build the quaternion that represents a 3x3 rotation matrix."""
        m = np.asarray(matrix, dtype=float)
        if m.shape != (3, 3):
            raise ValueError("rotation matrix must be 3x3")
        trace = m[0, 0] + m[1, 1] + m[2, 2]
        if trace > 0.0:
            t = math.sqrt(trace + 1.0)
            w = 0.5 * t
            t = 0.5 / t
            return cls(
                w,
                (m[2, 1] - m[1, 2]) * t,
                (m[0, 2] - m[2, 0]) * t,
                (m[1, 0] - m[0, 1]) * t,
            )
        i = 0
        if m[1, 1] > m[0, 0]:
            i = 1
        if m[2, 2] > m[i, i]:
            i = 2
        j = (i + 1) % 3
        k = (j + 1) % 3
        t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
        vec = [0.0, 0.0, 0.0]
        vec[i] = 0.5 * t
        t = 0.5 / t
        w = (m[k, j] - m[j, k]) * t
        vec[j] = (m[j, i] + m[i, j]) * t
        vec[k] = (m[k, i] + m[i, k]) * t
        return cls(w, *vec)

    def coeffs(self) -> np.ndarray:
        """Return the coefficients ordered x, y, z, w."""
        return np.array([self.x, self.y, self.z, self.w])

    def vec(self) -> np.ndarray:
        """Return the vector part x, y, z."""
        return np.array([self.x, self.y, self.z])

    def norm(self) -> float:
        """Return the Euclidean norm of the coefficients."""
        return math.sqrt(self.w**2 + self.x**2 + self.y**2 + self.z**2)

    def normalized(self) -> Quaternion:
        """Return the quaternion scaled to unit norm (unchanged if zero)."""
        n = self.norm()
        if n <= 0.0:
            return self
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def conjugate(self) -> Quaternion:
        """Return the conjugate quaternion."""
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def inverse(self) -> Quaternion:
        """Return the multiplicative inverse, or zero for a zero quaternion."""
        n2 = self.w**2 + self.x**2 + self.y**2 + self.z**2
        if n2 <= 0.0:
            return Quaternion(0.0, 0.0, 0.0, 0.0)
        c = self.conjugate()
        return Quaternion(c.w / n2, c.x / n2, c.y / n2, c.z / n2)

    def __mul__(self, other):
        if isinstance(other, Quaternion):
            w1, x1, y1, z1 = self.w, self.x, self.y, self.z
            w2, x2, y2, z2 = other.w, other.x, other.y, other.z
            return Quaternion(
                w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
                w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
                w1 * y2 + y1 * w2 + z1 * x2 - x1 * z2,
                w1 * z2 + z1 * w2 + x1 * y2 - y1 * x2,
            )
        try:
            vector = np.asarray(other, dtype=float)
        except (TypeError, ValueError):
            return NotImplemented
        if vector.shape != (3,):
            return NotImplemented
        return self.rotate(vector)

    def rotate(self, vector) -> np.ndarray:
        """Rotate a 3-vector by this (unit) quaternion."""
        v = np.asarray(vector, dtype=float).reshape(-1)
        if v.shape != (3,):
            raise ValueError("vector must have 3 entries")
        q_vec = self.vec()
        uv = 2.0 * np.cross(q_vec, v)
        return v + self.w * uv + np.cross(q_vec, uv)

    def to_rotation_matrix(self) -> np.ndarray:
        """Return the 3x3 rotation matrix of this (unit) quaternion."""
        w, x, y, z = self.w, self.x, self.y, self.z
        tx, ty, tz = 2.0 * x, 2.0 * y, 2.0 * z
        twx, twy, twz = tx * w, ty * w, tz * w
        txx, txy, txz = tx * x, ty * x, tz * x
        tyy, tyz, tzz = ty * y, tz * y, tz * z
        return np.array(
            [
                [1.0 - (tyy + tzz), txy - twz, txz + twy],
                [txy + twz, 1.0 - (txx + tzz), tyz - twx],
                [txz - twy, tyz + twx, 1.0 - (txx + tyy)],
            ]
        )