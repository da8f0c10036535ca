"""Small matrix helpers for quaternion kinematics and numeric checks."""

from __future__ import annotations

import logging
import math

import numpy as np

from msfusion.quaternion import Quaternion

logger = logging.getLogger(__name__)


def _vector(values, size: int, name: str) -> np.ndarray:
    vec = np.asarray(values, dtype=float).reshape(-1)
    if vec.shape != (size,):
        raise ValueError(f"{name} must have {size} entries")
    return vec


def skew(vec) -> np.ndarray:
    """Return the cross-product skew-symmetric matrix of a 3-vector."""
    v = _vector(vec, 3, "vec")
    return np.array(
        [
            [0.0, -v[2], v[1]],
            [v[2], 0.0, -v[0]],
            [-v[1], v[0], 0.0],
        ]
    )


def omega_mat_jpl(vec) -> np.ndarray:
    """Return the 4x4 angular-rate matrix (JPL notation, x y z w order)."""
    v = _vector(vec, 3, "vec")
    return np.array(
        [
            [0.0, v[2], -v[1], v[0]],
            [-v[2], 0.0, v[0], v[1]],
            [v[1], -v[0], 0.0, v[2]],
            [-v[0], -v[1], -v[2], 0.0],
        ]
    )


def omega_mat_hamilton(vec) -> np.ndarray:
    """Return the 4x4 angular-rate matrix (Hamilton notation, x y z w order)."""
    v = _vector(vec, 3, "vec")
    return np.array(
        [
            [0.0, -v[2], v[1], v[0]],
            [v[2], 0.0, -v[0], v[1]],
            [-v[1], v[0], 0.0, v[2]],
            [-v[0], -v[1], -v[2], 0.0],
        ]
    )


def xi_mat(q_vec) -> np.ndarray:
    """Return the 4x3 error-quaternion matrix for coefficients x y z w."""
    q = _vector(q_vec, 4, "q_vec")
    head = q[:3]
    top = q[3] * np.eye(3) + skew(head)
    return np.vstack([top, -head])


def quaternion_from_small_angle(theta) -> Quaternion:
    """Return the quaternion for a 3-element small-angle rotation vector."""
    t = _vector(theta, 3, "theta")
    q_squared = float(t @ t) / 4.0
    if q_squared < 1:
        return Quaternion(math.sqrt(1 - q_squared), t[0] * 0.5, t[1] * 0.5, t[2] * 0.5)
    w = 1.0 / math.sqrt(1 + q_squared)
    f = w * 0.5
    return Quaternion(w, t[0] * f, t[1] * f, t[2] * f)


def check_for_numeric(matrix, info: str) -> bool:
    """Return False and log the first NaN or infinite entry, else True."""
    values = np.asarray(matrix, dtype=float)
    if values.ndim < 2:
        values = values.reshape(-1, 1)
    for (row, col), value in np.ndenumerate(values):
        if math.isnan(value):
            logger.error("=== ERROR ===  %s: NAN at index [%d,%d]", info, row, col)
            return False
        if math.isinf(value):
            logger.error("=== ERROR ===  %s: INF at index [%d,%d]", info, row, col)
            return False
    return True


def time_human(value: float) -> float:
    """Return the time modulo 10000 seconds, for readable log output."""
    return value - math.floor(value / 10000.0) * 10000.0