"""Estimation of a similarity transform (rotation, translation, scale) from pose pairs."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from msfusion.quaternion import Quaternion

_PARAMETERS = 4


@dataclass(eq=False)
class Pose:
    """A position in metres and an orientation."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: Quaternion = field(default_factory=Quaternion.identity)

    def __post_init__(self) -> None:
        position = np.asarray(self.position, dtype=float).reshape(-1)
        if position.shape != (3,):
            raise ValueError("position must have 3 entries")
        self.position = position


@dataclass(eq=False)
class SimilarityResult:
    """The estimated transform with its scale and the condition number of the fit."""

    pose: Pose
    scale: float
    condition: float


class From6DoF:
    """Collects pairs of 6-DoF poses and estimates the transform between the two frames.

    For each pair ``(pose1, pose2)`` the model is
    ``q1^-1 * t1 = scale * q1^-1 * t2 - p`` and ``q = q1^-1 * q2``.
    """

    def __init__(self) -> None:
        self._measurements: list[tuple[Pose, Pose]] = []

    def __len__(self) -> int:
        return len(self._measurements)

    def add_measurement(self, pose1: Pose, pose2: Pose) -> None:
        """Add one pair of corresponding poses."""
        self._measurements.append((pose1, pose2))

    def compute(self, eps: float = 1e-6) -> SimilarityResult:
        """Estimate the transform; singular values below ``eps`` are ignored.

        Raises ``ValueError`` with fewer than two measurements.
        """
        count = len(self._measurements)
        if count < 2:
            raise ValueError("at least two pose pairs are needed")

        outer_sum = np.zeros((4, 4))
        a = np.zeros((count * 3, _PARAMETERS))
        b = np.zeros(count * 3)
        for row, (first, second) in enumerate(self._measurements):
            q1_inv = first.orientation.inverse()
            q = q1_inv * second.orientation
            coeffs = q.coeffs()
            outer_sum += np.outer(coeffs, coeffs)

            block = slice(row * 3, row * 3 + 3)
            a[block, :3] = -np.eye(3)
            a[block, 3] = q1_inv.rotate(second.position)
            b[block] = q1_inv.rotate(first.position)

        # Eigenvalues come in ascending order; the last vector is the mean.
        _, eigenvectors = np.linalg.eigh(outer_sum)
        q_mean = Quaternion.from_coeffs(eigenvectors[:, 3])

        a_hat = a.T @ a
        b_hat = a.T @ b
        u, singular, vt = np.linalg.svd(a_hat)
        inverted = np.array([0.0 if s < eps else 1.0 / s for s in singular])
        condition = float(singular[0] / singular[-1]) if singular[-1] != 0 else float("inf")
        x = vt.T @ np.diag(inverted) @ u.T @ b_hat

        pose = Pose(position=x[:3], orientation=q_mean)
        return SimilarityResult(pose=pose, scale=float(x[3]), condition=condition)