"""Detection of fuzzy tracking from jumps of a non-drifting orientation state."""

from __future__ import annotations

import logging
import math

import numpy as np

from msfusion.quaternion import Quaternion

logger = logging.getLogger(__name__)

BUFFER_SIZE = 30
"""Number of past orientations whose median serves as reference."""


class FuzzyTracker:
    """Watches an orientation that should not drift over time.

    The first :data:`BUFFER_SIZE` orientations fill a buffer. Afterwards each
    orientation is compared with the per-coefficient median of the buffer; a
    small-angle error above the threshold marks the tracking as fuzzy and the
    orientation is not buffered. The caller is then expected to restore its
    non-propagated states.
    """

    def __init__(self) -> None:
        self._timer = 0
        self._buffer = np.zeros((BUFFER_SIZE, 4))
        self.reset()

    def reset(self) -> None:
        """Forget all buffered orientations."""
        self._timer = 1
        self._buffer = np.zeros((BUFFER_SIZE, 4))

    def _median(self) -> Quaternion:
        med = np.median(self._buffer, axis=0)
        return Quaternion(med[3], med[0], med[1], med[2])

    def check(self, orientation: Quaternion, fuzzy_threshold: float = 0.1) -> bool:
        """Return True if ``orientation`` departs too far from the recent median."""
        if self._timer > BUFFER_SIZE:
            error = orientation.conjugate() * self._median()
            largest = float(np.max(np.abs(error.vec())))
            w = math.fabs(error.w)
            if w == 0.0:
                deviation = math.inf if largest > 0 else math.nan
            else:
                deviation = largest / w * 2
            if deviation > fuzzy_threshold:
                logger.warning(
                    "Fuzzy tracking triggered: %s limit: %s", deviation, fuzzy_threshold
                )
                return True
            self._buffer[self._timer - BUFFER_SIZE - 1] = orientation.coeffs()
            self._timer = self._timer % BUFFER_SIZE + BUFFER_SIZE + 1
            return False
        self._buffer[self._timer - 1] = orientation.coeffs()
        self._timer += 1
        return False