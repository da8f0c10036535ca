"""Conversion of WGS84 coordinates to ECEF and to a local ENU frame."""

from __future__ import annotations

import logging
import math

import numpy as np

from msfusion.quaternion import Quaternion

logger = logging.getLogger(__name__)

_DEG2RAD = math.pi / 180.0
_SEMI_MAJOR_AXIS = 6378137.0
_FIRST_ECCENTRICITY_SQ = 6.69437999014e-3

_reported_uninitialized = False


class GPSConversion:
    """Converts GPS fixes into a local east-north-up frame around a reference."""

    def __init__(self) -> None:
        self._ref_orientation = Quaternion.identity()
        self._ref_point = np.zeros(3)

    @property
    def reference_point(self) -> np.ndarray:
        """The ECEF coordinates of the reference point."""
        return self._ref_point.copy()

    @property
    def reference_orientation(self) -> Quaternion:
        """The rotation from ECEF into the local ENU frame."""
        return self._ref_orientation

    def init_reference(self, latitude: float, longitude: float, altitude: float) -> None:
        """Set the origin of the ENU frame to the given WGS84 position."""
        s_lat, c_lat = math.sin(latitude * _DEG2RAD), math.cos(latitude * _DEG2RAD)
        s_long, c_long = math.sin(longitude * _DEG2RAD), math.cos(longitude * _DEG2RAD)
        rotation = np.array(
            [
                [-s_long, c_long, 0.0],
                [-s_lat * c_long, -s_lat * s_long, c_lat],
                [c_lat * c_long, c_lat * s_long, s_lat],
            ]
        )
        self._ref_orientation = Quaternion.from_rotation_matrix(rotation)
        self._ref_point = self.wgs84_to_ecef(latitude, longitude, altitude)

    def wgs84_to_ecef(self, latitude: float, longitude: float, altitude: float) -> np.ndarray:
        """Return the ECEF coordinates (metres) of a WGS84 position in degrees."""
        s_lat, c_lat = math.sin(latitude * _DEG2RAD), math.cos(latitude * _DEG2RAD)
        s_long, c_long = math.sin(longitude * _DEG2RAD), math.cos(longitude * _DEG2RAD)
        n = _SEMI_MAJOR_AXIS / math.sqrt(1 - _FIRST_ECCENTRICITY_SQ * s_lat * s_lat)
        return np.array(
            [
                (n + altitude) * c_lat * c_long,
                (n + altitude) * c_lat * s_long,
                (n * (1 - _FIRST_ECCENTRICITY_SQ) + altitude) * s_lat,
            ]
        )

    def ecef_to_enu(self, ecef) -> np.ndarray:
        """Return the ENU coordinates of an ECEF point relative to the reference."""
        global _reported_uninitialized
        if np.linalg.norm(self._ref_point) == 0 and not _reported_uninitialized:
            _reported_uninitialized = True
            logger.error(
                "The gps reference is not initialized. Returning global coordinates."
                " This warning will only show once."
            )
        point = np.asarray(ecef, dtype=float).reshape(-1)
        if point.shape != (3,):
            raise ValueError("ecef must have 3 entries")
        return self._ref_orientation.rotate(point - self._ref_point)

    def wgs84_to_enu(self, latitude: float, longitude: float, altitude: float) -> np.ndarray:
        """Return the ENU coordinates of a WGS84 position."""
        return self.ecef_to_enu(self.wgs84_to_ecef(latitude, longitude, altitude))

    def adjust_reference(self, z_correction: float) -> None:
        """Shift the ECEF z coordinate of the reference point."""
        logger.warning("z-ref old: %s", self._ref_point[2])
        self._ref_point[2] += z_correction
        logger.warning("z-ref new: %s", self._ref_point[2])