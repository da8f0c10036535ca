"""Geometry, buffering and consistency tools for multi-sensor state estimation."""

__version__ = "0.1.0"

__all__ = [
    "quaternion",
    "mathutils",
    "sorted_container",
    "gps_conversion",
    "distort_config",
    "similarity",
    "fuzzy_tracking",
    "relay",
]