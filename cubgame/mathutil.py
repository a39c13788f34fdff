"""Angle and range helpers used by the ray caster."""

from __future__ import annotations

import math

TWO_PI = 2.0 * math.pi


def normalize_angle(angle: float) -> float:
    """Bring an angle that is at most one turn out of range back into [0, 2*pi]."""
    if angle > TWO_PI:
        return angle - TWO_PI
    if angle < 0.0:
        return angle + TWO_PI
    return angle


def map_angle(
    idx: int,
    projplane_width: float,
    face_angle: float,
    camera_width: int,
    projplane_dist: float,
) -> float:
    """Return the ray angle for camera column ``idx``."""
    span = camera_width - 1.0
    proj_x = ((idx * 2.0 - span) / span) * (projplane_width / 2.0)
    return normalize_angle(math.atan2(proj_x, projplane_dist) + face_angle)


def remap(n: int, in_min: int, in_max: int, out_min: int, out_max: int) -> float:
    """Map an integer from one range onto another with integer division."""
    num = (n - in_min) * (out_max - out_min)
    den = in_max - in_min
    quotient = abs(num) // abs(den)
    if (num < 0) != (den < 0):
        quotient = -quotient
    return float(quotient + out_min)


def remapf(n: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Linearly map a float from one range onto another."""
    return (n - in_min) * (out_max - out_min) / (in_max - in_min) + out_min