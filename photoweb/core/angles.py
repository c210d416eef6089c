from __future__ import annotations

import math

TWO_PI = 2.0 * math.pi


def degrees_to_radians(deg: float) -> float:
    return float(deg) * (math.pi / 180.0)


def radians_to_degrees(rad: float) -> float:
    return float(rad) * (180.0 / math.pi)


def normalize_radians(rad: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    a = math.fmod(float(rad), TWO_PI)
    if a < 0.0:
        a += TWO_PI
    # fmod of values just below zero can round back up to 2*pi
    return 0.0 if a >= TWO_PI else a


def angular_distance(a: float, b: float) -> float:
    """
    Shortest angular separation between two directions, in radians.

    Symmetric in its arguments and aware of the 0/2*pi seam, so the distance
    between 350 and 10 degrees is 20 degrees, not 340.
    """
    d = normalize_radians(float(a) - float(b))
    return min(d, TWO_PI - d)
