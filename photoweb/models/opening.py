from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LuminousShape(Enum):
    """Luminous opening shapes of LM-63, keyed off the sign of each dimension."""
    POINT = "point"
    RECTANGULAR = "rectangular"
    RECTANGULAR_LUMINOUS_SIDES = "rectangular_luminous_sides"
    CIRCULAR = "circular"
    ELLIPSE = "ellipse"
    VERTICAL_CYLINDER = "vertical_cylinder"
    VERTICAL_ELLIPSOIDAL_CYLINDER = "vertical_ellipsoidal_cylinder"
    SPHERE = "sphere"
    ELLIPSOIDAL_SPHEROID = "ellipsoidal_spheroid"
    HORIZONTAL_CYLINDER_ALONG = "horizontal_cylinder_along"
    HORIZONTAL_ELLIPSOIDAL_CYLINDER_ALONG = "horizontal_ellipsoidal_cylinder_along"
    HORIZONTAL_CYLINDER_PERPENDICULAR = "horizontal_cylinder_perpendicular"
    HORIZONTAL_ELLIPSOIDAL_CYLINDER_PERPENDICULAR = "horizontal_ellipsoidal_cylinder_perpendicular"
    VERTICAL_CIRCLE = "vertical_circle"
    VERTICAL_ELLIPSE = "vertical_ellipse"


@dataclass(frozen=True)
class LuminousOpening:
    shape: LuminousShape
    width: Optional[float] = None
    length: Optional[float] = None
    height: Optional[float] = None
    diameter: Optional[float] = None


def classify_luminous_opening(width: float, length: float, height: float) -> LuminousOpening:
    """
    Interpret the signed opening dimensions of an IES file.

    A negative dimension marks a rounded extent; the returned dimensions are
    always positive. "Along"/"perpendicular" refer to the photometric
    horizontal.
    """
    w, ln, h = float(width), float(length), float(height)
    S = LuminousShape

    if w == 0.0 and ln == 0.0 and h == 0.0:
        return LuminousOpening(S.POINT)

    if w >= 0.0:
        if ln < 0.0:
            if ln == h:
                return LuminousOpening(S.HORIZONTAL_CYLINDER_PERPENDICULAR, width=w, diameter=-ln)
            return LuminousOpening(S.HORIZONTAL_ELLIPSOIDAL_CYLINDER_PERPENDICULAR, width=w, length=-ln, height=-h)
        if h == 0.0:
            return LuminousOpening(S.RECTANGULAR, width=w, length=ln)
        return LuminousOpening(S.RECTANGULAR_LUMINOUS_SIDES, width=w, length=ln, height=h)

    # w < 0
    if ln == 0.0:
        if w == h:
            return LuminousOpening(S.VERTICAL_CIRCLE, diameter=-w)
        return LuminousOpening(S.VERTICAL_ELLIPSE, width=-w, height=-h)

    if ln > 0.0:
        if w == h:
            return LuminousOpening(S.HORIZONTAL_CYLINDER_ALONG, diameter=-w, length=ln)
        return LuminousOpening(S.HORIZONTAL_ELLIPSOIDAL_CYLINDER_ALONG, width=-w, length=ln, height=-h)

    # w < 0 and ln < 0
    if h == 0.0:
        if w == ln:
            return LuminousOpening(S.CIRCULAR, diameter=-w)
        return LuminousOpening(S.ELLIPSE, width=-w, length=-ln)
    if h < 0.0:
        if w == ln == h:
            return LuminousOpening(S.SPHERE, diameter=-w)
        return LuminousOpening(S.ELLIPSOIDAL_SPHEROID, width=-w, length=-ln, height=-h)
    if w == ln:
        return LuminousOpening(S.VERTICAL_CYLINDER, diameter=-w, height=h)
    return LuminousOpening(S.VERTICAL_ELLIPSOIDAL_CYLINDER, width=-w, length=-ln, height=h)
