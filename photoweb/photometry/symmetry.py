from __future__ import annotations

import math
from typing import List, Sequence

from photoweb.core.angles import TWO_PI, degrees_to_radians
from photoweb.models.ies import IesDocument, PhotometricType
from photoweb.models.ldt import EulumdatDocument, EulumdatSymmetry
from photoweb.photometry.plane import Plane, PlaneOrientation

_HALF_PI = degrees_to_radians(90.0)
_PI = degrees_to_radians(180.0)
_THREE_HALF_PI = degrees_to_radians(270.0)


def mirror_planes(planes: Sequence[Plane], about: float, drop_wrapped: bool = False) -> List[Plane]:
    """
    Complete a half-sweep by reflection about `about` (radians).

    The last plane lies on the mirror boundary and is not reflected. The
    reflections follow the input planes in reverse order, so angles keep
    increasing. With `drop_wrapped` the reflection of the first plane is left
    out when it lands on 2*pi, the direction of the 0 plane.
    """
    out = list(planes)
    if len(out) < 2:
        return out
    reflected = [p.mirrored(about) for p in reversed(out[:-1])]
    if drop_wrapped and math.isclose(reflected[-1].angle, TWO_PI, abs_tol=1e-9):
        reflected.pop()
    return out + reflected


def _ies_orientation(ptype: PhotometricType) -> PlaneOrientation:
    if ptype is PhotometricType.TYPE_C:
        return PlaneOrientation.VERTICAL
    return PlaneOrientation.HORIZONTAL


def ies_stored_planes(doc: IesDocument) -> List[Plane]:
    """One plane per horizontal angle, candela multiplier applied."""
    table = doc.scaled_candela()
    orientation = _ies_orientation(doc.photometric_type)
    return [
        Plane.from_degrees(h, doc.vertical_angles, table[j], orientation=orientation)
        for j, h in enumerate(doc.horizontal_angles)
    ]


def expand_ies_planes(doc: IesDocument) -> List[Plane]:
    planes = ies_stored_planes(doc)
    if doc.photometric_type is not PhotometricType.TYPE_C or not planes:
        return planes

    h = doc.horizontal_angles
    if h[-1] == 0.0:
        return planes[:1]
    if h[-1] == 90.0:
        planes = mirror_planes(planes, _HALF_PI)
    if h[-1] in (90.0, 180.0):
        return mirror_planes(planes, _PI, drop_wrapped=True)
    if h[0] == 0.0 and h[-1] == 360.0 and len(planes) > 1:
        # 360 repeats the 0 plane
        return planes[:-1]
    return planes


def ldt_stored_planes(doc: EulumdatDocument) -> List[Plane]:
    """The C-planes the intensity table holds, conversion factor applied."""
    table = doc.scaled_intensities()
    return [
        Plane.from_degrees(c, doc.g_angles, table[i])
        for i, c in enumerate(doc.stored_c_angles())
    ]


def _expand_c90_c270(planes: List[Plane]) -> List[Plane]:
    # planes run 90..270; each half is reflected onto the quarter it faces
    n = len(planes)
    half = (n - 1) // 2
    front = [p.mirrored(_HALF_PI) for p in reversed(planes[1 : half + 1])]
    back = [p.mirrored(_THREE_HALF_PI) for p in reversed(planes[half + 1 : n - 1])]
    return front + planes + back


def expand_ldt_planes(doc: EulumdatDocument) -> List[Plane]:
    planes = ldt_stored_planes(doc)
    if not planes:
        return planes

    sym = doc.symmetry
    if sym is EulumdatSymmetry.VERTICAL_AXIS:
        return [planes[0].with_angle(0.0)]
    if sym is EulumdatSymmetry.C0_C180:
        return mirror_planes(planes, _PI, drop_wrapped=True)
    if sym is EulumdatSymmetry.C0_C180_C90_C270:
        return mirror_planes(mirror_planes(planes, _HALF_PI), _PI, drop_wrapped=True)
    if sym is EulumdatSymmetry.C90_C270:
        return _expand_c90_c270(planes)
    return planes
