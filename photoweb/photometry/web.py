from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from photoweb.core.angles import angular_distance
from photoweb.core.errors import InconsistentPlaneAnglesError
from photoweb.core.settings import EPS_WIDTH
from photoweb.photometry.plane import Plane, PlaneWidth


def assign_plane_widths(planes: Sequence[Plane]) -> Tuple[Plane, ...]:
    """
    Give every plane the angular weight it stands for on the circle.

    A lone plane covers the full circle. Otherwise each plane reaches half way
    to its lower and upper neighbour, neighbours being taken circularly by
    index.
    """
    n = len(planes)
    if n == 0:
        return ()
    if n == 1:
        return (planes[0].with_width(PlaneWidth.full_circle()),)

    out = []
    for i, p in enumerate(planes):
        d_lo = angular_distance(p.angle, planes[(i - 1) % n].angle)
        d_hi = angular_distance(p.angle, planes[(i + 1) % n].angle)
        if abs(d_lo - d_hi) <= EPS_WIDTH:
            width = PlaneWidth.symmetric(0.5 * d_lo)
        else:
            width = PlaneWidth(lower=0.5 * d_lo, upper=0.5 * d_hi)
        out.append(p.with_width(width))
    return tuple(out)


@dataclass(frozen=True)
class PhotometricWeb:
    """
    Ordered planes covering the sphere around a luminaire.

    Widths of the given planes are ignored and re-derived from their
    neighbours on construction.
    """
    planes: Tuple[Plane, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "planes", assign_plane_widths(tuple(self.planes)))

    def n_planes(self) -> int:
        return len(self.planes)

    def is_spherically_symmetric(self) -> bool:
        return len(self.planes) == 1

    def angles(self) -> np.ndarray:
        return np.array([p.angle for p in self.planes], dtype=float)

    def angles_deg(self) -> np.ndarray:
        return np.degrees(self.angles())

    def plane_at(self, i: int) -> Plane:
        if not self.planes:
            raise IndexError("Photometric web has no planes")
        return self.planes[i % len(self.planes)]

    def neighbours(self, i: int) -> Tuple[Plane, Plane]:
        return self.plane_at(i - 1), self.plane_at(i + 1)

    def plane_width(self, i: int) -> PlaneWidth:
        return self.plane_at(i).width

    def total_intensity(self) -> float:
        return float(sum(p.width.total * p.integrate_intensity() for p in self.planes))

    def secondary_angles(self) -> Optional[np.ndarray]:
        """Secondary axis shared by every plane, or None when the planes disagree."""
        if not self.planes:
            return None
        first = self.planes[0]
        if all(first.same_secondary_angles(p) for p in self.planes[1:]):
            return first.angles
        return None

    def intensity_matrix(self) -> np.ndarray:
        # shape: [n_planes][n_samples]
        if not self.planes:
            return np.zeros((0, 0), dtype=float)
        if self.secondary_angles() is None:
            raise InconsistentPlaneAnglesError()
        return np.vstack([p.intensities for p in self.planes])

    def __len__(self) -> int:
        return len(self.planes)
