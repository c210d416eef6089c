from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence

import numpy as np

from photoweb.core.angles import TWO_PI, degrees_to_radians, radians_to_degrees


class PlaneOrientation(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class IntensityUnits(Enum):
    CANDELA = "candela"


@dataclass(frozen=True)
class PlaneWidth:
    """Angular extent a plane stands for, below and above its primary angle (radians)."""
    lower: float = 0.0
    upper: float = 0.0

    @property
    def total(self) -> float:
        return self.lower + self.upper

    @property
    def is_symmetric(self) -> bool:
        return self.lower == self.upper

    @classmethod
    def symmetric(cls, half: float) -> "PlaneWidth":
        return cls(lower=float(half), upper=float(half))

    @classmethod
    def full_circle(cls) -> "PlaneWidth":
        return cls.symmetric(math.pi)

    def __post_init__(self) -> None:
        if self.total > TWO_PI + 1e-9:
            raise ValueError(f"Plane width {self.total} exceeds a full circle")


def _readonly(values: Sequence[float] | np.ndarray) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"Expected a 1-D array, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


def sample_spacings(angles: np.ndarray) -> np.ndarray:
    """
    Angular step attributed to each sample.

    Interior samples take the mean of their two gaps, edge samples the single
    adjacent gap. A lone sample has no extent.
    """
    n = angles.size
    if n < 2:
        return np.zeros(n, dtype=float)
    gaps = np.diff(angles)
    out = np.empty(n, dtype=float)
    out[0] = gaps[0]
    out[-1] = gaps[-1]
    out[1:-1] = 0.5 * (gaps[:-1] + gaps[1:])
    return out


@dataclass(frozen=True, eq=False)
class Plane:
    """
    One half-plane of measurements: intensities sampled along the secondary
    axis at a fixed primary angle.

    All angles are radians. `width` is meaningless until the plane belongs to
    a `PhotometricWeb`, which assigns it from the neighbouring planes.
    """
    angle: float
    angles: np.ndarray
    intensities: np.ndarray
    width: PlaneWidth = field(default_factory=PlaneWidth)
    orientation: PlaneOrientation = PlaneOrientation.VERTICAL
    units: IntensityUnits = IntensityUnits.CANDELA

    def __post_init__(self) -> None:
        angles = _readonly(self.angles)
        intensities = _readonly(self.intensities)
        if angles.shape != intensities.shape:
            raise ValueError(
                f"Plane has {angles.size} angles but {intensities.size} intensities"
            )
        if angles.size > 1 and not np.all(np.diff(angles) > 0.0):
            raise ValueError("Plane angles must be strictly increasing")
        object.__setattr__(self, "angle", float(self.angle))
        object.__setattr__(self, "angles", angles)
        object.__setattr__(self, "intensities", intensities)

    @classmethod
    def from_degrees(
        cls,
        angle_deg: float,
        angles_deg: Sequence[float] | np.ndarray,
        intensities: Sequence[float] | np.ndarray,
        orientation: PlaneOrientation = PlaneOrientation.VERTICAL,
        units: IntensityUnits = IntensityUnits.CANDELA,
    ) -> "Plane":
        return cls(
            angle=degrees_to_radians(angle_deg),
            angles=np.radians(np.asarray(angles_deg, dtype=float)),
            intensities=intensities,
            orientation=orientation,
            units=units,
        )

    @property
    def angle_deg(self) -> float:
        return radians_to_degrees(self.angle)

    @property
    def angles_deg(self) -> np.ndarray:
        return np.degrees(self.angles)

    @property
    def n_samples(self) -> int:
        return int(self.angles.size)

    def delta_angle(self, i: int) -> float:
        return float(sample_spacings(self.angles)[i])

    def integrate_intensity(self) -> float:
        """Sum of I * sin(theta) * delta over the secondary axis (unweighted by plane width)."""
        if self.n_samples == 0:
            return 0.0
        return float(np.sum(self.intensities * np.sin(self.angles) * sample_spacings(self.angles)))

    def with_angle(self, angle: float) -> "Plane":
        return replace(self, angle=angle)

    def with_width(self, width: PlaneWidth) -> "Plane":
        return replace(self, width=width)

    def with_intensities(self, intensities: Sequence[float] | np.ndarray) -> "Plane":
        return replace(self, intensities=intensities)

    def mirrored(self, about: float) -> "Plane":
        """Reflect the primary angle about `about` (radians); samples are shared."""
        return replace(self, angle=2.0 * about - self.angle, width=PlaneWidth())

    def same_secondary_angles(self, other: "Plane") -> bool:
        return self.angles.shape == other.angles.shape and bool(np.array_equal(self.angles, other.angles))

    def __repr__(self) -> str:
        return (
            f"Plane(angle_deg={self.angle_deg:g}, n_samples={self.n_samples}, "
            f"width={self.width.total:.6g}, orientation={self.orientation.value})"
        )
