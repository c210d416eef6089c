from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

import numpy as np

from photoweb.models.opening import LuminousOpening, classify_luminous_opening
from photoweb.models.tilt import Tilt
from photoweb.models.spans import LineSpan


LateralSymmetry = Literal["FULL", "QUADRANT", "BILATERAL", "NONE"]

# Lumens-per-lamp value that marks absolute photometry.
ABSOLUTE_PHOTOMETRY_LUMENS = -1.0


class IesStandard(Enum):
    IESNA_1986 = ""
    IESNA_1991 = "IESNA91"
    IESNA_1995 = "IESNA:LM-63-1995"
    IESNA_2002 = "IESNA:LM-63-2002"
    IESNA_2019 = "IESNA:LM-63-2019"

    @classmethod
    def from_line(cls, line: str) -> "IesStandard":
        """Unknown identifiers fall back to the oldest revision."""
        s = line.strip()
        for std in cls:
            if std.value and s == std.value:
                return std
        return cls.IESNA_1986

    @property
    def tag(self) -> str:
        return self.value


class PhotometricType(Enum):
    TYPE_C = 1
    TYPE_B = 2
    TYPE_A = 3

    @property
    def letter(self) -> str:
        return {1: "C", 2: "B", 3: "A"}[self.value]


class LuminousOpeningUnits(Enum):
    FEET = 1
    METERS = 2

    @property
    def to_meters(self) -> float:
        return 0.3048 if self is LuminousOpeningUnits.FEET else 1.0


@dataclass(frozen=True)
class IesDocument:
    """Every field of an LM-63 file, as written (candela values unscaled)."""
    standard: IesStandard = IesStandard.IESNA_1986
    standard_line: Optional[str] = None
    keywords: Dict[str, str] = field(default_factory=dict)
    header_lines: Tuple[str, ...] = ()
    # number of keyword entries that precede each header line
    header_line_positions: Tuple[int, ...] = ()
    tilt: Tilt = field(default_factory=Tilt)

    n_lamps: int = 1
    lumens_per_lamp: float = ABSOLUTE_PHOTOMETRY_LUMENS
    candela_multiplier: float = 1.0
    n_vertical_angles: int = 0
    n_horizontal_angles: int = 0
    photometric_type: PhotometricType = PhotometricType.TYPE_C
    units: LuminousOpeningUnits = LuminousOpeningUnits.METERS
    width: float = 0.0
    length: float = 0.0
    height: float = 0.0
    ballast_factor: float = 1.0
    reserved: float = 1.0
    input_watts: float = 0.0

    vertical_angles: Tuple[float, ...] = ()
    horizontal_angles: Tuple[float, ...] = ()
    candela_values: Tuple[float, ...] = ()

    spans: Tuple[LineSpan, ...] = ()

    @property
    def rated_lumens(self) -> Optional[float]:
        if self.lumens_per_lamp == ABSOLUTE_PHOTOMETRY_LUMENS:
            return None
        return self.lumens_per_lamp

    def total_lamp_lumens(self) -> Optional[float]:
        if self.rated_lumens is None:
            return None
        return self.n_lamps * self.rated_lumens

    def candela_blocks(self) -> List[List[float]]:
        # H blocks of V values, in horizontal-angle order
        v = self.n_vertical_angles
        return [list(self.candela_values[i * v : (i + 1) * v]) for i in range(self.n_horizontal_angles)]

    def scaled_candela(self) -> np.ndarray:
        arr = np.asarray(self.candela_values, dtype=float) * float(self.candela_multiplier)
        return arr.reshape(self.n_horizontal_angles, self.n_vertical_angles)

    def luminous_opening(self) -> LuminousOpening:
        return classify_luminous_opening(self.width, self.length, self.height)

    def lateral_symmetry(self) -> LateralSymmetry:
        """Symmetry implied by the last horizontal angle (Type C)."""
        last = self.horizontal_angles[-1] if self.horizontal_angles else 0.0
        if len(self.horizontal_angles) <= 1 or last == 0.0:
            return "FULL"
        if last == 90.0:
            return "QUADRANT"
        if last == 180.0:
            return "BILATERAL"
        return "NONE"

    def span(self, name: str) -> Optional[LineSpan]:
        for s in self.spans:
            if s.name == name:
                return s
        return None
