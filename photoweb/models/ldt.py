from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from photoweb.models.spans import LineSpan

# Fixed header lines before the lamp-set section (lines 1-26).
N_HEADER_LINES = 26
# Parameters written per lamp set, each as its own block of n lines.
N_LAMP_PARAMS = 6
N_DIRECT_RATIOS = 10


class EulumdatType(Enum):
    POINT_SOURCE_NO_SYMMETRY = 0
    POINT_SOURCE_VERTICAL_AXIS = 1
    LINEAR = 2
    POINT_SOURCE_OTHER_SYMMETRY = 3


class EulumdatSymmetry(Enum):
    NONE = 0
    VERTICAL_AXIS = 1
    C0_C180 = 2
    C90_C270 = 3
    C0_C180_C90_C270 = 4

    @property
    def wedge_start_deg(self) -> Optional[float]:
        """First C-angle of the stored wedge, None when it is just the first plane."""
        if self is EulumdatSymmetry.VERTICAL_AXIS:
            return None
        if self is EulumdatSymmetry.C90_C270:
            return 90.0
        return 0.0


def stored_plane_range(symmetry: EulumdatSymmetry, n_cplanes: int) -> Tuple[int, int]:
    """1-based (Mc1, Mc2) bounds of the C-planes a file stores for `symmetry`."""
    if symmetry is EulumdatSymmetry.NONE:
        return 1, n_cplanes
    if symmetry is EulumdatSymmetry.VERTICAL_AXIS:
        return 1, 1
    if symmetry is EulumdatSymmetry.C0_C180:
        return 1, n_cplanes // 2 + 1
    if symmetry is EulumdatSymmetry.C90_C270:
        mc1 = 3 * (n_cplanes // 4) + 1
        return mc1, mc1 + n_cplanes // 2
    return 1, n_cplanes // 4 + 1


@dataclass(frozen=True)
class LampSet:
    num_lamps: int
    lamp_type: str
    total_flux: float  # lumens
    color_temperature: str
    color_rendering: str
    wattage: float     # including ballast


@dataclass(frozen=True)
class LuminaireGeometry:
    """Luminaire and luminous-area dimensions, in mm."""
    length_mm: float = 0.0
    width_mm: float = 0.0  # 0 for circular
    height_mm: float = 0.0
    luminous_length_mm: float = 0.0
    luminous_width_mm: float = 0.0  # 0 for circular
    luminous_height_c0_mm: float = 0.0
    luminous_height_c90_mm: float = 0.0
    luminous_height_c180_mm: float = 0.0
    luminous_height_c270_mm: float = 0.0

    @property
    def is_circular(self) -> bool:
        return self.width_mm == 0


@dataclass(frozen=True)
class EulumdatDocument:
    header: str = ""
    ltype: EulumdatType = EulumdatType.POINT_SOURCE_VERTICAL_AXIS
    symmetry: EulumdatSymmetry = EulumdatSymmetry.NONE
    n_cplanes: int = 0            # Mc
    cplane_spacing: float = 0.0   # Dc, degrees
    n_gamma: int = 0              # Ng
    gamma_spacing: float = 0.0    # Dg, degrees
    report_number: str = ""
    luminaire_name: str = ""
    luminaire_number: str = ""
    filename: str = ""
    date_user: str = ""
    geometry: LuminaireGeometry = LuminaireGeometry()
    downward_flux_fraction: float = 0.0   # percent
    light_output_ratio: float = 0.0       # percent
    conversion_factor: float = 1.0
    tilt_deg: float = 0.0
    lamp_sets: Tuple[LampSet, ...] = ()
    direct_ratios: Tuple[float, ...] = ()
    c_angles: Tuple[float, ...] = ()
    g_angles: Tuple[float, ...] = ()
    intensities: Tuple[float, ...] = ()  # cd/klm, (Mc2 - Mc1 + 1) blocks of Ng

    spans: Tuple[LineSpan, ...] = ()

    @property
    def n_lamp_sets(self) -> int:
        return len(self.lamp_sets)

    def mc1(self) -> int:
        return stored_plane_range(self.symmetry, self.n_cplanes)[0]

    def mc2(self) -> int:
        return stored_plane_range(self.symmetry, self.n_cplanes)[1]

    def expected_intensity_count(self) -> int:
        mc1, mc2 = stored_plane_range(self.symmetry, self.n_cplanes)
        return (mc2 - mc1 + 1) * self.n_gamma

    def expected_line_count(self) -> int:
        return (
            N_HEADER_LINES
            + N_LAMP_PARAMS * self.n_lamp_sets
            + N_DIRECT_RATIOS
            + self.n_cplanes
            + self.n_gamma
            + self.expected_intensity_count()
        )

    def n_stored_planes(self) -> int:
        if self.n_gamma <= 0:
            return 0
        return len(self.intensities) // self.n_gamma

    def stored_c_angles(self) -> List[float]:
        """C-angles of the planes the intensity table actually holds."""
        n = self.n_stored_planes()
        start_deg = self.symmetry.wedge_start_deg
        start = 0
        if start_deg is not None and start_deg in self.c_angles:
            start = self.c_angles.index(start_deg)
        return list(self.c_angles[start : start + n])

    def intensity_blocks(self) -> List[List[float]]:
        g = self.n_gamma
        return [list(self.intensities[i * g : (i + 1) * g]) for i in range(self.n_stored_planes())]

    def scaled_intensities(self) -> np.ndarray:
        arr = np.asarray(self.intensities[: self.n_stored_planes() * self.n_gamma], dtype=float)
        return arr.reshape(self.n_stored_planes(), self.n_gamma) * float(self.conversion_factor)

    def total_lamp_flux(self) -> float:
        return float(sum(ls.total_flux for ls in self.lamp_sets))

    def span(self, name: str) -> Optional[LineSpan]:
        for s in self.spans:
            if s.name == name:
                return s
        return None
