from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

TiltMode = Literal["NONE", "INCLUDE", "FILE"]


@dataclass(frozen=True)
class TiltTable:
    lamp_to_luminaire_geometry: int
    angles_deg: Tuple[float, ...]
    factors: Tuple[float, ...]

    @property
    def n_angles(self) -> int:
        return len(self.angles_deg)


@dataclass(frozen=True)
class Tilt:
    mode: TiltMode = "NONE"
    table: Optional[TiltTable] = None
    # Only set for mode == "FILE": the reference exactly as written after TILT=.
    file_reference: Optional[str] = None

    def header_line(self) -> str:
        if self.mode == "FILE":
            return f"TILT={self.file_reference or ''}"
        return f"TILT={self.mode}"
