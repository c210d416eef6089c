from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import pytest

# (number of lamps, lamp type, flux, colour temperature, rendering group, wattage)
LampRow = Tuple[str, str, str, str, str, str]

DEFAULT_LAMP_SETS: Tuple[LampRow, ...] = (("1", "LED 20W", "2000", "3000", "1B", "22.5"),)


def _num(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)


def build_ldt_text(
    symmetry: int,
    c_angles: Sequence[float],
    g_angles: Sequence[float],
    intensities: Sequence[float],
    cplane_spacing: float = 10.0,
    gamma_spacing: float = 10.0,
    conversion_factor: float = 1.0,
    ltype: int = 1,
    lamp_sets: Optional[Sequence[LampRow]] = None,
) -> str:
    rows = DEFAULT_LAMP_SETS if lamp_sets is None else tuple(lamp_sets)
    lines: List[str] = [
        "ACME Lighting",
        str(ltype),
        str(symmetry),
        str(len(c_angles)),
        _num(cplane_spacing),
        str(len(g_angles)),
        _num(gamma_spacing),
        "R-2024-001",
        "Downlight 20W",
        "DL-20",
        "dl20.ldt",
        "2024-03-01 / lab",
        "200", "0", "80",
        "150", "0",
        "10", "10", "10", "10",
        "100",
        "85",
        _num(conversion_factor),
        "0",
        str(len(rows)),
    ]
    # six blocks of n lines, one field per block
    for field in range(6):
        lines += [row[field] for row in rows]
    lines += ["0.5"] * 10
    lines += [_num(c) for c in c_angles]
    lines += [_num(g) for g in g_angles]
    lines += [_num(v) for v in intensities]
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_ldt_text() -> Callable[..., str]:
    return build_ldt_text
