"""
EULUMDAT (.ldt / .eul) parser.

Format structure (fixed line positions, one value per line):
- Line 1: Company identification / header
- Line 2: Type indicator (0-3)
- Line 3: Symmetry indicator (0-4)
- Line 4: Number of C-planes (Mc)
- Line 5: Distance between C-planes (Dc)
- Line 6: Number of luminous intensities per C-plane (Ng)
- Line 7: Distance between luminous intensities (Dg)
- Lines 8-12: Report number, luminaire name, luminaire number, file name, date/user
- Lines 13-21: Luminaire and luminous-area dimensions (mm)
- Line 22: Downward flux fraction (DFF) %
- Line 23: Light output ratio luminaire (LORL) %
- Line 24: Conversion factor for luminous intensities
- Line 25: Tilt of luminaire during measurement
- Line 26: Number of lamp sets (n)
- Lines 27 to 26+6n: six blocks of n lines (lamp count, lamp type, flux,
  colour temperature, colour rendering group, wattage)
- Next 10 lines: Direct ratios
- Next Mc lines: C-plane angles
- Next Ng lines: G angles
- Remaining lines: intensities, (Mc2 - Mc1 + 1) x Ng values in cd/klm
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Type, TypeVar

from photoweb.core.errors import (
    InvalidAnglesError,
    InvalidCodeError,
    LengthMismatchError,
    ParseError,
    PhotometryIOError,
)
from photoweb.core.settings import DEFAULT_READ_OPTIONS, ReadOptions
from photoweb.models.ldt import (
    N_DIRECT_RATIOS,
    EulumdatDocument,
    EulumdatSymmetry,
    EulumdatType,
    LampSet,
    LuminaireGeometry,
    stored_plane_range,
)
from photoweb.models.spans import LineSpan
from photoweb.parser.cursor import LineCursor, parse_float

logger = logging.getLogger(__name__)

E = TypeVar("E", EulumdatType, EulumdatSymmetry)


def _read_code(cursor: LineCursor, field: str, enum_cls: Type[E]) -> E:
    line_no = cursor.line_no
    code = cursor.read_int(field)
    try:
        return enum_cls(code)
    except ValueError:
        allowed = ", ".join(str(e.value) for e in enum_cls)
        raise InvalidCodeError(
            f"Invalid {field}: {code} (expected one of {allowed})",
            line_no=line_no,
        ) from None


def _read_geometry(cursor: LineCursor) -> LuminaireGeometry:
    return LuminaireGeometry(
        length_mm=cursor.read_float("luminaire length"),
        width_mm=cursor.read_float("luminaire width"),
        height_mm=cursor.read_float("luminaire height"),
        luminous_length_mm=cursor.read_float("luminous area length"),
        luminous_width_mm=cursor.read_float("luminous area width"),
        luminous_height_c0_mm=cursor.read_float("luminous area height C0"),
        luminous_height_c90_mm=cursor.read_float("luminous area height C90"),
        luminous_height_c180_mm=cursor.read_float("luminous area height C180"),
        luminous_height_c270_mm=cursor.read_float("luminous area height C270"),
    )


def _read_lamp_sets(cursor: LineCursor, n: int) -> List[LampSet]:
    counts = cursor.read_ints("number of lamps", n)
    types = cursor.read_texts("lamp types", n)
    fluxes = cursor.read_floats("total luminous flux", n)
    temps = cursor.read_texts("colour temperatures", n)
    rendering = cursor.read_texts("colour rendering groups", n)
    watts = cursor.read_floats("wattages", n)
    return [
        LampSet(
            num_lamps=counts[i],
            lamp_type=types[i],
            total_flux=fluxes[i],
            color_temperature=temps[i],
            color_rendering=rendering[i],
            wattage=watts[i],
        )
        for i in range(n)
    ]


def _read_intensities(cursor: LineCursor, expected: int) -> List[float]:
    start = cursor.line_no
    lines = cursor.remaining_lines()
    while lines and not lines[-1]:
        lines.pop()

    values = [
        parse_float(s, "luminous intensity", start + i, decimal_comma=True)
        for i, s in enumerate(lines[:expected])
    ]
    if len(lines) < expected:
        raise LengthMismatchError(
            f"intensities: expected {expected} values, found {len(lines)}",
            line_no=start,
            expected=expected,
            found=len(lines),
        )
    if len(lines) > expected:
        raise LengthMismatchError(
            f"Unexpected data after {expected} intensity values",
            line_no=start + expected,
            expected=expected,
            found=len(lines),
        )
    cursor.spans.append(LineSpan("intensities", start, expected))
    return values


def parse_ldt_text(
    text: str,
    source_path: str | Path | None = None,
    options: Optional[ReadOptions] = None,
) -> EulumdatDocument:
    """
    Parse EULUMDAT text into an `EulumdatDocument`.

    Numbers accept a decimal comma. The first error by line position aborts
    the parse.
    """
    src = Path(source_path).expanduser() if source_path is not None else None
    try:
        cursor = LineCursor.from_text(text, decimal_comma=True)

        header = cursor.read_text("header")
        ltype = _read_code(cursor, "type indicator", EulumdatType)
        symmetry = _read_code(cursor, "symmetry indicator", EulumdatSymmetry)
        n_cplanes = cursor.read_count("number of C-planes")
        cplane_spacing = cursor.read_float("C-plane spacing")
        n_gamma = cursor.read_count("number of G angles")
        gamma_spacing = cursor.read_float("G angle spacing")
        report_number = cursor.read_text("measurement report number")
        luminaire_name = cursor.read_text("luminaire name")
        luminaire_number = cursor.read_text("luminaire number")
        filename = cursor.read_text("file name")
        date_user = cursor.read_text("date/user")
        geometry = _read_geometry(cursor)
        dff = cursor.read_float("downward flux fraction")
        lorl = cursor.read_float("light output ratio")
        conversion_factor = cursor.read_float("conversion factor")
        tilt_deg = cursor.read_float("tilt")
        n_sets = cursor.read_count("number of lamp sets")

        lamp_sets = _read_lamp_sets(cursor, n_sets)
        direct_ratios = cursor.read_floats("direct ratios", N_DIRECT_RATIOS)
        c_angles = cursor.read_floats("C angles", n_cplanes)

        g_start = cursor.line_no
        g_angles = cursor.read_floats("G angles", n_gamma)
        for i in range(len(g_angles) - 1):
            if not g_angles[i] < g_angles[i + 1]:
                raise InvalidAnglesError(
                    f"G angles are not strictly increasing ({g_angles[i]:g} then {g_angles[i + 1]:g})",
                    line_no=g_start + i + 1,
                )

        mc1, mc2 = stored_plane_range(symmetry, n_cplanes)
        intensities = _read_intensities(cursor, (mc2 - mc1 + 1) * n_gamma)

        doc = EulumdatDocument(
            header=header,
            ltype=ltype,
            symmetry=symmetry,
            n_cplanes=n_cplanes,
            cplane_spacing=cplane_spacing,
            n_gamma=n_gamma,
            gamma_spacing=gamma_spacing,
            report_number=report_number,
            luminaire_name=luminaire_name,
            luminaire_number=luminaire_number,
            filename=filename,
            date_user=date_user,
            geometry=geometry,
            downward_flux_fraction=dff,
            light_output_ratio=lorl,
            conversion_factor=conversion_factor,
            tilt_deg=tilt_deg,
            lamp_sets=tuple(lamp_sets),
            direct_ratios=tuple(direct_ratios),
            c_angles=tuple(c_angles),
            g_angles=tuple(g_angles),
            intensities=tuple(intensities),
            spans=tuple(cursor.spans),
        )
    except ParseError as e:
        if e.filename is None and src is not None:
            e.filename = str(src)
        raise

    logger.debug(
        "Parsed EULUMDAT document: symmetry %s, %d C-planes (%d stored) x %d G angles",
        doc.symmetry.name,
        doc.n_cplanes,
        doc.n_stored_planes(),
        doc.n_gamma,
    )
    return doc


def parse_ldt_file(path: str | Path, options: Optional[ReadOptions] = None) -> EulumdatDocument:
    opts = options or DEFAULT_READ_OPTIONS
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding=opts.encoding, errors=opts.errors)
    except OSError as exc:
        raise PhotometryIOError(f"Cannot read EULUMDAT file: {exc.strerror or exc}", path=str(p)) from exc
    return parse_ldt_text(text, source_path=p, options=opts)
