from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

import numpy as np

from photoweb.core.angles import normalize_radians
from photoweb.core.errors import InconsistentPlaneAnglesError, OperationError
from photoweb.io.text import clean_degrees, format_number, write_lines
from photoweb.models.ldt import (
    N_DIRECT_RATIOS,
    EulumdatDocument,
    EulumdatSymmetry,
    EulumdatType,
    LampSet,
)
from photoweb.photometry.web import PhotometricWeb


def _numbers(values: Sequence[float]) -> List[str]:
    return [format_number(v) for v in values]


def ldt_lines(doc: EulumdatDocument) -> List[str]:
    """One value per line, in the order the parser consumes them."""
    g = doc.geometry
    lines = [
        doc.header,
        str(doc.ltype.value),
        str(doc.symmetry.value),
        str(doc.n_cplanes),
        format_number(doc.cplane_spacing),
        str(doc.n_gamma),
        format_number(doc.gamma_spacing),
        doc.report_number,
        doc.luminaire_name,
        doc.luminaire_number,
        doc.filename,
        doc.date_user,
    ]
    lines += _numbers([
        g.length_mm,
        g.width_mm,
        g.height_mm,
        g.luminous_length_mm,
        g.luminous_width_mm,
        g.luminous_height_c0_mm,
        g.luminous_height_c90_mm,
        g.luminous_height_c180_mm,
        g.luminous_height_c270_mm,
        doc.downward_flux_fraction,
        doc.light_output_ratio,
        doc.conversion_factor,
        doc.tilt_deg,
    ])
    lines.append(str(doc.n_lamp_sets))

    sets = doc.lamp_sets
    lines += [str(ls.num_lamps) for ls in sets]
    lines += [ls.lamp_type for ls in sets]
    lines += [format_number(ls.total_flux) for ls in sets]
    lines += [ls.color_temperature for ls in sets]
    lines += [ls.color_rendering for ls in sets]
    lines += [format_number(ls.wattage) for ls in sets]

    lines += _numbers(doc.direct_ratios)
    lines += _numbers(doc.c_angles)
    lines += _numbers(doc.g_angles)
    lines += _numbers(doc.intensities)
    return lines


def ldt_to_text(doc: EulumdatDocument) -> str:
    return "\n".join(ldt_lines(doc)) + "\n"


def write_ldt(doc: EulumdatDocument, path: str | Path) -> Path:
    return write_lines(ldt_lines(doc), path)


def _uniform_spacing(angles_deg: Sequence[float]) -> float:
    if len(angles_deg) < 2:
        return 0.0
    steps = np.diff(np.asarray(angles_deg, dtype=float))
    if np.allclose(steps, steps[0]):
        return float(steps[0])
    return 0.0


def ldt_document_from_web(web: PhotometricWeb) -> EulumdatDocument:
    """
    EULUMDAT document for a regular web.

    A spherically symmetric web becomes a vertical-axis file, anything else a
    file without symmetry listing every plane. Intensities are written as
    absolute values against a nominal 1000 lm lamp set.
    """
    if web.n_planes() == 0:
        raise OperationError("Cannot export an empty photometric web")
    secondary = web.secondary_angles()
    if secondary is None:
        raise InconsistentPlaneAnglesError()

    primary = np.array([normalize_radians(a) for a in web.angles()])
    order = np.argsort(primary, kind="stable")
    table = web.intensity_matrix()[order]

    c_angles = clean_degrees(primary[order])
    g_angles = clean_degrees(secondary)
    if web.is_spherically_symmetric():
        ltype, symmetry = EulumdatType.POINT_SOURCE_VERTICAL_AXIS, EulumdatSymmetry.VERTICAL_AXIS
    else:
        ltype, symmetry = EulumdatType.POINT_SOURCE_NO_SYMMETRY, EulumdatSymmetry.NONE

    return EulumdatDocument(
        ltype=ltype,
        symmetry=symmetry,
        n_cplanes=len(c_angles),
        cplane_spacing=_uniform_spacing(c_angles),
        n_gamma=len(g_angles),
        gamma_spacing=_uniform_spacing(g_angles),
        conversion_factor=1.0,
        lamp_sets=(LampSet(1, "", 1000.0, "", "", 0.0),),
        direct_ratios=(0.0,) * N_DIRECT_RATIOS,
        c_angles=tuple(c_angles),
        g_angles=tuple(g_angles),
        intensities=tuple(float(x) for x in table.ravel()),
    )
