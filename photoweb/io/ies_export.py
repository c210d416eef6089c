from __future__ import annotations

from pathlib import Path
from typing import List

import numpy as np

from photoweb.core.angles import normalize_radians
from photoweb.core.errors import InconsistentPlaneAnglesError, OperationError
from photoweb.io.text import clean_degrees, join_numbers, write_lines
from photoweb.models.ies import IesDocument, IesStandard, LuminousOpeningUnits, PhotometricType
from photoweb.photometry.web import PhotometricWeb


def _keyword_block(doc: IesDocument) -> List[str]:
    """Keyword lines with free header lines back where they were read."""
    positions = list(doc.header_line_positions)
    if len(positions) != len(doc.header_lines):
        positions = [len(doc.keywords)] * len(doc.header_lines)
    free = sorted(zip(positions, range(len(positions))))

    out: List[str] = []
    j = 0
    for i, (key, value) in enumerate(doc.keywords.items()):
        while j < len(free) and free[j][0] <= i:
            out.append(doc.header_lines[free[j][1]])
            j += 1
        out.append(f"[{key}] {value}" if value else f"[{key}]")
    out.extend(doc.header_lines[k] for _, k in free[j:])
    return out


def ies_lines(doc: IesDocument) -> List[str]:
    lines: List[str] = []
    if doc.standard_line is not None:
        lines.append(doc.standard_line)
    elif doc.standard is not IesStandard.IESNA_1986:
        lines.append(doc.standard.tag)

    lines.extend(_keyword_block(doc))

    lines.append(doc.tilt.header_line())
    if doc.tilt.mode == "INCLUDE" and doc.tilt.table is not None:
        t = doc.tilt.table
        lines.append(str(t.lamp_to_luminaire_geometry))
        lines.append(str(t.n_angles))
        lines.append(join_numbers(t.angles_deg))
        lines.append(join_numbers(t.factors))

    lines.append(
        join_numbers([doc.n_lamps, doc.lumens_per_lamp, doc.candela_multiplier])
        + f" {doc.n_vertical_angles} {doc.n_horizontal_angles}"
        + f" {doc.photometric_type.value} {doc.units.value} "
        + join_numbers([doc.width, doc.length, doc.height])
    )
    lines.append(join_numbers([doc.ballast_factor, doc.reserved, doc.input_watts]))
    lines.append(join_numbers(doc.vertical_angles))
    lines.append(join_numbers(doc.horizontal_angles))
    for block in doc.candela_blocks():
        lines.append(join_numbers(block))
    return lines


def ies_to_text(doc: IesDocument) -> str:
    return "\n".join(ies_lines(doc)) + "\n"


def write_ies(doc: IesDocument, path: str | Path) -> Path:
    return write_lines(ies_lines(doc), path)


def ies_document_from_web(web: PhotometricWeb) -> IesDocument:
    """
    Type C document holding every plane of a regular web, absolute photometry.

    Planes are written in increasing primary-angle order.
    """
    if web.n_planes() == 0:
        raise OperationError("Cannot export an empty photometric web")
    secondary = web.secondary_angles()
    if secondary is None:
        raise InconsistentPlaneAnglesError()

    primary = np.array([normalize_radians(a) for a in web.angles()])
    order = np.argsort(primary, kind="stable")
    candela = web.intensity_matrix()[order]

    vertical = clean_degrees(secondary)
    horizontal = clean_degrees(primary[order])
    std = IesStandard.IESNA_2002
    return IesDocument(
        standard=std,
        standard_line=std.tag,
        n_vertical_angles=len(vertical),
        n_horizontal_angles=len(horizontal),
        photometric_type=PhotometricType.TYPE_C,
        units=LuminousOpeningUnits.METERS,
        vertical_angles=tuple(vertical),
        horizontal_angles=tuple(horizontal),
        candela_values=tuple(float(x) for x in candela.ravel()),
    )
