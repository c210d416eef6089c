from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from photoweb.core.errors import LengthMismatchError, ParseError, PhotometryIOError
from photoweb.core.settings import DEFAULT_READ_OPTIONS, ReadOptions
from photoweb.models.spans import LineSpan
from photoweb.models.tilt import TiltTable
from photoweb.parser.cursor import LineCursor, parse_float, tokenize_line

logger = logging.getLogger(__name__)


def _read_tilt_array(cursor: LineCursor, name: str, count: int) -> List[float]:
    line_no = cursor.line_no
    toks = tokenize_line(cursor.next_line(name))
    if len(toks) != count:
        raise LengthMismatchError(
            f"{name}: expected {count} values, found {len(toks)}",
            line_no=line_no,
            expected=count,
            found=len(toks),
        )
    cursor.spans.append(LineSpan(name, line_no, 1))
    return [parse_float(t, name, line_no, j + 1) for j, t in enumerate(toks)]


def parse_tilt_table(cursor: LineCursor) -> TiltTable:
    """
    Read the four-line TILT sub-table: lamp-to-luminaire geometry, number of
    tilt angles, the angles, then one multiplying factor per angle.
    """
    geometry = cursor.read_int("tilt lamp-to-luminaire geometry")
    n = cursor.read_int("tilt angle count")
    angles = _read_tilt_array(cursor, "tilt angles", n)
    factors = _read_tilt_array(cursor, "tilt multiplying factors", n)
    return TiltTable(
        lamp_to_luminaire_geometry=geometry,
        angles_deg=tuple(angles),
        factors=tuple(factors),
    )


def load_tilt_file(path: str | Path, options: Optional[ReadOptions] = None) -> TiltTable:
    opts = options or DEFAULT_READ_OPTIONS
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding=opts.encoding, errors=opts.errors)
    except OSError as exc:
        raise PhotometryIOError(f"Cannot read tilt file: {exc.strerror or exc}", path=str(p)) from exc

    try:
        table = parse_tilt_table(LineCursor.from_text(text))
    except ParseError as e:
        if e.filename is None:
            e.filename = str(p)
        raise
    logger.debug("Loaded tilt table with %d angles from %s", table.n_angles, p)
    return table
