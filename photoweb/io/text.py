from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

import numpy as np

from photoweb.core.errors import PhotometryIOError
from photoweb.core.settings import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

# Decimals kept when converting radians back to degrees for export.
DEGREE_DECIMALS = 9


def format_number(value: float) -> str:
    """Shortest text that parses back to `value`; integral values carry no decimal point."""
    v = float(value)
    if v.is_integer():
        return str(int(v))
    return repr(v)


def join_numbers(values: Iterable[float], sep: str = " ") -> str:
    return sep.join(format_number(v) for v in values)


def clean_degrees(radians: Sequence[float] | np.ndarray) -> List[float]:
    return [float(x) for x in np.round(np.degrees(np.asarray(radians, dtype=float)), DEGREE_DECIMALS)]


def write_lines(lines: Sequence[str], path: str | Path) -> Path:
    p = Path(path).expanduser()
    try:
        p.write_text("\n".join(lines) + "\n", encoding=DEFAULT_ENCODING)
    except OSError as exc:
        raise PhotometryIOError(f"Cannot write file: {exc.strerror or exc}", path=str(p)) from exc
    logger.debug("Wrote %d lines to %s", len(lines), p)
    return p
