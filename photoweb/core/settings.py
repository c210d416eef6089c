from __future__ import annotations

from dataclasses import dataclass

# Text decoding used for every photometry file read from disk.
DEFAULT_ENCODING = "utf-8"

# Decoding error policy; vendor files regularly carry stray latin-1 bytes.
DEFAULT_DECODE_ERRORS = "replace"

# Two neighbour spacings closer than this (radians) count as equal.
EPS_WIDTH = 1e-12


@dataclass(frozen=True)
class ReadOptions:
    encoding: str = DEFAULT_ENCODING
    errors: str = DEFAULT_DECODE_ERRORS
    # Follow TILT=<file> references next to the IES file being parsed.
    load_tilt_files: bool = True


DEFAULT_READ_OPTIONS = ReadOptions()
