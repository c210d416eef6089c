from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Type, TypeVar, cast

from photoweb.core.errors import (
    InvalidAnglesError,
    InvalidCodeError,
    LengthMismatchError,
    MissingMarkerError,
    ParseError,
    PhotometryIOError,
)
from photoweb.core.settings import DEFAULT_READ_OPTIONS, ReadOptions
from photoweb.models.ies import IesDocument, IesStandard, LuminousOpeningUnits, PhotometricType
from photoweb.models.spans import LineSpan
from photoweb.models.tilt import Tilt
from photoweb.parser.cursor import LineCursor, TokenStream, parse_int
from photoweb.parser.tilt_file import load_tilt_file, parse_tilt_table

logger = logging.getLogger(__name__)

_KEYWORD_RE = re.compile(r"^\[([^\]]*)\]\s*(.*)$")

E = TypeVar("E", PhotometricType, LuminousOpeningUnits)


@dataclass
class _IesBuilder:
    """Mutable field accumulator; only `freeze()` hands out a document."""
    standard: IesStandard = IesStandard.IESNA_1986
    standard_line: Optional[str] = None
    keywords: Dict[str, str] = field(default_factory=dict)
    header_lines: List[str] = field(default_factory=list)
    header_line_positions: List[int] = field(default_factory=list)
    tilt: Tilt = field(default_factory=Tilt)
    scalars: Dict[str, object] = field(default_factory=dict)
    vertical_angles: List[float] = field(default_factory=list)
    horizontal_angles: List[float] = field(default_factory=list)
    candela_values: List[float] = field(default_factory=list)
    spans: List[LineSpan] = field(default_factory=list)

    def freeze(self) -> IesDocument:
        return IesDocument(
            standard=self.standard,
            standard_line=self.standard_line,
            keywords=dict(self.keywords),
            header_lines=tuple(self.header_lines),
            header_line_positions=tuple(self.header_line_positions),
            tilt=self.tilt,
            vertical_angles=tuple(self.vertical_angles),
            horizontal_angles=tuple(self.horizontal_angles),
            candela_values=tuple(self.candela_values),
            spans=tuple(sorted(self.spans, key=lambda s: s.start)),
            **self.scalars,  # type: ignore[arg-type]
        )


def _is_tilt_line(s: str) -> bool:
    return s.upper().startswith("TILT=")


def _parse_standard_line(cursor: LineCursor, b: _IesBuilder) -> None:
    head = cursor.peek()
    if head is None or head.startswith("[") or _is_tilt_line(head):
        return
    b.standard_line = cursor.read_text("standard")
    b.standard = IesStandard.from_line(b.standard_line)


def _parse_keywords(cursor: LineCursor, b: _IesBuilder) -> None:
    start = cursor.line_no
    last_key: Optional[str] = None
    while True:
        line_no = cursor.line_no
        s = cursor.peek()
        if s is None:
            raise MissingMarkerError("Missing TILT= line", line_no=line_no)
        if _is_tilt_line(s):
            break
        cursor.next_line("keywords")
        if not s:
            continue
        m = _KEYWORD_RE.match(s)
        if m is None:
            b.header_lines.append(s)
            b.header_line_positions.append(len(b.keywords))
            continue
        key, value = m.group(1).strip(), m.group(2).strip()
        if key.upper() == "MORE":
            if last_key is None:
                raise MissingMarkerError("[MORE] without a preceding keyword", line_no=line_no)
            key = last_key
        if key in b.keywords and b.keywords[key]:
            b.keywords[key] = f"{b.keywords[key]} {value}" if value else b.keywords[key]
        else:
            b.keywords[key] = value
        last_key = key
    if cursor.line_no > start:
        b.spans.append(LineSpan("keywords", start, cursor.line_no - start))


def _parse_tilt(
    cursor: LineCursor,
    b: _IesBuilder,
    source_path: Optional[Path],
    options: ReadOptions,
) -> None:
    line_no = cursor.line_no
    s = cursor.read_text("tilt")
    value = s.split("=", 1)[1].strip()
    mode = value.upper()
    if mode == "NONE":
        b.tilt = Tilt(mode="NONE")
        return
    if mode == "INCLUDE":
        b.tilt = Tilt(mode="INCLUDE", table=parse_tilt_table(cursor))
        return
    if not value:
        raise MissingMarkerError("TILT= line has no value", line_no=line_no)

    table = None
    if source_path is not None and options.load_tilt_files:
        resolved = source_path.parent / value
        try:
            table = load_tilt_file(resolved, options)
        except (PhotometryIOError, ParseError) as exc:
            # The reference stays on the document; the table is simply absent.
            logger.warning("Could not load TILT file %s referenced on line %d: %s", resolved, line_no, exc)
    b.tilt = Tilt(mode="FILE", table=table, file_reference=value)


def _take_code(stream: TokenStream, field_name: str, enum_cls: Type[E]) -> E:
    tok = stream.take(field_name)
    code = parse_int(tok.text, field_name, tok.line_no, tok.token_no)
    try:
        return enum_cls(code)
    except ValueError:
        allowed = ", ".join(str(e.value) for e in enum_cls)
        raise InvalidCodeError(
            f"Unsupported {field_name}={code} (expected one of {allowed})",
            line_no=tok.line_no,
            token_no=tok.token_no,
        ) from None


def _parse_photometric_header(stream: TokenStream, b: _IesBuilder) -> None:
    first = stream.peek()
    start = first.line_no if first is not None else None

    n_lamps = stream.take_int("number of lamps")
    lumens = stream.take_float("lumens per lamp")
    multiplier = stream.take_float("candela multiplier")
    n_v_tok = stream.take("number of vertical angles")
    n_v = parse_int(n_v_tok.text, "number of vertical angles", n_v_tok.line_no, n_v_tok.token_no)
    n_h_tok = stream.take("number of horizontal angles")
    n_h = parse_int(n_h_tok.text, "number of horizontal angles", n_h_tok.line_no, n_h_tok.token_no)
    ptype = _take_code(stream, "photometric type", PhotometricType)
    units = _take_code(stream, "luminous opening units", LuminousOpeningUnits)
    width = stream.take_float("luminous opening width")
    length = stream.take_float("luminous opening length")
    height = stream.take_float("luminous opening height")
    ballast = stream.take_float("ballast factor")
    reserved = stream.take_float("future use")
    watts = stream.take_float("input watts")

    for tok, n, name in ((n_v_tok, n_v, "vertical"), (n_h_tok, n_h, "horizontal")):
        if n <= 0:
            raise InvalidAnglesError(
                f"Number of {name} angles must be > 0, got {n}",
                line_no=tok.line_no,
                token_no=tok.token_no,
            )

    b.scalars = {
        "n_lamps": n_lamps,
        "lumens_per_lamp": lumens,
        "candela_multiplier": multiplier,
        "n_vertical_angles": n_v,
        "n_horizontal_angles": n_h,
        "photometric_type": ptype,
        "units": units,
        "width": width,
        "length": length,
        "height": height,
        "ballast_factor": ballast,
        "reserved": reserved,
        "input_watts": watts,
    }
    if start is not None:
        end = stream.peek()
        last = (end.line_no - 1) if end is not None else start
        b.spans.append(LineSpan("photometric header", start, max(last - start + 1, 1)))


def _is_strictly_increasing(a: List[float]) -> bool:
    return all(a[i] < a[i + 1] for i in range(len(a) - 1))


_HEMISPHERES = {(0.0, 90.0), (90.0, 180.0), (0.0, 180.0)}


def _check_vertical_angles(angles: List[float], ptype: PhotometricType, span: LineSpan) -> None:
    if not _is_strictly_increasing(angles):
        raise InvalidAnglesError("Vertical angles are not strictly increasing", line_no=span.start)
    first, last = angles[0], angles[-1]
    allowed = set(_HEMISPHERES)
    if ptype is not PhotometricType.TYPE_C:
        # Type A and B may also run from -90 to 90
        allowed.add((-90.0, 90.0))
    if (first, last) not in allowed:
        extra = " or -90..90" if ptype is not PhotometricType.TYPE_C else ""
        raise InvalidAnglesError(
            f"Vertical angles {first:g}..{last:g} do not cover a hemisphere or the whole domain "
            f"(expected 0..90, 90..180 or 0..180{extra})",
            line_no=span.start,
        )


def _check_horizontal_angles(angles: List[float], span: LineSpan) -> None:
    if not _is_strictly_increasing(angles):
        raise InvalidAnglesError("Horizontal angles are not strictly increasing", line_no=span.start)
    first, last = angles[0], angles[-1]
    if first != 0.0:
        raise InvalidAnglesError(
            f"Horizontal angle series must start at 0 degrees, got {first:g}",
            line_no=span.start,
        )
    if not (last in (0.0, 90.0) or 180.0 <= last <= 360.0):
        raise InvalidAnglesError(
            f"Last horizontal angle {last:g} does not define an allowed lateral symmetry "
            "(expected 0, 90 or 180..360)",
            line_no=span.start,
        )


def _parse_angles_and_candela(stream: TokenStream, b: _IesBuilder) -> None:
    n_v = int(b.scalars["n_vertical_angles"])  # type: ignore[call-overload]
    n_h = int(b.scalars["n_horizontal_angles"])  # type: ignore[call-overload]
    ptype = cast(PhotometricType, b.scalars["photometric_type"])

    v, v_span = stream.take_array("vertical angles", n_v)
    _check_vertical_angles(v, ptype, v_span)
    h, h_span = stream.take_array("horizontal angles", n_h)
    _check_horizontal_angles(h, h_span)

    expected = n_v * n_h
    candela, c_span = stream.take_rest("candela values")
    if len(candela) != expected:
        raise LengthMismatchError(
            f"candela values: expected {expected} ({n_h} x {n_v}), found {len(candela)}",
            line_no=c_span.start,
            expected=expected,
            found=len(candela),
        )

    b.vertical_angles = v
    b.horizontal_angles = h
    b.candela_values = candela
    b.spans.extend([v_span, h_span, c_span])


def parse_ies_text(
    text: str,
    source_path: str | Path | None = None,
    options: Optional[ReadOptions] = None,
) -> IesDocument:
    """
    Parse LM-63 text into an `IesDocument`.

    Raises the first `ParseError` found in file order. `source_path` is only
    used to stamp errors and to resolve TILT=<file> references.
    """
    opts = options or DEFAULT_READ_OPTIONS
    src = Path(source_path).expanduser() if source_path is not None else None
    try:
        if not text.strip():
            raise MissingMarkerError("Empty file: missing TILT= line")

        cursor = LineCursor.from_text(text)
        b = _IesBuilder()
        _parse_standard_line(cursor, b)
        _parse_keywords(cursor, b)
        _parse_tilt(cursor, b, src, opts)
        b.spans.extend(cursor.spans)

        first_data_line = cursor.line_no
        stream = TokenStream.from_lines(cursor.remaining_lines(), first_line_no=first_data_line)
        _parse_photometric_header(stream, b)
        _parse_angles_and_candela(stream, b)

        doc = b.freeze()
    except ParseError as e:
        if e.filename is None and src is not None:
            e.filename = str(src)
        raise

    logger.debug(
        "Parsed IES document (%s): %d vertical x %d horizontal angles, type %s",
        doc.standard.name,
        doc.n_vertical_angles,
        doc.n_horizontal_angles,
        doc.photometric_type.letter,
    )
    return doc


def parse_ies_file(path: str | Path, options: Optional[ReadOptions] = None) -> IesDocument:
    opts = options or DEFAULT_READ_OPTIONS
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding=opts.encoding, errors=opts.errors)
    except OSError as exc:
        raise PhotometryIOError(f"Cannot read IES file: {exc.strerror or exc}", path=str(p)) from exc
    return parse_ies_text(text, source_path=p, options=opts)
