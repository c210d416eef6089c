from __future__ import annotations

import logging
from pathlib import Path

import pytest

from photoweb.core.errors import LengthMismatchError, NumberFormatError, PhotometryIOError
from photoweb.core.settings import ReadOptions
from photoweb.parser.ies_parser import parse_ies_file, parse_ies_text
from photoweb.parser.tilt_file import load_tilt_file

IES_BODY = "1 1000 1 3 1 1 2 0 0 0\n1 1 20\n0 45 90\n0\n100 80 60\n"


def test_load_tilt_file(tmp_path: Path) -> None:
    p = tmp_path / "tilt.dat"
    p.write_text("2\n3\n0 30 60\n1.0 0.5 0.2\n", encoding="utf-8")
    table = load_tilt_file(p)
    assert table.lamp_to_luminaire_geometry == 2
    assert table.angles_deg == (0.0, 30.0, 60.0)
    assert table.factors == (1.0, 0.5, 0.2)


def test_load_tilt_file_count_mismatch_is_stamped(tmp_path: Path) -> None:
    p = tmp_path / "bad_tilt.dat"
    p.write_text("1\n3\n0 20 40\n1.0 0.8\n", encoding="utf-8")
    with pytest.raises(LengthMismatchError) as ei:
        load_tilt_file(p)
    assert ei.value.line_no == 4
    assert ei.value.filename == str(p)


def test_load_tilt_file_bad_number(tmp_path: Path) -> None:
    p = tmp_path / "bad_tilt.dat"
    p.write_text("1\n2\n0 x\n1.0 0.8\n", encoding="utf-8")
    with pytest.raises(NumberFormatError) as ei:
        load_tilt_file(p)
    assert (ei.value.line_no, ei.value.token_no) == (3, 2)


def test_load_tilt_file_missing(tmp_path: Path) -> None:
    with pytest.raises(PhotometryIOError):
        load_tilt_file(tmp_path / "missing.dat")


def test_ies_tilt_file_reference_is_loaded(tmp_path: Path) -> None:
    (tmp_path / "lamp.tlt").write_text("1\n2\n0 90\n1.0 0.7\n", encoding="utf-8")
    ies = tmp_path / "lum.ies"
    ies.write_text(f"IESNA:LM-63-2002\nTILT=lamp.tlt\n{IES_BODY}", encoding="utf-8")
    doc = parse_ies_file(ies)
    assert doc.tilt.mode == "FILE"
    assert doc.tilt.file_reference == "lamp.tlt"
    assert doc.tilt.table is not None
    assert doc.tilt.table.factors == (1.0, 0.7)


def test_ies_tilt_file_reference_missing_logs_warning(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    ies = tmp_path / "lum.ies"
    ies.write_text(f"IESNA:LM-63-2002\nTILT=absent.tlt\n{IES_BODY}", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="photoweb.parser.ies_parser"):
        doc = parse_ies_file(ies)
    assert doc.tilt.file_reference == "absent.tlt"
    assert doc.tilt.table is None
    assert "absent.tlt" in caplog.text


def test_ies_tilt_file_loading_can_be_disabled(tmp_path: Path) -> None:
    (tmp_path / "lamp.tlt").write_text("1\n2\n0 90\n1.0 0.7\n", encoding="utf-8")
    ies = tmp_path / "lum.ies"
    ies.write_text(f"IESNA:LM-63-2002\nTILT=lamp.tlt\n{IES_BODY}", encoding="utf-8")
    doc = parse_ies_file(ies, options=ReadOptions(load_tilt_files=False))
    assert doc.tilt.mode == "FILE"
    assert doc.tilt.table is None


def test_tilt_reference_in_text_without_path_is_kept() -> None:
    doc = parse_ies_text(f"IESNA:LM-63-2002\nTILT=lamp.tlt\n{IES_BODY}")
    assert doc.tilt.header_line() == "TILT=lamp.tlt"
    assert doc.tilt.table is None
