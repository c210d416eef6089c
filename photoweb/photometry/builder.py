from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from photoweb.core.errors import UnsupportedFormatError
from photoweb.core.settings import ReadOptions
from photoweb.photometry.ies import IesReader, IesWriter
from photoweb.photometry.ldt import EulumdatReader, EulumdatWriter
from photoweb.photometry.web import PhotometricWeb

logger = logging.getLogger(__name__)

IES_EXTENSIONS = (".ies",)
EULUMDAT_EXTENSIONS = (".ldt", ".eul")


@runtime_checkable
class PhotometricWebReader(Protocol):
    def read(self, path: str | Path) -> PhotometricWeb: ...


@runtime_checkable
class PhotometricWebWriter(Protocol):
    def write(self, web: PhotometricWeb, path: str | Path) -> None: ...


def _extension(path: str | Path) -> str:
    return Path(path).suffix.lower()


def reader_for_path(path: str | Path, options: Optional[ReadOptions] = None) -> PhotometricWebReader:
    ext = _extension(path)
    if ext in IES_EXTENSIONS:
        return IesReader(options)
    if ext in EULUMDAT_EXTENSIONS:
        return EulumdatReader(options)
    raise UnsupportedFormatError(ext)


def writer_for_path(path: str | Path) -> PhotometricWebWriter:
    ext = _extension(path)
    if ext in IES_EXTENSIONS:
        return IesWriter()
    if ext in EULUMDAT_EXTENSIONS:
        return EulumdatWriter()
    raise UnsupportedFormatError(ext)


@dataclass(frozen=True)
class PhotometricWebBuilder:
    """Builds a web from a photometry file, picking the reader by extension."""
    path: Optional[Path] = None
    options: Optional[ReadOptions] = None

    @classmethod
    def from_file(cls, path: str | Path, options: Optional[ReadOptions] = None) -> "PhotometricWebBuilder":
        return cls(path=Path(path), options=options)

    def build(self) -> PhotometricWeb:
        if self.path is None:
            return PhotometricWeb()
        reader = reader_for_path(self.path, self.options)
        logger.debug("Reading %s with %s", self.path, type(reader).__name__)
        return reader.read(self.path)


def read_photometric_web(path: str | Path, options: Optional[ReadOptions] = None) -> PhotometricWeb:
    return PhotometricWebBuilder.from_file(path, options).build()


def write_photometric_web(web: PhotometricWeb, path: str | Path) -> None:
    writer = writer_for_path(path)
    logger.debug("Writing %d planes to %s with %s", web.n_planes(), path, type(writer).__name__)
    writer.write(web, path)
