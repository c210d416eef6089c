from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from photoweb.core.settings import ReadOptions
from photoweb.io.ies_export import ies_document_from_web, write_ies
from photoweb.models.ies import IesDocument
from photoweb.parser.ies_parser import parse_ies_file, parse_ies_text
from photoweb.photometry.symmetry import expand_ies_planes
from photoweb.photometry.web import PhotometricWeb

logger = logging.getLogger(__name__)


def web_from_ies(doc: IesDocument) -> PhotometricWeb:
    return PhotometricWeb(tuple(expand_ies_planes(doc)))


def parse_ies_web(text: str, source_path: str | Path | None = None) -> PhotometricWeb:
    return web_from_ies(parse_ies_text(text, source_path=source_path))


class IesReader:
    def __init__(self, options: Optional[ReadOptions] = None) -> None:
        self.options = options

    def read(self, path: str | Path) -> PhotometricWeb:
        web = web_from_ies(parse_ies_file(path, options=self.options))
        logger.debug("Read %d planes from IES file %s", web.n_planes(), path)
        return web


class IesWriter:
    def write(self, web: PhotometricWeb, path: str | Path) -> None:
        write_ies(ies_document_from_web(web), path)
