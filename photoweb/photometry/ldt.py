from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from photoweb.core.settings import ReadOptions
from photoweb.io.ldt_export import ldt_document_from_web, write_ldt
from photoweb.models.ldt import EulumdatDocument
from photoweb.parser.ldt_parser import parse_ldt_file, parse_ldt_text
from photoweb.photometry.symmetry import expand_ldt_planes
from photoweb.photometry.web import PhotometricWeb

logger = logging.getLogger(__name__)


def web_from_ldt(doc: EulumdatDocument) -> PhotometricWeb:
    return PhotometricWeb(tuple(expand_ldt_planes(doc)))


def parse_ldt_web(text: str, source_path: str | Path | None = None) -> PhotometricWeb:
    return web_from_ldt(parse_ldt_text(text, source_path=source_path))


class EulumdatReader:
    def __init__(self, options: Optional[ReadOptions] = None) -> None:
        self.options = options

    def read(self, path: str | Path) -> PhotometricWeb:
        web = web_from_ldt(parse_ldt_file(path, options=self.options))
        logger.debug("Read %d planes from EULUMDAT file %s", web.n_planes(), path)
        return web


class EulumdatWriter:
    def write(self, web: PhotometricWeb, path: str | Path) -> None:
        write_ldt(ldt_document_from_web(web), path)
