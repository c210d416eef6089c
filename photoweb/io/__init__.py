"""
Text serialization of IES LM-63 and EULUMDAT documents.
"""

from photoweb.io.ies_export import ies_document_from_web, ies_to_text, write_ies
from photoweb.io.ldt_export import ldt_document_from_web, ldt_to_text, write_ldt
from photoweb.io.text import format_number

__all__ = [
    "format_number",
    "ies_document_from_web",
    "ies_to_text",
    "write_ies",
    "ldt_document_from_web",
    "ldt_to_text",
    "write_ldt",
]
