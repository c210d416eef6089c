from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional


class PhotometryError(Exception):
    kind: ClassVar[str] = "photometry"


class PhotometryIOError(PhotometryError):
    kind: ClassVar[str] = "io"

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


@dataclass(eq=False)
class ParseError(PhotometryError):
    message: str
    line_no: Optional[int] = None   # 1-indexed
    token_no: Optional[int] = None  # 1-indexed position on the line
    filename: Optional[str] = None

    kind: ClassVar[str] = "parse"

    def location(self) -> str:
        if self.line_no is None:
            return ""
        if self.token_no is None:
            return f"Line {self.line_no}"
        return f"Line {self.line_no}, token {self.token_no}"

    def __str__(self) -> str:
        prefix = f"{self.filename}: " if self.filename else ""
        loc = self.location()
        if not loc:
            return f"{prefix}{self.message}"
        return f"{prefix}{loc}: {self.message}"


@dataclass(eq=False)
class NumberFormatError(ParseError):
    kind: ClassVar[str] = "number-format"


@dataclass(eq=False)
class InvalidCodeError(ParseError):
    kind: ClassVar[str] = "invalid-code"


@dataclass(eq=False)
class LengthMismatchError(ParseError):
    expected: Optional[int] = None
    found: Optional[int] = None

    kind: ClassVar[str] = "length-mismatch"


@dataclass(eq=False)
class InvalidAnglesError(ParseError):
    kind: ClassVar[str] = "invalid-angles"


@dataclass(eq=False)
class MissingMarkerError(ParseError):
    kind: ClassVar[str] = "missing-marker"


class UnsupportedFormatError(PhotometryError):
    kind: ClassVar[str] = "unsupported-extension"

    def __init__(self, extension: str) -> None:
        self.extension = extension
        shown = extension if extension else "<none>"
        super().__init__(f"Unsupported photometry file extension: {shown} (expected .ies, .ldt or .eul)")


class OperationError(PhotometryError):
    kind: ClassVar[str] = "incompatible-webs"


class NoWebsError(OperationError):
    def __init__(self) -> None:
        super().__init__("No photometric webs given")


class PlaneCountMismatchError(OperationError):
    def __init__(self, expected: int, found: int, index: int) -> None:
        self.expected = expected
        self.found = found
        self.index = index
        super().__init__(f"Expected {expected} planes, found {found} planes in web at index {index}")


class InconsistentPlaneAnglesError(OperationError):
    def __init__(self, message: str = "Angles are inconsistent between photometric web planes") -> None:
        super().__init__(message)
