from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from photoweb.core.errors import LengthMismatchError, NumberFormatError
from photoweb.models.spans import LineSpan

T = TypeVar("T")


@dataclass(frozen=True)
class Token:
    text: str
    line_no: int   # 1-indexed
    token_no: int  # 1-indexed position on its line


_NUM_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_DELIMITERS_RE = re.compile(r"[\s,]+")


def parse_float(
    text: str,
    field: str,
    line_no: Optional[int],
    token_no: Optional[int] = None,
    decimal_comma: bool = False,
) -> float:
    s = text.strip()
    if decimal_comma:
        s = s.replace(",", ".")
    if not _NUM_RE.match(s):
        raise NumberFormatError(f"Invalid number for {field}: '{text.strip()}'", line_no=line_no, token_no=token_no)
    return float(s)


def parse_int(
    text: str,
    field: str,
    line_no: Optional[int],
    token_no: Optional[int] = None,
    decimal_comma: bool = False,
) -> int:
    v = parse_float(text, field, line_no, token_no, decimal_comma=decimal_comma)
    if abs(v - round(v)) > 1e-9:
        raise NumberFormatError(f"Expected integer for {field}, got '{text.strip()}'", line_no=line_no, token_no=token_no)
    return int(round(v))


def tokenize_line(line: str) -> List[str]:
    return [t for t in _DELIMITERS_RE.split(line.strip()) if t]


class TokenStream:
    """
    Flat stream of numeric tokens gathered from consecutive lines.

    Values are consumed by position, so a record may wrap onto following
    lines. Arrays read with `take_array` must still finish at a line end.
    """

    def __init__(self, tokens: Sequence[Token], last_line_no: int) -> None:
        self._tokens = list(tokens)
        self._idx = 0
        self._last_line_no = last_line_no

    @classmethod
    def from_lines(cls, lines: Sequence[str], first_line_no: int) -> "TokenStream":
        tokens: List[Token] = []
        for offset, line in enumerate(lines):
            for j, text in enumerate(tokenize_line(line)):
                tokens.append(Token(text=text, line_no=first_line_no + offset, token_no=j + 1))
        return cls(tokens, last_line_no=first_line_no + max(len(lines) - 1, 0))

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._idx

    def peek(self) -> Optional[Token]:
        if self._idx >= len(self._tokens):
            return None
        return self._tokens[self._idx]

    def _line_no_here(self) -> int:
        tok = self.peek()
        return tok.line_no if tok is not None else self._last_line_no

    def take(self, field: str) -> Token:
        tok = self.peek()
        if tok is None:
            raise LengthMismatchError(
                f"Unexpected end of data reading {field}",
                line_no=self._last_line_no,
            )
        self._idx += 1
        return tok

    def take_float(self, field: str) -> float:
        tok = self.take(field)
        return parse_float(tok.text, field, tok.line_no, tok.token_no)

    def take_int(self, field: str) -> int:
        tok = self.take(field)
        return parse_int(tok.text, field, tok.line_no, tok.token_no)

    def take_array(self, name: str, count: int) -> Tuple[List[float], LineSpan]:
        start = self._idx
        first_line = self._line_no_here()
        if count <= 0:
            return [], LineSpan(name, first_line, 0)

        end = start + count
        if end > len(self._tokens):
            found = len(self._tokens) - start
            raise LengthMismatchError(
                f"{name}: expected {count} values, found {found}",
                line_no=first_line,
                expected=count,
                found=found,
            )

        last_line = self._tokens[end - 1].line_no
        if end < len(self._tokens) and self._tokens[end].line_no == last_line:
            # The array would stop part-way through a line.
            if last_line == first_line:
                found = sum(1 for t in self._tokens[start:] if t.line_no == first_line)
            else:
                found = sum(1 for t in self._tokens[start:end] if t.line_no < last_line)
            raise LengthMismatchError(
                f"{name}: expected {count} values, found {found}",
                line_no=first_line,
                expected=count,
                found=found,
            )

        values = [parse_float(t.text, name, t.line_no, t.token_no) for t in self._tokens[start:end]]
        self._idx = end
        return values, LineSpan(name, first_line, last_line - first_line + 1)

    def take_rest(self, name: str) -> Tuple[List[float], LineSpan]:
        toks = self._tokens[self._idx :]
        first_line = self._line_no_here()
        values = [parse_float(t.text, name, t.line_no, t.token_no) for t in toks]
        self._idx = len(self._tokens)
        length = (toks[-1].line_no - first_line + 1) if toks else 0
        return values, LineSpan(name, first_line, length)


class LineCursor:
    """
    Sequential reader over trimmed lines.

    Blank lines are kept, so every line keeps its file line number. Sections
    read through the cursor are recorded as named spans in read order.
    """

    def __init__(self, lines: Sequence[str], decimal_comma: bool = False) -> None:
        self._lines = [ln.strip() for ln in lines]
        self._idx = 0
        self._decimal_comma = decimal_comma
        self.spans: List[LineSpan] = []

    @classmethod
    def from_text(cls, text: str, decimal_comma: bool = False) -> "LineCursor":
        return cls(text.splitlines(), decimal_comma=decimal_comma)

    @property
    def line_no(self) -> int:
        """1-indexed number of the next unread line."""
        return self._idx + 1

    @property
    def n_lines(self) -> int:
        return len(self._lines)

    def at_end(self) -> bool:
        return self._idx >= len(self._lines)

    def peek(self) -> Optional[str]:
        if self.at_end():
            return None
        return self._lines[self._idx]

    def next_line(self, field: str) -> str:
        if self.at_end():
            raise LengthMismatchError(f"Unexpected end of file reading {field}", line_no=self.line_no)
        s = self._lines[self._idx]
        self._idx += 1
        return s

    def remaining_lines(self) -> List[str]:
        out = self._lines[self._idx :]
        self._idx = len(self._lines)
        return out

    def read_text(self, field: str) -> str:
        line_no = self.line_no
        s = self.next_line(field)
        self.spans.append(LineSpan(field, line_no, 1))
        return s

    def read_float(self, field: str) -> float:
        line_no = self.line_no
        v = parse_float(self.next_line(field), field, line_no, decimal_comma=self._decimal_comma)
        self.spans.append(LineSpan(field, line_no, 1))
        return v

    def read_int(self, field: str) -> int:
        line_no = self.line_no
        v = parse_int(self.next_line(field), field, line_no, decimal_comma=self._decimal_comma)
        self.spans.append(LineSpan(field, line_no, 1))
        return v

    def read_count(self, field: str) -> int:
        """`read_int` for section sizes; negative values are rejected at their own line."""
        line_no = self.line_no
        v = self.read_int(field)
        if v < 0:
            raise NumberFormatError(f"{field} must not be negative, got {v}", line_no=line_no)
        return v

    def _section(self, name: str, count: int, convert: Callable[[str, int], T]) -> List[T]:
        start = self.line_no
        out: List[T] = []
        for i in range(count):
            line_no = self.line_no
            if self.at_end():
                raise LengthMismatchError(
                    f"Unexpected end of file reading {name}: expected {count} lines, found {i}",
                    line_no=line_no,
                    expected=count,
                    found=i,
                )
            out.append(convert(self.next_line(name), line_no))
        self.spans.append(LineSpan(name, start, count))
        return out

    def read_texts(self, name: str, count: int) -> List[str]:
        return self._section(name, count, lambda s, _line_no: s)

    def read_floats(self, name: str, count: int) -> List[float]:
        return self._section(
            name, count, lambda s, line_no: parse_float(s, name, line_no, decimal_comma=self._decimal_comma)
        )

    def read_ints(self, name: str, count: int) -> List[int]:
        return self._section(
            name, count, lambda s, line_no: parse_int(s, name, line_no, decimal_comma=self._decimal_comma)
        )
