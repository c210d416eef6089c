from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineSpan:
    """A named run of lines: `start` is the 1-indexed first line."""
    name: str
    start: int
    length: int

    @property
    def stop(self) -> int:
        # 1-indexed, exclusive
        return self.start + self.length
