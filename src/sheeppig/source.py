"""Span tracking for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """A range within a source file."""

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_col}"

    def to(self, other: Span) -> Span:
        """Return a span from the start of this span to the end of *other*."""
        return Span(
            self.file,
            self.start_line, self.start_col,
            other.end_line, other.end_col,
        )
