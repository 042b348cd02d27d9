"""Rust-style colored diagnostic rendering and front-end errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sheeppig.source import Span
    from sheeppig.tokens import Token


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


class ErrorKind(Enum):
    LEXICAL = "lexical"
    SYNTACTIC = "syntactic"


_ERROR_CODES = {
    ErrorKind.LEXICAL: "E100",
    ErrorKind.SYNTACTIC: "E200",
}

# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points to a specific source location."""

    span: Span
    message: str
    style: str = "primary"  # "primary" or "secondary"


@dataclass(frozen=True)
class Suggestion:
    """A suggested fix."""

    message: str
    replacement: str


@dataclass
class Diagnostic:
    """A single diagnostic message with optional labels and suggestions."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format with colors.

    Source lines are read from disk on first use; text that never lived in a
    file (REPL lines, stdin) must be handed over with :meth:`register_source`.
    """

    def __init__(self, *, color: bool = True) -> None:
        self.color = color
        self._sources: dict[str, list[str]] = {}

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def register_source(self, filename: str, source: str) -> None:
        self._sources[filename] = source.splitlines()

    def _source_lines(self, filename: str) -> list[str]:
        if filename not in self._sources:
            path = Path(filename)
            try:
                text = path.read_text() if path.is_file() else ""
            except (OSError, UnicodeDecodeError):
                text = ""
            self._sources[filename] = text.splitlines()
        return self._sources[filename]

    def render(self, diag: Diagnostic) -> str:
        color = _COLORS[diag.severity]
        lines = [
            f"{self._c(color)}{diag.severity.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        ]
        for label in diag.labels:
            lines.extend(self._render_label(label, color))
        gutter = f"  {self._c(_BLUE)}={self._c(_RESET)}"
        lines.extend(f"{gutter} note: {note}" for note in diag.notes)
        lines.extend(
            f"{gutter} help: {s.message}: {s.replacement}" for s in diag.suggestions
        )
        return "\n".join(lines)

    def _render_label(self, label: DiagnosticLabel, color: str) -> list[str]:
        span = label.span
        bar = f"  {self._c(_BLUE)}   |{self._c(_RESET)}"
        out = [f"  {self._c(_BLUE)}-->{self._c(_RESET)} {span}", bar]

        source = self._source_lines(span.file)
        if not 1 <= span.start_line <= len(source):
            if label.message:
                out.append(f"{bar} {self._c(color)}{label.message}{self._c(_RESET)}")
            return out

        text = source[span.start_line - 1]
        out.append(f"  {self._c(_BLUE)}{span.start_line:>4} |{self._c(_RESET)} {text}")

        # A span running onto later lines is underlined to the end of its first line
        last_col = span.end_col if span.end_line == span.start_line else len(text)
        width = max(1, last_col - span.start_col + 1)
        marker = "^" * width if label.style == "primary" else "-" * width
        if label.message:
            marker = f"{marker} {label.message}"
        padding = " " * (span.start_col - 1)
        out.append(f"{bar} {padding}{self._c(color)}{marker}{self._c(_RESET)}")
        return out


class CompileError(Exception):
    """Batch compilation error carrying multiple diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")


class ParseError(CompileError):
    """The first lexical or syntactic error found in a module.

    ``token`` is the offending token, or ``None`` when the input ran out
    before the construct was complete; ``at_end`` is set in both
    end-of-input cases (missing token or the end-of-module sentinel).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        span: Span | None = None,
        token: Token | None = None,
        *,
        at_end: bool = False,
        suggestions: list[Suggestion] | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.span = span
        self.token = token
        self.at_end = at_end
        label = "input ends here" if at_end else ""
        labels = [DiagnosticLabel(span=span, message=label)] if span is not None else []
        diag = Diagnostic(
            severity=Severity.ERROR,
            code=_ERROR_CODES[kind],
            message=message,
            labels=labels,
            suggestions=suggestions or [],
        )
        super().__init__([diag])

    def __str__(self) -> str:
        if self.span is None:
            return self.message
        return f"{self.span}: {self.message}"
