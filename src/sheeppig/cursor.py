"""Token cursor shared by every stage of the parser.

The parser threads exactly one cursor down its call chain. The only place
a second cursor is created is the statement parser, which cuts a single
statement's tokens out of the main stream and parses them on their own.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NoReturn

from sheeppig.errors import ErrorKind, ParseError, Suggestion
from sheeppig.source import Span
from sheeppig.tokens import Operator, Token, TokenKind


class TokenCursor:
    """A position in an immutable token sequence."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    # ── Token access ─────────────────────────────────────────────

    def current(self) -> Token | None:
        """The next unconsumed token, or None once the sequence is exhausted."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def peek(self, offset: int = 0) -> Token | None:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return None

    def at(self, kind: TokenKind) -> bool:
        tok = self.current()
        return tok is not None and tok.kind == kind

    def at_any(self, *kinds: TokenKind) -> bool:
        tok = self.current()
        return tok is not None and tok.kind in kinds

    def at_end(self) -> bool:
        """True when no tokens remain or the EOF sentinel is next."""
        tok = self.current()
        return tok is None or tok.kind == TokenKind.EOF

    def exhausted(self) -> bool:
        return self.pos >= len(self.tokens)

    def match_operator(self, operators: frozenset[Operator]) -> Operator | None:
        """Consume and return the next operator if it belongs to *operators*."""
        tok = self.current()
        if tok is None or tok.kind != TokenKind.OPERATOR or tok.value not in operators:
            return None
        self.pos += 1
        assert isinstance(tok.value, Operator)
        return tok.value

    def advance(self) -> Token:
        tok = self.current()
        if tok is None:
            self.error("expected more tokens")
        self.pos += 1
        return tok

    def expect(self, kind: TokenKind, expected: str) -> Token:
        if self.at(kind):
            return self.advance()
        self.error(f"expected {expected}")

    def skip_newlines(self) -> None:
        while self.at(TokenKind.NEWLINE):
            self.pos += 1

    # ── Errors ───────────────────────────────────────────────────

    def error(
        self,
        message: str,
        token: Token | None = None,
        *,
        suggestions: list[Suggestion] | None = None,
    ) -> NoReturn:
        """Raise a syntactic error naming *token* (default: the current token)."""
        if token is None:
            token = self.current()
        if token is None or token.kind == TokenKind.EOF:
            raise ParseError(
                ErrorKind.SYNTACTIC,
                f"{message}, found end of input",
                self._end_span() if token is None else token.span,
                token,
                at_end=True,
                suggestions=suggestions,
            )
        raise ParseError(
            ErrorKind.SYNTACTIC,
            f"{message}, found {token.describe()}",
            token.span,
            token,
            suggestions=suggestions,
        )

    def _end_span(self) -> Span | None:
        """Location just past the last token, if the tokens carry spans."""
        for tok in reversed(self.tokens):
            if tok.span is not None:
                s = tok.span
                return Span(s.file, s.end_line, s.end_col + 1, s.end_line, s.end_col + 1)
        return None
