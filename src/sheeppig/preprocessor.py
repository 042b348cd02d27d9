"""Token stream normalization between the lexer and the parser.

A single forward pass that
  * collapses consecutive NEWLINE tokens,
  * drops newlines that directly follow an opening bracket or a comma,
  * fuses ``a.b.c`` chains into one compound IDENTIFIER token.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NoReturn

from sheeppig.ast_nodes import CompoundIdentifier, SimpleIdentifier
from sheeppig.errors import ErrorKind, ParseError
from sheeppig.tokens import NEWLINE_ELIDED_AFTER, Token, TokenKind

_NEWLINE_ABSORBED_BY = NEWLINE_ELIDED_AFTER | {TokenKind.NEWLINE}


def preprocess(tokens: Sequence[Token]) -> list[Token]:
    """Return the normalized token list; running it twice changes nothing."""
    output: list[Token] = []
    pos = 0
    while pos < len(tokens):
        token = tokens[pos]
        pos += 1

        if token.kind == TokenKind.NEWLINE:
            if output and output[-1].kind in _NEWLINE_ABSORBED_BY:
                continue
        elif token.kind == TokenKind.IDENTIFIER and _at(tokens, pos, TokenKind.DOT):
            token, pos = _fuse_compound_identifier(token, tokens, pos)

        output.append(token)
    return output


def _at(tokens: Sequence[Token], pos: int, kind: TokenKind) -> bool:
    return pos < len(tokens) and tokens[pos].kind == kind


def _segments(token: Token) -> list[str]:
    ident = token.value
    if isinstance(ident, CompoundIdentifier):
        return list(ident.parts)
    assert isinstance(ident, SimpleIdentifier)
    return [ident.name]


def _fuse_compound_identifier(
    first: Token, tokens: Sequence[Token], pos: int,
) -> tuple[Token, int]:
    """Consume ``(DOT IDENTIFIER)+`` after *first*; return the fused token."""
    parts = _segments(first)
    last = first
    while _at(tokens, pos, TokenKind.DOT):
        dot = tokens[pos]
        pos += 1
        if not _at(tokens, pos, TokenKind.IDENTIFIER):
            found = tokens[pos] if pos < len(tokens) else None
            _dot_error(dot, found)
        last = tokens[pos]
        parts.extend(_segments(last))
        pos += 1

    span = None
    if first.span is not None and last.span is not None:
        span = first.span.to(last.span)
    return Token(TokenKind.IDENTIFIER, CompoundIdentifier(tuple(parts)), span), pos


def _dot_error(dot: Token, found: Token | None) -> NoReturn:
    if found is None or found.kind == TokenKind.EOF:
        raise ParseError(
            ErrorKind.SYNTACTIC,
            "expected identifier after '.', found end of input",
            dot.span, found, at_end=True,
        )
    raise ParseError(
        ErrorKind.SYNTACTIC,
        f"expected identifier after '.', found {found.describe()}",
        found.span if found.span is not None else dot.span,
        found,
    )
