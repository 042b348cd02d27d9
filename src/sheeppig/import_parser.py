"""The ``using { ... }`` import block.

Each line of the block is one entry::

    using {
        io
        sin, cos as cosine from math.trig
        vec as v,
            mat from linalg
    }

Every name becomes one :class:`Import`. The alias defaults to the name;
an entry without ``from`` imports whole modules, so the source is the
name itself.
"""

from __future__ import annotations

from sheeppig.ast_nodes import Identifier, Import
from sheeppig.cursor import TokenCursor
from sheeppig.tokens import TokenKind


def parse_using_block(cursor: TokenCursor) -> list[Import]:
    """Parse the block after the ``using`` keyword."""
    cursor.expect(TokenKind.LBRACE, "'{' after 'using'")
    imports: list[Import] = []
    while True:
        cursor.skip_newlines()
        if cursor.at(TokenKind.RBRACE):
            cursor.advance()
            return imports
        imports.extend(_parse_entry(cursor))
        if cursor.at(TokenKind.NEWLINE):
            cursor.advance()
        elif not cursor.at(TokenKind.RBRACE):
            cursor.error("expected a newline or '}' after import entry")


def _parse_entry(cursor: TokenCursor) -> list[Import]:
    names: list[tuple[Identifier, Identifier]] = []
    while True:
        name = _identifier(cursor, "an imported name")
        alias = name
        if cursor.at(TokenKind.AS):
            cursor.advance()
            alias = _identifier(cursor, "an alias after 'as'")
        names.append((name, alias))
        if not cursor.at(TokenKind.COMMA):
            break
        cursor.advance()

    if not cursor.at(TokenKind.FROM):
        return [Import(name, alias, name) for name, alias in names]
    cursor.advance()
    source = _identifier(cursor, "a module after 'from'")
    return [Import(name, alias, source) for name, alias in names]


def _identifier(cursor: TokenCursor, expected: str) -> Identifier:
    return cursor.expect(TokenKind.IDENTIFIER, expected).value  # type: ignore[return-value]
