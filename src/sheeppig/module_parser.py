"""Module-level parsing and ordering rules.

A module is, in order: at most one ``using`` block, any number of ``fun``
definitions, then top-level statements.
"""

from __future__ import annotations

from sheeppig.ast_nodes import (
    Function,
    Import,
    Module,
    SimpleIdentifier,
    Statement,
    StatementBlock,
)
from sheeppig.cursor import TokenCursor
from sheeppig.function_parser import parse_function
from sheeppig.import_parser import parse_using_block
from sheeppig.statement_parser import parse_block_item
from sheeppig.tokens import TokenKind


def parse_module(cursor: TokenCursor, name: str = "main") -> Module:
    """Parse tokens up to and including the EOF sentinel into a Module."""
    imports: list[Import] = []
    functions: list[Function] = []
    statements: list[Statement] = []
    has_import = False

    while True:
        tok = cursor.current()
        if tok is None:
            cursor.error("expected end of module")

        match tok.kind:
            case TokenKind.NEWLINE:
                cursor.advance()
            case TokenKind.EOF:
                cursor.advance()
                break
            case TokenKind.USING:
                if has_import or functions or statements:
                    cursor.error(
                        "only one using block is allowed and it must be at the top of the module",
                    )
                cursor.advance()
                imports.extend(parse_using_block(cursor))
                has_import = True
            case TokenKind.FUN:
                if statements:
                    cursor.error("functions must be defined before any top-level statements")
                cursor.advance()
                functions.append(parse_function(cursor))
            case TokenKind.RBRACE:
                cursor.error("expected a statement", tok)
            case _:
                statements.append(parse_block_item(cursor))

    return Module(SimpleIdentifier(name), imports, functions, StatementBlock(statements))
