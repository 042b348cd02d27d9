"""Function definitions: ``name(param: type, ...) [: return_type] { body }``."""

from __future__ import annotations

from sheeppig.ast_nodes import Function, Identifier, Parameter
from sheeppig.cursor import TokenCursor
from sheeppig.statement_parser import parse_statement_block
from sheeppig.tokens import TokenKind


def parse_function(cursor: TokenCursor) -> Function:
    """Parse a function definition; the ``fun`` keyword is already consumed."""
    name = _expect_identifier(cursor, "a function name")
    parameters = _parse_parameter_list(cursor)
    return_type = None
    if cursor.at(TokenKind.COLON):
        cursor.advance()
        return_type = _expect_identifier(cursor, "a return type after ':'")
    body = parse_statement_block(cursor)
    return Function(name, parameters, return_type, body)


def _parse_parameter_list(cursor: TokenCursor) -> list[Parameter]:
    cursor.expect(TokenKind.LPAREN, "'(' to start the parameter list")
    parameters: list[Parameter] = []
    cursor.skip_newlines()
    if cursor.at(TokenKind.RPAREN):
        cursor.advance()
        return parameters

    while True:
        cursor.skip_newlines()
        parameters.append(_parse_parameter(cursor))
        cursor.skip_newlines()
        if cursor.at(TokenKind.COMMA):
            cursor.advance()
            continue
        cursor.expect(TokenKind.RPAREN, "',' or ')' in parameter list")
        return parameters


def _parse_parameter(cursor: TokenCursor) -> Parameter:
    name = _expect_identifier(cursor, "a parameter")
    cursor.expect(TokenKind.COLON, "':' after parameter name")
    param_type = _expect_identifier(cursor, "a type identifier after ':'")
    return Parameter(name, param_type)


def _expect_identifier(cursor: TokenCursor, expected: str) -> Identifier:
    tok = cursor.expect(TokenKind.IDENTIFIER, expected)
    return tok.value  # type: ignore[return-value]
