"""Primary expressions: literals, names, calls, groups and arrays."""

from __future__ import annotations

from sheeppig.ast_nodes import (
    ArrayIndex,
    ArrayIndexKind,
    ArrayLiteral,
    AtomicExpression,
    BooleanLit,
    CharLit,
    Expression,
    FloatLit,
    FunctionCall,
    IntegerLit,
    Literal,
    NoneLit,
    Parenthesized,
    SingleIndex,
    SliceIndex,
    StringLit,
)
from sheeppig.cursor import TokenCursor
from sheeppig.tokens import LITERAL_KINDS, Token, TokenKind


def parse_atomic(cursor: TokenCursor) -> AtomicExpression:
    """Parse one primary, followed by any number of ``[index]`` suffixes."""
    tok = cursor.current()
    if tok is None or tok.kind == TokenKind.EOF:
        cursor.error("expected an expression")

    atom: AtomicExpression
    if tok.kind in LITERAL_KINDS:
        cursor.advance()
        atom = literal_node(tok)
    elif tok.kind == TokenKind.LPAREN:
        atom = _parse_parenthesized(cursor)
    elif tok.kind == TokenKind.LBRACKET:
        atom = ArrayLiteral(parse_expression_list(cursor, TokenKind.RBRACKET, "an array element"))
    elif tok.kind == TokenKind.IDENTIFIER:
        cursor.advance()
        if cursor.at(TokenKind.LPAREN):
            atom = FunctionCall(
                tok.value,  # type: ignore[arg-type]
                parse_expression_list(cursor, TokenKind.RPAREN, "an argument"),
            )
        else:
            atom = tok.value  # type: ignore[assignment]
    else:
        cursor.error("expected an expression")

    while cursor.at(TokenKind.LBRACKET):
        atom = ArrayIndex(atom, _parse_index(cursor))
    return atom


def literal_node(tok: Token) -> Literal:
    """Build the AST literal for a literal token."""
    match tok.kind:
        case TokenKind.INTEGER_LIT:
            return IntegerLit(tok.value)  # type: ignore[arg-type]
        case TokenKind.FLOAT_LIT:
            return FloatLit(tok.value)  # type: ignore[arg-type]
        case TokenKind.CHAR_LIT:
            return CharLit(tok.value)  # type: ignore[arg-type]
        case TokenKind.STRING_LIT:
            return StringLit(tok.value)  # type: ignore[arg-type]
        case TokenKind.BOOLEAN_LIT:
            return BooleanLit(tok.value)  # type: ignore[arg-type]
        case TokenKind.NONE_LIT:
            return NoneLit()
    raise ValueError(f"not a literal token: {tok.kind.name}")


def _parse_parenthesized(cursor: TokenCursor) -> Parenthesized:
    from sheeppig.expression_parser import parse_expression

    cursor.advance()  # (
    value = parse_expression(cursor)
    cursor.expect(TokenKind.RPAREN, "')' to close the parenthesized expression")
    return Parenthesized(value)


def parse_expression_list(
    cursor: TokenCursor, closing: TokenKind, item: str,
) -> list[Expression]:
    """Parse ``open item (, item)* close`` starting at the opening bracket.

    Newlines between items are ignored. An empty slot, either two commas in
    a row or a comma right before the closing bracket, is an error.
    """
    from sheeppig.expression_parser import parse_expression

    cursor.advance()  # ( or [
    close_text = ")" if closing == TokenKind.RPAREN else "]"
    values: list[Expression] = []
    cursor.skip_newlines()
    if cursor.at(closing):
        cursor.advance()
        return values

    while True:
        cursor.skip_newlines()
        if cursor.at_any(TokenKind.COMMA, closing):
            cursor.error(f"expected {item}")
        values.append(parse_expression(cursor))
        cursor.skip_newlines()
        if cursor.at(TokenKind.COMMA):
            cursor.advance()
            continue
        cursor.expect(closing, f"',' or '{close_text}'")
        return values


def _parse_index(cursor: TokenCursor) -> ArrayIndexKind:
    """Parse ``[i]``, ``[start:end]``, ``[start:]``, ``[:end]`` or ``[:]``."""
    from sheeppig.expression_parser import parse_expression

    cursor.advance()  # [
    start = None if cursor.at(TokenKind.COLON) else parse_expression(cursor)
    if not cursor.at(TokenKind.COLON):
        cursor.expect(TokenKind.RBRACKET, "']' to close the index")
        assert start is not None
        return SingleIndex(start)

    cursor.advance()  # :
    end = None if cursor.at(TokenKind.RBRACKET) else parse_expression(cursor)
    cursor.expect(TokenKind.RBRACKET, "']' to close the slice")
    return SliceIndex(start, end)
