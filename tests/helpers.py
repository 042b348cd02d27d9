"""Shared test helpers for the SheepPig front-end test suite."""

from __future__ import annotations

from sheeppig.ast_nodes import (
    BinaryOperation,
    Expression,
    IntegerLit,
    SimpleIdentifier,
    Statement,
)
from sheeppig.cursor import TokenCursor
from sheeppig.expression_parser import parse_expression
from sheeppig.lexer import Lexer, tokenize
from sheeppig.parser import Parser
from sheeppig.statement_parser import parse_statement
from sheeppig.tokens import Operator, TokenKind


def lex(source: str) -> list[tuple[TokenKind, object]]:
    """Lex source and return (kind, value) pairs, excluding EOF."""
    tokens = Lexer(source, "<test>").lex()
    return [(t.kind, t.value) for t in tokens if t.kind != TokenKind.EOF]


def kinds(source: str) -> list[TokenKind]:
    """Lex source and return just the token kinds, excluding EOF."""
    return [kind for kind, _ in lex(source)]


def parse(source: str, module_name: str = "main"):
    """Tokenize and parse source, return the Module."""
    return Parser(tokenize(source, "test.sp"), module_name).parse()


def parse_expr(source: str) -> Expression:
    """Parse source as a single expression, asserting nothing is left over."""
    cursor = TokenCursor(tokenize(source, "test.sp"))
    expr = parse_expression(cursor)
    assert cursor.at_end(), f"unconsumed token: {cursor.current()}"
    return expr


def parse_stmt(source: str) -> Statement:
    """Parse the first statement of source."""
    return parse_statement(TokenCursor(tokenize(source, "test.sp")))


def ident(name: str) -> SimpleIdentifier:
    return SimpleIdentifier(name)


def num(value: int) -> IntegerLit:
    return IntegerLit(value)


def binop(left: Expression, op: Operator, right: Expression) -> BinaryOperation:
    return BinaryOperation(left, op, right)
