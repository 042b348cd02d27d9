"""Precedence-climbing expression parser.

The grammar is driven by :data:`PRECEDENCE`, an ordered table of operator
classes from loosest to tightest binding. A single routine,
:func:`_parse_level`, handles every row; primaries are left to
:func:`sheeppig.atomic_parser.parse_atomic`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sheeppig.ast_nodes import (
    BinaryOperation,
    Expression,
    TernaryCondition,
    UnaryOperation,
)
from sheeppig.atomic_parser import parse_atomic
from sheeppig.cursor import TokenCursor
from sheeppig.tokens import Operator, TokenKind


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"
    PREFIX = "prefix"


@dataclass(frozen=True)
class PrecedenceLevel:
    operators: frozenset[Operator]
    associativity: Associativity


def _level(associativity: Associativity, *operators: Operator) -> PrecedenceLevel:
    return PrecedenceLevel(frozenset(operators), associativity)


PRECEDENCE: tuple[PrecedenceLevel, ...] = (
    _level(Associativity.LEFT, Operator.OR),
    _level(Associativity.LEFT, Operator.AND),
    _level(Associativity.LEFT, Operator.BITWISE_OR),
    _level(Associativity.LEFT, Operator.BITWISE_XOR),
    _level(Associativity.LEFT, Operator.BITWISE_AND),
    _level(Associativity.LEFT, Operator.EQUAL, Operator.NOT_EQUAL),
    _level(
        Associativity.LEFT,
        Operator.LESS, Operator.LESS_EQUAL, Operator.GREATER, Operator.GREATER_EQUAL,
    ),
    _level(Associativity.LEFT, Operator.LEFT_SHIFT, Operator.RIGHT_SHIFT),
    _level(Associativity.LEFT, Operator.PLUS, Operator.MINUS),
    _level(Associativity.LEFT, Operator.TIMES, Operator.DIVIDE, Operator.MODULO),
    _level(
        Associativity.PREFIX,
        Operator.PLUS, Operator.MINUS, Operator.NOT, Operator.BITWISE_NOT,
    ),
    _level(Associativity.RIGHT, Operator.POWER),
)


def parse_expression(cursor: TokenCursor) -> Expression:
    """Parse one expression, including a trailing ``? true : false``.

    The cursor is left on the first token that is not part of the
    expression.
    """
    condition = _parse_level(cursor, 0)
    if not cursor.at(TokenKind.QUESTION):
        return condition
    cursor.advance()
    true_value = parse_expression(cursor)
    cursor.expect(TokenKind.COLON, "':' after ternary condition")
    false_value = parse_expression(cursor)
    return TernaryCondition(condition, true_value, false_value)


def _parse_level(cursor: TokenCursor, level: int) -> Expression:
    if level == len(PRECEDENCE):
        return parse_atomic(cursor)

    row = PRECEDENCE[level]
    if row.associativity == Associativity.PREFIX:
        return _parse_prefix(cursor, level, row)

    left = _parse_level(cursor, level + 1)

    if row.associativity == Associativity.RIGHT:
        operator = cursor.match_operator(row.operators)
        if operator is None:
            return left
        return BinaryOperation(left, operator, _parse_level(cursor, level))

    while (operator := cursor.match_operator(row.operators)) is not None:
        right = _parse_level(cursor, level + 1)
        left = BinaryOperation(left, operator, right)
    return left


def _parse_prefix(cursor: TokenCursor, level: int, row: PrecedenceLevel) -> Expression:
    tok = cursor.current()
    if tok is None or tok.kind != TokenKind.OPERATOR:
        return _parse_level(cursor, level + 1)
    operator = cursor.match_operator(row.operators)
    if operator is None:
        cursor.error("operator not allowed in unary expression")
    return UnaryOperation(operator, _parse_level(cursor, level))
