"""Token kinds and token representation for the SheepPig lexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sheeppig.source import Span


class TokenKind(Enum):
    # Symbols
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    COMMA = auto()
    DOT = auto()
    COLON = auto()

    # Layout
    NEWLINE = auto()
    EOF = auto()

    # Operators
    OPERATOR = auto()
    QUESTION = auto()
    ASSIGN = auto()
    BINARY_ASSIGN = auto()

    # Keywords
    USING = auto()
    AS = auto()
    FROM = auto()
    FUN = auto()
    RETURN = auto()
    VAR = auto()
    IF = auto()
    ELSE = auto()
    FOR = auto()
    IN = auto()
    WHILE = auto()

    # Literals
    INTEGER_LIT = auto()
    FLOAT_LIT = auto()
    CHAR_LIT = auto()
    STRING_LIT = auto()
    BOOLEAN_LIT = auto()
    NONE_LIT = auto()

    # Identifiers
    IDENTIFIER = auto()


class Operator(Enum):
    """Operators shared by tokens, compound assignment and the AST."""

    # Arithmetic
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    MODULO = "%"
    POWER = "**"

    # Logical
    AND = "&&"
    OR = "||"
    NOT = "!"

    # Bitwise
    BITWISE_AND = "&"
    BITWISE_OR = "|"
    BITWISE_XOR = "^"
    LEFT_SHIFT = "<<"
    RIGHT_SHIFT = ">>"
    BITWISE_NOT = "~"

    # Relational
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="


@dataclass(frozen=True)
class Token:
    """One lexical unit.

    ``value`` depends on ``kind``: the source text for symbols and keywords,
    an :class:`Operator` for ``OPERATOR`` and ``BINARY_ASSIGN``, the decoded
    Python value for literals and an identifier node for ``IDENTIFIER``.
    The span is not part of token equality.
    """

    kind: TokenKind
    value: object
    span: Span | None = field(default=None, compare=False)

    def describe(self) -> str:
        """Human-readable name used in diagnostics."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        if self.kind == TokenKind.NEWLINE:
            return "newline"
        if self.kind in (TokenKind.OPERATOR, TokenKind.BINARY_ASSIGN):
            assert isinstance(self.value, Operator)
            suffix = "=" if self.kind == TokenKind.BINARY_ASSIGN else ""
            return f"operator '{self.value.value}{suffix}'"
        if self.kind in KEYWORDS.values():
            return f"keyword '{self.value}'"
        if self.kind in LITERAL_KINDS:
            return f"{_LITERAL_NAMES[self.kind]} {self.value!r}"
        if self.kind == TokenKind.IDENTIFIER:
            return f"identifier '{self.value}'"
        return f"'{self.value}'"


KEYWORDS: dict[str, TokenKind] = {
    "using": TokenKind.USING,
    "as": TokenKind.AS,
    "from": TokenKind.FROM,
    "fun": TokenKind.FUN,
    "return": TokenKind.RETURN,
    "var": TokenKind.VAR,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "for": TokenKind.FOR,
    "in": TokenKind.IN,
    "while": TokenKind.WHILE,
}

LITERAL_WORDS: dict[str, tuple[TokenKind, object]] = {
    "true": (TokenKind.BOOLEAN_LIT, True),
    "false": (TokenKind.BOOLEAN_LIT, False),
    "None": (TokenKind.NONE_LIT, None),
}

SYMBOLS: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    ".": TokenKind.DOT,
    "?": TokenKind.QUESTION,
    "=": TokenKind.ASSIGN,
}

OPERATORS: dict[str, Operator] = {op.value: op for op in Operator}

# Operators that may be fused with a trailing '=' into a compound assignment.
ASSIGNABLE_OPERATORS: frozenset[Operator] = frozenset({
    Operator.PLUS,
    Operator.MINUS,
    Operator.TIMES,
    Operator.DIVIDE,
    Operator.MODULO,
    Operator.POWER,
    Operator.AND,
    Operator.OR,
    Operator.BITWISE_AND,
    Operator.BITWISE_OR,
    Operator.BITWISE_XOR,
    Operator.LEFT_SHIFT,
    Operator.RIGHT_SHIFT,
})

LITERAL_KINDS: frozenset[TokenKind] = frozenset({
    TokenKind.INTEGER_LIT,
    TokenKind.FLOAT_LIT,
    TokenKind.CHAR_LIT,
    TokenKind.STRING_LIT,
    TokenKind.BOOLEAN_LIT,
    TokenKind.NONE_LIT,
})

_LITERAL_NAMES: dict[TokenKind, str] = {
    TokenKind.INTEGER_LIT: "integer literal",
    TokenKind.FLOAT_LIT: "float literal",
    TokenKind.CHAR_LIT: "char literal",
    TokenKind.STRING_LIT: "string literal",
    TokenKind.BOOLEAN_LIT: "boolean literal",
    TokenKind.NONE_LIT: "literal",
}

# A newline directly after one of these is layout, not a statement boundary.
NEWLINE_ELIDED_AFTER: frozenset[TokenKind] = frozenset({
    TokenKind.LPAREN,
    TokenKind.LBRACE,
    TokenKind.LBRACKET,
    TokenKind.COMMA,
})
