"""Lexer for the SheepPig programming language.

Produces a flat stream of tokens from source text, ending with an EOF
token. Newlines are significant and emitted as single NEWLINE tokens;
everything else that is whitespace or comment is dropped.
"""

from __future__ import annotations

from typing import NoReturn

from sheeppig.ast_nodes import SimpleIdentifier
from sheeppig.errors import ErrorKind, ParseError
from sheeppig.preprocessor import preprocess
from sheeppig.source import Span
from sheeppig.tokens import (
    ASSIGNABLE_OPERATORS,
    KEYWORDS,
    LITERAL_WORDS,
    OPERATORS,
    SYMBOLS,
    Operator,
    Token,
    TokenKind,
)

_DIGITS = "0123456789"
_WHITESPACE = " \t\r\n"
_INT64_MAX = 2**63 - 1

_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "'": "'",
    '"': '"',
    "\\": "\\",
    "0": "\0",
}


def _is_ident_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == "_")


def _is_ident_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


class Lexer:
    """Tokenizes SheepPig source code."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch in _WHITESPACE:
                self._eat_whitespace(allow_newline=True)
            elif ch == "#":
                self._skip_line_comment()
            elif ch == "\\":
                self._lex_line_continuation()
            elif ch == "/" and self._peek(1) == "*":
                self._skip_block_comment()
            elif ch == "." and self._peek(1) in _DIGITS:
                self._lex_number()
            elif ch == "'":
                self._lex_char()
            elif ch == '"':
                self._lex_string()
            elif ch in _DIGITS:
                self._lex_number()
            elif _is_ident_start(ch):
                self._lex_identifier()
            else:
                self._lex_operator_or_symbol()

        self._emit(TokenKind.EOF, "", self.line, self.col)
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return "\0"

    def _at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _emit(self, kind: TokenKind, value: object, start_line: int, start_col: int) -> Token:
        end_col = self.col - 1 if self.col > 1 else 1
        span = Span(self.filename, start_line, start_col, self.line, end_col)
        tok = Token(kind, value, span)
        self.tokens.append(tok)
        return tok

    def _error(self, message: str, line: int, col: int, *, at_end: bool = False) -> NoReturn:
        span = Span(self.filename, line, col, line, col)
        raise ParseError(ErrorKind.LEXICAL, message, span, at_end=at_end)

    def _error_at_end(self, message: str) -> NoReturn:
        self._error(f"{message}, found end of input", self.line, self.col, at_end=True)

    # ── Whitespace and comments ──────────────────────────────────

    def _eat_whitespace(self, *, allow_newline: bool) -> None:
        """Consume a run of whitespace and line comments.

        At most one NEWLINE is emitted for the whole run, and only if a line
        break was actually seen and the previous token is not a NEWLINE.
        """
        start_line = self.line
        start_col = self.col
        saw_newline = False
        while not self._at_end():
            ch = self.source[self.pos]
            if ch in " \t":
                self._advance()
            elif ch in "\r\n":
                if not saw_newline:
                    start_line, start_col = self.line, self.col
                saw_newline = True
                self._advance()
            elif ch == "#":
                self._skip_line_comment()
            else:
                break

        if not (allow_newline and saw_newline):
            return
        if self.tokens and self.tokens[-1].kind == TokenKind.NEWLINE:
            return
        self._emit(TokenKind.NEWLINE, "\n", start_line, start_col)

    def _lex_line_continuation(self) -> None:
        if self._peek(1) not in ("\n", "\r"):
            self._error("unexpected character '\\'", self.line, self.col)
        self._advance()  # skip backslash
        self._eat_whitespace(allow_newline=False)

    def _skip_line_comment(self) -> None:
        while not self._at_end() and self.source[self.pos] not in "\r\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        start_line = self.line
        start_col = self.col
        self._advance()  # /
        self._advance()  # *
        while not self._at_end():
            if self.source[self.pos] == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return
            self._advance()
        self._error(
            "unterminated block comment, found end of input",
            start_line, start_col, at_end=True,
        )

    # ── Chars and strings ────────────────────────────────────────

    def _lex_escape_sequence(self) -> str:
        line, col = self.line, self.col
        self._advance()  # skip backslash
        if self._at_end():
            self._error_at_end("expected an escape sequence")
        ch = self._advance()
        if ch in _ESCAPES:
            return _ESCAPES[ch]
        self._error(f"unrecognised escape sequence '\\{ch}'", line, col)

    def _lex_char(self) -> None:
        start_line = self.line
        start_col = self.col
        self._advance()  # skip opening '
        if self._at_end():
            self._error_at_end("unterminated character literal")
        if self.source[self.pos] == "'":
            self._error("empty character literal", start_line, start_col)
        if self.source[self.pos] == "\\":
            ch = self._lex_escape_sequence()
        else:
            ch = self._advance()
        if self._at_end():
            self._error_at_end("unterminated character literal")
        if self.source[self.pos] != "'":
            self._error(
                "character literal must contain exactly one character",
                start_line, start_col,
            )
        self._advance()  # skip closing '
        self._emit(TokenKind.CHAR_LIT, ch, start_line, start_col)

    def _lex_string(self) -> None:
        start_line = self.line
        start_col = self.col
        self._advance()  # skip opening "
        text = []
        while not self._at_end() and self.source[self.pos] != '"':
            if self.source[self.pos] == "\\":
                text.append(self._lex_escape_sequence())
            else:
                text.append(self._advance())

        if self._at_end():
            self._error(
                "unterminated string literal, found end of input",
                start_line, start_col, at_end=True,
            )

        self._advance()  # skip closing "
        self._emit(TokenKind.STRING_LIT, "".join(text), start_line, start_col)

    # ── Numbers ──────────────────────────────────────────────────

    def _lex_number(self) -> None:
        """Lex an integer or float literal; '_' separators are dropped."""
        start_line = self.line
        start_col = self.col
        text = [self._advance()]
        is_float = text[0] == "."

        while not self._at_end():
            ch = self.source[self.pos]
            if ch in _DIGITS:
                text.append(self._advance())
            elif ch == "_":
                self._advance()
            elif ch == ".":
                if is_float:
                    self._error(
                        "unexpected extra decimal point in number literal",
                        self.line, self.col,
                    )
                is_float = True
                text.append(self._advance())
            elif ch in "eE":
                is_float = True
                text.append(self._advance())
                self._lex_exponent(text)
                break
            else:
                break

        literal = "".join(text)
        if is_float:
            self._emit(TokenKind.FLOAT_LIT, float(literal), start_line, start_col)
            return
        value = int(literal)
        if value > _INT64_MAX:
            self._error(f"integer literal {literal} is out of range", start_line, start_col)
        self._emit(TokenKind.INTEGER_LIT, value, start_line, start_col)

    def _lex_exponent(self, text: list[str]) -> None:
        if self._peek() in "+-":
            text.append(self._advance())
        digits = 0
        while not self._at_end():
            ch = self.source[self.pos]
            if ch in _DIGITS:
                text.append(self._advance())
                digits += 1
            elif ch == "_":
                self._advance()
            else:
                break
        if digits == 0:
            self._error("expected digits in number exponent", self.line, self.col)

    # ── Identifiers and Keywords ─────────────────────────────────

    def _lex_identifier(self) -> None:
        start_line = self.line
        start_col = self.col
        text = []
        while not self._at_end() and _is_ident_char(self.source[self.pos]):
            text.append(self._advance())
        word = "".join(text)

        if word in KEYWORDS:
            self._emit(KEYWORDS[word], word, start_line, start_col)
        elif word in LITERAL_WORDS:
            kind, value = LITERAL_WORDS[word]
            self._emit(kind, value, start_line, start_col)
        else:
            self._emit(TokenKind.IDENTIFIER, SimpleIdentifier(word), start_line, start_col)

    # ── Operators and Symbols ────────────────────────────────────

    def _lex_operator_or_symbol(self) -> None:
        start_line = self.line
        start_col = self.col

        # Compound assignment: an assignable operator directly followed by '='
        for length in (2, 1):
            op = self._operator_of_length(length)
            if op in ASSIGNABLE_OPERATORS and self._peek(length) == "=":
                for _ in range(length + 1):
                    self._advance()
                self._emit(TokenKind.BINARY_ASSIGN, op, start_line, start_col)
                return

        # Two-character operators win over their one-character prefix
        for length in (2, 1):
            op = self._operator_of_length(length)
            if op is not None:
                for _ in range(length):
                    self._advance()
                self._emit(TokenKind.OPERATOR, op, start_line, start_col)
                return

        ch = self.source[self.pos]
        if ch in SYMBOLS:
            self._advance()
            self._emit(SYMBOLS[ch], ch, start_line, start_col)
            return

        self._error(f"unexpected character {ch!r}", start_line, start_col)

    def _operator_of_length(self, length: int) -> Operator | None:
        text = self.source[self.pos:self.pos + length]
        if len(text) != length:
            return None
        return OPERATORS.get(text)


def tokenize(source: str, filename: str = "<stdin>") -> list[Token]:
    """Lex *source* and normalize the result with :func:`preprocess`."""
    return preprocess(Lexer(source, filename).lex())
