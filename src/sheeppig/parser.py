"""Parser for the SheepPig programming language.

Transforms a preprocessed token stream into a :class:`Module` by recursive
descent: module → function → statement block → statement → expression →
atom, all sharing one :class:`TokenCursor`.
"""

from __future__ import annotations

from collections.abc import Sequence

from sheeppig.ast_nodes import Module
from sheeppig.cursor import TokenCursor
from sheeppig.lexer import tokenize
from sheeppig.module_parser import parse_module
from sheeppig.tokens import Token


class Parser:
    """Parses a list of tokens into a SheepPig AST."""

    def __init__(
        self,
        tokens: Sequence[Token],
        module_name: str = "main",
    ) -> None:
        self.tokens = tokens
        self.module_name = module_name

    def parse(self) -> Module:
        """Parse the entire token stream. Raises ParseError on the first error."""
        return parse_module(TokenCursor(self.tokens), self.module_name)


def parse(tokens: Sequence[Token], module_name: str = "main") -> Module:
    return Parser(tokens, module_name).parse()


def parse_source(source: str, filename: str = "<stdin>", module_name: str = "main") -> Module:
    """Tokenize, preprocess and parse one module's source text."""
    return Parser(tokenize(source, filename), module_name).parse()
