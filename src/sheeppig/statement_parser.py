"""Statement and statement-block parsing.

Simple statements are parsed from an isolated slice of tokens: everything
up to the next statement boundary (a newline, which is consumed, or a
closing brace / end of module, which are not). ``if`` and ``while``
constructs own nested blocks and are parsed directly from the main cursor.
"""

from __future__ import annotations

import copy

from sheeppig.ast_nodes import (
    ArrayIndex,
    ArrayReference,
    AssignmentStatement,
    BinaryOperation,
    CompoundIdentifier,
    ConditionalStatement,
    DeclarationStatement,
    Expression,
    ExpressionStatement,
    LoopStatement,
    Reference,
    ReturnStatement,
    SimpleIdentifier,
    Statement,
    StatementBlock,
)
from sheeppig.cursor import TokenCursor
from sheeppig.errors import Suggestion
from sheeppig.expression_parser import parse_expression
from sheeppig.tokens import Operator, Token, TokenKind

_OPENERS = frozenset({TokenKind.LPAREN, TokenKind.LBRACKET})
_CLOSERS = frozenset({TokenKind.RPAREN, TokenKind.RBRACKET})


# ── Blocks and compound statements ───────────────────────────────


def parse_statement_block(cursor: TokenCursor) -> StatementBlock:
    """Parse ``{ statement* }``; blank lines inside the block are skipped."""
    cursor.expect(TokenKind.LBRACE, "'{' to open a block")
    statements: list[Statement] = []
    while True:
        cursor.skip_newlines()
        if cursor.at(TokenKind.RBRACE):
            cursor.advance()
            return StatementBlock(statements)
        if cursor.at_end():
            cursor.error("expected '}' to close the block")
        statements.append(parse_block_item(cursor))


def parse_block_item(cursor: TokenCursor) -> Statement:
    """Parse an ``if``/``while`` construct or fall back to a simple statement."""
    if cursor.at(TokenKind.IF):
        return parse_conditional(cursor)
    if cursor.at(TokenKind.WHILE):
        return parse_loop(cursor)
    return parse_statement(cursor)


def parse_conditional(cursor: TokenCursor) -> ConditionalStatement:
    """Parse ``if cond { ... } [else { ... } | else if ...]``.

    ``else`` may sit on the line after the closing brace.
    """
    cursor.expect(TokenKind.IF, "'if'")
    condition = parse_expression(cursor)
    body = parse_statement_block(cursor)

    if not _else_follows(cursor):
        return ConditionalStatement(condition, body)

    cursor.skip_newlines()
    cursor.advance()  # else
    if cursor.at(TokenKind.IF):
        else_body = StatementBlock([parse_conditional(cursor)])
    else:
        else_body = parse_statement_block(cursor)
    return ConditionalStatement(condition, body, else_body)


def _else_follows(cursor: TokenCursor) -> bool:
    offset = 0
    while (tok := cursor.peek(offset)) is not None and tok.kind == TokenKind.NEWLINE:
        offset += 1
    return tok is not None and tok.kind == TokenKind.ELSE


def parse_loop(cursor: TokenCursor) -> LoopStatement:
    """Parse ``while cond { ... }``."""
    cursor.expect(TokenKind.WHILE, "'while'")
    condition = parse_expression(cursor)
    return LoopStatement(condition, parse_statement_block(cursor))


# ── Simple statements ────────────────────────────────────────────


def consume_statement_tokens(cursor: TokenCursor) -> list[Token]:
    """Cut one statement's tokens out of the stream.

    A newline ends the statement and is consumed; a closing brace or the EOF
    sentinel ends it and is left for the caller. Inside parentheses and
    square brackets newlines are dropped, so calls and array literals may
    span lines.
    """
    tokens: list[Token] = []
    depth = 0
    while True:
        tok = cursor.current()
        if tok is None:
            cursor.error("expected a newline or '}' to end the statement")
        if tok.kind in (TokenKind.RBRACE, TokenKind.EOF):
            return tokens
        cursor.advance()
        if tok.kind == TokenKind.NEWLINE:
            if depth == 0:
                return tokens
            continue
        if tok.kind in _OPENERS:
            depth += 1
        elif tok.kind in _CLOSERS and depth > 0:
            depth -= 1
        tokens.append(tok)


def parse_statement(cursor: TokenCursor) -> Statement:
    """Parse one declaration, assignment, return or expression statement."""
    run = TokenCursor(consume_statement_tokens(cursor))

    if run.at(TokenKind.RETURN):
        return _parse_return(run)

    var_token = run.advance() if run.at(TokenKind.VAR) else None
    is_mutable = var_token is not None

    left = parse_expression(run)
    tok = run.current()

    if tok is None:
        if is_mutable:
            run.error("expected ':' and a type in variable declaration")
        return ExpressionStatement(left)

    run.advance()
    if tok.kind == TokenKind.COLON:
        statement: Statement = _parse_declaration(run, left, tok, is_mutable)
    elif tok.kind in (TokenKind.ASSIGN, TokenKind.BINARY_ASSIGN):
        if is_mutable:
            run.error(
                "a variable declaration must be followed by a type",
                tok,
                suggestions=[Suggestion(
                    message="declare the type",
                    replacement=f"var {_describe_target(left)}: <type> = ...",
                )],
            )
        statement = _parse_assignment(run, left, tok)
    else:
        run.error("unrecognised token in statement", tok)

    if not run.exhausted():
        run.error("unrecognised token in statement")
    return statement


def _parse_return(run: TokenCursor) -> ReturnStatement:
    run.advance()  # return
    if run.exhausted():
        return ReturnStatement(None)
    value = parse_expression(run)
    if not run.exhausted():
        run.error("unrecognised token in statement")
    return ReturnStatement(value)


def _parse_declaration(
    run: TokenCursor, left: Expression, colon: Token, is_mutable: bool,
) -> DeclarationStatement:
    if not isinstance(left, SimpleIdentifier):
        run.error("expected an identifier in a declaration statement", colon)
    var_type = run.expect(TokenKind.IDENTIFIER, "a type after ':'").value
    run.expect(TokenKind.ASSIGN, "'=' to initialise the variable")
    value = parse_expression(run)
    return DeclarationStatement(left, var_type, value, is_mutable)  # type: ignore[arg-type]


def _parse_assignment(run: TokenCursor, left: Expression, tok: Token) -> AssignmentStatement:
    reference = _to_reference(run, left, tok)
    right = parse_expression(run)
    if tok.kind == TokenKind.BINARY_ASSIGN:
        # `a op= b` is `a = a op b`; the copy keeps the tree free of shared nodes
        assert isinstance(tok.value, Operator)
        right = BinaryOperation(copy.deepcopy(left), tok.value, right)
    return AssignmentStatement(reference, right)


def _to_reference(run: TokenCursor, expr: Expression, tok: Token) -> Reference:
    if isinstance(expr, (SimpleIdentifier, CompoundIdentifier)):
        return expr
    if isinstance(expr, ArrayIndex):
        return ArrayReference(_to_reference(run, expr.array, tok), expr.index)
    run.error("expected a reference before an assignment", tok)


def _describe_target(expr: Expression) -> str:
    if isinstance(expr, (SimpleIdentifier, CompoundIdentifier)):
        return str(expr)
    return "name"
