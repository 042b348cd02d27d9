"""Tests for statements, blocks and control flow."""

from __future__ import annotations

import pytest

from sheeppig.ast_nodes import (
    ArrayIndex,
    ArrayLiteral,
    ArrayReference,
    AssignmentStatement,
    BooleanLit,
    CompoundIdentifier,
    ConditionalStatement,
    DeclarationStatement,
    ExpressionStatement,
    FunctionCall,
    LoopStatement,
    ReturnStatement,
    SingleIndex,
    SliceIndex,
    StatementBlock,
    StringLit,
    TernaryCondition,
)
from sheeppig.cursor import TokenCursor
from sheeppig.errors import ErrorKind, ParseError
from sheeppig.lexer import tokenize
from sheeppig.statement_parser import (
    consume_statement_tokens,
    parse_statement,
    parse_statement_block,
)
from sheeppig.tokens import Operator, TokenKind
from tests.helpers import binop, ident, num, parse, parse_stmt


def stmt_error(source: str) -> ParseError:
    with pytest.raises(ParseError) as excinfo:
        parse_stmt(source)
    assert excinfo.value.kind == ErrorKind.SYNTACTIC
    return excinfo.value


def block(source: str) -> StatementBlock:
    return parse_statement_block(TokenCursor(tokenize(source, "test.sp")))


def statements(source: str) -> list:
    return parse(source).statements.statements


class TestDeclarations:
    def test_declaration(self):
        assert parse_stmt("x: int = 1 + 2") == DeclarationStatement(
            ident("x"), ident("int"), binop(num(1), Operator.PLUS, num(2)), False,
        )

    def test_mutable_declaration(self):
        assert parse_stmt("var count: int = 0") == DeclarationStatement(
            ident("count"), ident("int"), num(0), True,
        )

    def test_declaration_with_compound_type(self):
        assert parse_stmt("v: linalg.Vec = zero()") == DeclarationStatement(
            ident("v"),
            CompoundIdentifier(("linalg", "Vec")),
            FunctionCall(ident("zero"), []),
            False,
        )

    def test_declaration_with_ternary_value(self):
        assert parse_stmt("m: int = a > b ? a : b") == DeclarationStatement(
            ident("m"),
            ident("int"),
            TernaryCondition(binop(ident("a"), Operator.GREATER, ident("b")), ident("a"), ident("b")),
            False,
        )

    def test_var_without_type_before_assign(self):
        err = stmt_error("var x = 1")
        assert err.message == "a variable declaration must be followed by a type, found '='"
        assert err.token.kind == TokenKind.ASSIGN
        diag = err.diagnostics[0]
        assert diag.suggestions
        assert "var x: <type>" in diag.suggestions[0].replacement

    def test_var_alone(self):
        err = stmt_error("var x")
        assert err.at_end

    def test_missing_type(self):
        err = stmt_error("x: = 1")
        assert "a type after ':'" in err.message

    def test_missing_initialiser(self):
        err = stmt_error("x: int")
        assert "'='" in err.message
        assert err.at_end

    def test_declaration_target_must_be_a_name(self):
        err = stmt_error("a[0]: int = 1")
        assert "identifier in a declaration" in err.message

    def test_compound_name_cannot_be_declared(self):
        stmt_error("a.b: int = 1")


class TestAssignments:
    def test_assignment(self):
        assert parse_stmt("x = 5") == AssignmentStatement(ident("x"), num(5))

    def test_assignment_to_compound_name(self):
        assert parse_stmt("cfg.size = 3") == AssignmentStatement(
            CompoundIdentifier(("cfg", "size")), num(3),
        )

    def test_compound_assignment_desugars(self):
        assert parse_stmt("x += 2") == AssignmentStatement(
            ident("x"), binop(ident("x"), Operator.PLUS, num(2)),
        )

    def test_power_assignment(self):
        assert parse_stmt("x **= y + 1") == AssignmentStatement(
            ident("x"),
            binop(ident("x"), Operator.POWER, binop(ident("y"), Operator.PLUS, num(1))),
        )

    def test_shift_assignment(self):
        assert parse_stmt("bits <<= 1") == AssignmentStatement(
            ident("bits"), binop(ident("bits"), Operator.LEFT_SHIFT, num(1)),
        )

    def test_array_element_assignment(self):
        assert parse_stmt("a[i] = 0") == AssignmentStatement(
            ArrayReference(ident("a"), SingleIndex(ident("i"))), num(0),
        )

    def test_nested_array_reference(self):
        assert parse_stmt("grid[y][x] = 1") == AssignmentStatement(
            ArrayReference(
                ArrayReference(ident("grid"), SingleIndex(ident("y"))),
                SingleIndex(ident("x")),
            ),
            num(1),
        )

    def test_slice_assignment(self):
        assert parse_stmt("a[1:] = b") == AssignmentStatement(
            ArrayReference(ident("a"), SliceIndex(num(1), None)), ident("b"),
        )

    def test_compound_assignment_to_element(self):
        stmt = parse_stmt("a[0] -= 1")
        index = ArrayIndex(ident("a"), SingleIndex(num(0)))
        assert stmt == AssignmentStatement(
            ArrayReference(ident("a"), SingleIndex(num(0))),
            binop(index, Operator.MINUS, num(1)),
        )

    def test_compound_assignment_does_not_share_nodes(self):
        stmt = parse_stmt("a[i] *= 2")
        assert stmt.value.left.index is not stmt.reference.index

    def test_assignment_to_literal(self):
        err = stmt_error("1 = x")
        assert err.message == "expected a reference before an assignment, found '='"

    def test_assignment_to_call(self):
        stmt_error("f() = 1")

    def test_assignment_to_expression(self):
        stmt_error("a + b = 1")

    def test_missing_value(self):
        assert stmt_error("x =").at_end


class TestOtherStatements:
    def test_expression_statement(self):
        assert parse_stmt('print("hi")') == ExpressionStatement(
            FunctionCall(ident("print"), [StringLit("hi")]),
        )

    def test_bare_expression(self):
        assert parse_stmt("a + 1") == ExpressionStatement(binop(ident("a"), Operator.PLUS, num(1)))

    def test_return_value(self):
        assert parse_stmt("return x * 2") == ReturnStatement(binop(ident("x"), Operator.TIMES, num(2)))

    def test_bare_return(self):
        assert parse_stmt("return") == ReturnStatement(None)

    def test_return_with_trailing_tokens(self):
        err = stmt_error("return 1 2")
        assert "unrecognised token" in err.message

    def test_trailing_tokens(self):
        err = stmt_error("x = 1 2")
        assert err.message == "unrecognised token in statement, found integer literal 2"

    def test_unexpected_token_after_expression(self):
        err = stmt_error("x )")
        assert "unrecognised token" in err.message

    def test_empty_statement(self):
        assert stmt_error("").at_end

    def test_statement_ends_at_newline(self):
        cursor = TokenCursor(tokenize("a = 1\nb = 2"))
        assert parse_statement(cursor) == AssignmentStatement(ident("a"), num(1))
        assert parse_statement(cursor) == AssignmentStatement(ident("b"), num(2))
        assert cursor.at_end()

    def test_multiline_call(self):
        assert parse_stmt("f(1,\n  2\n)\n") == ExpressionStatement(
            FunctionCall(ident("f"), [num(1), num(2)]),
        )

    def test_multiline_array(self):
        assert parse_stmt("xs: list = [\n  1,\n  2\n]") == DeclarationStatement(
            ident("xs"), ident("list"), ArrayLiteral([num(1), num(2)]), False,
        )

    def test_operator_at_line_end_does_not_continue(self):
        assert stmt_error("x = 1 +\n2").at_end


class TestStatementSlicing:
    def test_newline_is_consumed(self):
        cursor = TokenCursor(tokenize("a b\nc"))
        assert [t.kind for t in consume_statement_tokens(cursor)] == [
            TokenKind.IDENTIFIER, TokenKind.IDENTIFIER,
        ]
        assert cursor.at(TokenKind.IDENTIFIER)

    def test_closing_brace_is_left(self):
        cursor = TokenCursor(tokenize("a }"))
        assert len(consume_statement_tokens(cursor)) == 1
        assert cursor.at(TokenKind.RBRACE)

    def test_eof_is_left(self):
        cursor = TokenCursor(tokenize("a"))
        consume_statement_tokens(cursor)
        assert cursor.at(TokenKind.EOF)

    def test_newlines_inside_brackets_are_dropped(self):
        cursor = TokenCursor(tokenize("f(a\n)\ng"))
        assert [t.kind for t in consume_statement_tokens(cursor)] == [
            TokenKind.IDENTIFIER, TokenKind.LPAREN, TokenKind.IDENTIFIER, TokenKind.RPAREN,
        ]

    def test_exhausted_stream(self):
        cursor = TokenCursor(tokenize("a")[:-1])
        with pytest.raises(ParseError) as excinfo:
            consume_statement_tokens(cursor)
        assert excinfo.value.at_end


class TestBlocks:
    def test_empty_block(self):
        assert block("{ }") == StatementBlock([])

    def test_empty_block_over_lines(self):
        assert block("{\n\n}") == StatementBlock([])

    def test_single_line_block(self):
        assert block("{ x = 1 }") == StatementBlock([AssignmentStatement(ident("x"), num(1))])

    def test_statements_separated_by_blank_lines(self):
        assert block("{\n  a = 1\n\n\n  b = 2\n}") == StatementBlock([
            AssignmentStatement(ident("a"), num(1)),
            AssignmentStatement(ident("b"), num(2)),
        ])

    def test_unclosed_block(self):
        with pytest.raises(ParseError) as excinfo:
            block("{\n a = 1\n")
        assert excinfo.value.at_end
        assert "'}'" in excinfo.value.message

    def test_missing_opening_brace(self):
        with pytest.raises(ParseError) as excinfo:
            block("a = 1 }")
        assert "'{'" in excinfo.value.message


class TestControlFlow:
    def test_while(self):
        assert statements("while i < 10 {\n  i += 1\n}") == [
            LoopStatement(
                binop(ident("i"), Operator.LESS, num(10)),
                StatementBlock([
                    AssignmentStatement(ident("i"), binop(ident("i"), Operator.PLUS, num(1))),
                ]),
            ),
        ]

    def test_if(self):
        assert statements("if ok { go() }") == [
            ConditionalStatement(
                ident("ok"),
                StatementBlock([ExpressionStatement(FunctionCall(ident("go"), []))]),
            ),
        ]

    def test_if_else(self):
        [stmt] = statements("if a { x = 1 } else { x = 2 }")
        assert stmt == ConditionalStatement(
            ident("a"),
            StatementBlock([AssignmentStatement(ident("x"), num(1))]),
            StatementBlock([AssignmentStatement(ident("x"), num(2))]),
        )

    def test_else_on_next_line(self):
        [stmt] = statements("if a {\n  x = 1\n}\nelse {\n  x = 2\n}")
        assert stmt.else_body == StatementBlock([AssignmentStatement(ident("x"), num(2))])

    def test_else_if_chain(self):
        [stmt] = statements("if a { r = 1 } else if b { r = 2 } else { r = 3 }")
        assert stmt == ConditionalStatement(
            ident("a"),
            StatementBlock([AssignmentStatement(ident("r"), num(1))]),
            StatementBlock([
                ConditionalStatement(
                    ident("b"),
                    StatementBlock([AssignmentStatement(ident("r"), num(2))]),
                    StatementBlock([AssignmentStatement(ident("r"), num(3))]),
                ),
            ]),
        )

    def test_nested_control_flow(self):
        [loop] = statements("while true {\n  if done { return }\n}")
        [cond] = loop.body.statements
        assert cond.body == StatementBlock([ReturnStatement(None)])

    def test_statement_after_if(self):
        stmts = statements("if a { b() }\nc = 1")
        assert len(stmts) == 2
        assert stmts[1] == AssignmentStatement(ident("c"), num(1))

    def test_if_without_block(self):
        with pytest.raises(ParseError) as excinfo:
            parse("if a\n  b = 1")
        assert "'{' to open a block" in excinfo.value.message

    def test_else_without_block(self):
        with pytest.raises(ParseError):
            parse("if a { } else b = 1")

    def test_while_true_literal_body(self):
        assert statements("while true { 1 }") == [
            LoopStatement(BooleanLit(True), StatementBlock([ExpressionStatement(num(1))])),
        ]

    def test_if_true_else(self):
        [stmt] = statements("if true { 1 } else { 2 }")
        assert stmt == ConditionalStatement(
            BooleanLit(True),
            StatementBlock([ExpressionStatement(num(1))]),
            StatementBlock([ExpressionStatement(num(2))]),
        )

    def test_for_is_reserved(self):
        with pytest.raises(ParseError):
            parse("for x in xs { }")
