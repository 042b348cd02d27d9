"""AST node definitions for the SheepPig language.

Nodes are immutable and each node owns its children; nothing is shared
between two parents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from sheeppig.tokens import Operator

# ── Identifiers ──────────────────────────────────────────────────


@dataclass(frozen=True)
class SimpleIdentifier:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class CompoundIdentifier:
    """A dotted name such as ``math.trig.sin``."""

    parts: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.parts) < 2:
            raise ValueError(
                f"compound identifier needs at least two segments, got {self.parts!r}"
            )

    def __str__(self) -> str:
        return ".".join(self.parts)


Identifier = Union[SimpleIdentifier, CompoundIdentifier]


# ── Literals ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class IntegerLit:
    value: int


@dataclass(frozen=True)
class FloatLit:
    value: float


@dataclass(frozen=True)
class CharLit:
    value: str


@dataclass(frozen=True)
class StringLit:
    value: str


@dataclass(frozen=True)
class BooleanLit:
    value: bool


@dataclass(frozen=True)
class NoneLit:
    pass


Literal = Union[IntegerLit, FloatLit, CharLit, StringLit, BooleanLit, NoneLit]


# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class TernaryCondition:
    condition: Expression
    true_value: Expression
    false_value: Expression


@dataclass(frozen=True)
class BinaryOperation:
    left: Expression
    operator: Operator
    right: Expression


@dataclass(frozen=True)
class UnaryOperation:
    operator: Operator
    operand: Expression


@dataclass(frozen=True)
class FunctionCall:
    name: Identifier
    parameters: list[Expression]


@dataclass(frozen=True)
class Parenthesized:
    value: Expression


@dataclass(frozen=True)
class ArrayLiteral:
    values: list[Expression]


@dataclass(frozen=True)
class SingleIndex:
    value: Expression


@dataclass(frozen=True)
class SliceIndex:
    start: Expression | None
    end: Expression | None


ArrayIndexKind = Union[SingleIndex, SliceIndex]


@dataclass(frozen=True)
class ArrayIndex:
    array: AtomicExpression
    index: ArrayIndexKind


AtomicExpression = Union[
    IntegerLit, FloatLit, CharLit, StringLit, BooleanLit, NoneLit,
    SimpleIdentifier, CompoundIdentifier,
    FunctionCall, Parenthesized, ArrayLiteral, ArrayIndex,
]

Expression = Union[
    TernaryCondition, BinaryOperation, UnaryOperation,
    IntegerLit, FloatLit, CharLit, StringLit, BooleanLit, NoneLit,
    SimpleIdentifier, CompoundIdentifier,
    FunctionCall, Parenthesized, ArrayLiteral, ArrayIndex,
]


# ── References ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ArrayReference:
    array: Reference
    index: ArrayIndexKind


Reference = Union[SimpleIdentifier, CompoundIdentifier, ArrayReference]


# ── Statements ───────────────────────────────────────────────────


@dataclass(frozen=True)
class StatementBlock:
    statements: list[Statement] = field(default_factory=list)


@dataclass(frozen=True)
class DeclarationStatement:
    name: Identifier
    var_type: Identifier
    value: Expression
    is_mutable: bool


@dataclass(frozen=True)
class AssignmentStatement:
    reference: Reference
    value: Expression


@dataclass(frozen=True)
class ExpressionStatement:
    value: Expression


@dataclass(frozen=True)
class ReturnStatement:
    value: Expression | None  # None for a bare `return`


@dataclass(frozen=True)
class ConditionalStatement:
    condition: Expression
    body: StatementBlock
    else_body: StatementBlock | None = None


@dataclass(frozen=True)
class LoopStatement:
    condition: Expression
    body: StatementBlock


Statement = Union[
    DeclarationStatement,
    AssignmentStatement,
    ExpressionStatement,
    ReturnStatement,
    ConditionalStatement,
    LoopStatement,
]


# ── Top level ────────────────────────────────────────────────────


@dataclass(frozen=True)
class Parameter:
    name: Identifier
    param_type: Identifier


@dataclass(frozen=True)
class Function:
    name: Identifier
    parameters: list[Parameter]
    return_type: Identifier | None
    body: StatementBlock


@dataclass(frozen=True)
class Import:
    """One imported symbol: ``name as alias from source``."""

    name: Identifier
    alias: Identifier
    source: Identifier


@dataclass(frozen=True)
class Module:
    name: Identifier
    imports: list[Import]
    functions: list[Function]
    statements: StatementBlock
