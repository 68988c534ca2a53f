"""Abstract Syntax Tree (AST) definitions for linebasic.

A parsed program is a :class:`Program` mapping each line number to exactly
one statement. Statements and expressions form two closed node sets; the
interpreter and the trace renderer dispatch over them with isinstance.

PRINT and INPUT statements hold references to the output sink and input
source they use. Those references are wired after parsing and are not part
of a node's identity, so two parses of the same source compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .types import Value


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


###############################################################################
# Expressions
###############################################################################

@dataclass
class Expression(Node):
    pass


@dataclass
class Literal(Expression):
    value: Value


@dataclass
class Variable(Expression):
    name: str


@dataclass
class Binary(Expression):
    left: Expression
    op: str  # one of + - * / ^
    right: Expression


@dataclass
class Comparison(Expression):
    left: Expression
    op: str  # one of = < > <= >= <>
    right: Expression


@dataclass
class Parentheses(Expression):
    expr: Expression


@dataclass
class FunctionCall(Expression):
    name: str
    args: List[Expression]


###############################################################################
# Statements
###############################################################################

@dataclass
class Statement(Node):
    pass


@dataclass
class Assignment(Statement):
    variable: str
    expr: Expression


@dataclass
class Print(Statement):
    expressions: List[Expression]
    output: Any = field(default=None, compare=False, repr=False)


@dataclass
class Input(Statement):
    variable: str
    prompt: str = ''
    input: Any = field(default=None, compare=False, repr=False)
    output: Any = field(default=None, compare=False, repr=False)


@dataclass
class Goto(Statement):
    target_line: int


@dataclass
class If(Statement):
    condition: Expression
    then_statement: Statement


@dataclass
class For(Statement):
    variable: str
    start: Expression
    end: Expression
    step: Expression
    line_num: int = 0


@dataclass
class Next(Statement):
    variable: str = ''


@dataclass
class End(Statement):
    pass


@dataclass
class Remark(Statement):
    text: str = ''


###############################################################################
# Program
###############################################################################

@dataclass
class Program(Node):
    lines: Dict[int, Statement] = field(default_factory=dict)
    order: List[int] = field(default_factory=list)

    def index_of(self, line: int) -> int:
        """Position of ``line`` in execution order, or -1 when absent."""
        try:
            return self.order.index(line)
        except ValueError:
            return -1

    def statements(self):
        """Yield ``(line, statement)`` pairs in execution order."""
        for line in self.order:
            yield line, self.lines[line]
