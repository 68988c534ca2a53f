"""Text renderings of statements for the debug trace.

These functions only read the nodes they are given; rendering the same
program twice yields the same lines.
"""

from __future__ import annotations

from .ast import (
    Statement, Expression,
    Assignment, Print, Input, Goto, If, For, Next, End, Remark,
    Literal, Variable, Binary,
)


def format_expression(expr: Expression) -> str:
    if isinstance(expr, Literal):
        if expr.value.is_text:
            return f'"{expr.value.text}"'
        return expr.value.to_text()
    if isinstance(expr, Variable):
        return expr.name
    if isinstance(expr, Binary):
        return f"{format_expression(expr.left)} {expr.op} {format_expression(expr.right)}"
    return '...'


def format_statement(stmt: Statement) -> str:
    if isinstance(stmt, Assignment):
        return f"{stmt.variable} = {format_expression(stmt.expr)}"
    if isinstance(stmt, Print):
        if not stmt.expressions:
            return 'PRINT'
        return 'PRINT ' + ', '.join(format_expression(e) for e in stmt.expressions)
    if isinstance(stmt, Input):
        return f"INPUT {stmt.variable}"
    if isinstance(stmt, Goto):
        return f"GOTO {stmt.target_line}"
    if isinstance(stmt, If):
        return f"IF {format_expression(stmt.condition)} THEN ..."
    if isinstance(stmt, For):
        return (f"FOR {stmt.variable} = {format_expression(stmt.start)} "
                f"TO {format_expression(stmt.end)} STEP {format_expression(stmt.step)}")
    if isinstance(stmt, Next):
        return f"NEXT {stmt.variable}" if stmt.variable else 'NEXT'
    if isinstance(stmt, End):
        return 'END'
    if isinstance(stmt, Remark):
        return f"REM {stmt.text}" if stmt.text else 'REM'
    return type(stmt).__name__


def trace_line(line_number: int, stmt: Statement) -> str:
    return f"Executing line {line_number}: {format_statement(stmt)}"
