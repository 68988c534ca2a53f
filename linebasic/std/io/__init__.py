from .basic_io import BufferedOutput, ConsoleInput, ConsoleOutput, FileOutput, ScriptedInput
from linebasic.ast import If, Input, Print, Program, Statement
from typing import Any


def wire_statement(stmt: Statement, output: Any, input: Any):
    if isinstance(stmt, Print):
        stmt.output = output
    elif isinstance(stmt, Input):
        stmt.output = output
        stmt.input = input
    elif isinstance(stmt, If):
        wire_statement(stmt.then_statement, output, input)


def wire_program_io(program: Program, output: Any, input: Any) -> Program:
    """Attach ``output`` and ``input`` to every PRINT and INPUT in ``program``.

    Statements nested inside IF-THEN are wired too.
    """
    for _, stmt in program.statements():
        wire_statement(stmt, output, input)
    return program


__all__ = [
    'BufferedOutput',
    'ConsoleInput',
    'ConsoleOutput',
    'FileOutput',
    'ScriptedInput',
    'wire_program_io',
]
