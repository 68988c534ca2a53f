"""Exception types raised by the linebasic toolchain.

Every failure surfaces as a subclass of :class:`BasicError`. The subclass
decides the display category used by the command line and interactive
front ends; the message itself carries the context accumulated while the
error propagated (``runtime error at line 30: division by zero``).
"""

from __future__ import annotations


class BasicError(Exception):
    """Base class for all interpreter errors."""
    category = 'Error'

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def describe(self) -> str:
        if self.line > 0:
            return f"{self.category} at line {self.line}: {self.message}"
        return f"{self.category}: {self.message}"


class LexicalError(BasicError):
    """Illegal character or unterminated string found while tokenizing."""
    category = 'Lexical Error'


class BasicSyntaxError(BasicError):
    """The token stream does not form a valid program."""
    category = 'Syntax Error'


class BasicRuntimeError(BasicError):
    """A statement or expression failed while the program was running."""
    category = 'Runtime Error'


class LogicError(BasicError):
    """Execution ceiling reached or the program was not wired correctly."""
    category = 'Logic Error'


class BasicIOError(BasicError):
    """Reading from an input source or writing to an output sink failed."""
    category = 'I/O Error'
