# linebasic package
# A tokenizer, parser and interpreter for line-numbered BASIC programs.
from typing import Any, Optional

from .environment import Environment
from .errors import BasicError
from .interpreter import Interpreter
from .parser import parse_program
from .std.io import wire_program_io

__version__ = '1.0.0'


def run_program(source: str, output: Any = None, input: Any = None,
                debug_mode: bool = False, debug_output: Any = None,
                max_steps: Optional[int] = None, seed: Optional[int] = None,
                parser: str = 'recursive') -> Environment:
    """Parse and execute BASIC ``source``, returning the final environment.

    PRINT and INPUT use the console unless ``output``/``input`` are given.
    ``parser`` selects the front end: ``recursive`` or ``grammar``.
    """
    if parser == 'grammar':
        from .grammar import parse_program as parse_with_grammar
        program = parse_with_grammar(source)
    elif parser == 'recursive':
        program = parse_program(source)
    else:
        raise ValueError(f"unknown parser: {parser}")
    interpreter = Interpreter(debug_mode=debug_mode, debug_output=debug_output, max_steps=max_steps)
    wire_program_io(
        program,
        output if output is not None else interpreter.output,
        input if input is not None else interpreter.input,
    )
    return interpreter.run(program, Environment(seed=seed))


__all__ = [
    'run_program',
    'parse_program',
    'wire_program_io',
    'Interpreter',
    'Environment',
    'BasicError',
]
