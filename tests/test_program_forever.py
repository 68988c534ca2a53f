from pathlib import Path

import pytest

from linebasic.errors import LogicError
from linebasic.interpreter import Interpreter
from linebasic.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_forever():
    source = (EXAMPLES / 'forever.bas').read_text(encoding='utf-8')
    ast = parse_program(source)
    with pytest.raises(LogicError, match='maximum 500 steps reached'):
        Interpreter(max_steps=500).run(ast)
