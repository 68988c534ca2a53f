from pathlib import Path

import pytest

from linebasic.errors import BasicRuntimeError
from linebasic.interpreter import Interpreter
from linebasic.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_division_by_zero():
    source = (EXAMPLES / 'division_by_zero.bas').read_text(encoding='utf-8')
    ast = parse_program(source)
    with pytest.raises(BasicRuntimeError) as excinfo:
        Interpreter().run(ast)
    assert excinfo.value.line == 20
    assert excinfo.value.describe() == 'Runtime Error at line 20: runtime error at line 20: division by zero'
