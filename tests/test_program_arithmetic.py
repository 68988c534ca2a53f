from pathlib import Path

from linebasic.interpreter import Interpreter
from linebasic.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_arithmetic(capsys):
    source = (EXAMPLES / 'arithmetic.bas').read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['15', '5', '50', '2', '512', '20']
