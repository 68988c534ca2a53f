from pathlib import Path

from linebasic.interpreter import Interpreter
from linebasic.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_countdown(capsys):
    source = (EXAMPLES / 'countdown.bas').read_text(encoding='utf-8')
    ast = parse_program(source)
    Interpreter().run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['5', '4', '3', '2', '1', 'Liftoff!']
