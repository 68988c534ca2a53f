from pathlib import Path

from linebasic.interpreter import Interpreter
from linebasic.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_strings(capsys):
    source = (EXAMPLES / 'strings.bas').read_text(encoding='utf-8')
    ast = parse_program(source)
    Interpreter().run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['11', 'HELLO', 'WORLD', '3.14!', '84', '7 3 -3']
