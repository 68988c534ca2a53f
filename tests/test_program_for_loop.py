from pathlib import Path

from linebasic.interpreter import Interpreter
from linebasic.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_for_loop(capsys):
    source = (EXAMPLES / 'for_loop.bas').read_text(encoding='utf-8')
    ast = parse_program(source)
    env = Interpreter().run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['1', '2', '3']
    assert env.loop_frames == []
