import builtins
from pathlib import Path

from linebasic.interpreter import Interpreter
from linebasic.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_greeting(monkeypatch, capsys):
    source = (EXAMPLES / 'greeting.bas').read_text(encoding='utf-8')
    ast = parse_program(source)
    inputs = iter(['Ada', '36'])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(inputs))
    env = Interpreter().run(ast)
    out = capsys.readouterr().out.strip().splitlines()
    assert out == [
        'Enter your name: Enter your age: Hello, Ada',
        'Next year you will be 37',
    ]
    assert env.get('NAME$').text == 'Ada'
