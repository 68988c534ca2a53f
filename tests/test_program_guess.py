import builtins
from pathlib import Path

from linebasic.environment import Environment
from linebasic.interpreter import Interpreter
from linebasic.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_guess(monkeypatch, capsys):
    source = (EXAMPLES / 'guess.bas').read_text(encoding='utf-8')
    ast = parse_program(source)
    guesses = iter(str(n) for n in range(1, 11))
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(guesses))
    env = Interpreter().run(ast, Environment(seed=7))
    out = capsys.readouterr().out.strip().splitlines()
    secret = int(env.get('SECRET').number)
    assert 1 <= secret <= 10
    assert len(out) == secret
    assert all(line == 'Your guess? Too low' for line in out[:-1])
    assert out[-1] == 'Your guess? Correct!'
