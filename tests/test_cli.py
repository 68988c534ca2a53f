import builtins
import json

import pytest

from linebasic.__main__ import main


def write_program(tmp_path, source, name='prog.bas'):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_runs_program_file(tmp_path, capsys):
    path = write_program(tmp_path, '10 PRINT "Hello"\n20 END\n')
    main([str(path)])
    assert capsys.readouterr().out == 'Hello\n'


def test_debug_trace_goes_to_stdout(tmp_path, capsys):
    path = write_program(tmp_path, '10 X = 2\n20 PRINT X\n')
    main(['-d', str(path)])
    assert capsys.readouterr().out.splitlines() == [
        'Executing line 10: X = 2',
        'Executing line 20: PRINT X',
        '2',
    ]


def test_debug_file(tmp_path, capsys):
    path = write_program(tmp_path, '10 PRINT 1\n')
    trace = tmp_path / 'trace.txt'
    main(['--debug-file', str(trace), str(path)])
    assert capsys.readouterr().out == '1\n'
    assert trace.read_text(encoding='utf-8') == 'Executing line 10: PRINT 1\n'


def test_grammar_parser(tmp_path, capsys):
    path = write_program(tmp_path, '10 FOR I = 1 TO 2\n20 PRINT I * 10\n30 NEXT I\n')
    main(['--parser', 'grammar', str(path)])
    assert capsys.readouterr().out == '10\n20\n'


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'missing.bas')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_runtime_error_exit_status(tmp_path, capsys):
    path = write_program(tmp_path, '10 LET A = 0\n20 PRINT 10 / A\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith('Error: Runtime Error at line 20:')
    assert 'division by zero' in err


def test_syntax_error_exit_status(tmp_path, capsys):
    path = write_program(tmp_path, '10 PRINT 1\n10 PRINT 2\n')
    with pytest.raises(SystemExit) as excinfo:
        main([str(path)])
    assert excinfo.value.code == 1
    assert 'duplicate line number: 10' in capsys.readouterr().err


def test_max_steps(tmp_path, capsys):
    path = write_program(tmp_path, '10 GOTO 10\n')
    with pytest.raises(SystemExit):
        main(['--max-steps', '100', str(path)])
    assert 'execution limit exceeded: maximum 100 steps reached' in capsys.readouterr().err


def test_emit_and_run_ast(tmp_path, capsys):
    path = write_program(tmp_path, '10 PRINT "from json", 1 + 2\n')
    main(['--emit-ast', str(path)])
    ast_path = tmp_path / 'prog.bas.ast.json'
    assert capsys.readouterr().out.strip() == str(ast_path)
    assert json.loads(ast_path.read_text(encoding='utf-8'))['type'] == 'Program'

    main(['--ast', str(ast_path)])
    assert capsys.readouterr().out == 'from json 3\n'


def test_debug_requires_program(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['-d'])
    assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['--version'])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == 'BASIC Interpreter version 1.0.0'


def test_interactive_mode(monkeypatch, capsys):
    lines = iter(['10 PRINT "Hi"', 'RUN'])

    def fake_input(prompt=''):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr(builtins, 'input', fake_input)
    main([])
    out = capsys.readouterr().out.splitlines()
    assert out[0] == 'BASIC Interpreter - Interactive Mode'
    assert 'Running program...' in out
    assert 'Hi' in out
    assert out[-1] == 'READY'
