import pytest

from linebasic.parser import parse_statement
from linebasic.trace import format_statement, trace_line


@pytest.mark.parametrize('source, expected', [
    ('10 X = A + B * 2', 'X = A + B * 2'),
    ('10 LET S$ = "Hi"', 'S$ = "Hi"'),
    ('10 PRINT "Sum:", A + B', 'PRINT "Sum:", A + B'),
    ('10 PRINT', 'PRINT'),
    ('10 INPUT "Name? "; N$', 'INPUT N$'),
    ('10 GOTO 100', 'GOTO 100'),
    ('10 IF X > 5 THEN PRINT X', 'IF ... THEN ...'),
    ('10 IF X THEN 20', 'IF X THEN ...'),
    ('10 FOR I = 1 TO 10', 'FOR I = 1 TO 10 STEP 1'),
    ('10 FOR I = 0 TO 1 STEP 0.25', 'FOR I = 0 TO 1 STEP 0.25'),
    ('10 NEXT I', 'NEXT I'),
    ('10 NEXT', 'NEXT'),
    ('10 END', 'END'),
    ('10 REM hello', 'REM hello'),
    ('10 X = ABS(Y)', 'X = ...'),
    ('10 X = (Y)', 'X = ...'),
])
def test_format_statement(source, expected):
    assert format_statement(parse_statement(source)) == expected


def test_trace_line():
    assert trace_line(30, parse_statement('30 X = 1')) == 'Executing line 30: X = 1'


def test_formatting_does_not_change_nodes():
    stmt = parse_statement('10 PRINT A + 1, "x"')
    before = repr(stmt)
    assert format_statement(stmt) == format_statement(stmt)
    assert repr(stmt) == before
