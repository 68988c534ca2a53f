import pytest

from linebasic.ast import (
    Assignment, Binary, Comparison, End, For, FunctionCall, Goto, If, Input,
    Literal, Next, Parentheses, Print, Remark, Variable,
)
from linebasic.errors import BasicSyntaxError, LexicalError
from linebasic.lexer import tokenize
from linebasic.parser import Parser, parse_program, parse_statement
from linebasic.types import Value


def num(x):
    return Literal(Value.numeric(x))


def text(s):
    return Literal(Value.string(s))


def expr_of(source):
    return parse_statement(f"10 X = {source}").expr


def test_print_statement():
    program = parse_program('10 PRINT "Hello"')
    assert program.order == [10]
    assert program.lines[10] == Print([text('Hello')])


def test_print_list_and_empty_print():
    program = parse_program('10 PRINT "Value:", 42\n20 PRINT\n30 X = 5')
    assert program.lines[10] == Print([text('Value:'), num(42)])
    assert program.lines[20] == Print([])
    assert program.lines[30] == Assignment('X', num(5))


def test_precedence():
    assert expr_of('2 + 3 * 4') == Binary(num(2), '+', Binary(num(3), '*', num(4)))


def test_left_associativity():
    assert expr_of('10 - 5 - 2') == Binary(Binary(num(10), '-', num(5)), '-', num(2))


def test_power_is_right_associative():
    assert expr_of('2 ^ 3 ^ 2') == Binary(num(2), '^', Binary(num(3), '^', num(2)))


def test_unary_minus_binds_to_primary():
    assert expr_of('-2 ^ 2') == Binary(Binary(num(0), '-', num(2)), '^', num(2))


def test_parentheses():
    assert expr_of('(2 + 3) * 4') == Binary(Parentheses(Binary(num(2), '+', num(3))), '*', num(4))


def test_comparison():
    assert expr_of('A <> B') == Comparison(Variable('A'), '<>', Variable('B'))
    assert expr_of('5 = 5') == Comparison(num(5), '=', num(5))


def test_function_calls():
    assert expr_of('MID$(S$, 1, 2)') == FunctionCall('MID$', [Variable('S$'), num(1), num(2)])
    assert expr_of('RND') == FunctionCall('RND', [])
    assert expr_of('FOO()') == FunctionCall('FOO', [])


def test_let_and_plain_assignment_agree():
    assert parse_statement('10 LET A = 1') == parse_statement('10 A = 1')


def test_if_then_statement_and_line():
    assert parse_statement('10 IF X > 5 THEN PRINT X') == If(
        Comparison(Variable('X'), '>', num(5)), Print([Variable('X')]))
    assert parse_statement('10 IF X THEN 100') == If(Variable('X'), Goto(100))
    assert parse_statement('10 IF X THEN GOTO 100') == If(Variable('X'), Goto(100))


def test_for_statement():
    assert parse_statement('20 FOR I = 1 TO 10') == For('I', num(1), num(10), num(1), 20)
    stmt = parse_statement('30 FOR I = 10 TO 1 STEP -2')
    assert stmt.step == Binary(num(0), '-', num(2))
    assert stmt.line_num == 30


def test_next_statement():
    assert parse_statement('10 NEXT') == Next()
    assert parse_statement('10 NEXT I') == Next('I')


def test_input_statement():
    assert parse_statement('10 INPUT "Enter your age: "; AGE') == Input('AGE', 'Enter your age: ')
    assert parse_statement('10 INPUT "Name" N$') == Input('N$', 'Name')
    assert parse_statement('10 INPUT X') == Input('X')


def test_end_and_rem():
    program = parse_program('10 REM start here\n20 END')
    assert program.lines[10] == Remark('start here')
    assert program.lines[20] == End()


def test_lines_are_sorted():
    program = parse_program('30 END\n10 PRINT 1\n20 PRINT 2')
    assert program.order == [10, 20, 30]


def test_empty_program():
    program = parse_program('')
    assert program.order == []
    assert program.lines == {}


def test_parser_accepts_tokens_without_eof():
    tokens = [t for t in tokenize('10 END') if t.kind != 'EOF']
    assert Parser(tokens).parse_program().lines[10] == End()


@pytest.mark.parametrize('source, message', [
    ('10 PRINT 1\n10 PRINT 2', 'duplicate line number: 10'),
    ('0 PRINT 1', 'invalid line number: 0 (must be >= 1)'),
    ('100000 END', 'invalid line number: 100000 (must be <= 99999)'),
    ('PRINT "x"', 'invalid line number: PRINT'),
    ('10 GOTO X', 'error parsing statement at line 10: expected line number after GOTO'),
    ('10 IF X PRINT X', 'expected THEN after IF condition'),
    ('10 FOR = 1 TO 3', 'expected variable name in FOR statement'),
    ('10 FOR I 1 TO 3', 'expected = in FOR statement'),
    ('10 FOR I = 1 3', 'expected TO in FOR statement'),
    ('10 X 5', 'expected assignment operator'),
    ('10 PRINT (1 + 2', 'error parsing PRINT expressions: expected )'),
    ('10 X = 1 +', 'unexpected end of input after operator +'),
    ('10 X = ABS(1', 'expected ) in function call'),
    ('10 X = ABS(,)', 'error parsing function argument: unexpected token in expression: ,'),
    ('10 PRINT 1 2', "expected line number after statement, found '2'"),
    ('10 THEN', 'unknown statement type: THEN'),
    ('10', 'error parsing statement at line 10: unexpected end of input'),
    ('10 INPUT "x";', 'expected variable name in INPUT statement'),
])
def test_syntax_errors(source, message):
    with pytest.raises(BasicSyntaxError) as excinfo:
        parse_program(source)
    assert message in str(excinfo.value)


def test_syntax_error_position():
    with pytest.raises(BasicSyntaxError) as excinfo:
        parse_program('10 PRINT 1\n20 PRINT (')
    assert excinfo.value.line == 2
    assert excinfo.value.describe().startswith('Syntax Error at line 2:')


def test_illegal_character_is_lexical_error():
    with pytest.raises(LexicalError) as excinfo:
        parse_program('10 PRINT $')
    assert (excinfo.value.line, excinfo.value.column) == (1, 10)


def test_unterminated_string_is_lexical_error():
    with pytest.raises(LexicalError, match='unterminated string'):
        parse_program('10 PRINT "abc')


@pytest.mark.parametrize('source, character', [
    ('10 PRINT ²', '²'),
    ('10 LET é = 1', 'é'),
])
def test_non_ascii_characters_are_lexical_errors(source, character):
    with pytest.raises(LexicalError, match=f"illegal character '{character}'"):
        parse_program(source)


def test_deep_nesting_is_a_syntax_error():
    depth = 3000
    source = '10 PRINT ' + '(' * depth + '1' + ')' * depth
    with pytest.raises(BasicSyntaxError, match='expression nested too deeply'):
        parse_program(source)
