"""Grammar-driven parser for line-numbered BASIC.

This module is an alternative front end to :mod:`linebasic.parser`. It
describes the language as a Lark LALR grammar and produces the same
:class:`~linebasic.ast.Program` the recursive descent parser builds.

Lark is not given its own lexer. Tokens come from
:mod:`linebasic.lexer` through :class:`TokenStreamLexer`, which adapts
them in two ways before the grammar sees them:

1. A ``NUMBER`` that is the first token on its physical line becomes a
   ``LINENUMBER``, so every program line starts with the same terminal.
2. Keywords and punctuation are renamed with a leading underscore so Lark
   leaves them out of the parse tree.

The resulting parse tree is transformed into AST nodes by
:class:`ASTTransformer`.
"""

from __future__ import annotations

from typing import Iterator

from lark import Lark, Transformer, Token as LarkToken
from lark.exceptions import UnexpectedInput, UnexpectedToken, VisitError
from lark.lexer import Lexer as LarkLexer

from .ast import (
    Program, Statement, Goto, If, For, Next, End, Remark,
    Assignment, Print, Input,
    Literal, Variable, Binary, Comparison, Parentheses, FunctionCall,
)
from .builtin_function import is_builtin
from .errors import BasicError, BasicSyntaxError
from .lexer import iter_tokens, COMPARATORS, EOF, ILLEGAL, NUMBER, LINENUMBER
from .parser import illegal_token_error, target_line, validate_line_number
from .types import Value


STRUCTURAL_KINDS = {
    'PRINT', 'INPUT', 'LET', 'IF', 'THEN', 'GOTO', 'FOR', 'TO', 'NEXT',
    'STEP', 'END', 'SEMICOLON', 'COMMA', 'LPAREN', 'RPAREN',
}


BASIC_GRAMMAR = r"""
    start: line*
    line: LINENUMBER statement

    ?statement: print_stmt
              | input_stmt
              | let_stmt
              | assign_stmt
              | goto_stmt
              | if_stmt
              | for_stmt
              | next_stmt
              | end_stmt
              | rem_stmt

    print_stmt: _PRINT [expression (_COMMA expression)*]
    input_stmt: _INPUT [STRING [_SEMICOLON]] IDENTIFIER
    let_stmt: _LET IDENTIFIER ASSIGN expression
    assign_stmt: IDENTIFIER ASSIGN expression
    goto_stmt: _GOTO NUMBER
    if_stmt: _IF expression _THEN statement
           | _IF expression _THEN NUMBER -> if_goto_stmt
    for_stmt: _FOR IDENTIFIER ASSIGN expression _TO expression [_STEP expression]
    next_stmt: _NEXT [IDENTIFIER]
    end_stmt: _END
    rem_stmt: REM

    // Expressions, lowest precedence first
    ?expression: additive
               | additive comparator additive -> comparison
    comparator: ASSIGN | EQ | LT | GT | LE | GE | NE
    ?additive: term
             | additive (PLUS | MINUS) term -> binary
    ?term: power
         | term (MULTIPLY | DIVIDE) power -> binary
    ?power: primary
          | primary POWER power -> binary
    ?primary: NUMBER -> number
            | STRING -> string
            | IDENTIFIER -> variable
            | IDENTIFIER _LPAREN [expression (_COMMA expression)*] _RPAREN -> call
            | _LPAREN expression _RPAREN -> parens
            | MINUS primary -> negate

    %declare LINENUMBER NUMBER STRING IDENTIFIER REM
    %declare ASSIGN EQ LT GT LE GE NE PLUS MINUS MULTIPLY DIVIDE POWER
    %declare _PRINT _INPUT _LET _IF _THEN _GOTO _FOR _TO _NEXT _STEP _END
    %declare _SEMICOLON _COMMA _LPAREN _RPAREN
"""


class TokenStreamLexer(LarkLexer):
    """Feeds tokens from :mod:`linebasic.lexer` into Lark."""

    def __init__(self, lexer_conf):
        pass

    def lex(self, data) -> Iterator[LarkToken]:
        # newer Lark releases wrap the input text in a TextSlice
        source = data if isinstance(data, str) else data.text
        last_line = 0
        for token in iter_tokens(source):
            if token.kind == EOF:
                return
            if token.kind == ILLEGAL:
                raise illegal_token_error(token)
            kind = token.kind
            if kind == NUMBER and token.line > last_line:
                kind = LINENUMBER
            elif kind in STRUCTURAL_KINDS:
                kind = '_' + kind
            last_line = token.line
            yield LarkToken(kind, token.text, line=token.line, column=token.column)


BASIC_PARSER = Lark(
    BASIC_GRAMMAR,
    parser='lalr',
    lexer=TokenStreamLexer,
    maybe_placeholders=False,
)


def _assign_loop_line(stmt: Statement, line_number: int):
    if isinstance(stmt, For):
        stmt.line_num = line_number
    elif isinstance(stmt, If):
        _assign_loop_line(stmt.then_statement, line_number)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        program = Program()
        for line_token, line_number, stmt in items:
            if line_number in program.lines:
                raise BasicSyntaxError(f"duplicate line number: {line_number}", line_token.line, line_token.column)
            program.lines[line_number] = stmt
            program.order.append(line_number)
        program.order.sort()
        return program

    def line(self, items):
        token, stmt = items
        try:
            number = validate_line_number(str(token))
        except BasicSyntaxError as e:
            raise BasicSyntaxError(e.message, token.line, token.column) from e
        _assign_loop_line(stmt, number)
        return token, number, stmt

    # Statements

    def print_stmt(self, items):
        return Print(list(items))

    def input_stmt(self, items):
        prompt = ''
        if len(items) == 2:
            prompt = str(items[0])
        return Input(str(items[-1]), prompt)

    def assign_stmt(self, items):
        name, _, expr = items
        return Assignment(str(name), expr)

    def let_stmt(self, items):
        return self.assign_stmt(items)

    def goto_stmt(self, items):
        return Goto(target_line(str(items[0])))

    def if_stmt(self, items):
        condition, then_statement = items
        return If(condition, then_statement)

    def if_goto_stmt(self, items):
        condition, target = items
        return If(condition, Goto(target_line(str(target))))

    def for_stmt(self, items):
        step = items[4] if len(items) > 4 else Literal(Value.numeric(1))
        return For(str(items[0]), items[2], items[3], step)

    def next_stmt(self, items):
        return Next(str(items[0]) if items else '')

    def end_stmt(self, items):
        return End()

    def rem_stmt(self, items):
        return Remark(str(items[0]))

    # Expressions

    def comparison(self, items):
        left, op, right = items
        return Comparison(left, op, right)

    def comparator(self, items):
        return COMPARATORS[items[0].type]

    def binary(self, items):
        left, op, right = items
        return Binary(left, str(op), right)

    def negate(self, items):
        return Binary(Literal(Value.numeric(0)), '-', items[1])

    def number(self, items):
        return Literal(Value.numeric(float(items[0])))

    def string(self, items):
        return Literal(Value.string(str(items[0])))

    def variable(self, items):
        name = str(items[0])
        if is_builtin(name):
            return FunctionCall(name, [])
        return Variable(name)

    def call(self, items):
        return FunctionCall(str(items[0]), list(items[1:]))

    def parens(self, items):
        return Parentheses(items[0])


def _syntax_error(e: UnexpectedInput) -> BasicSyntaxError:
    line = getattr(e, 'line', 0) or 0
    column = getattr(e, 'column', 0) or 0
    if isinstance(e, UnexpectedToken):
        if e.token.type == '$END':
            return BasicSyntaxError('unexpected end of input', line, column)
        return BasicSyntaxError(f"unexpected token '{e.token}'", line, column)
    return BasicSyntaxError('invalid program', line, column)


def parse_program(source: str) -> Program:
    """Parse BASIC source into a Program using the grammar front end."""
    try:
        tree = BASIC_PARSER.parse(source)
    except UnexpectedInput as e:
        raise _syntax_error(e) from e
    try:
        return ASTTransformer().transform(tree)
    except RecursionError:
        raise BasicSyntaxError('expression nested too deeply') from None
    except VisitError as e:
        if isinstance(e.orig_exc, BasicError):
            raise e.orig_exc from e
        if isinstance(e.orig_exc, RecursionError):
            raise BasicSyntaxError('expression nested too deeply') from e
        raise

