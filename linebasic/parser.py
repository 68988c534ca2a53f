"""Recursive descent parser for line-numbered BASIC.

The parser consumes the token list produced by :mod:`linebasic.lexer` and
builds a :class:`~linebasic.ast.Program`. Each program line is a line
number followed by exactly one statement. A statement ends at the end of
input, at a ``LINENUMBER`` token, or at the first token found on a later
physical line than its line number; the helpers below treat anything past
that point as if the input had ended.

Expression precedence, lowest first:

    comparison   a single optional = < > <= >= <>
    additive     + -            left associative
    term         * /            left associative
    power        ^              right associative
    primary      number, string, variable, call, ( expr ), unary minus

Unary minus binds to the primary that follows it and is represented as
``0 - operand``, so ``-2 ^ 2`` evaluates to 4.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Program, Statement, Expression,
    Assignment, Print, Input, Goto, If, For, Next, End, Remark,
    Literal, Variable, Binary, Comparison, Parentheses, FunctionCall,
)
from .builtin_function import is_builtin
from .errors import BasicSyntaxError, LexicalError
from .lexer import (
    Token, tokenize, COMPARATORS,
    EOF, ILLEGAL, NUMBER, STRING, IDENTIFIER, LINENUMBER,
)
from .types import Value


MIN_LINE_NUMBER = 1
MAX_LINE_NUMBER = 99999

ADDITIVE_OPS = {'PLUS': '+', 'MINUS': '-'}
TERM_OPS = {'MULTIPLY': '*', 'DIVIDE': '/'}


def validate_line_number(text: str) -> int:
    """Convert ``text`` to a line number in the allowed range."""
    try:
        number = int(text)
    except ValueError:
        raise BasicSyntaxError(f"invalid line number: {text}")
    if number < MIN_LINE_NUMBER:
        raise BasicSyntaxError(f"invalid line number: {number} (must be >= {MIN_LINE_NUMBER})")
    if number > MAX_LINE_NUMBER:
        raise BasicSyntaxError(f"invalid line number: {number} (must be <= {MAX_LINE_NUMBER})")
    return number


def target_line(text: str) -> int:
    """Line number named by GOTO; existence is checked when it runs."""
    try:
        return int(text)
    except ValueError:
        raise BasicSyntaxError(f"invalid line number: {text}")


def illegal_token_error(token: Token) -> LexicalError:
    if token.text == 'unterminated string':
        message = 'unterminated string'
    else:
        message = f"illegal character '{token.text}'"
    return LexicalError(message, token.line, token.column)


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].kind != EOF:
            last = self.tokens[-1] if self.tokens else None
            self.tokens.append(Token(EOF, '', last.line if last else 1, last.column if last else 1))
        self.pos = 0
        self.current_line_number = 0
        # physical source line holding the current line number
        self.statement_line = 0

    ###########################################################################
    # Token helpers
    ###########################################################################

    def _raw(self, offset: int = 0) -> Token:
        i = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[i]

    def peek(self, offset: int = 0) -> Token:
        token = self._raw(offset)
        if token.kind == ILLEGAL:
            raise illegal_token_error(token)
        return token

    def at_statement_end(self) -> bool:
        token = self._raw()
        return token.kind in (EOF, LINENUMBER) or token.line > self.statement_line

    def match(self, *kinds: str) -> bool:
        if self.at_statement_end():
            return False
        return self.peek().kind in kinds

    def consume(self, kind: str, message: str) -> Token:
        if not self.match(kind):
            raise BasicSyntaxError(message)
        token = self.peek()
        self.pos += 1
        return token

    ###########################################################################
    # Program structure
    ###########################################################################

    def parse_program(self) -> Program:
        program = Program()
        while self._raw().kind != EOF:
            start = self.peek()
            line_number = self.parse_line_number()
            try:
                statement = self.parse_statement()
                self.expect_statement_end()
            except BasicSyntaxError as e:
                raise BasicSyntaxError(
                    f"error parsing statement at line {line_number}: {e.message}",
                    start.line, start.column,
                ) from e
            if line_number in program.lines:
                raise BasicSyntaxError(f"duplicate line number: {line_number}", start.line, start.column)
            program.lines[line_number] = statement
            program.order.append(line_number)
        program.order.sort()
        return program

    def parse_line_number(self) -> int:
        token = self.peek()
        if token.kind not in (LINENUMBER, NUMBER):
            raise BasicSyntaxError(f"invalid line number: {token.text}", token.line, token.column)
        try:
            number = validate_line_number(token.text)
        except BasicSyntaxError as e:
            raise BasicSyntaxError(e.message, token.line, token.column) from e
        self.pos += 1
        self.current_line_number = number
        self.statement_line = token.line
        return number

    def expect_statement_end(self):
        if self.at_statement_end():
            return
        # the raw token is reported so that stray input is not mistaken for a lexing failure
        token = self._raw()
        raise BasicSyntaxError(f"expected line number after statement, found '{token.text}'")

    ###########################################################################
    # Statements
    ###########################################################################

    def parse_statement(self) -> Statement:
        if self.at_statement_end():
            raise BasicSyntaxError('unexpected end of input')
        token = self.peek()
        kind = token.kind
        if kind == 'PRINT':
            return self.parse_print()
        if kind == 'INPUT':
            return self.parse_input()
        if kind == 'LET':
            self.pos += 1
            return self.parse_assignment()
        if kind == 'GOTO':
            return self.parse_goto()
        if kind == 'IF':
            return self.parse_if()
        if kind == 'FOR':
            return self.parse_for()
        if kind == 'NEXT':
            return self.parse_next()
        if kind == 'END':
            self.pos += 1
            return End()
        if kind == 'REM':
            self.pos += 1
            return Remark(token.text)
        if kind == IDENTIFIER:
            return self.parse_assignment()
        raise BasicSyntaxError(f"unknown statement type: {token.text}")

    def parse_print(self) -> Print:
        self.pos += 1  # PRINT
        expressions: List[Expression] = []
        if self.at_statement_end():
            return Print(expressions)
        try:
            expressions.append(self.parse_expression())
            while self.match('COMMA'):
                self.pos += 1
                expressions.append(self.parse_expression())
        except BasicSyntaxError as e:
            raise BasicSyntaxError(f"error parsing PRINT expressions: {e.message}") from e
        return Print(expressions)

    def parse_input(self) -> Input:
        self.pos += 1  # INPUT
        prompt = ''
        if self.match(STRING):
            prompt = self.peek().text
            self.pos += 1
            if self.match('SEMICOLON'):
                self.pos += 1
        name = self.consume(IDENTIFIER, 'expected variable name in INPUT statement')
        return Input(name.text, prompt)

    def parse_goto(self) -> Goto:
        self.pos += 1  # GOTO
        target = self.consume(NUMBER, 'expected line number after GOTO')
        return Goto(target_line(target.text))

    def parse_if(self) -> If:
        self.pos += 1  # IF
        try:
            condition = self.parse_expression()
        except BasicSyntaxError as e:
            raise BasicSyntaxError(f"error parsing IF condition: {e.message}") from e
        self.consume('THEN', 'expected THEN after IF condition')
        if self.match(NUMBER):
            # THEN 100 is shorthand for THEN GOTO 100
            target = self.peek()
            self.pos += 1
            return If(condition, Goto(target_line(target.text)))
        try:
            then_statement = self.parse_statement()
        except BasicSyntaxError as e:
            raise BasicSyntaxError(f"error parsing THEN statement: {e.message}") from e
        return If(condition, then_statement)

    def parse_for(self) -> For:
        self.pos += 1  # FOR
        variable = self.consume(IDENTIFIER, 'expected variable name in FOR statement')
        self.consume('ASSIGN', 'expected = in FOR statement')
        start = self._sub_expression('FOR start expression')
        self.consume('TO', 'expected TO in FOR statement')
        end = self._sub_expression('FOR end expression')
        step: Expression = Literal(Value.numeric(1))
        if self.match('STEP'):
            self.pos += 1
            step = self._sub_expression('FOR step expression')
        return For(variable.text, start, end, step, self.current_line_number)

    def parse_next(self) -> Next:
        self.pos += 1  # NEXT
        if self.match(IDENTIFIER):
            name = self.peek()
            self.pos += 1
            return Next(name.text)
        return Next()

    def parse_assignment(self) -> Assignment:
        variable = self.consume(IDENTIFIER, 'expected variable name')
        self.consume('ASSIGN', 'expected assignment operator')
        expr = self._sub_expression('assignment expression')
        return Assignment(variable.text, expr)

    def _sub_expression(self, what: str) -> Expression:
        try:
            return self.parse_expression()
        except BasicSyntaxError as e:
            raise BasicSyntaxError(f"error parsing {what}: {e.message}") from e

    ###########################################################################
    # Expressions
    ###########################################################################

    def parse_expression(self) -> Expression:
        left = self.parse_additive()
        if self.match(*COMPARATORS):
            op = COMPARATORS[self.peek().kind]
            self.pos += 1
            right = self.parse_additive()
            return Comparison(left, op, right)
        return left

    def parse_additive(self) -> Expression:
        return self._binary_chain(self.parse_term, ADDITIVE_OPS)

    def parse_term(self) -> Expression:
        return self._binary_chain(self.parse_power, TERM_OPS)

    def _binary_chain(self, parse_operand, operators) -> Expression:
        left = parse_operand()
        while self.match(*operators):
            op = operators[self.peek().kind]
            self.pos += 1
            if self.at_statement_end():
                raise BasicSyntaxError(f"unexpected end of input after operator {op}")
            right = parse_operand()
            left = Binary(left, op, right)
        return left

    def parse_power(self) -> Expression:
        left = self.parse_primary()
        if self.match('POWER'):
            self.pos += 1
            if self.at_statement_end():
                raise BasicSyntaxError('unexpected end of input after operator ^')
            right = self.parse_power()
            return Binary(left, '^', right)
        return left

    def parse_primary(self) -> Expression:
        if self.at_statement_end():
            raise BasicSyntaxError('unexpected end of input')
        token = self.peek()
        if token.kind == NUMBER:
            self.pos += 1
            return Literal(Value.numeric(float(token.text)))
        if token.kind == STRING:
            self.pos += 1
            return Literal(Value.string(token.text))
        if token.kind == IDENTIFIER:
            self.pos += 1
            if self.match('LPAREN'):
                return self.parse_call(token.text)
            if is_builtin(token.text):
                return FunctionCall(token.text, [])
            return Variable(token.text)
        if token.kind == 'LPAREN':
            self.pos += 1
            expr = self.parse_expression()
            self.consume('RPAREN', 'expected )')
            return Parentheses(expr)
        if token.kind == 'MINUS':
            self.pos += 1
            operand = self.parse_primary()
            return Binary(Literal(Value.numeric(0)), '-', operand)
        raise BasicSyntaxError(f"unexpected token in expression: {token.text}")

    def parse_call(self, name: str) -> FunctionCall:
        self.pos += 1  # (
        args: List[Expression] = []
        if self.match('RPAREN'):
            self.pos += 1
            return FunctionCall(name, args)
        while True:
            try:
                args.append(self.parse_expression())
            except BasicSyntaxError as e:
                raise BasicSyntaxError(f"error parsing function argument: {e.message}") from e
            if self.match('COMMA'):
                self.pos += 1
                continue
            break
        self.consume('RPAREN', 'expected ) in function call')
        return FunctionCall(name, args)


def parse_program(source: str) -> Program:
    """Tokenize and parse ``source`` into a Program."""
    try:
        return Parser(tokenize(source)).parse_program()
    except RecursionError:
        raise BasicSyntaxError('expression nested too deeply') from None


def parse_statement(source: str) -> Optional[Statement]:
    """Parse a single numbered line and return its statement."""
    program = parse_program(source)
    if not program.order:
        return None
    return program.lines[program.order[0]]
