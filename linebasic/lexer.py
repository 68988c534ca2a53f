"""Tokenizer for line-numbered BASIC source.

The lexer works one character at a time and hands out tokens on demand
through :meth:`Lexer.next_token`. It never raises: malformed input
produces an ``ILLEGAL`` token and the parser decides what to do with it.

A number is reported as ``LINENUMBER`` rather than ``NUMBER`` only when it
is the first token on its physical line and the next word is a keyword.
``10 PRINT X`` therefore starts with a LINENUMBER while ``20 X = 5`` starts
with a plain NUMBER; the parser accepts either in line-number position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List


@dataclass
class Token:
    kind: str
    text: str
    line: int
    column: int


EOF = 'EOF'
ILLEGAL = 'ILLEGAL'
NUMBER = 'NUMBER'
STRING = 'STRING'
IDENTIFIER = 'IDENTIFIER'
LINENUMBER = 'LINENUMBER'

KEYWORDS = {
    'PRINT': 'PRINT',
    'INPUT': 'INPUT',
    'LET': 'LET',
    'IF': 'IF',
    'THEN': 'THEN',
    'GOTO': 'GOTO',
    'FOR': 'FOR',
    'TO': 'TO',
    'NEXT': 'NEXT',
    'STEP': 'STEP',
    'END': 'END',
    'REM': 'REM',
}

SINGLE_CHAR_TOKENS = {
    '=': 'ASSIGN',
    '+': 'PLUS',
    '-': 'MINUS',
    '*': 'MULTIPLY',
    '/': 'DIVIDE',
    '^': 'POWER',
    '<': 'LT',
    '>': 'GT',
    ';': 'SEMICOLON',
    ',': 'COMMA',
    '(': 'LPAREN',
    ')': 'RPAREN',
}

TWO_CHAR_TOKENS = {
    '<=': 'LE',
    '>=': 'GE',
    '<>': 'NE',
}

# Comparator kinds mapped to the operator text used in the AST.
COMPARATORS = {
    'ASSIGN': '=',
    'EQ': '=',
    'LT': '<',
    'GT': '>',
    'LE': '<=',
    'GE': '>=',
    'NE': '<>',
}

_INLINE_SPACE = ' \t\r'


def _is_digit(c: str) -> bool:
    return len(c) == 1 and '0' <= c <= '9'


def _is_letter(c: str) -> bool:
    return len(c) == 1 and (c.isascii() and c.isalpha() or c == '_')


def _is_word_char(c: str) -> bool:
    return _is_letter(c) or _is_digit(c)


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.at_line_start = True

    def has_more_tokens(self) -> bool:
        # EOF is itself a token and is handed out on every later call
        return True

    def _peek_char(self, offset: int = 0) -> str:
        i = self.pos + offset
        if i < len(self.source):
            return self.source[i]
        return ''

    def _advance(self) -> str:
        c = self.source[self.pos]
        self.pos += 1
        if c == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return c

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos] in _INLINE_SPACE + '\n':
            if self._advance() == '\n':
                self.at_line_start = True

    def next_token(self) -> Token:
        self._skip_whitespace()
        line, column = self.line, self.column
        first_on_line = self.at_line_start
        self.at_line_start = False
        if self.pos >= len(self.source):
            return Token(EOF, '', line, column)

        c = self._peek_char()
        if _is_digit(c) or (c == '.' and _is_digit(self._peek_char(1))):
            text = self._read_number()
            kind = LINENUMBER if first_on_line and self._keyword_follows() else NUMBER
            return Token(kind, text, line, column)
        if c == '"':
            return self._read_string(line, column)
        if _is_letter(c):
            return self._read_word(line, column)

        pair = c + self._peek_char(1)
        if pair in TWO_CHAR_TOKENS:
            self._advance()
            self._advance()
            return Token(TWO_CHAR_TOKENS[pair], pair, line, column)
        self._advance()
        if c in SINGLE_CHAR_TOKENS:
            return Token(SINGLE_CHAR_TOKENS[c], c, line, column)
        return Token(ILLEGAL, c, line, column)

    def _read_number(self) -> str:
        start = self.pos
        while _is_digit(self._peek_char()):
            self._advance()
        if self._peek_char() == '.' and _is_digit(self._peek_char(1)):
            self._advance()
            while _is_digit(self._peek_char()):
                self._advance()
        return self.source[start:self.pos]

    def _keyword_follows(self) -> bool:
        i = self.pos
        while i < len(self.source) and self.source[i] in _INLINE_SPACE:
            i += 1
        if i >= len(self.source) or not _is_letter(self.source[i]):
            return False
        start = i
        while i < len(self.source) and _is_word_char(self.source[i]):
            i += 1
        return self.source[start:i].upper() in KEYWORDS

    def _read_string(self, line: int, column: int) -> Token:
        self._advance()  # opening quote
        chars: List[str] = []
        while self.pos < len(self.source):
            ch = self._advance()
            if ch == '"':
                return Token(STRING, ''.join(chars), line, column)
            chars.append(ch)
        return Token(ILLEGAL, 'unterminated string', line, column)

    def _read_word(self, line: int, column: int) -> Token:
        start = self.pos
        while _is_word_char(self._peek_char()):
            self._advance()
        if self._peek_char() == '$':
            self._advance()
        word = self.source[start:self.pos]
        kind = KEYWORDS.get(word.upper())
        if kind is None:
            return Token(IDENTIFIER, word, line, column)
        if kind == 'REM':
            return Token('REM', self._read_remark(), line, column)
        return Token(kind, word, line, column)

    def _read_remark(self) -> str:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] != '\n':
            self._advance()
        return self.source[start:self.pos].strip()


def tokenize(source: str) -> List[Token]:
    """Return every token of ``source`` up to and including the first EOF."""
    return list(iter_tokens(source))


def iter_tokens(source: str) -> Iterator[Token]:
    lexer = Lexer(source)
    while True:
        token = lexer.next_token()
        yield token
        if token.kind == EOF:
            return
