"""Runtime value model for linebasic.

BASIC has exactly two kinds of value: numbers (IEEE doubles) and strings.
A :class:`Value` is a small immutable tagged union over those two kinds.
Variables never carry a declared type; whatever Value is stored in a
variable decides how it prints and how it takes part in arithmetic.

The arithmetic helpers follow the classic interpreter rules: ``+`` is
overloaded for concatenation and tries numeric coercion first, while the
remaining operators insist on numeric operands.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable
import math

from .errors import BasicRuntimeError


NUMERIC = 'Numeric'
TEXT = 'Text'


def format_number(x: float) -> str:
    """Render a float the way C/Go ``%g`` does with the shortest digits.

    Exponent notation is used when the decimal exponent is below -4 or at
    least 6, giving ``1e+06`` and ``1e-05`` while ``123456`` and ``0.0001``
    stay positional. Zero always renders as ``0``.
    """
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return '+Inf' if x > 0 else '-Inf'
    if x == 0:
        return '0'
    # repr gives the shortest digits that round-trip
    d = Decimal(repr(x)).normalize()
    sign, digits, exponent = d.as_tuple()
    exp = len(digits) + exponent - 1
    prefix = '-' if sign else ''
    if exp < -4 or exp >= 6:
        mantissa = str(digits[0])
        if len(digits) > 1:
            mantissa += '.' + ''.join(str(n) for n in digits[1:])
        exp_sign = '+' if exp >= 0 else '-'
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp):02d}"
    return format(d, 'f')


def parse_number(text: str) -> float:
    """Parse ``text`` as a float after stripping surrounding whitespace.

    Raises ValueError for anything that is not a plain float literal.
    Python accepts digit separators (``1_000``) which BASIC does not.
    """
    trimmed = text.strip()
    if '_' in trimmed:
        raise ValueError(trimmed)
    return float(trimmed)


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and x % 2 == 1


def ieee_pow(a: float, b: float) -> float:
    """``a`` raised to ``b`` with IEEE results instead of exceptions.

    Overflow gives a signed infinity, zero to a negative power gives an
    infinity and a negative base with a non-integer exponent gives NaN.
    """
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan


@dataclass(frozen=True)
class Value:
    """A numeric or textual runtime value."""
    kind: str
    number: float = 0.0
    text: str = ''

    @staticmethod
    def numeric(x: float) -> 'Value':
        return Value(NUMERIC, number=float(x))

    @staticmethod
    def string(s: str) -> 'Value':
        return Value(TEXT, text=s)

    @property
    def is_numeric(self) -> bool:
        return self.kind == NUMERIC

    @property
    def is_text(self) -> bool:
        return self.kind == TEXT

    def __repr__(self) -> str:
        if self.is_numeric:
            return f"Numeric({format_number(self.number)})"
        return f"Text({self.text!r})"

    # Conversions

    def to_number(self) -> float:
        if self.is_numeric:
            return self.number
        try:
            return parse_number(self.text)
        except ValueError:
            raise BasicRuntimeError(f"cannot convert string '{self.text}' to number")

    def to_text(self) -> str:
        if self.is_numeric:
            return format_number(self.number)
        return self.text

    def _try_number(self):
        try:
            return self.to_number(), None
        except BasicRuntimeError as e:
            return None, e

    # Arithmetic

    def add(self, other: 'Value') -> 'Value':
        if self.is_text and other.is_text:
            return Value.string(self.text + other.text)
        a, a_err = self._try_number()
        b, b_err = other._try_number()
        if a_err is None and b_err is None:
            return Value.numeric(a + b)
        # a real number next to text that is not numeric is an error,
        # anything else falls back to concatenation
        if (self.is_numeric and b_err is not None) or (other.is_numeric and a_err is not None):
            raise a_err if a_err is not None else b_err
        return Value.string(self.to_text() + other.to_text())

    def subtract(self, other: 'Value') -> 'Value':
        return self._numeric_op(other, 'subtract', lambda a, b: a - b)

    def multiply(self, other: 'Value') -> 'Value':
        return self._numeric_op(other, 'multiply', lambda a, b: a * b)

    def divide(self, other: 'Value') -> 'Value':
        def div(a: float, b: float) -> float:
            if b == 0:
                raise BasicRuntimeError('division by zero')
            return a / b
        return self._numeric_op(other, 'divide', div)

    def power(self, other: 'Value') -> 'Value':
        return self._numeric_op(other, 'raise strings to power', ieee_pow)

    def _numeric_op(self, other: 'Value', operation: str,
                    op: Callable[[float, float], float]) -> 'Value':
        if self.is_text or other.is_text:
            raise BasicRuntimeError(f"cannot {operation} strings")
        return Value.numeric(op(self.number, other.number))

    # Comparison

    def equals(self, other: 'Value') -> bool:
        if self.kind == other.kind:
            if self.is_numeric:
                return self.number == other.number
            return self.text == other.text
        a, a_err = self._try_number()
        b, b_err = other._try_number()
        if a_err is None and b_err is None:
            return a == b
        return self.to_text() == other.to_text()

    def compare(self, other: 'Value') -> int:
        """Return -1, 0 or 1 ordering ``self`` against ``other``."""
        if self.kind == other.kind:
            if self.is_numeric:
                return _cmp(self.number, other.number)
            return _cmp(self.text, other.text)
        a, a_err = self._try_number()
        b, b_err = other._try_number()
        if a_err is None and b_err is None:
            return _cmp(a, b)
        return _cmp(self.to_text(), other.to_text())


def _cmp(a, b) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


TRUE = Value.numeric(-1)
FALSE = Value.numeric(0)


def default_value(name: str) -> Value:
    """Value an unset variable reads as: empty text for ``$`` names, else 0."""
    if name.endswith('$'):
        return Value.string('')
    return Value.numeric(0)
