"""Built-in function registry.

Each :class:`BuiltinFunction` declares a fixed arity and the value kind
expected in every argument position, and checks both before running its
implementation. Lookup through :func:`lookup` ignores case.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence
import math

from .errors import BasicRuntimeError
from .types import Value, NUMERIC, TEXT, parse_number


_POSITIONS = ('first', 'second', 'third')
_KIND_NAMES = {NUMERIC: 'numeric', TEXT: 'string'}


@dataclass
class BuiltinFunction:
    name: str
    arity: int
    arg_kinds: Sequence[str]
    fn: Callable[..., Value]

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"

    def __call__(self, env: Any, args: List[Value]) -> Value:
        if len(args) != self.arity:
            plural = '' if self.arity == 1 else 's'
            raise BasicRuntimeError(f"{self.name} expected {self.arity} argument{plural}, got {len(args)}")
        for i, (arg, kind) in enumerate(zip(args, self.arg_kinds)):
            if arg.kind != kind:
                raise BasicRuntimeError(f"{_POSITIONS[i]} argument must be {_KIND_NAMES[kind]}")
        return self.fn(env, *args)


def _abs(env, x: Value) -> Value:
    return Value.numeric(abs(x.number))


def _int(env, x: Value) -> Value:
    if math.isinf(x.number) or math.isnan(x.number):
        return x
    return Value.numeric(math.trunc(x.number))


def _rnd(env) -> Value:
    return Value.numeric(env.rng.random())


def _len(env, s: Value) -> Value:
    return Value.numeric(len(s.text.encode('utf-8')))


def _mid(env, s: Value, start: Value, length: Value) -> Value:
    data = s.text.encode('utf-8')
    begin = int(start.number)
    count = int(length.number)
    if begin < 1 or begin > len(data) or count <= 0:
        return Value.string('')
    # 1-based start, clipped at the end of the string
    chunk = data[begin - 1:begin - 1 + count]
    return Value.string(chunk.decode('utf-8', errors='ignore'))


def _str(env, x: Value) -> Value:
    return Value.string(x.to_text())


def _val(env, s: Value) -> Value:
    try:
        return Value.numeric(parse_number(s.text))
    except ValueError:
        raise BasicRuntimeError(f"cannot convert '{s.text}' to number")


BUILTINS: Dict[str, BuiltinFunction] = {
    f.name: f for f in (
        BuiltinFunction('ABS', 1, (NUMERIC,), _abs),
        BuiltinFunction('INT', 1, (NUMERIC,), _int),
        BuiltinFunction('RND', 0, (), _rnd),
        BuiltinFunction('LEN', 1, (TEXT,), _len),
        BuiltinFunction('MID$', 3, (TEXT, NUMERIC, NUMERIC), _mid),
        BuiltinFunction('STR$', 1, (NUMERIC,), _str),
        BuiltinFunction('VAL', 1, (TEXT,), _val),
    )
}


def lookup(name: str) -> Optional[BuiltinFunction]:
    return BUILTINS.get(name.upper())


def is_builtin(name: str) -> bool:
    return name.upper() in BUILTINS
