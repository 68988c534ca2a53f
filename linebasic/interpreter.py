"""Interpreter for line-numbered BASIC programs.

The interpreter walks a :class:`~linebasic.ast.Program` in line-number
order. Each statement runs against an :class:`Environment`; a statement
changes control flow by moving ``env.program_counter`` (FOR/NEXT loops) or
by jumping (GOTO, including GOTO through IF-THEN). After every statement
the loop decides whether to fall through to the next line or continue at
the line the program counter now names.

Every error raised while a statement runs is re-raised with a
``runtime error at line N:`` prefix and stops the run.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from .ast import (
    Program, Statement, Expression,
    Assignment, Print, Input, Goto, If, For, Next, End, Remark,
    Literal, Variable, Binary, Comparison, Parentheses, FunctionCall,
)
from .builtin_function import lookup
from .environment import Environment, LoopFrame
from .errors import BasicError, BasicRuntimeError, LogicError
from .std.io import ConsoleInput, ConsoleOutput
from .trace import trace_line
from .types import Value, TRUE, FALSE


BINARY_OPS: Dict[str, Callable[[Value, Value], Value]] = {
    '+': Value.add,
    '-': Value.subtract,
    '*': Value.multiply,
    '/': Value.divide,
    '^': Value.power,
}

COMPARISON_OPS: Dict[str, Callable[[int], bool]] = {
    '=': lambda c: c == 0,
    '<>': lambda c: c != 0,
    '<': lambda c: c < 0,
    '>': lambda c: c > 0,
    '<=': lambda c: c <= 0,
    '>=': lambda c: c >= 0,
}


class Interpreter:
    """Executes BASIC programs one statement at a time."""
    def __init__(self, debug_mode: bool = False, debug_output: Any = None,
                 max_steps: Optional[int] = None, program: Optional[Program] = None):
        self.debug_mode = debug_mode
        self.debug_output = debug_output
        self.max_steps = max_steps
        self.program = program
        self.step_count = 0
        # used by PRINT and INPUT statements that were not wired to sinks
        self.output = ConsoleOutput()
        self.input = ConsoleInput()

    def debug(self, msg: str):
        if self.debug_mode:
            if self.debug_output is not None:
                self.debug_output.write_line(msg)
            else:
                print(msg)

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Environment:
        if env is None:
            env = Environment()
        self.program = program
        self.step_count = 0
        env.halted = False
        env.jumped = False
        order = program.order
        index = 0
        while index < len(order):
            if self.max_steps is not None and self.max_steps > 0 and self.step_count >= self.max_steps:
                raise LogicError(f"execution limit exceeded: maximum {self.max_steps} steps reached")
            line = order[index]
            stmt = program.lines[line]
            env.program_counter = line
            self.debug(trace_line(line, stmt))
            env.jumped = False
            self.step_count += 1
            try:
                self.execute(stmt, env)
            except BasicError as e:
                raise type(e)(f"runtime error at line {line}: {e.message}", line) from e

            if env.halted:
                break
            if not env.jumped and env.program_counter == line:
                index += 1
                continue
            next_index = program.index_of(env.program_counter)
            if next_index < 0:
                break
            # NEXT loops back to its FOR line; the body starts after it
            if self.ran_next(stmt) and isinstance(program.lines[env.program_counter], For):
                next_index += 1
            index = next_index
        return env

    def ran_next(self, stmt: Statement) -> bool:
        if isinstance(stmt, If):
            return self.ran_next(stmt.then_statement)
        return isinstance(stmt, Next)

    # Statements
    def execute(self, node: Statement, env: Environment):
        if isinstance(node, Assignment):
            env.set(node.variable, self.evaluate(node.expr, env))
            return
        if isinstance(node, Print):
            values = [self.evaluate(e, env).to_text() for e in node.expressions]
            self.output_for(node).write_line(' '.join(values))
            return
        if isinstance(node, Input):
            self.execute_input(node, env)
            return
        if isinstance(node, Goto):
            self.jump(node.target_line, env)
            return
        if isinstance(node, If):
            cond = self.evaluate(node.condition, env)
            if self.is_truthy(cond):
                self.execute(node.then_statement, env)
            return
        if isinstance(node, For):
            self.execute_for(node, env)
            return
        if isinstance(node, Next):
            self.execute_next(node, env)
            return
        if isinstance(node, End):
            env.halted = True
            return
        if isinstance(node, Remark):
            return
        raise BasicRuntimeError(f"unsupported statement: {type(node).__name__}")

    def output_for(self, node: Statement):
        return node.output if node.output is not None else self.output

    def execute_input(self, node: Input, env: Environment):
        if not node.variable:
            raise BasicRuntimeError('invalid variable name')
        source = node.input if node.input is not None else self.input
        self.output_for(node).write(node.prompt or '? ')
        text = source.read_line()
        if node.variable.endswith('$'):
            env.set(node.variable, Value.string(text))
        else:
            env.set(node.variable, Value.numeric(Value.string(text).to_number()))

    def jump(self, target: int, env: Environment):
        if self.program is None:
            raise LogicError('program reference is nil')
        if target not in self.program.lines:
            raise BasicRuntimeError(f"line number {target} does not exist")
        env.program_counter = target
        env.jumped = True

    def execute_for(self, node: For, env: Environment):
        start = self.evaluate(node.start, env).to_number()
        end = self.evaluate(node.end, env).to_number()
        step = self.evaluate(node.step, env).to_number()
        if not node.variable:
            raise BasicRuntimeError('invalid variable name')
        if step == 0:
            raise BasicRuntimeError('step cannot be zero')
        env.set(node.variable, Value.numeric(start))
        line_num = node.line_num or env.program_counter
        env.push_loop(LoopFrame(node.variable, start, end, step, line_num))

    def execute_next(self, node: Next, env: Environment):
        frame = env.top_loop()
        if frame is None:
            raise BasicRuntimeError('NEXT without FOR')
        if node.variable and node.variable.upper() != frame.variable.upper():
            raise BasicRuntimeError(f"NEXT {node.variable} without matching FOR {node.variable}")
        frame.current += frame.step
        env.set(frame.variable, Value.numeric(frame.current))
        if frame.step > 0:
            keep_going = frame.current <= frame.end
        else:
            keep_going = frame.current >= frame.end
        if keep_going:
            env.program_counter = frame.line_num
        else:
            env.pop_loop()

    # Expressions
    def evaluate(self, node: Expression, env: Environment) -> Value:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Binary):
            try:
                left = self.evaluate(node.left, env)
            except BasicError as e:
                raise BasicRuntimeError(f"error evaluating left operand: {e.message}") from e
            try:
                right = self.evaluate(node.right, env)
            except BasicError as e:
                raise BasicRuntimeError(f"error evaluating right operand: {e.message}") from e
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, Comparison):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.compare(node.op, left, right)
        if isinstance(node, Parentheses):
            try:
                return self.evaluate(node.expr, env)
            except BasicError as e:
                raise BasicRuntimeError(f"error evaluating parenthesized expression: {e.message}") from e
        if isinstance(node, FunctionCall):
            return self.call_function(node, env)
        raise BasicRuntimeError(f"unsupported expression: {type(node).__name__}")

    def apply_binary_op(self, op: str, left: Value, right: Value) -> Value:
        fn = BINARY_OPS.get(op)
        if fn is None:
            raise BasicRuntimeError(f"unsupported operator: {op}")
        return fn(left, right)

    def compare(self, op: str, left: Value, right: Value) -> Value:
        if left.kind != right.kind:
            raise BasicRuntimeError(f"type mismatch: cannot compare {left.kind} with {right.kind}")
        test = COMPARISON_OPS.get(op)
        if test is None:
            raise BasicRuntimeError(f"unsupported comparison operator: {op}")
        if op in ('=', '<>'):
            result = left.equals(right) == (op == '=')
        else:
            result = test(left.compare(right))
        return TRUE if result else FALSE

    def call_function(self, node: FunctionCall, env: Environment) -> Value:
        name = node.name.upper()
        fn = lookup(name)
        if fn is None:
            raise BasicRuntimeError(f"unknown function: {name}")
        if len(node.args) != fn.arity:
            raise BasicRuntimeError(f"function {name} expects {fn.arity} argument(s), got {len(node.args)}")
        args: List[Value] = []
        for i, arg in enumerate(node.args):
            try:
                args.append(self.evaluate(arg, env))
            except BasicError as e:
                raise BasicRuntimeError(f"error evaluating argument {i}: {e.message}") from e
        try:
            return fn(env, args)
        except BasicError as e:
            raise BasicRuntimeError(f"error calling function {name}: {e.message}") from e

    def is_truthy(self, value: Value) -> bool:
        return value.is_numeric and value.number != 0
