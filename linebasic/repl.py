"""Interactive line-editing session.

Numbered lines typed at the ``READY`` prompt are stored as program text;
``LIST``, ``RUN``, ``CLEAR`` and ``EXIT``/``QUIT`` operate on that text.
Each line is parsed when it is entered so that mistakes are reported
right away rather than on the next RUN.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import BasicError, BasicIOError
from .interpreter import Interpreter
from .parser import MAX_LINE_NUMBER, MIN_LINE_NUMBER, parse_program
from .std.io import wire_program_io
from .environment import Environment


HEADER = 'BASIC Interpreter - Interactive Mode'
INSTRUCTIONS = 'Type EXIT to quit, LIST to show program, RUN to execute, CLEAR to clear program'
READY = 'READY'
GOODBYE = 'Goodbye!'
RUNNING = 'Running program...'
COMPLETED = 'Program completed'
NO_PROGRAM = 'No program to run'
NO_PROGRAM_LOADED = 'No program loaded'
CLEARED = 'Program cleared'


class InteractiveSession:
    def __init__(self, input: Any, output: Any, max_steps: Optional[int] = None,
                 seed: Optional[int] = None):
        self.input = input
        self.output = output
        self.max_steps = max_steps
        self.seed = seed
        self.lines: Dict[int, str] = {}

    def run(self):
        self.output.write_line(HEADER)
        self.output.write_line(INSTRUCTIONS)
        self.output.write_line('')
        while True:
            self.output.write_line(READY)
            try:
                line = self.input.read_line()
            except BasicIOError:
                break
            line = line.strip()
            if not line:
                continue
            command = line.upper()
            if command in ('EXIT', 'QUIT'):
                self.output.write_line(GOODBYE)
                break
            if command == 'LIST':
                self.list_program()
            elif command == 'RUN':
                self.run_program()
            elif command == 'CLEAR':
                self.clear_program()
            else:
                try:
                    self.enter_line(line)
                except BasicError as e:
                    self.output.write_line(f"Error: {e.message}")

    def enter_line(self, line: str):
        parts = line.split()
        try:
            number = int(parts[0])
        except ValueError:
            raise BasicError(f"immediate commands not supported yet: {line}")
        if number < MIN_LINE_NUMBER or number > MAX_LINE_NUMBER:
            raise BasicError(
                f"line number out of range: {number} "
                f"(must be between {MIN_LINE_NUMBER} and {MAX_LINE_NUMBER})")
        if len(parts) == 1:
            self.lines.pop(number, None)
            return
        statement = ' '.join(parts[1:])
        parse_program(f"{number} {statement}")
        self.lines[number] = statement

    def source(self) -> str:
        return '\n'.join(f"{n} {self.lines[n]}" for n in sorted(self.lines))

    def list_program(self):
        if not self.lines:
            self.output.write_line(NO_PROGRAM_LOADED)
            return
        for n in sorted(self.lines):
            self.output.write_line(f"{n} {self.lines[n]}")

    def run_program(self):
        if not self.lines:
            self.output.write_line(NO_PROGRAM)
            return
        self.output.write_line(RUNNING)
        try:
            program = wire_program_io(parse_program(self.source()), self.output, self.input)
            Interpreter(max_steps=self.max_steps).run(program, Environment(seed=self.seed))
        except BasicError as e:
            self.output.write_line(f"Runtime error: {e.message}")
            return
        self.output.write_line(COMPLETED)

    def clear_program(self):
        self.lines.clear()
        self.output.write_line(CLEARED)
