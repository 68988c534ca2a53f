import builtins
from typing import List, Optional

from linebasic.errors import BasicIOError


class ConsoleOutput:
    """Writes program output to standard output."""

    def write_line(self, text: str):
        print(text)

    def write(self, text: str):
        print(text, end='', flush=True)


class ConsoleInput:
    """Reads one line at a time from standard input."""

    def read_line(self) -> str:
        try:
            return builtins.input()
        except EOFError:
            raise BasicIOError('end of input reached')


class BufferedOutput:
    """Collects output in memory; ``lines`` holds every completed line."""

    def __init__(self):
        self.lines: List[str] = []
        self.pending = ''

    def write_line(self, text: str):
        self.lines.append(self.pending + text)
        self.pending = ''

    def write(self, text: str):
        self.pending += text


class ScriptedInput:
    """Hands out pre-supplied lines in order."""

    def __init__(self, lines: Optional[List[str]] = None):
        self.lines = list(lines or [])
        self.position = 0

    def read_line(self) -> str:
        if self.position >= len(self.lines):
            raise BasicIOError('no more input available')
        line = self.lines[self.position]
        self.position += 1
        return line


class FileOutput:
    """Writes lines to a text file, replacing its contents; used for the debug trace."""

    def __init__(self, filename: str):
        try:
            self.f_ptr = open(filename, 'w', encoding='utf-8')
        except PermissionError:
            raise BasicIOError(f'permission denied: {filename}')
        except OSError:
            raise BasicIOError(f'error opening file: {filename}')

    def write_line(self, text: str):
        self.write(text + '\n')

    def write(self, text: str):
        try:
            self.f_ptr.write(text)
            self.f_ptr.flush()
        except (OSError, ValueError):
            raise BasicIOError('error writing file')

    def close(self):
        self.f_ptr.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
