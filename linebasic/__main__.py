"""CLI entry point for the linebasic interpreter.

Usage:
    python -m linebasic                              interactive mode
    python -m linebasic [-d] <program_file>
    python -m linebasic --emit-ast <program_file>
    python -m linebasic [-d] --ast <ast_json_file>

Options:
  -d, --debug         Print each line before it executes
  --debug-file PATH   Write the execution trace to PATH instead of stdout
  --max-steps N       Stop with an error after N statements
  --seed N            Seed for RND
  --parser NAME       Front end to use: recursive (default) or grammar
  --emit-ast          Parse the given program and emit an AST JSON file
  --ast               Execute a previously emitted AST JSON file

Errors are reported on stderr as ``Error: <category> ...`` and the process
exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .ast_json import program_from_obj, program_to_obj
from .environment import Environment
from .errors import BasicError
from .grammar import parse_program as parse_with_grammar
from .interpreter import Interpreter
from .parser import parse_program
from .repl import InteractiveSession
from .std.io import ConsoleInput, ConsoleOutput, FileOutput

PARSERS = {
    'recursive': parse_program,
    'grammar': parse_with_grammar,
}


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def emit_ast(path: Path, parse) -> None:
    program = parse(read_source(path))
    out_path = path.with_name(path.name + '.ast.json')
    with open(out_path, 'w', encoding='utf-8') as out:
        json.dump(program_to_obj(program), out, ensure_ascii=False, indent=2)
    print(str(out_path))


def load_ast(path: Path):
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return program_from_obj(data)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='linebasic', description="BASIC Interpreter")
    parser.add_argument('-d', '--debug', action='store_true', help='show each line before execution')
    parser.add_argument('--debug-file', metavar='PATH', help='write the debug trace to PATH')
    parser.add_argument('--max-steps', type=int, default=None, metavar='N', help='maximum number of statements to execute')
    parser.add_argument('--seed', type=int, default=None, metavar='N', help='seed for the RND function')
    parser.add_argument('--parser', choices=sorted(PARSERS), default='recursive', help='parser front end')
    parser.add_argument('--version', action='version', version=f"BASIC Interpreter version {__version__}")
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='BASIC program file to execute')
    args = parser.parse_args(argv)
    parse = PARSERS[args.parser]

    try:
        # Emit AST mode
        if args.emit_ast:
            emit_ast(Path(args.emit_ast), parse)
            return

        if args.ast:
            program = load_ast(Path(args.ast))
        elif args.program:
            program = parse(read_source(Path(args.program)))
        else:
            if args.debug or args.debug_file:
                parser.error('debug mode requires a program file')
            InteractiveSession(ConsoleInput(), ConsoleOutput(), max_steps=args.max_steps, seed=args.seed).run()
            return

        debug_output = FileOutput(args.debug_file) if args.debug_file else None
        interpreter = Interpreter(
            debug_mode=args.debug or debug_output is not None,
            debug_output=debug_output,
            max_steps=args.max_steps,
        )
        try:
            interpreter.run(program, Environment(seed=args.seed))
        finally:
            if debug_output is not None:
                debug_output.close()
    except BasicError as e:
        print(f"Error: {e.describe()}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
