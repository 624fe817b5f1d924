"""Command-line entry point: run a script, run a source string, or start a REPL."""
from __future__ import annotations

import argparse
import logging
import sys

from plang import __version__
from plang.config import get_log_level, get_prompt, get_recursion_limit
from plang.debug_utils.ast_printer import pformat_program
from plang.interpreter import Interpreter
from plang.reader.parser import parse
from plang.types.errors import PlangError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 64


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="plang", description="Run Plang scripts")
    parser.add_argument("script", nargs="?", help="script file to run; omit for a REPL")
    parser.add_argument("-c", "--command", metavar="CODE", help="run CODE instead of a file")
    parser.add_argument(
        "--ast", action="store_true", help="print the parsed program instead of running it"
    )
    parser.add_argument("--log-level", help="logging level (default: $PLANG_LOG_LEVEL or WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_source(source: str, show_ast: bool = False, interp: Interpreter | None = None) -> int:
    """Run (or with `show_ast`, print) one source text; return the process exit code."""
    try:
        if show_ast:
            print(pformat_program(parse(source), color=sys.stdout.isatty()))
        else:
            (interp or Interpreter()).run(source)
    except PlangError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    return EXIT_OK


def run_file(path: str, show_ast: bool = False) -> int:
    try:
        with open(path, encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print(f"Error: cannot read {path}: {e.strerror}", file=sys.stderr)
        return EXIT_USAGE
    logger.debug("Running file %s", path)
    return run_source(source, show_ast)


def repl(show_ast: bool = False) -> int:
    """Read-eval-print loop; declarations persist between lines, errors do not end it."""
    interp = Interpreter()
    prompt = get_prompt()
    while True:
        try:
            line = input(prompt)
        except EOFError:
            print()
            break
        if line.strip() == "exit":
            break
        if not line.strip():
            continue
        run_source(line, show_ast, interp)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        level = get_log_level(args.log_level)
        get_recursion_limit()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command is not None:
        return run_source(args.command, args.ast)
    if args.script is not None:
        return run_file(args.script, args.ast)
    return repl(args.ast)


if __name__ == "__main__":
    sys.exit(main())
