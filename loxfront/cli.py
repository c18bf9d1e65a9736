"""
Command-line driver for the Lox front end.

Scans and parses one expression from a file, from `-e`, or from stdin,
then prints its rendering. Diagnostics go to stderr.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .lexer import ErrorReporter, Lexer
from .parser import Parser
from .printer import to_rpn, to_sexpr

# sysexits(3) codes used by the classic Lox driver
EX_DATAERR = 65
EX_NOINPUT = 66

RENDERERS = {
    "rpn": to_rpn,
    "sexpr": to_sexpr,
}


def setup_logging(verbose: bool) -> None:
    logging.disable(logging.NOTSET)
    logging.basicConfig(format="{message}", style="{")
    if verbose:
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)


def build_arg_parser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(
        prog="loxfront",
        description="parse a Lox expression and print it in postfix or prefix form"
    )
    argparser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="verbose debugging output and detailed diagnostics"
    )
    argparser.add_argument(
        "-e", "--expression",
        help="parse this expression instead of reading FILE"
    )
    argparser.add_argument(
        "-f", "--format",
        choices=sorted(RENDERERS),
        default="rpn",
        help="output rendering (default: rpn)"
    )
    argparser.add_argument(
        "-t", "--tokens",
        action="store_true",
        help="print the token stream before the rendering"
    )
    argparser.add_argument("FILE", nargs="?", help="Lox source file (default: stdin)")
    return argparser


def run(source: str, filename: str = "<string>", output_format: str = "rpn",
        show_tokens: bool = False, stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None, detailed: bool = False) -> int:
    """
    Scan, parse and render `source`; return a process exit status.

    With `detailed`, diagnostics are written in their multi-line form
    (code, category, location and help text).
    """
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    reporter = ErrorReporter(filename, stream=stderr, detailed=detailed)

    tokens = Lexer(source, filename, reporter).tokenize()
    if show_tokens:
        for token in tokens:
            print(f"{token.line:>4} {token}", file=stdout)

    result = Parser(tokens, reporter).parse()
    if reporter.had_error or result.expression is None:
        return EX_DATAERR

    print(RENDERERS[output_format](result.expression), file=stdout)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    setup_logging(args.verbose)

    if args.expression is not None:
        source, filename = args.expression, "<expression>"
    elif args.FILE is not None:
        try:
            with open(args.FILE, "r", encoding="utf-8") as lox_file:
                source = lox_file.read()
        except OSError as e:
            print(f"loxfront: cannot read {args.FILE}: {e.strerror}", file=sys.stderr)
            return EX_NOINPUT
        filename = args.FILE
    else:
        source, filename = sys.stdin.read(), "<stdin>"

    return run(source, filename, args.format, args.tokens, detailed=args.verbose)


if __name__ == "__main__":
    sys.exit(main())
