"""
Command line front end: `exprlang [FILE ...]`

Parses each file (or stdin) unit by unit, printing a status line per unit
and a diagnostic per failure. Exits 0 when everything parsed and 1 when any
unit failed.

Author: xwest
"""

import argparse
import sys
from typing import Dict, List, Optional, Tuple

from . import __version__
from .driver import run_source
from .parser.parser import standard_precedence


def parse_precedence_option(text: str) -> Tuple[str, int]:
    """Parse an `OP=N` option value into (operator character, precedence)."""
    op, sep, value = text.rpartition("=")
    if not sep or len(op) != 1 or not op.isascii():
        raise argparse.ArgumentTypeError(
            f"expected OP=N with a single ASCII operator character, got {text!r}"
        )
    try:
        precedence = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"precedence must be an integer, got {value!r}")
    if precedence <= 0:
        raise argparse.ArgumentTypeError(f"precedence must be positive, got {precedence}")
    return op, precedence


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprlang",
        description="Parse exprlang source into syntax trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    exprlang                          # Interactive session on stdin
    exprlang lib.ex main.ex           # Parse files in order
    exprlang --show-ast prog.ex       # Print each parsed unit
    exprlang --precedence '%=40' x.ex # Add an operator
        """
    )

    parser.add_argument('files', nargs='*', metavar='FILE',
                        help='Source files to parse (default: stdin)')
    parser.add_argument('--prompt', dest='prompt', action='store_true', default=None,
                        help="Print a 'ready> ' prompt before each unit")
    parser.add_argument('--no-prompt', dest='prompt', action='store_false',
                        help='Never print the prompt')
    parser.add_argument('--show-ast', action='store_true',
                        help='Print the tree of every parsed unit')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print diagnostics')
    parser.add_argument('--precedence', action='append', default=[],
                        type=parse_precedence_option, metavar='OP=N',
                        help='Add or override a binary operator precedence (repeatable)')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    return parser


def build_precedence_table(overrides: List[Tuple[str, int]]) -> Dict[str, int]:
    table = standard_precedence()
    for op, precedence in overrides:
        table[op] = precedence
    return table


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)
    precedence = build_precedence_table(args.precedence)

    options = dict(show_ast=args.show_ast, quiet=args.quiet)
    failed = False

    if not args.files:
        # Undecodable bytes become U+FFFD and are rejected by the parser
        if hasattr(sys.stdin, "reconfigure"):
            sys.stdin.reconfigure(errors="replace")
        prompt = sys.stdin.isatty() if args.prompt is None else args.prompt
        result = run_source(sys.stdin, "<stdin>", precedence, prompt=prompt, **options)
        failed = not result.success
    else:
        for path in args.files:
            try:
                with open(path, 'r', encoding='utf-8', errors='replace') as f:
                    result = run_source(f, path, precedence,
                                        prompt=bool(args.prompt), **options)
            except OSError as e:
                print(f"exprlang: cannot read {path}: {e.strerror}", file=sys.stderr)
                failed = True
                continue
            failed = failed or not result.success

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
