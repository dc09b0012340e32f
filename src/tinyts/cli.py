"""tinyts CLI — type-check a program given on the command line."""

from __future__ import annotations

import logging
import sys

from . import MODES, check
from .dialects import DEFAULT_MODE
from .errors import CheckError, UnreachableTerm
from .parse import ParseError
from .tokens import TokenizeError
from .types import type_show


USAGE: str = """\
tinyts [OPTIONS] SOURCE

Type-check a tinyts program and print its type.
SOURCE is the program text, or '-' to read it from stdin.

Options:
  --mode MODE  Checking mode: arith, basic, obj, rec-func, sub (default: arith)
  --verbose    Log checking steps to stderr
  --help       Show this help message
"""


def _usage_error(msg: str) -> int:
    print("tinyts: " + msg, file=sys.stderr)
    print(USAGE, end="", file=sys.stderr)
    return 2


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    source: str | None = None
    mode = DEFAULT_MODE
    verbose = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--mode":
            if i + 1 >= len(args):
                return _usage_error("--mode requires a value")
            mode = args[i + 1]
            i += 2
        elif arg.startswith("--mode="):
            mode = arg[len("--mode="):]
            i += 1
        elif arg == "--verbose" or arg == "-v":
            verbose = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            return _usage_error("unknown flag '" + arg + "'")
        elif source is None:
            source = arg
            i += 1
        else:
            return _usage_error("unexpected argument '" + arg + "'")
    if source is None:
        return _usage_error("missing source argument")
    if mode not in MODES:
        return _usage_error("unknown mode '" + mode + "'")

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    if source == "-":
        source = sys.stdin.read()

    try:
        ty = check(source, mode)
    except (TokenizeError, ParseError) as e:
        print("tinyts: parse error: " + str(e), file=sys.stderr)
        return 1
    except CheckError as e:
        print("tinyts: type error: " + str(e), file=sys.stderr)
        return 1
    except UnreachableTerm as e:
        print("tinyts: internal error: " + str(e), file=sys.stderr)
        return 1

    print(type_show(ty))
    return 0


if __name__ == "__main__":
    sys.exit(main())
