"""Command line calculator.

    python calc.py "5pi(5+2)/4"
    echo "-(1+3)(5+34)" | python calc.py

Prints the value and exits with 0, or prints nothing and exits with 1 if the
equation is malformed. Set DEBUG to see the parsed tree on stderr.
"""
import os
import sys

from eqsplit import EquationError
from optree import build_sanitized, evaluate, unparse
from sanitize import sanitize

DEBUG = bool(os.getenv("DEBUG", False))


def read_equation(argv):
    if argv:
        return " ".join(argv)
    if sys.stdin.isatty():
        print("Enter Equation :")
    return sys.stdin.readline().rstrip("\r\n")


def main(argv=None):
    eq = read_equation(sys.argv[1:] if argv is None else argv)
    try:
        sanitized = sanitize(eq)
        tree = build_sanitized(sanitized)
    except EquationError as e:
        if DEBUG:
            print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1
    if DEBUG:
        print(f"sanitized: {sanitized}", file=sys.stderr)
        print(f"tree: {unparse(tree)}", file=sys.stderr)
    print(repr(evaluate(tree)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
