"""Build and evaluate binary operation trees for arithmetic equations.

A tree is either a float (a leaf) or an ``(op, left, right)`` tuple, where
`op` is one of the `Op` values in `OPS`. Trees are built by recursively
splitting the sanitized equation at its weakest operator (see `eqsplit`).

>>> evaluate_expression("0.1+(2+3)*5/3*2+((5+2)+2)")
25.76666666666667
>>> unparse(build("2(1+2)^2"))
'2 * (1 + 2)^2'
"""
import math
import re
from typing import Callable, NamedTuple

import numpy as np

from eqsplit import InvalidNumber, InvalidSyntax, Tier, classify, split
from sanitize import sanitize


class Op(NamedTuple):
    op: str
    tier: Tier
    fun: Callable

    def __call__(self, *args):
        return float(self.fun(*args))

    def __repr__(self):
        return f"op({self.op!r:})"

    def left_first(self, other):
        # Everything is left-associative, ^ included.
        return self.tier >= other.tier


# numpy ufuncs give IEEE-754 results (inf, nan) where python floats raise.
OP_GROUPS = """
add+ subtract-
multiply* divide/
power^
"""
OPS = {
    o: Op(o, classify(o), getattr(np, fun))
    for [(fun, o)] in map(re.compile(r"^(\w+)(\W)$").findall, OP_GROUPS.split())
}

# Lookup order matters: a leaf holding both π and e is resolved by π.
CONSTANTS = {"π": math.pi, "e": math.e, "pi": math.pi}

_NUMBER = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)")
_SIGNED_OPERAND = re.compile(r"[+-]?[^-+*/^]*")


def canonicalize_num(num):
    """Shortest positional spelling of `num`, e.g. ``3`` for 3.0 or ``0.00001``.

    Scientific notation is never used since ``e`` means Euler's number here.
    """
    return np.format_float_positional(num, trim="-")


def find_constant(leaf):
    for token in CONSTANTS:
        if (i := leaf.find(token)) >= 0:
            return i, token
    return None


def parse_number(text):
    """Parse a plain decimal literal such as ``-5``, ``.5`` or ``5.``.

    Exponent notation (``1E5``), ``inf`` and ``nan`` are rejected on purpose.
    A lowercase ``e`` always means Euler's number, so ``5e2`` cannot be an
    exponent, and accepting only the uppercase spelling would be a trap.
    """
    if not _NUMBER.fullmatch(text):
        raise InvalidNumber(f"{text!r} is not a number")
    return float(text)


def leaf_value(leaf):
    """Resolve a leaf (a literal, a constant or a literal times a constant).

    >>> leaf_value("-2.5")
    -2.5
    >>> leaf_value("2π") == 2 * math.pi
    True
    """
    if not leaf:
        raise InvalidSyntax("missing operand")
    if found := find_constant(leaf):
        i, token = found
        if i == 0:
            if leaf != token:
                raise InvalidSyntax(f"unexpected {leaf[len(token):]!r} after {token!r}")
            return CONSTANTS[token]
        coefficient = parse_number(leaf[:i])
        if trailing := leaf[i + len(token) :]:
            raise InvalidSyntax(f"unexpected {trailing!r} after {token!r}")
        return coefficient * CONSTANTS[token]
    if not _SIGNED_OPERAND.fullmatch(leaf):
        raise InvalidSyntax(f"operator without operand in {leaf!r}")
    return parse_number(leaf)


def build_sanitized(eq):
    # Chains like 1+1+...+1 nest on the left, so walk that spine in a loop and
    # only recurse into right operands.
    spine = []
    while not isinstance(parts := split(eq), str):
        eq, o, right = parts
        spine.append((OPS[o], right))
    tree = leaf_value(parts)
    for op, right in reversed(spine):
        tree = (op, tree, build_sanitized(right))
    return tree


def build(text):
    """Parse `text` into a tree, raising an `eqsplit.EquationError` if malformed."""
    return build_sanitized(sanitize(text))


def evaluate(tree):
    """Compute the value of `tree`.

    Division by zero and out of range powers give inf or nan, never an error.

    >>> evaluate(build("1/0"))
    inf
    >>> math.isnan(evaluate(build("(-8)^(1/3)")))
    True
    """

    def eval_tree(tree):
        spine = []
        while type(tree) is not float:
            op, tree, right = tree
            spine.append((op, right))
        value = tree
        for op, right in reversed(spine):
            value = op(value, eval_tree(right))
        return value

    with np.errstate(all="ignore"):
        return eval_tree(tree)


def evaluate_expression(text):
    return evaluate(build(text))


def unparse(tree):
    """Render `tree` as an equation, bracketing only where the grammar needs it."""
    if type(tree) is float:
        return canonicalize_num(tree)
    (op, x, y) = tree
    xs, ys = unparse(x), unparse(y)
    if type(x) is tuple and not x[0].left_first(op):
        xs = f"({xs})"
    if type(y) is tuple and op.left_first(y[0]):
        ys = f"({ys})"
    return f"{xs} {op.op} {ys}" if op.op != "^" else f"{xs}^{ys}"
