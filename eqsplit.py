"""Split an arithmetic equation into ``(left, operator, right)`` at its weakest operator.

Equations are plain strings and are never tokenized: every split slices the
string and the halves are split again until only leaves (numbers and named
constants) remain. The root of an equation is its weakest operator at the top
nesting level, i.e. a genuine (binary, not sign) ``+``/``-`` if there is one,
else ``*``/``/``, else ``^``. All three tiers split at their *last* top-level
occurrence, so every operator, ``^`` included, groups to the left.
Parenthesized groups are skipped as a unit and stripped once they wrap the
whole equation.

>>> split("1+2*3")
('1', '+', '2*3')
>>> split("(2+3)*5/3")
('(2+3)*5', '/', '3')
>>> split("-(1+3)")
('-1', '*', '(1+3)')
>>> split("(-5)")
'-5'
"""
import enum


class EquationError(ValueError):
    """Anything that makes an equation impossible to evaluate."""


class UnmatchedOpen(EquationError):
    pass


class UnmatchedClose(EquationError):
    pass


class InvalidOperatorBeforeBracket(EquationError):
    pass


class InvalidSyntax(EquationError):
    pass


class InvalidNumber(EquationError):
    pass


class Tier(enum.IntEnum):
    LOW = 0
    MEDIUM = 1
    HIGH = 2


TIERS = {c: tier for tier, ops in zip(Tier, ["+-", "*/", "^"]) for c in ops}


def classify(c):
    return TIERS.get(c)


def is_operator(c):
    return c in TIERS


def find_first(eq):
    """Return ``(open, close)`` of the first top-level bracket pair in `eq`, or None.

    The whole of `eq` is checked for balance, not just the returned pair.

    >>> find_first("1+(3+5)+2")
    (2, 6)
    >>> find_first("((1)+2)*(3)")
    (0, 6)
    """
    if "(" not in eq and ")" not in eq:
        return None
    depth = 0
    start = end = None
    for i, c in enumerate(eq):
        if c == "(":
            if start is None:
                start = i
            depth += 1
        elif c == ")":
            if not depth:
                raise UnmatchedClose(f"')' at {i} closes no bracket in {eq!r}")
            depth -= 1
            if not depth and end is None:
                end = i
    if depth:
        raise UnmatchedOpen(f"{depth} bracket(s) left open in {eq!r}")
    return None if start is None else (start, end)


def find_last(eq):
    """Return ``(open, close)`` of the last top-level bracket pair in `eq`, or None.

    >>> find_last("(1+3+5)+((1+3+5))+3/13*3")
    (8, 16)
    """
    depth = 0
    start = end = None
    for i in reversed(range(len(eq))):
        c = eq[i]
        if c == ")":
            if end is None:
                end = i
            depth += 1
        elif c == "(":
            if not depth:
                raise UnmatchedOpen(f"'(' at {i} is never closed in {eq!r}")
            depth -= 1
            if not depth and start is None:
                start = i
    if depth:
        raise UnmatchedClose(f"{depth} bracket(s) closed without opening in {eq!r}")
    return None if end is None else (start, end)


def _last_low(eq, after_operand=False):
    """Index of the last genuine ``+``/``-`` at the top level of `eq`, or None.

    A sign is genuine only when it follows an operand; `after_operand` says
    whether whatever precedes `eq` already ends in one.
    """
    if "+" not in eq and "-" not in eq:
        return None
    i = len(eq) - 1
    while i >= 0:
        c = eq[i]
        if c == ")":
            i = find_last(eq[: i + 1])[0] - 1
            continue
        if classify(c) is Tier.LOW and (
            not is_operator(eq[i - 1]) if i else after_operand
        ):
            return i
        i -= 1
    return None


def _last_of(eq, tier):
    """Index of the last `tier` operator at the top level of `eq`, or None."""
    i = len(eq) - 1
    while i >= 0:
        if eq[i] == ")":
            i = find_last(eq[: i + 1])[0] - 1
            continue
        if classify(eq[i]) is tier:
            return i
        i -= 1
    return None


def _cut(eq, i):
    return eq[:i], eq[i], eq[i + 1 :]


def split_by_precedence(eq):
    """Split `eq` at its weakest top-level operator; return `eq` itself for a leaf.

    >>> split_by_precedence("-1234+134-+2")
    ('-1234+134', '-', '+2')
    >>> split_by_precedence("-3^2")
    ('-3', '^', '2')
    """
    if (i := _last_low(eq)) is not None:
        return _cut(eq, i)
    for tier in (Tier.MEDIUM, Tier.HIGH):
        if (i := _last_of(eq, tier)) is not None:
            # A leading * / or ^ has nothing to its left.
            return _cut(eq, i) if i else eq
    return eq


def _split_after_bracket(eq, close):
    block, rest = eq[: close + 1], eq[close + 1 :]
    # Cheap case first: a genuine +/- after the first bracket pair.
    if rest and (i := _last_low(rest, after_operand=True)) is not None:
        return _cut(eq, len(block) + i)
    return split_by_precedence(eq)


def split(eq):
    """Split a sanitized equation once.

    Returns ``(left, op, right)`` with the operator character removed, or the
    equation itself (a str) when it is a leaf.
    """
    if (span := find_first(eq)) is None:
        return split_by_precedence(eq)
    start, end = span
    if end == len(eq) - 1:
        if start == 0:
            return split(eq[1:-1])
        if start == 1:
            if eq[0] != "-":
                raise InvalidOperatorBeforeBracket(
                    f"{eq[0]!r} cannot precede the bracket in {eq!r}"
                )
            return "-1", "*", eq[1:]
    return _split_after_bracket(eq, end)
