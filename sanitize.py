"""Normalize raw equations: drop whitespace and make implicit multiplication explicit.

>>> sanitize("5pi(5 + 2)/4")
'5*pi*(5+2)/4'
>>> sanitize("-(1+3)(5+34)2")
'-(1+3)*(5+34)*2'
"""
import re

from eqsplit import find_first, is_operator

# Any of e, π or the letters of pi directly after an ASCII digit.
_DIGIT_CONSTANT = re.compile(r"(?<=[0-9])(?=[eπpi])")


def strip_whitespace(text):
    return "".join(text.split())


def insert_constant_multiplication(eq):
    """Insert ``*`` between a digit and the constant that follows it.

    >>> insert_constant_multiplication("e(e)e+2e^ep")
    'e(e)e+2*e^ep'
    """
    return _DIGIT_CONSTANT.sub("*", eq)


def insert_bracket_multiplication(eq):
    """Insert ``*`` between a bracket pair and an operand directly next to it.

    Groups are handled as a unit, and the inside of each group is treated the
    same way.

    >>> insert_bracket_multiplication("(5+5)5+5(7+3)(5*8)")
    '(5+5)*5+5*(7+3)*(5*8)'
    """
    out = []
    while (span := find_first(eq)) is not None:
        start, end = span
        head, inner, eq = eq[:start], eq[start + 1 : end], eq[end + 1 :]
        out.append(head)
        if head and not is_operator(head[-1]):
            out.append("*")
        out.append(f"({insert_bracket_multiplication(inner)})")
        if eq and not is_operator(eq[0]):
            out.append("*")
    out.append(eq)
    return "".join(out)


def sanitize(text):
    return insert_bracket_multiplication(
        insert_constant_multiplication(strip_whitespace(text))
    )
