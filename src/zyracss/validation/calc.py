"""Syntactic validation of calc(), min(), max() and clamp() expressions.

Expressions are parsed with a small lark grammar (``calc.lark``). The check
is syntactic: operands are not unit-checked against each other, but
division by a literal zero and disallowed nested functions are rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from lark import Lark, Transformer
from lark.exceptions import LarkError, VisitError

GRAMMAR_PATH = Path(__file__).parent / "calc.lark"

MATH_FUNCTIONS = frozenset({"calc", "min", "max", "clamp", "var", "env"})

_ALLOWED_CHARS = re.compile(r"[\d\s+\-*/.()%a-zA-Z_,]+")
_DIMENSION_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")

# (min, max) argument counts; None means unbounded
_ARITY: dict[str, tuple[int, int | None]] = {
    "calc": (1, 1),
    "min": (1, None),
    "max": (1, None),
    "clamp": (3, 3),
    "var": (1, 2),
    "env": (1, 2),
}


class CalcError(Exception):
    """A math expression is syntactically valid but semantically rejected."""


@dataclass(frozen=True)
class _Term:
    # Set when the term is a bare numeric literal
    literal: Decimal | None = None


@dataclass(frozen=True)
class _CustomProperty:
    name: str


_OPAQUE = _Term()


class _MathTransformer(Transformer):
    """Walks a parsed expression, raising CalcError on rejected constructs."""

    def number(self, items):
        return _Term(Decimal(str(items[0])))

    def dimension(self, items):
        return _Term(Decimal(_DIMENSION_NUMBER.match(str(items[0])).group(0)))

    def ident(self, items):
        return _OPAQUE

    def neg(self, items):
        term = items[0]
        if isinstance(term, _Term) and term.literal is not None:
            return _Term(-term.literal)
        return _OPAQUE

    def pos(self, items):
        return items[0]

    def add(self, items):
        return _OPAQUE

    sub = add
    mul = add

    def div(self, items):
        divisor = items[1]
        if isinstance(divisor, _Term) and divisor.literal is not None and divisor.literal == 0:
            raise CalcError("division by zero")
        return _OPAQUE

    def custom_property(self, items):
        return _CustomProperty(str(items[0]))

    def args(self, items):
        return list(items)

    def call(self, items):
        name = str(items[0])[:-1].lower()
        arguments = items[1]
        if name not in MATH_FUNCTIONS:
            raise CalcError(f"{name}() is not allowed in a math expression")
        low, high = _ARITY[name]
        if len(arguments) < low or (high is not None and len(arguments) > high):
            expected = str(low) if low == high else f"{low}+" if high is None else f"{low}-{high}"
            raise CalcError(f"{name}() takes {expected} argument(s), got {len(arguments)}")
        for index, argument in enumerate(arguments):
            is_custom = isinstance(argument, _CustomProperty)
            if name == "var" and index == 0 and not is_custom:
                raise CalcError("var() must start with a --custom-property name")
            if is_custom and not (name == "var" and index == 0):
                raise CalcError(f"{argument.name} must be wrapped in var()")
        return _OPAQUE


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


def check_math(expression: str) -> str | None:
    """Return why *expression* is invalid, or None when it is acceptable."""
    text = expression.strip()
    if not text:
        return "empty expression"
    if not _ALLOWED_CHARS.fullmatch(text):
        return "expression contains characters that are not allowed"
    if text.count("(") != text.count(")"):
        return "unbalanced parentheses"
    try:
        tree = _parser().parse(text)
        _MathTransformer().transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, CalcError):
            return str(exc.orig_exc)
        raise
    except CalcError as exc:
        return str(exc)
    except LarkError as exc:
        return f"malformed expression: {exc.__class__.__name__}"
    return None
