"""Paren- and quote-aware scanning helpers for CSS values.

Separators only count at the top level: never inside parentheses and
never inside a quoted string.
"""

from __future__ import annotations

import re
from typing import Callable

from zyracss.errors import ValueParseError

_FUNCTION_HEAD = re.compile(r"([a-zA-Z][a-zA-Z0-9-]*)\(")
_FORBIDDEN_SEPARATORS = frozenset("_|;")
_QUOTES = frozenset("\"'")


def check_structure(text: str) -> None:
    """Raise ValueParseError on unbalanced parens, open quotes or bad separators."""
    depth = 0
    quote: str | None = None
    for index, char in enumerate(text):
        if quote:
            if char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ValueParseError(
                    "unexpected closing parenthesis", value=text, position=index
                )
        elif depth == 0 and char in _FORBIDDEN_SEPARATORS:
            raise ValueParseError(
                f"{char!r} is not a valid value separator, use commas",
                value=text,
                position=index,
            )
    if quote:
        raise ValueParseError("unterminated quoted string", value=text)
    if depth:
        raise ValueParseError("unbalanced parentheses", value=text)


def split_top_level(text: str, is_separator: Callable[[str], bool]) -> list[str]:
    """Split *text* at top-level characters accepted by *is_separator*.

    Parts are stripped; empty parts are kept so callers can reject them.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    for char in text:
        if quote:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif depth == 0 and is_separator(char):
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append("".join(current).strip())
    return parts


def words(text: str) -> list[str]:
    """Top-level whitespace-separated words, empties dropped."""
    return [w for w in split_top_level(text, str.isspace) if w]


def commas(text: str) -> list[str]:
    """Top-level comma-separated parts, empties kept."""
    return split_top_level(text, lambda c: c == ",")


def split_function(text: str) -> tuple[str, str] | None:
    """Return ``(name, arguments)`` if *text* is exactly one function call.

    The name is lower-cased. Nothing may follow the matching close paren.
    """
    head = _FUNCTION_HEAD.match(text)
    if not head:
        return None
    depth = 0
    quote: str | None = None
    for index in range(head.end() - 1, len(text)):
        char = text[index]
        if quote:
            if char == quote:
                quote = None
            continue
        if char in _QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                if text[index + 1:].strip():
                    return None
                return head.group(1).lower(), text[head.end():index]
    return None
