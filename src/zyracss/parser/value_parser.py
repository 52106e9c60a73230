"""Split a raw bracket value into components.

Commas and (optionally) spaces are split points only at the top level.
A value that is exactly one recognized function call is kept whole and
its internal commas are never split.
"""

from __future__ import annotations

from dataclasses import dataclass

from zyracss.errors import ValueParseError
from zyracss.maps.types import SAFE_CSS_FUNCTIONS
from zyracss.syntax import check_structure, commas, split_function, words

__all__ = ["ParsedValue", "parse_value"]


@dataclass(frozen=True)
class ParsedValue:
    normalized_value: str
    components: tuple[str, ...]
    is_single_function: bool = False


def parse_value(raw: str, allow_spaces: bool = False, joiner: str = " ") -> ParsedValue:
    """Parse a raw bracket value.

    Args:
        raw: Text found between the brackets.
        allow_spaces: Accept top-level space-separated components, as
            box-model shorthand properties do.
        joiner: String used to join comma-separated components.

    Raises:
        ValueParseError: The value is empty, unbalanced, or uses a
            separator that is not allowed.
    """
    if not isinstance(raw, str):
        raise ValueParseError("value must be a string")
    text = raw.strip()
    if not text:
        raise ValueParseError("empty value", value=raw)

    check_structure(text)

    call = split_function(text)
    if call and call[0] in SAFE_CSS_FUNCTIONS:
        return ParsedValue(text, (text,), is_single_function=True)

    parts = commas(text)
    if any(not part for part in parts):
        raise ValueParseError("empty component between commas", value=raw)

    components: list[str] = []
    normalized: list[str] = []
    for part in parts:
        part_words = words(part)
        if len(part_words) > 1 and not allow_spaces:
            raise ValueParseError(
                f"space-separated values are not allowed here: {part!r}", value=raw
            )
        if allow_spaces:
            components.extend(part_words)
        else:
            components.append(part)
        normalized.append(" ".join(part_words))

    return ParsedValue(joiner.join(normalized), tuple(components))
