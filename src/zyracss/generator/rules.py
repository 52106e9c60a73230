"""Build CssRule objects from parsed classes."""

from __future__ import annotations

import re

from zyracss import errors
from zyracss.errors import Failure
from zyracss.maps.breakpoints import PSEUDO_CLASSES, media_query
from zyracss.model.parsed import ParsedClass
from zyracss.model.rule import CssRule, declaration_string

__all__ = ["escape_selector", "specificity", "build_rule"]

# Characters with meaning in a selector, escaped with a backslash.
_SPECIAL = re.compile(r"""([\[\]:,().#\s+>~%/!'"*=$^|&@;<?{}\\])""")
_BLOCK_BREAKERS = re.compile(r"[{};]")

CLASS_SPECIFICITY = 10
PSEUDO_SPECIFICITY = 10
MEDIA_SPECIFICITY = 1


def escape_selector(class_name: str) -> str:
    """Escape *class_name* for use after the ``.`` of a class selector."""
    escaped = _SPECIAL.sub(r"\\\1", class_name)
    if escaped[:1].isdigit():
        # A leading digit must be written as a code point escape.
        escaped = f"\\{ord(escaped[0]):x} {escaped[1:]}"
    return escaped


def specificity(pseudo: bool = False, media: bool = False) -> int:
    """Additive ordering weight; never written into the rule."""
    score = CLASS_SPECIFICITY
    if pseudo:
        score += PSEUDO_SPECIFICITY
    if media:
        score += MEDIA_SPECIFICITY
    return score


def build_rule(parsed: ParsedClass, important: bool = False) -> CssRule | Failure:
    if not parsed.property or not parsed.value:
        return errors.generation_failed(parsed.class_name, "no usable declaration")
    if _BLOCK_BREAKERS.search(parsed.value):
        return errors.generation_failed(
            parsed.class_name, f"value {parsed.value!r} would break out of its rule block"
        )

    value = f"{parsed.value} !important" if important else parsed.value
    declarations = {parsed.property: value}

    selector = parsed.selector
    pseudo = parsed.variants.pseudo
    if pseudo:
        selector += PSEUDO_CLASSES[pseudo]
    breakpoint = parsed.variants.breakpoint
    media = media_query(breakpoint) if breakpoint else None

    return CssRule(
        selector=selector,
        declarations=declarations,
        class_name=parsed.class_name,
        property=parsed.property,
        value=value,
        priority=specificity(pseudo=pseudo is not None, media=media is not None),
        declaration_string=declaration_string(declarations),
        media=media,
    )
