"""Per-property value rules, units and function allow-lists."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ValueKind(Enum):
    """The closed set of value families a property can expect."""

    LENGTH = "length"
    LENGTH_OR_NUMBER = "length-or-number"
    COLOR = "color"
    NUMBER = "number"
    INTEGER = "integer"
    KEYWORD = "keyword"
    KEYWORD_OR_NUMBER = "keyword-or-number"
    FUNCTION = "function"
    COMPLEX = "complex"


@dataclass(frozen=True)
class PropertyRule:
    """How values for one CSS property are validated.

    Attributes:
        kind: Value family, selects the validator.
        minimum: Inclusive lower bound for numeric values.
        maximum: Inclusive upper bound for numeric values.
        allow_negative: Whether negative numbers are accepted.
        allow_percentage: Whether ``%`` is accepted on bare numbers.
        allow_unitless: Whether a bare number is a valid length.
        keywords: Property-specific keywords, lower-case.
        functions: Allow-listed function names for FUNCTION values.
        pattern: Full-match pattern for COMPLEX values, if any.
        shorthand: Accepts 1-4 space-separated box-model values.
        separator: Joiner for comma-split components.
    """

    kind: ValueKind
    minimum: Decimal | None = None
    maximum: Decimal | None = None
    allow_negative: bool = False
    allow_percentage: bool = True
    allow_unitless: bool = False
    keywords: tuple[str, ...] = ()
    functions: tuple[str, ...] = ()
    pattern: re.Pattern[str] | None = None
    shorthand: bool = False
    separator: str = " "


# ---------------------------------------------------------------------------
# Units and keywords
# ---------------------------------------------------------------------------

LENGTH_UNITS: dict[str, tuple[str, ...]] = {
    "absolute": ("px", "in", "cm", "mm", "pt", "pc", "q"),
    "relative": ("em", "rem", "ex", "ch", "lh", "rlh", "cap", "ic"),
    "viewport": (
        "vw", "vh", "vmin", "vmax", "vi", "vb",
        "svw", "svh", "lvw", "lvh", "dvw", "dvh",
    ),
    "percentage": ("%",),
    "flexible": ("fr",),
}
ALL_LENGTH_UNITS: frozenset[str] = frozenset(u for units in LENGTH_UNITS.values() for u in units)
ANGLE_UNITS: frozenset[str] = frozenset({"deg", "grad", "rad", "turn"})
TIME_UNITS: frozenset[str] = frozenset({"s", "ms"})
RESOLUTION_UNITS: frozenset[str] = frozenset({"dpi", "dpcm", "dppx", "x"})

GLOBAL_KEYWORDS: frozenset[str] = frozenset(
    {"inherit", "initial", "unset", "revert", "revert-layer"}
)

SIZE_KEYWORDS = ("auto", "min-content", "max-content", "fit-content")

SHORTHAND_PROPERTIES: frozenset[str] = frozenset(
    {"padding", "margin", "border-radius", "border-width"}
)

# Properties whose comma-split components stay comma-separated.
COMMA_LIST_PROPERTIES: frozenset[str] = frozenset({"font-family"})

# Function names recognized anywhere a value may contain a call.
SAFE_CSS_FUNCTIONS: frozenset[str] = frozenset(
    {
        "rgb", "rgba", "hsl", "hsla",
        "linear-gradient", "radial-gradient", "conic-gradient",
        "repeating-linear-gradient", "repeating-radial-gradient",
        "calc", "min", "max", "clamp", "var", "env", "url",
        "attr", "counter", "counters",
        "translate", "translatex", "translatey", "translatez", "translate3d",
        "rotate", "rotatex", "rotatey", "rotatez",
        "scale", "scalex", "scaley",
        "skew", "skewx", "skewy",
        "matrix", "matrix3d", "perspective",
        "cubic-bezier", "steps",
        "blur", "brightness", "contrast", "drop-shadow", "grayscale",
        "hue-rotate", "invert", "opacity", "saturate", "sepia",
    }
)

TRANSFORM_FUNCTIONS = (
    "translate", "translatex", "translatey", "translatez", "translate3d",
    "rotate", "rotatex", "rotatey", "rotatez",
    "scale", "scalex", "scaley",
    "skew", "skewx", "skewy",
    "matrix", "matrix3d", "perspective",
)

FILTER_FUNCTIONS = (
    "blur", "brightness", "contrast", "drop-shadow", "grayscale",
    "hue-rotate", "invert", "opacity", "saturate", "sepia",
)

# ---------------------------------------------------------------------------
# Property rules
# ---------------------------------------------------------------------------

_ZERO = Decimal(0)


def _length(
    *keywords: str,
    negative: bool = False,
    shorthand: bool = False,
) -> PropertyRule:
    return PropertyRule(
        kind=ValueKind.LENGTH,
        minimum=None if negative else _ZERO,
        allow_negative=negative,
        keywords=keywords,
        shorthand=shorthand,
    )


def _keywords(*keywords: str) -> PropertyRule:
    return PropertyRule(kind=ValueKind.KEYWORD, keywords=keywords)


_COLOR = PropertyRule(kind=ValueKind.COLOR, keywords=("currentcolor", "transparent"))

_OVERFLOW = _keywords("visible", "hidden", "clip", "scroll", "auto")

_FONT_FAMILY_PATTERN = re.compile(
    r"""(?:"[^"]*"|'[^']*'|[a-zA-Z][\w-]*(?:\ [a-zA-Z][\w-]*)*)
        (?:,\ (?:"[^"]*"|'[^']*'|[a-zA-Z][\w-]*(?:\ [a-zA-Z][\w-]*)*))*""",
    re.VERBOSE,
)

_CONTENT_PATTERN = re.compile(
    r"""none|normal|open-quote|close-quote|no-open-quote|no-close-quote
        |"[^"]*"|'[^']*'""",
    re.VERBOSE | re.IGNORECASE,
)

PROPERTY_RULES: dict[str, PropertyRule] = {
    # spacing
    "padding": _length(shorthand=True),
    "padding-top": _length(),
    "padding-right": _length(),
    "padding-bottom": _length(),
    "padding-left": _length(),
    "padding-block": _length(),
    "padding-block-start": _length(),
    "padding-block-end": _length(),
    "padding-inline": _length(),
    "padding-inline-start": _length(),
    "padding-inline-end": _length(),
    "margin": _length("auto", negative=True, shorthand=True),
    "margin-top": _length("auto", negative=True),
    "margin-right": _length("auto", negative=True),
    "margin-bottom": _length("auto", negative=True),
    "margin-left": _length("auto", negative=True),
    "margin-block": _length("auto", negative=True),
    "margin-block-start": _length("auto", negative=True),
    "margin-block-end": _length("auto", negative=True),
    "margin-inline": _length("auto", negative=True),
    "margin-inline-start": _length("auto", negative=True),
    "margin-inline-end": _length("auto", negative=True),
    "gap": _length("normal"),
    "column-gap": _length("normal"),
    "row-gap": _length("normal"),
    # sizing
    "width": _length(*SIZE_KEYWORDS),
    "height": _length(*SIZE_KEYWORDS),
    "min-width": _length(*SIZE_KEYWORDS),
    "min-height": _length(*SIZE_KEYWORDS),
    "max-width": _length("none", *SIZE_KEYWORDS),
    "max-height": _length("none", *SIZE_KEYWORDS),
    # layout
    "top": _length("auto", negative=True),
    "right": _length("auto", negative=True),
    "bottom": _length("auto", negative=True),
    "left": _length("auto", negative=True),
    "display": _keywords(
        "none", "block", "inline", "inline-block", "flex", "inline-flex",
        "grid", "inline-grid", "table", "table-cell", "table-row",
        "contents", "flow-root", "list-item",
    ),
    "position": _keywords("static", "relative", "absolute", "fixed", "sticky"),
    "float": _keywords("left", "right", "none", "inline-start", "inline-end"),
    "clear": _keywords("left", "right", "both", "none", "inline-start", "inline-end"),
    "overflow": _OVERFLOW,
    "overflow-x": _OVERFLOW,
    "overflow-y": _OVERFLOW,
    "z-index": PropertyRule(kind=ValueKind.INTEGER, allow_negative=True, keywords=("auto",)),
    # typography
    "font": PropertyRule(kind=ValueKind.COMPLEX, separator=", "),
    "font-family": PropertyRule(
        kind=ValueKind.COMPLEX, pattern=_FONT_FAMILY_PATTERN, separator=", "
    ),
    "font-size": _length(
        "xx-small", "x-small", "small", "medium", "large", "x-large", "xx-large",
        "smaller", "larger",
    ),
    "font-weight": PropertyRule(
        kind=ValueKind.KEYWORD_OR_NUMBER,
        minimum=Decimal(1),
        maximum=Decimal(1000),
        allow_percentage=False,
        keywords=("normal", "bold", "bolder", "lighter"),
    ),
    "font-style": _keywords("normal", "italic", "oblique"),
    "content": PropertyRule(kind=ValueKind.COMPLEX, pattern=_CONTENT_PATTERN),
    "line-height": PropertyRule(
        kind=ValueKind.LENGTH_OR_NUMBER,
        minimum=_ZERO,
        allow_unitless=True,
        keywords=("normal",),
    ),
    "letter-spacing": _length("normal", negative=True),
    "text-align": _keywords("left", "right", "center", "justify", "start", "end"),
    "text-decoration": _keywords("none", "underline", "overline", "line-through"),
    "text-transform": _keywords("none", "capitalize", "uppercase", "lowercase", "full-width"),
    # color
    "color": _COLOR,
    "background-color": _COLOR,
    "border-color": _COLOR,
    # borders
    "border-width": _length("thin", "medium", "thick", shorthand=True),
    "border-top-width": _length("thin", "medium", "thick"),
    "border-right-width": _length("thin", "medium", "thick"),
    "border-bottom-width": _length("thin", "medium", "thick"),
    "border-left-width": _length("thin", "medium", "thick"),
    "border-style": _keywords(
        "none", "hidden", "dotted", "dashed", "solid", "double",
        "groove", "ridge", "inset", "outset",
    ),
    "border-radius": _length(shorthand=True),
    "border-top-left-radius": _length(),
    "border-top-right-radius": _length(),
    "border-bottom-right-radius": _length(),
    "border-bottom-left-radius": _length(),
    # effects
    "opacity": PropertyRule(
        kind=ValueKind.NUMBER, minimum=_ZERO, maximum=Decimal(1), allow_percentage=True
    ),
    "transform": PropertyRule(
        kind=ValueKind.FUNCTION, keywords=("none",), functions=TRANSFORM_FUNCTIONS
    ),
    "filter": PropertyRule(
        kind=ValueKind.FUNCTION, keywords=("none",), functions=FILTER_FUNCTIONS
    ),
    "box-shadow": PropertyRule(kind=ValueKind.COMPLEX, keywords=("none",)),
}


def rule_for(prop: str) -> PropertyRule | None:
    return PROPERTY_RULES.get(prop)
