"""Color validation: hex, rgb()/rgba(), hsl()/hsla() and named colors.

Out-of-range channels are rejected, never clamped.
"""

from __future__ import annotations

import re
from decimal import Decimal

from zyracss.maps.colors import COLOR_KEYWORDS, NAMED_COLORS
from zyracss.model.outcome import ValidationOutcome, ValueType
from zyracss.syntax import split_function, split_top_level
from zyracss.validation.suggest import closest
from zyracss.validation.units import HUE_RANGES, Dimension, in_range, parse_dimension

_HEX = re.compile(r"#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")
_CUSTOM_PROPERTY_CALL = re.compile(r"var\(\s*--[\w-]+\s*(?:,[^()]*)?\)", re.IGNORECASE)

_ZERO = Decimal(0)
_ONE = Decimal(1)
_HUNDRED = Decimal(100)
_CHANNEL_MAX = Decimal(255)

COLOR_FUNCTIONS = ("rgb", "rgba", "hsl", "hsla")
# Comma-syntax argument counts
_LEGACY_ARITY = {"rgb": 3, "rgba": 4, "hsl": 3, "hsla": 4}


def normalize_hex(text: str) -> str | None:
    """Lower-case a hex color and expand the 3-digit form to 6 digits."""
    match = _HEX.fullmatch(text.strip())
    if not match:
        return None
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return f"#{digits}"


def _is_var(text: str) -> bool:
    return bool(_CUSTOM_PROPERTY_CALL.fullmatch(text.strip()))


def _check_percent(dim: Dimension, what: str) -> str | None:
    if not in_range(dim.number, _ZERO, _HUNDRED):
        return f"{what} {dim.text} is outside 0%-100%"
    return None


def _check_rgb_channel(text: str) -> str | None:
    if _is_var(text):
        return None
    dim = parse_dimension(text)
    if dim is None:
        return f"channel {text!r} is not a number"
    if dim.unit == "%":
        return _check_percent(dim, "channel")
    if not dim.unitless:
        return f"channel {text!r} has a unit"
    if not in_range(dim.number, _ZERO, _CHANNEL_MAX):
        return f"channel {text} is outside 0-255"
    return None


def _check_hue(text: str) -> str | None:
    if _is_var(text):
        return None
    dim = parse_dimension(text)
    if dim is None or dim.unit not in HUE_RANGES:
        return f"hue {text!r} is not a number or angle"
    low, high = HUE_RANGES[dim.unit]
    if not in_range(dim.number, low, high):
        return f"hue {text} is outside {low}-{high}{dim.unit or 'deg'}"
    return None


def _check_hsl_percent(text: str, what: str, require_percent: bool) -> str | None:
    if _is_var(text):
        return None
    dim = parse_dimension(text)
    if dim is None:
        return f"{what} {text!r} is not a percentage"
    if dim.unit == "%":
        return _check_percent(dim, what)
    if require_percent or not dim.unitless:
        return f"{what} {text!r} must be a percentage"
    if not in_range(dim.number, _ZERO, _HUNDRED):
        return f"{what} {text} is outside 0-100"
    return None


def _check_alpha(text: str) -> str | None:
    if _is_var(text):
        return None
    dim = parse_dimension(text)
    if dim is None:
        return f"alpha {text!r} is not a number"
    if dim.unit == "%":
        return _check_percent(dim, "alpha")
    if not dim.unitless:
        return f"alpha {text!r} has a unit"
    if not in_range(dim.number, _ZERO, _ONE):
        return f"alpha {text} is outside 0-1"
    return None


def _split_arguments(name: str, args: str) -> tuple[list[str], str | None] | str:
    """Return (channels, alpha) or an error message."""
    commas = split_top_level(args, lambda c: c == ",")
    if len(commas) > 1:
        expected = _LEGACY_ARITY[name]
        if len(commas) != expected:
            return f"{name}() takes {expected} comma-separated arguments, got {len(commas)}"
        if any(not part for part in commas):
            return f"{name}() has an empty argument"
        if expected == 4:
            return commas[:3], commas[3]
        return commas, None

    slash = split_top_level(args, lambda c: c == "/")
    if len(slash) > 2:
        return f"{name}() has more than one '/'"
    channels = [w for w in split_top_level(slash[0], str.isspace) if w]
    if len(channels) != 3:
        return f"{name}() takes 3 channels, got {len(channels)}"
    alpha = slash[1] if len(slash) == 2 else None
    if alpha is not None and not alpha:
        return f"{name}() is missing the alpha value after '/'"
    return channels, alpha


def check_color_function(name: str, args: str) -> str | None:
    """Validate the arguments of rgb()/rgba()/hsl()/hsla(); None when valid."""
    split = _split_arguments(name, args)
    if isinstance(split, str):
        return split
    channels, alpha = split
    legacy = "," in args
    if name.startswith("rgb"):
        for channel in channels:
            error = _check_rgb_channel(channel)
            if error:
                return error
    else:
        error = (
            _check_hue(channels[0])
            or _check_hsl_percent(channels[1], "saturation", legacy)
            or _check_hsl_percent(channels[2], "lightness", legacy)
        )
        if error:
            return error
    if alpha is not None:
        return _check_alpha(alpha)
    return None


def is_color(text: str) -> bool:
    return validate_color(text).valid


def validate_color(text: str, keywords: tuple[str, ...] = tuple(COLOR_KEYWORDS)) -> ValidationOutcome:
    """Validate a single color token and return its normalized form."""
    value = text.strip()
    lowered = value.lower()

    if lowered in keywords or lowered in COLOR_KEYWORDS:
        return ValidationOutcome.success(lowered, ValueType.COLOR, color="keyword")
    if lowered in NAMED_COLORS:
        return ValidationOutcome.success(lowered, ValueType.COLOR, color="named")

    if value.startswith("#"):
        normalized = normalize_hex(value)
        if normalized is None:
            return ValidationOutcome.failure(
                "hex colors must have 3, 6 or 8 digits", color="hex"
            )
        return ValidationOutcome.success(normalized, ValueType.COLOR, color="hex")

    call = split_function(value)
    if call and call[0] in COLOR_FUNCTIONS:
        name, args = call
        error = check_color_function(name, args)
        if error:
            return ValidationOutcome.failure(error, color=name)
        return ValidationOutcome.success(
            f"{name}({args.strip()})", ValueType.COLOR, color=name
        )

    suggestions = closest(lowered, sorted(NAMED_COLORS | COLOR_KEYWORDS))[:3]
    return ValidationOutcome.failure(f"{value!r} is not a color", suggestions)
