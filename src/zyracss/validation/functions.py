"""Function-call validation: allow-lists, arity and per-argument types."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable

from zyracss.maps.types import SAFE_CSS_FUNCTIONS
from zyracss.model.outcome import ValidationOutcome, ValueType
from zyracss.security.detector import is_safe
from zyracss.syntax import commas, split_function, words
from zyracss.validation.calc import MATH_FUNCTIONS, check_math
from zyracss.validation.colors import COLOR_FUNCTIONS, check_color_function, is_color
from zyracss.validation.units import in_range, is_angle, is_length, parse_dimension

_CUSTOM_PROPERTY = re.compile(r"--[\w-]+")
_IDENT = re.compile(r"-?[a-zA-Z_][\w-]*")
_URL_BODY = re.compile(r"""(?:"[^"]*"|'[^']*'|[^\s"'()\\]*)""")

_ZERO = Decimal(0)
_ONE = Decimal(1)


class ArgType(Enum):
    LENGTH = "length"
    LENGTH_PERCENTAGE = "length-percentage"
    ANGLE = "angle"
    NUMBER = "number"
    NUMBER_PERCENTAGE = "number-percentage"
    IDENT = "ident"


@dataclass(frozen=True)
class Signature:
    min_args: int
    max_args: int
    arg_type: ArgType
    non_negative: bool = False


# Comma-separated argument lists; arguments may also be math functions.
SIGNATURES: dict[str, Signature] = {
    "translate": Signature(1, 2, ArgType.LENGTH_PERCENTAGE),
    "translatex": Signature(1, 1, ArgType.LENGTH_PERCENTAGE),
    "translatey": Signature(1, 1, ArgType.LENGTH_PERCENTAGE),
    "translatez": Signature(1, 1, ArgType.LENGTH),
    "translate3d": Signature(3, 3, ArgType.LENGTH_PERCENTAGE),
    "rotate": Signature(1, 1, ArgType.ANGLE),
    "rotatex": Signature(1, 1, ArgType.ANGLE),
    "rotatey": Signature(1, 1, ArgType.ANGLE),
    "rotatez": Signature(1, 1, ArgType.ANGLE),
    "scale": Signature(1, 2, ArgType.NUMBER_PERCENTAGE),
    "scalex": Signature(1, 1, ArgType.NUMBER_PERCENTAGE),
    "scaley": Signature(1, 1, ArgType.NUMBER_PERCENTAGE),
    "skew": Signature(1, 2, ArgType.ANGLE),
    "skewx": Signature(1, 1, ArgType.ANGLE),
    "skewy": Signature(1, 1, ArgType.ANGLE),
    "matrix": Signature(6, 6, ArgType.NUMBER),
    "matrix3d": Signature(16, 16, ArgType.NUMBER),
    "perspective": Signature(1, 1, ArgType.LENGTH, non_negative=True),
    "blur": Signature(0, 1, ArgType.LENGTH, non_negative=True),
    "brightness": Signature(0, 1, ArgType.NUMBER_PERCENTAGE, non_negative=True),
    "contrast": Signature(0, 1, ArgType.NUMBER_PERCENTAGE, non_negative=True),
    "grayscale": Signature(0, 1, ArgType.NUMBER_PERCENTAGE, non_negative=True),
    "invert": Signature(0, 1, ArgType.NUMBER_PERCENTAGE, non_negative=True),
    "opacity": Signature(0, 1, ArgType.NUMBER_PERCENTAGE, non_negative=True),
    "saturate": Signature(0, 1, ArgType.NUMBER_PERCENTAGE, non_negative=True),
    "sepia": Signature(0, 1, ArgType.NUMBER_PERCENTAGE, non_negative=True),
    "hue-rotate": Signature(0, 1, ArgType.ANGLE),
    "attr": Signature(1, 1, ArgType.IDENT),
    "counter": Signature(1, 2, ArgType.IDENT),
}

_STEP_POSITIONS = frozenset(
    {"jump-start", "jump-end", "jump-none", "jump-both", "start", "end"}
)


def _check_argument(text: str, sig: Signature) -> str | None:
    call = split_function(text)
    if call and call[0] in MATH_FUNCTIONS:
        return check_math(text)
    if sig.arg_type is ArgType.IDENT:
        return None if _IDENT.fullmatch(text) else f"{text!r} is not an identifier"

    dim = parse_dimension(text)
    if dim is None:
        return f"{text!r} is not a valid {sig.arg_type.value}"
    if sig.non_negative and dim.negative:
        return f"{text} must not be negative"
    kind = sig.arg_type
    if kind is ArgType.LENGTH:
        ok = is_length(dim) and dim.unit != "%"
    elif kind is ArgType.LENGTH_PERCENTAGE:
        ok = is_length(dim)
    elif kind is ArgType.ANGLE:
        ok = is_angle(dim)
    elif kind is ArgType.NUMBER:
        ok = dim.unitless
    else:
        ok = dim.unitless or dim.unit == "%"
    if not ok:
        return f"{text!r} is not a valid {kind.value}"
    return None


def _check_signature(name: str, args: str) -> str | None:
    sig = SIGNATURES[name]
    arguments = commas(args) if args.strip() else []
    if not sig.min_args <= len(arguments) <= sig.max_args:
        expected = (
            str(sig.min_args) if sig.min_args == sig.max_args
            else f"{sig.min_args}-{sig.max_args}"
        )
        return f"{name}() takes {expected} argument(s), got {len(arguments)}"
    for argument in arguments:
        if not argument:
            return f"{name}() has an empty argument"
        error = _check_argument(argument, sig)
        if error:
            return f"{name}(): {error}"
    return None


# ---------------------------------------------------------------------------
# Functions with bespoke argument grammars
# ---------------------------------------------------------------------------


def check_var(args: str) -> str | None:
    parts = commas(args)
    name = parts[0]
    if not _CUSTOM_PROPERTY.fullmatch(name):
        return f"var() must start with a --custom-property name, got {name!r}"
    if len(parts) > 1:
        fallback = ",".join(parts[1:]).strip()
        if not fallback:
            return "var() fallback is empty"
        if not is_safe(fallback):
            return "var() fallback contains dangerous content"
    return None


def check_shadow(text: str, min_lengths: int = 2, max_lengths: int = 4) -> str | None:
    """Validate one shadow: ``[inset] <x> <y> [blur] [spread] [color]``."""
    tokens = words(text)
    if not tokens:
        return "empty shadow"
    if tokens[0].lower() == "inset":
        tokens = tokens[1:]
    elif tokens[-1].lower() == "inset":
        tokens = tokens[:-1]
    if tokens and is_color(tokens[-1]):
        tokens.pop()
    elif tokens and is_color(tokens[0]):
        tokens.pop(0)
    if not min_lengths <= len(tokens) <= max_lengths:
        return f"shadow needs {min_lengths}-{max_lengths} lengths, got {len(tokens)}"
    for index, token in enumerate(tokens):
        call = split_function(token)
        if call and call[0] in MATH_FUNCTIONS:
            error = check_math(token)
            if error:
                return error
            continue
        dim = parse_dimension(token)
        if dim is None or not is_length(dim) or dim.unit == "%":
            return f"{token!r} is not a shadow length"
        if index == 2 and dim.negative:
            return "shadow blur radius must not be negative"
    return None


def _check_drop_shadow(args: str) -> str | None:
    return check_shadow(args, min_lengths=2, max_lengths=3)


def _check_gradient(name: str, args: str) -> str | None:
    parts = commas(args)
    if any(not part for part in parts):
        return f"{name}() has an empty argument"
    stops = [p for p in parts if is_color(words(p)[0])]
    if len(stops) < 2:
        return f"{name}() needs at least two color stops"
    for index, part in enumerate(parts):
        tokens = words(part)
        if is_color(tokens[0]):
            positions = tokens[1:]
        else:
            # direction, angle, shape or position prelude
            if index > 0:
                return f"{name}(): {part!r} is not a color stop"
            positions = [t for t in tokens if not _IDENT.fullmatch(t)]
        for position in positions:
            dim = parse_dimension(position)
            if dim is None or not (is_length(dim) or is_angle(dim)):
                return f"{name}(): {position!r} is not a position or angle"
    return None


def _check_cubic_bezier(args: str) -> str | None:
    parts = commas(args)
    if len(parts) != 4:
        return f"cubic-bezier() takes 4 arguments, got {len(parts)}"
    for index, part in enumerate(parts):
        dim = parse_dimension(part)
        if dim is None or not dim.unitless:
            return f"cubic-bezier(): {part!r} is not a number"
        if index % 2 == 0 and not in_range(dim.number, _ZERO, _ONE):
            return f"cubic-bezier(): x value {part} is outside 0-1"
    return None


def _check_steps(args: str) -> str | None:
    parts = commas(args)
    if not 1 <= len(parts) <= 2:
        return f"steps() takes 1-2 arguments, got {len(parts)}"
    dim = parse_dimension(parts[0])
    if dim is None or not dim.is_integer or dim.number < 1:
        return f"steps(): {parts[0]!r} is not a positive integer"
    if len(parts) == 2 and parts[1].lower() not in _STEP_POSITIONS:
        return f"steps(): unknown position {parts[1]!r}"
    return None


def _check_url(args: str) -> str | None:
    body = args.strip()
    if not _URL_BODY.fullmatch(body):
        return "url() must be quoted or contain no spaces, quotes or parentheses"
    if not is_safe(body):
        return "url() target is not allowed"
    return None


def _check_counters(args: str) -> str | None:
    parts = commas(args)
    if not 2 <= len(parts) <= 3:
        return f"counters() takes 2-3 arguments, got {len(parts)}"
    if not _IDENT.fullmatch(parts[0]):
        return f"counters(): {parts[0]!r} is not an identifier"
    return None


def _check_env(args: str) -> str | None:
    parts = commas(args)
    if not _IDENT.fullmatch(parts[0]):
        return f"env(): {parts[0]!r} is not an environment variable name"
    return None


_BESPOKE: dict[str, Callable[[str], str | None]] = {
    "var": check_var,
    "env": _check_env,
    "drop-shadow": _check_drop_shadow,
    "cubic-bezier": _check_cubic_bezier,
    "steps": _check_steps,
    "url": _check_url,
    "counters": _check_counters,
    "linear-gradient": lambda a: _check_gradient("linear-gradient", a),
    "radial-gradient": lambda a: _check_gradient("radial-gradient", a),
    "conic-gradient": lambda a: _check_gradient("conic-gradient", a),
    "repeating-linear-gradient": lambda a: _check_gradient("repeating-linear-gradient", a),
    "repeating-radial-gradient": lambda a: _check_gradient("repeating-radial-gradient", a),
}


def check_function(text: str, allowed: frozenset[str] | tuple[str, ...] | None = None) -> str | None:
    """Return why the single call *text* is invalid, or None.

    *allowed* narrows the accepted function names; every name must also be
    in the global safe-function list.
    """
    call = split_function(text.strip())
    if call is None:
        return f"{text!r} is not a single function call"
    name, args = call
    if name not in SAFE_CSS_FUNCTIONS or (allowed is not None and name not in allowed):
        return f"function {name}() is not allowed here"
    if name in ("calc", "min", "max", "clamp"):
        return check_math(text)
    if name in COLOR_FUNCTIONS:
        return check_color_function(name, args)
    if name in _BESPOKE:
        return _BESPOKE[name](args)
    if name in SIGNATURES:
        return _check_signature(name, args)
    return None


def validate_function(
    text: str, allowed: frozenset[str] | tuple[str, ...] | None = None
) -> ValidationOutcome:
    """Validate one function call and tag it with its value type."""
    error = check_function(text, allowed)
    if error:
        return ValidationOutcome.failure(error)
    name, _ = split_function(text.strip())
    value_type = ValueType.CUSTOM_PROPERTY if name == "var" else ValueType.FUNCTION
    return ValidationOutcome.success(text.strip(), value_type, function=name)
