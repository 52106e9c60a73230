"""Type-directed CSS value validation.

Each property maps to a PropertyRule whose ``kind`` selects exactly one
validator from ``_VALIDATORS``. The table must cover every ValueKind; this
is checked when the module is imported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable

from zyracss.maps import DEFAULT_TABLE, PropertyTable
from zyracss.maps.types import (
    ALL_LENGTH_UNITS,
    GLOBAL_KEYWORDS,
    PropertyRule,
    SAFE_CSS_FUNCTIONS,
    ValueKind,
)
from zyracss.model.outcome import ValidationOutcome, ValueType
from zyracss.security.detector import detect
from zyracss.syntax import split_function, words
from zyracss.validation.calc import MATH_FUNCTIONS
from zyracss.validation.colors import validate_color
from zyracss.validation.functions import check_function, check_shadow, validate_function
from zyracss.validation.suggest import closest
from zyracss.validation.units import Dimension, in_range, parse_dimension

logger = logging.getLogger(__name__)

Validator = Callable[[str, PropertyRule, str], ValidationOutcome]

_HUNDRED = Decimal(100)


def expand_sides(values: list[str]) -> list[str]:
    """Expand 1-4 box-model values to [top, right, bottom, left]."""
    if len(values) == 1:
        return values * 4
    if len(values) == 2:
        return [values[0], values[1], values[0], values[1]]
    if len(values) == 3:
        return [values[0], values[1], values[2], values[1]]
    if len(values) == 4:
        return list(values)
    raise ValueError(f"expected 1-4 values, got {len(values)}")


def _keyword_hit(value: str, rule: PropertyRule) -> ValidationOutcome | None:
    lowered = value.lower()
    if lowered in rule.keywords:
        return ValidationOutcome.success(lowered, ValueType.KEYWORD)
    return None


def _math_call(value: str) -> ValidationOutcome | None:
    """Validate calc()/min()/max()/clamp()/var()/env(); None if not one."""
    call = split_function(value)
    if call is None or call[0] not in MATH_FUNCTIONS:
        return None
    return validate_function(value, MATH_FUNCTIONS)


def _check_numeric_bounds(dim: Dimension, rule: PropertyRule, prop: str) -> str | None:
    if dim.negative and not rule.allow_negative:
        return f"negative values are not allowed for {prop}"
    low, high = rule.minimum, rule.maximum
    if dim.unit == "%" and rule.kind in (ValueKind.NUMBER, ValueKind.INTEGER):
        # bounds apply to the fraction the percentage represents
        low = None if low is None else low * _HUNDRED
        high = None if high is None else high * _HUNDRED
    if dim.unit != "%" or rule.kind in (ValueKind.NUMBER, ValueKind.INTEGER):
        if not in_range(dim.number, low, high):
            bounds = f"{'' if low is None else low}..{'' if high is None else high}"
            return f"{dim.text} is outside the allowed range {bounds}"
    return None


# ---------------------------------------------------------------------------
# Per-kind validators
# ---------------------------------------------------------------------------


def _length_token(token: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    hit = _keyword_hit(token, rule)
    if hit:
        return hit
    math = _math_call(token)
    if math is not None:
        return math

    dim = parse_dimension(token)
    if dim is None:
        return ValidationOutcome.failure(
            f"{token!r} is not a valid length", closest(token, rule.keywords)
        )
    if dim.unitless:
        if dim.is_zero:
            return ValidationOutcome.success("0", ValueType.LENGTH)
        if rule.allow_unitless:
            return _number_result(dim, rule, prop)
        return ValidationOutcome.failure(
            f"{token} is missing a unit", [f"{token}px", f"{token}rem"]
        )
    if dim.unit not in ALL_LENGTH_UNITS:
        return ValidationOutcome.failure(
            f"unknown length unit {dim.unit!r}",
            [f"{dim.text[: -len(dim.unit)]}{u}" for u in closest(dim.unit, sorted(ALL_LENGTH_UNITS), 1)],
        )
    if dim.unit == "%" and not rule.allow_percentage:
        return ValidationOutcome.failure(f"percentages are not allowed for {prop}")
    error = _check_numeric_bounds(dim, rule, prop)
    if error:
        return ValidationOutcome.failure(error)
    return ValidationOutcome.success(dim.normalized(), ValueType.LENGTH)


def _validate_length(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    tokens = words(value)
    if len(tokens) > 1:
        if not rule.shorthand:
            return ValidationOutcome.failure(f"{prop} takes a single value")
        if len(tokens) > 4:
            return ValidationOutcome.failure(
                f"{prop} shorthand takes 1-4 values, got {len(tokens)}"
            )
        normalized: list[str] = []
        for token in tokens:
            outcome = _length_token(token, rule, prop)
            if not outcome.valid:
                return outcome
            normalized.append(outcome.value)
        return ValidationOutcome.success(
            " ".join(normalized), ValueType.LENGTH, sides=expand_sides(normalized)
        )

    outcome = _length_token(value, rule, prop)
    if outcome.valid and rule.shorthand:
        return ValidationOutcome.success(
            outcome.value, outcome.type, sides=expand_sides([outcome.value])
        )
    return outcome


def _number_result(dim: Dimension, rule: PropertyRule, prop: str) -> ValidationOutcome:
    error = _check_numeric_bounds(dim, rule, prop)
    if error:
        return ValidationOutcome.failure(error)
    return ValidationOutcome.success(dim.normalized(), ValueType.NUMBER)


def _validate_length_or_number(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    return _length_token(value, rule, prop)


def _validate_number(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    hit = _keyword_hit(value, rule)
    if hit:
        return hit
    math = _math_call(value)
    if math is not None:
        return math
    dim = parse_dimension(value)
    if dim is None:
        return ValidationOutcome.failure(f"{value!r} is not a number")
    if dim.unit == "%":
        if not rule.allow_percentage:
            return ValidationOutcome.failure(f"percentages are not allowed for {prop}")
    elif not dim.unitless:
        return ValidationOutcome.failure(f"{prop} takes a plain number, not {dim.unit!r}")
    return _number_result(dim, rule, prop)


def _validate_integer(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    hit = _keyword_hit(value, rule)
    if hit:
        return hit
    math = _math_call(value)
    if math is not None:
        return math
    dim = parse_dimension(value)
    if dim is None or not dim.is_integer:
        return ValidationOutcome.failure(
            f"{value!r} is not an integer", closest(value, rule.keywords)
        )
    return _number_result(dim, rule, prop)


def _validate_keyword(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    hit = _keyword_hit(value, rule)
    if hit:
        return hit
    return ValidationOutcome.failure(
        f"{value!r} is not a valid {prop} keyword", closest(value, rule.keywords)
    )


def _validate_keyword_or_number(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    hit = _keyword_hit(value, rule)
    if hit:
        return hit
    dim = parse_dimension(value)
    if dim is not None and dim.unitless:
        return _number_result(dim, rule, prop)
    return ValidationOutcome.failure(
        f"{value!r} is not a valid {prop} keyword or number",
        closest(value, rule.keywords),
    )


def _validate_color(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    return validate_color(value, rule.keywords)


def _validate_function(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    hit = _keyword_hit(value, rule)
    if hit:
        return hit
    names: list[str] = []
    for call in words(value):
        parsed = split_function(call)
        if parsed is None:
            return ValidationOutcome.failure(
                f"{call!r} is not a function call", closest(call, rule.keywords)
            )
        error = check_function(call, rule.functions or None)
        if error:
            return ValidationOutcome.failure(error, list(rule.functions[:3]))
        names.append(parsed[0])
    return ValidationOutcome.success(value, ValueType.FUNCTION, functions=names)


def _validate_box_shadow(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    error = check_shadow(value)
    if error:
        return ValidationOutcome.failure(error)
    return ValidationOutcome.success(value, ValueType.COMPLEX)


_COMPLEX_HANDLERS: dict[str, Validator] = {
    "box-shadow": _validate_box_shadow,
}


def _validate_complex(value: str, rule: PropertyRule, prop: str) -> ValidationOutcome:
    hit = _keyword_hit(value, rule)
    if hit:
        return hit
    handler = _COMPLEX_HANDLERS.get(prop)
    if handler is not None:
        return handler(value, rule, prop)
    if rule.pattern is not None:
        if not rule.pattern.fullmatch(value):
            return ValidationOutcome.failure(f"{value!r} does not match the {prop} syntax")
        return ValidationOutcome.success(value, ValueType.COMPLEX)
    for word in words(value):
        if split_function(word) is not None:
            error = check_function(word, SAFE_CSS_FUNCTIONS)
            if error:
                return ValidationOutcome.failure(error)
    return _permissive(value, prop)


def _permissive(value: str, prop: str) -> ValidationOutcome:
    report = detect(value)
    if report.is_dangerous:
        return ValidationOutcome.failure(
            "value contains dangerous patterns",
            risk_level=report.risk_level.value,
            patterns=report.pattern_names,
        )
    return ValidationOutcome.success(value, ValueType.COMPLEX)


_VALIDATORS: dict[ValueKind, Validator] = {
    ValueKind.LENGTH: _validate_length,
    ValueKind.LENGTH_OR_NUMBER: _validate_length_or_number,
    ValueKind.COLOR: _validate_color,
    ValueKind.NUMBER: _validate_number,
    ValueKind.INTEGER: _validate_integer,
    ValueKind.KEYWORD: _validate_keyword,
    ValueKind.KEYWORD_OR_NUMBER: _validate_keyword_or_number,
    ValueKind.FUNCTION: _validate_function,
    ValueKind.COMPLEX: _validate_complex,
}

_missing = set(ValueKind) - set(_VALIDATORS)
if _missing:
    raise RuntimeError(f"no validator for value kinds: {sorted(k.value for k in _missing)}")
del _missing


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_value(
    value: str, prop: str, table: PropertyTable = DEFAULT_TABLE
) -> ValidationOutcome:
    """Validate *value* for the CSS property *prop*."""
    if not isinstance(value, str) or not value.strip():
        return ValidationOutcome.failure("value is empty")
    value = value.strip()

    if value.lower() in GLOBAL_KEYWORDS:
        return ValidationOutcome.success(value.lower(), ValueType.GLOBAL_KEYWORD)

    call = split_function(value)
    if call is not None and call[0] == "var":
        return validate_function(value, ("var",))

    rule = table.rule_for(prop)
    if rule is None:
        logger.debug("No rule for property %s, using permissive validation", prop)
        return _permissive(value, prop)
    return _VALIDATORS[rule.kind](value, rule, prop)


def is_valid(value: str, prop: str, table: PropertyTable = DEFAULT_TABLE) -> bool:
    return validate_value(value, prop, table).valid


@dataclass
class BatchValidation:
    outcomes: list[ValidationOutcome] = field(default_factory=list)
    valid: int = 0
    invalid: int = 0


def validate_many(
    items: list[tuple[str, str]], table: PropertyTable = DEFAULT_TABLE
) -> BatchValidation:
    """Validate (value, property) pairs and count the results."""
    batch = BatchValidation()
    for value, prop in items:
        outcome = validate_value(value, prop, table)
        batch.outcomes.append(outcome)
        if outcome.valid:
            batch.valid += 1
        else:
            batch.invalid += 1
    return batch
