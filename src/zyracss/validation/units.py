"""Numeric dimension parsing shared by every validator."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from zyracss.maps.types import ALL_LENGTH_UNITS, ANGLE_UNITS, TIME_UNITS

_DIMENSION = re.compile(r"([+-]?(?:\d+(?:\.\d+)?|\.\d+))([a-zA-Z]+|%)?")

# Hue ranges per angle unit, inclusive.
HUE_RANGES: dict[str, tuple[Decimal, Decimal]] = {
    "": (Decimal(0), Decimal(360)),
    "deg": (Decimal(0), Decimal(360)),
    "grad": (Decimal(0), Decimal(400)),
    "rad": (Decimal(0), Decimal("6.2832")),
    "turn": (Decimal(0), Decimal(1)),
}


@dataclass(frozen=True)
class Dimension:
    """A number with an optional unit; ``unit`` is lower-case, ``""`` if absent."""

    number: Decimal
    unit: str
    text: str

    @property
    def is_zero(self) -> bool:
        return self.number == 0

    @property
    def negative(self) -> bool:
        return self.number < 0

    @property
    def unitless(self) -> bool:
        return self.unit == ""

    @property
    def is_integer(self) -> bool:
        return self.unitless and "." not in self.text and self.number == self.number.to_integral_value()

    def normalized(self) -> str:
        number = self.text[: len(self.text) - len(self.unit)] if self.unit else self.text
        return f"{number}{self.unit}"


def parse_dimension(text: str) -> Dimension | None:
    """Parse ``12``, ``-1.5rem`` or ``50%``; anything else returns None."""
    match = _DIMENSION.fullmatch(text.strip())
    if not match:
        return None
    try:
        number = Decimal(match.group(1))
    except InvalidOperation:
        return None
    unit = (match.group(2) or "").lower()
    return Dimension(number=number, unit=unit, text=text.strip())


def is_length(dim: Dimension) -> bool:
    """True for a dimension with a length unit, or a unitless zero."""
    if dim.unitless:
        return dim.is_zero
    return dim.unit in ALL_LENGTH_UNITS


def is_angle(dim: Dimension) -> bool:
    if dim.unitless:
        return dim.is_zero
    return dim.unit in ANGLE_UNITS


def is_time(dim: Dimension) -> bool:
    return dim.unit in TIME_UNITS


def in_range(number: Decimal, low: Decimal | None, high: Decimal | None) -> bool:
    if low is not None and number < low:
        return False
    if high is not None and number > high:
        return False
    return True
