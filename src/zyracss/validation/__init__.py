"""Value validation: per-kind validators, colors, functions and math."""

from zyracss.validation.calc import check_math
from zyracss.validation.colors import normalize_hex, validate_color
from zyracss.validation.functions import check_function, validate_function
from zyracss.validation.values import expand_sides, is_valid, validate_many, validate_value

__all__ = [
    "validate_value",
    "validate_many",
    "is_valid",
    "expand_sides",
    "validate_color",
    "normalize_hex",
    "validate_function",
    "check_function",
    "check_math",
]
