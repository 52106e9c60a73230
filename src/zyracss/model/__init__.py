"""Model layer: public type re-exports."""

from zyracss.model.outcome import ValidationOutcome, ValueType
from zyracss.model.parsed import NO_VARIANTS, ParsedClass, Variants
from zyracss.model.rule import CssRule, GroupedRule, declaration_string

__all__ = [
    # outcome
    "ValueType",
    "ValidationOutcome",
    # parsed
    "Variants",
    "NO_VARIANTS",
    "ParsedClass",
    # rule
    "CssRule",
    "GroupedRule",
    "declaration_string",
]
