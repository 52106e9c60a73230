"""Validation outcome: the tagged result of checking one CSS value."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValueType(Enum):
    """Type tag attached to an accepted value."""

    LENGTH = "length"
    COLOR = "color"
    NUMBER = "number"
    KEYWORD = "keyword"
    FUNCTION = "function"
    COMPLEX = "complex"
    CUSTOM_PROPERTY = "custom-property"
    GLOBAL_KEYWORD = "global-keyword"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a value against a property.

    On success ``value`` holds the normalized value and ``type`` its tag.
    On failure ``reason`` explains the rejection.
    """

    valid: bool
    value: str | None = None
    type: ValueType | None = None
    reason: str = ""
    suggestions: tuple[str, ...] = ()
    details: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def success(
        cls, value: str, type: ValueType, **details: Any
    ) -> ValidationOutcome:
        return cls(valid=True, value=value, type=type, details=details)

    @classmethod
    def failure(
        cls, reason: str, suggestions: list[str] | tuple[str, ...] = (), **details: Any
    ) -> ValidationOutcome:
        return cls(valid=False, reason=reason, suggestions=tuple(suggestions), details=details)

    @property
    def failed(self) -> bool:
        return not self.valid

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "value": self.value,
            "type": self.type.value if self.type else None,
            "reason": self.reason,
            "suggestions": list(self.suggestions),
            "details": dict(self.details),
        }
