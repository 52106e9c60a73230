"""Error model: per-token failures and batch-level exceptions.

Per-token problems never raise. Each pipeline stage returns a ``Failure``
value so that one bad class cannot abort a batch. Exceptions are reserved
for caller misuse (malformed options, wrong input types) and surface
immediately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Categories of per-token rejection."""

    INVALID_INPUT = "INVALID_INPUT"
    DANGEROUS_INPUT = "DANGEROUS_INPUT"
    INVALID_SYNTAX = "INVALID_SYNTAX"
    PROPERTY_NOT_SUPPORTED = "PROPERTY_NOT_SUPPORTED"
    INVALID_CSS_VALUE = "INVALID_CSS_VALUE"
    PARSING_FAILED = "PARSING_FAILED"
    GENERATION_FAILED = "GENERATION_FAILED"


@dataclass(frozen=True)
class Failure:
    """A structured rejection of a single class token.

    Attributes:
        code: Category of the failure.
        message: Human-readable description of the problem.
        class_name: The token that was rejected, if known.
        suggestions: Possible fixes, most relevant first.
        context: Extra machine-readable detail (risk level, property, ...).
    """

    code: ErrorCode
    message: str
    class_name: str | None = None
    suggestions: tuple[str, ...] = ()
    context: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def ok(self) -> bool:
        return False

    def with_class(self, class_name: str) -> Failure:
        """Return a copy attributed to *class_name*."""
        return Failure(
            code=self.code,
            message=self.message,
            class_name=class_name,
            suggestions=self.suggestions,
            context=dict(self.context),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "class_name": self.class_name,
            "suggestions": list(self.suggestions),
            "context": dict(self.context),
        }

    def __str__(self) -> str:
        location = f" [{self.class_name}]" if self.class_name else ""
        text = f"{self.code.value}{location}: {self.message}"
        if self.suggestions:
            text += " (try: " + ", ".join(self.suggestions) + ")"
        return text


# ---------------------------------------------------------------------------
# Failure constructors
# ---------------------------------------------------------------------------


def invalid_input(message: str, class_name: str | None = None) -> Failure:
    return Failure(ErrorCode.INVALID_INPUT, message, class_name)


def dangerous_input(
    class_name: str | None,
    risk_level: str,
    patterns: list[str],
) -> Failure:
    return Failure(
        ErrorCode.DANGEROUS_INPUT,
        f"Potentially dangerous content detected ({', '.join(patterns)})",
        class_name,
        context={"risk_level": risk_level, "patterns": list(patterns)},
    )


def invalid_syntax(
    class_name: str | None,
    message: str,
    suggestions: list[str] | tuple[str, ...] = (),
) -> Failure:
    return Failure(ErrorCode.INVALID_SYNTAX, message, class_name, tuple(suggestions))


def property_not_supported(
    class_name: str | None,
    prefix: str,
    suggestions: list[str] | tuple[str, ...] = (),
) -> Failure:
    return Failure(
        ErrorCode.PROPERTY_NOT_SUPPORTED,
        f"Unknown property prefix: {prefix!r}",
        class_name,
        tuple(suggestions),
        context={"prefix": prefix},
    )


def invalid_value(
    class_name: str | None,
    property: str,
    value: str,
    reason: str,
    suggestions: list[str] | tuple[str, ...] = (),
) -> Failure:
    return Failure(
        ErrorCode.INVALID_CSS_VALUE,
        f"Invalid value {value!r} for {property}: {reason}",
        class_name,
        tuple(suggestions),
        context={"property": property, "value": value, "reason": reason},
    )


def parsing_failed(class_name: str | None, value: str, reason: str) -> Failure:
    return Failure(
        ErrorCode.PARSING_FAILED,
        f"Could not parse value {value!r}: {reason}",
        class_name,
        context={"value": value, "reason": reason},
    )


def generation_failed(class_name: str | None, reason: str) -> Failure:
    return Failure(ErrorCode.GENERATION_FAILED, reason, class_name)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ZyraError(Exception):
    """Base error for batch-level failures."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidInputError(ZyraError):
    """The batch itself has the wrong type or shape."""


class InvalidOptionsError(ZyraError):
    """Generation options could not be interpreted."""

    def __init__(self, message: str, *, option: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.option = option


class ValueParseError(ZyraError):
    """A raw bracket value could not be split into components."""

    def __init__(self, message: str, *, value: str = "", position: int | None = None) -> None:
        super().__init__(message)
        self.value = value
        self.position = position
