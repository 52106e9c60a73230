"""Configuration records for the engine, caches and per-call generation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from collections.abc import Mapping
from typing import Any

from zyracss.errors import InvalidOptionsError
from zyracss.security.detector import is_safe

# One or more simple selectors (tag, .class or #id), space-separated
_SCOPE = re.compile(r"[.#]?[A-Za-z_][\w-]*(?: +[.#]?[A-Za-z_][\w-]*)*")
MAX_SCOPE_LENGTH = 200


@dataclass(frozen=True)
class SecurityConfig:
    max_class_length: int = 500
    max_value_length: int = 200
    max_classes_per_request: int = 10_000
    max_regex_input: int = 50_000
    # Advisory regex budget for class matching, milliseconds
    fast_timeout_ms: float = 100.0


@dataclass(frozen=True)
class CacheConfig:
    parse_max_size: int = 5000
    generation_max_size: int = 1000
    rule_max_size: int = 10_000
    ttl: float = 3600.0  # seconds
    max_age: float = 1800.0  # optimize() threshold, seconds
    sweep_interval: float = 300.0  # 0 disables the background sweep
    memo_max_size: int = 10_000
    memo_eviction_fraction: float = 0.2


@dataclass(frozen=True)
class EngineConfig:
    security: SecurityConfig = field(default_factory=SecurityConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    start_sweeper: bool = False


# ---------------------------------------------------------------------------
# Generation options
# ---------------------------------------------------------------------------

_OPTION_ALIASES = {
    "minify": "minify",
    "groupSelectors": "group_selectors",
    "group_selectors": "group_selectors",
    "includeComments": "include_comments",
    "include_comments": "include_comments",
    "important": "important",
    "scope": "scope",
}


def _check_scope(scope: object) -> None:
    """Reject anything but plain space-separated tag, class or id selectors."""
    if not isinstance(scope, str) or not scope.strip():
        raise InvalidOptionsError("scope must be a non-empty string or None", option="scope")
    if len(scope) > MAX_SCOPE_LENGTH or not _SCOPE.fullmatch(scope) or not is_safe(scope):
        raise InvalidOptionsError(
            f"scope must be simple selectors like '.app' or '#root main', got {scope[:40]!r}",
            option="scope",
        )


@dataclass(frozen=True)
class GenerationOptions:
    """Per-call options controlling stylesheet output."""

    minify: bool = False
    group_selectors: bool = True
    include_comments: bool = False
    important: bool = False
    scope: str | None = None

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "scope":
                if value is not None:
                    _check_scope(value)
            elif not isinstance(value, bool):
                raise InvalidOptionsError(
                    f"{f.name} must be a boolean, got {type(value).__name__}",
                    option=f.name,
                )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> GenerationOptions:
        """Build options from a camelCase or snake_case mapping.

        Raises InvalidOptionsError on unknown keys or wrongly typed values.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidOptionsError(
                f"options must be a mapping, got {type(data).__name__}"
            )
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key)
            if name is None:
                raise InvalidOptionsError(f"Unknown option: {key!r}", option=str(key))
            kwargs[name] = value
        return cls(**kwargs)

    def normalized(self) -> dict[str, Any]:
        """Options as a plain dict with stable keys, used for cache keys."""
        return {
            "minify": self.minify,
            "group_selectors": self.group_selectors,
            "include_comments": self.include_comments,
            "important": self.important,
            "scope": self.scope,
        }
