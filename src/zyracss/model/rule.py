"""Rule models: single generated rules and dedup groups."""

from __future__ import annotations

from dataclasses import dataclass, field


def declaration_string(declarations: dict[str, str]) -> str:
    """Canonical serialization: ``prop: value`` pairs sorted, ``; ``-joined."""
    return "; ".join(f"{prop}: {value}" for prop, value in sorted(declarations.items()))


@dataclass(frozen=True)
class CssRule:
    """One generated CSS rule.

    ``declaration_string`` is the dedup key; two rules with equal strings
    in the same media context are interchangeable.
    """

    selector: str
    declarations: dict[str, str]
    class_name: str
    property: str
    value: str
    priority: int
    declaration_string: str
    media: str | None = None

    @property
    def css(self) -> str:
        """Single-line rule text, without the media wrapper."""
        return f"{self.selector} {{ {self.declaration_string}; }}"


@dataclass
class GroupedRule:
    """Rules sharing one declaration block, in first-seen order."""

    declaration_string: str
    declarations: dict[str, str]
    media: str | None = None
    selectors: list[str] = field(default_factory=list)
    class_names: list[str] = field(default_factory=list)
    priority: int = 0

    @property
    def selector(self) -> str:
        return ", ".join(self.selectors)

    @property
    def css(self) -> str:
        return f"{self.selector} {{ {self.declaration_string}; }}"
