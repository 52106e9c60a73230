"""Static lookup tables and the PropertyTable that bundles them."""

from __future__ import annotations

from dataclasses import dataclass, field

from zyracss.maps.breakpoints import BREAKPOINTS, PSEUDO_CLASSES
from zyracss.maps.prefixes import PROPERTY_MAP
from zyracss.maps.types import PROPERTY_RULES, PropertyRule, ValueKind


@dataclass(frozen=True)
class PropertyTable:
    """Prefix -> property and property -> value rule lookups.

    The default instance uses the built-in tables; engines may be built
    with a narrowed or extended table.
    """

    prefixes: dict[str, str] = field(default_factory=lambda: dict(PROPERTY_MAP))
    rules: dict[str, PropertyRule] = field(default_factory=lambda: dict(PROPERTY_RULES))

    def property_for(self, prefix: str) -> str | None:
        return self.prefixes.get(prefix)

    def rule_for(self, prop: str) -> PropertyRule | None:
        return self.rules.get(prop)

    def is_supported(self, prop: str) -> bool:
        return prop in self.prefixes.values()

    def suggest_prefixes(self, prefix: str, limit: int = 5) -> list[str]:
        """Known prefixes sharing the first letter, closest length first."""
        if not prefix:
            return []
        first = prefix[0].lower()
        candidates = [p for p in self.prefixes if p[0] == first]
        candidates.sort(key=lambda p: (abs(len(p) - len(prefix)), p))
        return candidates[:limit]


DEFAULT_TABLE = PropertyTable()

__all__ = [
    "BREAKPOINTS",
    "PSEUDO_CLASSES",
    "PROPERTY_MAP",
    "PROPERTY_RULES",
    "PropertyRule",
    "PropertyTable",
    "ValueKind",
    "DEFAULT_TABLE",
]
