"""ParsedClass: a class token resolved to a validated property/value pair."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Variants:
    """Optional ``breakpoint:`` and ``pseudo:`` prefixes on a token."""

    breakpoint: str | None = None
    pseudo: str | None = None

    @property
    def empty(self) -> bool:
        return self.breakpoint is None and self.pseudo is None


NO_VARIANTS = Variants()


@dataclass(frozen=True)
class ParsedClass:
    """A successfully parsed utility class.

    Attributes:
        class_name: The token as written, variants included.
        prefix: The utility prefix before ``-[``.
        property: Canonical CSS property.
        value: Validated, normalized CSS value.
        raw_value: Text between the brackets, untouched.
        values: Components the raw value was split into.
        syntax_kind: Grammar form that matched (always ``"bracket"``).
        selector: Escaped class selector without pseudo or media.
        is_function: The value is a single CSS function call.
        metadata: Value type tag, shorthand sides and similar detail.
        variants: Responsive and pseudo-class prefixes.
    """

    class_name: str
    prefix: str
    property: str
    value: str
    raw_value: str
    values: tuple[str, ...]
    syntax_kind: str
    selector: str
    is_function: bool = False
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)
    variants: Variants = NO_VARIANTS

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "class_name": self.class_name,
            "prefix": self.prefix,
            "property": self.property,
            "value": self.value,
            "raw_value": self.raw_value,
            "values": list(self.values),
            "syntax_kind": self.syntax_kind,
            "selector": self.selector,
            "is_function": self.is_function,
            "metadata": dict(self.metadata),
            "breakpoint": self.variants.breakpoint,
            "pseudo": self.variants.pseudo,
        }
