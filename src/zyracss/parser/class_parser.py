"""Class syntax parser: turn one utility token into a ParsedClass.

Grammar::

    token    := variant* prefix "-[" value "]"
    variant  := (breakpoint | pseudo) ":"
    prefix   := [a-zA-Z][a-zA-Z0-9-]*
    value    := one or more characters other than "]"

Only the bracket form is accepted. ``p-24px`` is rejected with a
suggestion to write ``p-[24px]``.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from zyracss import errors
from zyracss.config import SecurityConfig
from zyracss.errors import Failure, ValueParseError
from zyracss.generator.rules import escape_selector
from zyracss.maps import DEFAULT_TABLE, PropertyTable
from zyracss.maps.breakpoints import BREAKPOINTS, PSEUDO_CLASSES
from zyracss.model.parsed import NO_VARIANTS, ParsedClass, Variants
from zyracss.parser.value_parser import parse_value
from zyracss.security.detector import detect
from zyracss.security.safe_regex import SafeMatcher
from zyracss.security.sanitizer import sanitize, sanitize_value
from zyracss.validation.suggest import closest
from zyracss.validation.values import validate_value

logger = logging.getLogger(__name__)

__all__ = ["ClassSyntaxParser", "parse_class", "disambiguate"]

_BRACKET = re.compile(r"([a-zA-Z][a-zA-Z0-9-]*)-\[([^\]]+)\]")

# numeric + unit, or a unitless number
_LENGTH_SHAPE = re.compile(r"[+-]?(?:\d+(?:\.\d+)?|\.\d+)(?:[a-zA-Z]+|%)?")


_SIZE_FUNCTIONS = ("calc(", "clamp(", "min(", "max(")


def _text_target(raw_value: str, default: str) -> str:
    value = raw_value.strip()
    if _LENGTH_SHAPE.fullmatch(value) or value.lower().startswith(_SIZE_FUNCTIONS):
        return "font-size"
    return default


# Overloaded prefixes. Each needs its own explicit rule.
_DISAMBIGUATORS: dict[str, Callable[[str, str], str]] = {
    "text": _text_target,
}


def disambiguate(prefix: str, raw_value: str, default: str) -> str:
    """Resolve the property for an overloaded *prefix* from the value's shape."""
    rule = _DISAMBIGUATORS.get(prefix)
    if rule is None:
        return default
    return rule(raw_value, default)


class ClassSyntaxParser:
    """Parses and validates single class tokens.

    Stateless apart from its collaborators, so one instance may be shared
    across threads.
    """

    def __init__(
        self,
        table: PropertyTable = DEFAULT_TABLE,
        security: SecurityConfig | None = None,
        matcher: SafeMatcher | None = None,
    ) -> None:
        self.table = table
        self.security = security or SecurityConfig()
        self.matcher = matcher or SafeMatcher(max_length=self.security.max_regex_input)

    # --- variants -------------------------------------------------------------

    def _split_variants(self, token: str) -> tuple[Variants, str] | Failure:
        bracket = token.find("[")
        head = token if bracket < 0 else token[:bracket]
        cut = head.rfind(":")
        if cut < 0:
            return NO_VARIANTS, token
        names = head[:cut].split(":")
        body = token[cut + 1:]

        breakpoint: str | None = None
        pseudo: str | None = None
        for name in names:
            if name in BREAKPOINTS and breakpoint is None:
                breakpoint = name
            elif name in PSEUDO_CLASSES and pseudo is None:
                pseudo = name
            elif name in BREAKPOINTS or name in PSEUDO_CLASSES:
                return errors.invalid_syntax(
                    token, f"Variant {name!r} conflicts with another variant"
                )
            else:
                known = [*BREAKPOINTS, *PSEUDO_CLASSES]
                return errors.invalid_syntax(
                    token,
                    f"Unknown variant {name!r}",
                    [f"{s}:{body}" for s in closest(name, known)[:3]],
                )
        return Variants(breakpoint=breakpoint, pseudo=pseudo), body

    # --- syntax suggestions ---------------------------------------------------

    def _syntax_failure(self, token: str, body: str) -> Failure:
        suggestions: list[str] = []
        reasons: list[str] = []
        if body[:1].isdigit():
            reasons.append("class names must start with a letter")
        if body.count("[") != body.count("]"):
            reasons.append("brackets are not balanced")
            if "[" in body and not body.endswith("]"):
                suggestions.append(f"{body}]")
        if " " in body:
            reasons.append("class names cannot contain spaces outside brackets")
            suggestions.append(body.replace(" ", ""))
        if "[" not in body:
            reasons.append("values must be wrapped in brackets")
            for index in range(len(body) - 1, 0, -1):
                if body[index] == "-" and self.table.property_for(body[:index]):
                    suggestions.append(f"{body[:index]}-[{body[index + 1:]}]")
                    break
        elif "-[" not in body:
            reasons.append("a '-' must separate the prefix from '['")
            suggestions.append(body.replace("[", "-[", 1))
        elif body.count("]") == 1 and not body.endswith("]"):
            reasons.append("nothing may follow the closing bracket")
            suggestions.append(body[: body.index("]") + 1])
        message = "Invalid class syntax, expected prefix-[value]"
        if reasons:
            message += ": " + "; ".join(reasons)
        return errors.invalid_syntax(token, message, suggestions)

    # --- parse ----------------------------------------------------------------

    def parse(self, token: object) -> ParsedClass | Failure:
        """Parse one token into a ParsedClass, or return a Failure."""
        if not isinstance(token, str):
            return errors.invalid_input(
                f"class name must be a string, got {type(token).__name__}"
            )
        cleaned = sanitize(token, self.security.max_class_length)
        if not cleaned:
            return errors.invalid_input(
                "class name is empty, too long, or lost too much content when cleaned",
                class_name=token[:80],
            )

        report = detect(cleaned)
        if report.blocking:
            logger.warning(
                "Rejected dangerous class %r: %s (%s)",
                cleaned[:80],
                ", ".join(report.pattern_names),
                report.risk_level.value,
            )
            return errors.dangerous_input(cleaned, report.risk_level.value, report.pattern_names)
        if report.is_dangerous:
            logger.info(
                "Class %r matched low-risk patterns: %s",
                cleaned[:80],
                ", ".join(report.pattern_names),
            )

        split = self._split_variants(cleaned)
        if isinstance(split, Failure):
            return split
        variants, body = split

        result = self.matcher.fullmatch(
            _BRACKET,
            body,
            timeout_ms=self.security.fast_timeout_ms,
            max_length=self.security.max_class_length,
        )
        if result.error:
            return errors.invalid_input(result.error, class_name=cleaned)
        if result.timed_out:
            return errors.invalid_syntax(cleaned, "Class name took too long to match")
        if not result.matched:
            return self._syntax_failure(cleaned, body)

        prefix, raw_value = result.match.group(1), result.match.group(2)
        if sanitize_value(raw_value, self.security.max_value_length) is None:
            return errors.invalid_input(
                f"value is longer than {self.security.max_value_length} characters",
                class_name=cleaned,
            )
        prop = self.table.property_for(prefix)
        if prop is None:
            return errors.property_not_supported(
                cleaned, prefix, self.table.suggest_prefixes(prefix)
            )
        prop = disambiguate(prefix, raw_value, prop)

        rule = self.table.rule_for(prop)
        try:
            parsed_value = parse_value(
                raw_value,
                allow_spaces=rule.shorthand if rule else False,
                joiner=rule.separator if rule else " ",
            )
        except ValueParseError as exc:
            return errors.parsing_failed(cleaned, raw_value, str(exc))

        outcome = validate_value(parsed_value.normalized_value, prop, self.table)
        if not outcome.valid:
            return errors.invalid_value(
                cleaned, prop, parsed_value.normalized_value, outcome.reason, outcome.suggestions
            )

        metadata = {"type": outcome.type.value, **outcome.details}
        return ParsedClass(
            class_name=cleaned,
            prefix=prefix,
            property=prop,
            value=outcome.value,
            raw_value=raw_value,
            values=parsed_value.components,
            syntax_kind="bracket",
            selector="." + escape_selector(cleaned),
            is_function=parsed_value.is_single_function,
            metadata=metadata,
            variants=variants,
        )


_DEFAULT_PARSER: ClassSyntaxParser | None = None


def parse_class(token: object) -> ParsedClass | Failure:
    """Parse with a parser built on the default property table."""
    global _DEFAULT_PARSER
    if _DEFAULT_PARSER is None:
        _DEFAULT_PARSER = ClassSyntaxParser()
    return _DEFAULT_PARSER.parse(token)
