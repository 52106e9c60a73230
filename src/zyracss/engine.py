"""Engine: the cached compile pipeline from class tokens to a stylesheet.

token -> sanitize -> detect -> parse -> validate -> build -> group -> render

Single-token parses and whole-batch generations are each cached in the
engine's own CacheSystem, keyed through its KeyMemoizer.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from zyracss.cache.system import CacheSystem
from zyracss.config import EngineConfig, GenerationOptions
from zyracss.errors import ErrorCode, Failure, InvalidInputError
from zyracss.generator.grouping import group_rules, ungrouped
from zyracss.generator.rules import build_rule
from zyracss.generator.stylesheet import render_stylesheet
from zyracss.maps import DEFAULT_TABLE, PropertyTable
from zyracss.maps.breakpoints import PSEUDO_CLASSES, media_query
from zyracss.model.outcome import ValidationOutcome
from zyracss.model.parsed import ParsedClass
from zyracss.model.rule import CssRule, GroupedRule
from zyracss.parser.class_parser import ClassSyntaxParser
from zyracss.parser.extractor import extract_classes_from_many
from zyracss.validation.values import validate_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvalidClass:
    """A rejected token as reported to callers."""

    class_name: str
    reason: str
    code: ErrorCode
    suggestions: tuple[str, ...] = ()

    @classmethod
    def from_failure(cls, token: object, failure: Failure) -> InvalidClass:
        name = token if isinstance(token, str) else repr(token)
        return cls(
            class_name=name,
            reason=failure.message,
            code=failure.code,
            suggestions=failure.suggestions,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "class_name": self.class_name,
            "reason": self.reason,
            "code": self.code.value,
            "suggestions": list(self.suggestions),
        }


@dataclass
class BatchResult:
    parsed: list[ParsedClass] = field(default_factory=list)
    invalid: list[InvalidClass] = field(default_factory=list)
    total_input: int = 0
    cancelled: bool = False

    @property
    def valid(self) -> list[str]:
        return [parsed.class_name for parsed in self.parsed]


@dataclass(frozen=True)
class GenerationStats:
    total_input: int
    valid_classes: int
    invalid_classes: int
    generated_rules: int
    grouped_rules: int
    compression_ratio: float
    processing_time: float  # milliseconds
    from_cache: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_input": self.total_input,
            "valid_classes": self.valid_classes,
            "invalid_classes": self.invalid_classes,
            "generated_rules": self.generated_rules,
            "grouped_rules": self.grouped_rules,
            "compression_ratio": self.compression_ratio,
            "processing_time": self.processing_time,
            "from_cache": self.from_cache,
        }


@dataclass(frozen=True)
class GenerationResult:
    css: str
    rules: tuple[CssRule, ...]
    groups: tuple[GroupedRule, ...]
    invalid: tuple[InvalidClass, ...]
    stats: GenerationStats
    cancelled: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "css": self.css,
            "invalid": [item.to_dict() for item in self.invalid],
            "stats": self.stats.to_dict(),
            "cancelled": self.cancelled,
        }


# Rough averages for size estimates made without rendering
AVERAGE_RULE_BYTES = 45
RULES_PER_CLASS = 1
ESTIMATE_CONFIDENCE = 0.7


@dataclass(frozen=True)
class SizeEstimate:
    estimated_size: int
    estimated_rules: int
    confidence: float
    unit: str = "bytes"

    def to_dict(self) -> dict[str, Any]:
        return {
            "estimated_size": self.estimated_size,
            "estimated_rules": self.estimated_rules,
            "confidence": self.confidence,
            "unit": self.unit,
        }


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000.0, 2)


def _tagged(token: object) -> dict[str, str]:
    """Cache-key form of a non-string token, kept apart from any string."""
    return {"type": type(token).__name__, "repr": repr(token)}


class Engine:
    """Compiles utility classes to CSS with its own caches."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        table: PropertyTable = DEFAULT_TABLE,
        cache: CacheSystem | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.table = table
        self.parser = ClassSyntaxParser(table, self.config.security)
        self.cache = cache or CacheSystem(self.config.cache)
        if self.config.start_sweeper:
            self.cache.start_sweeper()

    # --- input shaping --------------------------------------------------------

    def _tokens(self, classes: str | Iterable[object]) -> list[object]:
        if isinstance(classes, str):
            tokens: list[object] = classes.split()
        elif isinstance(classes, (list, tuple, set, frozenset)):
            tokens = list(classes)
        else:
            raise InvalidInputError(
                f"classes must be a string or a list, got {type(classes).__name__}"
            )
        limit = self.config.security.max_classes_per_request
        if len(tokens) > limit:
            raise InvalidInputError(
                f"too many classes in one request: {len(tokens)} (limit {limit})"
            )
        return tokens

    # --- single token ---------------------------------------------------------

    def parse(self, token: object) -> ParsedClass | Failure:
        """Parse one token, serving repeats from the parse cache."""
        if not isinstance(token, str):
            return self.parser.parse(token)
        key = self.cache.keys.parse_key(token)
        cached = self.cache.parse.get(key)
        if cached is not None:
            return cached
        result = self.parser.parse(token)
        if isinstance(result, ParsedClass):
            self.cache.parse.set(key, result)
        return result

    def validate(self, value: str, prop: str) -> ValidationOutcome:
        return validate_value(value, prop, self.table)

    def build(self, parsed: ParsedClass, important: bool = False) -> CssRule | Failure:
        """Build a rule, serving repeats from the rule cache."""
        selector = parsed.selector
        if parsed.variants.pseudo:
            selector += PSEUDO_CLASSES[parsed.variants.pseudo]
        if parsed.variants.breakpoint:
            selector = f"{media_query(parsed.variants.breakpoint)} {selector}"
        value = f"{parsed.value} !important" if important else parsed.value
        key = self.cache.keys.rule_key(selector, {parsed.property: value})
        cached = self.cache.rules.get(key)
        if cached is not None:
            return cached
        rule = build_rule(parsed, important=important)
        if isinstance(rule, CssRule):
            self.cache.rules.set(key, rule)
        return rule

    # --- batches --------------------------------------------------------------

    def parse_many(
        self,
        classes: str | Iterable[object],
        cancel_event: threading.Event | None = None,
    ) -> BatchResult:
        """Parse a batch; duplicates collapse to one entry.

        A set *cancel_event* stops the batch between tokens and the work
        done so far is returned with ``cancelled=True``.
        """
        tokens = self._tokens(classes)
        batch = BatchResult(total_input=len(tokens))
        seen_tokens: set[str] = set()
        seen_classes: set[str] = set()
        for token in tokens:
            if cancel_event is not None and cancel_event.is_set():
                batch.cancelled = True
                logger.info("Batch cancelled after %d of %d tokens", len(seen_tokens), len(tokens))
                break
            if isinstance(token, str):
                if token in seen_tokens:
                    continue
                seen_tokens.add(token)
            result = self.parse(token)
            if isinstance(result, Failure):
                batch.invalid.append(InvalidClass.from_failure(token, result))
            elif result.class_name not in seen_classes:
                seen_classes.add(result.class_name)
                batch.parsed.append(result)
        return batch

    def generate(
        self,
        classes: str | Iterable[object],
        options: GenerationOptions | Mapping[str, Any] | None = None,
        cancel_event: threading.Event | None = None,
    ) -> GenerationResult:
        """Compile a batch of classes into a stylesheet.

        Raises:
            InvalidOptionsError: *options* is malformed.
            InvalidInputError: *classes* is not a string or list, or too long.
        """
        start = time.perf_counter()
        opts = options if isinstance(options, GenerationOptions) else GenerationOptions.from_mapping(options)
        tokens = self._tokens(classes)

        key = self.cache.keys.generation_key(
            [t if isinstance(t, str) else _tagged(t) for t in tokens], opts.normalized()
        )
        cached = self.cache.generation.get(key)
        if cached is not None:
            logger.debug("Generation cache hit for %d classes", len(tokens))
            stats = replace(cached.stats, from_cache=True, processing_time=_elapsed_ms(start))
            return replace(cached, stats=stats)

        batch = self.parse_many(tokens, cancel_event)
        rules: list[CssRule] = []
        invalid = list(batch.invalid)
        for parsed in batch.parsed:
            rule = self.build(parsed, important=opts.important)
            if isinstance(rule, Failure):
                invalid.append(InvalidClass.from_failure(parsed.class_name, rule))
            else:
                rules.append(rule)

        groups = group_rules(rules) if opts.group_selectors else ungrouped(rules)
        css = render_stylesheet(groups, opts)
        stats = GenerationStats(
            total_input=len(tokens),
            valid_classes=len(rules),
            invalid_classes=len(invalid),
            generated_rules=len(rules),
            grouped_rules=len(groups),
            compression_ratio=round(len(groups) / len(rules), 4) if rules else 1.0,
            processing_time=_elapsed_ms(start),
        )
        result = GenerationResult(
            css=css,
            rules=tuple(rules),
            groups=tuple(groups),
            invalid=tuple(invalid),
            stats=stats,
            cancelled=batch.cancelled,
        )
        if not batch.cancelled:
            self.cache.generation.set(key, result)
        return result

    def generate_from_html(
        self,
        documents: str | Iterable[str],
        options: GenerationOptions | Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """Extract class attributes from markup and compile them."""
        if isinstance(documents, str):
            documents = [documents]
        return self.generate(extract_classes_from_many(documents), options)

    # --- quick checks ---------------------------------------------------------

    def validate_classes(self, classes: str | Iterable[object]) -> BatchResult:
        """Parse without building rules; ``valid`` lists accepted class names."""
        return self.parse_many(classes)

    def are_valid_classes(self, classes: str | Iterable[object]) -> bool:
        """True when every token parses. Malformed input counts as invalid."""
        try:
            batch = self.parse_many(classes)
        except InvalidInputError:
            return False
        return not batch.invalid

    def estimate_css_size(self, classes: str | Iterable[object]) -> SizeEstimate:
        """Estimate stylesheet size from the number of valid classes."""
        try:
            valid = len(self.parse_many(classes).parsed)
        except InvalidInputError:
            return SizeEstimate(0, 0, 0.0)
        rules = valid * RULES_PER_CLASS
        return SizeEstimate(
            estimated_size=rules * AVERAGE_RULE_BYTES,
            estimated_rules=rules,
            confidence=ESTIMATE_CONFIDENCE if valid else 0.0,
        )

    # --- lifecycle ------------------------------------------------------------

    def shutdown(self) -> None:
        self.cache.shutdown()

    def __enter__(self) -> Engine:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()
