"""The table of named dangerous patterns and their risk levels."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class RiskLevel(Enum):
    """Severity assigned to a dangerous pattern, ordered none < critical."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RANK[self]

    @property
    def blocking(self) -> bool:
        """High and critical risk must stop the pipeline."""
        return self.rank >= _RANK[RiskLevel.HIGH]

    def __lt__(self, other: RiskLevel) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank


_RANK = {
    RiskLevel.NONE: 0,
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
    RiskLevel.CRITICAL: 4,
}


@dataclass(frozen=True)
class DangerousPattern:
    name: str
    regex: re.Pattern[str]
    risk: RiskLevel
    description: str


def _p(name: str, source: str, risk: RiskLevel, description: str) -> DangerousPattern:
    return DangerousPattern(name, re.compile(source, re.IGNORECASE), risk, description)


DANGEROUS_PATTERNS: tuple[DangerousPattern, ...] = (
    _p("javascript_url", r"javascript\s*:", RiskLevel.CRITICAL,
       "JavaScript URL scheme"),
    _p("vbscript_url", r"vbscript\s*:", RiskLevel.CRITICAL,
       "VBScript URL scheme"),
    _p("data_url", r"data\s*:", RiskLevel.HIGH,
       "Data URL, can embed arbitrary content"),
    _p("css_expression", r"expression\s*\(", RiskLevel.CRITICAL,
       "Legacy IE CSS expression()"),
    _p("css_behavior", r"behavior\s*:", RiskLevel.HIGH,
       "Legacy IE behavior binding"),
    _p("css_binding", r"binding\s*:", RiskLevel.HIGH,
       "Legacy Mozilla XBL binding"),
    _p("css_import", r"@import", RiskLevel.MEDIUM,
       "Stylesheet import"),
    _p("css_comment", r"/\*[\s\S]*?\*/", RiskLevel.LOW,
       "CSS comment, can hide content"),
    _p("html_script", r"<\s*script", RiskLevel.CRITICAL,
       "Script tag"),
    _p("html_iframe", r"<\s*iframe", RiskLevel.HIGH,
       "Iframe tag"),
    _p("event_handler", r"\bon\w+\s*=", RiskLevel.CRITICAL,
       "Inline event handler attribute"),
    _p("url_scheme", r"\b(?:file|ftp|mailto|tel):", RiskLevel.MEDIUM,
       "Non-HTTP URL scheme"),
    _p("css_calc_injection", r"calc\s*\([^)]*(?:expression|javascript|eval)",
       RiskLevel.HIGH, "calc() wrapping an injection keyword"),
    _p("css_escape", r"\\[0-9a-f]{1,6}", RiskLevel.MEDIUM,
       "CSS hex escape sequence, can disguise keywords"),
    _p("html_entity", r"&#x?[0-9a-f]+;?", RiskLevel.MEDIUM,
       "Numeric HTML entity, can disguise keywords"),
)

PATTERNS_BY_NAME = {p.name: p for p in DANGEROUS_PATTERNS}

BLOCKING_PATTERNS = tuple(p for p in DANGEROUS_PATTERNS if p.risk.blocking)


def pattern_info(name: str) -> DangerousPattern | None:
    """Look up a pattern by name."""
    return PATTERNS_BY_NAME.get(name)


def max_risk(levels: list[RiskLevel]) -> RiskLevel:
    return max(levels, key=lambda r: r.rank, default=RiskLevel.NONE)
