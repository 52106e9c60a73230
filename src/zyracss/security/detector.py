"""Threat detection: scan text against the dangerous-pattern table."""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from urllib.parse import unquote

from zyracss.security.patterns import (
    BLOCKING_PATTERNS,
    DANGEROUS_PATTERNS,
    RiskLevel,
    max_risk,
)

logger = logging.getLogger(__name__)

_CSS_HEX_ESCAPE = re.compile(r"\\([0-9a-fA-F]{1,6})\s?")
_CSS_CHAR_ESCAPE = re.compile(r"\\(.)")


@dataclass(frozen=True)
class ThreatMatch:
    """A single pattern hit.

    ``encoded`` is set when the pattern only appeared after decoding.
    """

    name: str
    risk: RiskLevel
    description: str
    encoded: bool = False


@dataclass(frozen=True)
class ThreatReport:
    is_dangerous: bool
    matched_patterns: tuple[ThreatMatch, ...] = ()
    risk_level: RiskLevel = RiskLevel.NONE

    @property
    def pattern_names(self) -> list[str]:
        return [m.name for m in self.matched_patterns]

    @property
    def blocking(self) -> bool:
        return self.risk_level.blocking

    def to_dict(self) -> dict:
        return {
            "is_dangerous": self.is_dangerous,
            "risk_level": self.risk_level.value,
            "patterns": [
                {"name": m.name, "risk": m.risk.value, "encoded": m.encoded}
                for m in self.matched_patterns
            ],
        }


SAFE_REPORT = ThreatReport(is_dangerous=False)


def _css_unescape(text: str) -> str:
    def hex_char(m: re.Match[str]) -> str:
        code = int(m.group(1), 16)
        if code == 0 or code > 0x10FFFF:
            return "\ufffd"
        return chr(code)

    text = _CSS_HEX_ESCAPE.sub(hex_char, text)
    return _CSS_CHAR_ESCAPE.sub(r"\1", text)


def decoded_variants(text: str) -> list[str]:
    """Distinct decoded forms of *text*, excluding *text* itself."""
    variants: list[str] = []
    for candidate in (
        unquote(text),
        html.unescape(text),
        _css_unescape(text),
        _css_unescape(html.unescape(unquote(text))),
    ):
        if candidate != text and candidate not in variants:
            variants.append(candidate)
    return variants


def detect(text: str) -> ThreatReport:
    """Scan *text* and every decoded form of it against all patterns.

    The report's risk level is the maximum over all matched patterns.
    """
    if not isinstance(text, str) or not text:
        return SAFE_REPORT

    matches: dict[str, ThreatMatch] = {}
    for pattern in DANGEROUS_PATTERNS:
        if pattern.regex.search(text):
            matches[pattern.name] = ThreatMatch(pattern.name, pattern.risk, pattern.description)

    for variant in decoded_variants(text):
        for pattern in DANGEROUS_PATTERNS:
            if pattern.name in matches:
                continue
            if pattern.regex.search(variant):
                matches[pattern.name] = ThreatMatch(
                    pattern.name, pattern.risk, pattern.description, encoded=True
                )

    if not matches:
        return SAFE_REPORT
    found = tuple(matches.values())
    return ThreatReport(
        is_dangerous=True,
        matched_patterns=found,
        risk_level=max_risk([m.risk for m in found]),
    )


def is_safe(text: str) -> bool:
    """Fast path: check only high and critical patterns, raw and decoded."""
    if not isinstance(text, str):
        return False
    for candidate in [text, *decoded_variants(text)]:
        for pattern in BLOCKING_PATTERNS:
            if pattern.regex.search(candidate):
                return False
    return True


@dataclass
class BatchThreatSummary:
    reports: list[ThreatReport] = field(default_factory=list)
    dangerous: int = 0
    by_risk: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.reports)


def batch_detect(items: list[str]) -> BatchThreatSummary:
    """Run detect() over every item and tally the results by risk level."""
    summary = BatchThreatSummary(by_risk={level.value: 0 for level in RiskLevel})
    for item in items:
        report = detect(item)
        summary.reports.append(report)
        summary.by_risk[report.risk_level.value] += 1
        if report.is_dangerous:
            summary.dangerous += 1
    if summary.dangerous:
        logger.debug("batch_detect: %d of %d inputs flagged", summary.dangerous, summary.total)
    return summary
