"""Input-safety layer: guarded regex, sanitizer and threat detector."""

from zyracss.security.detector import (
    ThreatMatch,
    ThreatReport,
    batch_detect,
    detect,
    is_safe,
)
from zyracss.security.patterns import DANGEROUS_PATTERNS, RiskLevel, pattern_info
from zyracss.security.safe_regex import FAST, NORMAL, SLOW, MatchResult, SafeMatcher
from zyracss.security.sanitizer import (
    needs_sanitization,
    sanitize,
    sanitize_many,
    sanitize_value,
)

__all__ = [
    # safe regex
    "SafeMatcher",
    "MatchResult",
    "FAST",
    "NORMAL",
    "SLOW",
    # sanitizer
    "sanitize",
    "sanitize_value",
    "sanitize_many",
    "needs_sanitization",
    # detector
    "RiskLevel",
    "DANGEROUS_PATTERNS",
    "pattern_info",
    "ThreatMatch",
    "ThreatReport",
    "detect",
    "is_safe",
    "batch_detect",
]
