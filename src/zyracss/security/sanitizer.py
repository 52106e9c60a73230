"""Input cleaning for class tokens and bare values."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

MAX_CLASS_LENGTH = 500
MAX_VALUE_LENGTH = 200

# ASCII control characters except tab, LF and CR
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_WHITESPACE_RUN = re.compile(r"\s+")

# Inputs at or below this length are never rejected for shrinkage.
_SHRINK_MIN_LENGTH = 10
_SHRINK_RATIO = 0.5


def _clean(text: object, max_length: int) -> str | None:
    if not isinstance(text, str):
        return None
    if len(text) > max_length:
        logger.debug("Rejected input of length %d (limit %d)", len(text), max_length)
        return None
    cleaned = _CONTROL_CHARS.sub("", text)
    cleaned = _WHITESPACE_RUN.sub(" ", cleaned)
    if len(text) > _SHRINK_MIN_LENGTH and len(cleaned) < len(text) * _SHRINK_RATIO:
        logger.warning(
            "Rejected input that lost %d of %d characters during cleaning",
            len(text) - len(cleaned),
            len(text),
        )
        return None
    return cleaned.strip()


def sanitize(text: object, max_length: int = MAX_CLASS_LENGTH) -> str | None:
    """Clean a class token, or return None if it should be rejected."""
    return _clean(text, max_length)


def sanitize_value(text: object, max_length: int = MAX_VALUE_LENGTH) -> str | None:
    """Clean a bare CSS value, or return None if it should be rejected."""
    return _clean(text, max_length)


def needs_sanitization(text: str) -> bool:
    """True if cleaning would change *text*."""
    if not isinstance(text, str):
        return True
    return text != _WHITESPACE_RUN.sub(" ", _CONTROL_CHARS.sub("", text)).strip()


@dataclass
class SanitizeBatch:
    sanitized: list[str] = field(default_factory=list)
    failed: list[object] = field(default_factory=list)


def sanitize_many(items: list[object], max_length: int = MAX_CLASS_LENGTH) -> SanitizeBatch:
    """Clean every item, splitting the results into kept and rejected."""
    batch = SanitizeBatch()
    for item in items:
        cleaned = _clean(item, max_length)
        if cleaned:
            batch.sanitized.append(cleaned)
        else:
            batch.failed.append(item)
    return batch
