"""Bounded-cost regular expression evaluation.

Python's ``re`` engine backtracks and a running match cannot be interrupted
from the same thread. SafeMatcher therefore limits the *input* it will hand
to the engine, refuses patterns with known catastrophic-backtracking shapes,
and reports elapsed time so callers can treat slow matches as suspicious.
The timeout is advisory: a match that overruns is flagged after it returns.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

FAST = 100.0
NORMAL = 500.0
SLOW = 2000.0
DEFAULT_MAX_LENGTH = 50_000

Pattern = str | re.Pattern[str]

# A quantified group whose body is itself quantified: (a+)+, (\w*)*, (x+){2,}
_NESTED_QUANTIFIER = re.compile(r"\((?:\?:)?[^()]*[+*}][^()]*\)[+*{]")
# An alternation group that repeats: (a|aa)+, (x|y)*
_REPEATED_ALTERNATION = re.compile(r"\((?:\?:)?[^()]*\|[^()]*\)[+*{]")
# Adjacent unbounded wildcards over the same class: .*.*, \w+\w+
_ADJACENT_WILDCARDS = re.compile(r"(\.\*|\\w[+*]|\.\+)\s*\1")


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one guarded regex evaluation.

    Attributes:
        matched: Whether the pattern matched (False on error).
        timed_out: Elapsed time exceeded the budget. Advisory only.
        error: Why the match was not attempted or failed, if it was not run.
        elapsed_ms: Wall-clock duration of the match.
        match: The match object, when there was one.
        value: Result of non-boolean operations (findall, sub, split).
    """

    matched: bool
    timed_out: bool = False
    error: str | None = None
    elapsed_ms: float = 0.0
    match: re.Match[str] | None = None
    value: object = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.timed_out


def dangerous_shape(source: str) -> str | None:
    """Return a description of a catastrophic-backtracking shape, if any."""
    if _NESTED_QUANTIFIER.search(source):
        return "nested quantified group"
    if _REPEATED_ALTERNATION.search(source):
        return "alternation with repetition"
    if _ADJACENT_WILDCARDS.search(source):
        return "adjacent unbounded wildcards"
    return None


class SafeMatcher:
    """Guarded front end for ``re`` with length and shape checks."""

    def __init__(self, max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self.max_length = max_length
        self._verdicts: dict[str, str | None] = {}

    def _compile(self, pattern: Pattern) -> re.Pattern[str]:
        if isinstance(pattern, re.Pattern):
            return pattern
        return re.compile(pattern)

    def _shape_of(self, compiled: re.Pattern[str]) -> str | None:
        source = compiled.pattern
        if source not in self._verdicts:
            self._verdicts[source] = dangerous_shape(source)
        return self._verdicts[source]

    def _run(
        self,
        pattern: Pattern,
        text: str,
        op: Callable[[re.Pattern[str], str], object],
        timeout_ms: float,
        max_length: int | None,
        allow_dangerous: bool,
    ) -> MatchResult:
        if not isinstance(text, str):
            return MatchResult(matched=False, error="input must be a string")
        limit = self.max_length if max_length is None else max_length
        if len(text) > limit:
            return MatchResult(
                matched=False,
                error=f"input length {len(text)} exceeds limit {limit}",
            )
        try:
            compiled = self._compile(pattern)
        except re.error as exc:
            return MatchResult(matched=False, error=f"invalid pattern: {exc}")

        shape = self._shape_of(compiled)
        if shape and not allow_dangerous:
            return MatchResult(
                matched=False,
                error=f"refusing pattern with {shape}: {compiled.pattern!r}",
            )

        start = time.perf_counter()
        value = op(compiled, text)
        elapsed = (time.perf_counter() - start) * 1000.0
        timed_out = elapsed > timeout_ms
        if timed_out:
            logger.warning(
                "Slow regex: %r took %.1fms (budget %.0fms) on %d chars",
                compiled.pattern,
                elapsed,
                timeout_ms,
                len(text),
            )
        match = value if isinstance(value, re.Match) else None
        if isinstance(value, (re.Match, type(None))):
            matched = value is not None
        else:
            matched = bool(value)
        return MatchResult(
            matched=matched and not timed_out,
            timed_out=timed_out,
            elapsed_ms=elapsed,
            match=match if not timed_out else None,
            value=value if match is None else None,
        )

    # --- public operations ---------------------------------------------------

    def test(
        self,
        pattern: Pattern,
        text: str,
        timeout_ms: float = NORMAL,
        max_length: int | None = None,
        allow_dangerous: bool = False,
    ) -> MatchResult:
        """Search *text* for *pattern*."""
        return self._run(
            pattern, text, lambda p, s: p.search(s), timeout_ms, max_length, allow_dangerous
        )

    def fullmatch(
        self,
        pattern: Pattern,
        text: str,
        timeout_ms: float = NORMAL,
        max_length: int | None = None,
        allow_dangerous: bool = False,
    ) -> MatchResult:
        """Match *pattern* against the whole of *text*."""
        return self._run(
            pattern, text, lambda p, s: p.fullmatch(s), timeout_ms, max_length, allow_dangerous
        )

    def findall(
        self,
        pattern: Pattern,
        text: str,
        timeout_ms: float = NORMAL,
        max_length: int | None = None,
    ) -> MatchResult:
        """Collect every match; ``value`` holds the list."""
        return self._run(
            pattern, text, lambda p, s: p.findall(s), timeout_ms, max_length, False
        )

    def split(
        self,
        pattern: Pattern,
        text: str,
        timeout_ms: float = NORMAL,
        max_length: int | None = None,
    ) -> MatchResult:
        """Split *text* on *pattern*; ``value`` holds the parts."""
        return self._run(
            pattern, text, lambda p, s: p.split(s), timeout_ms, max_length, False
        )
