"""Edit-distance suggestions for misspelled keywords and units."""

from __future__ import annotations

from typing import Iterable

MAX_DISTANCE = 2


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between *a* and *b*."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def closest(word: str, candidates: Iterable[str], max_distance: int = MAX_DISTANCE) -> list[str]:
    """Candidates within *max_distance* of *word*, nearest first."""
    word = word.lower()
    scored = []
    for candidate in candidates:
        distance = edit_distance(word, candidate.lower())
        if distance <= max_distance:
            scored.append((distance, candidate))
    scored.sort()
    return [candidate for _, candidate in scored]
