"""Pull class tokens out of HTML/JSX ``class`` and ``className`` attributes."""

from __future__ import annotations

import re
from typing import Iterable

_CLASS_ATTRIBUTE = re.compile(r"""\bclass(?:Name)?\s*=\s*(?:"([^"]*)"|'([^']*)')""")


def extract_classes(html: str) -> list[str]:
    """Return unique class tokens in first-seen order."""
    if not isinstance(html, str):
        return []
    seen: dict[str, None] = {}
    for match in _CLASS_ATTRIBUTE.finditer(html):
        value = match.group(1) if match.group(1) is not None else match.group(2)
        for token in value.split():
            seen.setdefault(token, None)
    return list(seen)


def extract_classes_from_many(documents: Iterable[str]) -> list[str]:
    """Union of extract_classes() over several documents, first-seen order."""
    seen: dict[str, None] = {}
    for document in documents:
        for token in extract_classes(document):
            seen.setdefault(token, None)
    return list(seen)
