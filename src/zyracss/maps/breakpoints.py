"""Variant tables: responsive breakpoints and pseudo-class prefixes."""

from __future__ import annotations

# Ordered smallest first; media blocks are emitted in this order.
BREAKPOINTS: dict[str, str] = {
    "sm": "640px",
    "md": "768px",
    "lg": "1024px",
    "xl": "1280px",
    "2xl": "1536px",
}

PSEUDO_CLASSES: dict[str, str] = {
    "hover": ":hover",
    "focus": ":focus",
    "active": ":active",
    "visited": ":visited",
    "focus-within": ":focus-within",
    "focus-visible": ":focus-visible",
    "disabled": ":disabled",
    "first-child": ":first-child",
    "last-child": ":last-child",
    "odd": ":nth-child(odd)",
    "even": ":nth-child(even)",
}


def media_query(breakpoint: str) -> str:
    """Return the ``@media`` prelude for a breakpoint name."""
    return f"@media (min-width: {BREAKPOINTS[breakpoint]})"


def breakpoint_order(media: str | None) -> int:
    """Sort key placing base rules first, then breakpoints ascending."""
    if media is None:
        return -1
    for index, name in enumerate(BREAKPOINTS):
        if media == media_query(name):
            return index
    return len(BREAKPOINTS)
