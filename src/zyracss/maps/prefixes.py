"""Prefix -> canonical CSS property tables, grouped by concern."""

from __future__ import annotations

SPACING: dict[str, str] = {
    "padding": "padding",
    "padding-top": "padding-top",
    "padding-right": "padding-right",
    "padding-bottom": "padding-bottom",
    "padding-left": "padding-left",
    "p": "padding",
    "pt": "padding-top",
    "pr": "padding-right",
    "pb": "padding-bottom",
    "pl": "padding-left",
    "padding-block": "padding-block",
    "padding-block-start": "padding-block-start",
    "padding-block-end": "padding-block-end",
    "padding-inline": "padding-inline",
    "padding-inline-start": "padding-inline-start",
    "padding-inline-end": "padding-inline-end",
    "py": "padding-block",
    "py-start": "padding-block-start",
    "py-end": "padding-block-end",
    "px": "padding-inline",
    "px-start": "padding-inline-start",
    "px-end": "padding-inline-end",
    "margin": "margin",
    "margin-top": "margin-top",
    "margin-right": "margin-right",
    "margin-bottom": "margin-bottom",
    "margin-left": "margin-left",
    "m": "margin",
    "mt": "margin-top",
    "mr": "margin-right",
    "mb": "margin-bottom",
    "ml": "margin-left",
    "margin-block": "margin-block",
    "margin-block-start": "margin-block-start",
    "margin-block-end": "margin-block-end",
    "margin-inline": "margin-inline",
    "margin-inline-start": "margin-inline-start",
    "margin-inline-end": "margin-inline-end",
    "my": "margin-block",
    "my-start": "margin-block-start",
    "my-end": "margin-block-end",
    "mx": "margin-inline",
    "mx-start": "margin-inline-start",
    "mx-end": "margin-inline-end",
    "gap": "gap",
    "g": "gap",
    "column-gap": "column-gap",
    "col-gap": "column-gap",
    "row-gap": "row-gap",
}

TYPOGRAPHY: dict[str, str] = {
    "font": "font",
    "font-family": "font-family",
    "ff": "font-family",
    "font-size": "font-size",
    "fs": "font-size",
    "font-weight": "font-weight",
    "fw": "font-weight",
    "font-style": "font-style",
    "content": "content",
    "line-height": "line-height",
    "lh": "line-height",
    "letter-spacing": "letter-spacing",
    "ls": "letter-spacing",
    "text-align": "text-align",
    "ta": "text-align",
    "text-decoration": "text-decoration",
    "td": "text-decoration",
    "text-transform": "text-transform",
    "tt": "text-transform",
}

COLOR: dict[str, str] = {
    "color": "color",
    "c": "color",
    "text": "color",  # overloaded, see class_parser disambiguation
    "text-color": "color",
    "background-color": "background-color",
    "bg-color": "background-color",
    "bg": "background-color",
    "background": "background-color",
    "border-color": "border-color",
}

LAYOUT: dict[str, str] = {
    "display": "display",
    "d": "display",
    "position": "position",
    "pos": "position",
    "top": "top",
    "right": "right",
    "bottom": "bottom",
    "left": "left",
    "float": "float",
    "clear": "clear",
    "overflow": "overflow",
    "overflow-x": "overflow-x",
    "overflow-y": "overflow-y",
    "z-index": "z-index",
    "z": "z-index",
}

SIZING: dict[str, str] = {
    "width": "width",
    "w": "width",
    "min-width": "min-width",
    "min-w": "min-width",
    "max-width": "max-width",
    "max-w": "max-width",
    "height": "height",
    "h": "height",
    "min-height": "min-height",
    "min-h": "min-height",
    "max-height": "max-height",
    "max-h": "max-height",
}

BORDERS: dict[str, str] = {
    "border-w": "border-width",
    "border-width": "border-width",
    "border-t-w": "border-top-width",
    "border-r-w": "border-right-width",
    "border-b-w": "border-bottom-width",
    "border-l-w": "border-left-width",
    "border-style": "border-style",
    "rounded": "border-radius",
    "border-radius": "border-radius",
    "rounded-t": "border-top-left-radius",
    "rounded-r": "border-top-right-radius",
    "rounded-b": "border-bottom-right-radius",
    "rounded-l": "border-bottom-left-radius",
}

EFFECTS: dict[str, str] = {
    "box-shadow": "box-shadow",
    "bs": "box-shadow",
    "opacity": "opacity",
    "o": "opacity",
    "transform": "transform",
    "t": "transform",
    "filter": "filter",
    "f": "filter",
}

PREFIX_GROUPS: dict[str, dict[str, str]] = {
    "spacing": SPACING,
    "typography": TYPOGRAPHY,
    "color": COLOR,
    "layout": LAYOUT,
    "sizing": SIZING,
    "borders": BORDERS,
    "effects": EFFECTS,
}

PROPERTY_MAP: dict[str, str] = {}
for _group in PREFIX_GROUPS.values():
    PROPERTY_MAP.update(_group)
del _group
