"""Assemble grouped rules into a stylesheet string."""

from __future__ import annotations

from itertools import groupby

from zyracss.config import GenerationOptions
from zyracss.maps.breakpoints import breakpoint_order
from zyracss.model.rule import GroupedRule

HEADER = "Generated by zyracss"


def _scoped(selectors: list[str], scope: str | None) -> list[str]:
    if not scope:
        return list(selectors)
    return [f"{scope} {selector}" for selector in selectors]


def _render_block(group: GroupedRule, options: GenerationOptions, indent: str) -> str:
    selectors = _scoped(group.selectors, options.scope)
    declarations = sorted(group.declarations.items())
    if options.minify:
        body = ";".join(f"{prop}:{value}" for prop, value in declarations)
        return f"{','.join(selectors)}{{{body}}}"

    lines: list[str] = []
    if options.include_comments:
        lines.append(f"{indent}/* {', '.join(group.class_names)} */")
    lines.append(f"{indent}{', '.join(selectors)} {{")
    for prop, value in declarations:
        lines.append(f"{indent}  {prop}: {value};")
    lines.append(f"{indent}}}")
    return "\n".join(lines)


def render_stylesheet(groups: list[GroupedRule], options: GenerationOptions | None = None) -> str:
    """Render groups, base rules first, then one block per breakpoint ascending."""
    options = options or GenerationOptions()
    ordered = sorted(groups, key=lambda g: breakpoint_order(g.media))

    chunks: list[str] = []
    if options.include_comments and not options.minify:
        chunks.append(f"/* {HEADER} */")

    for media, members in groupby(ordered, key=lambda g: g.media):
        members = list(members)
        if media is None:
            chunks.extend(_render_block(g, options, "") for g in members)
            continue
        if options.minify:
            inner = "".join(_render_block(g, options, "") for g in members)
            chunks.append(f"{media.replace(': ', ':')}{{{inner}}}")
        else:
            inner = "\n\n".join(_render_block(g, options, "  ") for g in members)
            chunks.append(f"{media} {{\n{inner}\n}}")

    if not chunks:
        return ""
    if options.minify:
        return "".join(chunks)
    return "\n\n".join(chunks) + "\n"
