"""Deduplicate rules that share a declaration block.

This is a straight grouping on the declaration string within a media
context. It is not specificity-aware: a merged group only preserves the
order in which its selectors were first seen.
"""

from __future__ import annotations

from typing import Iterable

from zyracss.model.rule import CssRule, GroupedRule


def group_rules(rules: Iterable[CssRule]) -> list[GroupedRule]:
    groups: dict[tuple[str | None, str], GroupedRule] = {}
    for rule in rules:
        key = (rule.media, rule.declaration_string)
        group = groups.get(key)
        if group is None:
            group = GroupedRule(
                declaration_string=rule.declaration_string,
                declarations=dict(rule.declarations),
                media=rule.media,
                priority=rule.priority,
            )
            groups[key] = group
        if rule.selector not in group.selectors:
            group.selectors.append(rule.selector)
        if rule.class_name not in group.class_names:
            group.class_names.append(rule.class_name)
        group.priority = max(group.priority, rule.priority)
    return list(groups.values())


def ungrouped(rules: Iterable[CssRule]) -> list[GroupedRule]:
    """Wrap each rule in its own group, for uniform rendering."""
    return [
        GroupedRule(
            declaration_string=rule.declaration_string,
            declarations=dict(rule.declarations),
            media=rule.media,
            selectors=[rule.selector],
            class_names=[rule.class_name],
            priority=rule.priority,
        )
        for rule in rules
    ]
