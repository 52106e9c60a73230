from zyracss.generator.grouping import group_rules, ungrouped
from zyracss.generator.rules import build_rule, escape_selector, specificity
from zyracss.generator.stylesheet import render_stylesheet

__all__ = [
    "build_rule",
    "escape_selector",
    "specificity",
    "group_rules",
    "ungrouped",
    "render_stylesheet",
]
