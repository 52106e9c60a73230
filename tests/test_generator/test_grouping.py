"""Tests for declaration-block grouping."""

from zyracss.generator.grouping import group_rules, ungrouped
from zyracss.generator.rules import build_rule
from zyracss.parser.class_parser import parse_class


def _rules(*tokens):
    return [build_rule(parse_class(token)) for token in tokens]


class TestGroupRules:
    def test_identical_declarations_merge(self):
        groups = group_rules(_rules("p-[1px]", "padding-[1px]"))
        assert len(groups) == 1
        assert groups[0].selectors == [r".p-\[1px\]", r".padding-\[1px\]"]
        assert groups[0].selector == r".p-\[1px\], .padding-\[1px\]"
        assert groups[0].class_names == ["p-[1px]", "padding-[1px]"]

    def test_group_is_union_of_members(self):
        rules = _rules("p-[1px]", "m-[2px]", "padding-[1px]", "margin-[2px]")
        groups = group_rules(rules)
        assert len(groups) == 2
        merged = {name for group in groups for name in group.class_names}
        assert merged == {rule.class_name for rule in rules}

    def test_first_seen_order(self):
        groups = group_rules(_rules("m-[2px]", "p-[1px]", "margin-[2px]"))
        assert [g.declaration_string for g in groups] == ["margin: 2px", "padding: 1px"]

    def test_media_contexts_kept_apart(self):
        groups = group_rules(_rules("p-[1px]", "md:p-[1px]"))
        assert len(groups) == 2
        assert {g.media for g in groups} == {None, "@media (min-width: 768px)"}

    def test_priority_is_max(self):
        groups = group_rules(_rules("bg-[red]", "hover:bg-[red]"))
        assert len(groups) == 1
        assert groups[0].priority == 20

    def test_empty(self):
        assert group_rules([]) == []


class TestUngrouped:
    def test_one_group_per_rule(self):
        groups = ungrouped(_rules("p-[1px]", "padding-[1px]"))
        assert len(groups) == 2
        assert groups[0].selectors == [r".p-\[1px\]"]
