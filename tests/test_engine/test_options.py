"""Tests for generation option parsing and scope checking."""

import pytest

from zyracss.config import MAX_SCOPE_LENGTH, GenerationOptions
from zyracss.errors import InvalidOptionsError


class TestFromMapping:
    def test_camel_case_aliases(self):
        opts = GenerationOptions.from_mapping({"groupSelectors": False, "includeComments": True})
        assert not opts.group_selectors
        assert opts.include_comments

    def test_none_gives_defaults(self):
        assert GenerationOptions.from_mapping(None) == GenerationOptions()

    def test_not_a_mapping(self):
        with pytest.raises(InvalidOptionsError):
            GenerationOptions.from_mapping(["minify"])


# ---------------------------------------------------------------------------
# Scope
# ---------------------------------------------------------------------------


class TestScope:
    @pytest.mark.parametrize("scope", [".app", "#root main", "main", ".theme-dark .panel_1"])
    def test_simple_selectors_accepted(self, scope):
        assert GenerationOptions(scope=scope).scope == scope

    @pytest.mark.parametrize(
        "scope",
        [
            "x{} *{background:url(javascript:alert(1))} .y",
            "@media print",
            "a;b",
            ".javascript:x",
            ".app > main",
            "div[onclick]",
            ".a,.b",
        ],
    )
    def test_unsafe_scope_rejected(self, scope):
        with pytest.raises(InvalidOptionsError) as exc_info:
            GenerationOptions(scope=scope)
        assert exc_info.value.option == "scope"

    @pytest.mark.parametrize("scope", ["", "   ", 5])
    def test_empty_or_wrong_type(self, scope):
        with pytest.raises(InvalidOptionsError, match="non-empty string"):
            GenerationOptions(scope=scope)

    def test_too_long(self):
        with pytest.raises(InvalidOptionsError):
            GenerationOptions(scope="." + "a" * MAX_SCOPE_LENGTH)

    def test_from_mapping_checks_scope(self):
        with pytest.raises(InvalidOptionsError):
            GenerationOptions.from_mapping({"scope": "}body{"})
