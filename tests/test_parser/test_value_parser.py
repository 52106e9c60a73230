"""Tests for bracket value splitting."""

import pytest

from zyracss.errors import ValueParseError
from zyracss.parser.value_parser import ParsedValue, parse_value
from zyracss.syntax import check_structure, commas, split_function, words


# ---------------------------------------------------------------------------
# Scanning helpers
# ---------------------------------------------------------------------------


class TestSplitFunction:
    def test_single_call(self):
        assert split_function("rgb(1, 2, 3)") == ("rgb", "1, 2, 3")

    def test_name_lowercased(self):
        assert split_function("RGB(1,2,3)")[0] == "rgb"

    def test_nested_parens(self):
        assert split_function("calc(1px + (2px * 3))") == ("calc", "1px + (2px * 3)")

    def test_trailing_content_rejected(self):
        assert split_function("rgb(1,2,3) x") is None

    def test_not_a_call(self):
        assert split_function("24px") is None

    def test_unclosed(self):
        assert split_function("rgb(1,2") is None


class TestTopLevelSplitting:
    def test_commas_ignore_nested(self):
        assert commas("rgb(1,2,3), blue") == ["rgb(1,2,3)", "blue"]

    def test_commas_keep_empty_parts(self):
        assert commas("a,,b") == ["a", "", "b"]

    def test_commas_ignore_quoted(self):
        assert commas("'a,b', c") == ["'a,b'", "c"]

    def test_words(self):
        assert words("  10px   calc(1px + 2px) ") == ["10px", "calc(1px + 2px)"]


class TestCheckStructure:
    @pytest.mark.parametrize("text", ["(a", "a)", "'abc", "a|b", "a_b", "a;b"])
    def test_rejects(self, text):
        with pytest.raises(ValueParseError):
            check_structure(text)

    def test_separator_inside_quotes_allowed(self):
        check_structure("'a_b'")

    def test_error_carries_position(self):
        with pytest.raises(ValueParseError) as exc_info:
            check_structure("ab)")
        assert exc_info.value.position == 2


# ---------------------------------------------------------------------------
# parse_value
# ---------------------------------------------------------------------------


class TestParseValue:
    def test_single_value(self):
        assert parse_value("24px") == ParsedValue("24px", ("24px",), False)

    def test_strips_whitespace(self):
        assert parse_value("  24px ").normalized_value == "24px"

    def test_single_safe_function_kept_whole(self):
        parsed = parse_value("rgb(255, 0, 0)")
        assert parsed.is_single_function
        assert parsed.components == ("rgb(255, 0, 0)",)
        assert parsed.normalized_value == "rgb(255, 0, 0)"

    def test_unknown_function_not_kept_whole(self):
        parsed = parse_value("foo(1)")
        assert not parsed.is_single_function
        assert parsed.normalized_value == "foo(1)"

    def test_commas_become_spaces(self):
        parsed = parse_value("10px,20px")
        assert parsed.normalized_value == "10px 20px"
        assert parsed.components == ("10px", "20px")

    def test_custom_joiner(self):
        assert parse_value("Arial,Helvetica", joiner=", ").normalized_value == "Arial, Helvetica"

    def test_spaces_rejected_by_default(self):
        with pytest.raises(ValueParseError, match="space-separated"):
            parse_value("10px 20px")

    def test_spaces_allowed_for_shorthand(self):
        parsed = parse_value("10px  20px", allow_spaces=True)
        assert parsed.components == ("10px", "20px")
        assert parsed.normalized_value == "10px 20px"

    def test_spaces_inside_function_allowed(self):
        parsed = parse_value("rotate(45deg),scale(1.5, 2)")
        assert parsed.components == ("rotate(45deg)", "scale(1.5, 2)")

    def test_empty_value(self):
        with pytest.raises(ValueParseError, match="empty value"):
            parse_value("   ")

    def test_empty_component(self):
        with pytest.raises(ValueParseError, match="empty component"):
            parse_value("a,,b")

    def test_trailing_comma(self):
        with pytest.raises(ValueParseError):
            parse_value("a,")

    def test_non_string(self):
        with pytest.raises(ValueParseError):
            parse_value(12)
