"""Tests for class token parsing."""

import pytest

from zyracss.config import SecurityConfig
from zyracss.errors import ErrorCode, Failure
from zyracss.maps import PropertyTable
from zyracss.model.parsed import ParsedClass
from zyracss.parser.class_parser import ClassSyntaxParser, disambiguate, parse_class


@pytest.fixture
def parser():
    return ClassSyntaxParser()


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestBasicParsing:
    def test_padding(self, parser):
        parsed = parser.parse("p-[24px]")
        assert isinstance(parsed, ParsedClass)
        assert parsed.ok
        assert parsed.prefix == "p"
        assert parsed.property == "padding"
        assert parsed.value == "24px"
        assert parsed.raw_value == "24px"
        assert parsed.syntax_kind == "bracket"
        assert parsed.selector == r".p-\[24px\]"

    def test_hex_color_normalized(self, parser):
        parsed = parser.parse("bg-[#FFF]")
        assert parsed.property == "background-color"
        assert parsed.value == "#ffffff"
        assert parsed.metadata["type"] == "color"

    def test_full_property_name_prefix(self, parser):
        assert parser.parse("padding-top-[4px]").property == "padding-top"

    def test_unit_lowercased(self, parser):
        assert parser.parse("w-[10PX]").value == "10px"

    def test_function_value(self, parser):
        parsed = parser.parse("t-[rotate(45deg)]")
        assert parsed.property == "transform"
        assert parsed.is_function
        assert parsed.metadata["functions"] == ["rotate"]

    def test_math_value(self, parser):
        parsed = parser.parse("w-[calc(100%-20px)]")
        assert parsed.value == "calc(100%-20px)"
        assert parsed.metadata["function"] == "calc"

    def test_multiple_transforms_use_commas(self, parser):
        parsed = parser.parse("t-[rotate(45deg),scale(1.5)]")
        assert parsed.value == "rotate(45deg) scale(1.5)"

    def test_font_family_keeps_commas(self, parser):
        parsed = parser.parse("ff-[Arial,sans-serif]")
        assert parsed.value == "Arial, sans-serif"

    def test_font_shorthand_keeps_commas(self, parser):
        parsed = parser.parse("font-['Open Sans',serif]")
        assert parsed.property == "font"
        assert parsed.value == "'Open Sans', serif"

    def test_custom_property(self, parser):
        parsed = parser.parse("c-[var(--brand)]")
        assert parsed.value == "var(--brand)"
        assert parsed.metadata["type"] == "custom-property"

    def test_global_keyword(self, parser):
        assert parser.parse("d-[inherit]").metadata["type"] == "global-keyword"

    def test_to_dict(self, parser):
        data = parser.parse("p-[24px]").to_dict()
        assert data["property"] == "padding"
        assert data["breakpoint"] is None
        assert data["pseudo"] is None

    def test_default_parser(self):
        assert parse_class("m-[auto]").value == "auto"


class TestShorthand:
    def test_sides_from_two_values(self, parser):
        parsed = parser.parse("m-[10px 20px]")
        assert parsed.value == "10px 20px"
        assert parsed.metadata["sides"] == ["10px", "20px", "10px", "20px"]

    def test_commas_in_shorthand(self, parser):
        parsed = parser.parse("p-[1px,2px,3px]")
        assert parsed.value == "1px 2px 3px"
        assert parsed.metadata["sides"] == ["1px", "2px", "3px", "2px"]

    def test_single_value_sides(self, parser):
        assert parser.parse("p-[24px]").metadata["sides"] == ["24px"] * 4

    def test_too_many_values(self, parser):
        result = parser.parse("m-[1px,2px,3px,4px,5px]")
        assert result.code is ErrorCode.INVALID_CSS_VALUE

    def test_non_shorthand_rejects_multiple_values(self, parser):
        result = parser.parse("w-[10px,20px]")
        assert result.code is ErrorCode.INVALID_CSS_VALUE
        assert "single value" in result.message


# ---------------------------------------------------------------------------
# The overloaded text- prefix
# ---------------------------------------------------------------------------


class TestTextDisambiguation:
    def test_length_is_font_size(self, parser):
        parsed = parser.parse("text-[16px]")
        assert parsed.property == "font-size"
        assert parsed.value == "16px"

    def test_color_is_color(self, parser):
        assert parser.parse("text-[red]").property == "color"

    def test_hex_is_color(self, parser):
        assert parser.parse("text-[#333]").property == "color"

    def test_clamp_is_font_size(self, parser):
        assert parser.parse("text-[clamp(1rem,2vw,2rem)]").property == "font-size"

    def test_other_prefix_untouched(self):
        assert disambiguate("p", "16px", "padding") == "padding"


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class TestVariants:
    def test_pseudo(self, parser):
        parsed = parser.parse("hover:bg-[red]")
        assert parsed.variants.pseudo == "hover"
        assert parsed.variants.breakpoint is None
        assert parsed.selector == r".hover\:bg-\[red\]"

    def test_breakpoint_and_pseudo(self, parser):
        parsed = parser.parse("md:hover:p-[1px]")
        assert parsed.variants.breakpoint == "md"
        assert parsed.variants.pseudo == "hover"

    def test_colon_inside_brackets_is_not_a_variant(self, parser):
        result = parser.parse("bg-[url(a:b)]")
        assert result.code is ErrorCode.INVALID_CSS_VALUE

    def test_unknown_variant(self, parser):
        result = parser.parse("foo:p-[1px]")
        assert result.code is ErrorCode.INVALID_SYNTAX
        assert "Unknown variant" in result.message

    def test_conflicting_variants(self, parser):
        result = parser.parse("hover:focus:p-[1px]")
        assert result.code is ErrorCode.INVALID_SYNTAX
        assert "conflicts" in result.message


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_non_string(self, parser):
        result = parser.parse(42)
        assert isinstance(result, Failure)
        assert result.code is ErrorCode.INVALID_INPUT

    def test_empty(self, parser):
        assert parser.parse("   ").code is ErrorCode.INVALID_INPUT

    def test_too_long(self):
        parser = ClassSyntaxParser(security=SecurityConfig(max_class_length=10))
        assert parser.parse("p-[1234567px]").code is ErrorCode.INVALID_INPUT

    def test_value_too_long(self, parser):
        result = parser.parse("w-[" + "1" * 201 + "px]")
        assert result.code is ErrorCode.INVALID_INPUT
        assert "longer than 200" in result.message

    def test_custom_value_ceiling(self):
        parser = ClassSyntaxParser(security=SecurityConfig(max_value_length=5))
        assert parser.parse("w-[12px]").value == "12px"
        assert parser.parse("w-[123456px]").code is ErrorCode.INVALID_INPUT

    def test_dangerous(self, parser):
        result = parser.parse("w-[expression(alert(1))]")
        assert result.code is ErrorCode.DANGEROUS_INPUT
        assert result.context["risk_level"] == "critical"
        assert "css_expression" in result.context["patterns"]

    def test_encoded_danger(self, parser):
        result = parser.parse("bg-[url(javascript%3Aalert(1))]")
        assert result.code is ErrorCode.DANGEROUS_INPUT

    def test_missing_brackets_suggests_fix(self, parser):
        result = parser.parse("p-24px")
        assert result.code is ErrorCode.INVALID_SYNTAX
        assert result.suggestions == ("p-[24px]",)

    def test_missing_dash_suggests_fix(self, parser):
        result = parser.parse("p[24px]")
        assert "p-[24px]" in result.suggestions

    def test_unclosed_bracket(self, parser):
        result = parser.parse("p-[24px")
        assert "balanced" in result.message
        assert "p-[24px]" in result.suggestions

    def test_trailing_content(self, parser):
        result = parser.parse("p-[24px]x")
        assert "p-[24px]" in result.suggestions

    def test_leading_digit(self, parser):
        result = parser.parse("1p-[2px]")
        assert result.code is ErrorCode.INVALID_SYNTAX
        assert "start with a letter" in result.message

    def test_unknown_prefix(self, parser):
        result = parser.parse("zz-[1px]")
        assert result.code is ErrorCode.PROPERTY_NOT_SUPPORTED
        assert result.suggestions == ("z", "z-index")

    def test_bad_separator(self, parser):
        result = parser.parse("w-[a_b]")
        assert result.code is ErrorCode.PARSING_FAILED

    def test_invalid_value(self, parser):
        result = parser.parse("w-[10]")
        assert result.code is ErrorCode.INVALID_CSS_VALUE
        assert "10px" in result.suggestions

    def test_negative_padding(self, parser):
        assert parser.parse("p-[-4px]").code is ErrorCode.INVALID_CSS_VALUE

    def test_negative_margin_allowed(self, parser):
        assert parser.parse("m-[-4px]").value == "-4px"

    def test_failure_names_class(self, parser):
        assert parser.parse("w-[10]").class_name == "w-[10]"


class TestCustomTable:
    def test_narrowed_table(self):
        table = PropertyTable(prefixes={"p": "padding"})
        parser = ClassSyntaxParser(table)
        assert parser.parse("p-[1px]").property == "padding"
        assert parser.parse("m-[1px]").code is ErrorCode.PROPERTY_NOT_SUPPORTED
