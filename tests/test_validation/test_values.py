"""Tests for type-directed value validation."""

import pytest

from zyracss.maps import PropertyTable
from zyracss.model.outcome import ValueType
from zyracss.validation.suggest import closest, edit_distance
from zyracss.validation.units import parse_dimension
from zyracss.validation.values import expand_sides, is_valid, validate_many, validate_value


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestExpandSides:
    def test_one(self):
        assert expand_sides(["1px"]) == ["1px"] * 4

    def test_two(self):
        assert expand_sides(["1px", "2px"]) == ["1px", "2px", "1px", "2px"]

    def test_three(self):
        assert expand_sides(["1px", "2px", "3px"]) == ["1px", "2px", "3px", "2px"]

    def test_four(self):
        assert expand_sides(["1", "2", "3", "4"]) == ["1", "2", "3", "4"]

    def test_five_raises(self):
        with pytest.raises(ValueError):
            expand_sides(["1"] * 5)


class TestDimensions:
    def test_parse(self):
        dim = parse_dimension("-1.5REM")
        assert dim.unit == "rem"
        assert dim.negative
        assert dim.normalized() == "-1.5rem"

    def test_unitless(self):
        dim = parse_dimension("12")
        assert dim.unitless
        assert dim.is_integer

    def test_not_a_dimension(self):
        assert parse_dimension("abc") is None
        assert parse_dimension("10px10") is None

    @pytest.mark.parametrize("text", ["1.", "1.px", "-2.%", "."])
    def test_dangling_decimal_point(self, text):
        assert parse_dimension(text) is None

    def test_leading_decimal_point(self):
        assert parse_dimension(".5em").normalized() == ".5em"


class TestSuggest:
    def test_edit_distance(self):
        assert edit_distance("kitten", "sitting") == 3
        assert edit_distance("", "abc") == 3

    def test_closest_orders_by_distance(self):
        assert closest("blok", ["block", "flex", "blocks"]) == ["block", "blocks"]


# ---------------------------------------------------------------------------
# Lengths
# ---------------------------------------------------------------------------


class TestLengths:
    def test_simple(self):
        outcome = validate_value("24px", "padding-top")
        assert outcome.valid
        assert outcome.value == "24px"
        assert outcome.type is ValueType.LENGTH

    def test_unitless_zero(self):
        assert validate_value("0", "width").value == "0"

    def test_missing_unit(self):
        outcome = validate_value("10", "width")
        assert not outcome.valid
        assert outcome.suggestions == ("10px", "10rem")

    def test_dangling_decimal_point(self):
        outcome = validate_value("1.", "width")
        assert not outcome.valid
        assert "not a valid length" in outcome.reason
        assert "1.px" not in outcome.suggestions

    def test_unknown_unit(self):
        assert "unknown length unit" in validate_value("10qx", "width").reason

    def test_percentage(self):
        assert validate_value("50%", "width").valid

    def test_negative_rejected(self):
        assert "negative" in validate_value("-5px", "width").reason

    def test_negative_margin(self):
        assert validate_value("-5px", "margin-top").valid

    def test_keyword(self):
        outcome = validate_value("AUTO", "width")
        assert outcome.value == "auto"
        assert outcome.type is ValueType.KEYWORD

    def test_math(self):
        outcome = validate_value("calc(100% - 10px)", "width")
        assert outcome.valid
        assert outcome.type is ValueType.FUNCTION

    def test_bad_math(self):
        assert not validate_value("calc(1px / 0)", "width").valid

    def test_shorthand_sides(self):
        outcome = validate_value("auto 10px", "margin")
        assert outcome.details["sides"] == ["auto", "10px", "auto", "10px"]

    def test_shorthand_checks_every_value(self):
        assert not validate_value("10px -1px", "padding").valid


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


class TestNumbers:
    def test_line_height_unitless(self):
        outcome = validate_value("1.5", "line-height")
        assert outcome.value == "1.5"
        assert outcome.type is ValueType.NUMBER

    def test_line_height_length(self):
        assert validate_value("24px", "line-height").type is ValueType.LENGTH

    @pytest.mark.parametrize("value", ["0", "0.5", "1", "50%"])
    def test_opacity_valid(self, value):
        assert validate_value(value, "opacity").valid

    @pytest.mark.parametrize("value", ["1.5", "150%", "-0.1", "1px"])
    def test_opacity_invalid(self, value):
        assert not validate_value(value, "opacity").valid

    def test_z_index(self):
        assert validate_value("-10", "z-index").valid
        assert validate_value("auto", "z-index").valid
        assert not validate_value("1.5", "z-index").valid

    def test_font_weight(self):
        assert validate_value("700", "font-weight").valid
        assert validate_value("bold", "font-weight").valid
        assert not validate_value("0", "font-weight").valid
        assert not validate_value("1001", "font-weight").valid
        assert not validate_value("700px", "font-weight").valid


# ---------------------------------------------------------------------------
# Keywords, functions and complex values
# ---------------------------------------------------------------------------


class TestKeywords:
    def test_valid(self):
        assert validate_value("flex", "display").value == "flex"

    def test_misspelled(self):
        outcome = validate_value("flexx", "display")
        assert not outcome.valid
        assert "flex" in outcome.suggestions

    def test_global_keyword_on_any_property(self):
        outcome = validate_value("inherit", "opacity")
        assert outcome.type is ValueType.GLOBAL_KEYWORD

    def test_var_on_any_property(self):
        assert validate_value("var(--w)", "width").type is ValueType.CUSTOM_PROPERTY


class TestFunctionValues:
    def test_transform_list(self):
        outcome = validate_value("rotate(45deg) scale(2)", "transform")
        assert outcome.details["functions"] == ["rotate", "scale"]

    def test_transform_none(self):
        assert validate_value("none", "transform").type is ValueType.KEYWORD

    def test_filter_in_transform_rejected(self):
        assert not validate_value("blur(2px)", "transform").valid

    def test_not_a_call(self):
        assert not validate_value("spin", "transform").valid

    def test_filter(self):
        assert validate_value("blur(2px) brightness(1.2)", "filter").valid


class TestComplexValues:
    def test_box_shadow(self):
        assert validate_value("0 1px 2px black", "box-shadow").valid
        assert validate_value("none", "box-shadow").valid
        assert not validate_value("1px", "box-shadow").valid

    def test_font_family(self):
        assert validate_value("'Open Sans', serif", "font-family").valid
        assert not validate_value("12px", "font-family").valid

    def test_content(self):
        assert validate_value("'hi'", "content").valid
        assert not validate_value("hello", "content").valid

    def test_font_shorthand_is_permissive(self):
        assert validate_value("bold 12px serif", "font").valid


class TestUnknownProperty:
    def test_permissive(self):
        outcome = validate_value("1 / 3", "grid-area")
        assert outcome.valid
        assert outcome.type is ValueType.COMPLEX

    def test_dangerous(self):
        outcome = validate_value("expression(1)", "grid-area")
        assert not outcome.valid
        assert outcome.details["risk_level"] == "critical"

    def test_custom_table(self):
        table = PropertyTable(rules={})
        assert validate_value("anything", "width", table).valid


class TestBatch:
    def test_empty_value(self):
        assert validate_value("  ", "width").reason == "value is empty"

    def test_is_valid(self):
        assert is_valid("red", "color")
        assert not is_valid("10px", "color")

    def test_validate_many(self):
        batch = validate_many([("red", "color"), ("10", "width"), ("1px", "width")])
        assert batch.valid == 2
        assert batch.invalid == 1
        assert len(batch.outcomes) == 3
