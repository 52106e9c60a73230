"""Tests for input cleaning."""

from zyracss.security.sanitizer import (
    needs_sanitization,
    sanitize,
    sanitize_many,
    sanitize_value,
)


class TestSanitize:
    def test_trims_and_collapses_whitespace(self):
        assert sanitize("  p-[1px]  ") == "p-[1px]"

    def test_strips_control_characters(self):
        assert sanitize("p-[1px]\x00") == "p-[1px]"

    def test_keeps_clean_input(self):
        assert sanitize("bg-[#fff]") == "bg-[#fff]"

    def test_rejects_non_string(self):
        assert sanitize(42) is None
        assert sanitize(None) is None

    def test_rejects_over_length(self):
        assert sanitize("a" * 501) is None
        assert sanitize("a" * 500) == "a" * 500

    def test_custom_length_limit(self):
        assert sanitize("abcdef", max_length=5) is None

    def test_rejects_input_that_shrinks_too_much(self):
        assert sanitize("\x00" * 20 + "abc") is None

    def test_short_input_never_rejected_for_shrinkage(self):
        assert sanitize("\x01\x02\x03a") == "a"

    def test_empty_string(self):
        assert sanitize("") == ""


class TestSanitizeValue:
    def test_value_limit(self):
        assert sanitize_value("1" * 200) == "1" * 200
        assert sanitize_value("1" * 201) is None


class TestNeedsSanitization:
    def test_clean(self):
        assert not needs_sanitization("p-[1px]")

    def test_dirty(self):
        assert needs_sanitization(" p-[1px]")
        assert needs_sanitization("p-[1px]\x07")

    def test_non_string(self):
        assert needs_sanitization(3)


class TestSanitizeMany:
    def test_splits_kept_and_failed(self):
        batch = sanitize_many(["p-[1px] ", 7, "", "m-[2px]"])
        assert batch.sanitized == ["p-[1px]", "m-[2px]"]
        assert batch.failed == [7, ""]
