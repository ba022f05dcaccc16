"""Tests for catlog.render - templates, labels and timestamps."""

from datetime import datetime

import pytest

from catlog.errors import InvalidArgumentError
from catlog.render import (
    LINE_TERMINATOR, MessageRenderer, format_label, format_template,
    format_timestamp, parse_placeholders, validate_label_format,
)

from conftest import FIXED_NOW, FIXED_STAMP


class TestParsePlaceholders:
    """Test parse_placeholders()."""

    def test_none(self):
        assert parse_placeholders("plain text") == []

    def test_mixed(self):
        assert parse_placeholders("%s took %.2f ms (%5d)") == ["s", "f", "d"]

    def test_literal_percent(self):
        assert parse_placeholders("100%% done %s") == ["s"]

    def test_trailing_percent_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Unsupported"):
            parse_placeholders("100%")

    def test_mapping_key_rejected(self):
        with pytest.raises(InvalidArgumentError):
            parse_placeholders("%(name)s")


class TestFormatTemplate:
    """Test format_template()."""

    def test_no_params(self):
        assert format_template("hello") == "hello"

    def test_positional(self):
        assert format_template("%s has %d items", ("cart", 3)) == "cart has 3 items"

    def test_float_default_precision(self):
        assert format_template("%f ns", (1.5,)) == "1.500000 ns"

    def test_int_accepted_for_float(self):
        assert format_template("%.1f", (2,)) == "2.0"

    def test_literal_percent_without_params(self):
        assert format_template("100%% sure") == "100% sure"

    def test_non_str_message_converted(self):
        assert format_template(42) == "42"

    def test_empty_rejected(self):
        with pytest.raises(InvalidArgumentError, match="empty"):
            format_template("")

    def test_none_rejected(self):
        with pytest.raises(InvalidArgumentError, match="null"):
            format_template(None)

    def test_missing_param(self):
        with pytest.raises(InvalidArgumentError, match="expects 2"):
            format_template("%s and %s", ("one",))

    def test_extra_param(self):
        with pytest.raises(InvalidArgumentError, match="expects 0"):
            format_template("no placeholders", ("extra",))

    def test_float_into_int_rejected(self):
        with pytest.raises(InvalidArgumentError, match="integer"):
            format_template("%d", (1.5,))

    def test_str_into_float_rejected(self):
        with pytest.raises(InvalidArgumentError, match="number"):
            format_template("%f", ("fast",))

    def test_bool_into_int_rejected(self):
        with pytest.raises(InvalidArgumentError):
            format_template("%d", (True,))

    def test_s_accepts_anything(self):
        assert format_template("%s %s", (None, [1])) == "None [1]"

    def test_tuple_param_is_single_value(self):
        assert format_template("%s", ((1, 2),)) == "(1, 2)"


class TestLabel:
    """Test format_label() and validate_label_format()."""

    def test_label(self):
        assert format_label("[%s] ", "db") == "[db] "

    def test_no_format(self):
        assert format_label(None, "db") == ""

    def test_no_category(self):
        assert format_label("[%s] ", None) == ""

    def test_validate_rejects_two_params(self):
        with pytest.raises(InvalidArgumentError):
            validate_label_format("%s/%s")

    def test_validate_rejects_none(self):
        with pytest.raises(InvalidArgumentError):
            validate_label_format(None)


class TestFormatTimestamp:
    """Fractional seconds drop trailing zeros and vanish when zero."""

    def test_fraction_trimmed(self):
        assert format_timestamp(FIXED_NOW) == FIXED_STAMP

    def test_no_fraction(self):
        assert format_timestamp(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05"

    def test_full_microseconds(self):
        moment = datetime(2026, 1, 2, 3, 4, 5, 123456)
        assert format_timestamp(moment) == "2026-01-02T03:04:05.123456"


class TestMessageRenderer:
    """Test MessageRenderer.render()."""

    def test_line_shape(self):
        r = MessageRenderer(now=lambda: FIXED_NOW)
        assert r.render(None, "hi") == f"{FIXED_STAMP}: hi\r\n"

    def test_label_prefix(self):
        r = MessageRenderer(label_format="<%s> ", now=lambda: FIXED_NOW)
        assert r.render("db", "up %d", (3,)) == f"{FIXED_STAMP}: <db> up 3\r\n"

    def test_no_label_without_category(self):
        r = MessageRenderer(label_format="<%s> ", now=lambda: FIXED_NOW)
        assert r.render(None, "x") == f"{FIXED_STAMP}: x\r\n"

    def test_terminator_is_crlf(self):
        assert LINE_TERMINATOR == "\r\n"

    def test_bad_label_format_at_construction(self):
        with pytest.raises(InvalidArgumentError):
            MessageRenderer(label_format="no placeholder")
