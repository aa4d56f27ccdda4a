"""Tests for scalar text parsers."""

import math

import pytest

from xmlx.tree import scalars


class TestParseInt:
    """Test signed integer parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("0", 0),
        ("42", 42),
        ("+7", 7),
        ("-12", -12),
        ("007", 7),
        ("-9223372036854775808", -(2 ** 63)),
    ])
    def test_valid(self, text: str, expected: int) -> None:
        """Test decimal integers in range."""
        assert scalars.parse_int(text) == expected

    @pytest.mark.parametrize("text", [
        "", "abc", "1.5", " 1", "1 ", "1_000", "0x10", "9223372036854775808", "٣",
    ])
    def test_invalid(self, text: str) -> None:
        """Test text that is not a plain in-range decimal integer."""
        assert scalars.parse_int(text) is None


class TestParseUint:
    """Test unsigned integer parsing."""

    def test_range(self) -> None:
        """Test the 64-bit unsigned bounds."""
        assert scalars.parse_uint("18446744073709551615") == 2 ** 64 - 1
        assert scalars.parse_uint("18446744073709551616") is None

    @pytest.mark.parametrize("text", ["-1", "+1", "", "1e3"])
    def test_signs_and_garbage_rejected(self, text: str) -> None:
        """Test signs are not accepted."""
        assert scalars.parse_uint(text) is None


class TestParseFloat:
    """Test float parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("1", 1.0),
        ("-2.5", -2.5),
        (".5", 0.5),
        ("3.", 3.0),
        ("1e3", 1000.0),
        ("+1.5E-2", 0.015),
    ])
    def test_valid(self, text: str, expected: float) -> None:
        """Test decimal and exponent notation."""
        assert scalars.parse_float64(text) == expected

    def test_special_values(self) -> None:
        """Test infinities and NaN spellings."""
        assert scalars.parse_float64("Inf") == math.inf
        assert scalars.parse_float64("-infinity") == -math.inf
        assert math.isnan(scalars.parse_float64("NaN"))

    @pytest.mark.parametrize("text", ["", "abc", " 1.0", "1_0", "1e", "e3", "1e400"])
    def test_invalid(self, text: str) -> None:
        """Test malformed and overflowing text."""
        assert scalars.parse_float64(text) is None

    def test_float32_rounds_to_single_precision(self) -> None:
        """Test the float32 parser loses double precision."""
        assert scalars.parse_float32("0.1") != 0.1
        assert scalars.parse_float32("0.1") == pytest.approx(0.1, rel=1e-7)

    def test_float32_overflow(self) -> None:
        """Test values beyond single precision range are rejected."""
        assert scalars.parse_float32("1e39") is None
        assert scalars.parse_float32("1e38") is not None


class TestParseBool:
    """Test bool parsing."""

    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_words(self, text: str) -> None:
        assert scalars.parse_bool(text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false_words(self, text: str) -> None:
        assert scalars.parse_bool(text) is False

    @pytest.mark.parametrize("text", ["", "yes", "tRuE", "2", " true"])
    def test_other_text(self, text: str) -> None:
        assert scalars.parse_bool(text) is None
