from __future__ import annotations

import pytest

from formstate.codecs import DecimalOptions, parse_decimal, render_decimal
from formstate.config import ConverterOptions
from formstate.exceptions import ConfigurationError, ConversionError


def _kind(text: str, options: DecimalOptions, converter: ConverterOptions | None = None) -> str:
    with pytest.raises(ConversionError) as excinfo:
        parse_decimal(text, options, converter)
    return excinfo.value.kind


class TestParseDecimal:
    def test_plain_values(self) -> None:
        options = DecimalOptions()
        assert parse_decimal("3", options) == "3"
        assert parse_decimal("3.14", options) == "3.14"
        assert parse_decimal(".5", options) == ".5"
        assert parse_decimal("-12.5", options) == "-12.5"

    def test_thousand_groups_must_have_three_digits(self) -> None:
        options = DecimalOptions()
        assert parse_decimal("1,234,567.89", options) == "1234567.89"
        assert _kind("1,23", options) == "default"
        assert _kind("1234,567", options) == "default"
        assert _kind("1,2345", options) == "default"

    def test_rejects_garbage(self) -> None:
        options = DecimalOptions()
        for text in ("abc", "1.2.3", "--1", "1-", "1 2", ".", "", "٣"):
            assert _kind(text, options) == "default", text

    def test_limits(self) -> None:
        options = DecimalOptions(max_whole_digits=4, decimal_places=2, allow_negative=False)
        assert parse_decimal("1,234.56", options) == "1234.56"
        assert _kind("12,345", options) == "tooManyWholeDigits"
        assert _kind("1.234", options) == "tooManyDecimalPlaces"
        assert _kind("-1", options) == "cannotBeNegative"

    def test_normalized_decimal_places(self) -> None:
        options = DecimalOptions(normalized_decimal_places=4)
        assert parse_decimal("1.5", options) == "1.5000"
        assert parse_decimal("7", options) == "7.0000"

    def test_custom_separators(self) -> None:
        converter = ConverterOptions(decimal_separator=",", thousand_separator=".")
        options = DecimalOptions()
        assert parse_decimal("1.000,25", options, converter) == "1000.25"
        assert _kind("1,000.25", options, converter) == "default"


class TestRenderDecimal:
    def test_pads_and_trims(self) -> None:
        options = DecimalOptions(decimal_places=2)
        assert render_decimal("4", options) == "4.00"
        assert render_decimal("4.5000", options) == "4.50"
        assert render_decimal("-0.1", options) == "-0.10"
        assert render_decimal("", options) == ""

    def test_max_zeroes_padding(self) -> None:
        options = DecimalOptions(decimal_places=4, max_zeroes_padding=1)
        assert render_decimal("4", options) == "4.0"
        assert render_decimal("4.125", options) == "4.125"

    def test_thousands(self) -> None:
        options = DecimalOptions(add_zeroes=False)
        converter = ConverterOptions(
            decimal_separator=",",
            thousand_separator=".",
            render_thousands=True,
        )
        assert render_decimal("-1234567.5", options, converter) == "-1.234.567,5"
        assert render_decimal("999", options, converter) == "999"


class TestConverterOptions:
    def test_dot_thousand_separator_requires_decimal_separator(self) -> None:
        with pytest.raises(ConfigurationError):
            ConverterOptions(thousand_separator=".")

    def test_separators_must_differ(self) -> None:
        with pytest.raises(ConfigurationError):
            ConverterOptions(decimal_separator=",", thousand_separator=",")
