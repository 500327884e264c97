"""Built-in codecs for common field types."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from formstate.config import ConverterOptions
from formstate.exceptions import ConversionError

from .base import Codec, InputKey
from .decimal_parser import DecimalOptions, parse_decimal, render_decimal

_INTEGER = re.compile(r"^-?(0|[1-9]\d*)$")

# wide enough to accept any plain float the user can type
_NUMBER_OPTIONS = DecimalOptions(
    max_whole_digits=100,
    decimal_places=100,
    allow_negative=True,
    add_zeroes=False,
)


def _strip(raw: str) -> str:
    return raw.strip()


def string(max_length: int | None = None) -> Codec[str, str]:
    def parse(raw: str, options: ConverterOptions) -> str:
        if max_length is not None and len(raw) > max_length:
            raise ConversionError("exceedsMaxLength")
        return raw

    return Codec(
        parse=parse,
        render=lambda value, options: value,
        empty_raw="",
        empty_value="",
        preprocess=_strip,
    )


def literal_string() -> Codec[str, str]:
    """Pass raw text through untouched, whitespace included."""

    return Codec(
        parse=lambda raw, options: raw,
        render=lambda value, options: value,
        empty_raw="",
        empty_impossible=True,
    )


def _render_float(value: float, options: ConverterOptions) -> str:
    text = format(Decimal(repr(float(value))), "f")
    return render_decimal(text, _NUMBER_OPTIONS, options)


def number() -> Codec[str, float]:
    def parse(raw: str, options: ConverterOptions) -> float:
        return float(parse_decimal(raw, _NUMBER_OPTIONS, options))

    return Codec(
        parse=parse,
        render=_render_float,
        empty_raw="",
        empty_impossible=True,
        preprocess=_strip,
    )


def integer() -> Codec[str, int]:
    def parse(raw: str, options: ConverterOptions) -> int:
        if not _INTEGER.match(raw):
            raise ConversionError()
        return int(raw)

    return Codec(
        parse=parse,
        render=lambda value, options: str(value),
        empty_raw="",
        empty_impossible=True,
        preprocess=_strip,
    )


def decimal(
    *,
    max_whole_digits: int = 10,
    decimal_places: int = 2,
    allow_negative: bool = True,
    add_zeroes: bool = True,
    normalized_decimal_places: int | None = None,
    max_zeroes_padding: int | None = None,
) -> Codec[str, Decimal]:
    decimal_options = DecimalOptions(
        max_whole_digits=max_whole_digits,
        decimal_places=decimal_places,
        allow_negative=allow_negative,
        add_zeroes=add_zeroes,
        normalized_decimal_places=normalized_decimal_places,
        max_zeroes_padding=max_zeroes_padding,
    )

    def parse(raw: str, options: ConverterOptions) -> Decimal:
        return Decimal(parse_decimal(raw, decimal_options, options))

    def render(value: Decimal, options: ConverterOptions) -> str:
        return render_decimal(format(value, "f"), decimal_options, options)

    return Codec(
        parse=parse,
        render=render,
        empty_raw="",
        empty_impossible=True,
        preprocess=_strip,
    )


def string_decimal(
    *,
    max_whole_digits: int = 10,
    decimal_places: int = 2,
    allow_negative: bool = True,
    add_zeroes: bool = True,
    zero_is_empty: bool = False,
) -> Codec[str, str]:
    """Decimal input kept as canonical text instead of a ``Decimal``."""

    decimal_options = DecimalOptions(
        max_whole_digits=max_whole_digits,
        decimal_places=decimal_places,
        allow_negative=allow_negative,
        add_zeroes=add_zeroes,
    )

    def parse(raw: str, options: ConverterOptions) -> str:
        return parse_decimal(raw, decimal_options, options)

    def render(value: str, options: ConverterOptions) -> str:
        return render_decimal(value, decimal_options, options)

    def is_zero(raw: str, options: ConverterOptions) -> bool:
        try:
            return Decimal(parse_decimal(raw, decimal_options, options)) == 0
        except ConversionError:
            return False

    return Codec(
        parse=parse,
        render=render,
        empty_raw="",
        empty_value="0" if zero_is_empty else None,
        empty_impossible=not zero_is_empty,
        preprocess=_strip,
        is_empty=is_zero if zero_is_empty else None,
    )


def boolean() -> Codec[bool, bool]:
    return Codec(
        parse=lambda raw, options: bool(raw),
        render=lambda value, options: bool(value),
        empty_raw=False,
        empty_impossible=True,
        never_required=True,
        input_key=InputKey.CHECKED,
    )


def _drop_blank_lines(raw: str) -> str:
    return "\n".join(line for line in raw.split("\n") if line)


def text_string_array() -> Codec[str, list[str]]:
    """One list entry per line of text."""

    def parse(raw: str, options: ConverterOptions) -> list[str]:
        lines = [line.strip() for line in raw.split("\n")]
        if lines == [""]:
            return []
        return lines

    return Codec(
        parse=parse,
        render=lambda value, options: "\n".join(value),
        empty_raw="",
        empty_value=[],
        preprocess=_drop_blank_lines,
    )


def maybe(codec: Codec[Any, Any]) -> Codec[Any, Any]:
    """Allow *codec* to be left empty, mapping empty input to ``None``."""

    def preprocess(raw: Any) -> Any:
        if raw is None:
            return raw
        if isinstance(raw, str):
            raw = raw.strip()
        return codec.preprocess_raw(raw)

    def parse(raw: Any, options: ConverterOptions) -> Any:
        if raw is None or raw == codec.empty_raw:
            return None
        return codec.parse(raw, options)

    def render(value: Any, options: ConverterOptions) -> Any:
        if value is None:
            return codec.empty_raw
        return codec.render(value, options)

    return Codec(
        parse=parse,
        render=render,
        empty_raw=codec.empty_raw,
        empty_value=None,
        preprocess=preprocess,
        input_key=codec.input_key,
    )


def object_codec() -> Codec[Any, Any]:
    """Identity codec for values edited as whole objects."""

    return Codec(
        parse=lambda raw, options: raw,
        render=lambda value, options: value,
        empty_raw=None,
    )


__all__ = [
    "boolean",
    "decimal",
    "integer",
    "literal_string",
    "maybe",
    "number",
    "object_codec",
    "string",
    "string_decimal",
    "text_string_array",
]
