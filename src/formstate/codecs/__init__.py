"""Codec layer public exports."""

from .base import Check, Codec, InputKey
from .builtin import (
    boolean,
    decimal,
    integer,
    literal_string,
    maybe,
    number,
    object_codec,
    string,
    string_decimal,
    text_string_array,
)
from .decimal_parser import DecimalOptions, parse_decimal, render_decimal

__all__ = [
    "Check",
    "Codec",
    "DecimalOptions",
    "InputKey",
    "boolean",
    "decimal",
    "integer",
    "literal_string",
    "maybe",
    "number",
    "object_codec",
    "parse_decimal",
    "render_decimal",
    "string",
    "string_decimal",
    "text_string_array",
]
