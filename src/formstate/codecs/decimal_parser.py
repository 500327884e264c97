"""Locale-aware decimal parsing and rendering.

Input is tokenized with the configured decimal and thousand separators and
then checked by a small recursive descent parser. Thousand separators are
only accepted between groups of exactly three digits. The parsed result is
a plain decimal string using ``.`` as separator, which keeps it independent
of any numeric type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from formstate.config import ConverterOptions
from formstate.exceptions import ConversionError


class TokenType(StrEnum):
    MINUS = "-"
    DECIMAL_SEPARATOR = "."
    THOUSAND_SEPARATOR = ","
    WHITESPACE = " "
    DIGIT = "0"


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    value: str


@dataclass(frozen=True, slots=True)
class DecimalOptions:
    """Shape constraints for decimal input."""

    max_whole_digits: int = 10
    decimal_places: int = 2
    allow_negative: bool = True
    add_zeroes: bool = True
    normalized_decimal_places: int | None = None
    max_zeroes_padding: int | None = None


_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")
_DIGITS = frozenset("0123456789")


def _tokenize(text: str, options: ConverterOptions) -> list[Token] | None:
    decimal_separator = options.resolved_decimal_separator
    thousand_separator = options.resolved_thousand_separator
    result: list[Token] = []
    for char in text:
        if char == "-":
            result.append(Token(TokenType.MINUS, char))
        elif char == decimal_separator:
            result.append(Token(TokenType.DECIMAL_SEPARATOR, "."))
        elif char == thousand_separator:
            result.append(Token(TokenType.THOUSAND_SEPARATOR, ","))
        elif char in _DIGITS:
            result.append(Token(TokenType.DIGIT, char))
        elif char.isspace():
            result.append(Token(TokenType.WHITESPACE, char))
        else:
            return None
    return result


class _Parser:
    def __init__(self, tokens: list[Token], options: DecimalOptions) -> None:
        self._tokens = tokens
        self._options = options
        self._index = 0
        self._current: Token | None = None

    def _next(self) -> None:
        if self._index >= len(self._tokens):
            self._current = None
            return
        self._current = self._tokens[self._index]
        self._index += 1

    def _accept(self, token_type: TokenType) -> bool:
        if self._current is not None and self._current.type is token_type:
            self._next()
            return True
        return False

    def _expect(self, token_type: TokenType) -> None:
        if not self._accept(token_type):
            raise ConversionError("default")

    def parse(self) -> None:
        self._next()
        self._decimal()
        if self._current is not None:
            raise ConversionError("default")

    def _decimal(self) -> None:
        if self._accept(TokenType.MINUS) and not self._options.allow_negative:
            raise ConversionError("cannotBeNegative")
        self._absolute_decimal()

    def _absolute_decimal(self) -> None:
        if self._accept(TokenType.DECIMAL_SEPARATOR):
            self._expect(TokenType.DIGIT)
            self._fraction()
            return
        self._whole()
        if self._accept(TokenType.DECIMAL_SEPARATOR):
            self._fraction()

    def _whole(self) -> None:
        self._three_or_less_digits()
        while self._accept(TokenType.THOUSAND_SEPARATOR):
            self._three_digits()

    def _three_or_less_digits(self) -> None:
        count = 1
        self._expect(TokenType.DIGIT)
        while self._accept(TokenType.DIGIT):
            count += 1
        # a long run of digits is only fine when no thousand separator follows
        if (
            self._current is not None
            and self._current.type is not TokenType.DECIMAL_SEPARATOR
            and count > 3
        ):
            raise ConversionError("default")

    def _three_digits(self) -> None:
        self._expect(TokenType.DIGIT)
        self._expect(TokenType.DIGIT)
        self._expect(TokenType.DIGIT)

    def _fraction(self) -> None:
        while self._accept(TokenType.DIGIT):
            pass


def _whole_digit_count(tokens: list[Token]) -> int:
    count = 0
    for token in tokens:
        if token.type is TokenType.DECIMAL_SEPARATOR:
            break
        if token.type is TokenType.DIGIT:
            count += 1
    return count


def _decimal_digit_count(tokens: list[Token]) -> int:
    count = 0
    in_decimals = False
    for token in tokens:
        if token.type is TokenType.DECIMAL_SEPARATOR:
            in_decimals = True
        elif in_decimals and token.type is TokenType.DIGIT:
            count += 1
    return count


def _add_zeroes(digits: str, places: int) -> str:
    return digits + "0" * (places - len(digits))


def _normalize(text: str, places: int) -> str:
    whole, _, decimals = text.partition(".")
    return whole + "." + _add_zeroes(decimals, places)


def parse_decimal(
    text: str,
    options: DecimalOptions,
    converter_options: ConverterOptions | None = None,
) -> str:
    """Parse localized *text* into a canonical decimal string.

    Raises :class:`ConversionError` with the failure kind on invalid input.
    """

    tokens = _tokenize(text, converter_options or ConverterOptions())
    if tokens is None:
        raise ConversionError("default")

    _Parser(tokens, options).parse()

    if _whole_digit_count(tokens) > options.max_whole_digits:
        raise ConversionError("tooManyWholeDigits")
    if _decimal_digit_count(tokens) > options.decimal_places:
        raise ConversionError("tooManyDecimalPlaces")

    converted = "".join(
        token.value for token in tokens if token.type is not TokenType.THOUSAND_SEPARATOR
    )
    if options.normalized_decimal_places is None:
        return converted
    return _normalize(converted, options.normalized_decimal_places)


def _trim_decimals(digits: str, places: int) -> str:
    return digits.rstrip("0")[:places]


def render_decimal(
    text: str,
    options: DecimalOptions,
    converter_options: ConverterOptions | None = None,
) -> str:
    """Render a canonical decimal string using the configured separators."""

    if not text:
        return text
    resolved = converter_options or ConverterOptions()
    whole, separator, decimals = text.partition(".")
    if not separator:
        decimals = ""
    negative = whole.startswith("-")
    if negative:
        whole = whole[1:]

    if resolved.render_thousands:
        whole = _THOUSANDS.sub(resolved.resolved_thousand_separator, whole)

    decimals = _trim_decimals(decimals, options.decimal_places)
    if options.add_zeroes:
        places = options.decimal_places
        if options.max_zeroes_padding is not None:
            places = options.max_zeroes_padding
        if places > len(decimals):
            decimals = _add_zeroes(decimals, places)

    result = whole + resolved.resolved_decimal_separator + decimals if decimals else whole
    return "-" + result if negative else result


__all__ = ["DecimalOptions", "Token", "TokenType", "parse_decimal", "render_decimal"]
