"""Codec contract converting raw input into typed values and back."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any, Generic, TypeVar

from formstate.config import ConverterOptions
from formstate.exceptions import ConversionError
from formstate.utils import resolve

R = TypeVar("R")
V = TypeVar("V")

Check = Callable[[Any], bool | Awaitable[bool]]


class InputKey(StrEnum):
    """Name of the input prop carrying the raw value."""

    VALUE = "value"
    CHECKED = "checked"


def _identity(raw: Any) -> Any:
    return raw


class Codec(Generic[R, V]):
    """Bidirectional mapping between a raw representation and a typed value.

    ``parse`` raises :class:`ConversionError` when the raw input cannot be
    converted; ``render`` must accept every value ``parse`` produced.
    ``raw_validate`` and ``validate`` are optional checks returning a bool or
    an awaitable bool; a failed check counts as a conversion failure.
    ``empty_value`` is what an empty input that is allowed to stay empty
    converts to; when it is ``None`` empty input goes through ``parse``.
    """

    def __init__(
        self,
        *,
        parse: Callable[[R, ConverterOptions], V],
        render: Callable[[V, ConverterOptions], R],
        empty_raw: R,
        empty_value: V | None = None,
        empty_impossible: bool = False,
        never_required: bool = False,
        raw_validate: Check | None = None,
        validate: Check | None = None,
        preprocess: Callable[[R], R] | None = None,
        is_empty: Callable[[R, ConverterOptions], bool] | None = None,
        input_key: InputKey = InputKey.VALUE,
    ) -> None:
        self._parse = parse
        self._render = render
        self._raw_validate = raw_validate
        self._validate = validate
        self._preprocess = preprocess or _identity
        self._is_empty = is_empty
        self.empty_raw = empty_raw
        self.empty_value = empty_value
        self.empty_impossible = empty_impossible
        self.never_required = never_required
        self.input_key = input_key

    def preprocess_raw(self, raw: R) -> R:
        return self._preprocess(raw)

    def is_empty(self, raw: R, options: ConverterOptions | None = None) -> bool:
        """Whether *raw* counts as no input; the empty raw value always does."""

        if raw == self.empty_raw:
            return True
        if self._is_empty is None:
            return False
        return self._is_empty(raw, options or ConverterOptions())

    def parse(self, raw: R, options: ConverterOptions | None = None) -> V:
        return self._parse(raw, options or ConverterOptions())

    def render(self, value: V, options: ConverterOptions | None = None) -> R:
        return self._render(value, options or ConverterOptions())

    async def convert(self, raw: R, options: ConverterOptions | None = None) -> V:
        """Run the raw check, ``parse`` and the value check in order."""

        if self._raw_validate is not None and not await resolve(self._raw_validate(raw)):
            raise ConversionError()
        value = self.parse(raw, options)
        if self._validate is not None and not await resolve(self._validate(value)):
            raise ConversionError()
        return value


__all__ = ["Check", "Codec", "InputKey"]
