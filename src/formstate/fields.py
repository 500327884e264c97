"""Static field declarations and the per-field processing pipeline."""

from __future__ import annotations

import copy
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from formstate.codecs import Codec
from formstate.config import ConverterOptions, FormSettings
from formstate.exceptions import ConversionError
from formstate.utils import resolve

ValidationResponse = str | bool | None
Validator = Callable[[Any], ValidationResponse | Awaitable[ValidationResponse]]
# a message, or a function building one from the accessor being processed
Message = str | Callable[[Any], str]


class BindingMode(StrEnum):
    """When a successfully validated value reaches the domain object."""

    VALUE = "value"
    COMMIT = "commit"


@dataclass(frozen=True, slots=True)
class ProcessValue:
    value: Any


@dataclass(frozen=True, slots=True)
class ValidationMessage:
    message: str


ProcessResult = ProcessValue | ValidationMessage


def _as_message(response: ValidationResponse) -> str | None:
    if isinstance(response, str) and response:
        return response
    return None


def _message(message: Message | None, context: Any) -> str | None:
    if message is None or isinstance(message, str):
        return message
    return message(context)


def _as_validators(value: Validator | Sequence[Validator] | None) -> tuple[Validator, ...]:
    if value is None:
        return ()
    if callable(value):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class FieldDefinition:
    """Declaration of how one domain field is edited.

    Validators return an error message (any non-empty string) or a falsy
    value when the input is acceptable; they may be coroutines.
    """

    codec: Codec[Any, Any]
    raw_validators: tuple[Validator, ...] = ()
    validators: tuple[Validator, ...] = ()
    conversion_error: Message | None = None
    required: bool = False
    required_error: Message | None = None
    binding: BindingMode = BindingMode.VALUE

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_validators", _as_validators(self.raw_validators))
        object.__setattr__(self, "validators", _as_validators(self.validators))

    def conversion_message(self, settings: FormSettings, context: Any = None) -> str:
        return _message(self.conversion_error, context) or settings.conversion_error

    def required_message(self, settings: FormSettings, context: Any = None) -> str:
        return _message(self.required_error, context) or settings.required_error

    def is_required(
        self,
        raw: Any,
        required: bool,
        *,
        ignore_required: bool = False,
        options: ConverterOptions | None = None,
    ) -> bool:
        """Return whether *raw* is an empty input the field cannot accept."""

        if self.codec.never_required or ignore_required:
            return False
        if not self.codec.is_empty(raw, options):
            return False
        return required or self.codec.empty_impossible

    async def process(
        self,
        raw: Any,
        *,
        settings: FormSettings,
        required: bool = False,
        ignore_required: bool = False,
        context: Any = None,
    ) -> ProcessResult:
        """Run required check, raw validators, conversion and value validators.

        *context* is handed to message functions, usually the accessor.
        """

        options = settings.converter_options
        raw = self.codec.preprocess_raw(raw)
        if self.is_required(
            raw,
            required or self.required,
            ignore_required=ignore_required,
            options=options,
        ):
            return ValidationMessage(self.required_message(settings, context))

        for validator in self.raw_validators:
            message = _as_message(await resolve(validator(raw)))
            if message:
                return ValidationMessage(message)

        try:
            value = await self._convert(raw, options)
        except ConversionError:
            return ValidationMessage(self.conversion_message(settings, context))

        for validator in self.validators:
            message = _as_message(await resolve(validator(value)))
            if message:
                return ValidationMessage(message)
        return ProcessValue(value)

    async def _convert(self, raw: Any, options: ConverterOptions) -> Any:
        codec = self.codec
        if (
            codec.empty_value is not None
            and not codec.empty_impossible
            and codec.is_empty(raw, options)
        ):
            return copy.copy(codec.empty_value)
        return await codec.convert(raw, options)

    def render(self, value: Any, settings: FormSettings) -> Any:
        if value is None:
            return self.codec.empty_raw
        return self.codec.render(value, settings.converter_options)


__all__ = [
    "BindingMode",
    "FieldDefinition",
    "Message",
    "ProcessResult",
    "ProcessValue",
    "ValidationMessage",
    "ValidationResponse",
    "Validator",
]
