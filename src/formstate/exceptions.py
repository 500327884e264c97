"""Exceptions raised by the form engine."""

from __future__ import annotations


class FormError(RuntimeError):
    """Base class for form engine failures."""


class ConfigurationError(FormError):
    """Raised when a form, group or binding is declared inconsistently."""


class AccessError(FormError):
    """Raised when a group is asked for a field it does not own."""


class FieldLookupError(FormError, LookupError):
    """Raised when a path is not declared on the form."""


class ConversionError(FormError):
    """Raised by codecs when raw input cannot be converted.

    ``kind`` identifies the failure (``"default"``, ``"tooManyDecimalPlaces"``,
    ...) so callers can map it to a message.
    """

    def __init__(self, kind: str = "default") -> None:
        super().__init__(kind)
        self.kind = kind


__all__ = [
    "AccessError",
    "ConfigurationError",
    "ConversionError",
    "FieldLookupError",
    "FormError",
]
