"""Lightweight engine configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from formstate.exceptions import ConfigurationError


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no"}


@dataclass(frozen=True, slots=True)
class ConverterOptions:
    """Locale knobs handed to codecs on every parse and render."""

    decimal_separator: str | None = None
    thousand_separator: str | None = None
    render_thousands: bool = False

    def __post_init__(self) -> None:
        if self.thousand_separator == "." and self.decimal_separator is None:
            msg = "Can't set thousand_separator to . without setting decimal_separator"
            raise ConfigurationError(msg)
        if (
            self.thousand_separator is not None
            and self.thousand_separator == self.decimal_separator
        ):
            msg = "Can't set thousand_separator and decimal_separator to the same value"
            raise ConfigurationError(msg)

    @property
    def resolved_decimal_separator(self) -> str:
        return self.decimal_separator or "."

    @property
    def resolved_thousand_separator(self) -> str:
        return self.thousand_separator or ","


@dataclass(frozen=True, slots=True)
class FormSettings:
    """Immutable engine settings, optionally sourced from environment variables."""

    conversion_error: str = "Could not convert"
    required_error: str = "Required"
    unexpected_error: str = "Something went wrong"
    converter_options: ConverterOptions = field(default_factory=ConverterOptions)

    @classmethod
    def from_env(cls) -> FormSettings:
        defaults = cls()
        return cls(
            conversion_error=os.getenv("FORMSTATE_CONVERSION_ERROR", defaults.conversion_error),
            required_error=os.getenv("FORMSTATE_REQUIRED_ERROR", defaults.required_error),
            unexpected_error=os.getenv("FORMSTATE_UNEXPECTED_ERROR", defaults.unexpected_error),
            converter_options=ConverterOptions(
                decimal_separator=os.getenv("FORMSTATE_DECIMAL_SEPARATOR") or None,
                thousand_separator=os.getenv("FORMSTATE_THOUSAND_SEPARATOR") or None,
                render_thousands=_env_bool("FORMSTATE_RENDER_THOUSANDS", False),
            ),
        )


__all__ = ["ConverterOptions", "FormSettings"]
