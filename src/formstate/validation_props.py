"""Pluggable mapping from field state to renderer-facing props."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from formstate.accessor import FieldAccessor

ValidationProps = Callable[["FieldAccessor"], dict[str, Any]]


def empty_validation_props(accessor: FieldAccessor) -> dict[str, Any]:
    return {}


@dataclass(slots=True)
class ValidationPropsConfig:
    """Holds the single validation props function in effect for its users."""

    _func: ValidationProps = field(default=empty_validation_props)

    def setup(self, func: ValidationProps) -> None:
        self._func = func

    def reset(self) -> None:
        self._func = empty_validation_props

    def props(self, accessor: FieldAccessor) -> dict[str, Any]:
        return dict(self._func(accessor))


default_validation_props = ValidationPropsConfig()


def setup_validation_props(func: ValidationProps) -> None:
    """Install *func* as the process-wide validation props function."""

    default_validation_props.setup(func)


def reset_validation_props() -> None:
    """Restore the process-wide default, which renders no props."""

    default_validation_props.reset()


__all__ = [
    "ValidationProps",
    "ValidationPropsConfig",
    "default_validation_props",
    "empty_validation_props",
    "reset_validation_props",
    "setup_validation_props",
]
