"""Form state bound to one domain-object instance."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any

from formstate.accessor import FieldAccessor
from formstate.config import FormSettings
from formstate.exceptions import ConfigurationError
from formstate.fields import ValidationResponse
from formstate.utils import resolve
from formstate.validation_props import ValidationPropsConfig, default_validation_props

if TYPE_CHECKING:
    from formstate.form import Form
    from formstate.groups import GroupAccessor

logger = logging.getLogger(__name__)

ExtraValidation = Callable[
    [FieldAccessor, Any], ValidationResponse | Awaitable[ValidationResponse]
]
UpdateHook = Callable[[FieldAccessor], None]
WarningHook = Callable[[FieldAccessor], str | None]
AccessorPredicate = Callable[[FieldAccessor], bool]


def _never(accessor: FieldAccessor) -> bool:
    return False


class FormState:
    """Owns one :class:`FieldAccessor` per declared path of a bound instance.

    Accessors are created on first access and keep their identity for the
    lifetime of the state. Fields that were never touched count as valid
    until a validation sweep runs over them.
    """

    def __init__(
        self,
        form: Form,
        instance: Any,
        *,
        settings: FormSettings | None = None,
        extra_validation: ExtraValidation | None = None,
        on_update: UpdateHook | None = None,
        is_required: AccessorPredicate | None = None,
        get_warning: WarningHook | None = None,
        validation_props: ValidationPropsConfig | None = None,
    ) -> None:
        if not form.binding.accepts(form.model_type, instance):
            msg = f"Cannot bind {type(instance).__name__} to a form for {form.model_type.__name__}"
            raise ConfigurationError(msg)
        self.form = form
        self.instance = instance
        self.binding = form.binding(instance)
        self.settings = settings or FormSettings()
        self._extra_validation = extra_validation
        self._on_update = on_update
        self._is_required = is_required or _never
        self._get_warning = get_warning
        self._validation_props = validation_props
        self._accessors: dict[str, FieldAccessor] = {}

    @property
    def validation_props(self) -> ValidationPropsConfig:
        if self._validation_props is not None:
            return self._validation_props
        return default_validation_props

    def field(self, path: str) -> FieldAccessor:
        """Return the accessor for *path*, creating it on first use."""

        accessor = self._accessors.get(path)
        if accessor is None:
            accessor = FieldAccessor(self, path, self.form.definition(path))
            self._accessors[path] = accessor
        return accessor

    def peek(self, path: str) -> FieldAccessor | None:
        """Return the accessor for *path* if it has been created."""

        return self._accessors.get(path)

    def group(self, name: str) -> GroupAccessor:
        return self.form.group(name).access(self)

    @property
    def is_valid(self) -> bool:
        return self.is_valid_for(self._accessors)

    @property
    def is_validating(self) -> bool:
        return any(accessor.validating for accessor in self._accessors.values())

    def is_valid_for(self, paths: Iterable[str]) -> bool:
        for path in paths:
            accessor = self._accessors.get(path)
            if accessor is not None and not accessor.is_valid:
                return False
        return True

    @property
    def is_warning_free(self) -> bool:
        """Whether no declared field currently carries a warning."""

        return self.is_warning_free_for(self.form.paths)

    def is_warning_free_for(self, paths: Iterable[str]) -> bool:
        return all(self.field(path).warning is None for path in paths)

    def errors(self) -> dict[str, str]:
        return {
            path: accessor.error
            for path, accessor in self._accessors.items()
            if accessor.error is not None
        }

    async def validate(self, *, ignore_required: bool = False) -> bool:
        """Replay the pipeline of every declared field and join on the results."""

        return await self.validate_paths(self.form.paths, ignore_required=ignore_required)

    async def validate_paths(
        self,
        paths: Iterable[str],
        *,
        ignore_required: bool = False,
    ) -> bool:
        accessors = [self.field(path) for path in paths]
        await asyncio.gather(
            *(accessor.revalidate(ignore_required=ignore_required) for accessor in accessors)
        )
        await asyncio.gather(*(accessor.settle() for accessor in accessors))
        valid = all(accessor.is_valid for accessor in accessors)
        logger.debug("Validated %d field(s): %s", len(accessors), "valid" if valid else "invalid")
        return valid

    def commit(self) -> int:
        """Write every held value to the domain object; returns how many were written."""

        return sum(1 for accessor in tuple(self._accessors.values()) if accessor.commit())

    def is_required(self, accessor: FieldAccessor) -> bool:
        return self._is_required(accessor)

    async def extra_validate(self, accessor: FieldAccessor, value: Any) -> str | None:
        if self._extra_validation is None:
            return None
        response = await resolve(self._extra_validation(accessor, value))
        if isinstance(response, str) and response:
            return response
        return None

    def warning_for(self, accessor: FieldAccessor) -> str | None:
        if self._get_warning is None:
            return None
        return self._get_warning(accessor) or None

    def notify_update(self, accessor: FieldAccessor) -> None:
        if self._on_update is not None:
            self._on_update(accessor)

    def dispose(self) -> None:
        """Stop following changes of the bound instance."""

        for accessor in self._accessors.values():
            accessor.dispose()


__all__ = ["AccessorPredicate", "ExtraValidation", "FormState", "UpdateHook", "WarningHook"]
