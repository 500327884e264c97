"""Named subsets of form fields with independent validation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from formstate.exceptions import AccessError, ConfigurationError

if TYPE_CHECKING:
    from formstate.accessor import FieldAccessor
    from formstate.form import Form
    from formstate.state import FormState


@dataclass(frozen=True)
class Group:
    """Declares either the paths a group includes or the ones it excludes."""

    model_type: type[Any]
    paths: tuple[str, ...] | None = None
    exclude: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.paths is not None and self.exclude is not None:
            msg = "Cannot include and exclude fields at the same time"
            raise ConfigurationError(msg)
        if self.paths is None and self.exclude is None:
            msg = "Must include or exclude some fields"
            raise ConfigurationError(msg)
        if self.paths is not None:
            object.__setattr__(self, "paths", tuple(self.paths))
        if self.exclude is not None:
            object.__setattr__(self, "exclude", tuple(self.exclude))

    def resolve(self, form: Form) -> tuple[str, ...]:
        """Return the paths this group covers on *form*, checking them first."""

        if self.model_type is not form.model_type:
            msg = (
                f"Group for {self.model_type.__name__} cannot be used with a form "
                f"for {form.model_type.__name__}"
            )
            raise ConfigurationError(msg)
        named = self.paths if self.paths is not None else self.exclude or ()
        unknown = [path for path in named if not form.declares(path)]
        if unknown:
            msg = f"Group refers to undeclared field(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        if self.paths is not None:
            return self.paths
        excluded = set(named)
        return tuple(path for path in form.paths if path not in excluded)

    def access(self, state: FormState) -> GroupAccessor:
        return GroupAccessor(self, state, self.resolve(state.form))


class GroupAccessor:
    """View over a :class:`FormState` restricted to one group's fields."""

    def __init__(self, group: Group, state: FormState, paths: Iterable[str]) -> None:
        self.group = group
        self._state = state
        self._paths = tuple(paths)

    @property
    def paths(self) -> tuple[str, ...]:
        return self._paths

    def field(self, path: str) -> FieldAccessor:
        if path not in self._paths:
            msg = f"Field {path} is not part of this group"
            raise AccessError(msg)
        return self._state.field(path)

    @property
    def is_valid(self) -> bool:
        return self._state.is_valid_for(self._paths)

    @property
    def is_warning_free(self) -> bool:
        return self._state.is_warning_free_for(self._paths)

    @property
    def is_validating(self) -> bool:
        return any(
            accessor.validating
            for accessor in (self._state.peek(path) for path in self._paths)
            if accessor is not None
        )

    def errors(self) -> dict[str, str]:
        result: dict[str, str] = {}
        for path in self._paths:
            accessor = self._state.peek(path)
            if accessor is not None and accessor.error is not None:
                result[path] = accessor.error
        return result

    async def validate(self, *, ignore_required: bool = False) -> bool:
        """Validate this group's fields only and join on their results."""

        return await self._state.validate_paths(self._paths, ignore_required=ignore_required)


__all__ = ["Group", "GroupAccessor"]
