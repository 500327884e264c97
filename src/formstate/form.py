"""Form declarations binding field definitions to a domain model type."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from formstate.exceptions import ConfigurationError, FieldLookupError
from formstate.fields import FieldDefinition
from formstate.groups import Group
from formstate.model import ModelBinding, ObservableBinding
from formstate.state import FormState


class Form:
    """Stateless declaration of the editable fields of a model type.

    Every declared path, and every declared group, is checked against the
    model shape on construction. :meth:`state` returns a new, independent
    :class:`FormState` on every call.
    """

    def __init__(
        self,
        model_type: type[Any],
        fields: Mapping[str, FieldDefinition],
        groups: Mapping[str, Group] | None = None,
        *,
        binding: type[ModelBinding] = ObservableBinding,
    ) -> None:
        self.model_type = model_type
        self.binding = binding
        for path in fields:
            if not binding.has_path(model_type, path):
                msg = f"Field {path} is not declared on {model_type.__name__}"
                raise ConfigurationError(msg)
        self._fields = dict(fields)
        self._groups = dict(groups or {})
        for group in self._groups.values():
            group.resolve(self)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def declares(self, path: str) -> bool:
        return path in self._fields

    def definition(self, path: str) -> FieldDefinition:
        try:
            return self._fields[path]
        except KeyError as exc:
            msg = f"Field {path} is not declared on the form for {self.model_type.__name__}"
            raise FieldLookupError(msg) from exc

    def group(self, name: str) -> Group:
        try:
            return self._groups[name]
        except KeyError as exc:
            msg = f"Unknown group {name}"
            raise FieldLookupError(msg) from exc

    def state(self, instance: Any, **options: Any) -> FormState:
        """Bind *instance*; keyword options are passed to :class:`FormState`."""

        return FormState(self, instance, **options)


__all__ = ["Form"]
