"""Domain-model boundary used by field accessors."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol, get_args, runtime_checkable

from pydantic import BaseModel

from formstate.exceptions import FieldLookupError

from .base import Disposer, ObservableModel

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


def path_to_steps(path: str) -> tuple[str, ...]:
    """Split a dotted field path into its steps."""

    return tuple(step for step in path.split(".") if step)


def _unwrap_optional(annotation: Any) -> Any:
    """Return ``X`` for ``X | None``; other annotations are returned as is."""

    if isinstance(annotation, type):
        return annotation
    members = [arg for arg in get_args(annotation) if arg is not type(None)]
    if len(members) == 1 and len(get_args(annotation)) == 2:
        return members[0]
    return annotation


@runtime_checkable
class ModelBinding(Protocol):
    """Read/write/subscribe capability over one domain-object instance."""

    @classmethod
    def has_path(cls, model_type: type[Any], path: str) -> bool: ...

    @classmethod
    def accepts(cls, model_type: type[Any], instance: Any) -> bool: ...

    def read(self, path: str) -> Any: ...

    def write(self, path: str, value: Any) -> None: ...

    def subscribe(self, path: str, listener: Listener) -> Disposer: ...


class ObservableBinding:
    """Binds pydantic models, subscribing through :class:`ObservableModel`."""

    def __init__(self, instance: BaseModel) -> None:
        self._instance = instance

    @property
    def instance(self) -> BaseModel:
        return self._instance

    @classmethod
    def has_path(cls, model_type: type[Any], path: str) -> bool:
        steps = path_to_steps(path)
        if not steps:
            return False
        current: Any = model_type
        for step in steps:
            if not (isinstance(current, type) and issubclass(current, BaseModel)):
                return False
            info = current.model_fields.get(step)
            if info is None:
                return False
            current = _unwrap_optional(info.annotation)
        return True

    @classmethod
    def accepts(cls, model_type: type[Any], instance: Any) -> bool:
        return isinstance(instance, model_type)

    def _parent(self, steps: tuple[str, ...]) -> Any:
        """Walk to the object owning the last step; ``None`` if a sub-model is unset."""

        node: Any = self._instance
        for step in steps[:-1]:
            node = getattr(node, step)
            if node is None:
                return None
        return node

    def read(self, path: str) -> Any:
        steps = path_to_steps(path)
        parent = self._parent(steps)
        if parent is None:
            return None
        return getattr(parent, steps[-1])

    def write(self, path: str, value: Any) -> None:
        steps = path_to_steps(path)
        parent = self._parent(steps)
        if parent is None:
            msg = f"Cannot write {path}: its parent model is not set"
            raise FieldLookupError(msg)
        setattr(parent, steps[-1], value)

    def subscribe(self, path: str, listener: Listener) -> Disposer:
        steps = path_to_steps(path)
        parent = self._parent(steps)
        if not isinstance(parent, ObservableModel):
            logger.debug("Model at %s is not observable; external changes are not tracked", path)
            return lambda: None
        leaf = steps[-1]

        def _forward(name: str, value: Any) -> None:
            if name == leaf:
                listener(value)

        return parent.observe(_forward)


__all__ = ["Listener", "ModelBinding", "ObservableBinding", "path_to_steps"]
