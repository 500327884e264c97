"""Observable base class for domain models bound to forms."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

Observer = Callable[[str, Any], None]
Disposer = Callable[[], None]


class ObservableModel(BaseModel):
    """Mutable, assignment-validated model that notifies observers of field changes.

    Every successful assignment to a declared field produces exactly one
    notification carrying the field name and the stored (validated) value.
    Copies (``model_copy``, ``copy.copy``, ``copy.deepcopy``) start without
    observers.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    _observers: list[Observer] = PrivateAttr(default_factory=list)

    def observe(self, observer: Observer) -> Disposer:
        """Register *observer* and return a callable that removes it again."""

        self._observers.append(observer)

        def dispose() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return dispose

    def __copy__(self) -> ObservableModel:
        copied = super().__copy__()
        copied._observers = []
        return copied

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> ObservableModel:
        memo = {} if memo is None else memo
        # observers belong to the original; never deep-copy the accessors behind them
        memo[id(self._observers)] = []
        copied = super().__deepcopy__(memo)
        copied._observers = []
        return copied

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name not in type(self).model_fields:
            return
        stored = getattr(self, name)
        for observer in tuple(self._observers):
            observer(name, stored)


__all__ = ["Disposer", "ObservableModel", "Observer"]
