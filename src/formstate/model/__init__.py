"""Domain-model boundary: observable models, bindings and custom types."""

from .base import Disposer, ObservableModel, Observer
from .binding import Listener, ModelBinding, ObservableBinding, path_to_steps
from .types import (
    CustomType,
    DecimalValue,
    TypeRegistry,
    decimal_type,
    register_type,
    type_registry,
)

__all__ = [
    "CustomType",
    "DecimalValue",
    "Disposer",
    "Listener",
    "ModelBinding",
    "ObservableBinding",
    "ObservableModel",
    "Observer",
    "TypeRegistry",
    "decimal_type",
    "path_to_steps",
    "register_type",
    "type_registry",
]
