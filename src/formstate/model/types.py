"""Custom types converting between persisted snapshots and in-memory values."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator


@dataclass(frozen=True, slots=True)
class CustomType:
    """Named snapshot codec consumed by the model layer.

    ``validate`` must not mutate anything and returns ``""`` exactly when
    ``from_persisted`` would succeed.
    """

    name: str
    from_persisted: Callable[[Any], Any]
    to_persisted: Callable[[Any], Any]
    is_of_type: Callable[[Any], bool]
    validate: Callable[[Any], str]

    def load(self, persisted: Any) -> Any:
        """Return an in-memory value, passing already-converted values through."""

        if self.is_of_type(persisted):
            return persisted
        message = self.validate(persisted)
        if message:
            raise ValueError(message)
        return self.from_persisted(persisted)

    def annotated(self, python_type: Any = Any) -> Any:
        """Return an ``Annotated`` type usable as a pydantic field annotation."""

        return Annotated[
            python_type,
            PlainValidator(self.load),
            PlainSerializer(self.to_persisted, when_used="always"),
        ]


@dataclass(slots=True)
class TypeRegistry:
    """Runtime registry mapping custom type names to their definitions."""

    _types: dict[str, CustomType] = field(default_factory=dict)

    def register(self, custom_type: CustomType, *, override: bool = False) -> None:
        if not override and custom_type.name in self._types:
            msg = f"Custom type {custom_type.name} already registered"
            raise ValueError(msg)
        self._types[custom_type.name] = custom_type

    def get(self, name: str) -> CustomType:
        try:
            return self._types[name]
        except KeyError as exc:
            msg = f"Unknown custom type {name}"
            raise KeyError(msg) from exc

    def list_types(self) -> Iterable[CustomType]:
        return tuple(self._types.values())


def _decimal_to_persisted(value: Decimal) -> str:
    return str(value)


def _is_decimal(value: Any) -> bool:
    return isinstance(value, Decimal)


def _validate_decimal(persisted: Any) -> str:
    if isinstance(persisted, bool) or not isinstance(persisted, str | int):
        return "Not a valid decimal"
    try:
        value = Decimal(persisted)
    except InvalidOperation:
        return "Not a valid decimal"
    if not value.is_finite():
        return "Not a valid decimal"
    return ""


def _decimal_from_persisted(persisted: Any) -> Decimal:
    message = _validate_decimal(persisted)
    if message:
        raise ValueError(message)
    return Decimal(persisted)


decimal_type = CustomType(
    name="decimal",
    from_persisted=_decimal_from_persisted,
    to_persisted=_decimal_to_persisted,
    is_of_type=_is_decimal,
    validate=_validate_decimal,
)

DecimalValue = decimal_type.annotated(Decimal)

type_registry = TypeRegistry()
type_registry.register(decimal_type)


def register_type(custom_type: CustomType, *, override: bool = False) -> None:
    """Register a custom type on the global registry."""

    type_registry.register(custom_type, override=override)


__all__ = [
    "CustomType",
    "DecimalValue",
    "TypeRegistry",
    "decimal_type",
    "register_type",
    "type_registry",
]
