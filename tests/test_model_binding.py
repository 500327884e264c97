from __future__ import annotations

import copy

import pytest
from pydantic import BaseModel, Field

from formstate import codecs
from formstate.exceptions import FieldLookupError
from formstate.fields import FieldDefinition
from formstate.form import Form
from formstate.model import ModelBinding, ObservableBinding, ObservableModel, path_to_steps


class Address(ObservableModel):
    city: str = ""


class Person(ObservableModel):
    name: str = ""
    age: int = 0
    address: Address = Field(default_factory=Address)


class Plain(BaseModel):
    label: str = ""


def test_path_to_steps() -> None:
    assert path_to_steps("a.b.c") == ("a", "b", "c")
    assert path_to_steps("a") == ("a",)


def test_has_path_walks_nested_models() -> None:
    assert ObservableBinding.has_path(Person, "name")
    assert ObservableBinding.has_path(Person, "address.city")
    assert not ObservableBinding.has_path(Person, "address.zip")
    assert not ObservableBinding.has_path(Person, "name.first")
    assert not ObservableBinding.has_path(Person, "")


def test_binding_satisfies_protocol() -> None:
    assert isinstance(ObservableBinding(Person()), ModelBinding)


def test_read_and_write_nested() -> None:
    person = Person()
    binding = ObservableBinding(person)
    binding.write("address.city", "Paris")
    assert person.address.city == "Paris"
    assert binding.read("address.city") == "Paris"


def test_observers_fire_once_per_assignment() -> None:
    person = Person()
    seen: list[tuple[str, object]] = []
    dispose = person.observe(lambda name, value: seen.append((name, value)))
    person.age = "7"
    assert seen == [("age", 7)]
    dispose()
    person.age = 8
    assert seen == [("age", 7)]


def test_subscribe_filters_by_leaf() -> None:
    person = Person()
    binding = ObservableBinding(person)
    cities: list[object] = []
    dispose = binding.subscribe("address.city", cities.append)
    person.name = "Ada"
    person.address.city = "Oslo"
    assert cities == ["Oslo"]
    dispose()
    person.address.city = "Rome"
    assert cities == ["Oslo"]


def test_subscribe_on_plain_model_is_noop() -> None:
    class Holder(ObservableModel):
        plain: Plain = Field(default_factory=Plain)

    binding = ObservableBinding(Holder())
    dispose = binding.subscribe("plain.label", lambda value: None)
    dispose()


class Customer(ObservableModel):
    name: str = ""


class Invoice(ObservableModel):
    number: int = 0
    customer: Customer | None = None
    either: Customer | Address = Field(default_factory=Customer)


def test_copies_start_without_observers() -> None:
    person = Person()
    seen: list[tuple[str, object]] = []
    person.observe(lambda name, value: seen.append((name, value)))

    shallow = person.model_copy()
    deep = person.model_copy(deep=True)
    copied = copy.copy(person)
    deep_copied = copy.deepcopy(person)
    for clone in (shallow, deep, copied, deep_copied):
        clone.age = 99
    assert seen == []

    person.age = 3
    assert seen == [("age", 3)]


def test_copy_does_not_drive_the_original_accessor() -> None:
    person = Person()
    accessor = Form(Person, {"age": FieldDefinition(codecs.integer())}).state(person).field("age")
    assert accessor.raw == "0"

    clone = person.model_copy()
    clone.age = 99
    deep = copy.deepcopy(person)
    deep.age = 42

    assert person.age == 0
    assert accessor.raw == "0"
    person.age = 5
    assert accessor.raw == "5"


def test_has_path_sees_through_optional_models() -> None:
    assert ObservableBinding.has_path(Invoice, "customer.name")
    assert not ObservableBinding.has_path(Invoice, "customer.email")
    assert not ObservableBinding.has_path(Invoice, "either.name")


def test_unset_optional_parent_reads_none_and_refuses_writes() -> None:
    invoice = Invoice()
    binding = ObservableBinding(invoice)
    assert binding.read("customer.name") is None
    with pytest.raises(FieldLookupError):
        binding.write("customer.name", "Ada")
    binding.subscribe("customer.name", lambda value: None)()

    invoice.customer = Customer(name="Grace")
    assert binding.read("customer.name") == "Grace"
    binding.write("customer.name", "Ada")
    assert invoice.customer.name == "Ada"


@pytest.mark.asyncio
async def test_writing_through_unset_optional_parent_is_a_field_error() -> None:
    invoice = Invoice()
    form = Form(Invoice, {"customer.name": FieldDefinition(codecs.string())})
    accessor = form.state(invoice).field("customer.name")
    assert accessor.raw == ""

    await accessor.set_raw("Ada")

    assert accessor.error == "Cannot write customer.name: its parent model is not set"
    assert invoice.customer is None
