"""Sample invoice model and form used by the demo command."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import Field

from formstate import codecs
from formstate.fields import FieldDefinition
from formstate.form import Form
from formstate.groups import Group
from formstate.model import DecimalValue, ObservableModel


class Customer(ObservableModel):
    name: str = ""
    email: str = ""


class Invoice(ObservableModel):
    reference: str
    quantity: Annotated[int, Field(ge=0)] = 1
    unit_price: DecimalValue = Decimal("0")
    paid: bool = False
    customer: Customer = Field(default_factory=Customer)


def _positive(value: Decimal) -> str | None:
    if value <= 0:
        return "Price must be positive"
    return None


def _looks_like_email(raw: str) -> str | None:
    if raw and "@" not in raw:
        return "Not an email address"
    return None


def build_invoice_form() -> Form:
    return Form(
        Invoice,
        {
            "reference": FieldDefinition(codecs.string(max_length=20), required=True),
            "quantity": FieldDefinition(codecs.integer()),
            "unit_price": FieldDefinition(codecs.decimal(), validators=_positive),
            "paid": FieldDefinition(codecs.boolean()),
            "customer.name": FieldDefinition(codecs.string()),
            "customer.email": FieldDefinition(codecs.string(), raw_validators=_looks_like_email),
        },
        {
            "billing": Group(Invoice, ("quantity", "unit_price")),
            "customer": Group(Invoice, ("customer.name", "customer.email")),
        },
    )


def sample_invoice() -> Invoice:
    return Invoice.model_validate(
        {
            "reference": "INV-001",
            "quantity": 2,
            "unit_price": "19.95",
            "customer": {"name": "Ada", "email": "ada@example.com"},
        }
    )


__all__ = ["Customer", "Invoice", "build_invoice_form", "sample_invoice"]
