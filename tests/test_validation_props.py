from __future__ import annotations

import pytest

from formstate import (
    Form,
    FieldDefinition,
    ObservableModel,
    ValidationPropsConfig,
    codecs,
    setup_validation_props,
)


class Counter(ObservableModel):
    count: int = 0


def _form() -> Form:
    return Form(Counter, {"count": FieldDefinition(codecs.integer())})


def test_no_hook_means_no_props() -> None:
    accessor = _form().state(Counter()).field("count")
    assert accessor.validation_props == {}


@pytest.mark.asyncio
async def test_global_hook_is_evaluated_on_every_read() -> None:
    setup_validation_props(lambda accessor: {"error": accessor.error})
    accessor = _form().state(Counter()).field("count")
    assert accessor.validation_props == {"error": None}

    await accessor.set_raw("wrong")

    assert accessor.validation_props == {"error": "Could not convert"}


def test_injected_config_takes_precedence() -> None:
    setup_validation_props(lambda accessor: {"global": True})
    local = ValidationPropsConfig()
    local.setup(lambda accessor: {"help": accessor.path})

    scoped = _form().state(Counter(), validation_props=local).field("count")
    default = _form().state(Counter()).field("count")

    assert scoped.validation_props == {"help": "count"}
    assert default.validation_props == {"global": True}

    local.reset()
    assert scoped.validation_props == {}


def test_returned_props_are_copies() -> None:
    shared: dict[str, object] = {"a": 1}
    setup_validation_props(lambda accessor: shared)
    accessor = _form().state(Counter()).field("count")
    accessor.validation_props["b"] = 2
    assert shared == {"a": 1}
