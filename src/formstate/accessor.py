"""Per-field state machine binding raw input to one domain field.

A :class:`FieldAccessor` owns the raw text the user is editing, the last
accepted value, the current error and whether validation is in flight.
Every update is stamped with a ticket; a pipeline only applies its result
when its ticket is still the latest one issued, so results of superseded
updates never become visible regardless of the order in which they finish.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from formstate.exceptions import FieldLookupError
from formstate.fields import (
    BindingMode,
    FieldDefinition,
    ProcessResult,
    ProcessValue,
    ValidationMessage,
)

if TYPE_CHECKING:
    from formstate.state import FormState

logger = logging.getLogger(__name__)


def _first_error_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if errors:
        return str(errors[0]["msg"])
    return str(exc)


class FieldAccessor:
    """Raw/value/error/validating state for one path of a bound instance."""

    def __init__(self, state: FormState, path: str, definition: FieldDefinition) -> None:
        self._state = state
        self._path = path
        self.definition = definition
        self._ticket = 0
        self._current: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._writing = False
        self._uncommitted = False
        self._error: str | None = None
        self._validating = False
        self._value: Any = state.binding.read(path)
        self._has_value = True
        self._raw: Any = definition.render(self._value, state.settings)
        self._dispose = state.binding.subscribe(path, self._on_model_change)

    @property
    def path(self) -> str:
        return self._path

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def raw(self) -> Any:
        return self._raw

    @property
    def value(self) -> Any:
        """Last accepted value, ``None`` while the raw input is not accepted."""

        return self._value if self._has_value else None

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def warning(self) -> str | None:
        """Advisory message from the state's warning hook; never blocks a write."""

        return self._state.warning_for(self)

    @property
    def validating(self) -> bool:
        return self._validating

    @property
    def is_valid(self) -> bool:
        return self._error is None

    @property
    def uncommitted(self) -> bool:
        """Whether an accepted value is waiting for :meth:`commit`."""

        return self._uncommitted

    @property
    def required(self) -> bool:
        if self.definition.codec.never_required:
            return False
        return self.definition.required or self._state.is_required(self)

    @property
    def is_empty(self) -> bool:
        codec = self.definition.codec
        if codec.empty_impossible:
            return False
        return codec.is_empty(
            codec.preprocess_raw(self._raw),
            self._state.settings.converter_options,
        )

    @property
    def validation_props(self) -> dict[str, Any]:
        return self._state.validation_props.props(self)

    @property
    def input_props(self) -> dict[str, Any]:
        key = self.definition.codec.input_key.value
        return {key: self._raw, "on_change": self.set_raw}

    def set_raw(self, raw: Any) -> asyncio.Task[None]:
        """Store *raw* and start converting and validating it.

        ``raw`` and ``validating`` change before this returns. The returned
        task finishes once the result has been applied or discarded; a
        pipeline without suspending validators settles within this call.
        Must be called while an event loop is running.
        """

        loop = asyncio.get_running_loop()
        self._raw = raw
        return self._schedule(loop, raw, ignore_required=False)

    def revalidate(self, *, ignore_required: bool = False) -> asyncio.Task[None]:
        """Replay the pipeline against the current raw input."""

        loop = asyncio.get_running_loop()
        return self._schedule(loop, self._raw, ignore_required=ignore_required)

    async def settle(self) -> None:
        """Wait until the most recently issued pipeline has finished."""

        while self._current is not None and not self._current.done():
            await self._current

    def commit(self) -> bool:
        """Write a held value to the domain object. Returns whether it wrote."""

        if not self._uncommitted or self._validating:
            return False
        return self._write(self._value)

    def set_value(self, value: Any) -> bool:
        """Write *value* to the domain object and re-render the raw input."""

        self._ticket += 1
        self._current = None
        self._raw = self.definition.render(value, self._state.settings)
        if not self._write(value):
            return False
        self._raw = self.definition.render(self._value, self._state.settings)
        return True

    def dispose(self) -> None:
        self._dispose()

    def _schedule(
        self,
        loop: asyncio.AbstractEventLoop,
        raw: Any,
        *,
        ignore_required: bool,
    ) -> asyncio.Task[None]:
        self._ticket += 1
        self._validating = True
        task: asyncio.Task[None] = asyncio.Task(
            self._run(self._ticket, raw, ignore_required),
            loop=loop,
            eager_start=True,
        )
        if task.done():
            self._current = None
            return task
        self._current = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, ticket: int, raw: Any, ignore_required: bool) -> None:
        settings = self._state.settings
        try:
            result: ProcessResult = await self.definition.process(
                raw,
                settings=settings,
                required=self.required,
                ignore_required=ignore_required,
                context=self,
            )
            if isinstance(result, ProcessValue):
                message = await self._state.extra_validate(self, result.value)
                if message:
                    result = ValidationMessage(message)
        except Exception:
            logger.exception("Validation of %s failed unexpectedly", self._path)
            result = ValidationMessage(settings.unexpected_error)

        if ticket != self._ticket:
            logger.debug(
                "Discarding stale result for %s (ticket %d, latest %d)",
                self._path,
                ticket,
                self._ticket,
            )
            return
        self._apply(result)

    def _apply(self, result: ProcessResult) -> None:
        if isinstance(result, ValidationMessage):
            self._fail(result.message)
            return
        if self.definition.binding is BindingMode.COMMIT:
            self._accept(result.value)
            self._uncommitted = True
            return
        self._write(result.value)

    def _accept(self, value: Any) -> None:
        self._value = value
        self._has_value = True
        self._error = None
        self._validating = False

    def _fail(self, message: str) -> None:
        self._value = None
        self._has_value = False
        self._error = message
        self._uncommitted = False
        self._validating = False

    def _write(self, value: Any) -> bool:
        self._accept(value)
        self._uncommitted = False
        self._writing = True
        try:
            self._state.binding.write(self._path, value)
        except ValidationError as exc:
            message = _first_error_message(exc)
            logger.warning("Model rejected value for %s: %s", self._path, message)
            self._fail(message)
            return False
        except FieldLookupError as exc:
            logger.warning("Cannot write %s: %s", self._path, exc)
            self._fail(str(exc))
            return False
        finally:
            self._writing = False
        self._value = self._state.binding.read(self._path)
        logger.debug("Wrote %s to %r", self._path, self._value)
        self._state.notify_update(self)
        return True

    def _on_model_change(self, value: Any) -> None:
        if self._writing:
            return
        # an outside change supersedes any pipeline still in flight
        self._ticket += 1
        self._current = None
        self._accept(value)
        self._uncommitted = False
        self._raw = self.definition.render(value, self._state.settings)
        logger.debug("Re-rendered %s after external change", self._path)

    def __repr__(self) -> str:
        return f"FieldAccessor(path={self._path!r}, raw={self._raw!r}, error={self._error!r})"


__all__ = ["FieldAccessor"]
