"""Helpers for callables that may or may not return awaitables."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


async def resolve(result: T | Awaitable[T]) -> T:
    """Await *result* when it is awaitable, otherwise return it unchanged."""

    if inspect.isawaitable(result):
        return await result
    return result
