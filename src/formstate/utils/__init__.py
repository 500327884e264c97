"""Shared helpers."""

from .awaitables import resolve

__all__ = ["resolve"]
