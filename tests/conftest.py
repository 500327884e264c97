from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure the src/ directory is importable when tests run without an install.
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from formstate.validation_props import reset_validation_props  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_validation_props() -> Iterator[None]:
    reset_validation_props()
    yield
    reset_validation_props()
