"""Entry point for `python -m formstate.cli` and the `formstate` script."""

from __future__ import annotations

from .app import app


def main() -> None:
    # keep usage text stable whether started as a module or as the script
    app(prog_name="formstate")


if __name__ == "__main__":
    main()
