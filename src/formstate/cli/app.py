"""Typer CLI exercising the form engine against a sample model."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.table import Table

from formstate.codecs import InputKey
from formstate.model import decimal_type
from formstate.state import FormState

from .demo import build_invoice_form, sample_invoice
from .deps import get_settings

app = typer.Typer(help="formstate command-line interface")
console = Console()

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_assignment(value: str) -> tuple[str, str]:
    path, separator, raw = value.partition("=")
    if not separator or not path.strip():
        raise typer.BadParameter(f"Expected PATH=RAW, got {value!r}")
    return path.strip(), raw


def _render_state(state: FormState, paths: tuple[str, ...]) -> Table:
    table = Table(title="Field state")
    table.add_column("Path")
    table.add_column("Raw")
    table.add_column("Value")
    table.add_column("Error", style="red")
    for path in paths:
        accessor = state.field(path)
        table.add_row(
            path,
            repr(accessor.raw),
            repr(accessor.value) if accessor.has_value else "-",
            accessor.error or "",
        )
    return table


@app.command("show-settings")
def show_settings() -> None:
    """Print the resolved engine settings."""

    settings = get_settings()
    options = settings.converter_options
    typer.echo("Conversion error:\t" + settings.conversion_error)
    typer.echo("Required error:\t" + settings.required_error)
    typer.echo("Unexpected error:\t" + settings.unexpected_error)
    typer.echo("Decimal separator:\t" + options.resolved_decimal_separator)
    typer.echo("Thousand separator:\t" + options.resolved_thousand_separator)
    typer.echo("Render thousands:\t" + str(options.render_thousands))


@app.command("demo")
def demo(
    assignments: list[str] = typer.Option(
        [], "--set", "-s", help="Raw edit as PATH=RAW; may be repeated"
    ),
    validate: bool = typer.Option(False, help="Run a full validation sweep afterwards"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Apply raw edits to a sample invoice form and show the resulting state."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    edits = [_parse_assignment(item) for item in assignments]
    form = build_invoice_form()
    for path, _ in edits:
        if not form.declares(path):
            raise typer.BadParameter(f"Unknown field {path}; choose from {', '.join(form.paths)}")

    invoice = sample_invoice()

    async def _run() -> bool:
        state = form.state(invoice, settings=get_settings())
        for path, raw in edits:
            accessor = state.field(path)
            value: object = raw
            if accessor.definition.codec.input_key is InputKey.CHECKED:
                value = raw.strip().lower() in _TRUTHY
            await accessor.set_raw(value)
        valid = await state.validate() if validate else state.is_valid
        console.print(_render_state(state, form.paths))
        for path, error in state.errors().items():
            typer.echo(f"{path}: {error}")
        state.dispose()
        return valid

    valid = asyncio.run(_run())
    typer.echo(invoice.model_dump_json(indent=2))
    typer.echo("Form is valid" if valid else "Form is invalid")
    if not valid:
        raise typer.Exit(code=1)


@app.command("check-decimal")
def check_decimal(value: str) -> None:
    """Check whether VALUE is an acceptable persisted decimal."""

    message = decimal_type.validate(value)
    if message:
        typer.echo(message)
        raise typer.Exit(code=1)
    loaded = decimal_type.from_persisted(value)
    typer.echo(decimal_type.to_persisted(loaded))


__all__ = ["app"]
