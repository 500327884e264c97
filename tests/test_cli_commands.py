from __future__ import annotations

import json
import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from formstate.cli.__main__ import main
from formstate.cli.app import app
from formstate.cli.deps import reset_settings


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for name in (
        "FORMSTATE_CONVERSION_ERROR",
        "FORMSTATE_REQUIRED_ERROR",
        "FORMSTATE_UNEXPECTED_ERROR",
        "FORMSTATE_DECIMAL_SEPARATOR",
        "FORMSTATE_THOUSAND_SEPARATOR",
        "FORMSTATE_RENDER_THOUSANDS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


def _snapshot(output: str) -> dict[str, object]:
    start = output.index("{")
    end = output.rindex("}") + 1
    return json.loads(output[start:end])


def test_cli_show_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FORMSTATE_REQUIRED_ERROR", "Mandatory")
    runner = CliRunner()
    result = runner.invoke(app, ["show-settings"])
    assert result.exit_code == 0
    assert "Required error:\tMandatory" in result.stdout
    assert "Decimal separator:\t." in result.stdout


def test_cli_show_settings_reads_dotenv(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("FORMSTATE_CONVERSION_ERROR=Unreadable\n")
    runner = CliRunner()
    try:
        result = runner.invoke(app, ["show-settings"])
    finally:
        os.environ.pop("FORMSTATE_CONVERSION_ERROR", None)
    assert result.exit_code == 0
    assert "Conversion error:\tUnreadable" in result.stdout


def test_cli_demo_applies_edits() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["demo", "--set", "quantity=5", "--set", "unit_price=2.5", "--set", "paid=yes"],
    )
    assert result.exit_code == 0, result.stdout
    assert "Form is valid" in result.stdout
    snapshot = _snapshot(result.stdout)
    assert snapshot["quantity"] == 5
    assert snapshot["unit_price"] == "2.5"
    assert snapshot["paid"] is True


def test_cli_demo_reports_invalid_input() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["demo", "--set", "quantity=lots", "--validate"])
    assert result.exit_code == 1
    assert "quantity: Could not convert" in result.stdout
    assert "Form is invalid" in result.stdout
    assert _snapshot(result.stdout)["quantity"] == 2


def test_cli_demo_rejects_unknown_field() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["demo", "--set", "colour=red"])
    assert result.exit_code != 0


def test_cli_check_decimal() -> None:
    runner = CliRunner()
    ok = runner.invoke(app, ["check-decimal", "1.25"])
    assert ok.exit_code == 0
    assert ok.stdout.strip() == "1.25"

    bad = runner.invoke(app, ["check-decimal", "borked"])
    assert bad.exit_code == 1
    assert "Not a valid decimal" in bad.stdout


def test_script_entry_point_runs_commands(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["python -m formstate.cli", "check-decimal", "2.50"])
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == "2.50"


def test_script_entry_point_uses_stable_program_name(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["__main__.py", "--help"])
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "formstate" in out
    assert "__main__.py" not in out
