"""Unit tests for the command line interface."""

from unittest.mock import AsyncMock

from typer.testing import CliRunner

from agrigov import __version__
from agrigov import main

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(main.cli, ["version"])
    assert result.exit_code == 0
    assert f"agrigov v{__version__}" in result.output


def test_sweep(monkeypatch) -> None:
    run_sweep = AsyncMock(return_value=3)
    monkeypatch.setattr(main, "run_sweep", run_sweep)
    monkeypatch.setattr(main, "configure_logging", lambda level: None)

    result = runner.invoke(main.cli, ["sweep", "--limit", "10"])

    assert result.exit_code == 0
    assert "Expired 3 access requests" in result.output
    run_sweep.assert_awaited_once_with(10)


def test_sweep_rejects_zero_limit() -> None:
    result = runner.invoke(main.cli, ["sweep", "--limit", "0"])
    assert result.exit_code != 0
