"""Tests for the tfpilot CLI entry point."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from tfpilot.config import MissingEnvironmentError
from tfpilot.main import main, parse_args
from tfpilot.orchestrator import RunReport
from tfpilot.services.terraform import CommandExecutionError


@pytest.fixture(autouse=True)
def no_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_parse_args_extra_terraform_args() -> None:
    args = parse_args(["plan", "--", "-var-file=prod.tfvars"])
    assert args.subcommand == "plan"
    assert args.extra_args == ["-var-file=prod.tfvars"]
    assert args.config == Path("tfpilot.yaml")


@pytest.mark.parametrize("argv", [[], ["destroy"], ["-x"], ["--bogus"], ["plan", "extra"]])
def test_unsupported_subcommand_exits_1(argv, caplog) -> None:
    caplog.set_level(logging.INFO)
    with patch("tfpilot.main.TfpilotLogging"), patch("tfpilot.main.run_pipeline") as run:
        assert main(argv) == 1
    run.assert_not_called()
    assert "Usage: tfpilot {fmt|init|validate|plan|apply}" in caplog.text


def test_success_returns_report_code() -> None:
    with patch("tfpilot.main.run_pipeline", return_value=RunReport()) as run:
        assert main(["validate"]) == 0
    assert run.call_args[0][0] == "validate"


def test_missing_environment_exits_1() -> None:
    with patch("tfpilot.main.run_pipeline", side_effect=MissingEnvironmentError("missing")):
        assert main(["plan"]) == 1


def test_command_failure_propagates_status() -> None:
    with patch("tfpilot.main.run_pipeline", side_effect=CommandExecutionError("fmt failed", returncode=3)):
        assert main(["fmt"]) == 3
