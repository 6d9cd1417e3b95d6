"""Tests for tfpilot.config (env, YAML, required values)."""

from pathlib import Path

import pytest

from tfpilot.config import AppConfig, GitHubConfig, MissingEnvironmentError, load_config

ENV_KEYS = [
    "GITHUB_EVENT_PATH",
    "GITHUB_TOKEN",
    "GITHUB_EVENT_NAME",
    "EXPAND_SUMMARY_DETAILS",
    "HIGHLIGHT_CHANGES",
    "TF_CONTINUE_ON_ERROR",
    "TF_BINARY",
    "LOGGING_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.yaml")
    assert config.comments.expand_summary_details is True
    assert config.comments.highlight_changes is True
    assert config.runner.binary == "terraform"
    assert config.runner.continue_on_error is False
    assert config.runner.fail_on_missing_plan is False
    assert config.github.api_timeout == 30.0
    assert config.logging.level == "INFO"


def test_environment_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_EVENT_PATH", "/tmp/event.json")
    monkeypatch.setenv("GITHUB_TOKEN", "secret")
    monkeypatch.setenv("EXPAND_SUMMARY_DETAILS", "false")
    monkeypatch.setenv("HIGHLIGHT_CHANGES", "false")
    monkeypatch.setenv("TF_CONTINUE_ON_ERROR", "true")
    config = load_config(tmp_path / "absent.yaml")
    assert config.github.event_path == "/tmp/event.json"
    assert config.comments.expand_summary_details is False
    assert config.comments.highlight_changes is False
    assert config.runner.continue_on_error is True
    assert config.require_environment() == (Path("/tmp/event.json"), "secret")


def test_yaml_with_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "tfpilot.yaml"
    path.write_text(
        "runner:\n  binary: tofu\n  continue_on_error: true\n"
        "logging:\n  level: DEBUG\n"
        "github:\n  token: ${MY_TOKEN}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("MY_TOKEN", "from-env")
    monkeypatch.setenv("TF_BINARY", "terraform1.9")
    config = load_config(path)
    assert config.runner.binary == "terraform1.9"
    assert config.runner.continue_on_error is True
    assert config.logging.level == "DEBUG"
    assert config.github.token == "from-env"


@pytest.mark.parametrize("event_path,token", [(None, "t"), ("/e.json", None), ("", ""), ("  ", "t")])
def test_require_environment_missing(event_path, token) -> None:
    config = AppConfig(github=GitHubConfig(event_path=event_path, token=token))
    with pytest.raises(MissingEnvironmentError, match="GITHUB_EVENT_PATH or GITHUB_TOKEN"):
        config.require_environment()
