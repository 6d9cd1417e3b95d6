"""Configuration loading from YAML and environment.

The GitHub token and event path come from the CI environment
(GITHUB_TOKEN, GITHUB_EVENT_PATH). Never put real tokens in config files
committed to the repo.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MissingEnvironmentError(Exception):
    """Raised when a required environment value is absent."""

    pass


# Injected by load_config so ${VAR} substitution can read env
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """GitHub event and comment API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    event_path: str | None = Field(default=None, description="Path to the CI event payload (JSON)")
    event_name: str | None = Field(default=None, description="Triggering event, e.g. pull_request")
    token: str | None = Field(default=None, description="Token for the comment API; use env")
    api_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")


class CommentConfig(BaseSettings):
    """Plan comment rendering."""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    expand_summary_details: bool = Field(default=True, description="Render <details> expanded")
    highlight_changes: bool = Field(default=True, description="Remap in-place changes (~) to !")


class RunnerConfig(BaseSettings):
    """Terraform runner settings."""

    model_config = SettingsConfigDict(env_prefix="TF_", extra="ignore")

    binary: str = Field(default="terraform", description="Terraform executable")
    continue_on_error: bool = Field(default=False, description="Keep going after a failed directory")
    fail_on_missing_plan: bool = Field(default=False, description="Treat a missing tfplan as a failure")
    command_timeout: float | None = Field(default=None, gt=0, description="Per-command timeout in seconds")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="%(levelname)s: %(message)s", description="Log format")
    color: bool = Field(default=True, description="Color level names by severity")


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    comments: CommentConfig = Field(default_factory=CommentConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def require_environment(self) -> tuple[Path, str]:
        """Return (event_path, token) or raise MissingEnvironmentError."""
        event_path = (self.github.event_path or "").strip()
        token = (self.github.token or "").strip()
        if not event_path or not token:
            raise MissingEnvironmentError("GITHUB_EVENT_PATH or GITHUB_TOKEN environment variable missing.")
        return Path(event_path), token


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _without_env_overrides(raw: dict[str, Any], prefix: str) -> dict[str, Any]:
    """Drop YAML keys that are also set in the environment (env wins)."""
    return {k: v for k, v in raw.items() if f"{prefix}{k}".upper() not in _current_env}


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Environment variables take precedence over YAML values.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = config_path or Path("tfpilot.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    github = GitHubConfig(**_without_env_overrides(raw.get("github") or {}, "GITHUB_"))
    comments = CommentConfig(**_without_env_overrides(raw.get("comments") or {}, ""))
    runner = RunnerConfig(**_without_env_overrides(raw.get("runner") or {}, "TF_"))
    logging = LoggingConfig(**_without_env_overrides(raw.get("logging") or {}, "LOGGING_"))

    return AppConfig(github=github, comments=comments, runner=runner, logging=logging)
