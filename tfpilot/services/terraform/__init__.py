"""Terraform lifecycle commands run per infra directory."""

from tfpilot.services.terraform._run import (
    CommandExecutionError,
    ToolNotFoundError,
    check_prerequisites,
    working_directory,
)
from tfpilot.services.terraform.runner import (
    PLAN_FILE,
    PLAN_OUTPUT_FILE,
    SUBCOMMANDS,
    TerraformRunner,
)

__all__ = [
    "CommandExecutionError",
    "PLAN_FILE",
    "PLAN_OUTPUT_FILE",
    "SUBCOMMANDS",
    "TerraformRunner",
    "ToolNotFoundError",
    "check_prerequisites",
    "working_directory",
]
