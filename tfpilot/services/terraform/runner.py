"""Run one terraform lifecycle subcommand inside one infra directory.

Every command executes inside working_directory(); the previous working
directory is restored on success, failure and early return alike. A failing
command raises CommandExecutionError with terraform's exit status and is
never retried.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Sequence, TextIO

from tfpilot.models import ChangedDirectory, PlanResult
from tfpilot.services.terraform._run import CommandExecutionError, _run_terraform, working_directory

PLAN_FILE = "tfplan"
PLAN_OUTPUT_FILE = "plan_output.txt"

# Locking is left to the CI concurrency policy, hence -lock=false
TERRAFORM_ARGS: Dict[str, List[str]] = {
    "fmt": ["fmt", "-check"],
    "init": ["init"],
    "validate": ["validate", "-no-color"],
    "plan": ["plan", "-no-color", "-input=false", f"-out={PLAN_FILE}", "-lock=false"],
    "apply": ["apply", "-auto-approve", "-input=false", "-lock=false"],
}

SUBCOMMANDS = tuple(TERRAFORM_ARGS)


class TerraformRunner:
    """Executes terraform subcommands per directory under repo_dir."""

    def __init__(
        self,
        repo_dir: Path,
        binary: str = "terraform",
        command_timeout: float | None = None,
        fail_on_missing_plan: bool = False,
        stdout: TextIO | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.repo_dir = repo_dir
        self.binary = binary
        self.command_timeout = command_timeout
        self.fail_on_missing_plan = fail_on_missing_plan
        self._stdout = stdout
        self._log = log or logging.getLogger("tfpilot.terraform")

    def run(
        self,
        directory: ChangedDirectory,
        subcommand: str,
        extra_args: Sequence[str] = (),
    ) -> PlanResult | None:
        """Run subcommand in directory; returns a PlanResult for plan, else None."""
        if subcommand not in TERRAFORM_ARGS:
            raise ValueError(f"Unsupported subcommand: {subcommand}")
        self._log.info("Running '%s' in %s", subcommand, directory.name)
        with working_directory(self.repo_dir / directory.path):
            if subcommand == "plan":
                return self._plan(directory, list(extra_args))
            self._terraform(TERRAFORM_ARGS[subcommand] + list(extra_args))
        return None

    def _terraform(self, args: List[str], capture: bool = False) -> str:
        return _run_terraform(self.binary, args, capture=capture, timeout=self.command_timeout, log=self._log)

    def _plan(self, directory: ChangedDirectory, extra_args: List[str]) -> PlanResult:
        """terraform plan, then render the plan file to plan_output.txt and stdout."""
        self._terraform(TERRAFORM_ARGS["plan"] + extra_args)
        plan_file = Path(PLAN_FILE)
        if not plan_file.is_file():
            if self.fail_on_missing_plan:
                raise CommandExecutionError(f"Plan file not found for {directory.name}")
            self._log.info("Plan file not found")
            return PlanResult(directory=directory, plan_file_found=False)

        output = self._terraform(["show", "-no-color", PLAN_FILE], capture=True)
        Path(PLAN_OUTPUT_FILE).write_text(output, encoding="utf-8")
        out = self._stdout or sys.stdout
        out.write(output if output.endswith("\n") else output + "\n")
        out.flush()
        return PlanResult(directory=directory, raw_output=output)
