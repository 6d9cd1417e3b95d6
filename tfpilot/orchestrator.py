"""One tfpilot invocation.

ValidateEnvironment -> ResolveChangeSet -> RunCommandPerDirectory ->
[pull request] ReconcileComments -> Done.

Environment problems abort before anything runs. A failing terraform
command aborts the loop (fail-fast) unless runner.continue_on_error is set,
in which case the remaining directories still run and the first failure
decides the exit code. Comment failures never roll back or fail the run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from tfpilot.adapters.base import CommentPlatformAdapter
from tfpilot.adapters.github import GitHubAdapter
from tfpilot.config import AppConfig
from tfpilot.events import is_pull_request_event, load_pull_request_context
from tfpilot.models import ChangedDirectory, PlanResult, PullRequestContext
from tfpilot.services.git import current_branch, resolve_changed_directories
from tfpilot.services.plan_formatter import PlanFormatter
from tfpilot.services.reconciler import CommentReconciler
from tfpilot.services.terraform import CommandExecutionError, TerraformRunner, check_prerequisites


@dataclass
class Environment:
    """Validated inputs of a run."""

    token: str
    context: PullRequestContext | None
    pull_request_event: bool


@dataclass
class RunReport:
    """What a run did; exit_code is the process status."""

    directories: List[ChangedDirectory] = field(default_factory=list)
    plans: List[PlanResult] = field(default_factory=list)
    failures: List[CommandExecutionError] = field(default_factory=list)
    comments_posted: List[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        if not self.failures:
            return 0
        return self.failures[0].returncode or 1


def validate_environment(config: AppConfig) -> Environment:
    """Check required env, load the PR context and terraform availability."""
    event_path, token = config.require_environment()
    context = load_pull_request_context(event_path)
    check_prerequisites(config.runner.binary)
    return Environment(
        token=token,
        context=context,
        pull_request_event=context is not None and is_pull_request_event(config.github.event_name),
    )


def run_commands(
    runner: TerraformRunner,
    directories: Sequence[ChangedDirectory],
    subcommand: str,
    extra_args: Sequence[str] = (),
    continue_on_error: bool = False,
    log: logging.Logger | None = None,
) -> RunReport:
    """Run subcommand in every directory, in order."""
    log = log or logging.getLogger("tfpilot.orchestrator")
    report = RunReport(directories=list(directories))
    for directory in directories:
        try:
            result = runner.run(directory, subcommand, extra_args)
        except CommandExecutionError as e:
            if not continue_on_error:
                raise
            log.error("'%s' failed in %s: %s", subcommand, directory.path, e)
            report.failures.append(e)
            continue
        if result is not None:
            report.plans.append(result)
    return report


def reconcile_comments(
    reconciler: CommentReconciler,
    plans: Sequence[PlanResult],
    log: logging.Logger | None = None,
) -> List[str]:
    """Reconcile every directory's plan comment; returns directories commented on."""
    log = log or logging.getLogger("tfpilot.orchestrator")
    posted = []
    for result in plans:
        if reconciler.reconcile(result):
            posted.append(result.directory.name)
    log.debug("Plan comments posted for: %s", posted)
    return posted


def run_pipeline(
    subcommand: str,
    config: AppConfig,
    repo_dir: Path | None = None,
    extra_args: Sequence[str] = (),
    adapter: CommentPlatformAdapter | None = None,
    runner: TerraformRunner | None = None,
) -> RunReport:
    """Execute subcommand for every changed directory and sync plan comments.

    Raises MissingEnvironmentError, EventPayloadError, ToolNotFoundError,
    GitRunnerError, or CommandExecutionError (fail-fast).
    """
    log = logging.getLogger("tfpilot.orchestrator")
    repo_dir = (repo_dir or Path.cwd()).resolve()

    env = validate_environment(config)

    log.info("Comparing changes with main since %s", current_branch(repo_dir, log=log))
    directories = resolve_changed_directories(repo_dir, log=log)
    if not directories:
        log.info("No changed terraform directories")

    runner = runner or TerraformRunner(
        repo_dir,
        binary=config.runner.binary,
        command_timeout=config.runner.command_timeout,
        fail_on_missing_plan=config.runner.fail_on_missing_plan,
    )
    report = run_commands(
        runner,
        directories,
        subcommand,
        extra_args,
        continue_on_error=config.runner.continue_on_error,
        log=log,
    )

    if subcommand != "plan":
        return report
    if env.context is None or not env.pull_request_event:
        log.info("This isn't a PR.")
        return report

    adapter = adapter or GitHubAdapter(env.token, timeout=config.github.api_timeout)
    formatter = PlanFormatter(
        expand_details=config.comments.expand_summary_details,
        highlight_changes=config.comments.highlight_changes,
    )
    reconciler = CommentReconciler(adapter, env.context, formatter)
    report.comments_posted = reconcile_comments(reconciler, report.plans, log=log)
    return report
