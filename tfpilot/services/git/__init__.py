"""Git operations: changed infra directories, current branch."""

from tfpilot.services.git._run import GitRunnerError
from tfpilot.services.git.changes import (
    all_directories,
    changed_directories_since_parent,
    current_branch,
    has_parent_revision,
    resolve_changed_directories,
    truncate_path,
)

__all__ = [
    "GitRunnerError",
    "all_directories",
    "changed_directories_since_parent",
    "current_branch",
    "has_parent_revision",
    "resolve_changed_directories",
    "truncate_path",
]
