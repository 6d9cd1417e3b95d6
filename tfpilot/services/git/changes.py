"""Changed infra directories between HEAD^ and HEAD.

On the initial commit there is no HEAD^, so every non-hidden directory two
levels deep is returned instead; the first run evaluates the whole tree.
"""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Iterable, List

from tfpilot.models import ChangedDirectory
from tfpilot.services.git._run import GitRunnerError, _run_git

INFRA_FILE_PATTERNS = ("*.tf", "*.tfvars")
PATH_DEPTH = 2
HIDDEN_PREFIX = "."


def truncate_path(path: str, depth: int = PATH_DEPTH) -> str:
    """Keep the first `depth` segments of a posix path."""
    return "/".join(PurePosixPath(path).parts[:depth])


def _unique_sorted(paths: Iterable[str]) -> List[ChangedDirectory]:
    return [ChangedDirectory(path=p) for p in sorted(set(paths))]


def has_parent_revision(repo_dir: Path) -> bool:
    """True if HEAD^ resolves (HEAD is not the initial commit)."""
    try:
        _run_git(["rev-parse", "--verify", "HEAD^"], cwd=repo_dir)
    except GitRunnerError:
        return False
    return True


def current_branch(repo_dir: Path, log: logging.Logger | None = None) -> str:
    """Return the abbreviated name of the checked out branch."""
    return _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=repo_dir, log=log).strip()


def changed_directories_since_parent(repo_dir: Path, log: logging.Logger | None = None) -> List[ChangedDirectory]:
    """Directories of *.tf / *.tfvars files changed in HEAD^..HEAD.

    Hidden directories (and files at the repository root, whose directory
    is ".") are dropped; paths are truncated to two segments.
    """
    out = _run_git(
        ["diff", "HEAD^..HEAD", "--name-only", "--", *INFRA_FILE_PATTERNS],
        cwd=repo_dir,
        log=log,
    )
    dirs = []
    for line in out.splitlines():
        name = line.strip()
        if not name:
            continue
        parent = PurePosixPath(name).parent.as_posix()
        if parent.startswith(HIDDEN_PREFIX):
            continue
        dirs.append(truncate_path(parent))
    return _unique_sorted(dirs)


def all_directories(repo_dir: Path) -> List[ChangedDirectory]:
    """Every non-hidden directory exactly two segments below repo_dir."""
    dirs = []
    for root, subdirs, _files in os.walk(repo_dir):
        rel = PurePosixPath(Path(root).relative_to(repo_dir).as_posix())
        if len(rel.parts) >= PATH_DEPTH:
            subdirs[:] = []
        else:
            subdirs[:] = [d for d in subdirs if not d.startswith(HIDDEN_PREFIX)]
        if len(rel.parts) == PATH_DEPTH:
            dirs.append(rel.as_posix())
    return _unique_sorted(dirs)


def resolve_changed_directories(repo_dir: Path, log: logging.Logger | None = None) -> List[ChangedDirectory]:
    """Ordered, de-duplicated infra directories to process in this run."""
    log = log or logging.getLogger("tfpilot.git")
    if has_parent_revision(repo_dir):
        dirs = changed_directories_since_parent(repo_dir, log=log)
    else:
        log.info("No parent revision (initial commit); using all directories")
        dirs = all_directories(repo_dir)
    log.debug("Resolved directories: %s", [d.path for d in dirs])
    return dirs
