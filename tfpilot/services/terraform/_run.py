"""Internal helpers: run terraform, working directory scope, runner errors."""

import logging
import os
import shutil
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class CommandExecutionError(Exception):
    """Raised when a terraform command exits non-zero (or cannot complete)."""

    def __init__(self, message: str, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


class ToolNotFoundError(Exception):
    """Raised when the terraform executable is not available."""

    pass


@contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Change into path; restore the previous working directory on exit."""
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(previous)


def check_prerequisites(binary: str = "terraform") -> str:
    """Return the resolved path of the terraform binary or raise ToolNotFoundError."""
    resolved = shutil.which(binary)
    if not resolved:
        raise ToolNotFoundError(f"{binary} is not installed")
    return resolved


def _run_terraform(
    binary: str,
    args: list[str],
    capture: bool = False,
    timeout: float | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Run terraform in the current directory.

    Output is streamed to the console unless capture is set, in which case
    stdout is returned. Raises CommandExecutionError on non-zero exit.
    """
    cmd = [binary] + args
    if log:
        log.debug("Running %s in %s", " ".join(cmd), Path.cwd())
    try:
        result = subprocess.run(cmd, check=True, capture_output=capture, text=True, timeout=timeout)
    except subprocess.CalledProcessError as e:
        err = (e.stderr or "").strip() if capture else ""
        raise CommandExecutionError(
            f"{binary} {' '.join(args)} exited with {e.returncode}" + (f": {err}" if err else ""),
            returncode=e.returncode,
        ) from e
    except subprocess.TimeoutExpired as e:
        raise CommandExecutionError(f"{binary} {' '.join(args)} timed out after {timeout}s") from e
    except FileNotFoundError as e:
        raise ToolNotFoundError(f"{binary} not found") from e
    return result.stdout or ""
