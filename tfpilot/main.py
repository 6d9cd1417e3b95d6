"""tfpilot entry point.

Runs a terraform subcommand in every infra directory changed by the last
commit and, for plan on a pull request, refreshes one plan comment per
directory. Usage: tfpilot {fmt|init|validate|plan|apply} [-- extra args].
"""

import argparse
import logging
import sys
from pathlib import Path

from tfpilot.config import MissingEnvironmentError, load_config
from tfpilot.events import EventPayloadError
from tfpilot.logging import TfpilotLogging
from tfpilot.orchestrator import run_pipeline
from tfpilot.services.git import GitRunnerError
from tfpilot.services.terraform import SUBCOMMANDS, CommandExecutionError, ToolNotFoundError

USAGE = f"Usage: tfpilot {{{'|'.join(SUBCOMMANDS)}}}"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI: subcommand plus optional terraform args after --."""
    argv = argv if argv is not None else sys.argv[1:]
    extra: list[str] = []
    if "--" in argv:
        idx = argv.index("--")
        argv, extra = argv[:idx], argv[idx + 1 :]

    parser = argparse.ArgumentParser(
        prog="tfpilot",
        description="Run terraform in changed directories and post plans to the PR",
        add_help=True,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("tfpilot.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument("subcommand", nargs="?", default=None, help="|".join(SUBCOMMANDS))
    parsed, unknown = parser.parse_known_args(argv)
    parsed.extra_args = extra
    parsed.unknown = unknown
    return parsed


def main(argv: list[str] | None = None) -> int:
    """Entry point: returns the process exit status."""
    args = parse_args(argv)
    config = load_config(args.config)
    TfpilotLogging(config.logging).setup()
    log = logging.getLogger("tfpilot")

    if args.unknown or args.subcommand not in SUBCOMMANDS:
        log.info(USAGE)
        return 1

    try:
        report = run_pipeline(args.subcommand, config, extra_args=args.extra_args)
    except (MissingEnvironmentError, EventPayloadError, ToolNotFoundError, GitRunnerError) as e:
        log.error("%s", e)
        return 1
    except CommandExecutionError as e:
        log.error("%s", e)
        return e.returncode or 1
    except KeyboardInterrupt:
        return 1
    except Exception as e:
        log.exception("Fatal error: %s", e)
        return 1
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
