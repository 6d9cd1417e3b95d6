"""Turn `terraform show` output into a PR comment body.

The body starts with a hidden marker carrying the directory name, which is
how the reconciler finds the comment on the next run, followed by the
human-readable heading and a collapsible ```diff block.
"""

import re

from tfpilot.models import PlanResult

# GitHub rejects comment bodies above 65536 characters
MAX_PLAN_LENGTH = 65300

HEADING_TEMPLATE = "### Terraform `plan` Succeeded for Directory `{directory}`"
MARKER_TEMPLATE = '<!-- tfpilot:plan directory="{directory}" -->'

_DIFF_MARKER_RE = re.compile(r"^([ \t]*)([-+~])", re.MULTILINE)
_IN_PLACE_RE = re.compile(r"^~", re.MULTILINE)


def plan_marker(directory: str) -> str:
    """Hidden, machine-readable identity of a directory's plan comment."""
    return MARKER_TEMPLATE.format(directory=directory)


def plan_heading(directory: str) -> str:
    return HEADING_TEMPLATE.format(directory=directory)


class PlanFormatter:
    """Render plan text for a PR comment.

    Args:
        expand_details: Render the <details> block open by default.
        highlight_changes: Rewrite in-place changes (~) to ! so the diff
            renderer gives them their own color.
    """

    def __init__(self, expand_details: bool = True, highlight_changes: bool = True) -> None:
        self.expand_details = expand_details
        self.highlight_changes = highlight_changes

    def clean(self, raw: str) -> str:
        """Truncate and move diff markers (+, -, ~) to the start of each line."""
        text = raw.rstrip("\n")[:MAX_PLAN_LENGTH]
        text = _DIFF_MARKER_RE.sub(r"\2\1", text)
        if self.highlight_changes:
            text = _IN_PLACE_RE.sub("!", text)
        return text

    def render(self, directory: str, clean_plan: str) -> str:
        details = "<details open>" if self.expand_details else "<details>"
        return (
            f"{plan_marker(directory)}\n"
            f"{plan_heading(directory)}\n"
            f"{details}<summary>Show Output</summary>\n"
            "\n"
            "```diff\n"
            f"{clean_plan}\n"
            "```\n"
            "</details>"
        )

    def format(self, result: PlanResult) -> str | None:
        """Comment body for result, or None for a no-op or missing plan."""
        if not result.plan_file_found or result.is_noop:
            return None
        return self.render(result.directory.name, self.clean(result.raw_output))
