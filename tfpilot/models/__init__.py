"""Data models for changed directories, PR context, plans and comments (Pydantic)."""

from tfpilot.models.comment import PrComment
from tfpilot.models.directory import ChangedDirectory
from tfpilot.models.plan import NO_OP_PLAN, PlanResult
from tfpilot.models.pull_request import PullRequestContext

__all__ = ["ChangedDirectory", "NO_OP_PLAN", "PlanResult", "PrComment", "PullRequestContext"]
