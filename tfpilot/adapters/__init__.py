"""Comment API adapters."""

from tfpilot.adapters.base import CommentPlatformAdapter, GitPlatformError
from tfpilot.adapters.github import GitHubAdapter

__all__ = ["CommentPlatformAdapter", "GitHubAdapter", "GitPlatformError"]
