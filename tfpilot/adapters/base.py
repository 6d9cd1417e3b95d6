"""Abstract base for PR comment adapters."""

from abc import ABC, abstractmethod
from typing import List

from tfpilot.models import PrComment, PullRequestContext


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CommentPlatformAdapter(ABC):
    """Comment operations on the pull request described by a PullRequestContext."""

    @abstractmethod
    def list_comments(self, context: PullRequestContext) -> List[PrComment]:
        """Fetch the comments on the PR (single page)."""
        ...

    @abstractmethod
    def create_comment(self, context: PullRequestContext, body: str) -> PrComment:
        """Post a new comment on the PR."""
        ...

    @abstractmethod
    def delete_comment(self, context: PullRequestContext, comment_id: int) -> None:
        """Delete a comment by id."""
        ...
