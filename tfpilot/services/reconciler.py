"""Keep at most one live plan comment per (pull request, directory).

Each run starts without memory of earlier runs: it rediscovers the
previous comment by its marker, deletes it, then posts the new body. The
delete always completes (or is skipped) before the post. Two CI jobs
running on the same PR at once can still race; that is left to the CI
concurrency settings.
"""

import logging
import re
from typing import List

from tfpilot.adapters.base import CommentPlatformAdapter, GitPlatformError
from tfpilot.models import PlanResult, PrComment, PullRequestContext
from tfpilot.services.plan_formatter import PlanFormatter, plan_heading, plan_marker


def comment_matches(body: str, directory: str) -> bool:
    """True if body belongs to the plan comment of directory.

    The hidden marker is authoritative; the heading is matched as well so
    comments posted without the marker are still replaced.
    """
    if plan_marker(directory) in body:
        return True
    return re.search(re.escape(plan_heading(directory)), body) is not None


class CommentReconciler:
    """Find, delete and post plan comments on one pull request."""

    def __init__(
        self,
        adapter: CommentPlatformAdapter,
        context: PullRequestContext,
        formatter: PlanFormatter | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._adapter = adapter
        self._context = context
        self._formatter = formatter or PlanFormatter()
        self._log = log or logging.getLogger("tfpilot.reconciler")

    def find_all(self, directory: str) -> List[int]:
        """Ids of every comment carrying the directory's marker, in API order."""
        comments = self._adapter.list_comments(self._context)
        return [c.id for c in comments if comment_matches(c.body, directory)]

    def find(self, directory: str) -> int | None:
        """Id of the first comment carrying the directory's marker, or None."""
        ids = self.find_all(directory)
        return ids[0] if ids else None

    def delete(self, comment_id: int | None) -> bool:
        """Delete a comment; None and already-deleted comments are no-ops.

        Returns False only when the comment may still be live.
        """
        if comment_id is None:
            return True
        self._log.info("Deleting existing plan PR comment: %s.", comment_id)
        try:
            self._adapter.delete_comment(self._context, comment_id)
        except GitPlatformError as e:
            if e.status_code == 404:
                self._log.debug("Comment %s already gone", comment_id)
                return True
            self._log.warning("Failed to delete comment %s: %s", comment_id, e)
            return False
        return True

    def post(self, directory: str, body: str) -> PrComment | None:
        """Post body as a new comment; API failures are logged, not raised."""
        self._log.info("Adding plan comment to PR for %s.", directory)
        try:
            return self._adapter.create_comment(self._context, body)
        except GitPlatformError as e:
            self._log.warning("Failed to post plan comment for %s: %s", directory, e)
            return None

    def reconcile(self, result: PlanResult) -> bool:
        """Replace the directory's plan comment with result; True if one was posted."""
        directory = result.directory.name
        if not result.plan_file_found:
            self._log.info("Plan file not found for %s", directory)
            return False
        if result.is_noop:
            self._log.info("Plan is empty for %s", directory)
            return False

        self._log.info("Formatting tfplan for PR Commenter on %s", result.directory.path)
        body = self._formatter.format(result)
        if body is None:
            return False

        self._log.info("Looking for an existing plan PR comment for %s.", directory)
        try:
            stale = self.find_all(directory)
        except GitPlatformError as e:
            self._log.warning("Cannot list PR comments, skipping %s: %s", directory, e)
            return False
        deleted = [self.delete(comment_id) for comment_id in stale]
        if not all(deleted):
            self._log.warning("Previous plan comment for %s is still live, not posting a duplicate", directory)
            return False

        return self.post(directory, body) is not None
