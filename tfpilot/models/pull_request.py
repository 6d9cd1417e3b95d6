"""Pull request context derived from the CI event payload."""

from pydantic import BaseModel, ConfigDict


class PullRequestContext(BaseModel):
    """PR number and comment URLs; immutable for the run."""

    model_config = ConfigDict(frozen=True)

    number: int
    comments_url: str
    issue_comment_url: str
