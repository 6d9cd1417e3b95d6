"""Comment on a pull request."""

from pydantic import BaseModel


class PrComment(BaseModel):
    """Comment on a PR (issue comment)."""

    id: int
    body: str = ""
