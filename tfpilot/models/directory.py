"""Infra directory touched by the current change set."""

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict


class ChangedDirectory(BaseModel):
    """One infra root, relative to the repository root (e.g. envs/prod).

    The basename is the identity key of the directory's plan comment.
    """

    model_config = ConfigDict(frozen=True)

    path: str

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name
