"""Outcome of terraform plan for one directory."""

from pydantic import BaseModel

from tfpilot.models.directory import ChangedDirectory

# Output of `terraform show` for an empty plan
NO_OP_PLAN = "This plan does nothing."


class PlanResult(BaseModel):
    """Rendered plan text for one directory; never cached across runs."""

    directory: ChangedDirectory
    raw_output: str = ""
    plan_file_found: bool = True

    @property
    def is_noop(self) -> bool:
        return self.raw_output.rstrip("\n") == NO_OP_PLAN
