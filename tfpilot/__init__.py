"""tfpilot: terraform in changed directories, plan comments on pull requests."""

__version__ = "0.1.0"
