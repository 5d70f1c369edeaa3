"""Command-line interface for gham."""

from gham.cli.context import context_group
from gham.cli.git import git_command
from gham.cli.repo import repo_group

__all__ = ["context_group", "git_command", "repo_group"]
