"""Data models for gham configuration."""

from gham.models.domain import DEFAULT_USERNAME, AppConfig, Context, RepoAssignment

__all__ = ["DEFAULT_USERNAME", "AppConfig", "Context", "RepoAssignment"]
