"""Git repository discovery and URL handling.

This package locates repository roots, reads remote URLs without modifying
the repository, and parses or rewrites remote URLs for credential injection.

Example:
    >>> from gham.git import find_repo_root, get_remote_url, host_from_url
    >>> root = find_repo_root(".")
    >>> host_from_url(get_remote_url(root))
    'github.com'

Error Handling:
    All exceptions inherit from GitDiscoveryError and include a hint.
"""

from gham.git.exceptions import (
    GitDiscoveryError,
    GitLaunchError,
    InvalidGitUrlError,
    NotGitRepositoryError,
    RemoteNotFoundError,
)
from gham.git.locator import find_repo_root, require_repo_root
from gham.git.remotes import DEFAULT_REMOTE, get_remote_url
from gham.git.urls import host_from_url, is_https_url, is_scp_like, redact_url, with_userinfo

__all__ = [
    # Repository discovery
    "find_repo_root",
    "require_repo_root",
    "get_remote_url",
    "DEFAULT_REMOTE",
    # URLs
    "host_from_url",
    "is_https_url",
    "is_scp_like",
    "redact_url",
    "with_userinfo",
    # Exceptions
    "GitDiscoveryError",
    "GitLaunchError",
    "InvalidGitUrlError",
    "NotGitRepositoryError",
    "RemoteNotFoundError",
]
