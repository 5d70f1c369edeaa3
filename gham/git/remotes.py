"""Read-only access to a repository's remotes.

Only reads ``.git/config`` through GitPython's config reader; nothing here
writes to the repository.

GitPython is imported on first use: importing it fails outright when no git
executable is on PATH, and the wrapper must still start in that case so it
can report the launch failure itself.
"""

import configparser
from pathlib import Path

from gham.git.exceptions import RemoteNotFoundError

DEFAULT_REMOTE = "origin"


def get_remote_url(repo_root: str | Path, remote_name: str = DEFAULT_REMOTE) -> str:
    """Return the configured URL of a remote.

    Args:
        repo_root: Repository root (directory holding ``.git``)
        remote_name: Remote to read (default: origin)

    Returns:
        The remote URL exactly as configured

    Raises:
        RemoteNotFoundError: If GitPython is unusable, the repository cannot
            be opened, or the remote (or its url) is not configured
    """
    try:
        import git
    except ImportError as e:
        raise RemoteNotFoundError(remote_name, str(repo_root)) from e

    try:
        with git.Repo(repo_root) as repo:
            url = repo.remote(remote_name).url
    except (ValueError, AttributeError, git.GitError, OSError, configparser.Error) as e:
        raise RemoteNotFoundError(remote_name, str(repo_root)) from e

    if not url:
        raise RemoteNotFoundError(remote_name, str(repo_root))
    return str(url)
