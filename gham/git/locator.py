"""Repository root discovery.

A repository root is the nearest directory, at or above a path, that holds a
``.git`` entry. The entry may be a directory or a file (worktrees and
submodules use a ``gitdir:`` pointer file); both count without parsing.

Example:
    >>> from gham.git.locator import find_repo_root
    >>> find_repo_root("/home/alice/src/project/pkg/module.py")
    PosixPath('/home/alice/src/project')
"""

import os
from pathlib import Path

from gham.git.exceptions import NotGitRepositoryError


def find_repo_root(path: str | Path) -> Path | None:
    """Find the repository root containing ``path``.

    Args:
        path: Any file or directory path. Relative paths are made absolute
            against the current directory; symlinks are not resolved.

    Returns:
        Absolute path of the repository root, or None if ``path`` does not
        exist or no ``.git`` entry is found before the filesystem root.
    """
    current = Path(os.path.abspath(path))
    if not current.exists():
        return None
    if not current.is_dir():
        current = current.parent

    for candidate in (current, *current.parents):
        if os.path.lexists(candidate / ".git"):
            return candidate
    return None


def require_repo_root(path: str | Path) -> Path:
    """Like find_repo_root, but raise when no repository is found.

    Raises:
        NotGitRepositoryError: If ``path`` is not inside a Git working tree
    """
    root = find_repo_root(path)
    if root is None:
        raise NotGitRepositoryError(os.path.abspath(path))
    return root
