"""Errors raised while locating repositories, reading remotes and launching git.

Each error carries a ``hint`` telling the user what to do next; ``str()``
renders the message followed by the hint on its own paragraph. On the
wrapping path most of these only degrade a command to passthrough mode.
GitLaunchError is the exception: git never ran, so the wrapper exits with
the shell-style code stored on the error.
"""

from gham.exceptions import GitOperationError


class GitDiscoveryError(GitOperationError):
    """Git error with an optional next-step hint."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return "\n\n".join(parts)


class NotGitRepositoryError(GitDiscoveryError):
    """No ``.git`` entry at or above ``path``."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Not a Git repository (or any of the parent directories): {path}",
            hint="Pass the path of a checkout, or run the command from inside one.",
        )
        self.path = path


class InvalidGitUrlError(GitDiscoveryError):
    """A remote URL from which no host can be extracted.

    Attributes:
        url: The URL with any credentials already masked
        reason: Short parser explanation, if any
    """

    def __init__(self, url: str, reason: str | None = None) -> None:
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"Cannot determine the host of remote URL '{url}'{detail}",
            hint="gham understands https://host/path, ssh://user@host/path and user@host:path remotes.",
        )
        self.url = url
        self.reason = reason


class RemoteNotFoundError(GitDiscoveryError):
    """The named remote is missing or has no ``url``."""

    def __init__(self, remote_name: str, path: str) -> None:
        super().__init__(
            f"Remote '{remote_name}' is not configured in {path}",
            hint=f"Check 'git remote -v', or add it with: git remote add {remote_name} <url>",
        )
        self.remote_name = remote_name
        self.path = path


class GitLaunchError(GitDiscoveryError):
    """The git binary could not be started at all.

    Distinct from git running and exiting non-zero, which is passed through
    untouched.

    Attributes:
        binary: The executable that failed to launch
        exit_code: 127 when the binary is missing, 126 when it cannot be executed
    """

    def __init__(self, binary: str, reason: str, exit_code: int = 127) -> None:
        super().__init__(
            f"Failed to launch '{binary}': {reason}",
            hint="Make sure git is installed and on your PATH, or point GHAM_GIT_BINARY at it.",
        )
        self.binary = binary
        self.exit_code = exit_code
