"""Enumerations for gham."""

from enum import Enum


class ResolutionState(str, Enum):
    """Outcome of resolving the active context for a working directory.

    States are checked in declaration order; every state except ACTIVE
    runs git in passthrough mode.

    - outside-repo: no repository root above the directory (silent)
    - no-assignment: repository has no context assigned (silent)
    - dangling-assignment: assigned context no longer exists (warning)
    - secret-unavailable: token could not be read from the secret store (warning)
    - active: identity and token are injected
    """

    OUTSIDE_REPO = "outside-repo"
    NO_ASSIGNMENT = "no-assignment"
    DANGLING_ASSIGNMENT = "dangling-assignment"
    SECRET_UNAVAILABLE = "secret-unavailable"
    ACTIVE = "active"

    def __str__(self) -> str:
        return self.value

    @property
    def is_passthrough(self) -> bool:
        return self is not ResolutionState.ACTIVE
