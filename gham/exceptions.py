"""Exceptions raised by gham.

Management commands (``context``, ``repo``) treat every GhamError as fatal
and print its message. The ``git`` wrapper is more forgiving: context and
secret lookups that fail only drop the command into passthrough mode, and
only configuration and launch failures stop it.

    GhamError
    ├── ConfigurationError        config document unreadable or unwritable
    ├── ContextError
    │   ├── ContextNotFoundError
    │   └── ContextExistsError
    ├── CredentialError           secret store failures
    │   ├── CredentialNotFoundError
    │   ├── BackendNotAvailableError
    │   └── EncryptionError
    └── GitOperationError         see gham.git.exceptions
"""


class GhamError(Exception):
    """Base exception for all gham errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional next step for the user
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion


class ConfigurationError(GhamError):
    """The config document could not be loaded or saved."""


class ContextError(GhamError):
    """A context lookup or creation failed.

    Attributes:
        name: The context involved
    """

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class ContextNotFoundError(ContextError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Context '{name}' not found", name=name)


class ContextExistsError(ContextError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Context '{name}' already exists", name=name)


class CredentialError(GhamError):
    """A secret could not be stored, read or deleted.

    ``message`` stays the bare description so it can be embedded in other
    diagnostics; ``str()`` adds the secret reference and the suggestion.

    Attributes:
        reference: Which secret failed, e.g. ``@keyring:gham/work``
    """

    def __init__(self, message: str, reference: str | None = None, suggestion: str | None = None) -> None:
        super().__init__(message, suggestion=suggestion)
        self.reference = reference

    def __str__(self) -> str:
        text = self.message
        if self.reference:
            text += f" (reference: {self.reference})"
        if self.suggestion:
            text += f"\nSuggestion: {self.suggestion}"
        return text


class CredentialNotFoundError(CredentialError):
    """No token is stored for the context."""


class BackendNotAvailableError(CredentialError):
    """No usable secret storage backend on this machine."""


class EncryptionError(CredentialError):
    """The encrypted credentials file could not be read or written."""


class GitOperationError(GhamError):
    """Base class for the errors in gham.git.exceptions."""
