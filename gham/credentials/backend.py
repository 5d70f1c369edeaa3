"""Backend protocol for secret storage."""

from typing import Protocol


class SecretBackend(Protocol):
    """Protocol every secret storage backend implements.

    Secrets are opaque token strings keyed by context name. SecretStore
    adopts the first available backend from a preference-ordered list.
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'keyring', 'encrypted_file')."""
        ...

    @property
    def available(self) -> bool:
        """Check if this backend can be used on the current system."""
        ...

    def get(self, key: str) -> str | None:
        """Retrieve a secret.

        Args:
            key: Context name

        Returns:
            Secret value or None if not stored

        Raises:
            BackendNotAvailableError: If backend is not available
            CredentialError: If the backend operation fails
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Store a secret, replacing any existing value.

        Args:
            key: Context name
            value: Secret value

        Raises:
            BackendNotAvailableError: If backend is not available
            CredentialError: If the backend operation fails
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete a secret.

        Args:
            key: Context name

        Returns:
            True if a secret was deleted, False if none was stored

        Raises:
            BackendNotAvailableError: If backend is not available
            CredentialError: If the backend operation fails
        """
        ...
