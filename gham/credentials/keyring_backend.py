"""Context tokens in the operating system keyring.

The preferred backend: whatever the keyring library resolves on this
machine (Secret Service or KWallet on Linux, Keychain on macOS, Credential
Locker on Windows). Headless machines usually resolve to the "fail" keyring,
which makes this backend unavailable rather than broken.
"""

import logging
from typing import cast

import keyring
from keyring.backends import fail
from keyring.errors import KeyringError, PasswordDeleteError

from gham.exceptions import BackendNotAvailableError, CredentialError

logger = logging.getLogger(__name__)

KEYRING_SUGGESTION = (
    "Ensure a keyring service is running (GNOME Keyring, KWallet, macOS Keychain, "
    "Windows Credential Manager), or set GHAM_MASTER_PASSWORD to use the encrypted file backend"
)


class KeyringBackend:
    """Token storage in the system keyring.

    Tokens are stored under the configured service name with the context
    name as the username, e.g. service ``gham``, key ``work``.

    Example:
        >>> backend = KeyringBackend()
        >>> backend.set("work", "ghp_abc123")
        >>> token = backend.get("work")
        >>> backend.delete("work")
    """

    def __init__(self, service: str = "gham") -> None:
        """Initialize backend.

        Args:
            service: Keyring service namespace
        """
        self.service = service

    @property
    def name(self) -> str:
        return "keyring"

    @property
    def available(self) -> bool:
        """Check if a usable keyring is configured.

        Returns False if:
        - No backend is configured (headless systems fall back to the
          'fail' keyring)
        - Backend fails to initialize
        """
        try:
            backend = keyring.get_keyring()
        except Exception as e:
            logger.debug(f"Keyring not available: {e}")
            return False

        if isinstance(backend, fail.Keyring):
            logger.debug("Keyring not available: no recommended backend")
            return False
        return True

    def _reference(self, key: str) -> str:
        return f"@keyring:{self.service}/{key}"

    def _require_available(self) -> None:
        if not self.available:
            raise BackendNotAvailableError(
                "Keyring backend is not available",
                suggestion=KEYRING_SUGGESTION,
            )

    def get(self, key: str) -> str | None:
        """Retrieve a token from the OS keyring.

        Args:
            key: Context name

        Returns:
            Token or None if not found

        Raises:
            BackendNotAvailableError: If keyring is not available
            CredentialError: If keyring operation fails
        """
        self._require_available()

        try:
            secret = cast(str | None, keyring.get_password(self.service, key))
        except KeyringError as e:
            raise CredentialError(f"Keyring operation failed: {e}", reference=self._reference(key)) from e

        if secret is not None:
            logger.debug(f"Retrieved secret from keyring: {self.service}/{key}")
        return secret

    def set(self, key: str, value: str) -> None:
        """Store a token in the OS keyring.

        Raises:
            BackendNotAvailableError: If keyring is not available
            CredentialError: If keyring operation fails
        """
        self._require_available()

        if not value:
            raise ValueError("Secret value cannot be empty")

        try:
            keyring.set_password(self.service, key, value)
        except KeyringError as e:
            raise CredentialError(f"Failed to store secret: {e}", reference=self._reference(key)) from e

        logger.info(f"Stored secret in keyring: {self.service}/{key}")

    def delete(self, key: str) -> bool:
        """Delete a token from the OS keyring.

        Returns:
            True if deleted, False if not found

        Raises:
            BackendNotAvailableError: If keyring is not available
            CredentialError: If keyring operation fails
        """
        self._require_available()

        try:
            keyring.delete_password(self.service, key)
        except PasswordDeleteError:
            # Nothing stored under this key
            return False
        except KeyringError as e:
            raise CredentialError(f"Failed to delete secret: {e}", reference=self._reference(key)) from e

        logger.info(f"Deleted secret from keyring: {self.service}/{key}")
        return True
