"""Secret storage for context tokens.

Tokens never appear in the configuration document. They are stored through
SecretStore, which adopts the first available backend:

1. KeyringBackend - system keyring (macOS Keychain, Secret Service, Windows
   Credential Manager)
2. EncryptedFileBackend - Fernet-encrypted file, enabled by GHAM_MASTER_PASSWORD

Example:
    >>> from gham.credentials import SecretStore
    >>> secrets = SecretStore.from_settings(settings)
    >>> token = secrets.get("work")
"""

from gham.exceptions import (
    BackendNotAvailableError,
    CredentialError,
    CredentialNotFoundError,
    EncryptionError,
)

from .backend import SecretBackend
from .encrypted_backend import EncryptedFileBackend
from .keyring_backend import KeyringBackend
from .store import SecretStore

__all__ = [
    "SecretBackend",
    "SecretStore",
    "KeyringBackend",
    "EncryptedFileBackend",
    "CredentialError",
    "CredentialNotFoundError",
    "BackendNotAvailableError",
    "EncryptionError",
]
