"""Secret store with fixed-order backend selection.

The store is the only place a context's token is ever written. Backends are
tried in preference order when the store is built and the first available one
is adopted for the rest of the process. When none is available every
operation fails with BackendNotAvailableError, which callers on the wrapping
path treat as "run git without injection".
"""

import logging
from collections.abc import Sequence

from gham.config.settings import GhamSettings
from gham.exceptions import BackendNotAvailableError, CredentialError, CredentialNotFoundError

from .backend import SecretBackend
from .encrypted_backend import EncryptedFileBackend
from .keyring_backend import KeyringBackend

logger = logging.getLogger(__name__)


class SecretStore:
    """Store, get and delete context tokens by name.

    Example:
        >>> secrets = SecretStore.from_settings(GhamSettings())
        >>> secrets.store("work", "ghp_abc123")
        >>> secrets.get("work")
        'ghp_abc123'
        >>> secrets.delete("work")
        True
    """

    def __init__(self, backends: Sequence[SecretBackend]) -> None:
        """Initialize store.

        Args:
            backends: Candidate backends in preference order
        """
        self.backends: tuple[SecretBackend, ...] = tuple(backends)
        self._backend: SecretBackend | None = None

        for backend in self.backends:
            if backend.available:
                self._backend = backend
                break

        if self._backend is None:
            logger.debug(f"No secret backend available (tried: {', '.join(b.name for b in self.backends)})")
        else:
            logger.debug(f"Using secret backend: {self._backend.name}")

    @classmethod
    def from_settings(cls, settings: GhamSettings) -> "SecretStore":
        """Build the default backend chain: system keyring, then encrypted file."""
        master_password = settings.master_password.get_secret_value() if settings.master_password else None
        return cls(
            [
                KeyringBackend(service=settings.keyring_service),
                EncryptedFileBackend(
                    file_path=settings.encrypted_credentials_path,
                    master_password=master_password,
                ),
            ]
        )

    @property
    def available(self) -> bool:
        return self._backend is not None

    @property
    def backend(self) -> SecretBackend:
        """Return the adopted backend.

        Raises:
            BackendNotAvailableError: If no backend could be initialized
        """
        if self._backend is None:
            tried = ", ".join(b.name for b in self.backends) or "none"
            raise BackendNotAvailableError(
                f"No secret storage backend is available (tried: {tried})",
                suggestion=(
                    "Start a system keyring service, or set GHAM_MASTER_PASSWORD "
                    "to store tokens in an encrypted file"
                ),
            )
        return self._backend

    def store(self, name: str, secret: str) -> None:
        """Store the token for context ``name``, replacing any existing one."""
        self.backend.set(name, secret)

    def get(self, name: str) -> str:
        """Return the token for context ``name``.

        Raises:
            CredentialNotFoundError: If no token is stored for the context
            BackendNotAvailableError: If no backend is available
            CredentialError: If the backend fails
        """
        backend = self.backend
        secret = backend.get(name)
        if secret is None:
            raise CredentialNotFoundError(
                f"No token found for context '{name}'",
                reference=f"@{backend.name}:{name}",
                suggestion=f"Re-add the context with: gham context remove {name} && gham context add {name}",
            )
        return secret

    def delete(self, name: str) -> bool:
        """Delete the token for context ``name``; absence is not an error."""
        return self.backend.delete(name)

    def has_secret(self, name: str) -> bool:
        """Check whether a token can currently be retrieved for ``name``."""
        try:
            self.get(name)
        except CredentialError:
            return False
        return True
