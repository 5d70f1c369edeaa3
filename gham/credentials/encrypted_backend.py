"""Encrypted file backend using Fernet symmetric encryption.

Fallback for machines without a usable system keyring.

Security Model:
- Key derived from the master password (GHAM_MASTER_PASSWORD) with PBKDF2
- Tokens encrypted with Fernet (AES-128-CBC + HMAC)
- Salt kept in a sibling ``.salt`` file
- Both files written with 0600 permissions
"""

import base64
import json
import logging
import os
import secrets
from pathlib import Path
from typing import cast

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from gham.exceptions import BackendNotAvailableError, EncryptionError

logger = logging.getLogger(__name__)

KDF_ITERATIONS = 480_000


class EncryptedFileBackend:
    """Encrypted file-based token storage.

    The decrypted payload is a JSON object mapping context names to tokens.
    The key is derived lazily on first use, so constructing the backend
    never touches the filesystem.

    Example:
        >>> backend = EncryptedFileBackend(
        ...     file_path=Path("~/.config/gham/credentials.enc").expanduser(),
        ...     master_password="secure-password",
        ... )
        >>> backend.set("work", "ghp_abc123")
        >>> token = backend.get("work")
    """

    def __init__(self, file_path: Path, master_password: str | None = None) -> None:
        """Initialize encrypted file backend.

        Args:
            file_path: Path to encrypted credentials file
            master_password: Password for encryption; the backend is
                unavailable without one
        """
        self.file_path = Path(file_path)
        self._master_password = master_password
        self._fernet: Fernet | None = None
        self._cache: dict[str, str] | None = None

    @property
    def name(self) -> str:
        return "encrypted_file"

    @property
    def available(self) -> bool:
        """Available only when a master password was supplied."""
        return bool(self._master_password)

    @property
    def salt_path(self) -> Path:
        return self.file_path.with_suffix(".salt")

    @staticmethod
    def _create_fernet(password: str, salt: bytes) -> Fernet:
        """Derive encryption key from password.

        Uses PBKDF2-HMAC-SHA256 with 480,000 iterations.

        Args:
            password: Master password
            salt: Cryptographic salt

        Returns:
            Fernet cipher instance
        """
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=KDF_ITERATIONS,
        )
        key = kdf.derive(password.encode("utf-8"))
        return Fernet(base64.urlsafe_b64encode(key))

    def _read_salt(self, create: bool) -> bytes:
        if self.salt_path.exists():
            return self.salt_path.read_bytes()
        if not create:
            raise EncryptionError(
                f"Salt file {self.salt_path} is missing; the credentials file cannot be decrypted",
                suggestion="Restore the salt file from backup or delete and recreate the credentials file",
            )

        salt = secrets.token_bytes(16)
        self.salt_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        self._write_private(self.salt_path, salt)
        return salt

    @staticmethod
    def _write_private(path: Path, data: bytes) -> None:
        """Write ``data`` to ``path`` atomically with 0600 permissions."""
        temp_file = path.with_name(f".{path.name}.tmp")
        fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        try:
            temp_file.chmod(0o600)
        except OSError as e:
            logger.warning(f"Could not set file permissions: {e}")
        temp_file.replace(path)

    def _require_password(self) -> str:
        if not self._master_password:
            raise BackendNotAvailableError(
                "Encrypted file backend is not available",
                suggestion="Set GHAM_MASTER_PASSWORD to enable it",
            )
        return self._master_password

    def _get_fernet(self, create_salt: bool = False) -> Fernet:
        """Derive the key, generating the salt only when ``create_salt`` is set."""
        password = self._require_password()
        if self._fernet is None:
            try:
                salt = self._read_salt(create=create_salt)
            except OSError as e:
                raise EncryptionError(f"Cannot access salt file {self.salt_path}: {e}") from e
            self._fernet = self._create_fernet(password, salt)
        return self._fernet

    def _load(self) -> dict[str, str]:
        """Load and decrypt the token mapping.

        Raises:
            EncryptionError: If decryption fails
        """
        if self._cache is not None:
            return self._cache

        self._require_password()

        # Nothing stored yet: no key derivation and no salt file
        if not self.file_path.exists():
            self._cache = {}
            return self._cache

        fernet = self._get_fernet()

        try:
            decrypted = fernet.decrypt(self.file_path.read_bytes())
            data = cast(dict[str, str], json.loads(decrypted.decode("utf-8")))
        except InvalidToken as e:
            raise EncryptionError(
                "Invalid master password or corrupted credentials file",
                suggestion="Verify GHAM_MASTER_PASSWORD",
            ) from e
        except json.JSONDecodeError as e:
            raise EncryptionError(
                "Credentials file is corrupted",
                suggestion="Restore from backup or delete and recreate",
            ) from e
        except OSError as e:
            raise EncryptionError(f"Failed to read credentials file: {e}") from e

        if not isinstance(data, dict):
            raise EncryptionError("Credentials file is corrupted")

        self._cache = data
        return data

    def _save(self, data: dict[str, str]) -> None:
        fernet = self._get_fernet(create_salt=True)
        payload = fernet.encrypt(json.dumps(data, indent=2).encode("utf-8"))

        try:
            self.file_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            self._write_private(self.file_path, payload)
        except OSError as e:
            raise EncryptionError(f"Failed to save credentials: {e}") from e

        self._cache = data
        logger.debug(f"Saved credentials to {self.file_path}")

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        if value is not None:
            logger.debug(f"Retrieved secret from encrypted file: {key}")
        return value

    def set(self, key: str, value: str) -> None:
        if not value:
            raise ValueError("Secret value cannot be empty")

        data = dict(self._load())
        data[key] = value
        self._save(data)
        logger.info(f"Stored secret in encrypted file: {key}")

    def delete(self, key: str) -> bool:
        data = dict(self._load())
        if key not in data:
            return False

        del data[key]
        self._save(data)
        logger.info(f"Deleted secret from encrypted file: {key}")
        return True
