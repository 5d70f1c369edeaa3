"""
Runtime settings using pydantic-settings.

Settings come from ``GHAM_*`` environment variables, with global CLI options
layered on top by the entry point. They only locate things (the config
document, the git binary, the secret backends); the contexts themselves live
in the YAML document handled by gham.config.store.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "gham"


def default_config_dir() -> Path:
    """Return the per-user configuration directory for gham.

    Honors ``XDG_CONFIG_HOME`` and falls back to ``~/.config``.
    """
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME


class GhamSettings(BaseSettings):
    """Process-level settings for gham.

    Environment variables:
        GHAM_CONFIG_FILE: Path of the YAML config document
        GHAM_GIT_BINARY: Git executable to wrap
        GHAM_KEYRING_SERVICE: Service name used in the system keyring
        GHAM_CREDENTIALS_FILE: Encrypted credentials file (fallback backend)
        GHAM_MASTER_PASSWORD: Enables the encrypted file backend
        GHAM_LOG_LEVEL: Minimum structlog level
        GHAM_QUIET: Suppress informational notices on stderr
    """

    model_config = SettingsConfigDict(
        env_prefix="GHAM_",
        case_sensitive=False,
    )

    config_file: Path = Field(
        default_factory=lambda: default_config_dir() / "config.yaml",
        description="YAML document holding contexts and repository assignments",
    )
    git_binary: str = Field(default="git", description="Git executable to run")
    keyring_service: str = Field(default=APP_NAME, description="Keyring service namespace")
    credentials_file: Path | None = Field(
        default=None,
        description="Encrypted credentials file (defaults to credentials.enc next to the config file)",
    )
    master_password: SecretStr | None = Field(
        default=None,
        description="Master password for the encrypted credentials file",
    )
    log_level: str = Field(default="WARNING", description="Logging level")
    quiet: bool = Field(default=False, description="Suppress informational notices")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def encrypted_credentials_path(self) -> Path:
        """Get the encrypted credentials file as Path object."""
        if self.credentials_file is not None:
            return self.credentials_file
        return self.config_file.parent / "credentials.enc"
