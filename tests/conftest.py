"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from gham.config.settings import GhamSettings
from gham.config.store import ContextStore
from gham.credentials.store import SecretStore
from gham.exceptions import CredentialError


class InMemoryBackend:
    """Secret backend keeping tokens in a dict.

    ``fail_on`` names operations ("get", "set", "delete") that raise
    CredentialError, to exercise failure paths.
    """

    def __init__(self, available: bool = True, fail_on: tuple[str, ...] = ()) -> None:
        self.secrets: dict[str, str] = {}
        self._available = available
        self.fail_on = set(fail_on)

    @property
    def name(self) -> str:
        return "memory"

    @property
    def available(self) -> bool:
        return self._available

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise CredentialError(f"memory backend {operation} failed")

    def get(self, key: str) -> str | None:
        self._check("get")
        return self.secrets.get(key)

    def set(self, key: str, value: str) -> None:
        self._check("set")
        self.secrets[key] = value

    def delete(self, key: str) -> bool:
        self._check("delete")
        return self.secrets.pop(key, None) is not None


def write_repo(root: Path, origin_url: str | None = None) -> Path:
    """Create a minimal git directory GitPython can open."""
    git_dir = root / ".git"
    (git_dir / "objects").mkdir(parents=True)
    (git_dir / "refs" / "heads").mkdir(parents=True)
    (git_dir / "HEAD").write_text("ref: refs/heads/main\n")

    config = "[core]\n\trepositoryformatversion = 0\n\tbare = false\n"
    if origin_url is not None:
        config += f'[remote "origin"]\n\turl = {origin_url}\n\tfetch = +refs/heads/*:refs/remotes/origin/*\n'
    (git_dir / "config").write_text(config)
    return root


@pytest.fixture
def make_repo(tmp_path: Path):
    """Factory creating fake repositories under tmp_path."""

    def _make(name: str = "project", origin_url: str | None = "https://github.com/acme/project.git") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True)
        return write_repo(root, origin_url)

    return _make


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Config file location (not created)."""
    return tmp_path / "config" / "gham" / "config.yaml"


@pytest.fixture
def store(config_path: Path) -> ContextStore:
    """Empty ContextStore bound to a temporary path."""
    return ContextStore.load(config_path)


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def secrets(memory_backend: InMemoryBackend) -> SecretStore:
    """SecretStore over the in-memory backend."""
    return SecretStore([memory_backend])


@pytest.fixture
def settings(config_path: Path) -> GhamSettings:
    """Settings pointing at the temporary config file."""
    return GhamSettings(config_file=config_path, quiet=False)


@pytest.fixture
def make_backend():
    """Factory for extra in-memory backends (InMemoryBackend(available, fail_on))."""
    return InMemoryBackend
