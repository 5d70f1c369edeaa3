"""
Persistent store for contexts and repository assignments.

The store is an explicit object with a load/save lifecycle: ``ContextStore.load``
reads the whole YAML document, mutating methods change the in-memory copy,
and ``save`` replaces the file in one step. Nothing is cached between
invocations and nothing is written unless ``save`` is called.

File Structure::

    contexts:
      - name: work
        username: alice
        email: alice@example.com
    repositories:
      - path: /home/alice/src/project
        contextName: work

Concurrency Model:
    Two processes mutating the same file race on read-modify-write and the
    last writer wins. Writes are whole-file replacements via a temporary file,
    so a reader never sees a half-written document.

Example:
    >>> store = ContextStore.load(Path("~/.config/gham/config.yaml").expanduser())
    >>> store.add_context(Context(name="work", email="alice@example.com"))
    >>> store.assign_repo_context("/src/project", "work")
    >>> store.save()
"""

from __future__ import annotations

import os
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from gham.exceptions import ConfigurationError, ContextExistsError, ContextNotFoundError
from gham.models.domain import DEFAULT_USERNAME, AppConfig, Context, RepoAssignment

log = structlog.get_logger(__name__)

FILE_MODE = 0o600
DIR_MODE = 0o700


class ContextStore:
    """In-memory view of the configuration document bound to a file path.

    Attributes:
        path: Location of the YAML document
        config: The loaded AppConfig
    """

    def __init__(self, path: str | Path, config: AppConfig | None = None) -> None:
        """Initialize store.

        Args:
            path: Location of the YAML document
            config: Initial configuration (empty when omitted)
        """
        self.path = Path(path)
        self.config = config if config is not None else AppConfig()

    @classmethod
    def load(cls, path: str | Path) -> ContextStore:
        """Load the configuration document.

        A missing file is not an error: it yields an empty configuration that
        will be created on the first ``save``.

        Args:
            path: Location of the YAML document

        Returns:
            ContextStore bound to ``path``

        Raises:
            ConfigurationError: If the file cannot be read, is not valid YAML,
                or does not match the expected schema
        """
        config_path = Path(path)
        if not config_path.exists():
            log.debug("config_missing", path=str(config_path))
            return cls(config_path)

        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        # Explicit nulls ("contexts:" with nothing under it) mean empty lists
        data = {key: value for key, value in data.items() if value is not None}

        try:
            config = AppConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e

        log.debug(
            "config_loaded",
            path=str(config_path),
            contexts=len(config.contexts),
            repositories=len(config.repositories),
        )
        return cls(config_path, config)

    def save(self) -> None:
        """Write the whole document with owner-only permissions.

        The document is written to a temporary file in the same directory
        and then renamed over the target.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        content = yaml.safe_dump(self.config.to_document(), sort_keys=False, default_flow_style=False)

        try:
            self.path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            # O_CREAT mode is ignored when the temp file already existed
            os.chmod(tmp_path, FILE_MODE)
            tmp_path.replace(self.path)
        except OSError as e:
            raise ConfigurationError(f"Cannot write configuration file {self.path}: {e}") from e

        log.debug("config_saved", path=str(self.path))

    @property
    def contexts(self) -> list[Context]:
        return self.config.contexts

    @property
    def repositories(self) -> list[RepoAssignment]:
        return self.config.repositories

    def find_context(self, name: str) -> Context | None:
        """Return the context called ``name``, or None."""
        for ctx in self.config.contexts:
            if ctx.name == name:
                return ctx
        return None

    def add_context(self, ctx: Context) -> Context:
        """Add a new context.

        The default username is applied when ``ctx.username`` is empty.

        Args:
            ctx: Context to add

        Returns:
            The stored context

        Raises:
            ContextExistsError: If a context with the same name exists
        """
        if self.find_context(ctx.name) is not None:
            raise ContextExistsError(ctx.name)

        stored = ctx.model_copy(update={"username": ctx.username or DEFAULT_USERNAME})
        self.config.contexts.append(stored)
        log.debug("context_added", name=stored.name)
        return stored

    def remove_context(self, name: str) -> bool:
        """Remove a context and every repository assignment that uses it.

        Args:
            name: Context name

        Returns:
            True if the context existed and was removed
        """
        remaining = [ctx for ctx in self.config.contexts if ctx.name != name]
        if len(remaining) == len(self.config.contexts):
            return False

        self.config.contexts = remaining
        before = len(self.config.repositories)
        self.config.repositories = [repo for repo in self.config.repositories if repo.context_name != name]
        log.debug(
            "context_removed",
            name=name,
            unassigned=before - len(self.config.repositories),
        )
        return True

    def assign_repo_context(self, repo_root: str | Path, name: str) -> None:
        """Bind a repository root to a context, replacing any prior binding.

        Args:
            repo_root: Absolute path of the repository root
            name: Context name

        Raises:
            ContextNotFoundError: If the context does not exist
        """
        if self.find_context(name) is None:
            raise ContextNotFoundError(name)

        root = os.fspath(repo_root)
        for repo in self.config.repositories:
            if repo.path == root:
                if repo.context_name != name:
                    log.debug("assignment_replaced", path=root, old=repo.context_name, new=name)
                    repo.context_name = name
                return

        self.config.repositories.append(RepoAssignment(path=root, context_name=name))
        log.debug("assignment_added", path=root, context=name)

    def get_assignment(self, repo_root: str | Path) -> str | None:
        """Return the context name assigned to ``repo_root``, or None."""
        root = os.fspath(repo_root)
        for repo in self.config.repositories:
            if repo.path == root:
                return repo.context_name
        return None

    def assignments_for(self, name: str) -> list[RepoAssignment]:
        """Return every assignment that references the context ``name``."""
        return [repo for repo in self.config.repositories if repo.context_name == name]
