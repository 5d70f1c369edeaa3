"""
Context management operations behind the ``context`` and ``repo`` commands.

Each operation loads nothing itself: it works on an already-loaded
ContextStore and SecretStore, mutates, and saves. The config document and the
secret store are kept consistent on a best-effort basis:

- add: the config is saved first, then the token is stored; a failed token
  write removes the context again
- remove: the token is deleted best-effort, the context and its assignments
  are always removed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from gham.config.store import ContextStore
from gham.credentials.store import SecretStore
from gham.exceptions import ContextNotFoundError, CredentialError, GhamError
from gham.git.locator import find_repo_root, require_repo_root
from gham.models.domain import Context

log = structlog.get_logger(__name__)


@dataclass
class RemovalResult:
    """Outcome of removing a context.

    Attributes:
        name: Removed context
        unassigned: Repository roots whose assignment was dropped
        warnings: Non-fatal problems (e.g. token could not be deleted)
    """

    name: str
    unassigned: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class CurrentContext:
    """What ``repo current`` reports for a path.

    Attributes:
        repo_root: Repository root, None outside a repository
        context_name: Assigned context name, None when unassigned
        context: Context definition, None when unassigned or dangling
    """

    repo_root: Path | None
    context_name: str | None = None
    context: Context | None = None

    @property
    def is_dangling(self) -> bool:
        return self.context_name is not None and self.context is None


class ContextManager:
    """Coordinates the context store and the secret store."""

    def __init__(self, store: ContextStore, secrets: SecretStore) -> None:
        self.store = store
        self.secrets = secrets

    def add_context(self, ctx: Context, token: str) -> Context:
        """Create a context and store its token.

        Args:
            ctx: Context to create (default username applied when empty)
            token: Secret token, stored only in the secret store

        Returns:
            The stored context

        Raises:
            ContextExistsError: If the name is taken
            ConfigurationError: If the config cannot be saved
            CredentialError: If the token cannot be stored (context rolled back)
        """
        if not token:
            raise GhamError("Token must not be empty")

        stored = self.store.add_context(ctx)
        self.store.save()

        try:
            self.secrets.store(stored.name, token)
        except CredentialError:
            log.warning("context_add_rolled_back", name=stored.name)
            self.store.remove_context(stored.name)
            self.store.save()
            raise

        log.info("context_added", name=stored.name)
        return stored

    def remove_context(self, name: str) -> RemovalResult:
        """Delete a context, its token and its repository assignments.

        Raises:
            ContextNotFoundError: If the context does not exist
            ConfigurationError: If the config cannot be saved
        """
        if self.store.find_context(name) is None:
            raise ContextNotFoundError(name)

        result = RemovalResult(name=name)
        try:
            self.secrets.delete(name)
        except CredentialError as e:
            result.warnings.append(f"Could not delete the token for '{name}': {e.message}")

        result.unassigned = [repo.path for repo in self.store.assignments_for(name)]
        self.store.remove_context(name)
        self.store.save()

        log.info("context_removed", name=name, unassigned=len(result.unassigned))
        return result

    def assign(self, path: str | Path, name: str) -> Path:
        """Assign the repository containing ``path`` to context ``name``.

        Returns:
            The repository root that was assigned

        Raises:
            NotGitRepositoryError: If ``path`` is not inside a repository
            ContextNotFoundError: If the context does not exist
            ConfigurationError: If the config cannot be saved
        """
        root = require_repo_root(path)
        self.store.assign_repo_context(root, name)
        self.store.save()
        log.info("repo_assigned", repo=str(root), context=name)
        return root

    def current(self, path: str | Path) -> CurrentContext:
        """Report which context applies to ``path`` without touching secrets."""
        root = find_repo_root(path)
        if root is None:
            return CurrentContext(repo_root=None)

        name = self.store.get_assignment(root)
        if name is None:
            return CurrentContext(repo_root=root)

        return CurrentContext(repo_root=root, context_name=name, context=self.store.find_context(name))
