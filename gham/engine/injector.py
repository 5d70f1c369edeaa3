"""
Credential injection for wrapped git invocations.

The injector decides, for one git command line run from one directory,
which identity and token (if any) to inject. Resolution walks four steps,
any of which can fall back to passthrough mode:

    working directory
        -> repository root           (none: passthrough, silent)
        -> assigned context name     (none: passthrough, silent)
        -> context definition        (missing: passthrough, warning)
        -> token from secret store   (failure: passthrough, warning)
        -> ACTIVE

In ACTIVE state the command is adjusted with invocation-scoped ``-c``
overrides only:

    - user.name / user.email from the context
    - clone: the https repository URL argument carries ``username:token``
    - push / pull / fetch: an ``http.<url>.extraheader`` bearer header for
      the origin host; the stored remote URL is never rewritten
    - anything else: identity only

Nothing is written to the repository configuration or the gham config, and
the token is never printed unmasked.

Example:
    >>> injector = CredentialInjector(store, secrets)
    >>> plan = injector.plan(Path.cwd(), ["push", "origin", "main"])
    >>> plan.git_args
    ['-c', 'user.email=alice@example.com', '-c', 'http.https://github.com/.extraheader=...', 'push', ...]
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import click
import structlog

from gham.config.store import ContextStore
from gham.credentials.store import SecretStore
from gham.engine.runner import ProcessRunner
from gham.enums import ResolutionState
from gham.exceptions import CredentialError
from gham.git.exceptions import GitDiscoveryError
from gham.git.locator import find_repo_root
from gham.git.remotes import DEFAULT_REMOTE, get_remote_url
from gham.git.urls import REDACTED, host_from_url, is_https_url, redact_url, with_userinfo
from gham.models.domain import Context

log = structlog.get_logger(__name__)

DIAGNOSTIC_PREFIX = "[gham]"

AUTH_COMMANDS = frozenset({"push", "pull", "fetch"})

# Global git options whose value is a separate argument ("-C path")
GLOBAL_OPTIONS_WITH_VALUE = frozenset(
    {"-C", "-c", "--git-dir", "--work-tree", "--namespace", "--exec-path", "--super-prefix", "--config-env"}
)

# clone options whose value is a separate argument ("--branch main")
CLONE_OPTIONS_WITH_VALUE = frozenset(
    {
        "-b",
        "--branch",
        "-o",
        "--origin",
        "-c",
        "--config",
        "--depth",
        "-u",
        "--upload-pack",
        "--reference",
        "--reference-if-able",
        "--separate-git-dir",
        "--template",
        "-j",
        "--jobs",
        "--filter",
        "--shallow-since",
        "--shallow-exclude",
        "--server-option",
        "--bundle-uri",
        "--ref-format",
    }
)


def find_subcommand(args: Sequence[str]) -> int | None:
    """Return the index of the git subcommand in ``args``.

    Leading global options (and the values of those that take one) are
    skipped. Returns None when the command line has no subcommand, e.g.
    ``git --version``.
    """
    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "--":
            return index + 1 if index + 1 < len(args) else None
        if not arg.startswith("-"):
            return index
        index += 2 if arg in GLOBAL_OPTIONS_WITH_VALUE else 1
    return None


def find_clone_url(args: Sequence[str], start: int) -> int | None:
    """Return the index of the repository argument of ``git clone``.

    Args:
        args: Full git argument list
        start: Index of the first argument after ``clone``
    """
    index = start
    while index < len(args):
        arg = args[index]
        if arg == "--":
            return index + 1 if index + 1 < len(args) else None
        if arg.startswith("-"):
            index += 2 if arg in CLONE_OPTIONS_WITH_VALUE else 1
            continue
        return index
    return None


def extraheader_key(host: str) -> str:
    """Git config key scoping an extra HTTP header to ``https://host/``."""
    return f"http.https://{host}/.extraheader"


@dataclass
class Resolution:
    """Result of resolving the active context for a directory.

    Attributes:
        state: How far resolution got
        cwd: Directory the command was started from
        repo_root: Repository root, when found
        context_name: Assigned context name, when an assignment exists
        context: Context definition (ACTIVE only)
        token: Secret token (ACTIVE only)
    """

    state: ResolutionState
    cwd: Path
    repo_root: Path | None = None
    context_name: str | None = None
    context: Context | None = None
    token: str | None = field(default=None, repr=False)

    @property
    def workdir(self) -> Path:
        """Directory the wrapped git process runs in."""
        return self.repo_root if self.repo_root is not None else self.cwd


@dataclass
class InvocationPlan:
    """Final command line for the wrapped git process.

    Attributes:
        resolution: The context resolution it was built from
        args: Caller arguments (clone URL possibly rewritten)
        overrides: ``key=value`` pairs passed as ``-c`` options
    """

    resolution: Resolution
    args: list[str]
    overrides: list[str] = field(default_factory=list)

    @property
    def git_args(self) -> list[str]:
        """Arguments after the git binary: ``-c`` overrides, then caller args."""
        prefix: list[str] = []
        for override in self.overrides:
            prefix.extend(["-c", override])
        return [*prefix, *self.args]

    @property
    def cwd(self) -> Path:
        return self.resolution.workdir

    @property
    def is_passthrough(self) -> bool:
        return self.resolution.state.is_passthrough

    def redacted_args(self) -> list[str]:
        """git_args with the token masked, safe to log."""
        token = self.resolution.token
        masked = []
        for arg in self.git_args:
            if token and token in arg:
                arg = arg.replace(token, REDACTED)
            masked.append(redact_url(arg))
        return masked


class CredentialInjector:
    """Resolve the active context and build the adjusted git invocation.

    Attributes:
        store: Loaded context store (read only here)
        secrets: Secret store holding context tokens
        quiet: Suppress the informational active-context notice
    """

    def __init__(
        self,
        store: ContextStore,
        secrets: SecretStore,
        git_binary: str = "git",
        stderr: TextIO | None = None,
        quiet: bool = False,
    ) -> None:
        """Initialize injector.

        Args:
            store: Loaded context store
            secrets: Secret store for tokens
            git_binary: Executable used by wrap when no runner is given
            stderr: Diagnostic stream (defaults to sys.stderr at write time)
            quiet: Suppress informational notices; warnings are always shown
        """
        self.store = store
        self.secrets = secrets
        self.git_binary = git_binary
        self._stderr = stderr
        self.quiet = quiet

    def _diagnostic(self, message: str) -> None:
        click.echo(f"{DIAGNOSTIC_PREFIX} {message}", file=self._stderr or sys.stderr)

    def warn(self, message: str) -> None:
        self._diagnostic(f"Warning: {message}")

    def resolve(self, cwd: str | Path) -> Resolution:
        """Resolve which context, if any, applies to ``cwd``.

        Never raises for resolution failures: each one is reported as a
        passthrough state, with a warning where the user should act.
        """
        cwd_path = Path(cwd)

        repo_root = find_repo_root(cwd_path)
        if repo_root is None:
            log.debug("resolution", state=str(ResolutionState.OUTSIDE_REPO), cwd=str(cwd_path))
            return Resolution(ResolutionState.OUTSIDE_REPO, cwd_path)

        context_name = self.store.get_assignment(repo_root)
        if context_name is None:
            log.debug("resolution", state=str(ResolutionState.NO_ASSIGNMENT), repo=str(repo_root))
            return Resolution(ResolutionState.NO_ASSIGNMENT, cwd_path, repo_root)

        context = self.store.find_context(context_name)
        if context is None:
            self.warn(
                f"Context '{context_name}' is assigned to {repo_root} but is not defined. "
                "Running git without gham credentials."
            )
            return Resolution(ResolutionState.DANGLING_ASSIGNMENT, cwd_path, repo_root, context_name)

        try:
            token = self.secrets.get(context.name)
        except CredentialError as e:
            self.warn(
                f"Context '{context.name}' is active but its token could not be retrieved: {e.message}. "
                "Running git without gham credentials."
            )
            log.debug("secret_unavailable", context=context.name, error_type=type(e).__name__)
            return Resolution(ResolutionState.SECRET_UNAVAILABLE, cwd_path, repo_root, context_name, context)

        log.debug("resolution", state=str(ResolutionState.ACTIVE), repo=str(repo_root), context=context.name)
        return Resolution(ResolutionState.ACTIVE, cwd_path, repo_root, context_name, context, token)

    def plan(self, cwd: str | Path, args: Sequence[str]) -> InvocationPlan:
        """Build the git invocation for ``args`` run from ``cwd``."""
        resolution = self.resolve(cwd)
        plan = InvocationPlan(resolution=resolution, args=list(args))

        if resolution.state is not ResolutionState.ACTIVE:
            return plan

        context = resolution.context
        token = resolution.token
        assert context is not None and token is not None

        if context.has_custom_username:
            plan.overrides.append(f"user.name={context.username}")
        if context.email:
            plan.overrides.append(f"user.email={context.email}")

        command_index = find_subcommand(plan.args)
        command = plan.args[command_index] if command_index is not None else None

        if command == "clone":
            assert command_index is not None
            self._inject_clone_credentials(plan, command_index, context, token)
        elif command in AUTH_COMMANDS:
            self._inject_auth_header(plan, token)

        if not self.quiet:
            self._diagnostic(f"Using context '{context.name}' for this git command.")
        log.debug("git_invocation", args=plan.redacted_args(), cwd=str(plan.cwd))
        return plan

    def _inject_clone_credentials(
        self, plan: InvocationPlan, command_index: int, context: Context, token: str
    ) -> None:
        url_index = find_clone_url(plan.args, command_index + 1)
        if url_index is None:
            return

        url = plan.args[url_index]
        if not is_https_url(url):
            log.debug("clone_url_untouched", url=redact_url(url))
            return

        plan.args[url_index] = with_userinfo(url, context.username, token)
        self._diagnostic(f"Using authenticated URL: {redact_url(plan.args[url_index])}")

    def _inject_auth_header(self, plan: InvocationPlan, token: str) -> None:
        root = plan.resolution.repo_root
        assert root is not None

        try:
            remote_url = get_remote_url(root, DEFAULT_REMOTE)
            host = host_from_url(remote_url)
        except GitDiscoveryError as e:
            self.warn(f"Could not determine the '{DEFAULT_REMOTE}' host: {e.message}. Sending no token.")
            return

        plan.overrides.append(f"{extraheader_key(host)}=Authorization: Bearer {token}")

    def wrap(self, cwd: str | Path, args: Sequence[str], runner: ProcessRunner | None = None) -> int:
        """Resolve, adjust and run one git command.

        Returns:
            The git process's exit status, unchanged

        Raises:
            GitLaunchError: If the git binary cannot be started
        """
        plan = self.plan(cwd, args)
        runner = runner or ProcessRunner(self.git_binary)
        return runner.run(plan.git_args, cwd=plan.cwd)
