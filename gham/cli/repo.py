"""CLI commands for repository assignments.

Commands:
    - assign: Bind the repository containing a path to a context
    - current: Show which context applies to a path
"""

import sys

import click
import structlog

from gham.cli.common import fail, get_secrets, get_store, warn
from gham.engine.contexts import ContextManager
from gham.exceptions import ContextNotFoundError, GhamError

log = structlog.get_logger(__name__)


@click.group(name="repo")
def repo_group() -> None:
    """Manage repository to context assignments.

    Examples:

        # Assign the current repository to the 'work' context
        gham repo assign work

        # Show the context for another checkout
        gham repo current ~/src/other-project
    """
    pass


@repo_group.command(name="assign")
@click.argument("context_name")
@click.argument("path", default=".", type=click.Path(file_okay=True, dir_okay=True))
@click.pass_context
def assign(ctx: click.Context, context_name: str, path: str) -> None:
    """Assign CONTEXT_NAME to the repository containing PATH (default: .)."""
    try:
        manager = ContextManager(get_store(ctx), get_secrets(ctx))
        root = manager.assign(path, context_name)
    except ContextNotFoundError as e:
        log.debug("repo_assign_error", exc_info=True)
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        click.echo("Use 'gham context list' to see available contexts.", err=True)
        sys.exit(1)
    except GhamError as e:
        log.debug("repo_assign_error", exc_info=True)
        fail(e)

    click.echo(click.style(f"Context '{context_name}' assigned to repository at '{root}'.", fg="green"))


@repo_group.command(name="current")
@click.argument("path", default=".", type=click.Path(file_okay=True, dir_okay=True))
@click.pass_context
def current(ctx: click.Context, path: str) -> None:
    """Show the context assigned to the repository containing PATH."""
    try:
        manager = ContextManager(get_store(ctx), get_secrets(ctx))
        info = manager.current(path)
    except GhamError as e:
        log.debug("repo_current_error", exc_info=True)
        fail(e)

    if info.repo_root is None:
        click.echo(f"'{path}' is not inside a Git repository.")
        return

    if info.context_name is None:
        click.echo(f"No context is assigned to the repository at: {info.repo_root}")
        click.echo("Git operations will use your global or system Git configuration.")
        return

    click.echo(f"Repository: {info.repo_root}")
    click.echo(f"Context: {info.context_name}")
    if info.context is None:
        warn(f"Context '{info.context_name}' is assigned but is not defined in the configuration.")
        return
    click.echo(f"  Username: {info.context.username if info.context.has_custom_username else '(default)'}")
    click.echo(f"  Email: {info.context.email or '(not set)'}")
