"""CLI commands for context management.

This module provides the ``gham context`` command group. A context is a named
Git identity: a username and email recorded in the config document, plus a
token kept only in the secret store.

Commands:
    - add: Create a context and store its token
    - list (ls): Show configured contexts
    - remove (rm): Delete a context, its token and its repository assignments

Example:
    $ gham context add work --email alice@example.com
    GitHub token for 'work':
    $ gham context list
"""

import sys

import click
import structlog

from gham.cli.common import fail, get_secrets, get_store, warn
from gham.engine.contexts import ContextManager
from gham.exceptions import GhamError
from gham.models.domain import DEFAULT_USERNAME, Context

log = structlog.get_logger(__name__)


@click.group(name="context")
def context_group() -> None:
    """Manage Git identity contexts.

    Examples:

        # Add a context (prompts for the token)
        gham context add work --email alice@example.com --username alice

        # List contexts
        gham context list

        # Remove a context and its stored token
        gham context remove work
    """
    pass


@context_group.command(name="add")
@click.argument("name")
@click.option("--token", "-t", help="Access token (prompted for, hidden, when omitted)")
@click.option("--email", "-e", help="Commit email for this context")
@click.option("--username", "-u", help=f"Commit username (default: {DEFAULT_USERNAME})")
@click.pass_context
def add_context(
    ctx: click.Context,
    name: str,
    token: str | None,
    email: str | None,
    username: str | None,
) -> None:
    """Add a new context NAME.

    The token is stored in the system keyring (or the encrypted credentials
    file when GHAM_MASTER_PASSWORD is set), never in the config file.
    """
    if not name.strip():
        click.echo(click.style("Error: Context name cannot be empty", fg="red"), err=True)
        sys.exit(1)

    try:
        click.echo(f"Adding context '{name}'.")
        if not token:
            token = click.prompt(f"GitHub token for '{name}'", hide_input=True, default="", show_default=False)
        if not token:
            click.echo(click.style("Error: Token cannot be empty", fg="red"), err=True)
            sys.exit(1)

        interactive = sys.stdin.isatty()
        if email is None and interactive:
            email = click.prompt("Email (optional)", default="", show_default=False)
        if username is None and interactive:
            username = click.prompt(
                f"Username (optional, default: {DEFAULT_USERNAME})", default="", show_default=False
            )

        manager = ContextManager(get_store(ctx), get_secrets(ctx))
        stored = manager.add_context(Context(name=name, username=username or "", email=email or ""), token)

        click.echo(click.style(f"Context '{stored.name}' added successfully.", fg="green"))
        if not stored.email:
            click.echo("Warning: No email specified for this context. Git commits might use the global email.")
        if not stored.has_custom_username:
            click.echo(
                f"Using default username '{DEFAULT_USERNAME}' for this context. "
                "Git commits will use the global user.name."
            )

    except GhamError as e:
        log.debug("context_add_error", exc_info=True)
        fail(e)


@context_group.command(name="list")
@click.pass_context
def list_contexts(ctx: click.Context) -> None:
    """List all configured contexts."""
    try:
        store = get_store(ctx)
        if not store.contexts:
            click.echo("No contexts configured yet. Use 'gham context add <name>' to add one.")
            return

        secrets = get_secrets(ctx)
        if not secrets.available:
            warn("No secret storage backend is available; token status cannot be checked.")

        rows = [("NAME", "USERNAME", "EMAIL", "TOKEN STORED?", "REPOS")]
        for context in store.contexts:
            rows.append(
                (
                    context.name,
                    context.username if context.has_custom_username else "(default)",
                    context.email or "(not set)",
                    "yes" if secrets.available and secrets.has_secret(context.name) else "no",
                    str(len(store.assignments_for(context.name))),
                )
            )

        widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
        for row in rows:
            click.echo("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())

    except GhamError as e:
        log.debug("context_list_error", exc_info=True)
        fail(e)


@context_group.command(name="remove")
@click.argument("name")
@click.pass_context
def remove_context(ctx: click.Context, name: str) -> None:
    """Remove context NAME, its stored token and its repository assignments."""
    try:
        manager = ContextManager(get_store(ctx), get_secrets(ctx))
        result = manager.remove_context(name)
    except GhamError as e:
        log.debug("context_remove_error", exc_info=True)
        fail(e)

    for message in result.warnings:
        warn(message)
    click.echo(click.style(f"Context '{name}' removed.", fg="green"))
    if result.unassigned:
        click.echo(f"Unassigned {len(result.unassigned)} repositor{'y' if len(result.unassigned) == 1 else 'ies'}:")
        for path in result.unassigned:
            click.echo(f"  {path}")


context_group.add_command(list_contexts, name="ls")
context_group.add_command(remove_context, name="rm")
