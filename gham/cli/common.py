"""Shared helpers for gham CLI commands.

The root group stores a dict in ``ctx.obj``. Settings are always present;
the context store and secret store are built on first use so commands that
do not need them (``version``, ``git`` outside a repository) never touch the
config file or the keyring. Tests may pre-populate any of these keys.
"""

import sys
from typing import NoReturn

import click

from gham.config.settings import GhamSettings
from gham.config.store import ContextStore
from gham.credentials.store import SecretStore
from gham.exceptions import GhamError
from gham.git.exceptions import GitDiscoveryError


def get_settings(ctx: click.Context) -> GhamSettings:
    settings: GhamSettings = ctx.obj["settings"]
    return settings


def get_store(ctx: click.Context) -> ContextStore:
    """Load the context store once per invocation."""
    if ctx.obj.get("store") is None:
        ctx.obj["store"] = ContextStore.load(get_settings(ctx).config_file)
    store: ContextStore = ctx.obj["store"]
    return store


def get_secrets(ctx: click.Context) -> SecretStore:
    """Build the secret store once per invocation."""
    if ctx.obj.get("secrets") is None:
        ctx.obj["secrets"] = SecretStore.from_settings(get_settings(ctx))
    secrets: SecretStore = ctx.obj["secrets"]
    return secrets


def warn(message: str) -> None:
    click.echo(click.style(f"Warning: {message}", fg="yellow"), err=True)


def fail(error: GhamError, exit_code: int = 1) -> NoReturn:
    """Print a gham error (with its suggestion or hint) and exit."""
    click.echo(click.style(f"Error: {error.message}", fg="red"), err=True)
    if error.suggestion:
        click.echo(click.style(f"Suggestion: {error.suggestion}", fg="yellow"), err=True)
    if isinstance(error, GitDiscoveryError) and error.hint:
        click.echo(click.style(f"Hint: {error.hint}", fg="yellow"), err=True)
    sys.exit(exit_code)
