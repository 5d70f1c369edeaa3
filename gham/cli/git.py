"""The ``gham git`` passthrough command.

Everything after ``git`` is handed to the wrapped git binary untouched:
click does no option parsing here, so ``--help``, ``--`` and any git option
reach git as typed.
"""

import os
import sys

import click
import structlog

from gham.cli.common import fail, get_secrets, get_settings, get_store
from gham.engine.injector import CredentialInjector
from gham.exceptions import GhamError
from gham.git.exceptions import GitLaunchError

log = structlog.get_logger(__name__)


class PassthroughCommand(click.Command):
    """Command whose arguments are collected verbatim into ``args``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.params["args"] = tuple(args)
        ctx.args = []
        return []


@click.command(name="git", cls=PassthroughCommand, add_help_option=False)
@click.pass_context
def git_command(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Run git with the repository's context credentials injected.

    Examples:

        gham git clone https://github.com/acme/project.git

        gham git push origin main
    """
    if not args:
        click.echo("gham: 'git' requires a Git command.")
        click.echo("Example: gham git clone https://github.com/user/repo.git")
        click.echo("Example: gham git status")
        return

    settings = get_settings(ctx)
    try:
        injector = CredentialInjector(
            get_store(ctx),
            get_secrets(ctx),
            git_binary=settings.git_binary,
            quiet=settings.quiet,
        )
        exit_code = injector.wrap(os.getcwd(), list(args))
    except GitLaunchError as e:
        log.debug("git_launch_error", exc_info=True)
        fail(e, exit_code=e.exit_code)
    except GhamError as e:
        log.debug("git_wrap_error", exc_info=True)
        fail(e)

    sys.exit(exit_code)
