"""CLI entry point for gham."""

import sys
from pathlib import Path

import click
import structlog
from pydantic import ValidationError

from gham import __version__
from gham.cli.context import context_group
from gham.cli.git import git_command
from gham.cli.repo import repo_group
from gham.config.settings import GhamSettings
from gham.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the config file (default: $XDG_CONFIG_HOME/gham/config.yaml)",
)
@click.option("--log-level", default=None, help="Logging level (default: WARNING)")
@click.option("--log-json", is_flag=True, help="Emit log events as JSON lines")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, log_level: str | None, log_json: bool) -> None:
    """gham: per-repository Git identities and access tokens."""
    ctx.ensure_object(dict)

    if ctx.obj.get("settings") is None:
        overrides: dict[str, object] = {}
        if config is not None:
            overrides["config_file"] = config
        if log_level is not None:
            overrides["log_level"] = log_level
        try:
            ctx.obj["settings"] = GhamSettings(**overrides)
        except ValidationError as e:
            click.echo(click.style(f"Error: Invalid settings: {e}", fg="red"), err=True)
            sys.exit(1)

    configure_logging(ctx.obj["settings"].log_level, json_logs=log_json)


@cli.command()
def version() -> None:
    """Print the gham version."""
    click.echo(f"gham version {__version__}")


cli.add_command(context_group)
cli.add_command(repo_group)
cli.add_command(git_command)


def main() -> None:
    """Console script entry point.

    Runs click outside standalone mode so interrupts surface here instead
    of as click's generic "Aborted!" with status 1.
    """
    try:
        rv = cli.main(obj={}, standalone_mode=False)
    except (click.Abort, KeyboardInterrupt):
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except Exception as e:
        log.error("unexpected_error", exc_info=True)
        click.echo(click.style(f"Unexpected error: {e}", fg="red"), err=True)
        sys.exit(1)
    sys.exit(rv if isinstance(rv, int) else 0)


if __name__ == "__main__":
    main()
