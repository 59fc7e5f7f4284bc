"""`tess-hub` command group."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace

import click

from tess_hub.cli.analysis_cli import optimize_command, profile_command, synthesize_command
from tess_hub.cli.batch_cli import batch_command
from tess_hub.cli.common_cli import EXIT_OK
from tess_hub.config import HubSettings


@click.group()
@click.version_option(package_name="tess-hub")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Root log level (default: TESS_HUB_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """tess-hub CLI for catalog fusion and synthetic transit signals."""
    settings = HubSettings.from_env()
    if log_level is not None:
        settings = replace(settings, log_level=log_level.upper())
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


cli.add_command(profile_command)
cli.add_command(synthesize_command)
cli.add_command(optimize_command)
cli.add_command(batch_command)


def main() -> int:
    """Main entry point for the CLI."""
    try:
        cli(standalone_mode=False)
        return EXIT_OK
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
