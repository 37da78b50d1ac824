#!/usr/bin/env python3
"""
Main CLI Entry Point for Lunch Money Review

Provides the command-line interface for reviewing and confirming transactions.
"""

import logging
import os

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Lunch Money Review - monthly transaction review.

    Lists a month's transactions for review and marks them as cleared.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["LUNCHREVIEW_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("lunchreview").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    try:
        ctx.obj["config"] = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from lunchreview import __author__, __version__

    click.echo(f"Lunch Money Review v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]
    settings = config_obj.to_dict()

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {settings['environment']}")
    click.echo(f"  API Base URL: {settings['lunchmoney']['base_url']}")
    click.echo(f"  API Token: {settings['lunchmoney']['api_token'] if config_obj.lunchmoney.api_token else 'not set'}")
    click.echo(f"  Timeout: {settings['lunchmoney']['timeout']}s")
    click.echo(f"  Debug Mode: {settings['debug']}")
    click.echo(f"  Log Level: {settings['log_level']}")


# Import review commands
from .transactions import confirm, months, transactions  # noqa: E402

main.add_command(months)
main.add_command(transactions)
main.add_command(confirm)


if __name__ == "__main__":
    main()
