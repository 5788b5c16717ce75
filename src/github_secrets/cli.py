#!/usr/bin/env python
"""Command-line interface for github-secrets.

This module provides the main CLI entry point, handling command-line
argument parsing and dispatching to the update run or the config editor.
"""

import sys

import click
from icecream import ic

from github_secrets import __version__, console
from github_secrets.app import App
from github_secrets.exceptions import ConfigError, ValidationError


@click.command(help="Interactively push GitHub Actions secrets to one or more repositories")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option("--config", "-c", "config_path", required=False, help="path to the config file")
@click.option("--configure", required=False, is_flag=True, help="add or remove configured repositories")
@click.option(
    "--retry-declined",
    required=False,
    is_flag=True,
    help="also offer to retry secrets you declined to overwrite",
)
def cli(
    debug: bool,
    config_path: str | None,
    configure: bool,
    retry_declined: bool,
    version: bool,
) -> None:
    """Process CLI arguments and execute the appropriate action.

    Args:
        debug: Enable debug output.
        config_path: Config file overriding the discovered one.
        configure: Edit the config file instead of updating secrets.
        retry_declined: Include declined overwrites in the retry offer.
        version: Print version and exit.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        return

    try:
        if configure:
            App.configure(config_path=config_path)
            return

        App.run(config_path=config_path, retry_declined=retry_declined)
    except (ConfigError, ValidationError) as e:
        console.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        raise click.Abort() from None


if __name__ == "__main__":
    cli()
