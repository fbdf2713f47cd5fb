"""Configuration commands.

This module provides the 'config' group:
- 'config show': print the effective configuration
- 'config init': write a commented default configuration file
"""

import click
import yaml

from fpcli.commands.base import command_context, handle_errors
from fpcli.config import ConfigLoader, create_default_config


@click.group("config")
def config() -> None:
    """Show or create the fpcli configuration."""


@config.command("show")
@click.pass_context
@handle_errors
def show(ctx: click.Context) -> None:
    """Show the effective configuration (file, environment and defaults merged)."""
    cmd_ctx = command_context(ctx)
    config_path = cmd_ctx.config_path or ConfigLoader().config_path

    click.echo(f"# Configuration file: {config_path}")
    click.echo(
        yaml.safe_dump(
            cmd_ctx.config.model_dump(mode="json"),
            default_flow_style=False,
            sort_keys=False,
        ),
        nl=False,
    )


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
@click.pass_context
@handle_errors
def init(ctx: click.Context, force: bool) -> None:
    """Write the default configuration file."""
    path = create_default_config(command_context(ctx).config_path, force=force)
    click.echo(f"Wrote default configuration to {path}")


__all__ = ["config"]
